"""
Configurazione centralizzata - modifica qui percorsi, tariffe e etichette.
"""

import os

# Cartella con i file JSON (relativa alla cartella di avvio)
CONFIG_DIR = os.environ.get("PLANNER_CONFIG_DIR", ".plannerConfig")

# Un file per collezione, riscritto interamente a ogni modifica
CLIENTS_FILE = "client.json"
RESERVATIONS_FILE = "reservations.json"

# Livello di log (DEBUG, INFO, WARNING, ...)
LOG_LEVEL = os.environ.get("PLANNER_LOG_LEVEL", "INFO")

# Cambio EUR → PLN proposto per una nuova prenotazione
DEFAULT_EURO_PRICE = 4.7

# Opzioni trattenute dall'incasso, espresse in euro
CLEANING_FEE_EUR = 30
KEYS_FEE_EUR = 10

MONTH_NAMES = {
    1: "gennaio",
    2: "febbraio",
    3: "marzo",
    4: "aprile",
    5: "maggio",
    6: "giugno",
    7: "luglio",
    8: "agosto",
    9: "settembre",
    10: "ottobre",
    11: "novembre",
    12: "dicembre",
}

# Intestazione del calendario, settimana ISO (lunedì → domenica)
WEEKDAY_LABELS = ["Lu", "Ma", "Me", "Gi", "Ve", "Sa", "Do"]

# Colore di sfondo per tipo di casella (chiave = TileKind.value)
TILE_COLORS = {
    "header":  "rgba(128, 128, 128, 0.3)",
    "start":   "rgba(0, 255, 0, 0.3)",
    "end":     "rgba(255, 0, 0, 0.3)",
    "middle":  "rgba(0, 0, 255, 0.1)",
    "normal":  "transparent",
    "taken":   "rgba(255, 0, 0, 0.8)",
}
