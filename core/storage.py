"""
Storage su file JSON locali — un file per collezione.

  - client.json       → [{"name": ..., "uuid": ...}]
  - reservations.json → [{"cid", "pid", "uuid", "from", "to", "meta",
                          "prepay", "pricePerDay", "price", "notes"}]

Ogni salvataggio riscrive l'intero file (nessuna scrittura atomica: un crash
durante la scrittura può lasciare il file troncato). In lettura un file
corrotto solleva PersistenceError: non si riparte mai da vuoto scartando dati.
"""

import json
import os
from datetime import date
from typing import List
from uuid import UUID

from config import CONFIG_DIR, CLIENTS_FILE, RESERVATIONS_FILE
from core.errors import PersistenceError, ValidationError
from core.log import get_logger
from core.models import Client, LocalizedPrice, Reservation, ReservationMeta

logger = get_logger(__name__)


# ── Conversione record ↔ dict JSON ───────────────────────────────────────────

def _price_to_dict(p: LocalizedPrice) -> dict:
    return {"euro": p.euro, "pln": p.pln}


def _price_from_dict(d: dict) -> LocalizedPrice:
    # Le chiavi a 0 possono mancare nei file scritti dalla versione precedente
    return LocalizedPrice(euro=float(d.get("euro", 0.0)), pln=float(d.get("pln", 0.0)))


def client_to_dict(c: Client) -> dict:
    return {"name": c.name, "uuid": str(c.id)}


def client_from_dict(d: dict) -> Client:
    return Client(name=d["name"], id=UUID(d["uuid"]))


def reservation_to_dict(r: Reservation) -> dict:
    return {
        "cid": str(r.client_id),
        "pid": str(r.property_id),
        "uuid": str(r.id),
        "from": r.start.isoformat(),
        "to": r.end.isoformat(),
        "meta": r.meta.encode(),
        "prepay": _price_to_dict(r.prepay),
        "pricePerDay": _price_to_dict(r.price_per_day),
        "price": _price_to_dict(r.price),
        "notes": r.notes,
    }


def reservation_from_dict(d: dict) -> Reservation:
    return Reservation(
        client_id=UUID(d["cid"]),
        property_id=UUID(d["pid"]),
        id=UUID(d["uuid"]),
        start=date.fromisoformat(d["from"]),
        end=date.fromisoformat(d["to"]),
        meta=ReservationMeta.decode(d["meta"]),
        prepay=_price_from_dict(d.get("prepay", {})),
        price_per_day=_price_from_dict(d.get("pricePerDay", {})),
        price=_price_from_dict(d.get("price", {})),
        notes=d.get("notes", ""),
    )


# ── Storage ──────────────────────────────────────────────────────────────────

class JsonStorage:
    """Legge e scrive le due collezioni nella cartella di configurazione."""

    def __init__(self, config_dir: str = None):
        if config_dir is None:
            config_dir = CONFIG_DIR
        self.config_dir = config_dir
        self.clients_path = os.path.join(config_dir, CLIENTS_FILE)
        self.reservations_path = os.path.join(config_dir, RESERVATIONS_FILE)
        self._ensure_files()

    def _ensure_files(self):
        """Crea cartella e file vuoti al primo avvio."""
        try:
            os.makedirs(self.config_dir, exist_ok=True)
            for path in (self.clients_path, self.reservations_path):
                if not os.path.exists(path):
                    open(path, "a", encoding="utf-8").close()
        except OSError as e:
            raise PersistenceError(f"Impossibile creare {self.config_dir}: {e}")

    def _read_array(self, path: str) -> list:
        try:
            with open(path, encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            raise PersistenceError(f"Errore lettura {path}: {e}")

        # File vuoto = collezione vuota
        if not text.strip():
            return []

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"File JSON corrotto {path}: {e}")
        if not isinstance(data, list):
            raise PersistenceError(f"{path}: atteso un array JSON, trovato {type(data).__name__}")
        return data

    def _write_array(self, path: str, items: list):
        # Serializza prima di aprire: "w" tronca il file
        try:
            payload = json.dumps(items, ensure_ascii=False)
            with open(path, "w", encoding="utf-8") as f:
                f.write(payload)
        except (OSError, TypeError, ValueError) as e:
            logger.error("write failed", extra={"extra_fields": {"path": path}})
            raise PersistenceError(f"Errore scrittura {path}: {e}")

    def load_clients(self) -> List[Client]:
        rows = self._read_array(self.clients_path)
        try:
            return [client_from_dict(row) for row in rows]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise PersistenceError(f"Cliente non valido in {self.clients_path}: {e}")

    def save_clients(self, clients: List[Client]):
        self._write_array(self.clients_path, [client_to_dict(c) for c in clients])

    def load_reservations(self) -> List[Reservation]:
        rows = self._read_array(self.reservations_path)
        try:
            return [reservation_from_dict(row) for row in rows]
        except (KeyError, TypeError, ValueError, AttributeError, ValidationError) as e:
            raise PersistenceError(f"Prenotazione non valida in {self.reservations_path}: {e}")

    def save_reservations(self, reservations: List[Reservation]):
        self._write_array(self.reservations_path, [reservation_to_dict(r) for r in reservations])
