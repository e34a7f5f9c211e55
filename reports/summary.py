"""
Tabelle riepilogative dalle prenotazioni dello store.

Produce DataFrame pronti per st.dataframe:
  - elenco prenotazioni con incasso in PLN ed EUR
  - pivot incasso per mese di arrivo
  - riepilogo per cliente
e i byte CSV / XLSX per il download.
"""

import io
from typing import Iterable

import pandas as pd

from core.pricing import breakdown_for
from core.store import ReservationStore
from core.models import Reservation

RESERVATION_COLUMNS = [
    "cliente", "dal", "al", "anno_mese", "giorni", "notti", "cambio",
    "prezzo_giorno_pln", "fisso_pln", "opzioni_pln", "incasso_pln",
    "prezzo_giorno_eur", "fisso_eur", "opzioni_eur", "incasso_eur",
    "note",
]


def reservations_df(store: ReservationStore, reservations: Iterable[Reservation] = None) -> pd.DataFrame:
    """
    Una riga per prenotazione, con il dettaglio prezzi nelle due valute.
    Importi a precisione piena: si arrotonda solo in visualizzazione.
    """
    if reservations is None:
        reservations = store.reservations

    rows = []
    for r in reservations:
        client = store.find_client(r)
        b = breakdown_for(r)
        rows.append({
            "cliente": client.name if client else "N/D",
            "dal": r.start,
            "al": r.end,
            "anno_mese": r.start.strftime("%Y-%m"),
            "giorni": b.days,
            "notti": b.nights,
            "cambio": r.meta.euro_price,
            "prezzo_giorno_pln": b.pln.per_day,
            "fisso_pln": b.pln.flat_total,
            "opzioni_pln": b.pln.fees_total,
            "incasso_pln": b.pln.income,
            "prezzo_giorno_eur": b.euro.per_day,
            "fisso_eur": b.euro.flat_total,
            "opzioni_eur": b.euro.fees_total,
            "incasso_eur": b.euro.income,
            "note": r.notes,
        })

    if not rows:
        return pd.DataFrame(columns=RESERVATION_COLUMNS)
    return pd.DataFrame(rows, columns=RESERVATION_COLUMNS)


def income_by_month(df: pd.DataFrame) -> pd.DataFrame:
    """Pivot: mese di arrivo × (incasso PLN, incasso EUR, notti), con riga TOTALE."""
    if df.empty:
        return pd.DataFrame()

    pivot = df.pivot_table(
        values=["incasso_pln", "incasso_eur", "notti"],
        index="anno_mese",
        aggfunc="sum",
        fill_value=0,
        margins=True,
        margins_name="TOTALE",
    )
    return pivot[["incasso_pln", "incasso_eur", "notti"]]


def client_summary(store: ReservationStore, year: int) -> pd.DataFrame:
    """Per ogni cliente: numero prenotazioni totali e di quelle che iniziano nell'anno."""
    rows = [
        {
            "cliente": c.name,
            "prenotazioni": store.reservation_count(c),
            f"nel_{year}": store.reservation_count(c, year),
        }
        for c in store.clients
    ]
    return pd.DataFrame(rows, columns=["cliente", "prenotazioni", f"nel_{year}"])


# ── Export ───────────────────────────────────────────────────────────────────

def df_to_csv_bytes(df: pd.DataFrame) -> bytes:
    return df.to_csv(index=False).encode("utf-8")


def df_to_excel_bytes(df: pd.DataFrame, sheet_name: str = "Prenotazioni") -> bytes:
    """Converte DataFrame in bytes XLSX per il download."""
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
    return buf.getvalue()
