"""
Modelli dati: Client, LocalizedPrice, ReservationMeta e Reservation.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from core.errors import ValidationError


# Bit dei flag di ReservationMeta nel formato compatto "<cambio>|<flag>"
FLAG_CLEANING_COST = 1
FLAG_CLEANING_TIME = 2
FLAG_KEYS = 4
FLAG_OWNERSHIP = 8


def check_rate(rate: float) -> None:
    """Il cambio deve essere un numero finito e > 0."""
    if not math.isfinite(rate) or rate <= 0:
        raise ValidationError(f"Cambio euro non valido: {rate} (deve essere > 0)")


@dataclass
class Client:
    """Un cliente. L'identità è l'id, il nome si può modificare."""
    name: str
    id: UUID


@dataclass(frozen=True)
class LocalizedPrice:
    """
    Prezzo diviso in due componenti additive: una quota in euro e una in złoty.

    Non è lo stesso importo salvato due volte: to_pln e to_euro non sono
    l'una l'inversa dell'altra.
    """
    euro: float = 0.0
    pln: float = 0.0

    def to_pln(self, rate: float) -> float:
        check_rate(rate)
        return self.euro * rate + self.pln

    def to_euro(self, rate: float) -> float:
        check_rate(rate)
        return self.pln / rate + self.euro


@dataclass
class ReservationMeta:
    """Opzioni che cambiano prezzo e durata di una prenotazione."""
    euro_price: float               # cambio EUR → PLN, > 0
    add_cleaning_cost: bool = False  # trattiene la pulizia (30 €)
    add_cleaning_time: bool = False  # un giorno in meno per la pulizia
    keys_included: bool = False      # trattiene la consegna chiavi (10 €)
    ownership: bool = False

    def __post_init__(self):
        check_rate(self.euro_price)

    @property
    def flags(self) -> int:
        return (
            (FLAG_CLEANING_COST if self.add_cleaning_cost else 0)
            | (FLAG_CLEANING_TIME if self.add_cleaning_time else 0)
            | (FLAG_KEYS if self.keys_included else 0)
            | (FLAG_OWNERSHIP if self.ownership else 0)
        )

    def encode(self) -> str:
        """Formato su disco: '4.7|5' → cambio 4.7, pulizia + chiavi."""
        return f"{float(self.euro_price)}|{self.flags}"

    @classmethod
    def decode(cls, raw: str) -> "ReservationMeta":
        parts = str(raw).split("|")
        if len(parts) != 2:
            raise ValidationError(f"Meta prenotazione non valida: {raw!r}")
        try:
            euro_price = float(parts[0])
            flags = int(parts[1])
        except ValueError:
            raise ValidationError(f"Meta prenotazione non valida: {raw!r}")

        return cls(
            euro_price=euro_price,
            add_cleaning_cost=bool(flags & FLAG_CLEANING_COST),
            add_cleaning_time=bool(flags & FLAG_CLEANING_TIME),
            keys_included=bool(flags & FLAG_KEYS),
            ownership=bool(flags & FLAG_OWNERSHIP),
        )


@dataclass
class Reservation:
    """Una prenotazione di un cliente, date incluse entrambe."""
    client_id: UUID
    property_id: UUID               # generato per ogni prenotazione, non usato altrove
    id: UUID
    start: date                     # arrivo
    end: date                       # partenza
    meta: ReservationMeta
    prepay: LocalizedPrice = field(default_factory=LocalizedPrice)
    price_per_day: LocalizedPrice = field(default_factory=LocalizedPrice)
    price: LocalizedPrice = field(default_factory=LocalizedPrice)  # importo fisso aggiuntivo
    notes: str = ""

    def __post_init__(self):
        if self.start > self.end:
            raise ValidationError(
                f"Data di arrivo {self.start} successiva alla partenza {self.end}"
            )
