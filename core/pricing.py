"""
Calcolo dell'incasso di un soggiorno, separato per PLN ed EUR.

Per ogni valuta:
  notti × prezzo al giorno + importo fisso - opzioni (pulizia, chiavi) = incasso

Le opzioni sono sempre espresse in euro e convertite con il cambio della
prenotazione. Nessun arrotondamento nel calcolo: si arrotonda a 2 decimali
solo in format_amount / format_breakdown.
"""

from dataclasses import dataclass
from datetime import date

from config import CLEANING_FEE_EUR, KEYS_FEE_EUR
from core.dates import days_between
from core.errors import ValidationError
from core.models import LocalizedPrice, Reservation, ReservationMeta, check_rate

PLN = "PLN"
EUR = "EUR"


@dataclass(frozen=True)
class CurrencyBreakdown:
    """Voci di costo in una singola valuta."""
    currency: str
    nights: int
    per_day: float       # prezzo di una notte convertito
    per_day_total: float
    flat_total: float
    fees_total: float

    @property
    def income(self) -> float:
        return self.per_day_total + self.flat_total - self.fees_total


@dataclass(frozen=True)
class PriceBreakdown:
    days: int            # giorni di calendario tra arrivo e partenza
    nights: int          # notti fatturate (al netto del giorno di pulizia)
    fees: LocalizedPrice
    pln: CurrencyBreakdown
    euro: CurrencyBreakdown


def billable_nights(start: date, end: date, meta: ReservationMeta) -> int:
    """Notti fatturate: giorni tra le date, meno uno se c'è il giorno di pulizia. Mai < 0."""
    if start > end:
        raise ValidationError(f"Data di arrivo {start} successiva alla partenza {end}")
    nights = days_between(start, end) - (1 if meta.add_cleaning_time else 0)
    return max(nights, 0)


def fees_for(meta: ReservationMeta) -> LocalizedPrice:
    amount = (CLEANING_FEE_EUR if meta.add_cleaning_cost else 0) + (KEYS_FEE_EUR if meta.keys_included else 0)
    return LocalizedPrice(euro=float(amount))


def _convert(p: LocalizedPrice, currency: str, rate: float) -> float:
    return p.to_pln(rate) if currency == PLN else p.to_euro(rate)


def _currency_breakdown(currency, nights, rate, price_per_day, price, fees) -> CurrencyBreakdown:
    per_day = _convert(price_per_day, currency, rate)
    return CurrencyBreakdown(
        currency=currency,
        nights=nights,
        per_day=per_day,
        per_day_total=nights * per_day,
        flat_total=_convert(price, currency, rate),
        fees_total=_convert(fees, currency, rate),
    )


def compute_breakdown(
    meta: ReservationMeta,
    start: date,
    end: date,
    price_per_day: LocalizedPrice,
    price: LocalizedPrice,
) -> PriceBreakdown:
    """
    Calcola il dettaglio prezzi per un soggiorno (anche non ancora salvato).

    Raises:
        ValidationError: cambio non positivo o non finito, oppure start > end
    """
    rate = meta.euro_price
    check_rate(rate)

    nights = billable_nights(start, end, meta)
    fees = fees_for(meta)

    return PriceBreakdown(
        days=days_between(start, end),
        nights=nights,
        fees=fees,
        pln=_currency_breakdown(PLN, nights, rate, price_per_day, price, fees),
        euro=_currency_breakdown(EUR, nights, rate, price_per_day, price, fees),
    )


def breakdown_for(reservation: Reservation) -> PriceBreakdown:
    return compute_breakdown(
        reservation.meta,
        reservation.start,
        reservation.end,
        reservation.price_per_day,
        reservation.price,
    )


# ── Presentazione ────────────────────────────────────────────────────────────

def format_amount(value: float) -> str:
    return f"{value:.2f}"


def format_breakdown(cb: CurrencyBreakdown) -> str:
    """Es. 'PLN: 5 x 100.00 + 50.00 - 0.00 = 550.00'."""
    return (
        f"{cb.currency}: {cb.nights} x {format_amount(cb.per_day)} "
        f"+ {format_amount(cb.flat_total)} - {format_amount(cb.fees_total)} "
        f"= {format_amount(cb.income)}"
    )


def nights_label(days: int, add_cleaning_time: bool) -> str:
    """Didascalia della durata, es. '5 notti (4 escludendo il giorno di pulizia)'."""
    label = f"{days} notti"
    if add_cleaning_time:
        label += f" ({max(days - 1, 0)} escludendo il giorno di pulizia)"
    return label
