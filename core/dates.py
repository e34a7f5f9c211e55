"""
Utilità sulle date: intervalli, giorni tra due date, limiti del mese.

DateRange esclude la data di partenza e include quella finale. Chi vuole
includere anche la prima data sottrae un giorno prima (o usa inclusive()).
"""

from datetime import date, timedelta
from typing import Iterator, List, Tuple

ONE_DAY = timedelta(days=1)


class DateRange:
    """Sequenza lazy delle date d con start < d <= end. Si può iterare più volte."""

    def __init__(self, start: date, end: date):
        self.start = start
        self.end = end

    @classmethod
    def inclusive(cls, start: date, end: date) -> "DateRange":
        """Intervallo [start, end], entrambe incluse."""
        return cls(start - ONE_DAY, end)

    def __iter__(self) -> Iterator[date]:
        current = self.start
        while current < self.end:
            current += ONE_DAY
            yield current

    def __contains__(self, day) -> bool:
        return isinstance(day, date) and self.start < day <= self.end

    def __len__(self) -> int:
        return max(days_between(self.start, self.end), 0)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DateRange):
            return NotImplemented
        return (self.start, self.end) == (other.start, other.end)

    def __repr__(self) -> str:
        return f"DateRange({self.start!r}, {self.end!r})"


def days_between(a: date, b: date) -> int:
    """Giorni interi da a a b (negativo se b < a)."""
    return (b - a).days


def first_of_month(year: int, month: int) -> date:
    return date(year, month, 1)


def last_of_month(year: int, month: int) -> date:
    """Ultimo giorno del mese: primo del mese successivo meno un giorno."""
    next_year = year + 1 if month == 12 else year
    next_month = 1 if month == 12 else month + 1
    return date(next_year, next_month, 1) - ONE_DAY


def months_spanned(start: date, end: date) -> List[Tuple[int, int]]:
    """Coppie (anno, mese) toccate dall'intervallo [start, end], in ordine."""
    months = []
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        months.append((year, month))
        if month == 12:
            year, month = year + 1, 1
        else:
            month += 1
    return months
