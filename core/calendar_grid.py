"""
Griglia mensile del calendario (settimane lunedì → domenica).

La griglia parte dal lunedì della settimana del primo del mese e finisce la
domenica della settimana dell'ultimo: i giorni dei mesi adiacenti hanno
etichetta vuota e non sono cliccabili.

Due modi di colorare le caselle:
  - reservation_classifier → singola prenotazione, intervallo esatto [arrivo, partenza]
  - taken_classifier       → vista annuale, giorni occupati [arrivo - 1, partenza]
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Callable, Iterable, List

from config import WEEKDAY_LABELS
from core.dates import ONE_DAY, DateRange, first_of_month, last_of_month, months_spanned
from core.errors import ValidationError
from core.models import Reservation


class TileKind(Enum):
    HEADER = "header"    # riga dei giorni della settimana
    START = "start"      # giorno di arrivo
    END = "end"          # giorno di partenza
    MIDDLE = "middle"    # giorni interni del soggiorno
    NORMAL = "normal"    # libero
    TAKEN = "taken"      # occupato (vista annuale)


@dataclass(frozen=True)
class CalendarTile:
    day: date
    label: str           # giorno del mese, "" fuori dal mese
    kind: TileKind
    interactive: bool


@dataclass
class MonthGrid:
    year: int
    month: int
    weeks: List[List[CalendarTile]] = field(default_factory=list)

    @property
    def header(self) -> List[str]:
        return list(WEEKDAY_LABELS)

    @property
    def tiles(self) -> List[CalendarTile]:
        return [tile for week in self.weeks for tile in week]


def _always_normal(day: date) -> TileKind:
    return TileKind.NORMAL


def _always_enabled(day: date) -> bool:
    return True


def build_month_grid(
    year: int,
    month: int,
    classify: Callable[[date], TileKind] = _always_normal,
    enabled: Callable[[date], bool] = _always_enabled,
) -> MonthGrid:
    """Costruisce le settimane complete del mese, classificando ogni giorno."""
    if not 1 <= month <= 12:
        raise ValidationError(f"Mese non valido: {month}")

    first = first_of_month(year, month)
    last = last_of_month(year, month)

    # weekday(): lunedì = 0, domenica = 6
    grid_start = first - first.weekday() * ONE_DAY
    grid_end = last + (6 - last.weekday()) * ONE_DAY

    grid = MonthGrid(year=year, month=month)
    # DateRange esclude la data iniziale: si parte dal giorno prima
    for index, day in enumerate(DateRange(grid_start - ONE_DAY, grid_end)):
        if index % 7 == 0:
            grid.weeks.append([])
        in_month = day.month == month and day.year == year
        label = str(day.day) if in_month else ""
        grid.weeks[-1].append(CalendarTile(
            day=day,
            label=label,
            kind=classify(day),
            interactive=in_month and enabled(day),
        ))
    return grid


def reservation_classifier(start: date, end: date) -> Callable[[date], TileKind]:
    """Arrivo → START, partenza → END, giorni interni → MIDDLE."""
    def classify(day: date) -> TileKind:
        if day == start:
            return TileKind.START
        if day == end:
            return TileKind.END
        if start < day < end:
            return TileKind.MIDDLE
        return TileKind.NORMAL
    return classify


def taken_classifier(taken_days: Iterable[date], year: int, month: int) -> Callable[[date], TileKind]:
    """Giorni occupati del mese visualizzato → TAKEN. Quelli dei mesi adiacenti restano NORMAL."""
    in_month = {d for d in taken_days if d.year == year and d.month == month}

    def classify(day: date) -> TileKind:
        return TileKind.TAKEN if day in in_month else TileKind.NORMAL
    return classify


def year_overview(year: int, taken_days: Iterable[date]) -> List[MonthGrid]:
    """I 12 mesi dell'anno con i giorni occupati, nessuna casella cliccabile."""
    taken = set(taken_days)
    return [
        build_month_grid(
            year,
            month,
            classify=taken_classifier(taken, year, month),
            enabled=lambda day: False,
        )
        for month in range(1, 13)
    ]


def reservation_months(reservation: Reservation) -> List[MonthGrid]:
    """Griglie dei mesi toccati da una prenotazione, una sola se arrivo e partenza sono nello stesso mese."""
    classify = reservation_classifier(reservation.start, reservation.end)
    return [
        build_month_grid(year, month, classify=classify, enabled=lambda day: False)
        for year, month in months_spanned(reservation.start, reservation.end)
    ]
