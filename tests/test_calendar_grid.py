"""Tests per la griglia mensile e la classificazione dei giorni."""

from datetime import date

import pytest

from core.calendar_grid import (
    TileKind,
    build_month_grid,
    reservation_classifier,
    reservation_months,
    taken_classifier,
    year_overview,
)
from core.errors import ValidationError


@pytest.mark.parametrize("year,month", [
    (2024, 1), (2024, 2), (2024, 3), (2024, 9), (2024, 12),
    (2023, 2), (2025, 1), (2026, 6), (2021, 2),
])
def test_grid_is_whole_weeks_from_monday(year, month):
    grid = build_month_grid(year, month)
    tiles = grid.tiles
    assert len(tiles) % 7 == 0
    assert all(len(week) == 7 for week in grid.weeks)
    assert tiles[0].day.weekday() == 0
    assert tiles[-1].day.weekday() == 6

    days = [t.day for t in tiles]
    assert days[0] <= date(year, month, 1)
    labelled = [t for t in tiles if t.label]
    assert [t.label for t in labelled][0] == "1"
    assert labelled[-1].day.month == month
    # giorni consecutivi, senza buchi
    assert all((b - a).days == 1 for a, b in zip(days, days[1:]))


def test_february_2021_fits_four_weeks():
    # 1 febbraio 2021 è lunedì, 28 è domenica
    grid = build_month_grid(2021, 2)
    assert len(grid.weeks) == 4


def test_december_grid_overflows_into_next_year():
    grid = build_month_grid(2024, 12)
    last = grid.tiles[-1]
    assert last.day == date(2025, 1, 5)
    assert last.label == ""
    assert not last.interactive


def test_january_grid_starts_in_previous_year():
    grid = build_month_grid(2025, 1)
    first = grid.tiles[0]
    assert first.day == date(2024, 12, 30)
    assert first.label == ""


def test_interactive_only_inside_month_and_enabled():
    grid = build_month_grid(2024, 3, enabled=lambda d: d.day % 2 == 0)
    for tile in grid.tiles:
        if tile.day.month != 3:
            assert not tile.interactive
        else:
            assert tile.interactive == (tile.day.day % 2 == 0)


def test_header_labels():
    assert build_month_grid(2024, 3).header == ["Lu", "Ma", "Me", "Gi", "Ve", "Sa", "Do"]


def test_invalid_month():
    with pytest.raises(ValidationError):
        build_month_grid(2024, 13)


def test_reservation_classification():
    classify = reservation_classifier(date(2024, 3, 10), date(2024, 3, 15))
    grid = build_month_grid(2024, 3, classify=classify)
    by_kind = {}
    for tile in grid.tiles:
        by_kind.setdefault(tile.kind, set()).add(tile.day)

    assert by_kind[TileKind.START] == {date(2024, 3, 10)}
    assert by_kind[TileKind.END] == {date(2024, 3, 15)}
    assert by_kind[TileKind.MIDDLE] == {date(2024, 3, d) for d in (11, 12, 13, 14)}
    assert date(2024, 3, 9) in by_kind[TileKind.NORMAL]


def test_same_day_reservation_is_start():
    classify = reservation_classifier(date(2024, 3, 10), date(2024, 3, 10))
    assert classify(date(2024, 3, 10)) == TileKind.START


def test_taken_classifier_ignores_adjacent_months():
    taken = {date(2024, 2, 29), date(2024, 3, 1)}
    grid = build_month_grid(2024, 3, classify=taken_classifier(taken, 2024, 3))
    kinds = {t.day: t.kind for t in grid.tiles}
    assert kinds[date(2024, 3, 1)] == TileKind.TAKEN
    # 29 febbraio è nella griglia di marzo ma appartiene al mese precedente
    assert kinds[date(2024, 2, 29)] == TileKind.NORMAL


def test_year_overview_uses_taken_span(populated_store):
    grids = year_overview(2024, populated_store.taken_days)
    assert len(grids) == 12
    march = grids[2]
    taken = {t.day for t in march.tiles if t.kind == TileKind.TAKEN}
    # la vista annuale include il giorno prima dell'arrivo
    assert taken == {date(2024, 3, d) for d in range(9, 16)}
    assert not any(t.interactive for g in grids for t in g.tiles)


def test_reservation_months_across_year(populated_store):
    r = populated_store.reservations[1]   # 28.12.2024 → 03.01.2025
    grids = reservation_months(r)
    assert [(g.year, g.month) for g in grids] == [(2024, 12), (2025, 1)]
    jan = {t.day: t.kind for t in grids[1].tiles}
    assert jan[date(2025, 1, 3)] == TileKind.END
    assert jan[date(2025, 1, 1)] == TileKind.MIDDLE
    assert jan[date(2024, 12, 30)] == TileKind.MIDDLE


def test_reservation_months_single_month(populated_store):
    assert len(reservation_months(populated_store.reservations[0])) == 1
