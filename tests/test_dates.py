"""Tests per DateRange e utilità sulle date."""

from datetime import date

from core.dates import DateRange, days_between, first_of_month, last_of_month, months_spanned


def test_range_excludes_start_includes_end():
    days = list(DateRange(date(2024, 3, 10), date(2024, 3, 13)))
    assert days == [date(2024, 3, 11), date(2024, 3, 12), date(2024, 3, 13)]


def test_range_is_restartable():
    r = DateRange(date(2024, 3, 1), date(2024, 3, 3))
    assert list(r) == list(r)
    assert len(r) == 2


def test_empty_when_start_equals_or_after_end():
    assert list(DateRange(date(2024, 3, 1), date(2024, 3, 1))) == []
    assert list(DateRange(date(2024, 3, 5), date(2024, 3, 1))) == []
    assert len(DateRange(date(2024, 3, 5), date(2024, 3, 1))) == 0


def test_membership_follows_iteration_bounds():
    r = DateRange(date(2024, 3, 10), date(2024, 3, 12))
    assert date(2024, 3, 10) not in r
    assert date(2024, 3, 11) in r
    assert date(2024, 3, 12) in r
    assert date(2024, 3, 13) not in r


def test_inclusive_covers_both_ends():
    days = list(DateRange.inclusive(date(2024, 2, 28), date(2024, 3, 1)))
    assert days == [date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]


def test_range_crosses_year():
    days = list(DateRange(date(2024, 12, 30), date(2025, 1, 2)))
    assert days == [date(2024, 12, 31), date(2025, 1, 1), date(2025, 1, 2)]


def test_days_between_can_be_negative():
    assert days_between(date(2024, 3, 10), date(2024, 3, 15)) == 5
    assert days_between(date(2024, 3, 15), date(2024, 3, 10)) == -5


def test_month_bounds_with_year_rollover():
    assert first_of_month(2024, 12) == date(2024, 12, 1)
    assert last_of_month(2024, 12) == date(2024, 12, 31)
    assert last_of_month(2024, 2) == date(2024, 2, 29)
    assert last_of_month(2023, 2) == date(2023, 2, 28)


def test_months_spanned():
    assert months_spanned(date(2024, 3, 10), date(2024, 3, 15)) == [(2024, 3)]
    assert months_spanned(date(2024, 11, 20), date(2025, 1, 3)) == [(2024, 11), (2024, 12), (2025, 1)]
