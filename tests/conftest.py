"""
Configurazione pytest e fixture comuni.
Ogni test usa una cartella dati temporanea, mai quella reale.
"""

from datetime import date
from uuid import UUID

import pytest

from core.models import LocalizedPrice, ReservationMeta
from core.storage import JsonStorage
from core.store import ReservationStore


class SequentialIds:
    """Id deterministici: 00000000-0000-0000-0000-000000000001, ...002, ..."""

    def __init__(self):
        self.counter = 0

    def __call__(self) -> UUID:
        self.counter += 1
        return UUID(int=self.counter)


@pytest.fixture
def storage(tmp_path):
    return JsonStorage(str(tmp_path / "planner"))


@pytest.fixture
def ids():
    return SequentialIds()


@pytest.fixture
def store(storage, ids):
    return ReservationStore(storage, id_factory=ids)


@pytest.fixture
def meta():
    return ReservationMeta(euro_price=4.7)


@pytest.fixture
def populated_store(store, meta):
    """Due clienti, tre prenotazioni (due di Anna, una di Marco)."""
    anna = store.new_client("Anna")
    marco = store.new_client("Marco")
    store.add_client(anna)
    store.add_client(marco)

    store.add_reservation(store.new_reservation(
        anna, date(2024, 3, 10), date(2024, 3, 15), meta,
        price_per_day=LocalizedPrice(pln=100.0), price=LocalizedPrice(pln=50.0),
        notes="primo piano",
    ))
    store.add_reservation(store.new_reservation(
        anna, date(2024, 12, 28), date(2025, 1, 3),
        ReservationMeta(euro_price=4.3, add_cleaning_cost=True, add_cleaning_time=True, keys_included=True),
        price_per_day=LocalizedPrice(euro=40.0),
    ))
    store.add_reservation(store.new_reservation(
        marco, date(2024, 7, 1), date(2024, 7, 8), meta,
        price_per_day=LocalizedPrice(euro=20.0, pln=30.0),
        prepay=LocalizedPrice(pln=200.0),
    ))
    return store
