"""
Archivio in memoria di clienti e prenotazioni.

Ogni modifica riscrive subito su disco la collezione toccata (via storage).
Se il salvataggio fallisce la modifica in memoria viene annullata, così
memoria e file restano allineati.

Lo store non fa controlli di dominio oltre all'esistenza del cliente:
  - nomi duplicati → li rifiuta chi chiama, con check_client_name()
  - sovrapposizioni di date → permesse
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List, Optional, Set, Tuple
from uuid import UUID, uuid4

from core.dates import DateRange, ONE_DAY, months_spanned
from core.errors import NotFoundError, PersistenceError, ValidationError
from core.log import get_logger
from core.models import Client, LocalizedPrice, Reservation, ReservationMeta

logger = get_logger(__name__)


@dataclass
class ReservationFilter:
    """Filtri dell'elenco prenotazioni. Un criterio vuoto accetta tutto."""
    years: Set[int] = field(default_factory=set)
    months: Set[int] = field(default_factory=set)       # 1..12, di qualsiasi anno
    client_ids: Set[UUID] = field(default_factory=set)

    def matches(self, r: Reservation) -> bool:
        if self.years and r.start.year not in self.years and r.end.year not in self.years:
            return False
        if self.months and not any(m in self.months for _, m in months_spanned(r.start, r.end)):
            return False
        if self.client_ids and r.client_id not in self.client_ids:
            return False
        return True


class ReservationStore:

    def __init__(self, storage, id_factory: Callable[[], UUID] = uuid4):
        self._storage = storage
        self._new_id = id_factory
        self._clients: List[Client] = list(storage.load_clients())
        self._reservations: List[Reservation] = list(storage.load_reservations())
        logger.info(
            "store loaded",
            extra={"extra_fields": {
                "clients": len(self._clients),
                "reservations": len(self._reservations),
            }},
        )

    # ── Snapshot ────────────────────────────────────────────────────────────

    @property
    def clients(self) -> Tuple[Client, ...]:
        return tuple(self._clients)

    @property
    def reservations(self) -> Tuple[Reservation, ...]:
        return tuple(self._reservations)

    # ── Factory ─────────────────────────────────────────────────────────────

    def new_client(self, name: str) -> Client:
        return Client(name=name, id=self._new_id())

    def new_reservation(
        self,
        client: Client,
        start: date,
        end: date,
        meta: ReservationMeta,
        price_per_day: LocalizedPrice = None,
        price: LocalizedPrice = None,
        notes: str = "",
        prepay: LocalizedPrice = None,
    ) -> Reservation:
        return Reservation(
            client_id=client.id,
            property_id=self._new_id(),
            id=self._new_id(),
            start=start,
            end=end,
            meta=meta,
            prepay=prepay or LocalizedPrice(),
            price_per_day=price_per_day or LocalizedPrice(),
            price=price or LocalizedPrice(),
            notes=notes,
        )

    # ── Modifiche ───────────────────────────────────────────────────────────

    def add_client(self, client: Client):
        self._clients.append(client)
        try:
            self._storage.save_clients(self._clients)
        except PersistenceError:
            self._clients.pop()
            raise
        logger.info("client added", extra={"extra_fields": {"client_id": str(client.id)}})

    def remove_client(self, client: Client):
        """Rimuove il cliente e tutte le sue prenotazioni."""
        old_clients = list(self._clients)
        old_reservations = list(self._reservations)

        self._clients = [c for c in self._clients if c.id != client.id]
        self._reservations = [r for r in self._reservations if r.client_id != client.id]
        removed = len(old_reservations) - len(self._reservations)

        try:
            self._storage.save_reservations(self._reservations)
            self._storage.save_clients(self._clients)
        except PersistenceError:
            self._clients = old_clients
            self._reservations = old_reservations
            self._restore_files()
            raise
        logger.info(
            "client removed",
            extra={"extra_fields": {"client_id": str(client.id), "reservations_removed": removed}},
        )

    def add_reservation(self, reservation: Reservation):
        if self.find_client(reservation) is None:
            raise NotFoundError(f"Cliente {reservation.client_id} inesistente")

        self._reservations.append(reservation)
        try:
            self._storage.save_reservations(self._reservations)
        except PersistenceError:
            self._reservations.pop()
            raise
        logger.info(
            "reservation added",
            extra={"extra_fields": {
                "reservation_id": str(reservation.id),
                "client_id": str(reservation.client_id),
                "from": reservation.start,
                "to": reservation.end,
            }},
        )

    def remove_reservation(self, reservation: Reservation):
        old_reservations = list(self._reservations)
        self._reservations = [r for r in self._reservations if r.id != reservation.id]
        try:
            self._storage.save_reservations(self._reservations)
        except PersistenceError:
            self._reservations = old_reservations
            raise
        logger.info("reservation removed", extra={"extra_fields": {"reservation_id": str(reservation.id)}})

    def _restore_files(self):
        """Dopo un salvataggio a metà prova a riallineare i file allo stato in memoria."""
        try:
            self._storage.save_reservations(self._reservations)
            self._storage.save_clients(self._clients)
        except PersistenceError:
            logger.error("rollback write failed, files may be out of sync", exc_info=True)

    # ── Ricerca ─────────────────────────────────────────────────────────────

    def find_client(self, reservation: Reservation) -> Optional[Client]:
        for c in self._clients:
            if c.id == reservation.client_id:
                return c
        return None

    def get_client(self, reservation: Reservation) -> Client:
        client = self.find_client(reservation)
        if client is None:
            raise NotFoundError(f"Cliente {reservation.client_id} inesistente")
        return client

    def find_client_by_name(self, name: str) -> Optional[Client]:
        for c in self._clients:
            if c.name == name:
                return c
        return None

    def get_reservation(self, reservation_id: UUID) -> Reservation:
        for r in self._reservations:
            if r.id == reservation_id:
                return r
        raise NotFoundError(f"Prenotazione {reservation_id} inesistente")

    def check_client_name(self, name: str):
        """Regola per i nuovi clienti: nome non vuoto e non già usato."""
        if not name or not name.strip():
            raise ValidationError("Il nome del cliente è obbligatorio")
        if self.find_client_by_name(name) is not None:
            raise ValidationError(f"Esiste già un cliente di nome '{name}'")

    def clients_matching(self, prefix: str) -> List[Client]:
        return [c for c in self._clients if c.name.startswith(prefix)]

    # ── Viste derivate ──────────────────────────────────────────────────────

    @property
    def taken_days(self) -> Set[date]:
        """Giorni occupati per la vista annuale: da arrivo - 1 a partenza, inclusi."""
        days = set()
        for r in self._reservations:
            # DateRange esclude il primo estremo: parte da arrivo - 2
            days.update(DateRange(r.start - 2 * ONE_DAY, r.end))
        return days

    def reservations_for(self, client: Client) -> List[Reservation]:
        return [r for r in self._reservations if r.client_id == client.id]

    def reservation_count(self, client: Client, year: int = None) -> int:
        """Prenotazioni del cliente, tutte o solo quelle che iniziano nell'anno dato."""
        return sum(
            1 for r in self.reservations_for(client)
            if year is None or r.start.year == year
        )

    def available_years(self) -> List[int]:
        years = set()
        for r in self._reservations:
            years.update((r.start.year, r.end.year))
        return sorted(years)

    def available_months(self) -> List[int]:
        months = set()
        for r in self._reservations:
            months.update(m for _, m in months_spanned(r.start, r.end))
        return sorted(months)

    def available_clients(self) -> List[Client]:
        """Clienti con almeno una prenotazione, nell'ordine di inserimento."""
        ids = {r.client_id for r in self._reservations}
        return [c for c in self._clients if c.id in ids]

    def filter(self, criteria: ReservationFilter) -> List[Reservation]:
        return [r for r in self._reservations if criteria.matches(r)]
