"""
Reservation Repositories

Storage capability used by the lifecycle. Two implementations:
- DjangoReservationRepository: the database, used by the running service
- InMemoryReservationRepository: process-local store with the same semantics

The write path enforces the overlap rule atomically per cabin: of two
racing inserts for overlapping dates at most one succeeds, the other
raises ConflictError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime
from typing import Iterable, List
import itertools
import logging
import threading

from django.db import transaction  # type: ignore
from django.utils import timezone  # type: ignore

from shared.domain.value_objects import DateRange

from apps.cabins.models import Cabin
from apps.reservations.domain.entities import Reservation, ReservationStatus, Unit
from apps.reservations.domain.errors import ConflictError, NotFoundError
from apps.reservations.models import Reservation as ReservationModel

logger = logging.getLogger(__name__)


class ReservationRepository(ABC):

    @abstractmethod
    def get_unit(self, unit_id: int) -> Unit | None: ...

    @abstractmethod
    def list_units(self, active_only: bool = True) -> List[Unit]: ...

    @abstractmethod
    def get_reservation(self, reservation_id: int) -> Reservation | None: ...

    @abstractmethod
    def get_by_confirmation_code(self, code: str) -> Reservation | None: ...

    @abstractmethod
    def confirmation_code_exists(self, code: str) -> bool: ...

    @abstractmethod
    def list_active_reservations(self, unit_id: int, dates: DateRange,
                                 exclude_reservation_id: int | None = None) -> List[Reservation]:
        """PENDING/CONFIRMED reservations of the cabin overlapping ``dates``"""

    @abstractmethod
    def insert_reservation(self, reservation: Reservation) -> Reservation:
        """
        Persist a new reservation and return it with its id

        Raises:
            NotFoundError: Cabin does not exist
            ConflictError: An active reservation overlaps at write time
        """

    @abstractmethod
    def update_status(self, reservation_id: int, new_status: ReservationStatus,
                      expected_status: ReservationStatus | None = None, **extra) -> bool:
        """
        Conditional status write

        Applies only while the stored status equals ``expected_status``
        (when given). Returns whether the row was updated.
        """

    @abstractmethod
    def set_calendar_event(self, reservation_id: int, event_id: str) -> None: ...

    @abstractmethod
    def list_pending_expired(self, now: datetime) -> List[Reservation]: ...

    @abstractmethod
    def delete_reservation(self, reservation_id: int) -> bool:
        """Administrative removal, outside the lifecycle"""


class DjangoReservationRepository(ReservationRepository):
    """
    Database-backed repository

    insert_reservation serializes writers per cabin by locking the cabin row
    (SELECT ... FOR UPDATE) before re-checking overlaps. SQLite has no row
    locks, so its connections must open IMMEDIATE transactions (see the
    DATABASES OPTIONS in settings): the write lock is then taken at BEGIN
    and the losing writer waits instead of failing with "database is locked".
    """

    def _cabins(self):
        return Cabin.objects

    def _reservations(self):
        return ReservationModel.objects

    def get_unit(self, unit_id: int) -> Unit | None:
        cabin = self._cabins().filter(pk=unit_id).first()
        return cabin.to_unit() if cabin else None

    def list_units(self, active_only: bool = True) -> List[Unit]:
        qs = self._cabins().all()
        if active_only:
            qs = qs.filter(is_active=True)
        return [cabin.to_unit() for cabin in qs.order_by("name")]

    def get_reservation(self, reservation_id: int) -> Reservation | None:
        row = self._reservations().filter(pk=reservation_id).first()
        return row.to_entity() if row else None

    def get_by_confirmation_code(self, code: str) -> Reservation | None:
        row = self._reservations().filter(confirmation_code__iexact=code.strip()).first()
        return row.to_entity() if row else None

    def confirmation_code_exists(self, code: str) -> bool:
        return self._reservations().filter(confirmation_code__iexact=code).exists()

    def _active_overlapping(self, unit_id: int, dates: DateRange,
                            exclude_reservation_id: int | None = None):
        qs = self._reservations().filter(
            cabin_id=unit_id,
            status__in=ReservationModel.BLOCKING_STATUSES,
            check_in__lt=dates.check_out,
            check_out__gt=dates.check_in,
        )
        if exclude_reservation_id is not None:
            qs = qs.exclude(pk=exclude_reservation_id)
        return qs.order_by("check_in")

    def list_active_reservations(self, unit_id: int, dates: DateRange,
                                 exclude_reservation_id: int | None = None) -> List[Reservation]:
        qs = self._active_overlapping(unit_id, dates, exclude_reservation_id)
        return [row.to_entity() for row in qs]

    @transaction.atomic
    def insert_reservation(self, reservation: Reservation) -> Reservation:
        # Single writer per cabin until the transaction commits
        cabin = self._cabins().select_for_update().filter(pk=reservation.unit_id).first()
        if cabin is None:
            raise NotFoundError('Cabin', reservation.unit_id)

        conflicts = list(self._active_overlapping(reservation.unit_id, reservation.dates))
        if conflicts:
            logger.info(
                f"Insert rejected for cabin {reservation.unit_id} {reservation.dates}: "
                f"{len(conflicts)} overlapping reservation(s)"
            )
            raise ConflictError(
                reservation.unit_id,
                reservation.dates,
                [DateRange(row.check_in, row.check_out) for row in conflicts],
            )

        row = self._reservations().create(
            cabin=cabin,
            guest_name=reservation.guest_name,
            guest_email=reservation.guest_email,
            check_in=reservation.check_in,
            check_out=reservation.check_out,
            guests=reservation.guests,
            total_price=reservation.total_price,
            includes_add_on=reservation.includes_add_on,
            status=reservation.status.value,
            confirmation_code=reservation.confirmation_code.upper(),
            payment_instructions=reservation.payment_instructions,
            frozen_until=reservation.frozen_until,
            calendar_event_id=reservation.calendar_event_id,
        )
        reservation.id = row.pk
        reservation.confirmation_code = row.confirmation_code
        reservation.created_at = row.created_at
        reservation.updated_at = row.updated_at
        return reservation

    def update_status(self, reservation_id: int, new_status: ReservationStatus,
                      expected_status: ReservationStatus | None = None, **extra) -> bool:
        qs = self._reservations().filter(pk=reservation_id)
        if expected_status is not None:
            qs = qs.filter(status=expected_status.value)
        # QuerySet.update() bypasses auto_now
        updated = qs.update(status=new_status.value, updated_at=timezone.now(), **extra)
        return updated == 1

    def set_calendar_event(self, reservation_id: int, event_id: str) -> None:
        self._reservations().filter(pk=reservation_id).update(
            calendar_event_id=event_id,
            updated_at=timezone.now(),
        )

    def list_pending_expired(self, now: datetime) -> List[Reservation]:
        qs = self._reservations().filter(
            status=ReservationStatus.PENDING.value,
            frozen_until__lte=now,
        ).order_by("frozen_until")
        return [row.to_entity() for row in qs]

    def delete_reservation(self, reservation_id: int) -> bool:
        deleted, _ = self._reservations().filter(pk=reservation_id).delete()
        return deleted > 0


class InMemoryReservationRepository(ReservationRepository):
    """
    Thread-safe dictionary store

    A single lock serializes every write, which satisfies the per-cabin
    atomicity of the overlap check. Entities are copied in and out so
    callers never share state with the store.
    """

    def __init__(self, units: Iterable[Unit] = ()):
        self._lock = threading.RLock()
        self._units: dict[int, Unit] = {}
        self._reservations: dict[int, Reservation] = {}
        self._unit_ids = itertools.count(1)
        self._reservation_ids = itertools.count(1)
        for unit in units:
            self.add_unit(unit)

    def add_unit(self, unit: Unit) -> Unit:
        with self._lock:
            stored = replace(unit, id=unit.id if unit.id is not None else next(self._unit_ids))
            self._units[stored.id] = stored
            return replace(stored)

    @staticmethod
    def _copy(reservation: Reservation) -> Reservation:
        return replace(reservation, id=reservation.id)

    def get_unit(self, unit_id: int) -> Unit | None:
        unit = self._units.get(unit_id)
        return replace(unit) if unit else None

    def list_units(self, active_only: bool = True) -> List[Unit]:
        units = sorted(self._units.values(), key=lambda unit: unit.name)
        return [replace(unit) for unit in units if unit.is_active or not active_only]

    def get_reservation(self, reservation_id: int) -> Reservation | None:
        with self._lock:
            stored = self._reservations.get(reservation_id)
            return self._copy(stored) if stored else None

    def get_by_confirmation_code(self, code: str) -> Reservation | None:
        wanted = code.strip().upper()
        with self._lock:
            for stored in self._reservations.values():
                if stored.confirmation_code.upper() == wanted:
                    return self._copy(stored)
        return None

    def confirmation_code_exists(self, code: str) -> bool:
        return self.get_by_confirmation_code(code) is not None

    def list_active_reservations(self, unit_id: int, dates: DateRange,
                                 exclude_reservation_id: int | None = None) -> List[Reservation]:
        with self._lock:
            found = [
                self._copy(stored) for stored in self._reservations.values()
                if stored.unit_id == unit_id
                and stored.is_active
                and stored.id != exclude_reservation_id
                and stored.dates.overlaps_with(dates)
            ]
        return sorted(found, key=lambda reservation: reservation.check_in)

    def insert_reservation(self, reservation: Reservation) -> Reservation:
        with self._lock:
            if reservation.unit_id not in self._units:
                raise NotFoundError('Cabin', reservation.unit_id)
            conflicts = self.list_active_reservations(reservation.unit_id, reservation.dates)
            if conflicts:
                raise ConflictError(
                    reservation.unit_id,
                    reservation.dates,
                    [existing.dates for existing in conflicts],
                )
            now = timezone.now()
            reservation.id = next(self._reservation_ids)
            reservation.confirmation_code = reservation.confirmation_code.upper()
            reservation.created_at = reservation.created_at or now
            reservation.updated_at = now
            self._reservations[reservation.id] = self._copy(reservation)
            return reservation

    def update_status(self, reservation_id: int, new_status: ReservationStatus,
                      expected_status: ReservationStatus | None = None, **extra) -> bool:
        with self._lock:
            stored = self._reservations.get(reservation_id)
            if stored is None:
                return False
            if expected_status is not None and stored.status is not expected_status:
                return False
            self._reservations[reservation_id] = replace(
                stored, status=new_status, updated_at=timezone.now(), **extra
            )
            return True

    def set_calendar_event(self, reservation_id: int, event_id: str) -> None:
        with self._lock:
            stored = self._reservations.get(reservation_id)
            if stored is not None:
                self._reservations[reservation_id] = replace(stored, calendar_event_id=event_id)

    def list_pending_expired(self, now: datetime) -> List[Reservation]:
        with self._lock:
            overdue = [
                self._copy(stored) for stored in self._reservations.values()
                if stored.is_frozen_past(now)
            ]
        return sorted(overdue, key=lambda reservation: reservation.frozen_until)

    def delete_reservation(self, reservation_id: int) -> bool:
        with self._lock:
            return self._reservations.pop(reservation_id, None) is not None
