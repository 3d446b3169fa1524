"""
Reservation Domain Entities

- Unit: A bookable cabin (reference data, maintained by an administrator)
- ReservationStatus: FSM states for the reservation lifecycle
- Reservation: Aggregate root for a guest's stay
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from shared.domain.base import Aggregate, Entity
from shared.domain.value_objects import DateRange

from apps.reservations.domain.errors import InvalidStateError


class ReservationStatus(Enum):
    """
    Reservation Status Finite State Machine

    State transitions:
    - PENDING -> CONFIRMED (administrator verified the deposit)
    - PENDING -> CANCELLED (administrator or guest cancelled)
    - PENDING -> EXPIRED (freeze window elapsed, set by the sweeper)
    - CONFIRMED -> CANCELLED

    CANCELLED and EXPIRED are terminal. Nothing re-enters PENDING.
    """
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'
    EXPIRED = 'expired'

    @property
    def is_active(self) -> bool:
        """Active reservations block the cabin's calendar"""
        return self in ACTIVE_STATUSES


ACTIVE_STATUSES = frozenset({ReservationStatus.PENDING, ReservationStatus.CONFIRMED})

ALLOWED_TRANSITIONS = {
    ReservationStatus.PENDING: frozenset({
        ReservationStatus.CONFIRMED,
        ReservationStatus.CANCELLED,
        ReservationStatus.EXPIRED,
    }),
    ReservationStatus.CONFIRMED: frozenset({ReservationStatus.CANCELLED}),
    ReservationStatus.CANCELLED: frozenset(),
    ReservationStatus.EXPIRED: frozenset(),
}


@dataclass(eq=False)
class Unit(Entity):
    """A cabin with its two nightly prices"""
    name: str
    weekday_price: int
    weekend_price: int
    is_active: bool = True
    max_guests: int | None = None

    def __str__(self):
        return self.name


@dataclass(eq=False)
class Reservation(Aggregate):
    """
    Reservation Aggregate Root

    Key invariants:
    - dates.check_in < dates.check_out (enforced by DateRange)
    - Status only moves along ALLOWED_TRANSITIONS
    - total_price and includes_add_on are fixed at creation
    - confirmation_code is assigned at creation and never changes
    - frozen_until only matters while PENDING
    """

    unit_id: int
    guest_name: str
    guest_email: str
    dates: DateRange
    guests: int
    total_price: int
    includes_add_on: bool = False
    status: ReservationStatus = ReservationStatus.PENDING
    confirmation_code: str = ''
    payment_instructions: str = ''
    frozen_until: datetime | None = None
    calendar_event_id: str | None = None
    cancellation_reason: str = ''
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def check_in(self) -> date:
        return self.dates.check_in

    @property
    def check_out(self) -> date:
        return self.dates.check_out

    @property
    def nights(self) -> int:
        return len(self.dates)

    @property
    def is_active(self) -> bool:
        return self.status.is_active

    def can_transition_to(self, target: ReservationStatus) -> bool:
        return target in ALLOWED_TRANSITIONS[self.status]

    def is_frozen_past(self, now: datetime) -> bool:
        """Check if the freeze window of a pending reservation has elapsed"""
        if self.status is not ReservationStatus.PENDING or self.frozen_until is None:
            return False
        return self.frozen_until <= now

    def _transition(self, target: ReservationStatus) -> ReservationStatus:
        if not self.can_transition_to(target):
            raise InvalidStateError(self.id, self.status.value, target.value)
        previous = self.status
        self.status = target
        return previous

    def confirm(self, unit: Unit):
        """
        Confirm reservation (PENDING -> CONFIRMED)

        Events: ReservationConfirmed
        """
        from apps.reservations.domain.events import ReservationConfirmed

        self._transition(ReservationStatus.CONFIRMED)
        self.add_event(ReservationConfirmed(aggregate_id=self.id, reservation=self, unit=unit))

    def cancel(self, unit: Unit, reason: str = ''):
        """
        Cancel reservation (PENDING or CONFIRMED -> CANCELLED)

        Events: ReservationCancelled
        """
        from apps.reservations.domain.events import ReservationCancelled

        old_status = self._transition(ReservationStatus.CANCELLED)
        self.cancellation_reason = reason
        self.add_event(ReservationCancelled(
            aggregate_id=self.id,
            reservation=self,
            unit=unit,
            old_status=old_status.value,
        ))

    def expire(self, unit: Unit):
        """
        Expire reservation (PENDING -> EXPIRED)

        Events: ReservationExpired
        """
        from apps.reservations.domain.events import ReservationExpired

        self._transition(ReservationStatus.EXPIRED)
        self.add_event(ReservationExpired(aggregate_id=self.id, reservation=self, unit=unit))

    def __str__(self):
        return f"Reservation {self.confirmation_code} ({self.status.value})"

    def __repr__(self):
        return (
            f"Reservation(id={self.id}, code={self.confirmation_code}, "
            f"unit_id={self.unit_id}, status={self.status.value}, dates={self.dates!r})"
        )
