"""
Reservation Lifecycle

Use cases of the reservation core. Each operation reads, decides and writes
through the repository; atomicity of the write path belongs to storage.

Operations:
- create_reservation: validate, check availability, price, persist as PENDING
- confirm_reservation: PENDING -> CONFIRMED (administrator)
- cancel_reservation: PENDING/CONFIRMED -> CANCELLED
- expire_reservation: PENDING -> EXPIRED (sweeper), silent no-op otherwise

Notification and calendar collaborators are best-effort: their failures are
logged and never change the outcome of an operation.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable, List
import logging
import secrets

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.utils import timezone

from shared.domain.value_objects import DateRange

from apps.reservations.application.availability import AvailabilityChecker
from apps.reservations.application.policy import ReservationPolicy
from apps.reservations.domain.entities import Reservation, ReservationStatus, Unit
from apps.reservations.domain.errors import (
    ConflictError,
    InvalidStateError,
    NotFoundError,
    ReservationError,
    ValidationError,
)
from apps.reservations.domain.events import ReservationCreated
from apps.reservations.domain.pricing import PriceQuote, price_quote

logger = logging.getLogger(__name__)


class ReservationLifecycle:
    """
    Reservation state machine driver

    Collaborators are injected once and shared by every call:
        repository: storage capability (see apps.reservations.repository)
        notifier: object with publish_events(events), usually the message bus
        calendar: optional gateway with create_event(reservation, unit)
        policy: ReservationPolicy
        clock: callable returning an aware datetime
    """

    def __init__(self, repository, notifier, calendar=None,
                 policy: ReservationPolicy | None = None,
                 clock: Callable[[], datetime] | None = None):
        self.repository = repository
        self.notifier = notifier
        self.calendar = calendar
        self.policy = policy or ReservationPolicy()
        self.clock = clock or timezone.now
        self.availability = AvailabilityChecker(repository)

    # ===== Queries =====

    def get_unit(self, unit_id: int, active_only: bool = True) -> Unit:
        unit = self.repository.get_unit(unit_id)
        if unit is None or (active_only and not unit.is_active):
            raise NotFoundError('Cabin', unit_id)
        return unit

    def get_reservation(self, reservation_id: int) -> Reservation:
        reservation = self.repository.get_reservation(reservation_id)
        if reservation is None:
            raise NotFoundError('Reservation', reservation_id)
        return reservation

    def get_by_confirmation_code(self, code: str) -> Reservation:
        normalized = (code or '').strip().upper()
        reservation = self.repository.get_by_confirmation_code(normalized) if normalized else None
        if reservation is None:
            raise NotFoundError('Reservation', code)
        return reservation

    def price_quote(self, unit_id: int, check_in: date, check_out: date) -> PriceQuote:
        return price_quote(self.get_unit(unit_id), check_in, check_out)

    def is_available(self, unit_id: int, check_in: date, check_out: date,
                     exclude_reservation_id: int | None = None) -> bool:
        return self.availability.is_available(
            unit_id, check_in, check_out, exclude_reservation_id=exclude_reservation_id
        )

    # ===== Commands =====

    def create_reservation(
        self,
        unit_id: int,
        guest_name: str,
        guest_email: str,
        check_in: date,
        check_out: date,
        guests: int,
        add_on_requested: bool = False,
    ) -> Reservation:
        """
        Create a PENDING reservation frozen for the policy's freeze window

        Raises:
            ValidationError: Listing every invalid field
            NotFoundError: Cabin unknown or inactive
            ConflictError: Dates overlap an active reservation of the cabin
        """
        logger.info(
            f"Creating reservation for cabin {unit_id}, "
            f"guest {guest_email}, dates {check_in} - {check_out}"
        )

        unit = self.repository.get_unit(unit_id)
        now = self.clock()

        errors = self._validate(unit, guest_name, guest_email, check_in, check_out, guests, now)
        if errors:
            raise ValidationError(errors)

        if unit is None or not unit.is_active:
            raise NotFoundError('Cabin', unit_id)

        dates = DateRange(check_in, check_out)
        conflicts = self.availability.conflicting_reservations(unit.id, check_in, check_out)
        if conflicts:
            raise ConflictError(unit.id, dates, [r.dates for r in conflicts])

        quote = price_quote(unit, check_in, check_out)
        if add_on_requested:
            quote = quote.with_add_on(self.policy.add_on_surcharge)

        code = self._generate_confirmation_code()

        reservation = Reservation(
            unit_id=unit.id,
            guest_name=guest_name.strip(),
            guest_email=guest_email.strip().lower(),
            dates=dates,
            guests=guests,
            total_price=quote.total_price,
            includes_add_on=quote.includes_add_on,
            status=ReservationStatus.PENDING,
            confirmation_code=code,
            payment_instructions=self.policy.payment_instructions(quote.total_price, code),
            frozen_until=now + self.policy.freeze_duration,
        )

        # Re-checks overlap atomically; the loser of a race gets ConflictError
        reservation = self.repository.insert_reservation(reservation)

        reservation.add_event(ReservationCreated(
            aggregate_id=reservation.id,
            reservation=reservation,
            unit=unit,
        ))
        self._publish(reservation)

        logger.info(
            f"Reservation created: {reservation.confirmation_code} (ID: {reservation.id}), "
            f"total {reservation.total_price}, frozen until {reservation.frozen_until}"
        )
        return reservation

    def confirm_reservation(self, reservation_id: int, attach_calendar: bool = True) -> Reservation:
        """
        Confirm a PENDING reservation

        Raises:
            NotFoundError: Unknown reservation
            InvalidStateError: Not PENDING, or another transition landed first
        """
        logger.info(f"Confirming reservation {reservation_id}")

        reservation = self.get_reservation(reservation_id)
        unit = self.get_unit(reservation.unit_id, active_only=False)
        previous = reservation.status

        reservation.confirm(unit)
        if not self._write_status(reservation, previous):
            current = self.repository.get_reservation(reservation_id)
            raise InvalidStateError(
                reservation_id,
                current.status.value if current else 'deleted',
                ReservationStatus.CONFIRMED.value,
            )

        if attach_calendar:
            self._attach_calendar_event(reservation, unit)

        self._publish(reservation)
        logger.info(f"Reservation {reservation.confirmation_code} confirmed")
        return reservation

    def cancel_reservation(self, reservation_id: int, reason: str = '') -> Reservation:
        """
        Cancel a PENDING or CONFIRMED reservation

        Raises:
            NotFoundError: Unknown reservation
            InvalidStateError: Already CANCELLED or EXPIRED
        """
        logger.info(f"Cancelling reservation {reservation_id}, reason: {reason or '-'}")

        reservation = self.get_reservation(reservation_id)
        unit = self.get_unit(reservation.unit_id, active_only=False)
        previous = reservation.status

        reservation.cancel(unit, reason)
        if not self._write_status(reservation, previous, cancellation_reason=reason):
            current = self.repository.get_reservation(reservation_id)
            raise InvalidStateError(
                reservation_id,
                current.status.value if current else 'deleted',
                ReservationStatus.CANCELLED.value,
            )

        self._publish(reservation)
        logger.info(f"Reservation {reservation.confirmation_code} cancelled")
        return reservation

    def expire_reservation(self, reservation_id: int) -> Reservation | None:
        """
        Expire a PENDING reservation

        Returns the expired reservation, or None when there was nothing to do:
        the reservation is gone, no longer PENDING, or a confirmation or
        cancellation landed between the read and the write. None is not an
        error; whichever transition is written first wins.
        """
        reservation = self.repository.get_reservation(reservation_id)
        if reservation is None:
            logger.warning(f"Reservation {reservation_id} vanished before it could expire")
            return None
        if reservation.status is not ReservationStatus.PENDING:
            logger.debug(
                f"Reservation {reservation_id} is {reservation.status.value}, nothing to expire"
            )
            return None

        unit = self.get_unit(reservation.unit_id, active_only=False)
        reservation.expire(unit)
        if not self._write_status(reservation, ReservationStatus.PENDING):
            reservation.clear_events()
            logger.info(f"Reservation {reservation_id} changed status concurrently, expiry skipped")
            return None

        self._publish(reservation)
        logger.info(f"Reservation {reservation.confirmation_code} expired")
        return reservation

    # ===== Internals =====

    def _validate(self, unit: Unit | None, guest_name, guest_email, check_in, check_out,
                  guests, now: datetime) -> dict[str, List[str]]:
        errors: dict[str, List[str]] = {}

        name = (guest_name or '').strip()
        if len(name) < self.policy.min_guest_name_length:
            errors.setdefault('guest_name', []).append(
                f"Name must have at least {self.policy.min_guest_name_length} characters"
            )

        try:
            validate_email((guest_email or '').strip())
        except DjangoValidationError:
            errors.setdefault('guest_email', []).append("Enter a valid email address")

        max_guests = self.policy.max_guests
        if unit is not None and unit.max_guests:
            max_guests = unit.max_guests
        if not isinstance(guests, int) or isinstance(guests, bool):
            errors.setdefault('guests', []).append("Guests must be a whole number")
        elif guests < 1:
            errors.setdefault('guests', []).append("At least 1 guest is required")
        elif guests > max_guests:
            errors.setdefault('guests', []).append(f"At most {max_guests} guests are allowed")

        if check_in is None or check_out is None:
            errors.setdefault('check_in', []).append("Check-in and check-out dates are required")
        else:
            if check_in >= check_out:
                errors.setdefault('check_out', []).append("Check-out must be after check-in")
            if not self.policy.allow_past_check_in and check_in < timezone.localdate(now):
                errors.setdefault('check_in', []).append("Check-in cannot be in the past")

        return errors

    def _generate_confirmation_code(self) -> str:
        alphabet = self.policy.code_alphabet
        for _ in range(self.policy.max_code_attempts):
            code = ''.join(secrets.choice(alphabet) for _ in range(self.policy.code_length))
            if not self.repository.confirmation_code_exists(code):
                return code
            logger.warning(f"Confirmation code collision on {code}, regenerating")
        raise ReservationError(
            f"Could not generate a unique confirmation code in "
            f"{self.policy.max_code_attempts} attempts"
        )

    def _write_status(self, reservation: Reservation, expected: ReservationStatus, **extra) -> bool:
        applied = self.repository.update_status(
            reservation.id,
            reservation.status,
            expected_status=expected,
            **extra,
        )
        if applied:
            reservation.updated_at = self.clock()
        else:
            reservation.clear_events()
        return applied

    def _attach_calendar_event(self, reservation: Reservation, unit: Unit):
        if self.calendar is None:
            return
        try:
            event_id = self.calendar.create_event(reservation, unit)
            if event_id:
                self.repository.set_calendar_event(reservation.id, event_id)
                reservation.calendar_event_id = event_id
        except Exception as e:
            logger.error(
                f"Calendar event for reservation {reservation.confirmation_code} failed: {e}",
                exc_info=True,
            )

    def _publish(self, reservation: Reservation):
        events = reservation.pull_events()
        if not events:
            return
        try:
            self.notifier.publish_events(events)
        except Exception as e:
            logger.error(
                f"Publishing {len(events)} events for reservation "
                f"{reservation.confirmation_code} failed: {e}",
                exc_info=True,
            )
