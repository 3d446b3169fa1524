"""
Reservation Domain Errors

Every failure a lifecycle or query operation can surface to its caller:
- ValidationError: bad input, lists every violated field
- InvalidRangeError: check-out not after check-in
- NotFoundError: unknown or inactive cabin, unknown reservation
- ConflictError: requested dates overlap active reservations
- InvalidStateError: illegal status transition requested by a person

NotificationFailure is raised by delivery collaborators only. The lifecycle
catches and logs it; it never reaches the caller of a lifecycle operation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Mapping

if TYPE_CHECKING:  # pragma: no cover
    from shared.domain.value_objects import DateRange


class ReservationError(Exception):
    """Base class for errors surfaced by the reservation core."""


class ValidationError(ReservationError):
    """Input failed validation; ``errors`` maps field name to messages."""

    def __init__(self, errors: Mapping[str, Iterable[str]]):
        self.errors = {field: list(messages) for field, messages in errors.items()}
        summary = "; ".join(
            f"{field}: {', '.join(messages)}" for field, messages in self.errors.items()
        )
        super().__init__(f"Invalid reservation data ({summary})")


class InvalidRangeError(ValidationError):
    def __init__(self, check_in, check_out):
        self.check_in = check_in
        self.check_out = check_out
        super().__init__(
            {"check_out": [f"Check-out ({check_out}) must be after check-in ({check_in})"]}
        )


class NotFoundError(ReservationError):
    def __init__(self, kind: str, identifier):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} {identifier} not found")


class ConflictError(ReservationError):
    """Dates are taken; ``conflicts`` holds the blocking ranges."""

    def __init__(self, unit_id: int, requested: "DateRange", conflicts: Iterable["DateRange"]):
        self.unit_id = unit_id
        self.requested = requested
        self.conflicts = list(conflicts)
        taken = ", ".join(str(dates) for dates in self.conflicts) or "unknown range"
        super().__init__(
            f"Dates {requested} are not available for cabin {unit_id} (taken: {taken})"
        )


class InvalidStateError(ReservationError):
    def __init__(self, reservation_id, current: str, attempted: str):
        self.reservation_id = reservation_id
        self.current = current
        self.attempted = attempted
        super().__init__(
            f"Reservation {reservation_id} cannot move from {current} to {attempted}"
        )


class NotificationFailure(ReservationError):
    """Email or calendar delivery failed. Logged, never propagated."""
