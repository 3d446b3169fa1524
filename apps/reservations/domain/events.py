"""
Reservation Domain Events

Published through the message bus once the status change they describe has
been written. Notification delivery hangs off these events.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from shared.domain.base import DomainEvent

if TYPE_CHECKING:  # pragma: no cover
    from apps.reservations.domain.entities import Reservation, Unit


@dataclass
class ReservationCreated(DomainEvent):
    """
    Event: A reservation was created and is frozen awaiting payment

    Triggers:
    - Email the guest the confirmation code and payment instructions
    - Email the owner about the new pending reservation
    """
    reservation: 'Reservation'
    unit: 'Unit'


@dataclass
class ReservationConfirmed(DomainEvent):
    """
    Event: Payment was verified by an administrator (PENDING -> CONFIRMED)

    Triggers:
    - Email the guest the final confirmation
    """
    reservation: 'Reservation'
    unit: 'Unit'


@dataclass
class ReservationCancelled(DomainEvent):
    """Event: Reservation was cancelled from PENDING or CONFIRMED"""
    reservation: 'Reservation'
    unit: 'Unit'
    old_status: str


@dataclass
class ReservationExpired(DomainEvent):
    """
    Event: Freeze window elapsed without payment (PENDING -> EXPIRED)

    Triggers:
    - Email the guest that the dates were released
    """
    reservation: 'Reservation'
    unit: 'Unit'
