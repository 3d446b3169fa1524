"""Wiring of the reservation core for the running Django project."""

from __future__ import annotations

from functools import lru_cache

from shared.application.message_bus import message_bus

from .application.lifecycle import ReservationLifecycle
from .application.policy import ReservationPolicy
from .application.sweeper import ExpirySweeper
from .calendar import load_calendar_gateway
from .repository import DjangoReservationRepository


@lru_cache(maxsize=1)
def get_reservation_lifecycle() -> ReservationLifecycle:
    """Process-wide lifecycle bound to the database and the message bus."""

    return ReservationLifecycle(
        repository=DjangoReservationRepository(),
        notifier=message_bus,
        calendar=load_calendar_gateway(),
        policy=ReservationPolicy.from_settings(),
    )


def get_expiry_sweeper() -> ExpirySweeper:
    return ExpirySweeper(get_reservation_lifecycle())
