"""
Reservation event handlers

Subscribed to the shared message bus at app start. A handler that raises
is logged by the bus and does not affect the other handlers or the
operation that published the event.
"""

from __future__ import annotations

import logging

from shared.application.message_bus import message_bus

from apps.reservations.domain.events import (
    ReservationCancelled,
    ReservationConfirmed,
    ReservationCreated,
    ReservationExpired,
)

from . import services

logger = logging.getLogger(__name__)


def notify_guest_reservation_received(event: ReservationCreated):
    services.send_reservation_received_email(event.reservation, event.unit)


def notify_owner_new_reservation(event: ReservationCreated):
    services.send_new_reservation_to_owner_email(event.reservation, event.unit)


def notify_guest_reservation_confirmed(event: ReservationConfirmed):
    services.send_reservation_confirmed_email(event.reservation, event.unit)


def notify_guest_reservation_expired(event: ReservationExpired):
    services.send_reservation_expired_email(event.reservation, event.unit)


def log_reservation_cancelled(event: ReservationCancelled):
    reservation = event.reservation
    logger.info(
        f"Reservation {reservation.confirmation_code} cancelled "
        f"(was {event.old_status}), reason: {reservation.cancellation_reason or '-'}"
    )


def register_handlers(bus=message_bus):
    bus.register_event_handler(ReservationCreated, notify_guest_reservation_received)
    bus.register_event_handler(ReservationCreated, notify_owner_new_reservation)
    bus.register_event_handler(ReservationConfirmed, notify_guest_reservation_confirmed)
    bus.register_event_handler(ReservationExpired, notify_guest_reservation_expired)
    bus.register_event_handler(ReservationCancelled, log_reservation_cancelled)
