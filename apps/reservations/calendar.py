"""External calendar gateways for confirmed reservations."""

from __future__ import annotations

from typing import TYPE_CHECKING
import logging

from django.conf import settings
from django.utils.module_loading import import_string

if TYPE_CHECKING:  # pragma: no cover
    from apps.reservations.domain.entities import Reservation, Unit

logger = logging.getLogger(__name__)

DEFAULT_GATEWAY = 'apps.reservations.calendar.LoggingCalendarGateway'


class CalendarGateway:
    """Pushes a confirmed stay to an external calendar, returns its event id."""

    def create_event(self, reservation: "Reservation", unit: "Unit") -> str | None:
        raise NotImplementedError


class LoggingCalendarGateway(CalendarGateway):
    """Default gateway: no external calendar configured, only log the stay."""

    def create_event(self, reservation: "Reservation", unit: "Unit") -> str | None:
        logger.info(
            f"[CALENDAR] {unit.name}: {reservation.guest_name} "
            f"{reservation.check_in.isoformat()} - {reservation.check_out.isoformat()} "
            f"({reservation.confirmation_code})"
        )
        return None


def load_calendar_gateway() -> CalendarGateway | None:
    """Instantiate the gateway named by RESERVATIONS['CALENDAR_GATEWAY'] (None disables)."""
    config = getattr(settings, 'RESERVATIONS', {})
    path = config.get('CALENDAR_GATEWAY', DEFAULT_GATEWAY)
    if not path:
        return None
    return import_string(path)()
