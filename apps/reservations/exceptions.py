"""Translation of reservation domain errors into API responses."""

from __future__ import annotations

import logging

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from .domain.errors import (
    ConflictError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _range_payload(dates) -> dict[str, str]:
    return {"check_in": dates.check_in.isoformat(), "check_out": dates.check_out.isoformat()}


def reservation_exception_handler(exc, context):  # type: ignore
    """
    DRF exception handler aware of the reservation domain errors.

    - ValidationError -> 400 with every invalid field
    - NotFoundError -> 404
    - ConflictError -> 409 with the blocking date ranges
    - InvalidStateError -> 409 with the current and attempted status
    Anything else falls through to the default DRF handler.
    """
    if isinstance(exc, ValidationError):
        return Response(
            {"detail": "Datos de reserva inválidos.", "errors": exc.errors},
            status=status.HTTP_400_BAD_REQUEST,
        )
    if isinstance(exc, NotFoundError):
        return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
    if isinstance(exc, ConflictError):
        return Response(
            {
                "detail": "Las fechas solicitadas no están disponibles.",
                "requested": _range_payload(exc.requested),
                "conflicts": [_range_payload(dates) for dates in exc.conflicts],
            },
            status=status.HTTP_409_CONFLICT,
        )
    if isinstance(exc, InvalidStateError):
        logger.info(f"Rejected transition: {exc}")
        return Response(
            {
                "detail": str(exc),
                "current_status": exc.current,
                "attempted_status": exc.attempted,
            },
            status=status.HTTP_409_CONFLICT,
        )
    return exception_handler(exc, context)
