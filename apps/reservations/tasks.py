"""Celery tasks for the reservation domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from .services import get_expiry_sweeper

logger = logging.getLogger(__name__)


# ============================================================================
# PERIODIC TASKS (Celery Beat, see config/celery.py)
# ============================================================================

@shared_task(name="reservations.expire_pending_reservations")
def expire_pending_reservations() -> dict[str, int]:
    """
    Expire PENDING reservations whose freeze window has elapsed.

    Runs every minute through Celery Beat. Overlapping runs are harmless:
    a reservation that is no longer PENDING is skipped.

    Returns:
        dict: {"expired": ..., "skipped": ..., "failed": ...}
    """
    counts = get_expiry_sweeper().sweep()
    if counts["failed"]:
        logger.warning(f"Expiry sweep finished with {counts['failed']} failure(s)")
    return counts
