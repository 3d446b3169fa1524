"""Expiry sweeper: moves PENDING reservations past their freeze window to EXPIRED."""

from __future__ import annotations

from datetime import datetime
from typing import Callable
import logging

from django.utils import timezone

logger = logging.getLogger(__name__)


class ExpirySweeper:
    """
    One sweep = one pass over overdue PENDING reservations

    Safe to run concurrently with administrator actions and with itself:
    expire_reservation is a no-op for anything no longer PENDING.
    """

    def __init__(self, lifecycle, repository=None, clock: Callable[[], datetime] | None = None):
        self.lifecycle = lifecycle
        self.repository = repository or lifecycle.repository
        self.clock = clock or lifecycle.clock or timezone.now

    def sweep(self) -> dict[str, int]:
        now = self.clock()
        overdue = self.repository.list_pending_expired(now)
        counts = {"expired": 0, "skipped": 0, "failed": 0}

        for reservation in overdue:
            try:
                if self.lifecycle.expire_reservation(reservation.id) is None:
                    counts["skipped"] += 1
                else:
                    counts["expired"] += 1
            except Exception as e:
                counts["failed"] += 1
                logger.error(f"Error expiring reservation {reservation.id}: {e}", exc_info=True)

        if overdue:
            logger.info(
                f"Expiry sweep at {now.isoformat()}: {counts['expired']} expired, "
                f"{counts['skipped']} skipped, {counts['failed']} failed"
            )
        return counts
