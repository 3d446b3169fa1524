"""
Availability Checker

Answers whether a cabin is free for a stay. Only PENDING and CONFIRMED
reservations block dates; the check is scoped to one cabin.

Overlap rule: existing.check_in < new.check_out AND existing.check_out > new.check_in
A check-out and a check-in on the same day do not conflict.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List
import logging

from shared.domain.value_objects import DateRange

from apps.reservations.domain.entities import Reservation, Unit
from apps.reservations.domain.errors import InvalidRangeError
from apps.reservations.domain.pricing import PriceQuote, price_quote

logger = logging.getLogger(__name__)


@dataclass
class UnitAvailability:
    """One cabin's answer for a requested range"""
    unit: Unit
    is_available: bool
    quote: PriceQuote
    blocked: List[DateRange] = field(default_factory=list)


class AvailabilityChecker:
    def __init__(self, repository):
        self.repository = repository

    def conflicting_reservations(
        self,
        unit_id: int,
        check_in: date,
        check_out: date,
        exclude_reservation_id: int | None = None,
    ) -> List[Reservation]:
        """
        Active reservations of the cabin overlapping the requested stay

        Raises:
            InvalidRangeError: If check_out is not after check_in
        """
        if check_in >= check_out:
            raise InvalidRangeError(check_in, check_out)
        requested = DateRange(check_in, check_out)

        candidates = self.repository.list_active_reservations(
            unit_id, requested, exclude_reservation_id=exclude_reservation_id
        )
        # Storage already filters; re-apply the rule so every backend agrees
        return [
            reservation for reservation in candidates
            if reservation.is_active
            and reservation.unit_id == unit_id
            and reservation.id != exclude_reservation_id
            and reservation.dates.overlaps_with(requested)
        ]

    def is_available(
        self,
        unit_id: int,
        check_in: date,
        check_out: date,
        exclude_reservation_id: int | None = None,
    ) -> bool:
        return not self.conflicting_reservations(
            unit_id, check_in, check_out, exclude_reservation_id=exclude_reservation_id
        )

    def availability_for_range(self, check_in: date, check_out: date) -> List[UnitAvailability]:
        """Availability and price of every active cabin for one stay"""
        results = []
        for unit in self.repository.list_units(active_only=True):
            conflicts = self.conflicting_reservations(unit.id, check_in, check_out)
            results.append(UnitAvailability(
                unit=unit,
                is_available=not conflicts,
                quote=price_quote(unit, check_in, check_out),
                blocked=[reservation.dates for reservation in conflicts],
            ))
        logger.debug(
            f"Availability {check_in} - {check_out}: "
            f"{sum(1 for r in results if r.is_available)}/{len(results)} cabins free"
        )
        return results
