"""
Common Value Objects

- DateRange: A stay from check-in (inclusive) to check-out (exclusive)
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator

from shared.domain.base import ValueObject


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents a stay from check_in (inclusive) to check_out (exclusive).
    Used for reservations and availability queries, never persisted on its own.
    """
    check_in: date
    check_out: date

    def __post_init__(self):
        if self.check_in >= self.check_out:
            raise ValueError(f"Check-in ({self.check_in}) must be before check-out ({self.check_out})")

    def overlaps_with(self, other: 'DateRange') -> bool:
        """
        Check if this range overlaps with another

        check_out is exclusive, so a stay ending on the day another
        one starts does not overlap (same-day turnover).

        Examples:
            - DateRange(25, 28) overlaps with DateRange(27, 30) -> True
            - DateRange(25, 28) overlaps with DateRange(28, 31) -> False (adjacent)
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check overlap with another DateRange")

        return (self.check_in < other.check_out and
                self.check_out > other.check_in)

    def contains(self, check_date: date) -> bool:
        """Check-in is inclusive, check-out is exclusive"""
        return self.check_in <= check_date < self.check_out

    def nights(self) -> Iterator[date]:
        """Yield the date each night of the stay starts on"""
        night = self.check_in
        while night < self.check_out:
            yield night
            night += timedelta(days=1)

    def __len__(self) -> int:
        """Number of nights"""
        return (self.check_out - self.check_in).days

    def __str__(self):
        return f"{self.check_in.isoformat()} - {self.check_out.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.check_in}, {self.check_out})"
