"""
Pricing Engine

Three-tier nightly pricing for a cabin stay:
- Weekday nights use the cabin's weekday price
- Friday and Saturday nights use the weekend price
- The night before a public holiday also uses the weekend price

Weekend pricing bundles the complimentary add-on (grill kit). Prices are
whole currency units; totals are exact integer sums.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, timedelta
from enum import Enum
from typing import Callable, Iterator, Protocol

from shared.domain.value_objects import DateRange

from apps.reservations.domain.errors import InvalidRangeError
from apps.reservations.domain.holidays import is_holiday

FRIDAY = 4
SATURDAY = 5


class PriceTier(Enum):
    WEEKDAY = 'weekday'
    WEEKEND = 'weekend'


class PricedUnit(Protocol):
    weekday_price: int
    weekend_price: int


@dataclass(frozen=True)
class NightlyRate:
    """Price of one night, keyed by the date the night starts on"""
    night: date
    tier: PriceTier
    price: int

    @property
    def is_weekend(self) -> bool:
        return self.tier is PriceTier.WEEKEND


def night_tier(night: date, holiday_check: Callable[[date], bool] = is_holiday) -> PriceTier:
    """
    Classify a night

    Friday and Saturday nights are weekend-priced, and so is any night whose
    next calendar day is a holiday. The holiday night itself is not.
    """
    if night.weekday() in (FRIDAY, SATURDAY):
        return PriceTier.WEEKEND
    if holiday_check(night + timedelta(days=1)):
        return PriceTier.WEEKEND
    return PriceTier.WEEKDAY


class NightlyBreakdown:
    """
    Lazy per-night records of a stay

    Nothing is computed until iterated, and every iteration starts over,
    so the same breakdown can be displayed and audited more than once.
    """

    def __init__(self, weekday_price: int, weekend_price: int, dates: DateRange,
                 holiday_check: Callable[[date], bool] = is_holiday):
        self._weekday_price = weekday_price
        self._weekend_price = weekend_price
        self._dates = dates
        self._holiday_check = holiday_check

    def __iter__(self) -> Iterator[NightlyRate]:
        for night in self._dates.nights():
            tier = night_tier(night, self._holiday_check)
            price = self._weekend_price if tier is PriceTier.WEEKEND else self._weekday_price
            yield NightlyRate(night=night, tier=tier, price=price)

    def __len__(self) -> int:
        return len(self._dates)

    def __repr__(self):
        return f"NightlyBreakdown({self._dates!r})"


@dataclass(frozen=True)
class PriceQuote:
    dates: DateRange
    total_price: int
    includes_add_on: bool
    nightly_breakdown: NightlyBreakdown
    add_on_surcharge: int = 0

    @property
    def nights(self) -> int:
        return len(self.dates)

    @property
    def weekend_nights(self) -> int:
        return sum(1 for rate in self.nightly_breakdown if rate.is_weekend)

    def with_add_on(self, surcharge_per_night: int) -> 'PriceQuote':
        """
        Caller-side opt-in for the add-on on a weekday-only stay

        Adds a fixed surcharge for every night. A quote that already
        includes the add-on is returned unchanged.
        """
        if self.includes_add_on:
            return self
        if surcharge_per_night < 0:
            raise ValueError("Add-on surcharge cannot be negative")
        surcharge = surcharge_per_night * self.nights
        return replace(
            self,
            total_price=self.total_price + surcharge,
            includes_add_on=True,
            add_on_surcharge=surcharge,
        )


def price_quote(unit: PricedUnit, check_in: date, check_out: date,
                holiday_check: Callable[[date], bool] = is_holiday) -> PriceQuote:
    """
    Quote a stay for a cabin

    Raises:
        InvalidRangeError: If check_out is not after check_in
    """
    if check_in >= check_out:
        raise InvalidRangeError(check_in, check_out)

    dates = DateRange(check_in, check_out)
    breakdown = NightlyBreakdown(unit.weekday_price, unit.weekend_price, dates, holiday_check)

    total_price = 0
    includes_add_on = False
    for rate in breakdown:
        total_price += rate.price
        if rate.is_weekend:
            includes_add_on = True

    return PriceQuote(
        dates=dates,
        total_price=total_price,
        includes_add_on=includes_add_on,
        nightly_breakdown=breakdown,
    )
