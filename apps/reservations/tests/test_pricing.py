"""Tests for the nightly pricing engine."""

from __future__ import annotations

from datetime import date

import pytest

from apps.reservations.domain.entities import Unit
from apps.reservations.domain.errors import InvalidRangeError, ValidationError
from apps.reservations.domain.pricing import PriceTier, night_tier, price_quote

CIELO = Unit(id=1, name="Cielo", weekday_price=200000, weekend_price=390000)


def test_friday_to_sunday_is_weekend_priced():
    quote = price_quote(CIELO, date(2025, 6, 20), date(2025, 6, 22))

    assert quote.total_price == 780000
    assert quote.includes_add_on is True
    assert quote.nights == 2
    assert quote.weekend_nights == 2


def test_plain_weekday_night():
    # June 23 2025 is itself a holiday, but only its eve is weekend-priced
    quote = price_quote(CIELO, date(2025, 6, 23), date(2025, 6, 24))

    assert quote.total_price == 200000
    assert quote.includes_add_on is False
    assert [rate.tier for rate in quote.nightly_breakdown] == [PriceTier.WEEKDAY]


def test_holiday_eve_is_weekend_priced():
    # July 19 2023 is a Wednesday, July 20 is Independence Day
    quote = price_quote(CIELO, date(2023, 7, 19), date(2023, 7, 20))

    assert quote.total_price == 390000
    assert quote.includes_add_on is True


def test_holiday_night_itself_uses_regular_tier():
    # Thursday July 20 2023 -> Friday July 21, not a holiday
    quote = price_quote(CIELO, date(2023, 7, 20), date(2023, 7, 21))
    assert quote.total_price == 200000


def test_sunday_before_monday_holiday():
    assert night_tier(date(2025, 6, 22)) is PriceTier.WEEKEND
    assert night_tier(date(2025, 6, 15)) is PriceTier.WEEKDAY


def test_mixed_week_total_is_sum_of_breakdown():
    quote = price_quote(CIELO, date(2025, 9, 1), date(2025, 9, 8))
    breakdown = list(quote.nightly_breakdown)

    assert len(breakdown) == 7
    assert quote.total_price == sum(rate.price for rate in breakdown)
    assert quote.total_price == 5 * 200000 + 2 * 390000
    assert [rate.night for rate in breakdown][0] == date(2025, 9, 1)
    assert [rate.night for rate in breakdown][-1] == date(2025, 9, 7)


def test_breakdown_is_restartable():
    quote = price_quote(CIELO, date(2025, 12, 20), date(2026, 1, 3))

    first = list(quote.nightly_breakdown)
    second = list(quote.nightly_breakdown)

    assert first == second
    assert len(quote.nightly_breakdown) == 14


def test_injected_holiday_check():
    quote = price_quote(
        CIELO, date(2025, 9, 1), date(2025, 9, 2),
        holiday_check=lambda day: day == date(2025, 9, 2),
    )
    assert quote.total_price == 390000


@pytest.mark.parametrize(
    "check_in, check_out",
    [
        (date(2025, 6, 20), date(2025, 6, 20)),
        (date(2025, 6, 22), date(2025, 6, 20)),
    ],
)
def test_invalid_range(check_in, check_out):
    with pytest.raises(InvalidRangeError) as exc_info:
        price_quote(CIELO, check_in, check_out)

    assert isinstance(exc_info.value, ValidationError)
    assert "check_out" in exc_info.value.errors


def test_add_on_opt_in_on_weekday_stay():
    quote = price_quote(CIELO, date(2025, 9, 1), date(2025, 9, 3))
    with_add_on = quote.with_add_on(30000)

    assert with_add_on.includes_add_on is True
    assert with_add_on.total_price == 400000 + 60000
    assert with_add_on.add_on_surcharge == 60000
    assert quote.total_price == 400000


def test_add_on_opt_in_is_noop_when_already_included():
    quote = price_quote(CIELO, date(2025, 6, 20), date(2025, 6, 22))
    assert quote.with_add_on(30000) is quote


def test_negative_surcharge_rejected():
    quote = price_quote(CIELO, date(2025, 9, 1), date(2025, 9, 3))
    with pytest.raises(ValueError):
        quote.with_add_on(-1)
