"""Tests for date ranges and the availability checker."""

from __future__ import annotations

from datetime import date

import pytest

from shared.domain.value_objects import DateRange

from apps.reservations.application.availability import AvailabilityChecker
from apps.reservations.domain.entities import Reservation, ReservationStatus, Unit
from apps.reservations.domain.errors import InvalidRangeError
from apps.reservations.repository import InMemoryReservationRepository


def test_date_range_rejects_empty_or_reversed():
    with pytest.raises(ValueError):
        DateRange(date(2025, 6, 20), date(2025, 6, 20))
    with pytest.raises(ValueError):
        DateRange(date(2025, 6, 21), date(2025, 6, 20))


def test_date_range_nights_and_overlap():
    stay = DateRange(date(2025, 6, 25), date(2025, 6, 28))

    assert len(stay) == 3
    assert list(stay.nights()) == [date(2025, 6, 25), date(2025, 6, 26), date(2025, 6, 27)]
    assert stay.contains(date(2025, 6, 25))
    assert not stay.contains(date(2025, 6, 28))
    assert stay.overlaps_with(DateRange(date(2025, 6, 27), date(2025, 6, 30)))
    assert stay.overlaps_with(DateRange(date(2025, 6, 26), date(2025, 6, 27)))
    assert not stay.overlaps_with(DateRange(date(2025, 6, 28), date(2025, 7, 1)))
    assert not stay.overlaps_with(DateRange(date(2025, 6, 20), date(2025, 6, 25)))
    assert str(stay) == "2025-06-25 - 2025-06-28"


def _reservation(unit_id, check_in, check_out, status=ReservationStatus.CONFIRMED, code="ABCDEFGH"):
    return Reservation(
        unit_id=unit_id,
        guest_name="Ana",
        guest_email="ana@example.com",
        dates=DateRange(check_in, check_out),
        guests=2,
        total_price=1,
        status=status,
        confirmation_code=code,
    )


@pytest.fixture
def repository():
    repo = InMemoryReservationRepository([
        Unit(id=1, name="Cielo", weekday_price=200000, weekend_price=390000),
        Unit(id=2, name="Eclipse", weekday_price=200000, weekend_price=390000),
        Unit(id=3, name="Aurora", weekday_price=200000, weekend_price=390000, is_active=False),
    ])
    repo.insert_reservation(_reservation(1, date(2025, 7, 10), date(2025, 7, 13), code="CONF2345"))
    return repo


def test_overlapping_dates_conflict(repository):
    checker = AvailabilityChecker(repository)

    assert not checker.is_available(1, date(2025, 7, 12), date(2025, 7, 15))
    assert not checker.is_available(1, date(2025, 7, 8), date(2025, 7, 11))
    assert not checker.is_available(1, date(2025, 7, 10), date(2025, 7, 13))
    conflicts = checker.conflicting_reservations(1, date(2025, 7, 11), date(2025, 7, 12))
    assert [c.confirmation_code for c in conflicts] == ["CONF2345"]


def test_same_day_turnover_is_available(repository):
    checker = AvailabilityChecker(repository)

    assert checker.is_available(1, date(2025, 7, 13), date(2025, 7, 15))
    assert checker.is_available(1, date(2025, 7, 7), date(2025, 7, 10))


def test_other_unit_is_not_blocked(repository):
    assert AvailabilityChecker(repository).is_available(2, date(2025, 7, 10), date(2025, 7, 13))


@pytest.mark.parametrize("status", [ReservationStatus.CANCELLED, ReservationStatus.EXPIRED])
def test_inactive_reservations_do_not_block(status):
    repo = InMemoryReservationRepository([Unit(id=1, name="Cielo", weekday_price=1, weekend_price=2)])
    created = repo.insert_reservation(_reservation(1, date(2025, 7, 10), date(2025, 7, 13)))
    repo.update_status(created.id, status)

    assert AvailabilityChecker(repo).is_available(1, date(2025, 7, 10), date(2025, 7, 13))


def test_pending_reservation_blocks():
    repo = InMemoryReservationRepository([Unit(id=1, name="Cielo", weekday_price=1, weekend_price=2)])
    repo.insert_reservation(_reservation(1, date(2025, 7, 10), date(2025, 7, 13),
                                         status=ReservationStatus.PENDING))

    assert not AvailabilityChecker(repo).is_available(1, date(2025, 7, 11), date(2025, 7, 12))


def test_exclude_reservation_being_reevaluated(repository):
    existing = repository.get_by_confirmation_code("CONF2345")
    checker = AvailabilityChecker(repository)

    assert checker.is_available(1, date(2025, 7, 10), date(2025, 7, 13),
                                exclude_reservation_id=existing.id)


def test_invalid_range_raises(repository):
    with pytest.raises(InvalidRangeError):
        AvailabilityChecker(repository).is_available(1, date(2025, 7, 13), date(2025, 7, 13))


def test_availability_for_range_lists_active_units(repository):
    results = AvailabilityChecker(repository).availability_for_range(date(2025, 7, 11), date(2025, 7, 12))

    by_name = {result.unit.name: result for result in results}
    assert set(by_name) == {"Cielo", "Eclipse"}
    assert by_name["Cielo"].is_available is False
    assert by_name["Cielo"].blocked == [DateRange(date(2025, 7, 10), date(2025, 7, 13))]
    assert by_name["Eclipse"].is_available is True
    assert by_name["Eclipse"].quote.total_price == 390000  # Friday night
