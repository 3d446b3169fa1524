"""Tests for the expiry sweeper."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone as dt_timezone

from apps.reservations.application.lifecycle import ReservationLifecycle
from apps.reservations.application.sweeper import ExpirySweeper
from apps.reservations.domain.entities import ReservationStatus, Unit
from apps.reservations.repository import InMemoryReservationRepository
from shared.application.message_bus import MessageBus

CREATED_AT = datetime(2025, 6, 1, 15, 0, tzinfo=dt_timezone.utc)


class Clock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


def _setup():
    repository = InMemoryReservationRepository([
        Unit(id=1, name="Cielo", weekday_price=200000, weekend_price=390000),
        Unit(id=2, name="Eclipse", weekday_price=200000, weekend_price=390000),
    ])
    clock = Clock(CREATED_AT)
    lifecycle = ReservationLifecycle(repository, MessageBus(), clock=clock)
    return repository, clock, lifecycle


def _create(lifecycle, unit_id, check_in):
    return lifecycle.create_reservation(
        unit_id=unit_id,
        guest_name="Luis",
        guest_email="luis@example.com",
        check_in=check_in,
        check_out=check_in + timedelta(days=2),
        guests=2,
    )


def test_sweep_expires_only_overdue_pending():
    repository, clock, lifecycle = _setup()
    overdue = _create(lifecycle, 1, date(2025, 7, 1))
    confirmed = _create(lifecycle, 2, date(2025, 7, 1))
    lifecycle.confirm_reservation(confirmed.id)
    clock.now = CREATED_AT + timedelta(hours=1)
    fresh = _create(lifecycle, 1, date(2025, 8, 1))

    clock.now = CREATED_AT + timedelta(hours=24, minutes=1)
    counts = ExpirySweeper(lifecycle).sweep()

    assert counts == {"expired": 1, "skipped": 0, "failed": 0}
    assert repository.get_reservation(overdue.id).status is ReservationStatus.EXPIRED
    assert repository.get_reservation(confirmed.id).status is ReservationStatus.CONFIRMED
    assert repository.get_reservation(fresh.id).status is ReservationStatus.PENDING


def test_freeze_boundary_is_inclusive():
    repository, clock, lifecycle = _setup()
    reservation = _create(lifecycle, 1, date(2025, 7, 1))

    clock.now = reservation.frozen_until - timedelta(seconds=1)
    assert ExpirySweeper(lifecycle).sweep()["expired"] == 0

    clock.now = reservation.frozen_until
    assert ExpirySweeper(lifecycle).sweep()["expired"] == 1


def test_second_sweep_is_noop():
    repository, clock, lifecycle = _setup()
    _create(lifecycle, 1, date(2025, 7, 1))
    clock.now = CREATED_AT + timedelta(days=2)
    sweeper = ExpirySweeper(lifecycle)

    assert sweeper.sweep()["expired"] == 1
    assert sweeper.sweep() == {"expired": 0, "skipped": 0, "failed": 0}


def test_confirmation_before_sweep_wins():
    repository, clock, lifecycle = _setup()
    reservation = _create(lifecycle, 1, date(2025, 7, 1))
    clock.now = reservation.frozen_until + timedelta(minutes=1)

    lifecycle.confirm_reservation(reservation.id)
    counts = ExpirySweeper(lifecycle).sweep()

    assert counts == {"expired": 0, "skipped": 0, "failed": 0}
    assert repository.get_reservation(reservation.id).status is ReservationStatus.CONFIRMED


def test_stale_listing_is_skipped():
    repository, clock, lifecycle = _setup()
    reservation = _create(lifecycle, 1, date(2025, 7, 1))
    clock.now = reservation.frozen_until + timedelta(minutes=1)
    listed = repository.list_pending_expired(clock.now)

    class StaleRepository:
        def list_pending_expired(self, now):
            return listed

    lifecycle.confirm_reservation(reservation.id)
    counts = ExpirySweeper(lifecycle, repository=StaleRepository()).sweep()

    assert counts == {"expired": 0, "skipped": 1, "failed": 0}


def test_one_failure_does_not_stop_the_sweep():
    repository, clock, lifecycle = _setup()
    first = _create(lifecycle, 1, date(2025, 7, 1))
    second = _create(lifecycle, 2, date(2025, 7, 1))
    clock.now = CREATED_AT + timedelta(days=2)

    real_expire = lifecycle.expire_reservation

    def flaky_expire(reservation_id):
        if reservation_id == first.id:
            raise RuntimeError("database hiccup")
        return real_expire(reservation_id)

    lifecycle.expire_reservation = flaky_expire
    counts = ExpirySweeper(lifecycle).sweep()

    assert counts == {"expired": 1, "skipped": 0, "failed": 1}
    assert repository.get_reservation(first.id).status is ReservationStatus.PENDING
    assert repository.get_reservation(second.id).status is ReservationStatus.EXPIRED
