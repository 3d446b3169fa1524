"""Tests for reservation email notifications."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone as dt_timezone
from unittest import mock

from django.core import mail
from django.test import TestCase, override_settings

from shared.application.message_bus import MessageBus
from shared.domain.value_objects import DateRange

from apps.notifications import handlers, services
from apps.reservations.domain.entities import Reservation, ReservationStatus, Unit
from apps.reservations.domain.errors import NotificationFailure
from apps.reservations.domain.events import (
    ReservationCancelled,
    ReservationConfirmed,
    ReservationCreated,
    ReservationExpired,
)


class ReservationNotificationTests(TestCase):
    def setUp(self) -> None:
        self.unit = Unit(id=1, name="Cielo", weekday_price=200000, weekend_price=390000)
        self.reservation = Reservation(
            id=7,
            unit_id=1,
            guest_name="Ana <María>",
            guest_email="ana@example.com",
            dates=DateRange(date(2025, 6, 20), date(2025, 6, 22)),
            guests=2,
            total_price=780000,
            includes_add_on=True,
            status=ReservationStatus.PENDING,
            confirmation_code="ABCD2345",
            payment_instructions="Deposit (50%): $390,000 COP\nReference: ABCD2345",
            frozen_until=datetime(2025, 6, 2, 15, 0, tzinfo=dt_timezone.utc),
        )
        self.bus = MessageBus()
        handlers.register_handlers(self.bus)

    def _publish(self, event_type, **extra) -> None:
        self.bus.publish_events([
            event_type(aggregate_id=self.reservation.id, reservation=self.reservation, unit=self.unit, **extra)
        ])

    @override_settings(OWNER_EMAIL="owner@villa.test")
    def test_created_emails_guest_and_owner(self) -> None:
        self._publish(ReservationCreated)

        self.assertEqual(len(mail.outbox), 2)
        guest, owner = mail.outbox
        self.assertEqual(guest.to, ["ana@example.com"])
        self.assertIn("ABCD2345", guest.subject)
        self.assertIn("Reference: ABCD2345", guest.body)
        self.assertIn("Ana &lt;María&gt;", guest.alternatives[0][0])
        self.assertEqual(owner.to, ["owner@villa.test"])

    @override_settings(OWNER_EMAIL="")
    def test_owner_email_skipped_when_not_configured(self) -> None:
        self._publish(ReservationCreated)

        self.assertEqual([message.to for message in mail.outbox], [["ana@example.com"]])

    def test_confirmed_and_expired_email_the_guest(self) -> None:
        self._publish(ReservationConfirmed)
        self._publish(ReservationExpired)

        self.assertEqual(len(mail.outbox), 2)
        self.assertIn("confirmada", mail.outbox[0].subject)
        self.assertIn("expirada", mail.outbox[1].subject)

    def test_cancelled_only_logs(self) -> None:
        with self.assertLogs("apps.notifications.handlers", level="INFO"):
            self._publish(ReservationCancelled, old_status="pending")
        self.assertEqual(mail.outbox, [])

    def test_send_failure_raises_notification_failure(self) -> None:
        with mock.patch.object(services, "send_mail", side_effect=OSError("smtp down")):
            with self.assertRaises(NotificationFailure):
                services.send_reservation_confirmed_email(self.reservation, self.unit)

    @override_settings(OWNER_EMAIL="owner@villa.test")
    def test_failing_handler_does_not_stop_the_others(self) -> None:
        with mock.patch.object(services, "send_mail", side_effect=[OSError("smtp down"), 1]) as send:
            self._publish(ReservationCreated)
            calls = send.call_args_list

        self.assertEqual(len(calls), 2)
        self.assertEqual(calls[1].kwargs["recipient_list"], ["owner@villa.test"])

    def test_registration_is_idempotent(self) -> None:
        handlers.register_handlers(self.bus)
        self.assertEqual(len(self.bus.handlers_for(ReservationCreated)), 2)
