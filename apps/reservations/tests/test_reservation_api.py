"""Integration tests for reservation API endpoints."""

from __future__ import annotations

from datetime import date, timedelta

from django.contrib.auth import get_user_model
from django.core import mail
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.cabins.models import Cabin
from apps.reservations.domain.pricing import price_quote
from apps.reservations.models import Reservation


class ReservationAPITests(APITestCase):
    """Covers creación, conflictos, consulta por código, confirmación y cancelación."""

    def setUp(self) -> None:
        self.cabin = Cabin.objects.create(name="Cielo", weekday_price=200000, weekend_price=390000)
        self.other_cabin = Cabin.objects.create(name="Eclipse", weekday_price=200000, weekend_price=390000)
        self.admin = get_user_model().objects.create_superuser(
            username="admin", email="admin@example.com", password="AdminPass123",
        )
        self.check_in = date.today() + timedelta(days=30)
        self.check_out = self.check_in + timedelta(days=2)
        self.create_url = reverse("reservation-create")

    def _payload(self, **overrides) -> dict:
        payload = {
            "cabin": self.cabin.pk,
            "guest_name": "Ana María",
            "guest_email": "ana@example.com",
            "check_in": str(self.check_in),
            "check_out": str(self.check_out),
            "guests": 2,
        }
        payload.update(overrides)
        return payload

    def test_guest_can_create_reservation(self) -> None:
        response = self.client.post(self.create_url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        expected = price_quote(self.cabin.to_unit(), self.check_in, self.check_out)
        self.assertEqual(response.data["status"], "pending")
        self.assertEqual(response.data["total_price"], expected.total_price)
        self.assertEqual(response.data["includes_add_on"], expected.includes_add_on)
        self.assertEqual(len(response.data["confirmation_code"]), 8)
        self.assertIsNotNone(response.data["frozen_until"])

        reservation = Reservation.objects.get(pk=response.data["id"])
        self.assertEqual(reservation.status, Reservation.Status.PENDING)

        recipients = sorted(message.to[0] for message in mail.outbox)
        self.assertEqual(recipients, ["ana@example.com", "owner@villa.test"])

    def test_validation_errors_list_every_field(self) -> None:
        response = self.client.post(
            self.create_url,
            self._payload(guest_name="A", guest_email="nope", guests=5),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(set(response.data["errors"]), {"guest_name", "guest_email", "guests"})
        self.assertFalse(Reservation.objects.exists())

    def test_unknown_cabin_returns_404(self) -> None:
        response = self.client.post(self.create_url, self._payload(cabin=9999), format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_conflicting_dates_return_409(self) -> None:
        first = self.client.post(self.create_url, self._payload(), format="json")
        self.assertEqual(first.status_code, status.HTTP_201_CREATED)

        overlap = self.client.post(
            self.create_url,
            self._payload(check_in=str(self.check_in + timedelta(days=1)),
                          check_out=str(self.check_out + timedelta(days=1))),
            format="json",
        )
        self.assertEqual(overlap.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(
            overlap.data["conflicts"],
            [{"check_in": self.check_in.isoformat(), "check_out": self.check_out.isoformat()}],
        )

        other = self.client.post(self.create_url, self._payload(cabin=self.other_cabin.pk), format="json")
        self.assertEqual(other.status_code, status.HTTP_201_CREATED)

    def test_lookup_by_code_is_case_insensitive(self) -> None:
        created = self.client.post(self.create_url, self._payload(), format="json")
        code = created.data["confirmation_code"]

        response = self.client.get(reverse("reservation-by-code", args=[code.lower()]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["id"], created.data["id"])
        for field in ("guest_name", "guest_email", "check_in", "check_out", "guests",
                      "total_price", "includes_add_on", "status", "confirmation_code"):
            self.assertEqual(response.data[field], created.data[field], field)
        missing = self.client.get(reverse("reservation-by-code", args=["ZZZZZZZZ"]))
        self.assertEqual(missing.status_code, status.HTTP_404_NOT_FOUND)

    def test_confirm_requires_staff(self) -> None:
        created = self.client.post(self.create_url, self._payload(), format="json")
        url = reverse("reservation-confirm", args=[created.data["id"]])

        anonymous = self.client.post(url)
        self.assertIn(anonymous.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

        self.client.force_authenticate(self.admin)
        response = self.client.post(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "confirmed")

        again = self.client.post(url)
        self.assertEqual(again.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(again.data["current_status"], "confirmed")

    def test_cancel_frees_the_dates(self) -> None:
        created = self.client.post(self.create_url, self._payload(), format="json")
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("reservation-cancel", args=[created.data["id"]]),
            {"reason": "Solicitud del huésped"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["status"], "cancelled")
        self.assertEqual(response.data["cancellation_reason"], "Solicitud del huésped")

        rebook = self.client.post(self.create_url, self._payload(), format="json")
        self.assertEqual(rebook.status_code, status.HTTP_201_CREATED)

    def test_cancel_unknown_reservation(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.post(reverse("reservation-cancel", args=[9999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
