"""Reservation persistence model."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.db.models import F, Q  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import DateRange

from apps.reservations.application.policy import MAX_CODE_LENGTH
from apps.reservations.domain.entities import ACTIVE_STATUSES, Reservation as ReservationEntity, ReservationStatus


class Reservation(models.Model):
    """Reserva de una cabaña."""

    class Status(models.TextChoices):
        PENDING = ReservationStatus.PENDING.value, _("Pendiente de pago")
        CONFIRMED = ReservationStatus.CONFIRMED.value, _("Confirmada")
        CANCELLED = ReservationStatus.CANCELLED.value, _("Cancelada")
        EXPIRED = ReservationStatus.EXPIRED.value, _("Expirada")

    BLOCKING_STATUSES = tuple(status.value for status in ACTIVE_STATUSES)

    cabin = models.ForeignKey(
        "cabins.Cabin",
        on_delete=models.PROTECT,
        related_name="reservations",
    )
    guest_name = models.CharField(max_length=200)
    guest_email = models.EmailField()
    check_in = models.DateField()
    check_out = models.DateField()
    guests = models.PositiveSmallIntegerField(default=1)
    total_price = models.PositiveIntegerField(
        help_text=_("Precio total fijado al crear la reserva."),
    )
    includes_add_on = models.BooleanField(
        default=False,
        help_text=_("Incluye kit de asado."),
    )
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.PENDING,
    )
    confirmation_code = models.CharField(max_length=MAX_CODE_LENGTH, unique=True, editable=False)
    payment_instructions = models.TextField(blank=True)
    frozen_until = models.DateTimeField(
        null=True,
        blank=True,
        help_text=_("Fin del congelamiento; después de esta fecha la reserva pendiente expira."),
    )
    calendar_event_id = models.CharField(max_length=255, null=True, blank=True)
    cancellation_reason = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Reserva")
        verbose_name_plural = _("Reservas")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=Q(check_out__gt=F("check_in")),
                name="reservation_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["cabin", "check_in", "check_out"], name="reservation_cabin_dates_idx"),
            models.Index(fields=["status", "frozen_until"], name="reservation_status_frozen_idx"),
        ]

    def __str__(self) -> str:
        return f"Reserva {self.confirmation_code} ({self.status})"

    def to_entity(self) -> ReservationEntity:
        return ReservationEntity(
            id=self.pk,
            unit_id=self.cabin_id,
            guest_name=self.guest_name,
            guest_email=self.guest_email,
            dates=DateRange(self.check_in, self.check_out),
            guests=self.guests,
            total_price=self.total_price,
            includes_add_on=self.includes_add_on,
            status=ReservationStatus(self.status),
            confirmation_code=self.confirmation_code,
            payment_instructions=self.payment_instructions,
            frozen_until=self.frozen_until,
            calendar_event_id=self.calendar_event_id,
            cancellation_reason=self.cancellation_reason,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
