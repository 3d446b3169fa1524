"""Cabin catalog model."""

from __future__ import annotations

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.reservations.domain.entities import Unit


class Cabin(models.Model):
    """Cabaña reservable."""

    name = models.CharField(max_length=100, unique=True)
    weekday_price = models.PositiveIntegerField(
        help_text=_("Precio por noche de domingo a jueves."),
    )
    weekend_price = models.PositiveIntegerField(
        help_text=_("Precio por noche de viernes, sábado y víspera de festivo."),
    )
    max_guests = models.PositiveSmallIntegerField(
        default=2,
        validators=[MinValueValidator(1)],
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Cabaña")
        verbose_name_plural = _("Cabañas")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name

    def to_unit(self) -> Unit:
        return Unit(
            id=self.pk,
            name=self.name,
            weekday_price=self.weekday_price,
            weekend_price=self.weekend_price,
            is_active=self.is_active,
            max_guests=self.max_guests,
        )
