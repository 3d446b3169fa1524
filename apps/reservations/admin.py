"""Admin registration for reservations.

Status changes go through the reservation lifecycle so that admin actions
follow the same transitions, notifications and race rules as the API.
"""

from __future__ import annotations

from django.contrib import admin, messages  # type: ignore

from .domain.errors import InvalidStateError, NotFoundError
from .models import Reservation
from .services import get_reservation_lifecycle


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = (
        "confirmation_code",
        "cabin",
        "guest_name",
        "guest_email",
        "status",
        "check_in",
        "check_out",
        "total_price",
        "frozen_until",
        "created_at",
    )
    list_filter = ("status", "cabin", "check_in", "includes_add_on")
    search_fields = ("confirmation_code", "guest_name", "guest_email")
    # Edits would bypass the overlap check; use the actions instead
    readonly_fields = (
        "cabin",
        "guest_name",
        "guest_email",
        "check_in",
        "check_out",
        "guests",
        "confirmation_code",
        "status",
        "total_price",
        "includes_add_on",
        "payment_instructions",
        "frozen_until",
        "calendar_event_id",
        "cancellation_reason",
        "created_at",
        "updated_at",
    )
    actions = ("confirm_reservations", "cancel_reservations")

    def has_add_permission(self, request):  # type: ignore
        # Reservations are created through the lifecycle only
        return False

    def _apply(self, request, queryset, operation, done_message):  # type: ignore
        done = 0
        for reservation_id in queryset.values_list("pk", flat=True):
            try:
                operation(reservation_id)
                done += 1
            except (InvalidStateError, NotFoundError) as e:
                self.message_user(request, str(e), level=messages.WARNING)
        if done:
            self.message_user(request, done_message.format(count=done), level=messages.SUCCESS)

    @admin.action(description="Confirmar reservas seleccionadas (depósito recibido)")
    def confirm_reservations(self, request, queryset):  # type: ignore
        lifecycle = get_reservation_lifecycle()
        self._apply(request, queryset, lifecycle.confirm_reservation, "{count} reserva(s) confirmada(s).")

    @admin.action(description="Cancelar reservas seleccionadas")
    def cancel_reservations(self, request, queryset):  # type: ignore
        lifecycle = get_reservation_lifecycle()
        self._apply(
            request,
            queryset,
            lambda reservation_id: lifecycle.cancel_reservation(reservation_id, reason="Cancelada por el administrador"),
            "{count} reserva(s) cancelada(s).",
        )
