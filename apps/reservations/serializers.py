"""Serializers for the reservation API."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore


class ReservationCreateSerializer(serializers.Serializer):
    """Solicitud de reserva de un huésped.

    Only shape is checked here; business rules (name length, email, guest
    limits, dates) are enforced by the lifecycle, which reports every
    violated field at once.
    """

    cabin = serializers.IntegerField()
    guest_name = serializers.CharField(allow_blank=True, max_length=200)
    guest_email = serializers.CharField(allow_blank=True, max_length=254)
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    guests = serializers.IntegerField(default=1)
    add_on = serializers.BooleanField(default=False)


class ReservationSerializer(serializers.Serializer):
    """Representación de una reserva (entidad de dominio)."""

    id = serializers.IntegerField(read_only=True)
    confirmation_code = serializers.CharField(read_only=True)
    cabin = serializers.IntegerField(source="unit_id", read_only=True)
    guest_name = serializers.CharField(read_only=True)
    guest_email = serializers.CharField(read_only=True)
    check_in = serializers.DateField(read_only=True)
    check_out = serializers.DateField(read_only=True)
    nights = serializers.IntegerField(read_only=True)
    guests = serializers.IntegerField(read_only=True)
    total_price = serializers.IntegerField(read_only=True)
    includes_add_on = serializers.BooleanField(read_only=True)
    status = serializers.CharField(source="status.value", read_only=True)
    payment_instructions = serializers.CharField(read_only=True)
    frozen_until = serializers.DateTimeField(read_only=True)
    cancellation_reason = serializers.CharField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)


class ReservationCancelSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, max_length=255, default="")
