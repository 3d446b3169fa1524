"""Serializers for the cabin catalog API."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore


class CabinSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(read_only=True)
    weekday_price = serializers.IntegerField(read_only=True)
    weekend_price = serializers.IntegerField(read_only=True)
    max_guests = serializers.IntegerField(read_only=True)


class StayQuerySerializer(serializers.Serializer):
    """Query parameters of a stay: ?check_in=YYYY-MM-DD&check_out=YYYY-MM-DD"""

    check_in = serializers.DateField()
    check_out = serializers.DateField()
    add_on = serializers.BooleanField(required=False, default=False)


class NightlyRateSerializer(serializers.Serializer):
    night = serializers.DateField()
    tier = serializers.CharField(source="tier.value")
    price = serializers.IntegerField()


class PriceQuoteSerializer(serializers.Serializer):
    check_in = serializers.DateField(source="dates.check_in")
    check_out = serializers.DateField(source="dates.check_out")
    nights = serializers.IntegerField()
    weekend_nights = serializers.IntegerField()
    total_price = serializers.IntegerField()
    includes_add_on = serializers.BooleanField()
    add_on_surcharge = serializers.IntegerField()
    nightly_breakdown = NightlyRateSerializer(many=True)


class DateRangeSerializer(serializers.Serializer):
    check_in = serializers.DateField()
    check_out = serializers.DateField()


class CabinAvailabilitySerializer(serializers.Serializer):
    """Disponibilidad y precio de una cabaña para una estadía."""

    cabin = CabinSerializer(source="unit")
    is_available = serializers.BooleanField()
    quote = PriceQuoteSerializer()
    blocked = DateRangeSerializer(many=True)
