"""API views for the cabin catalog: listing, quotes, availability, holidays."""

from __future__ import annotations

from rest_framework import permissions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.reservations.domain.holidays import holidays_for_year, named_holidays
from apps.reservations.services import get_reservation_lifecycle

from .serializers import (
    CabinAvailabilitySerializer,
    CabinSerializer,
    PriceQuoteSerializer,
    StayQuerySerializer,
)


def _stay_from_query(request):  # type: ignore
    serializer = StayQuerySerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


class CabinListView(APIView):
    """Cabañas activas con sus precios."""

    permission_classes = [permissions.AllowAny]

    def get(self, request):  # type: ignore
        units = get_reservation_lifecycle().repository.list_units(active_only=True)
        return Response(CabinSerializer(units, many=True).data)


class CabinQuoteView(APIView):
    """Cotización de una estadía en una cabaña, con su disponibilidad."""

    permission_classes = [permissions.AllowAny]

    def get(self, request, pk):  # type: ignore
        stay = _stay_from_query(request)
        lifecycle = get_reservation_lifecycle()

        quote = lifecycle.price_quote(pk, stay["check_in"], stay["check_out"])
        if stay["add_on"]:
            quote = quote.with_add_on(lifecycle.policy.add_on_surcharge)
        available = lifecycle.is_available(pk, stay["check_in"], stay["check_out"])

        data = dict(PriceQuoteSerializer(quote).data)
        data["cabin"] = pk
        data["is_available"] = available
        return Response(data)


class AvailabilityView(APIView):
    """Disponibilidad de todas las cabañas activas para un rango de fechas."""

    permission_classes = [permissions.AllowAny]

    def get(self, request):  # type: ignore
        stay = _stay_from_query(request)
        results = get_reservation_lifecycle().availability.availability_for_range(
            stay["check_in"], stay["check_out"]
        )
        return Response(CabinAvailabilitySerializer(results, many=True).data)


class HolidaysView(APIView):
    """Festivos de un año."""

    permission_classes = [permissions.AllowAny]

    def get(self, request, year):  # type: ignore
        try:
            entries = named_holidays(year)
        except ValueError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(
            {
                "year": year,
                "holidays": [day.isoformat() for day in sorted(holidays_for_year(year))],
                "named": [{"date": day.isoformat(), "name": name} for day, name in entries],
            }
        )
