"""API views for the reservation domain."""

from __future__ import annotations

from rest_framework import permissions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from .serializers import (
    ReservationCancelSerializer,
    ReservationCreateSerializer,
    ReservationSerializer,
)
from .services import get_reservation_lifecycle


class ReservationCreateView(APIView):
    """Crea una reserva pendiente de pago."""

    permission_classes = [permissions.AllowAny]

    def post(self, request):  # type: ignore
        serializer = ReservationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        reservation = get_reservation_lifecycle().create_reservation(
            unit_id=data["cabin"],
            guest_name=data["guest_name"],
            guest_email=data["guest_email"],
            check_in=data["check_in"],
            check_out=data["check_out"],
            guests=data["guests"],
            add_on_requested=data["add_on"],
        )
        return Response(ReservationSerializer(reservation).data, status=status.HTTP_201_CREATED)


class ReservationByCodeView(APIView):
    """Consulta de una reserva por su código de confirmación."""

    permission_classes = [permissions.AllowAny]

    def get(self, request, code):  # type: ignore
        reservation = get_reservation_lifecycle().get_by_confirmation_code(code)
        return Response(ReservationSerializer(reservation).data)


class ReservationConfirmView(APIView):
    """El administrador confirma el pago del depósito."""

    permission_classes = [permissions.IsAdminUser]

    def post(self, request, pk):  # type: ignore
        reservation = get_reservation_lifecycle().confirm_reservation(pk)
        return Response(ReservationSerializer(reservation).data)


class ReservationCancelView(APIView):
    permission_classes = [permissions.IsAdminUser]

    def post(self, request, pk):  # type: ignore
        serializer = ReservationCancelSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        reservation = get_reservation_lifecycle().cancel_reservation(
            pk, reason=serializer.validated_data["reason"]
        )
        return Response(ReservationSerializer(reservation).data)
