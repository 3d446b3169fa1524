"""URL routing for the reservation domain."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import (
    ReservationByCodeView,
    ReservationCancelView,
    ReservationConfirmView,
    ReservationCreateView,
)

urlpatterns = [
    path("", ReservationCreateView.as_view(), name="reservation-create"),
    path("code/<str:code>/", ReservationByCodeView.as_view(), name="reservation-by-code"),
    path("<int:pk>/confirm/", ReservationConfirmView.as_view(), name="reservation-confirm"),
    path("<int:pk>/cancel/", ReservationCancelView.as_view(), name="reservation-cancel"),
]
