"""URL routing for the cabin catalog."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import AvailabilityView, CabinListView, CabinQuoteView

urlpatterns = [
    path("", CabinListView.as_view(), name="cabin-list"),
    path("availability/", AvailabilityView.as_view(), name="cabin-availability"),
    path("<int:pk>/quote/", CabinQuoteView.as_view(), name="cabin-quote"),
]
