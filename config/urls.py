"""URL configuration for the villa reservations project.

The `urlpatterns` list routes URLs to views. It includes the Django admin
and the application‑level API of each app.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore

from apps.cabins.views import HolidaysView

# API versioning. v1 is our initial version; future versions can be added here.

urlpatterns = [
    path('admin/', admin.site.urls),
    # Application URLs
    path('api/v1/cabins/', include('apps.cabins.urls')),
    path('api/v1/reservations/', include('apps.reservations.urls')),
    path('api/v1/holidays/<int:year>/', HolidaysView.as_view(), name='holidays'),
]
