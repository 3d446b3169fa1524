"""Admin registration for cabins."""

from __future__ import annotations

from django.contrib import admin

from .models import Cabin


@admin.register(Cabin)
class CabinAdmin(admin.ModelAdmin):
    list_display = ("name", "weekday_price", "weekend_price", "max_guests", "is_active")
    list_filter = ("is_active",)
    search_fields = ("name",)
    readonly_fields = ("created_at", "updated_at")
