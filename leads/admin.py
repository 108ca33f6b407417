from django.contrib import admin

from .models import Lead


@admin.register(Lead)
class LeadAdmin(admin.ModelAdmin):
    list_display = (
        "lead_id",
        "name",
        "mobile",
        "email",
        "budget",
        "preferred_location",
        "looking_for",
        "status",
        "created_at",
    )
    search_fields = ("lead_id", "name", "email", "current_location", "preferred_location")
    list_filter = ("status", "looking_for", "direction")
    ordering = ("-created_at",)
    # Status changes go through the API transition rules
    readonly_fields = ("lead_id", "status", "created_at", "updated_at")
