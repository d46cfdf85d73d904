from django.contrib import admin

from seating.models import MoveCharge, SeatType, Session


class MoveChargeInline(admin.TabularInline):
    model = MoveCharge
    extra = 0


@admin.register(SeatType)
class SeatTypeAdmin(admin.ModelAdmin):
    list_display = ["name", "price_per_unit", "time_unit_minutes", "display_order"]
    search_fields = ["name"]


@admin.register(Session)
class SessionAdmin(admin.ModelAdmin):
    list_display = [
        "table_number",
        "seat_type",
        "price_per_unit",
        "guest_count",
        "charge_started_at",
        "charge_paused_at",
        "closed_at",
        "charge_amount",
    ]
    list_filter = ["seat_type"]
    inlines = [MoveChargeInline]


@admin.register(MoveCharge)
class MoveChargeAdmin(admin.ModelAdmin):
    list_display = ["session", "price_snapshot", "note", "created_at"]
