"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
"""

import uuid

from django.core.validators import MinValueValidator
from django.db import models


class SeatType(models.Model):
    """Persistence model for seat types."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    price_per_unit = models.PositiveIntegerField()
    time_unit_minutes = models.PositiveIntegerField(
        default=30, validators=[MinValueValidator(1)]
    )
    display_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["display_order", "name"]

    def __str__(self) -> str:
        return f"{self.name} - {self.price_per_unit}/{self.time_unit_minutes}min"


class Session(models.Model):
    """Persistence model for a party's occupancy of a table."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    table_number = models.CharField(max_length=20)
    seat_type = models.ForeignKey(
        SeatType, on_delete=models.PROTECT, related_name="sessions"
    )
    # Seat type pricing as of seating or the last move.
    price_per_unit = models.PositiveIntegerField(null=True, blank=True)
    time_unit_minutes = models.PositiveIntegerField(null=True, blank=True)
    guest_count = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    charge_started_at = models.DateTimeField(null=True, blank=True)
    charge_paused_at = models.DateTimeField(null=True, blank=True)
    closed_at = models.DateTimeField(null=True, blank=True)
    charge_amount = models.PositiveIntegerField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["table_number", "closed_at"]),
        ]

    def __str__(self) -> str:
        return f"Table {self.table_number} - {self.created_at}"

    def save(self, *args, **kwargs):
        if self.price_per_unit is None:
            self.price_per_unit = self.seat_type.price_per_unit
        if self.time_unit_minutes is None:
            self.time_unit_minutes = self.seat_type.time_unit_minutes
        super().save(*args, **kwargs)


class MoveCharge(models.Model):
    """Persistence model for seat-move charges."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    session = models.ForeignKey(
        Session, on_delete=models.CASCADE, related_name="move_charges"
    )
    price_snapshot = models.PositiveIntegerField()
    note = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["session"]),
        ]

    def __str__(self) -> str:
        return f"{self.session_id} - {self.price_snapshot}"
