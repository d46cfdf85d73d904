"""Serializers for transforming domain models to API responses and
validating request bodies."""

from rest_framework import serializers

from seating.conf import get_setting


class SeatTypeSerializer(serializers.Serializer):
    """Serializer for SeatType domain model."""

    id = serializers.UUIDField(source="id.value")
    name = serializers.CharField()
    price_per_unit = serializers.IntegerField(source="price_per_unit.amount")
    time_unit_minutes = serializers.IntegerField()
    display_order = serializers.IntegerField()
    created_at = serializers.DateTimeField()


class SeatTypeInputSerializer(serializers.Serializer):
    """Request body for creating a seat type."""

    name = serializers.CharField(max_length=100)
    price_per_unit = serializers.IntegerField(min_value=0)
    time_unit_minutes = serializers.IntegerField(min_value=1, required=False)
    display_order = serializers.IntegerField(required=False, default=0)

    def validate(self, attrs):
        attrs.setdefault("time_unit_minutes", get_setting("DEFAULT_TIME_UNIT_MINUTES"))
        return attrs


class SessionSerializer(serializers.Serializer):
    """Serializer for Session domain model."""

    id = serializers.UUIDField(source="id.value")
    table_number = serializers.CharField()
    seat_type = SeatTypeSerializer()
    price_per_unit = serializers.IntegerField(source="price_per_unit.amount")
    time_unit_minutes = serializers.IntegerField()
    guest_count = serializers.IntegerField()
    charge_started_at = serializers.DateTimeField(allow_null=True)
    charge_paused_at = serializers.DateTimeField(allow_null=True)
    closed_at = serializers.DateTimeField(allow_null=True)
    charge_amount = serializers.SerializerMethodField()
    is_paused = serializers.BooleanField()
    created_at = serializers.DateTimeField()

    def get_charge_amount(self, session) -> int | None:
        return session.charge_amount.amount if session.charge_amount is not None else None


class SessionInputSerializer(serializers.Serializer):
    """Request body for opening a session."""

    table_number = serializers.CharField(max_length=20)
    seat_type_id = serializers.CharField()
    guest_count = serializers.IntegerField(min_value=1, required=False, default=1)


class ChargeBreakdownSerializer(serializers.Serializer):
    """Serializer for ChargeBreakdown."""

    charge_amount = serializers.IntegerField()
    table_charge = serializers.IntegerField()
    move_charge = serializers.IntegerField()
    elapsed_minutes = serializers.IntegerField()
    is_paused = serializers.BooleanField()


class SessionMoveInputSerializer(serializers.Serializer):
    """Request body for moving a party to another table or seat type."""

    seat_type_id = serializers.CharField()
    table_number = serializers.CharField(max_length=20, required=False)
    calculate_only = serializers.BooleanField(required=False, default=False)
    apply_full_charge = serializers.BooleanField(required=False, default=True)
    apply_partial_charge = serializers.BooleanField(required=False, default=True)


class MoveOutcomeSerializer(serializers.Serializer):
    """Serializer for a seat move and the charge left at the old table."""

    session = SessionSerializer()
    previous_charge = serializers.IntegerField(source="quote.previous_charge")
    full_unit_charge = serializers.IntegerField(source="quote.full_unit_charge")
    partial_unit_charge = serializers.IntegerField(source="quote.partial_unit_charge")
    applied_charge = serializers.IntegerField()
    time_unit_minutes = serializers.IntegerField(source="quote.time_unit_minutes")
    guest_count = serializers.IntegerField(source="quote.guest_count")
