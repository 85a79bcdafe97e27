"""
Serializers for delivery models.
"""
from rest_framework import serializers

from .models import DeliverySettings, DeliveryRecord


class DeliverySettingsSerializer(serializers.ModelSerializer):
    class Meta:
        model = DeliverySettings
        fields = [
            'total_slots', 'is_slots_enabled', 'disable_when_slots_full',
            'slots_full_message', 'next_delivery_date', 'updated_at'
        ]
        read_only_fields = ['updated_at']


class DeliveryStatusSerializer(serializers.Serializer):
    """Read-only view of the slot ledger."""
    is_slots_enabled = serializers.BooleanField()
    total_slots = serializers.IntegerField()
    taken_slots = serializers.IntegerField()
    slots_left = serializers.IntegerField()
    is_full = serializers.BooleanField()
    can_submit = serializers.BooleanField()
    slots_full_message = serializers.CharField()
    next_delivery_date = serializers.DateTimeField(allow_null=True)


class DeliveryRecordSerializer(serializers.ModelSerializer):
    location = serializers.CharField(read_only=True)

    class Meta:
        model = DeliveryRecord
        fields = [
            'id', 'device_id', 'record_type', 'name', 'phone',
            'delivery_location_type', 'school', 'block', 'room',
            'area', 'street', 'house_number', 'location', 'last_action_at'
        ]
