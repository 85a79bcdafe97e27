"""
Serializers for devices and users.
"""
from django.contrib.auth import get_user_model
from rest_framework import serializers

from .models import Device, UserProfile, get_role


class DeviceRegisterSerializer(serializers.Serializer):
    """Register or touch a device id generated by the browser."""
    device_id = serializers.CharField(max_length=64)


class DeviceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Device
        fields = ['id', 'user_agent', 'created_at', 'last_seen_at']
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    role = serializers.SerializerMethodField()
    created_at = serializers.DateTimeField(source='date_joined', read_only=True)

    class Meta:
        model = get_user_model()
        fields = ['id', 'email', 'username', 'role', 'created_at']
        read_only_fields = fields

    def get_role(self, obj):
        return get_role(obj)


class UserRoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=UserProfile.Role.choices)
