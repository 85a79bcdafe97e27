"""
Django Admin configuration for delivery models.
"""
from django.contrib import admin
from .models import DeliverySettings, SlotCounter, DeliveryRecord


@admin.register(DeliverySettings)
class DeliverySettingsAdmin(admin.ModelAdmin):
    list_display = ['total_slots', 'is_slots_enabled', 'disable_when_slots_full', 'next_delivery_date', 'updated_at']

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(SlotCounter)
class SlotCounterAdmin(admin.ModelAdmin):
    list_display = ['taken_slots', 'updated_at']
    readonly_fields = ['updated_at']


@admin.register(DeliveryRecord)
class DeliveryRecordAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'phone', 'record_type', 'device_id', 'last_action_at']
    list_filter = ['record_type', 'delivery_location_type']
    search_fields = ['name', 'phone', 'device_id']
    ordering = ['-last_action_at']
