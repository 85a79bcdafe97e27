"""
Django Admin configuration for order models.
"""
from django.contrib import admin
from .models import Order


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'phone', 'status', 'items', 'price', 'created_at']
    list_filter = ['status', 'product_type', 'delivery_location_type', 'created_at']
    search_fields = ['id', 'name', 'phone', 'device_id', 'product_name']
    ordering = ['-created_at']
    readonly_fields = ['status', 'price', 'device_id', 'created_at', 'updated_at']
    raw_id_fields = ['product', 'user']

    def items(self, obj):
        return obj.items_summary
    items.short_description = 'Items'
