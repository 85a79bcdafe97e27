"""
Django Admin configuration for account models.
"""
from django.contrib import admin
from .models import Device, UserProfile


@admin.register(Device)
class DeviceAdmin(admin.ModelAdmin):
    list_display = ['id', 'user_agent', 'created_at', 'last_seen_at']
    search_fields = ['id', 'user_agent']
    ordering = ['-last_seen_at']
    readonly_fields = ['created_at', 'last_seen_at']


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'role', 'created_at']
    list_filter = ['role']
    search_fields = ['user__email', 'user__username']
    raw_id_fields = ['user']
