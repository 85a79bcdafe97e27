"""
Django Admin configuration for finance models.
"""
from django.contrib import admin
from .models import Expense


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ['id', 'description', 'expense_type', 'category', 'amount', 'created_at']
    list_filter = ['expense_type', 'category', 'created_at']
    search_fields = ['description']
    ordering = ['-created_at']
