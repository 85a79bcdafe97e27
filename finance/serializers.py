"""
Serializers for finance models.
"""
from rest_framework import serializers

from .models import Expense


class ExpenseSerializer(serializers.ModelSerializer):
    class Meta:
        model = Expense
        fields = ['id', 'description', 'amount', 'category', 'expense_type', 'created_at']
        read_only_fields = ['id', 'created_at']

    def validate_description(self, value):
        value = value.strip()
        if len(value) < 2:
            raise serializers.ValidationError("Description must be at least 2 characters.")
        return value


class FinancialSummarySerializer(serializers.Serializer):
    total_sales = serializers.DecimalField(max_digits=14, decimal_places=2)
    month_sales = serializers.DecimalField(max_digits=14, decimal_places=2)
    gross_profit = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_capital_expenses = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_operational_expenses = serializers.DecimalField(max_digits=14, decimal_places=2)
    net_operating_profit = serializers.DecimalField(max_digits=14, decimal_places=2)
    delivered_orders = serializers.IntegerField()
