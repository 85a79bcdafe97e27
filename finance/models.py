"""
Finance Models - business expenses.
"""
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class Expense(models.Model):
    """
    A recorded business expense.

    Capital expenses are one-off investments (coop, equipment); operational
    expenses are running costs and are deducted from gross profit.
    """

    class Category(models.TextChoices):
        CHICKS = 'Chicks', 'Chicks'
        FEED = 'Feed', 'Feed'
        VACCINES = 'Vaccines', 'Vaccines'
        UTILITIES = 'Utilities', 'Utilities'
        PACKAGING = 'Packaging', 'Packaging'
        MARKETING = 'Marketing', 'Marketing'
        TRANSPORT = 'Transport', 'Transport'
        COOP_CONSTRUCTION = 'Coop Construction', 'Coop Construction'
        EQUIPMENT = 'Equipment', 'Equipment'
        OTHER = 'Other', 'Other'

    class ExpenseType(models.TextChoices):
        CAPITAL = 'capital', 'Capital'
        OPERATIONAL = 'operational', 'Operational'

    description = models.CharField(max_length=255)
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
        help_text="Amount spent"
    )
    category = models.CharField(max_length=50, choices=Category.choices)
    expense_type = models.CharField(
        max_length=20,
        choices=ExpenseType.choices,
        default=ExpenseType.OPERATIONAL,
        db_index=True
    )
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = 'Expense'
        verbose_name_plural = 'Expenses'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.description} (K{self.amount})"
