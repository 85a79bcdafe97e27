"""
Finance Service Layer - sales, profit and expense summaries.

Sales and profit count Delivered orders only. Profit is computed from the
current profit margins: the price table's profit fields for chicken, and the
option's profit for generic products (zero when the product or option no
longer exists).
"""
import logging
from datetime import datetime, time
from decimal import Decimal
from typing import Dict

from django.db.models import Sum
from django.utils import timezone

from catalog.models import PriceTable
from orders.models import Order
from orders.pricing import (
    PriceSnapshot,
    ZERO,
    compute_profit,
    money,
    to_decimal,
    variations_from_product,
)
from .models import Expense

logger = logging.getLogger(__name__)


def profit_snapshot(table) -> PriceSnapshot:
    """Per-unit profit margins shaped like a price table."""
    return PriceSnapshot(
        whole=to_decimal(table.profit_whole),
        mixed_piece=to_decimal(table.profit_mixed_piece),
        breasts=to_decimal(table.profit_breasts),
        thighs=to_decimal(table.profit_thighs),
        drumsticks=to_decimal(table.profit_drumsticks),
        wings=to_decimal(table.profit_wings),
    )


def order_profit(order: Order, profits: PriceSnapshot) -> Decimal:
    variations = ()
    if order.product_type == Order.ProductType.GENERIC:
        if order.product is None:
            return ZERO
        variations = variations_from_product(order.product)
    return compute_profit(order.to_selection(), profits, variations)


def _expense_total(expense_type: str) -> Decimal:
    total = Expense.objects.filter(expense_type=expense_type).aggregate(total=Sum('amount'))['total']
    return money(total or ZERO)


def compute_financials() -> Dict[str, Decimal]:
    """
    Financial summary for the back office.

    Returns:
        Dict with total_sales, month_sales, gross_profit,
        total_capital_expenses, total_operational_expenses,
        net_operating_profit and delivered_orders
    """
    profits = profit_snapshot(PriceTable.load())
    delivered = (
        Order.objects.filter(status=Order.Status.DELIVERED)
        .select_related('product')
        .prefetch_related('product__variations__options')
    )

    month_start = timezone.make_aware(
        datetime.combine(timezone.localdate().replace(day=1), time.min)
    )

    total_sales = ZERO
    month_sales = ZERO
    gross_profit = ZERO
    count = 0
    for order in delivered:
        count += 1
        total_sales += order.price
        if order.created_at >= month_start:
            month_sales += order.price
        gross_profit += order_profit(order, profits)

    capital = _expense_total(Expense.ExpenseType.CAPITAL)
    operational = _expense_total(Expense.ExpenseType.OPERATIONAL)

    summary = {
        'total_sales': money(total_sales),
        'month_sales': money(month_sales),
        'gross_profit': money(gross_profit),
        'total_capital_expenses': capital,
        'total_operational_expenses': operational,
        'net_operating_profit': money(gross_profit - operational),
        'delivered_orders': count,
    }
    logger.debug(f"Financial summary computed over {count} delivered orders")
    return summary
