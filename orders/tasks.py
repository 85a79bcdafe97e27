"""
Celery tasks for order processing.

Tasks:
    - send_order_notification: Async notification after an order is placed
    - generate_daily_order_report: Yesterday's order counts and revenue
"""
import logging
from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    max_retries=3,
    default_retry_delay=60,
    autoretry_for=(Exception,),
    retry_backoff=True
)
def send_order_notification(self, order_id: int):
    """
    Async task triggered after a successful submission.

    Logs an order slip for the kitchen; the SMS/WhatsApp hook goes here.

    Args:
        order_id: ID of the new order

    Returns:
        Dict with notification details
    """
    from orders.models import Order

    try:
        order = Order.objects.get(id=order_id)
    except Order.DoesNotExist:
        logger.error(f"Order #{order_id} not found for notification")
        return {'status': 'error', 'message': f'Order {order_id} not found'}

    if order.status != Order.Status.PENDING:
        logger.warning(
            f"Order #{order_id} is no longer pending (status: {order.status}), "
            "skipping notification"
        )
        return {
            'status': 'skipped',
            'message': f'Order {order_id} is not pending'
        }

    slip = f"""
    ===============================================
    NEW ORDER - #{order.id}
    ===============================================
    Customer: {order.name} ({order.phone})
    Deliver to: {order.location}
    Items: {order.items_summary}
    Total: K{order.price}
    Placed: {order.created_at.strftime('%Y-%m-%d %H:%M:%S')}
    ===============================================
    """

    logger.info(slip)

    return {
        'status': 'success',
        'order_id': order.id,
        'message': f'Notification sent for order {order_id}'
    }


@shared_task
def generate_daily_order_report():
    """
    Generate daily order statistics report.

    Can be scheduled via Celery Beat for daily execution.
    """
    from datetime import timedelta

    from django.db import models
    from django.db.models import Sum, Count
    from django.utils import timezone

    from orders.models import Order

    yesterday = timezone.localdate() - timedelta(days=1)

    orders = Order.objects.filter(created_at__date=yesterday)

    stats = orders.aggregate(
        total_orders=Count('id'),
        delivered_orders=Count('id', filter=models.Q(status=Order.Status.DELIVERED)),
        cancelled_orders=Count('id', filter=models.Q(status=Order.Status.CANCELLED)),
        open_orders=Count(
            'id',
            filter=models.Q(status__in=[Order.Status.PENDING, Order.Status.CONFIRMED])
        ),
        total_revenue=Sum('price', filter=models.Q(status=Order.Status.DELIVERED))
    )
    stats['total_revenue'] = str(stats['total_revenue'] or '0.00')

    report = f"""
    ===============================================
    DAILY ORDER REPORT - {yesterday}
    ===============================================
    Total Orders: {stats['total_orders']}
    Delivered: {stats['delivered_orders']}
    Cancelled: {stats['cancelled_orders']}
    Still open: {stats['open_orders']}
    Revenue: K{stats['total_revenue']}
    ===============================================
    """

    logger.info(report)

    return stats
