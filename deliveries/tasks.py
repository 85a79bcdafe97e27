"""
Celery tasks for delivery record keeping.
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
def record_delivery_action(self, snapshot: dict, record_type: str):
    """
    Upsert the device's DeliveryRecord after an order is delivered or dropped.

    Orders without a device id have nothing to key the record on and are skipped.
    """
    from deliveries.services import upsert_delivery_record

    if not snapshot.get('device_id'):
        logger.info(f"Order #{snapshot.get('id')} has no device id, skipping {record_type} record")
        return {'status': 'skipped'}

    record = upsert_delivery_record(snapshot, record_type)
    return {'status': 'success', 'record_id': record.id}
