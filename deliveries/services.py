"""
Delivery Service Layer - slot counter access and delivery records.

The slot counter is only ever changed here: incremented when an order row is
created and reset by staff. The Slot Ledger reads it through
`read_taken_slots`.
"""
import logging
from typing import Dict

from django.db.models import F
from django.utils import timezone

from .models import DeliverySettings, SlotCounter, DeliveryRecord
from .slots import DeliverySnapshot, slots_left, is_full, can_submit

logger = logging.getLogger(__name__)

ADDRESS_FIELDS = ('school', 'block', 'room', 'area', 'street', 'house_number')


def load_delivery_snapshot() -> DeliverySnapshot:
    return DeliverySnapshot.from_settings(DeliverySettings.load())


def read_taken_slots(for_update: bool = False) -> int:
    """
    Current taken-slot count (0 when the counter has never been written).

    With for_update=True the counter row is created if missing and locked
    until the surrounding transaction ends, so there is always a row to lock.
    """
    queryset = SlotCounter.objects.filter(pk=SlotCounter.SINGLETON_PK)
    if for_update:
        ensure_slot_counter()
        queryset = queryset.select_for_update()
    counter = queryset.first()
    return counter.taken_slots if counter else 0


def ensure_slot_counter() -> SlotCounter:
    counter, created = SlotCounter.objects.get_or_create(pk=SlotCounter.SINGLETON_PK)
    if created:
        logger.info("Slot counter created")
    return counter


def increment_taken_slots() -> None:
    ensure_slot_counter()
    SlotCounter.objects.filter(pk=SlotCounter.SINGLETON_PK).update(
        taken_slots=F('taken_slots') + 1,
        updated_at=timezone.now()
    )


def reset_slots() -> None:
    """Set the taken-slot count to 0. Safe to call repeatedly."""
    SlotCounter.objects.update_or_create(
        pk=SlotCounter.SINGLETON_PK,
        defaults={'taken_slots': 0}
    )
    logger.info("Slot counter reset to 0")


def get_delivery_status() -> Dict:
    """Snapshot of the ledger as shown on the storefront."""
    settings = load_delivery_snapshot()
    taken = read_taken_slots()
    return {
        'is_slots_enabled': settings.is_slots_enabled,
        'total_slots': settings.total_slots,
        'taken_slots': taken,
        'slots_left': max(slots_left(settings, taken), 0),
        'is_full': is_full(settings, taken),
        'can_submit': can_submit(settings, taken),
        'slots_full_message': settings.slots_full_message,
        'next_delivery_date': settings.next_delivery_date,
    }


def upsert_delivery_record(snapshot: Dict, record_type: str) -> DeliveryRecord:
    """
    Store the latest delivery details for the order's device.

    Args:
        snapshot: Order fields (see Order.record_snapshot)
        record_type: DeliveryRecord.RecordType value
    """
    defaults = {
        'record_type': record_type,
        'name': snapshot['name'],
        'phone': snapshot['phone'],
        'delivery_location_type': snapshot['delivery_location_type'],
        'last_action_at': timezone.now(),
    }
    defaults.update({field: snapshot.get(field) or '' for field in ADDRESS_FIELDS})

    record, created = DeliveryRecord.objects.update_or_create(
        device_id=snapshot['device_id'],
        defaults=defaults
    )
    logger.info(
        f"{'Created' if created else 'Updated'} {record_type} record for device {record.device_id}"
    )
    return record
