"""
Slot counting: every order row created while slots are enabled takes a slot.
"""
import logging

from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import DeliverySettings
from .services import increment_taken_slots

logger = logging.getLogger(__name__)


@receiver(post_save, sender='orders.Order')
def take_slot_for_new_order(sender, instance, created, raw=False, **kwargs):
    if not created or raw:
        return
    if DeliverySettings.load().is_slots_enabled:
        increment_taken_slots()
        logger.debug(f"Order #{instance.pk} took a delivery slot")
