"""
Delivery Models - capacity settings, the live slot counter, and records of
past deliveries per device.
"""
from django.db import models

from .slots import DEFAULT_SLOTS_FULL_MESSAGE


class DeliverySettings(models.Model):
    """
    Settings for the current delivery run. There is exactly one row (pk=1).
    """
    SINGLETON_PK = 1

    total_slots = models.PositiveIntegerField(
        default=0,
        help_text="Capacity of the current delivery run"
    )
    is_slots_enabled = models.BooleanField(
        default=True,
        help_text="Whether slot capacity is tracked at all"
    )
    disable_when_slots_full = models.BooleanField(
        default=True,
        help_text="Refuse new orders once slots are full"
    )
    slots_full_message = models.CharField(
        max_length=255,
        default=DEFAULT_SLOTS_FULL_MESSAGE,
        help_text="Shown to customers when ordering is closed"
    )
    next_delivery_date = models.DateTimeField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Delivery Settings'
        verbose_name_plural = 'Delivery Settings'

    def __str__(self):
        return f"Delivery settings ({self.total_slots} slots)"

    def save(self, *args, **kwargs):
        self.pk = self.SINGLETON_PK
        super().save(*args, **kwargs)

    @classmethod
    def load(cls) -> 'DeliverySettings':
        settings, _ = cls.objects.get_or_create(pk=cls.SINGLETON_PK)
        return settings


class SlotCounter(models.Model):
    """
    Live count of slots taken in the current run. There is exactly one row (pk=1).
    """
    SINGLETON_PK = 1

    taken_slots = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Slot Counter'
        verbose_name_plural = 'Slot Counter'

    def __str__(self):
        return f"{self.taken_slots} slots taken"


class DeliveryRecord(models.Model):
    """
    Last known delivery details for a device.

    Upserted when one of the device's orders is delivered or dropped so
    staff can place a new order for a returning customer.
    """

    class RecordType(models.TextChoices):
        DELIVERED = 'delivered', 'Delivered'
        DROPPED = 'dropped', 'Dropped'

    device_id = models.CharField(max_length=64, unique=True)
    record_type = models.CharField(
        max_length=20,
        choices=RecordType.choices,
        db_index=True
    )
    name = models.CharField(max_length=200)
    phone = models.CharField(max_length=32)
    delivery_location_type = models.CharField(max_length=20)
    school = models.CharField(max_length=200, blank=True, default='')
    block = models.CharField(max_length=100, blank=True, default='')
    room = models.CharField(max_length=100, blank=True, default='')
    area = models.CharField(max_length=100, blank=True, default='')
    street = models.CharField(max_length=200, blank=True, default='')
    house_number = models.CharField(max_length=100, blank=True, default='')
    last_action_at = models.DateTimeField(db_index=True)

    class Meta:
        verbose_name = 'Delivery Record'
        verbose_name_plural = 'Delivery Records'
        ordering = ['-last_action_at']

    def __str__(self):
        return f"{self.name} ({self.record_type})"

    @property
    def location(self) -> str:
        if self.delivery_location_type == 'school':
            room = f"Room {self.room}" if self.room else ''
            return ', '.join(part for part in (self.school, self.block, room) if part)
        return ', '.join(part for part in (self.area, self.street, self.house_number) if part)
