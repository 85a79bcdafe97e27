"""
Slot Ledger - capacity decisions for the current delivery run.

Pure functions over a DeliverySnapshot and the taken-slot count supplied by
the caller. Counting and resetting slots is done elsewhere.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

DEFAULT_SLOTS_FULL_MESSAGE = "We're fully booked for now!"


@dataclass(frozen=True)
class DeliverySnapshot:
    total_slots: int = 0
    is_slots_enabled: bool = True
    disable_when_slots_full: bool = True
    slots_full_message: str = DEFAULT_SLOTS_FULL_MESSAGE
    next_delivery_date: Optional[datetime] = None

    @classmethod
    def from_settings(cls, settings) -> 'DeliverySnapshot':
        return cls(
            total_slots=settings.total_slots or 0,
            is_slots_enabled=settings.is_slots_enabled,
            disable_when_slots_full=settings.disable_when_slots_full,
            slots_full_message=settings.slots_full_message or DEFAULT_SLOTS_FULL_MESSAGE,
            next_delivery_date=settings.next_delivery_date,
        )


def slots_left(settings: DeliverySnapshot, taken_slots: int) -> int:
    return settings.total_slots - taken_slots


def is_full(settings: DeliverySnapshot, taken_slots: int) -> bool:
    return settings.is_slots_enabled and slots_left(settings, taken_slots) <= 0


def can_submit(settings: DeliverySnapshot, taken_slots: int) -> bool:
    """New orders are refused only when slots are full and full means closed."""
    return not (is_full(settings, taken_slots) and settings.disable_when_slots_full)
