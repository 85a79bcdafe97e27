"""
Order Lifecycle - the status state machine.

    Pending   --confirm_delivery-->   Confirmed
    Confirmed --mark_as_delivered-->  Delivered
    Pending   --cancel_order-->       Cancelled
    Confirmed --cancel_order-->       Cancelled
    Cancelled --restore_order-->      Pending
    Cancelled --drop_order-->         (deleted)

Anything not listed, including every action on a Delivered order, is
rejected with InvalidTransitionError.
"""
from typing import Optional

from .exceptions import InvalidTransitionError

PENDING = 'Pending'
CONFIRMED = 'Confirmed'
DELIVERED = 'Delivered'
CANCELLED = 'Cancelled'

CONFIRM_DELIVERY = 'confirm_delivery'
MARK_AS_DELIVERED = 'mark_as_delivered'
CANCEL_ORDER = 'cancel_order'
RESTORE_ORDER = 'restore_order'
DROP_ORDER = 'drop_order'

ACTIONS = (CONFIRM_DELIVERY, MARK_AS_DELIVERED, CANCEL_ORDER, RESTORE_ORDER, DROP_ORDER)

# Target of a transition that removes the order
DELETED = None

TRANSITIONS = {
    (PENDING, CONFIRM_DELIVERY): CONFIRMED,
    (CONFIRMED, MARK_AS_DELIVERED): DELIVERED,
    (PENDING, CANCEL_ORDER): CANCELLED,
    (CONFIRMED, CANCEL_ORDER): CANCELLED,
    (CANCELLED, RESTORE_ORDER): PENDING,
    (CANCELLED, DROP_ORDER): DELETED,
}

OPEN_STATUSES = (PENDING, CONFIRMED)


def next_status(status: str, action: str) -> Optional[str]:
    """
    Status reached by applying `action` to an order in `status`.

    Returns:
        The new status, or DELETED (None) for a drop

    Raises:
        InvalidTransitionError: If the table has no such transition
    """
    key = (status, action)
    if key not in TRANSITIONS:
        raise InvalidTransitionError(status, action)
    return TRANSITIONS[key]


def allowed_actions(status: str):
    return [action for (from_status, action) in TRANSITIONS if from_status == status]


def apply_transition(order, action: str):
    """
    Apply `action` to an in-memory order.

    Returns the order with its new status, or None when the action drops it.
    Nothing is persisted here.
    """
    try:
        target = next_status(order.status, action)
    except InvalidTransitionError as e:
        e.order_id = getattr(order, 'pk', None)
        raise
    if target is DELETED:
        return None
    order.status = target
    return order
