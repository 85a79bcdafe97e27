"""
Order Service Layer - submission and status transitions.

Submission:
1. Validate contact details and the selection
2. Price the selection against the current price table
3. Consult the Slot Ledger (slot counter locked for the transaction)
4. Create the order in Pending, queue the notification task

Transitions are one conditional UPDATE (or DELETE for drop) keyed on the
status the order was read in, so two staff members acting at once cannot
both succeed.
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Dict, Optional, Union

from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone

from catalog.models import PriceTable, Product
from deliveries.services import load_delivery_snapshot, read_taken_slots
from deliveries.slots import can_submit
from . import lifecycle
from .constants import (
    SCHOOLS,
    AREAS,
    SCHOOL,
    OFF_CAMPUS,
    SCHOOL_ADDRESS_FIELDS,
    OFF_CAMPUS_ADDRESS_FIELDS,
)
from .exceptions import (
    CapacityError,
    InvalidTransitionError,
    OrderNotFoundError,
    OrderValidationError,
    PersistenceError,
)
from .models import Order
from .pricing import (
    ChickenSelection,
    GenericSelection,
    PriceSnapshot,
    QuantityPolicy,
    compute_price,
    is_valid_mixed_quantity,
    resolve_option,
    sync_custom_quantity,
    variations_from_product,
    CUSTOM,
    MIXED,
    PIECES,
    WHOLE,
)

logger = logging.getLogger(__name__)

Selection = Union[ChickenSelection, GenericSelection]

INVALID_DATA_MESSAGE = 'Invalid data provided. Please check the form.'
SUCCESS_MESSAGE = 'Your order has been placed successfully!'
PERSISTENCE_MESSAGE = 'Failed to place order. Please try again.'


@dataclass
class SubmissionResult:
    success: bool
    message: str
    order_id: Optional[int] = None
    errors: Dict[str, str] = field(default_factory=dict)
    reason: str = ''

    VALIDATION = 'validation'
    CAPACITY = 'capacity'
    PERSISTENCE = 'persistence'


def get_quantity_policy() -> QuantityPolicy:
    return QuantityPolicy.from_settings(getattr(settings, 'ORDER_QUANTITY_POLICY', None))


def get_price_snapshot() -> PriceSnapshot:
    return PriceSnapshot.from_price_table(PriceTable.load())


# =============================================================================
# Validation
# =============================================================================

def _blank(value) -> bool:
    return not value or not str(value).strip()


def validate_contact(contact: Dict) -> Dict[str, str]:
    """
    Validate name, phone and the address shape for the delivery location type.

    Returns:
        Dict of field -> error message (empty when valid)
    """
    errors = {}
    name = (contact.get('name') or '').strip()
    phone = (contact.get('phone') or '').strip()

    if len(name) < 2:
        errors['name'] = 'Name must be at least 2 characters.'
    if len(phone) < 10:
        errors['phone'] = 'Please enter a valid phone number.'

    location_type = contact.get('delivery_location_type') or SCHOOL
    if location_type == SCHOOL:
        if contact.get('school') not in SCHOOLS:
            errors['school'] = 'Please select a school.'
        if _blank(contact.get('block')):
            errors['block'] = 'Block is required.'
        if _blank(contact.get('room')):
            errors['room'] = 'Room number is required.'
    elif location_type == OFF_CAMPUS:
        if contact.get('area') not in AREAS:
            errors['area'] = 'Please select an area.'
        if _blank(contact.get('street')):
            errors['street'] = 'Street is required.'
        if _blank(contact.get('house_number')):
            errors['house_number'] = 'House number is required.'
    else:
        errors['delivery_location_type'] = 'Please choose school or off-campus delivery.'

    return errors


def validate_chicken_selection(
    selection: ChickenSelection,
    price_table: PriceSnapshot,
    policy: QuantityPolicy
) -> Dict[str, str]:
    errors = {}
    if selection.chicken_type == WHOLE:
        if selection.quantity < policy.whole_min_quantity:
            errors['quantity'] = 'You must select at least one item.'
    elif selection.chicken_type == PIECES:
        if selection.pieces_type == MIXED:
            if selection.quantity < policy.mixed_min_quantity:
                errors['quantity'] = f'Mixed pieces start at {policy.mixed_min_quantity}.'
            elif not is_valid_mixed_quantity(selection.quantity, policy):
                errors['quantity'] = (
                    f'Mixed pieces come in {policy.mixed_min_quantity} '
                    f'or steps of {policy.mixed_step}.'
                )
        elif selection.pieces_type == CUSTOM:
            if not price_table.is_choose_pieces_enabled:
                errors['pieces_type'] = 'Choosing individual pieces is not available right now.'
            elif sync_custom_quantity(selection.piece_details) < 1:
                errors['quantity'] = 'Please select at least one chicken piece.'
            elif selection.quantity != sync_custom_quantity(selection.piece_details):
                errors['quantity'] = 'Quantity must equal the number of pieces selected.'
        else:
            errors['pieces_type'] = 'Please select a piece type.'
    else:
        errors['chicken_type'] = 'Please choose whole chicken or pieces.'
    return errors


def validate_generic_selection(selection: GenericSelection, product: Optional[Product], variations, policy: QuantityPolicy) -> Dict[str, str]:
    errors = {}
    if product is None:
        errors['product_id'] = 'Product not found or unavailable.'
        return errors
    if selection.quantity < policy.generic_min_quantity:
        errors['quantity'] = 'Quantity must be at least 1.'
    if resolve_option(variations, selection.variation_name, selection.option_name) is None:
        errors['option_name'] = 'Please select a valid option.'
    return errors


def _address_fields(contact: Dict) -> Dict[str, str]:
    """Keep only the address shape matching the delivery location type."""
    location_type = contact.get('delivery_location_type') or SCHOOL
    keep = SCHOOL_ADDRESS_FIELDS if location_type == SCHOOL else OFF_CAMPUS_ADDRESS_FIELDS
    fields = {
        name: (contact.get(name) or '').strip()
        for name in SCHOOL_ADDRESS_FIELDS + OFF_CAMPUS_ADDRESS_FIELDS
    }
    for name in fields:
        if name not in keep:
            fields[name] = ''
    fields['delivery_location_type'] = location_type
    return fields


# =============================================================================
# Submission
# =============================================================================

def submit_order(
    selection: Selection,
    contact: Dict,
    device_id: Optional[str] = None,
    user=None,
    read_taken_slots_fn: Optional[Callable[[], int]] = None
) -> SubmissionResult:
    """
    Validate, price, gate and persist a new order.

    Args:
        selection: ChickenSelection or GenericSelection
        contact: name, phone, delivery_location_type and address fields
        device_id: Anonymous device the order is attributed to
        user: Authenticated user placing the order, if any
        read_taken_slots_fn: Returns the current taken-slot count; defaults to
            reading the slot counter with a row lock

    Returns:
        SubmissionResult; never raises for validation, capacity or database errors
    """
    policy = get_quantity_policy()
    price_table = get_price_snapshot()
    errors = validate_contact(contact)

    product = None
    variations = ()
    if isinstance(selection, GenericSelection):
        product = (
            Product.objects.prefetch_related('variations__options')
            .filter(
                id=selection.product_id,
                is_active=True,
                product_type=Product.ProductType.GENERIC
            )
            .first()
        )
        if product is not None:
            variations = variations_from_product(product)
        errors.update(validate_generic_selection(selection, product, variations, policy))
    else:
        errors.update(validate_chicken_selection(selection, price_table, policy))

    if errors:
        logger.warning(f"Order validation failed: {errors}")
        return SubmissionResult(
            success=False,
            message=INVALID_DATA_MESSAGE,
            errors=errors,
            reason=SubmissionResult.VALIDATION
        )

    price = compute_price(selection, price_table, variations)
    fields = _order_fields(selection, product, contact)

    if read_taken_slots_fn is None:
        def read_taken_slots_fn():
            return read_taken_slots(for_update=True)

    try:
        with transaction.atomic():
            delivery = load_delivery_snapshot()
            if not can_submit(delivery, read_taken_slots_fn()):
                raise CapacityError(delivery.slots_full_message)

            order = Order.objects.create(
                status=Order.Status.PENDING,
                price=price,
                device_id=device_id or '',
                user=user if user is not None and user.is_authenticated else None,
                **fields
            )
    except CapacityError as e:
        logger.warning(f"Order refused, delivery slots full: {e.message}")
        return SubmissionResult(
            success=False,
            message=e.message,
            reason=SubmissionResult.CAPACITY
        )
    except DatabaseError as e:
        logger.exception(f"Database error while placing order: {e}")
        return SubmissionResult(
            success=False,
            message=PERSISTENCE_MESSAGE,
            reason=SubmissionResult.PERSISTENCE
        )

    logger.info(f"Created order #{order.id} ({order.items_summary}) total K{order.price}")

    try:
        from .tasks import send_order_notification
        send_order_notification.delay(order.id)
    except Exception as e:
        # The order stands even if the notification cannot be queued
        logger.error(f"Failed to queue notification task: {e}")

    return SubmissionResult(success=True, message=SUCCESS_MESSAGE, order_id=order.id)


def _order_fields(selection: Selection, product: Optional[Product], contact: Dict) -> Dict:
    fields = {
        'name': contact['name'].strip(),
        'phone': contact['phone'].strip(),
        **_address_fields(contact),
    }
    if isinstance(selection, GenericSelection):
        fields.update({
            'product_type': Order.ProductType.GENERIC,
            'product': product,
            'product_name': product.name,
            'variation_name': selection.variation_name or '',
            'option_name': selection.option_name,
            'quantity': selection.quantity,
        })
        return fields

    fields.update({
        'product_type': Order.ProductType.CHICKEN,
        'chicken_type': selection.chicken_type,
        'pieces_type': selection.pieces_type if selection.chicken_type == PIECES else '',
        'quantity': selection.quantity,
    })
    if selection.is_custom:
        fields.update(selection.piece_details.as_dict())
        fields['quantity'] = sync_custom_quantity(selection.piece_details)
    return fields


# =============================================================================
# Lifecycle transitions
# =============================================================================

def _raise_for_stale(order_id: int, action: str) -> None:
    """The conditional write matched nothing: report why."""
    current = Order.objects.filter(pk=order_id).values_list('status', flat=True).first()
    if current is None:
        raise OrderNotFoundError(order_id)
    raise InvalidTransitionError(current, action, order_id)


def transition_order(order_id: int, action: str) -> Optional[Order]:
    """
    Apply a lifecycle action to a stored order.

    Returns:
        The updated order, or None when the action dropped it

    Raises:
        OrderNotFoundError: No order with this id
        InvalidTransitionError: Action not allowed from the order's status
        PersistenceError: The database write failed
    """
    try:
        order = Order.objects.get(pk=order_id)
    except Order.DoesNotExist:
        logger.warning(f"{action} on missing order #{order_id}")
        raise OrderNotFoundError(order_id)
    except DatabaseError as e:
        raise PersistenceError(f"Could not read order {order_id}") from e

    from_status = order.status
    snapshot = order.record_snapshot()
    try:
        transitioned = lifecycle.apply_transition(order, action)
    except InvalidTransitionError:
        logger.warning(f"Rejected {action} on order #{order_id}: status is {from_status}")
        raise
    target = lifecycle.DELETED if transitioned is None else transitioned.status

    matching = Order.objects.filter(pk=order_id, status=from_status)
    try:
        if target is lifecycle.DELETED:
            deleted, _ = matching.delete()
            if not deleted:
                _raise_for_stale(order_id, action)
        else:
            updated = matching.update(status=target, updated_at=timezone.now())
            if not updated:
                _raise_for_stale(order_id, action)
    except DatabaseError as e:
        logger.exception(f"Database error during {action} on order #{order_id}: {e}")
        raise PersistenceError(f"Could not update order {order_id}") from e

    if target is lifecycle.DELETED:
        logger.info(f"Order #{order_id} dropped")
        _queue_delivery_record(snapshot, 'dropped')
        return None

    logger.info(f"Order #{order_id}: {from_status} -> {target}")
    if target == lifecycle.DELIVERED:
        _queue_delivery_record(order.record_snapshot(), 'delivered')
    return order


def _queue_delivery_record(snapshot: Dict, record_type: str) -> None:
    try:
        from deliveries.tasks import record_delivery_action
        record_delivery_action.delay(snapshot, record_type)
    except Exception as e:
        logger.error(f"Failed to queue {record_type} record for order #{snapshot.get('id')}: {e}")


def confirm_delivery(order_id: int) -> Order:
    return transition_order(order_id, lifecycle.CONFIRM_DELIVERY)


def mark_as_delivered(order_id: int) -> Order:
    return transition_order(order_id, lifecycle.MARK_AS_DELIVERED)


def cancel_order(order_id: int) -> Order:
    return transition_order(order_id, lifecycle.CANCEL_ORDER)


def restore_order(order_id: int) -> Order:
    return transition_order(order_id, lifecycle.RESTORE_ORDER)


def drop_order(order_id: int) -> None:
    transition_order(order_id, lifecycle.DROP_ORDER)


# =============================================================================
# Administrative
# =============================================================================

def clear_all_orders(confirmation_code: str) -> int:
    """
    Permanently delete every order.

    Raises:
        OrderValidationError: If the confirmation code does not match
    """
    if confirmation_code != settings.ORDER_WIPE_CONFIRMATION_CODE:
        raise OrderValidationError({'confirmation_code': 'Incorrect confirmation code.'})
    try:
        deleted, _ = Order.objects.all().delete()
    except DatabaseError as e:
        logger.exception(f"Database error while clearing orders: {e}")
        raise PersistenceError("Could not clear orders") from e
    logger.warning(f"Cleared all orders ({deleted} deleted)")
    return deleted


def quote(selection: Selection) -> Decimal:
    """Price preview for the order forms."""
    variations = ()
    if isinstance(selection, GenericSelection):
        product = (
            Product.objects.prefetch_related('variations__options')
            .filter(id=selection.product_id, is_active=True)
            .first()
        )
        if product is not None:
            variations = variations_from_product(product)
    return compute_price(selection, get_price_snapshot(), variations)
