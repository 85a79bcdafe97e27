"""
Tests for order pricing, submission and the status lifecycle.

Test Cases:
1. Pricing rules for whole, mixed, custom and generic selections
2. Mixed quantity stepping and the quantity policy
3. Lifecycle transition table
4. Submission: validation, slot gating, persistence failures
5. Stored transitions: confirm, deliver, cancel, restore, drop
6. Order API endpoints
"""
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.test import SimpleTestCase, TestCase, override_settings
from rest_framework.test import APIClient

from catalog.models import PriceTable, Product, ProductVariation, ProductOption
from deliveries.models import DeliverySettings, DeliveryRecord, SlotCounter
from deliveries.services import read_taken_slots
from orders import lifecycle
from orders.constants import SCHOOLS, AREAS
from orders.exceptions import InvalidTransitionError, OrderNotFoundError, OrderValidationError, PersistenceError
from orders.models import Order
from orders.pricing import (
    ChickenSelection,
    GenericSelection,
    OptionSnapshot,
    PieceDetails,
    PriceSnapshot,
    QuantityPolicy,
    VariationSnapshot,
    compute_price,
    compute_profit,
    is_valid_mixed_quantity,
    resolve_option,
    select_variation,
    step_mixed_quantity,
    sync_custom_quantity,
    to_decimal,
)
from orders.services import (
    SubmissionResult,
    cancel_order,
    clear_all_orders,
    confirm_delivery,
    drop_order,
    mark_as_delivered,
    restore_order,
    submit_order,
)

PRICES = PriceSnapshot(
    whole=Decimal('150.00'),
    mixed_piece=Decimal('15.00'),
    breasts=Decimal('30.00'),
    thighs=Decimal('20.00'),
    drumsticks=Decimal('15.00'),
    wings=Decimal('10.00'),
)

VARIATIONS = (
    VariationSnapshot(name='Size', options=(
        OptionSnapshot(name='Small', price=Decimal('20.00'), profit=Decimal('5.00')),
        OptionSnapshot(name='Large', price=Decimal('35.00'), profit=Decimal('9.00')),
    )),
    VariationSnapshot(name='Pack', options=(
        OptionSnapshot(name='Family', price=Decimal('90.00')),
    )),
)

CONTACT = {
    'name': 'Jane Banda',
    'phone': '0971234567',
    'delivery_location_type': 'school',
    'school': SCHOOLS[0],
    'block': 'B',
    'room': '12',
}


def make_order(**kwargs):
    fields = {
        'product_type': Order.ProductType.CHICKEN,
        'chicken_type': Order.ChickenType.WHOLE,
        'quantity': 1,
        'price': Decimal('150.00'),
        **CONTACT,
    }
    fields.update(kwargs)
    return Order.objects.create(**fields)


class PricingTestCase(SimpleTestCase):
    """Test cases for the pure pricing rules."""

    def test_whole_chicken_price(self):
        """Two whole chickens at 150.00 cost 300.00."""
        selection = ChickenSelection(chicken_type='whole', quantity=2)
        self.assertEqual(compute_price(selection, PRICES), Decimal('300.00'))

    def test_whole_price_grows_with_quantity(self):
        totals = [
            compute_price(ChickenSelection(chicken_type='whole', quantity=q), PRICES)
            for q in range(1, 6)
        ]
        self.assertEqual(totals, sorted(totals))
        self.assertEqual(totals[-1], Decimal('750.00'))

    def test_mixed_pieces_price(self):
        selection = ChickenSelection(chicken_type='pieces', pieces_type='mixed', quantity=5)
        self.assertEqual(compute_price(selection, PRICES), Decimal('75.00'))

    def test_custom_pieces_price(self):
        """
        Given: 2 breasts, 0 thighs, 1 drumstick, 3 wings
        Then: total is 105.00 and the quantity is 6
        """
        details = PieceDetails(breasts=2, thighs=0, drumsticks=1, wings=3)
        selection = ChickenSelection(
            chicken_type='pieces', pieces_type='custom', quantity=6, piece_details=details
        )
        self.assertEqual(compute_price(selection, PRICES), Decimal('105.00'))
        self.assertEqual(sync_custom_quantity(details), 6)
        self.assertEqual(sync_custom_quantity(details), sync_custom_quantity(details))

    def test_missing_prices_count_as_zero(self):
        table = SimpleNamespace(whole=None, mixed_piece='', breasts='abc', thighs=Decimal('-5'))
        snapshot = PriceSnapshot.from_price_table(table)

        self.assertEqual(compute_price(ChickenSelection(chicken_type='whole', quantity=3), snapshot), Decimal('0.00'))
        custom = ChickenSelection(
            chicken_type='pieces', pieces_type='custom', quantity=2,
            piece_details=PieceDetails(breasts=1, thighs=1)
        )
        self.assertEqual(compute_price(custom, snapshot), Decimal('0.00'))
        self.assertTrue(snapshot.is_choose_pieces_enabled)

    def test_to_decimal(self):
        self.assertEqual(to_decimal('12.5'), Decimal('12.5'))
        self.assertEqual(to_decimal(None), Decimal('0.00'))
        self.assertEqual(to_decimal('NaN'), Decimal('0.00'))
        self.assertEqual(to_decimal(-1), Decimal('0.00'))

    def test_generic_price(self):
        selection = GenericSelection(product_id=1, variation_name='Size', option_name='Large', quantity=2)
        self.assertEqual(compute_price(selection, PRICES, VARIATIONS), Decimal('70.00'))

    def test_generic_empty_variation_uses_first(self):
        selection = GenericSelection(product_id=1, option_name='Small', quantity=3)
        self.assertEqual(compute_price(selection, PRICES, VARIATIONS), Decimal('60.00'))

    def test_generic_unknown_option_prices_zero(self):
        selection = GenericSelection(product_id=1, variation_name='Pack', option_name='Large')
        self.assertEqual(compute_price(selection, PRICES, VARIATIONS), Decimal('0.00'))
        self.assertIsNone(resolve_option(VARIATIONS, 'Pack', 'Large'))

    def test_select_variation_resets_option(self):
        variation, option = select_variation(VARIATIONS, 'Pack')
        self.assertEqual(variation.name, 'Pack')
        self.assertEqual(option.name, 'Family')

        variation, option = select_variation(VARIATIONS)
        self.assertEqual(variation.name, 'Size')
        self.assertEqual(option.name, 'Small')

        self.assertEqual(select_variation((), 'Size'), (None, None))

    def test_profit(self):
        profits = PriceSnapshot(whole=Decimal('40.00'), wings=Decimal('2.50'))
        self.assertEqual(
            compute_profit(ChickenSelection(chicken_type='whole', quantity=2), profits),
            Decimal('80.00')
        )
        custom = ChickenSelection(
            chicken_type='pieces', pieces_type='custom', quantity=4,
            piece_details=PieceDetails(wings=4)
        )
        self.assertEqual(compute_profit(custom, profits), Decimal('10.00'))
        generic = GenericSelection(product_id=1, variation_name='Size', option_name='Large', quantity=3)
        self.assertEqual(compute_profit(generic, profits, VARIATIONS), Decimal('27.00'))


class QuantityPolicyTestCase(SimpleTestCase):

    def test_mixed_stepping(self):
        """2 -> 5 -> 10 going up, 10 -> 5 -> 2 going down, never below 2."""
        self.assertEqual(step_mixed_quantity(2, 1), 5)
        self.assertEqual(step_mixed_quantity(5, 1), 10)
        self.assertEqual(step_mixed_quantity(10, -1), 5)
        self.assertEqual(step_mixed_quantity(5, -1), 2)
        self.assertEqual(step_mixed_quantity(2, -1), 2)
        self.assertEqual(step_mixed_quantity(0, 0), 2)

    def test_valid_mixed_quantities(self):
        for quantity in (2, 5, 10, 15, 100):
            self.assertTrue(is_valid_mixed_quantity(quantity), quantity)
        for quantity in (0, 1, 3, 4, 7, 12):
            self.assertFalse(is_valid_mixed_quantity(quantity), quantity)

    def test_policy_from_settings(self):
        policy = QuantityPolicy.from_settings({'MIXED_STEP': 10, 'UNRELATED': 1})
        self.assertEqual(policy.mixed_step, 10)
        self.assertEqual(policy.mixed_min_quantity, 2)
        self.assertEqual(step_mixed_quantity(5, 1, policy), 15)
        self.assertEqual(QuantityPolicy.from_settings(None), QuantityPolicy())


class LifecycleTestCase(SimpleTestCase):
    """Test cases for the transition table."""

    def test_allowed_transitions(self):
        self.assertEqual(lifecycle.next_status('Pending', 'confirm_delivery'), 'Confirmed')
        self.assertEqual(lifecycle.next_status('Confirmed', 'mark_as_delivered'), 'Delivered')
        self.assertEqual(lifecycle.next_status('Pending', 'cancel_order'), 'Cancelled')
        self.assertEqual(lifecycle.next_status('Confirmed', 'cancel_order'), 'Cancelled')
        self.assertEqual(lifecycle.next_status('Cancelled', 'restore_order'), 'Pending')
        self.assertIsNone(lifecycle.next_status('Cancelled', 'drop_order'))

    def test_delivered_is_terminal(self):
        for action in lifecycle.ACTIONS:
            with self.assertRaises(InvalidTransitionError):
                lifecycle.next_status('Delivered', action)
        self.assertEqual(lifecycle.allowed_actions('Delivered'), [])

    def test_rejected_transitions(self):
        with self.assertRaises(InvalidTransitionError) as context:
            lifecycle.next_status('Pending', 'mark_as_delivered')
        self.assertEqual(context.exception.status, 'Pending')
        self.assertEqual(context.exception.action, 'mark_as_delivered')

        with self.assertRaises(InvalidTransitionError):
            lifecycle.next_status('Pending', 'drop_order')

    def test_allowed_actions(self):
        self.assertEqual(
            sorted(lifecycle.allowed_actions('Cancelled')),
            ['drop_order', 'restore_order']
        )

    def test_apply_transition(self):
        order = SimpleNamespace(pk=7, status='Pending')
        self.assertIs(lifecycle.apply_transition(order, 'confirm_delivery'), order)
        self.assertEqual(order.status, 'Confirmed')

        with self.assertRaises(InvalidTransitionError) as context:
            lifecycle.apply_transition(order, 'restore_order')
        self.assertEqual(context.exception.order_id, 7)
        self.assertEqual(order.status, 'Confirmed')

        cancelled = SimpleNamespace(pk=8, status='Cancelled')
        self.assertIsNone(lifecycle.apply_transition(cancelled, 'drop_order'))


class SubmitOrderTestCase(TestCase):
    """Test cases for order submission."""

    def setUp(self):
        self.delivery = DeliverySettings.load()
        self.delivery.total_slots = 10
        self.delivery.save()
        PriceTable.load()

        self.product = Product.objects.create(name='Eggs', product_type=Product.ProductType.GENERIC)
        size = ProductVariation.objects.create(product=self.product, name='Size', position=0)
        ProductOption.objects.create(variation=size, name='Tray', price=Decimal('75.00'), position=0)
        ProductOption.objects.create(variation=size, name='Half tray', price=Decimal('40.00'), position=1)

    def test_whole_order_is_pending(self):
        result = submit_order(
            ChickenSelection(chicken_type='whole', quantity=2),
            CONTACT,
            device_id='device-1'
        )

        self.assertTrue(result.success)
        order = Order.objects.get(id=result.order_id)
        self.assertEqual(order.status, Order.Status.PENDING)
        self.assertEqual(order.price, Decimal('300.00'))
        self.assertEqual(order.device_id, 'device-1')
        self.assertEqual(order.items_summary, '2x Whole Chickens')

    def test_submission_takes_a_slot(self):
        for _ in range(3):
            submit_order(ChickenSelection(chicken_type='whole', quantity=1), CONTACT)
        self.assertEqual(read_taken_slots(), 3)

    def test_slots_disabled_does_not_count(self):
        self.delivery.is_slots_enabled = False
        self.delivery.save()

        result = submit_order(ChickenSelection(chicken_type='whole', quantity=1), CONTACT)

        self.assertTrue(result.success)
        self.assertEqual(read_taken_slots(), 0)

    def test_custom_pieces_order(self):
        selection = ChickenSelection(
            chicken_type='pieces', pieces_type='custom', quantity=6,
            piece_details=PieceDetails(breasts=2, thighs=0, drumsticks=1, wings=3)
        )
        result = submit_order(selection, CONTACT)

        order = Order.objects.get(id=result.order_id)
        self.assertEqual(order.price, Decimal('105.00'))
        self.assertEqual(order.quantity, 6)
        self.assertEqual(order.items_summary, '2x breasts, 1x drumsticks, 3x wings')

    def test_full_slots_reject_with_configured_message(self):
        """
        Given: 5 of 5 slots taken, slots enabled, ordering closes when full
        Then: submission fails with the configured message, nothing stored
        """
        self.delivery.total_slots = 5
        self.delivery.slots_full_message = 'Back on Friday!'
        self.delivery.save()
        SlotCounter.objects.create(pk=SlotCounter.SINGLETON_PK, taken_slots=5)

        result = submit_order(ChickenSelection(chicken_type='whole', quantity=1), CONTACT)

        self.assertFalse(result.success)
        self.assertEqual(result.reason, SubmissionResult.CAPACITY)
        self.assertEqual(result.message, 'Back on Friday!')
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(read_taken_slots(), 5)

    def test_injected_slot_reader(self):
        result = submit_order(
            ChickenSelection(chicken_type='whole', quantity=1),
            CONTACT,
            read_taken_slots_fn=lambda: 10
        )
        self.assertEqual(result.reason, SubmissionResult.CAPACITY)

    def test_full_slots_still_open_when_not_disabling(self):
        self.delivery.disable_when_slots_full = False
        self.delivery.save()

        result = submit_order(
            ChickenSelection(chicken_type='whole', quantity=1),
            CONTACT,
            read_taken_slots_fn=lambda: 10
        )
        self.assertTrue(result.success)

    def test_contact_validation(self):
        contact = dict(CONTACT, name='J', phone='097', block='', room=' ')

        result = submit_order(ChickenSelection(chicken_type='whole', quantity=1), contact)

        self.assertFalse(result.success)
        self.assertEqual(result.reason, SubmissionResult.VALIDATION)
        self.assertEqual(set(result.errors), {'name', 'phone', 'block', 'room'})
        self.assertEqual(Order.objects.count(), 0)

    def test_off_campus_keeps_only_off_campus_address(self):
        contact = dict(
            CONTACT,
            delivery_location_type='off-campus',
            area=AREAS[0],
            street='Independence Ave',
            house_number='14',
        )

        result = submit_order(ChickenSelection(chicken_type='whole', quantity=1), contact)

        order = Order.objects.get(id=result.order_id)
        self.assertEqual(order.area, AREAS[0])
        self.assertEqual(order.school, '')
        self.assertEqual(order.block, '')
        self.assertEqual(order.location, f'{AREAS[0]}, Independence Ave, 14')

    def test_custom_quantity_must_match_pieces(self):
        selection = ChickenSelection(
            chicken_type='pieces', pieces_type='custom', quantity=4,
            piece_details=PieceDetails(breasts=2)
        )
        result = submit_order(selection, CONTACT)
        self.assertIn('quantity', result.errors)

    def test_custom_pieces_need_at_least_one_piece(self):
        selection = ChickenSelection(chicken_type='pieces', pieces_type='custom', quantity=0)
        result = submit_order(selection, CONTACT)
        self.assertIn('quantity', result.errors)

    def test_custom_pieces_disabled(self):
        table = PriceTable.load()
        table.is_choose_pieces_enabled = False
        table.save()

        selection = ChickenSelection(
            chicken_type='pieces', pieces_type='custom', quantity=1,
            piece_details=PieceDetails(wings=1)
        )
        result = submit_order(selection, CONTACT)
        self.assertIn('pieces_type', result.errors)

    def test_mixed_quantity_must_follow_steps(self):
        result = submit_order(
            ChickenSelection(chicken_type='pieces', pieces_type='mixed', quantity=3),
            CONTACT
        )
        self.assertIn('quantity', result.errors)

        result = submit_order(
            ChickenSelection(chicken_type='pieces', pieces_type='mixed', quantity=10),
            CONTACT
        )
        self.assertTrue(result.success)

    def test_generic_order(self):
        selection = GenericSelection(
            product_id=self.product.id, variation_name='Size', option_name='Half tray', quantity=2
        )
        result = submit_order(selection, CONTACT)

        order = Order.objects.get(id=result.order_id)
        self.assertEqual(order.product_type, Order.ProductType.GENERIC)
        self.assertEqual(order.product_name, 'Eggs')
        self.assertEqual(order.price, Decimal('80.00'))
        self.assertEqual(order.items_summary, '2x Eggs (Size: Half tray)')

    def test_generic_inactive_product(self):
        self.product.is_active = False
        self.product.save()

        result = submit_order(
            GenericSelection(product_id=self.product.id, option_name='Tray'),
            CONTACT
        )
        self.assertIn('product_id', result.errors)

    def test_generic_unknown_option(self):
        result = submit_order(
            GenericSelection(product_id=self.product.id, variation_name='Size', option_name='Crate'),
            CONTACT
        )
        self.assertIn('option_name', result.errors)

    def test_database_error_is_reported(self):
        with patch('orders.services.Order.objects.create', side_effect=DatabaseError('disk full')):
            result = submit_order(ChickenSelection(chicken_type='whole', quantity=1), CONTACT)

        self.assertFalse(result.success)
        self.assertEqual(result.reason, SubmissionResult.PERSISTENCE)
        self.assertEqual(Order.objects.count(), 0)

    def test_notification_failure_keeps_order(self):
        with patch('orders.tasks.send_order_notification.delay', side_effect=RuntimeError('broker down')):
            result = submit_order(ChickenSelection(chicken_type='whole', quantity=1), CONTACT)

        self.assertTrue(result.success)
        self.assertTrue(Order.objects.filter(id=result.order_id).exists())


class OrderTransitionTestCase(TestCase):
    """Test cases for stored lifecycle transitions."""

    def setUp(self):
        DeliverySettings.objects.create(total_slots=10)
        self.order = make_order(device_id='device-1')

    def test_confirm_then_deliver(self):
        order = confirm_delivery(self.order.id)
        self.assertEqual(order.status, Order.Status.CONFIRMED)

        order = mark_as_delivered(self.order.id)
        self.assertEqual(order.status, Order.Status.DELIVERED)

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.Status.DELIVERED)

    def test_delivered_order_rejects_confirm(self):
        confirm_delivery(self.order.id)
        mark_as_delivered(self.order.id)

        with self.assertRaises(InvalidTransitionError):
            confirm_delivery(self.order.id)
        with self.assertRaises(InvalidTransitionError):
            mark_as_delivered(self.order.id)

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.Status.DELIVERED)

    def test_pending_cannot_skip_to_delivered(self):
        with self.assertRaises(InvalidTransitionError):
            mark_as_delivered(self.order.id)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.Status.PENDING)

    def test_delivery_writes_record(self):
        confirm_delivery(self.order.id)
        mark_as_delivered(self.order.id)

        record = DeliveryRecord.objects.get(device_id='device-1')
        self.assertEqual(record.record_type, DeliveryRecord.RecordType.DELIVERED)
        self.assertEqual(record.name, 'Jane Banda')
        self.assertEqual(record.room, '12')

    def test_cancel_restore_cancel_drop(self):
        confirm_delivery(self.order.id)
        self.assertEqual(cancel_order(self.order.id).status, Order.Status.CANCELLED)
        self.assertEqual(restore_order(self.order.id).status, Order.Status.PENDING)
        self.assertEqual(cancel_order(self.order.id).status, Order.Status.CANCELLED)

        self.assertIsNone(drop_order(self.order.id))

        self.assertFalse(Order.objects.filter(id=self.order.id).exists())
        with self.assertRaises(OrderNotFoundError):
            drop_order(self.order.id)
        record = DeliveryRecord.objects.get(device_id='device-1')
        self.assertEqual(record.record_type, DeliveryRecord.RecordType.DROPPED)

    def test_drop_requires_cancelled(self):
        with self.assertRaises(InvalidTransitionError):
            drop_order(self.order.id)
        self.assertTrue(Order.objects.filter(id=self.order.id).exists())

    def test_missing_order(self):
        with self.assertRaises(OrderNotFoundError):
            confirm_delivery(99999)

    def test_transitions_do_not_touch_slots(self):
        taken = read_taken_slots()
        cancel_order(self.order.id)
        drop_order(self.order.id)
        self.assertEqual(read_taken_slots(), taken)

    def test_no_record_without_device(self):
        order = make_order()
        confirm_delivery(order.id)
        mark_as_delivered(order.id)
        self.assertEqual(DeliveryRecord.objects.count(), 0)

    def test_status_changed_by_someone_else(self):
        """
        Given: another staff member cancels the order after it was read
        When: the confirm write runs against the stale Pending status
        Then: nothing is written and the current status is reported
        """
        apply_transition = lifecycle.apply_transition

        def cancelled_meanwhile(order, action):
            Order.objects.filter(pk=order.pk).update(status=Order.Status.CANCELLED)
            return apply_transition(order, action)

        with patch('orders.lifecycle.apply_transition', side_effect=cancelled_meanwhile):
            with self.assertRaises(InvalidTransitionError) as context:
                confirm_delivery(self.order.id)

        self.assertEqual(context.exception.status, Order.Status.CANCELLED)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.Status.CANCELLED)

    def test_order_dropped_by_someone_else(self):
        apply_transition = lifecycle.apply_transition

        def dropped_meanwhile(order, action):
            Order.objects.filter(pk=order.pk).delete()
            return apply_transition(order, action)

        with patch('orders.lifecycle.apply_transition', side_effect=dropped_meanwhile):
            with self.assertRaises(OrderNotFoundError):
                confirm_delivery(self.order.id)

    def test_database_error_on_update(self):
        with patch('django.db.models.query.QuerySet.update', side_effect=DatabaseError('locked')):
            with self.assertRaises(PersistenceError):
                confirm_delivery(self.order.id)

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.Status.PENDING)

    def test_database_error_on_drop(self):
        cancel_order(self.order.id)

        with patch('django.db.models.query.QuerySet.delete', side_effect=DatabaseError('locked')):
            with self.assertRaises(PersistenceError):
                drop_order(self.order.id)

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.Status.CANCELLED)
        self.assertFalse(DeliveryRecord.objects.filter(record_type=DeliveryRecord.RecordType.DROPPED).exists())


class ClearOrdersTestCase(TestCase):

    def setUp(self):
        DeliverySettings.objects.create(total_slots=10)
        make_order()
        make_order()

    def test_wrong_code(self):
        with self.assertRaises(OrderValidationError) as context:
            clear_all_orders('1111')
        self.assertIn('confirmation_code', context.exception.errors)
        self.assertEqual(Order.objects.count(), 2)

    @override_settings(ORDER_WIPE_CONFIRMATION_CODE='4242')
    def test_clear_keeps_slot_counter(self):
        self.assertEqual(clear_all_orders('4242'), 2)
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(read_taken_slots(), 2)


class OrderAPITestCase(TestCase):
    """Test cases for order endpoints."""

    def setUp(self):
        self.client = APIClient()
        DeliverySettings.objects.create(total_slots=10)
        PriceTable.load()

        self.staff = get_user_model().objects.create_user('assistant', password='secret')
        self.staff.profile.role = 'assistant'
        self.staff.profile.save()

    def staff_client(self):
        client = APIClient()
        client.force_authenticate(user=self.staff)
        return client

    def test_place_whole_order(self):
        response = self.client.post(
            '/api/orders/',
            {'chicken_type': 'whole', 'quantity': 2, 'device_id': 'device-9', **CONTACT},
            format='json'
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['order']['status'], 'Pending')
        self.assertEqual(response.data['order']['price'], '300.00')
        self.assertEqual(response.data['order']['allowed_actions'], ['confirm_delivery', 'cancel_order'])

    def test_place_custom_order_without_quantity(self):
        """
        Given: a custom-pieces order that sends only the piece counts
        Then: the quantity is the piece total and the order is placed
        """
        response = self.client.post(
            '/api/orders/',
            {
                'chicken_type': 'pieces',
                'pieces_type': 'custom',
                'piece_details': {'breasts': 2, 'thighs': 0, 'drumsticks': 1, 'wings': 3},
                **CONTACT,
            },
            format='json'
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['order']['quantity'], 6)
        self.assertEqual(response.data['order']['price'], '105.00')

    def test_place_custom_order_with_wrong_quantity(self):
        response = self.client.post(
            '/api/orders/',
            {
                'chicken_type': 'pieces',
                'pieces_type': 'custom',
                'quantity': 1,
                'piece_details': {'breasts': 2, 'wings': 3},
                **CONTACT,
            },
            format='json'
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn('quantity', response.data['errors'])

    def test_missing_quantity_uses_floor(self):
        response = self.client.post(
            '/api/orders/',
            {'chicken_type': 'pieces', 'pieces_type': 'mixed', **CONTACT},
            format='json'
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['order']['quantity'], 2)

        response = self.client.post('/api/orders/', {'chicken_type': 'whole', **CONTACT}, format='json')
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['order']['quantity'], 1)

    def test_place_order_validation_error(self):
        response = self.client.post(
            '/api/orders/',
            {'chicken_type': 'whole', 'quantity': 1, **dict(CONTACT, name='')},
            format='json'
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn('name', response.data['errors'])

    def test_place_order_slots_full(self):
        SlotCounter.objects.create(pk=SlotCounter.SINGLETON_PK, taken_slots=10)

        response = self.client.post(
            '/api/orders/',
            {'chicken_type': 'whole', 'quantity': 1, **CONTACT},
            format='json'
        )

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data['detail'], DeliverySettings.load().slots_full_message)

    def test_place_generic_order(self):
        product = Product.objects.create(name='Juice')
        variation = ProductVariation.objects.create(product=product, name='Size')
        ProductOption.objects.create(variation=variation, name='500ml', price=Decimal('12.50'))

        response = self.client.post(
            '/api/orders/generic/',
            {'product_id': product.id, 'option_name': '500ml', 'quantity': 4, **CONTACT},
            format='json'
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['order']['price'], '50.00')

    def test_quote(self):
        response = self.client.post(
            '/api/orders/quote/',
            {
                'chicken_type': 'pieces',
                'pieces_type': 'custom',
                'piece_details': {'breasts': 2, 'drumsticks': 1, 'wings': 3},
            },
            format='json'
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['price'], '105.00')

    def test_history_by_device(self):
        make_order(device_id='device-1')
        make_order(device_id='device-2')

        response = self.client.get('/api/orders/history/', {'device_id': 'device-1'})
        self.assertEqual(len(response.data), 1)

        response = self.client.get('/api/orders/history/')
        self.assertEqual(response.data, [])

    def test_admin_endpoints_require_staff(self):
        order = make_order()
        self.assertIn(self.client.get('/api/admin/orders/').status_code, (401, 403))
        self.assertIn(
            self.client.post(f'/api/admin/orders/{order.id}/confirm/').status_code,
            (401, 403)
        )

        customer = get_user_model().objects.create_user('customer', password='secret')
        client = APIClient()
        client.force_authenticate(user=customer)
        self.assertEqual(client.get('/api/admin/orders/').status_code, 403)

    def test_admin_list_filters(self):
        make_order()
        make_order(status=Order.Status.CONFIRMED)
        make_order(status=Order.Status.DELIVERED)
        client = self.staff_client()

        self.assertEqual(len(client.get('/api/admin/orders/').data), 3)
        self.assertEqual(len(client.get('/api/admin/orders/', {'status': 'delivered'}).data), 1)
        self.assertEqual(len(client.get('/api/admin/orders/', {'open': 'true'}).data), 2)

    def test_transition_endpoints(self):
        order = make_order()
        client = self.staff_client()

        response = client.post(f'/api/admin/orders/{order.id}/deliver/')
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data['status'], 'Pending')

        response = client.post(f'/api/admin/orders/{order.id}/confirm/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['status'], 'Confirmed')

        response = client.post(f'/api/admin/orders/{order.id}/cancel/')
        self.assertEqual(response.data['status'], 'Cancelled')

        response = client.post(f'/api/admin/orders/{order.id}/drop/')
        self.assertEqual(response.status_code, 200)
        self.assertFalse(Order.objects.filter(id=order.id).exists())

        response = client.post(f'/api/admin/orders/{order.id}/restore/')
        self.assertEqual(response.status_code, 404)

    def test_unknown_action(self):
        order = make_order()
        response = self.staff_client().post(f'/api/admin/orders/{order.id}/explode/')
        self.assertEqual(response.status_code, 404)

    def test_stats(self):
        make_order(price=Decimal('100.00'), status=Order.Status.DELIVERED)
        make_order(price=Decimal('50.00'), status=Order.Status.DELIVERED)
        make_order(price=Decimal('999.00'))
        make_order(status=Order.Status.CANCELLED)

        response = self.staff_client().get('/api/admin/orders/stats/')

        self.assertEqual(response.data['total_orders'], 4)
        self.assertEqual(response.data['delivered_orders'], 2)
        self.assertEqual(response.data['pending_orders'], 1)
        self.assertEqual(response.data['cancelled_orders'], 1)
        self.assertEqual(Decimal(response.data['total_revenue']), Decimal('150.00'))
        self.assertEqual(Decimal(response.data['month_revenue']), Decimal('150.00'))
        self.assertEqual(Decimal(response.data['avg_order_value']), Decimal('75.00'))

    def test_clear_orders(self):
        make_order()
        client = self.staff_client()

        response = client.post('/api/admin/orders/clear/', {'confirmation_code': 'nope'}, format='json')
        self.assertEqual(response.status_code, 400)

        response = client.post('/api/admin/orders/clear/', {'confirmation_code': '0305'}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['deleted'], 1)
