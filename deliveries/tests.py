"""
Tests for the slot ledger, the slot counter and delivery records.

Test Cases:
1. slots_left / is_full / can_submit over every settings combination
2. Slot counter increments on order creation only while slots are enabled
3. reset_slots is idempotent and leaves settings and orders alone
4. Delivery record upserts
5. Delivery endpoints
"""
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import SimpleTestCase, TestCase
from rest_framework.test import APIClient

from deliveries.models import DeliverySettings, DeliveryRecord, SlotCounter
from deliveries.services import (
    get_delivery_status,
    increment_taken_slots,
    read_taken_slots,
    reset_slots,
    upsert_delivery_record,
)
from deliveries.slots import DEFAULT_SLOTS_FULL_MESSAGE, DeliverySnapshot, can_submit, is_full, slots_left
from deliveries.tasks import record_delivery_action
from orders.models import Order


def make_order(**kwargs):
    fields = {
        'product_type': Order.ProductType.CHICKEN,
        'chicken_type': Order.ChickenType.WHOLE,
        'quantity': 1,
        'price': Decimal('150.00'),
        'name': 'Jane Banda',
        'phone': '0971234567',
        'school': 'Evelyn Hone College',
        'block': 'C',
        'room': '7',
    }
    fields.update(kwargs)
    return Order.objects.create(**fields)


SNAPSHOT = {
    'id': 1,
    'device_id': 'device-1',
    'name': 'Jane Banda',
    'phone': '0971234567',
    'delivery_location_type': 'school',
    'school': 'Evelyn Hone College',
    'block': 'C',
    'room': '7',
    'area': '',
    'street': '',
    'house_number': '',
}


class SlotLedgerTestCase(SimpleTestCase):
    """Test cases for the pure capacity rules."""

    def test_slots_left(self):
        self.assertEqual(slots_left(DeliverySnapshot(total_slots=10), 10), 0)
        self.assertEqual(slots_left(DeliverySnapshot(total_slots=10), 3), 7)
        self.assertEqual(slots_left(DeliverySnapshot(total_slots=10), 12), -2)

    def test_is_full_only_when_enabled(self):
        self.assertTrue(is_full(DeliverySnapshot(total_slots=10), 10))
        self.assertFalse(is_full(DeliverySnapshot(total_slots=10), 9))
        self.assertFalse(is_full(DeliverySnapshot(total_slots=10, is_slots_enabled=False), 10))

    def test_can_submit_combinations(self):
        """Submission is refused only when enabled, full and closing when full."""
        for enabled in (True, False):
            for disable_when_full in (True, False):
                for taken in (4, 5, 6):
                    settings = DeliverySnapshot(
                        total_slots=5,
                        is_slots_enabled=enabled,
                        disable_when_slots_full=disable_when_full,
                    )
                    expected = not (enabled and taken >= 5 and disable_when_full)
                    self.assertEqual(
                        can_submit(settings, taken), expected,
                        (enabled, disable_when_full, taken)
                    )

    def test_snapshot_defaults(self):
        snapshot = DeliverySnapshot.from_settings(DeliverySettings(slots_full_message=''))
        self.assertEqual(snapshot.slots_full_message, DEFAULT_SLOTS_FULL_MESSAGE)
        self.assertEqual(snapshot.total_slots, 0)
        self.assertTrue(snapshot.is_slots_enabled)


class SlotCounterTestCase(TestCase):

    def setUp(self):
        self.settings = DeliverySettings.objects.create(total_slots=10)

    def test_counter_starts_at_zero(self):
        self.assertEqual(read_taken_slots(), 0)
        increment_taken_slots()
        increment_taken_slots()
        self.assertEqual(read_taken_slots(), 2)

    def test_new_orders_take_slots(self):
        order = make_order()
        make_order()
        self.assertEqual(read_taken_slots(), 2)

        # Updates do not count
        order.status = Order.Status.CONFIRMED
        order.save()
        self.assertEqual(read_taken_slots(), 2)

    def test_no_slots_taken_while_disabled(self):
        self.settings.is_slots_enabled = False
        self.settings.save()

        make_order()
        self.assertEqual(read_taken_slots(), 0)

    def test_reset_is_idempotent(self):
        order = make_order()
        make_order()

        reset_slots()
        reset_slots()

        self.assertEqual(read_taken_slots(), 0)
        self.assertEqual(SlotCounter.objects.count(), 1)
        self.assertEqual(DeliverySettings.load().total_slots, 10)
        self.assertTrue(Order.objects.filter(id=order.id).exists())

    def test_locked_read_creates_counter_row(self):
        """
        Given: no order has been placed yet
        When: the counter is read for update
        Then: a zero row exists to lock, and later increments land on it
        """
        self.assertFalse(SlotCounter.objects.exists())

        self.assertEqual(read_taken_slots(for_update=True), 0)
        self.assertEqual(SlotCounter.objects.get().taken_slots, 0)

        increment_taken_slots()
        self.assertEqual(read_taken_slots(for_update=True), 1)
        self.assertEqual(SlotCounter.objects.count(), 1)

    def test_plain_read_does_not_write(self):
        self.assertEqual(read_taken_slots(), 0)
        self.assertFalse(SlotCounter.objects.exists())

    def test_reset_without_counter(self):
        reset_slots()
        self.assertEqual(read_taken_slots(), 0)

    def test_delivery_status(self):
        make_order()
        make_order()

        status = get_delivery_status()

        self.assertEqual(status['taken_slots'], 2)
        self.assertEqual(status['slots_left'], 8)
        self.assertFalse(status['is_full'])
        self.assertTrue(status['can_submit'])

    def test_delivery_status_never_negative(self):
        SlotCounter.objects.create(pk=SlotCounter.SINGLETON_PK, taken_slots=12)

        status = get_delivery_status()

        self.assertEqual(status['slots_left'], 0)
        self.assertTrue(status['is_full'])
        self.assertFalse(status['can_submit'])


class DeliveryRecordTestCase(TestCase):

    def test_upsert_by_device(self):
        upsert_delivery_record(SNAPSHOT, DeliveryRecord.RecordType.DELIVERED)
        upsert_delivery_record(
            dict(SNAPSHOT, name='Jane B.', room='9'),
            DeliveryRecord.RecordType.DROPPED
        )

        record = DeliveryRecord.objects.get()
        self.assertEqual(record.name, 'Jane B.')
        self.assertEqual(record.record_type, DeliveryRecord.RecordType.DROPPED)
        self.assertEqual(record.location, 'Evelyn Hone College, C, Room 9')

    def test_task_skips_without_device(self):
        result = record_delivery_action.apply(args=[dict(SNAPSHOT, device_id=''), 'delivered']).get()

        self.assertEqual(result['status'], 'skipped')
        self.assertEqual(DeliveryRecord.objects.count(), 0)

    def test_task_writes_record(self):
        result = record_delivery_action.apply(args=[SNAPSHOT, 'delivered']).get()

        self.assertEqual(result['status'], 'success')
        self.assertEqual(DeliveryRecord.objects.get().device_id, 'device-1')


class DeliveryAPITestCase(TestCase):

    def setUp(self):
        self.client = APIClient()
        DeliverySettings.objects.create(total_slots=3, slots_full_message='See you next week')

        user = get_user_model().objects.create_user('helper', password='secret')
        user.profile.role = 'assistant'
        user.profile.save()
        self.staff = APIClient()
        self.staff.force_authenticate(user=user)

    def test_public_status(self):
        make_order()

        response = self.client.get('/api/delivery/status/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['slots_left'], 2)
        self.assertTrue(response.data['can_submit'])
        self.assertEqual(response.data['slots_full_message'], 'See you next week')

    def test_admin_requires_staff(self):
        self.assertIn(self.client.get('/api/admin/delivery/').status_code, (401, 403))
        self.assertIn(self.client.post('/api/admin/delivery/reset-slots/').status_code, (401, 403))
        self.assertIn(self.client.get('/api/admin/delivery/records/').status_code, (401, 403))

    def test_update_settings(self):
        response = self.staff.patch(
            '/api/admin/delivery/',
            {'total_slots': 20, 'disable_when_slots_full': False},
            format='json'
        )

        self.assertEqual(response.status_code, 200)
        settings = DeliverySettings.load()
        self.assertEqual(settings.total_slots, 20)
        self.assertFalse(settings.disable_when_slots_full)

    def test_reset_slots(self):
        make_order()
        make_order()

        response = self.staff.post('/api/admin/delivery/reset-slots/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['taken_slots'], 0)
        self.assertEqual(Order.objects.count(), 2)

    def test_records_filter(self):
        upsert_delivery_record(SNAPSHOT, 'delivered')
        upsert_delivery_record(dict(SNAPSHOT, device_id='device-2'), 'dropped')

        response = self.staff.get('/api/admin/delivery/records/', {'type': 'dropped'})

        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['device_id'], 'device-2')
