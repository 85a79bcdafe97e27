"""
Tests for devices, roles and role-based permissions.
"""
from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from accounts.models import Device, UserProfile, get_role


def make_user(username, role=None, **kwargs):
    user = get_user_model().objects.create_user(username, password='secret', **kwargs)
    if role:
        user.profile.role = role
        user.profile.save()
    return user


class RoleTestCase(TestCase):

    def test_new_user_gets_customer_profile(self):
        user = make_user('customer')
        self.assertEqual(user.profile.role, UserProfile.Role.CUSTOMER)
        self.assertFalse(user.profile.is_staff_member)

    def test_superuser_is_admin(self):
        user = get_user_model().objects.create_superuser('root', 'root@example.com', 'secret')
        self.assertEqual(get_role(user), UserProfile.Role.ADMIN)

    def test_anonymous_has_no_role(self):
        self.assertEqual(get_role(None), '')


class DeviceAPITestCase(TestCase):

    def setUp(self):
        self.client = APIClient()

    def test_register_then_touch(self):
        response = self.client.post(
            '/api/devices/', {'device_id': 'abc-123'}, format='json', HTTP_USER_AGENT='pytest'
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['user_agent'], 'pytest')

        response = self.client.post('/api/devices/', {'device_id': 'abc-123'}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(Device.objects.count(), 1)

    def test_device_id_required(self):
        response = self.client.post('/api/devices/', {}, format='json')
        self.assertEqual(response.status_code, 400)

    def test_device_list_is_staff_only(self):
        Device.objects.create(id='abc-123')
        self.assertIn(self.client.get('/api/admin/devices/').status_code, (401, 403))

        staff = APIClient()
        staff.force_authenticate(user=make_user('helper', role='assistant'))
        response = staff.get('/api/admin/devices/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data[0]['id'], 'abc-123')


class UserAPITestCase(TestCase):

    def setUp(self):
        self.admin = make_user('boss', role='admin', email='boss@example.com')
        self.assistant = make_user('helper', role='assistant', email='helper@example.com')
        self.customer = make_user('buyer', email='a-buyer@example.com')

        self.client = APIClient()
        self.client.force_authenticate(user=self.admin)

    def test_users_sorted_by_role(self):
        response = self.client.get('/api/admin/users/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            [user['role'] for user in response.data],
            ['admin', 'assistant', 'customer']
        )

    def test_assistant_cannot_manage_users(self):
        client = APIClient()
        client.force_authenticate(user=self.assistant)
        self.assertEqual(client.get('/api/admin/users/').status_code, 403)
        response = client.patch(
            f'/api/admin/users/{self.customer.pk}/role/', {'role': 'admin'}, format='json'
        )
        self.assertEqual(response.status_code, 403)

    def test_change_role(self):
        response = self.client.patch(
            f'/api/admin/users/{self.customer.pk}/role/', {'role': 'assistant'}, format='json'
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['role'], 'assistant')
        self.customer.profile.refresh_from_db()
        self.assertEqual(self.customer.profile.role, UserProfile.Role.ASSISTANT)

    def test_change_role_rejects_unknown_role(self):
        response = self.client.patch(
            f'/api/admin/users/{self.customer.pk}/role/', {'role': 'owner'}, format='json'
        )
        self.assertEqual(response.status_code, 400)

    def test_change_role_missing_user(self):
        response = self.client.patch('/api/admin/users/9999/role/', {'role': 'admin'}, format='json')
        self.assertEqual(response.status_code, 404)
