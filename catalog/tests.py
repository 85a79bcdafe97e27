"""
Tests for the catalog: products with variations and the price table.
"""
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from catalog.models import PriceTable, Product, ProductVariation, ProductOption
from orders.pricing import PriceSnapshot, variations_from_product


class PriceTableTestCase(TestCase):

    def test_load_creates_defaults(self):
        table = PriceTable.load()

        self.assertEqual(table.pk, PriceTable.SINGLETON_PK)
        self.assertEqual(table.whole, Decimal('150.00'))
        self.assertEqual(table.wings, Decimal('10.00'))
        self.assertTrue(table.is_choose_pieces_enabled)

    def test_single_row(self):
        PriceTable.load()
        PriceTable(whole=Decimal('160.00')).save()

        self.assertEqual(PriceTable.objects.count(), 1)
        self.assertEqual(PriceTable.load().whole, Decimal('160.00'))

    def test_snapshot_from_table(self):
        snapshot = PriceSnapshot.from_price_table(PriceTable.load())
        self.assertEqual(snapshot.breasts, Decimal('30.00'))
        self.assertEqual(snapshot.piece_price('drumsticks'), Decimal('15.00'))

    def test_str_uses_kwacha(self):
        self.assertEqual(str(PriceTable.load()), 'Prices (whole K150.00, mixed K15.00)')

        product = Product.objects.create(name='Eggs')
        variation = ProductVariation.objects.create(product=product, name='Size')
        option = ProductOption.objects.create(variation=variation, name='Tray', price=Decimal('75.00'))
        self.assertEqual(str(option), 'Tray (K75.00)')


class VariationSnapshotTestCase(TestCase):

    def test_variations_keep_position_order(self):
        product = Product.objects.create(name='Chips')
        second = ProductVariation.objects.create(product=product, name='Flavour', position=1)
        first = ProductVariation.objects.create(product=product, name='Size', position=0)
        ProductOption.objects.create(variation=first, name='Large', price=Decimal('20.00'), position=1)
        ProductOption.objects.create(variation=first, name='Small', price=Decimal('12.00'), position=0)
        ProductOption.objects.create(variation=second, name='Salted', price=Decimal('0.00'))

        variations = variations_from_product(product)

        self.assertEqual([v.name for v in variations], ['Size', 'Flavour'])
        self.assertEqual([o.name for o in variations[0].options], ['Small', 'Large'])
        self.assertEqual(variations[0].options[1].price, Decimal('20.00'))


class CatalogAPITestCase(TestCase):

    def setUp(self):
        self.client = APIClient()
        user = get_user_model().objects.create_user('helper', password='secret')
        user.profile.role = 'assistant'
        user.profile.save()
        self.staff = APIClient()
        self.staff.force_authenticate(user=user)

        self.product = Product.objects.create(name='Eggs', category='Farm', display_order=1)
        variation = ProductVariation.objects.create(product=self.product, name='Size')
        ProductOption.objects.create(
            variation=variation, name='Tray', price=Decimal('75.00'), profit=Decimal('15.00')
        )
        Product.objects.create(name='Hidden', is_active=False)

    def test_public_list_hides_inactive_and_profit(self):
        response = self.client.get('/api/products/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual([p['name'] for p in response.data], ['Eggs'])
        option = response.data[0]['variations'][0]['options'][0]
        self.assertEqual(option, {'name': 'Tray', 'price': '75.00'})

    def test_public_list_category_filter(self):
        self.assertEqual(len(self.client.get('/api/products/', {'category': 'farm'}).data), 1)
        self.assertEqual(len(self.client.get('/api/products/', {'category': 'Drinks'}).data), 0)

    def test_public_detail_of_inactive_is_404(self):
        hidden = Product.objects.get(name='Hidden')
        self.assertEqual(self.client.get(f'/api/products/{hidden.id}/').status_code, 404)

    def test_public_pricing(self):
        response = self.client.get('/api/pricing/')

        self.assertEqual(response.data['whole'], '150.00')
        self.assertEqual(response.data['pieces']['thighs'], '20.00')
        self.assertNotIn('profit_whole', response.data)

    def test_admin_requires_staff(self):
        self.assertIn(self.client.get('/api/admin/products/').status_code, (401, 403))
        self.assertIn(
            self.client.put('/api/admin/pricing/', {'whole': '1.00'}, format='json').status_code,
            (401, 403)
        )

    def test_create_product_with_variations(self):
        response = self.staff.post(
            '/api/admin/products/',
            {
                'name': 'Juice',
                'product_type': 'generic',
                'variations': [
                    {'name': 'Size', 'options': [
                        {'name': '500ml', 'price': '12.50', 'profit': '3.00'},
                        {'name': '1L', 'price': '20.00', 'profit': '5.00'},
                    ]},
                ],
            },
            format='json'
        )

        self.assertEqual(response.status_code, 201)
        product = Product.objects.get(name='Juice')
        self.assertEqual(
            list(ProductOption.objects.filter(variation__product=product).values_list('name', flat=True)),
            ['500ml', '1L']
        )

    def test_generic_product_needs_variation(self):
        response = self.staff.post(
            '/api/admin/products/',
            {'name': 'Nothing', 'product_type': 'generic', 'variations': []},
            format='json'
        )
        self.assertEqual(response.status_code, 400)

    def test_update_replaces_variations(self):
        response = self.staff.patch(
            f'/api/admin/products/{self.product.id}/',
            {'variations': [{'name': 'Pack', 'options': [{'name': 'Dozen', 'price': '30.00'}]}]},
            format='json'
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            list(self.product.variations.values_list('name', flat=True)),
            ['Pack']
        )

    def test_hide_product(self):
        self.staff.patch(f'/api/admin/products/{self.product.id}/', {'is_active': False}, format='json')
        self.assertEqual(self.client.get('/api/products/').data, [])

    def test_update_prices(self):
        response = self.staff.patch(
            '/api/admin/pricing/',
            {'whole': '165.00', 'profit_whole': '45.00', 'is_choose_pieces_enabled': False},
            format='json'
        )

        self.assertEqual(response.status_code, 200)
        table = PriceTable.load()
        self.assertEqual(table.whole, Decimal('165.00'))
        self.assertEqual(table.profit_whole, Decimal('45.00'))
        self.assertFalse(table.is_choose_pieces_enabled)

    def test_negative_price_rejected(self):
        response = self.staff.patch('/api/admin/pricing/', {'wings': '-1.00'}, format='json')
        self.assertEqual(response.status_code, 400)


class SeedDataTestCase(TestCase):

    def test_seed_is_repeatable(self):
        from io import StringIO
        from django.core.management import call_command
        from deliveries.models import DeliverySettings

        call_command('seed_data', '--slots', '12', stdout=StringIO())
        call_command('seed_data', stdout=StringIO())

        self.assertEqual(Product.objects.filter(product_type='chicken').count(), 1)
        self.assertEqual(Product.objects.filter(product_type='generic').count(), 3)
        self.assertEqual(
            list(Product.objects.get(name='Marinade').variations.values_list('name', flat=True)),
            ['Flavour', 'Size']
        )
        self.assertEqual(DeliverySettings.load().total_slots, 30)
