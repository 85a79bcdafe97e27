"""
Tests for expenses and the financial summary.
"""
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from catalog.models import PriceTable, Product, ProductVariation, ProductOption
from deliveries.models import DeliverySettings
from finance.models import Expense
from finance.services import compute_financials
from orders.models import Order


def make_order(**kwargs):
    fields = {
        'product_type': Order.ProductType.CHICKEN,
        'chicken_type': Order.ChickenType.WHOLE,
        'quantity': 1,
        'price': Decimal('150.00'),
        'status': Order.Status.DELIVERED,
        'name': 'Jane Banda',
        'phone': '0971234567',
        'school': 'Cavendish University',
        'block': 'A',
        'room': '3',
    }
    fields.update(kwargs)
    return Order.objects.create(**fields)


class FinancialSummaryTestCase(TestCase):
    """Test cases for compute_financials."""

    def setUp(self):
        DeliverySettings.objects.create(total_slots=50)
        table = PriceTable.load()
        table.profit_whole = Decimal('40.00')
        table.profit_mixed_piece = Decimal('4.00')
        table.profit_breasts = Decimal('8.00')
        table.profit_wings = Decimal('3.00')
        table.save()

        self.product = Product.objects.create(name='Eggs')
        variation = ProductVariation.objects.create(product=self.product, name='Size')
        ProductOption.objects.create(
            variation=variation, name='Tray', price=Decimal('75.00'), profit=Decimal('15.00')
        )

    def test_empty_summary(self):
        summary = compute_financials()

        self.assertEqual(summary['total_sales'], Decimal('0.00'))
        self.assertEqual(summary['gross_profit'], Decimal('0.00'))
        self.assertEqual(summary['net_operating_profit'], Decimal('0.00'))
        self.assertEqual(summary['delivered_orders'], 0)

    def test_sales_and_profit_from_delivered_orders(self):
        """
        Given: delivered whole x2, mixed x5, custom {2 breasts, 1 wing}, 3 egg trays
        Then: gross profit = 80 + 20 + 19 + 45 = 164
        """
        make_order(quantity=2, price=Decimal('300.00'))
        make_order(
            chicken_type=Order.ChickenType.PIECES, pieces_type=Order.PiecesType.MIXED,
            quantity=5, price=Decimal('75.00')
        )
        make_order(
            chicken_type=Order.ChickenType.PIECES, pieces_type=Order.PiecesType.CUSTOM,
            breasts=2, wings=1, quantity=3, price=Decimal('70.00')
        )
        make_order(
            product_type=Order.ProductType.GENERIC, chicken_type='', product=self.product,
            product_name='Eggs', variation_name='Size', option_name='Tray',
            quantity=3, price=Decimal('225.00')
        )
        # Not delivered: ignored
        make_order(status=Order.Status.PENDING, price=Decimal('999.00'))
        make_order(status=Order.Status.CANCELLED, price=Decimal('999.00'))

        summary = compute_financials()

        self.assertEqual(summary['delivered_orders'], 4)
        self.assertEqual(summary['total_sales'], Decimal('670.00'))
        self.assertEqual(summary['month_sales'], Decimal('670.00'))
        self.assertEqual(summary['gross_profit'], Decimal('164.00'))

    def test_removed_product_earns_no_profit(self):
        make_order(
            product_type=Order.ProductType.GENERIC, chicken_type='', product=None,
            product_name='Old item', option_name='Tray', quantity=2, price=Decimal('50.00')
        )

        summary = compute_financials()

        self.assertEqual(summary['total_sales'], Decimal('50.00'))
        self.assertEqual(summary['gross_profit'], Decimal('0.00'))

    def test_net_operating_profit(self):
        make_order(quantity=1)
        Expense.objects.create(
            description='Feed bags', amount=Decimal('25.00'),
            category=Expense.Category.FEED, expense_type=Expense.ExpenseType.OPERATIONAL
        )
        Expense.objects.create(
            description='Coop roof', amount=Decimal('500.00'),
            category=Expense.Category.COOP_CONSTRUCTION, expense_type=Expense.ExpenseType.CAPITAL
        )

        summary = compute_financials()

        self.assertEqual(summary['total_capital_expenses'], Decimal('500.00'))
        self.assertEqual(summary['total_operational_expenses'], Decimal('25.00'))
        # Capital spending is not deducted
        self.assertEqual(summary['net_operating_profit'], Decimal('15.00'))


class FinanceAPITestCase(TestCase):

    def setUp(self):
        self.client = APIClient()
        user = get_user_model().objects.create_user('owner', password='secret')
        user.profile.role = 'admin'
        user.profile.save()
        self.staff = APIClient()
        self.staff.force_authenticate(user=user)

    def test_requires_staff(self):
        self.assertIn(self.client.get('/api/admin/expenses/').status_code, (401, 403))
        self.assertIn(self.client.get('/api/admin/finance/summary/').status_code, (401, 403))

    def test_expense_crud(self):
        response = self.staff.post(
            '/api/admin/expenses/',
            {'description': 'Vaccines', 'amount': '120.50', 'category': 'Vaccines', 'expense_type': 'operational'},
            format='json'
        )
        self.assertEqual(response.status_code, 201)
        expense_id = response.data['id']

        response = self.staff.get('/api/admin/expenses/', {'type': 'capital'})
        self.assertEqual(response.data, [])

        response = self.staff.delete(f'/api/admin/expenses/{expense_id}/')
        self.assertEqual(response.status_code, 204)
        self.assertEqual(Expense.objects.count(), 0)

    def test_expense_amount_must_be_positive(self):
        response = self.staff.post(
            '/api/admin/expenses/',
            {'description': 'Nothing', 'amount': '0.00', 'category': 'Other', 'expense_type': 'capital'},
            format='json'
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn('amount', response.data)

    def test_summary(self):
        response = self.staff.get('/api/admin/finance/summary/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['total_sales'], '0.00')
        self.assertEqual(response.data['delivered_orders'], 0)
