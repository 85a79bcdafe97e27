"""
Management command to seed the database with a starter catalog.

Generates:
- The chicken product and the price table (configured default prices)
- A few generic products with variations and options
- Delivery settings with a slot capacity

Usage:
    python manage.py seed_data
    python manage.py seed_data --clear  # Clear existing catalog and orders first
    python manage.py seed_data --slots 40
"""
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from catalog.models import PriceTable, Product, ProductVariation, ProductOption
from deliveries.models import DeliverySettings
from deliveries.services import reset_slots

GENERIC_PRODUCTS = [
    {
        'name': 'Farm Eggs',
        'category': 'Eggs',
        'description': 'Fresh eggs from our own layers.',
        'variations': [
            ('Pack', [('Half tray (15)', '40.00', '8.00'), ('Full tray (30)', '75.00', '15.00')]),
        ],
    },
    {
        'name': 'Chicken Feet',
        'category': 'Chicken',
        'description': 'Cleaned and bagged.',
        'variations': [
            ('Bag', [('1 kg', '35.00', '10.00'), ('2 kg', '65.00', '18.00')]),
        ],
    },
    {
        'name': 'Marinade',
        'category': 'Extras',
        'description': 'House marinade for chicken.',
        'variations': [
            ('Flavour', [('Lemon & herb', '25.00', '6.00'), ('Peri-peri', '25.00', '6.00')]),
            ('Size', [('250 ml', '25.00', '6.00'), ('500 ml', '45.00', '11.00')]),
        ],
    },
]


class Command(BaseCommand):
    help = 'Seed the database with the chicken product, generic products, prices and delivery settings'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing products and orders before seeding',
        )
        parser.add_argument(
            '--slots',
            type=int,
            default=30,
            help='Delivery slots for the current run (default: 30)',
        )

    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self._clear_data()

        self.stdout.write('Starting database seeding...')

        with transaction.atomic():
            self._create_price_table()
            self._create_chicken_product()
            self._create_generic_products()
            self._create_delivery_settings(options['slots'])

        self.stdout.write(self.style.SUCCESS('Database seeding completed successfully!'))

    def _clear_data(self):
        """Clear products and orders."""
        from orders.models import Order

        Order.objects.all().delete()
        Product.objects.all().delete()
        reset_slots()

        self.stdout.write(self.style.WARNING('All existing data cleared.'))

    def _create_price_table(self):
        table = PriceTable.load()
        self.stdout.write(
            self.style.SUCCESS(f'Price table ready (whole K{table.whole}, mixed piece K{table.mixed_piece})')
        )

    def _create_chicken_product(self):
        product, created = Product.objects.get_or_create(
            name='Fresh Chicken',
            product_type=Product.ProductType.CHICKEN,
            defaults={
                'category': 'Chicken',
                'description': 'Whole birds or pieces, cleaned and ready to cook.',
                'display_order': 0,
            }
        )
        if created:
            self.stdout.write(f'  Created product: {product.name}')

    def _create_generic_products(self):
        created_count = 0
        for position, data in enumerate(GENERIC_PRODUCTS, start=1):
            product, created = Product.objects.get_or_create(
                name=data['name'],
                product_type=Product.ProductType.GENERIC,
                defaults={
                    'category': data['category'],
                    'description': data['description'],
                    'display_order': position,
                }
            )
            if not created:
                continue

            created_count += 1
            for v_index, (variation_name, options) in enumerate(data['variations']):
                variation = ProductVariation.objects.create(
                    product=product, name=variation_name, position=v_index
                )
                ProductOption.objects.bulk_create([
                    ProductOption(
                        variation=variation,
                        name=name,
                        price=Decimal(price),
                        profit=Decimal(profit),
                        position=o_index,
                    )
                    for o_index, (name, price, profit) in enumerate(options)
                ])
            self.stdout.write(f'  Created product: {product.name}')

        self.stdout.write(self.style.SUCCESS(f'Created {created_count} generic products'))

    def _create_delivery_settings(self, slots):
        settings = DeliverySettings.load()
        settings.total_slots = slots
        settings.save()
        self.stdout.write(self.style.SUCCESS(f'Delivery run set to {slots} slots'))
