from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('catalog', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('status', models.CharField(choices=[('Pending', 'Pending'), ('Confirmed', 'Confirmed'), ('Delivered', 'Delivered'), ('Cancelled', 'Cancelled')], db_index=True, default='Pending', help_text='Current order status', max_length=20)),
                ('product_type', models.CharField(choices=[('chicken', 'Chicken'), ('generic', 'Generic')], max_length=20)),
                ('chicken_type', models.CharField(blank=True, choices=[('whole', 'Whole'), ('pieces', 'Pieces')], default='', max_length=20)),
                ('pieces_type', models.CharField(blank=True, choices=[('mixed', 'Mixed'), ('custom', 'Custom')], default='', max_length=20)),
                ('breasts', models.PositiveIntegerField(default=0)),
                ('thighs', models.PositiveIntegerField(default=0)),
                ('drumsticks', models.PositiveIntegerField(default=0)),
                ('wings', models.PositiveIntegerField(default=0)),
                ('product_name', models.CharField(blank=True, default='', max_length=200)),
                ('variation_name', models.CharField(blank=True, default='', max_length=100)),
                ('option_name', models.CharField(blank=True, default='', max_length=100)),
                ('quantity', models.PositiveIntegerField(help_text='Items ordered (piece total for custom pieces)', validators=[django.core.validators.MinValueValidator(1)])),
                ('price', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='Computed order total', max_digits=12)),
                ('name', models.CharField(max_length=200)),
                ('phone', models.CharField(max_length=32)),
                ('delivery_location_type', models.CharField(choices=[('school', 'School'), ('off-campus', 'Off campus')], default='school', max_length=20)),
                ('school', models.CharField(blank=True, default='', max_length=200)),
                ('block', models.CharField(blank=True, default='', max_length=100)),
                ('room', models.CharField(blank=True, default='', max_length=100)),
                ('area', models.CharField(blank=True, default='', max_length=100)),
                ('street', models.CharField(blank=True, default='', max_length=200)),
                ('house_number', models.CharField(blank=True, default='', max_length=100)),
                ('device_id', models.CharField(blank=True, db_index=True, default='', max_length=64)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('product', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='orders', to='catalog.product')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='orders', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Order',
                'verbose_name_plural': 'Orders',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status', 'created_at'], name='order_status_created_idx'),
                    models.Index(fields=['device_id', 'status'], name='order_device_status_idx'),
                ],
            },
        ),
    ]
