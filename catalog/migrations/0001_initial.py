from decimal import Decimal

import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


def price_field(help_text, default='0.00'):
    return models.DecimalField(
        decimal_places=2,
        default=Decimal(default),
        help_text=help_text,
        max_digits=10,
        validators=[django.core.validators.MinValueValidator(Decimal('0.00'))],
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='PriceTable',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('whole', price_field('Price per whole chicken', '150.00')),
                ('mixed_piece', price_field('Price per mixed piece', '15.00')),
                ('breasts', price_field('Price per breast', '30.00')),
                ('thighs', price_field('Price per thigh', '20.00')),
                ('drumsticks', price_field('Price per drumstick', '15.00')),
                ('wings', price_field('Price per wing', '10.00')),
                ('is_choose_pieces_enabled', models.BooleanField(default=True, help_text='Whether customers may hand-pick individual pieces')),
                ('profit_whole', price_field('Profit per whole chicken')),
                ('profit_mixed_piece', price_field('Profit per mixed piece')),
                ('profit_breasts', price_field('Profit per breast')),
                ('profit_thighs', price_field('Profit per thigh')),
                ('profit_drumsticks', price_field('Profit per drumstick')),
                ('profit_wings', price_field('Profit per wing')),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Price Table',
                'verbose_name_plural': 'Price Table',
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(db_index=True, help_text='Product name for display', max_length=200)),
                ('description', models.TextField(blank=True, default='')),
                ('image_url', models.URLField(blank=True, default='')),
                ('category', models.CharField(blank=True, default='', max_length=100)),
                ('product_type', models.CharField(choices=[('chicken', 'Chicken'), ('generic', 'Generic')], db_index=True, default='generic', max_length=20)),
                ('is_active', models.BooleanField(db_index=True, default=True, help_text='Whether product is available for ordering')),
                ('display_order', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Product',
                'verbose_name_plural': 'Products',
                'ordering': ['display_order', 'name'],
                'indexes': [models.Index(fields=['is_active', 'display_order'], name='product_active_order_idx')],
            },
        ),
        migrations.CreateModel(
            name='ProductVariation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100)),
                ('position', models.PositiveIntegerField(default=0)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='variations', to='catalog.product')),
            ],
            options={
                'ordering': ['position', 'id'],
            },
        ),
        migrations.CreateModel(
            name='ProductOption',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100)),
                ('price', price_field('Unit price for this option')),
                ('profit', price_field('Profit per unit for this option')),
                ('position', models.PositiveIntegerField(default=0)),
                ('variation', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='options', to='catalog.productvariation')),
            ],
            options={
                'ordering': ['position', 'id'],
            },
        ),
    ]
