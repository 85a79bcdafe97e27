"""
Catalog Models - products, their priced options, and the chicken price table.

Models:
    - PriceTable: Singleton row of chicken unit prices and profit margins
    - Product: Catalog item (chicken or generic)
    - ProductVariation: Named tier group of a generic product (e.g. "Size")
    - ProductOption: Priced choice inside a variation (e.g. "Large")
"""
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


def _default_price(key):
    return settings.DEFAULT_PRICES.get(key, Decimal('0.00'))


def _price_field(help_text, default=Decimal('0.00')):
    return models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=default,
        validators=[MinValueValidator(Decimal('0.00'))],
        help_text=help_text
    )


class PriceTable(models.Model):
    """
    Current chicken prices. There is exactly one row (pk=1).

    Profit fields are per-unit margins used by the finance summary.
    """
    SINGLETON_PK = 1

    whole = _price_field("Price per whole chicken", Decimal('150.00'))
    mixed_piece = _price_field("Price per mixed piece", Decimal('15.00'))
    breasts = _price_field("Price per breast", Decimal('30.00'))
    thighs = _price_field("Price per thigh", Decimal('20.00'))
    drumsticks = _price_field("Price per drumstick", Decimal('15.00'))
    wings = _price_field("Price per wing", Decimal('10.00'))
    is_choose_pieces_enabled = models.BooleanField(
        default=True,
        help_text="Whether customers may hand-pick individual pieces"
    )

    profit_whole = _price_field("Profit per whole chicken")
    profit_mixed_piece = _price_field("Profit per mixed piece")
    profit_breasts = _price_field("Profit per breast")
    profit_thighs = _price_field("Profit per thigh")
    profit_drumsticks = _price_field("Profit per drumstick")
    profit_wings = _price_field("Profit per wing")

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Price Table'
        verbose_name_plural = 'Price Table'

    def __str__(self):
        return f"Prices (whole K{self.whole}, mixed K{self.mixed_piece})"

    def save(self, *args, **kwargs):
        self.pk = self.SINGLETON_PK
        super().save(*args, **kwargs)

    @classmethod
    def load(cls) -> 'PriceTable':
        """Fetch the price table, creating it with configured defaults."""
        table, _ = cls.objects.get_or_create(
            pk=cls.SINGLETON_PK,
            defaults={
                key: _default_price(key)
                for key in ('whole', 'mixed_piece', 'breasts', 'thighs', 'drumsticks', 'wings')
            }
        )
        return table


class Product(models.Model):
    """
    Product shown on the storefront.

    Chicken products are priced from the PriceTable; generic products are
    priced per option of their variations.
    """

    class ProductType(models.TextChoices):
        CHICKEN = 'chicken', 'Chicken'
        GENERIC = 'generic', 'Generic'

    name = models.CharField(
        max_length=200,
        db_index=True,
        help_text="Product name for display"
    )
    description = models.TextField(blank=True, default='')
    image_url = models.URLField(blank=True, default='')
    category = models.CharField(max_length=100, blank=True, default='')
    product_type = models.CharField(
        max_length=20,
        choices=ProductType.choices,
        default=ProductType.GENERIC,
        db_index=True
    )
    is_active = models.BooleanField(
        default=True,
        db_index=True,
        help_text="Whether product is available for ordering"
    )
    display_order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Product'
        verbose_name_plural = 'Products'
        ordering = ['display_order', 'name']
        indexes = [
            models.Index(fields=['is_active', 'display_order'], name='product_active_order_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.product_type})"


class ProductVariation(models.Model):
    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='variations'
    )
    name = models.CharField(max_length=100)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['position', 'id']

    def __str__(self):
        return f"{self.product.name} / {self.name}"


class ProductOption(models.Model):
    variation = models.ForeignKey(
        ProductVariation,
        on_delete=models.CASCADE,
        related_name='options'
    )
    name = models.CharField(max_length=100)
    price = _price_field("Unit price for this option")
    profit = _price_field("Profit per unit for this option")
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['position', 'id']

    def __str__(self):
        return f"{self.name} (K{self.price})"
