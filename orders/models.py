"""
Order Models - pre-orders with status tracking.

Order Status Flow:
    Pending -> Confirmed -> Delivered
    Pending | Confirmed -> Cancelled -> Pending (restore) or deleted (drop)
"""
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from catalog.models import Product
from . import lifecycle
from .constants import SCHOOL, OFF_CAMPUS
from .pricing import (
    ChickenSelection,
    GenericSelection,
    PieceDetails,
    WHOLE,
)


class Order(models.Model):
    """
    A customer pre-order for chicken or a generic product.

    `price` is the computed total, never a unit price. Exactly one of the
    two address shapes (school or off-campus) is filled in.
    """

    class Status(models.TextChoices):
        PENDING = lifecycle.PENDING, 'Pending'
        CONFIRMED = lifecycle.CONFIRMED, 'Confirmed'
        DELIVERED = lifecycle.DELIVERED, 'Delivered'
        CANCELLED = lifecycle.CANCELLED, 'Cancelled'

    class ProductType(models.TextChoices):
        CHICKEN = 'chicken', 'Chicken'
        GENERIC = 'generic', 'Generic'

    class ChickenType(models.TextChoices):
        WHOLE = 'whole', 'Whole'
        PIECES = 'pieces', 'Pieces'

    class PiecesType(models.TextChoices):
        MIXED = 'mixed', 'Mixed'
        CUSTOM = 'custom', 'Custom'

    class DeliveryLocationType(models.TextChoices):
        SCHOOL = SCHOOL, 'School'
        OFF_CAMPUS = OFF_CAMPUS, 'Off campus'

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
        help_text="Current order status"
    )
    product_type = models.CharField(max_length=20, choices=ProductType.choices)

    # Chicken selection
    chicken_type = models.CharField(max_length=20, choices=ChickenType.choices, blank=True, default='')
    pieces_type = models.CharField(max_length=20, choices=PiecesType.choices, blank=True, default='')
    breasts = models.PositiveIntegerField(default=0)
    thighs = models.PositiveIntegerField(default=0)
    drumsticks = models.PositiveIntegerField(default=0)
    wings = models.PositiveIntegerField(default=0)

    # Generic selection
    product = models.ForeignKey(
        Product,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='orders'
    )
    product_name = models.CharField(max_length=200, blank=True, default='')
    variation_name = models.CharField(max_length=100, blank=True, default='')
    option_name = models.CharField(max_length=100, blank=True, default='')

    quantity = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text="Items ordered (piece total for custom pieces)"
    )
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        help_text="Computed order total"
    )

    # Contact
    name = models.CharField(max_length=200)
    phone = models.CharField(max_length=32)
    delivery_location_type = models.CharField(
        max_length=20,
        choices=DeliveryLocationType.choices,
        default=DeliveryLocationType.SCHOOL
    )
    school = models.CharField(max_length=200, blank=True, default='')
    block = models.CharField(max_length=100, blank=True, default='')
    room = models.CharField(max_length=100, blank=True, default='')
    area = models.CharField(max_length=100, blank=True, default='')
    street = models.CharField(max_length=200, blank=True, default='')
    house_number = models.CharField(max_length=100, blank=True, default='')

    # Attribution
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='orders'
    )
    device_id = models.CharField(max_length=64, blank=True, default='', db_index=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Order'
        verbose_name_plural = 'Orders'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'created_at'], name='order_status_created_idx'),
            models.Index(fields=['device_id', 'status'], name='order_device_status_idx'),
        ]

    def __str__(self):
        return f"Order #{self.id} - {self.name} ({self.status})"

    @property
    def is_open(self) -> bool:
        return self.status in lifecycle.OPEN_STATUSES

    @property
    def piece_details(self) -> PieceDetails:
        return PieceDetails(
            breasts=self.breasts,
            thighs=self.thighs,
            drumsticks=self.drumsticks,
            wings=self.wings,
        )

    @property
    def items_summary(self) -> str:
        """Human-readable line such as '2x Whole Chickens' or '2x breasts, 1x wings'."""
        quantity = self.quantity
        plural = 's' if quantity > 1 else ''
        if self.product_type == self.ProductType.GENERIC:
            option = f"{self.variation_name}: {self.option_name}" if self.variation_name else self.option_name
            return f"{quantity}x {self.product_name} ({option})"
        if self.chicken_type == WHOLE:
            return f"{quantity}x Whole Chicken{plural}"
        if self.pieces_type == self.PiecesType.CUSTOM:
            details = ', '.join(
                f"{count}x {piece}"
                for piece, count in self.piece_details.as_dict().items()
                if count > 0
            )
            if details:
                return details
        return f"{quantity}x Chicken Piece{plural}"

    @property
    def location(self) -> str:
        if self.delivery_location_type == SCHOOL:
            return f"{self.school}, {self.block}, Room {self.room}"
        return f"{self.area}, {self.street}, {self.house_number}"

    def to_selection(self):
        """Rebuild the pricing selection this order was created from."""
        if self.product_type == self.ProductType.GENERIC:
            return GenericSelection(
                product_id=self.product_id,
                variation_name=self.variation_name,
                option_name=self.option_name,
                quantity=self.quantity,
            )
        return ChickenSelection(
            chicken_type=self.chicken_type,
            pieces_type=self.pieces_type or None,
            quantity=self.quantity,
            piece_details=self.piece_details,
        )

    def record_snapshot(self) -> dict:
        """Plain fields handed to background tasks (JSON-serializable)."""
        snapshot = {
            'id': self.id,
            'device_id': self.device_id,
            'name': self.name,
            'phone': self.phone,
            'delivery_location_type': self.delivery_location_type,
        }
        for field in ('school', 'block', 'room', 'area', 'street', 'house_number'):
            snapshot[field] = getattr(self, field)
        return snapshot
