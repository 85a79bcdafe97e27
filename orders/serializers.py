"""
Serializers for order models.
"""
from dataclasses import replace

from rest_framework import serializers

from . import lifecycle
from .constants import SCHOOL, OFF_CAMPUS
from .models import Order
from .pricing import ChickenSelection, GenericSelection, PieceDetails, sync_custom_quantity
from .services import get_quantity_policy


class PieceDetailsSerializer(serializers.Serializer):
    breasts = serializers.IntegerField(min_value=0, default=0)
    thighs = serializers.IntegerField(min_value=0, default=0)
    drumsticks = serializers.IntegerField(min_value=0, default=0)
    wings = serializers.IntegerField(min_value=0, default=0)


class ContactSerializer(serializers.Serializer):
    """
    Contact and delivery address fields shared by both order forms.

    Only structure is checked here; the order service applies the
    business rules field by field.
    """
    name = serializers.CharField(max_length=200, allow_blank=True, trim_whitespace=True)
    phone = serializers.CharField(max_length=32, allow_blank=True, trim_whitespace=True)
    delivery_location_type = serializers.ChoiceField(
        choices=[SCHOOL, OFF_CAMPUS],
        default=SCHOOL
    )
    school = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    block = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    room = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    area = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    street = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    house_number = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    device_id = serializers.CharField(max_length=64, required=False, allow_blank=True, default='')

    contact_fields = (
        'name', 'phone', 'delivery_location_type',
        'school', 'block', 'room', 'area', 'street', 'house_number',
    )

    def get_contact(self):
        return {name: self.validated_data.get(name, '') for name in self.contact_fields}


class ChickenSelectionSerializer(serializers.Serializer):
    chicken_type = serializers.ChoiceField(choices=Order.ChickenType.choices)
    pieces_type = serializers.ChoiceField(
        choices=Order.PiecesType.choices,
        required=False,
        allow_null=True,
        allow_blank=True,
        default=None
    )
    quantity = serializers.IntegerField(min_value=0, required=False, allow_null=True, default=None)
    piece_details = PieceDetailsSerializer(required=False)

    def get_selection(self) -> ChickenSelection:
        """
        Build the selection. A missing quantity falls back to the piece total
        for custom pieces and to the policy floor otherwise.
        """
        data = self.validated_data
        selection = ChickenSelection(
            chicken_type=data['chicken_type'],
            pieces_type=data.get('pieces_type') or None,
            piece_details=PieceDetails.from_dict(data.get('piece_details')),
        )
        quantity = data.get('quantity')
        if quantity is None:
            policy = get_quantity_policy()
            if selection.is_custom:
                quantity = sync_custom_quantity(selection.piece_details)
            elif selection.is_mixed:
                quantity = policy.mixed_min_quantity
            else:
                quantity = policy.whole_min_quantity
        return replace(selection, quantity=quantity)


class GenericSelectionSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(min_value=1)
    variation_name = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    option_name = serializers.CharField(max_length=100)
    quantity = serializers.IntegerField(min_value=0, default=1)

    def get_selection(self) -> GenericSelection:
        data = self.validated_data
        return GenericSelection(
            product_id=data['product_id'],
            variation_name=data['variation_name'],
            option_name=data['option_name'],
            quantity=data['quantity'],
        )


class ChickenOrderSubmitSerializer(ContactSerializer, ChickenSelectionSerializer):
    """
    Request body for POST /orders/

    {
        "chicken_type": "pieces",
        "pieces_type": "custom",
        "quantity": 6,
        "piece_details": {"breasts": 2, "thighs": 0, "drumsticks": 1, "wings": 3},
        "name": "Jane Banda",
        "phone": "0971234567",
        "delivery_location_type": "school",
        "school": "University of Zambia (UNZA)",
        "block": "B",
        "room": "12",
        "device_id": "5f0c..."
    }
    """
    pass


class GenericOrderSubmitSerializer(ContactSerializer, GenericSelectionSerializer):
    """Request body for POST /orders/generic/"""
    pass


class QuoteSerializer(serializers.Serializer):
    """
    Either a chicken selection or a generic one, chosen by `product_type`.
    """
    product_type = serializers.ChoiceField(
        choices=Order.ProductType.choices,
        default=Order.ProductType.CHICKEN
    )

    def to_internal_value(self, data):
        validated = super().to_internal_value(data)
        if validated['product_type'] == Order.ProductType.GENERIC:
            selection_serializer = GenericSelectionSerializer(data=data)
        else:
            selection_serializer = ChickenSelectionSerializer(data=data)
        if not selection_serializer.is_valid():
            raise serializers.ValidationError(selection_serializer.errors)
        validated['selection'] = selection_serializer.get_selection()
        return validated


class OrderSerializer(serializers.ModelSerializer):
    """Full order representation for staff."""
    items_summary = serializers.CharField(read_only=True)
    location = serializers.CharField(read_only=True)
    is_open = serializers.BooleanField(read_only=True)
    allowed_actions = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'id', 'status', 'product_type',
            'chicken_type', 'pieces_type',
            'breasts', 'thighs', 'drumsticks', 'wings',
            'product', 'product_name', 'variation_name', 'option_name',
            'quantity', 'price', 'items_summary',
            'name', 'phone', 'delivery_location_type',
            'school', 'block', 'room', 'area', 'street', 'house_number',
            'location', 'device_id', 'user',
            'is_open', 'allowed_actions',
            'created_at', 'updated_at'
        ]
        read_only_fields = fields

    def get_allowed_actions(self, obj):
        return lifecycle.allowed_actions(obj.status)


class OrderListSerializer(serializers.ModelSerializer):
    """Compact row for order lists and customer history."""
    items_summary = serializers.CharField(read_only=True)
    location = serializers.CharField(read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'status', 'product_type', 'items_summary',
            'quantity', 'price', 'name', 'phone', 'location',
            'created_at'
        ]


class ClearOrdersSerializer(serializers.Serializer):
    confirmation_code = serializers.CharField(max_length=32)
