"""
Serializers for catalog models.
Provides data validation and JSON conversion for API endpoints.
"""
from django.db import transaction
from rest_framework import serializers

from .models import PriceTable, Product, ProductVariation, ProductOption


class ProductOptionSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductOption
        fields = ['name', 'price', 'profit']


class PublicProductOptionSerializer(serializers.ModelSerializer):
    """Option without its profit margin."""
    class Meta:
        model = ProductOption
        fields = ['name', 'price']


class ProductVariationSerializer(serializers.ModelSerializer):
    options = ProductOptionSerializer(many=True)

    class Meta:
        model = ProductVariation
        fields = ['name', 'options']

    def validate_options(self, value):
        if not value:
            raise serializers.ValidationError("A variation needs at least one option")
        return value


class PublicProductVariationSerializer(serializers.ModelSerializer):
    options = PublicProductOptionSerializer(many=True, read_only=True)

    class Meta:
        model = ProductVariation
        fields = ['name', 'options']


class ProductSerializer(serializers.ModelSerializer):
    """
    Staff serializer for Product with nested variations and options.
    Writing replaces the full variation tree.
    """
    variations = ProductVariationSerializer(many=True, required=False)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'description', 'image_url', 'category',
            'product_type', 'variations', 'is_active', 'display_order',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate(self, attrs):
        product_type = attrs.get(
            'product_type',
            self.instance.product_type if self.instance else Product.ProductType.GENERIC
        )
        variations = attrs.get('variations')
        if product_type == Product.ProductType.GENERIC and variations is not None and not variations:
            raise serializers.ValidationError(
                {'variations': "Generic products need at least one variation"}
            )
        return attrs

    def _write_variations(self, product, variations):
        product.variations.all().delete()
        for v_index, variation in enumerate(variations):
            v = ProductVariation.objects.create(
                product=product, name=variation['name'], position=v_index
            )
            ProductOption.objects.bulk_create([
                ProductOption(variation=v, position=o_index, **option)
                for o_index, option in enumerate(variation['options'])
            ])

    @transaction.atomic
    def create(self, validated_data):
        variations = validated_data.pop('variations', [])
        product = Product.objects.create(**validated_data)
        self._write_variations(product, variations)
        return product

    @transaction.atomic
    def update(self, instance, validated_data):
        variations = validated_data.pop('variations', None)
        instance = super().update(instance, validated_data)
        if variations is not None:
            self._write_variations(instance, variations)
        return instance


class PublicProductSerializer(serializers.ModelSerializer):
    """Storefront serializer: no profit margins."""
    variations = PublicProductVariationSerializer(many=True, read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'description', 'image_url', 'category',
            'product_type', 'variations', 'display_order'
        ]


class PublicPriceTableSerializer(serializers.ModelSerializer):
    """Unit prices shown to customers."""
    pieces = serializers.SerializerMethodField()

    class Meta:
        model = PriceTable
        fields = ['whole', 'mixed_piece', 'pieces', 'is_choose_pieces_enabled']

    def get_pieces(self, obj):
        return {
            'breasts': str(obj.breasts),
            'thighs': str(obj.thighs),
            'drumsticks': str(obj.drumsticks),
            'wings': str(obj.wings),
        }


class PriceTableSerializer(serializers.ModelSerializer):
    """Staff serializer including profit margins."""
    class Meta:
        model = PriceTable
        fields = [
            'whole', 'mixed_piece', 'breasts', 'thighs', 'drumsticks', 'wings',
            'is_choose_pieces_enabled',
            'profit_whole', 'profit_mixed_piece', 'profit_breasts',
            'profit_thighs', 'profit_drumsticks', 'profit_wings',
            'updated_at'
        ]
        read_only_fields = ['updated_at']
