"""
Catalog API Views.

Implements:
- Storefront product list/detail (active products only)
- Staff product CRUD with nested variations
- Price table read (public) and update (staff)
"""
import logging

from django.db.models import Prefetch
from rest_framework import generics

from accounts.permissions import IsStaffMember
from .models import PriceTable, Product, ProductVariation
from .serializers import (
    ProductSerializer,
    PublicProductSerializer,
    PriceTableSerializer,
    PublicPriceTableSerializer,
)

logger = logging.getLogger(__name__)


def products_with_options():
    return Product.objects.prefetch_related(
        Prefetch('variations', queryset=ProductVariation.objects.prefetch_related('options'))
    )


# =============================================================================
# Storefront Views
# =============================================================================

class ProductListView(generics.ListAPIView):
    """
    GET: Active products in display order.

    Query Parameters:
        - category: Filter by category name
    """
    serializer_class = PublicProductSerializer

    def get_queryset(self):
        queryset = products_with_options().filter(is_active=True)

        category = self.request.query_params.get('category', '').strip()
        if category:
            queryset = queryset.filter(category__iexact=category)

        return queryset.order_by('display_order', 'name')


class ProductDetailView(generics.RetrieveAPIView):
    serializer_class = PublicProductSerializer

    def get_queryset(self):
        return products_with_options().filter(is_active=True)


class PriceTableView(generics.RetrieveAPIView):
    """GET: Current chicken prices."""
    serializer_class = PublicPriceTableSerializer

    def get_object(self):
        return PriceTable.load()


# =============================================================================
# Staff Views
# =============================================================================

class AdminProductListCreateView(generics.ListCreateAPIView):
    """
    GET: All products, including inactive ones
    POST: Create a product with its variations
    """
    permission_classes = [IsStaffMember]
    serializer_class = ProductSerializer

    def get_queryset(self):
        return products_with_options().order_by('display_order', 'name')

    def perform_create(self, serializer):
        product = serializer.save()
        logger.info(f"Created product #{product.id} '{product.name}'")


class AdminProductDetailView(generics.RetrieveUpdateDestroyAPIView):
    """
    GET: Retrieve a product
    PUT/PATCH: Update a product (PATCH {"is_active": false} hides it)
    DELETE: Delete a product
    """
    permission_classes = [IsStaffMember]
    serializer_class = ProductSerializer

    def get_queryset(self):
        return products_with_options()

    def perform_destroy(self, instance):
        logger.info(f"Deleting product #{instance.id} '{instance.name}'")
        instance.delete()


class AdminPriceTableView(generics.RetrieveUpdateAPIView):
    """
    GET: Prices with profit margins
    PUT/PATCH: Update prices
    """
    permission_classes = [IsStaffMember]
    serializer_class = PriceTableSerializer

    def get_object(self):
        return PriceTable.load()

    def perform_update(self, serializer):
        serializer.save()
        logger.info("Price table updated")
