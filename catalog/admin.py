"""
Django Admin configuration for catalog models.
"""
from django.contrib import admin
from .models import PriceTable, Product, ProductVariation, ProductOption


class ProductOptionInline(admin.TabularInline):
    model = ProductOption
    extra = 0


class ProductVariationInline(admin.TabularInline):
    model = ProductVariation
    extra = 0
    show_change_link = True


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'product_type', 'category', 'is_active', 'display_order', 'created_at']
    list_filter = ['product_type', 'is_active', 'category']
    search_fields = ['name', 'description']
    ordering = ['display_order', 'name']
    inlines = [ProductVariationInline]


@admin.register(ProductVariation)
class ProductVariationAdmin(admin.ModelAdmin):
    list_display = ['id', 'product', 'name', 'position']
    raw_id_fields = ['product']
    inlines = [ProductOptionInline]


@admin.register(PriceTable)
class PriceTableAdmin(admin.ModelAdmin):
    list_display = ['whole', 'mixed_piece', 'breasts', 'thighs', 'drumsticks', 'wings', 'is_choose_pieces_enabled', 'updated_at']

    def has_add_permission(self, request):
        return not PriceTable.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False
