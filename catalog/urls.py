"""
URL routing for catalog API endpoints.
"""
from django.urls import path
from . import views

app_name = 'catalog'

urlpatterns = [
    # Storefront
    path('products/', views.ProductListView.as_view(), name='product-list'),
    path('products/<int:pk>/', views.ProductDetailView.as_view(), name='product-detail'),
    path('pricing/', views.PriceTableView.as_view(), name='pricing'),

    # Staff
    path('admin/products/', views.AdminProductListCreateView.as_view(), name='admin-product-list'),
    path('admin/products/<int:pk>/', views.AdminProductDetailView.as_view(), name='admin-product-detail'),
    path('admin/pricing/', views.AdminPriceTableView.as_view(), name='admin-pricing'),
]
