"""
URL routing for order API endpoints.
"""
from django.urls import path
from . import views

app_name = 'orders'

urlpatterns = [
    path('orders/', views.OrderSubmitView.as_view(), name='order-submit'),
    path('orders/generic/', views.GenericOrderSubmitView.as_view(), name='order-submit-generic'),
    path('orders/quote/', views.QuoteView.as_view(), name='order-quote'),
    path('orders/history/', views.OrderHistoryView.as_view(), name='order-history'),
    path('admin/orders/', views.AdminOrderListView.as_view(), name='admin-order-list'),
    path('admin/orders/stats/', views.OrderStatsView.as_view(), name='admin-order-stats'),
    path('admin/orders/clear/', views.ClearOrdersView.as_view(), name='admin-order-clear'),
    path('admin/orders/<int:pk>/', views.AdminOrderDetailView.as_view(), name='admin-order-detail'),
    path(
        'admin/orders/<int:pk>/<slug:action>/',
        views.OrderTransitionView.as_view(),
        name='admin-order-transition'
    ),
]
