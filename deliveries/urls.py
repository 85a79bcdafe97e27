"""
URL routing for delivery API endpoints.
"""
from django.urls import path
from . import views

app_name = 'deliveries'

urlpatterns = [
    path('delivery/status/', views.DeliveryStatusView.as_view(), name='delivery-status'),
    path('admin/delivery/', views.AdminDeliverySettingsView.as_view(), name='delivery-settings'),
    path('admin/delivery/reset-slots/', views.ResetSlotsView.as_view(), name='reset-slots'),
    path('admin/delivery/records/', views.DeliveryRecordListView.as_view(), name='delivery-records'),
]
