"""
URL routing for device and user endpoints.
"""
from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    path('devices/', views.DeviceRegisterView.as_view(), name='device-register'),
    path('admin/devices/', views.DeviceListView.as_view(), name='device-list'),
    path('admin/users/', views.UserListView.as_view(), name='user-list'),
    path('admin/users/<int:pk>/role/', views.UserRoleUpdateView.as_view(), name='user-role'),
]
