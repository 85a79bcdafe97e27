"""
URL configuration for the Curbside pre-order backend.
"""
from django.contrib import admin
from django.urls import path, include
from django.http import JsonResponse


def health_check(request):
    """Health check endpoint for container orchestration."""
    return JsonResponse({'status': 'healthy', 'service': 'curbside-api'})


urlpatterns = [
    path('admin/', admin.site.urls),
    path('health/', health_check, name='health-check'),
    path('api/', include('accounts.urls')),
    path('api/', include('catalog.urls')),
    path('api/', include('deliveries.urls')),
    path('api/', include('orders.urls')),
    path('api/', include('finance.urls')),
]
