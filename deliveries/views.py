"""
Delivery API Views.

Implements:
- GET /delivery/status/ - Slots left and whether ordering is open
- GET/PUT /admin/delivery/ - Delivery settings
- POST /admin/delivery/reset-slots/ - Reset the slot counter
- GET /admin/delivery/records/ - Delivered/dropped records per device
"""
import logging

from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsStaffMember
from .models import DeliverySettings, DeliveryRecord
from .serializers import (
    DeliverySettingsSerializer,
    DeliveryStatusSerializer,
    DeliveryRecordSerializer,
)
from .services import get_delivery_status, reset_slots

logger = logging.getLogger(__name__)


class DeliveryStatusView(APIView):
    def get(self, request):
        return Response(DeliveryStatusSerializer(get_delivery_status()).data)


class AdminDeliverySettingsView(generics.RetrieveUpdateAPIView):
    permission_classes = [IsStaffMember]
    serializer_class = DeliverySettingsSerializer

    def get_object(self):
        return DeliverySettings.load()

    def perform_update(self, serializer):
        settings = serializer.save()
        logger.info(
            f"Delivery settings updated: {settings.total_slots} slots, "
            f"enabled={settings.is_slots_enabled}"
        )


class ResetSlotsView(APIView):
    permission_classes = [IsStaffMember]

    def post(self, request):
        reset_slots()
        return Response(
            DeliveryStatusSerializer(get_delivery_status()).data,
            status=status.HTTP_200_OK
        )


class DeliveryRecordListView(generics.ListAPIView):
    """
    GET: Delivery records, most recent first.

    Query Parameters:
        - type: delivered or dropped
    """
    permission_classes = [IsStaffMember]
    serializer_class = DeliveryRecordSerializer

    def get_queryset(self):
        queryset = DeliveryRecord.objects.all()
        record_type = self.request.query_params.get('type', '').lower()
        if record_type in DeliveryRecord.RecordType.values:
            queryset = queryset.filter(record_type=record_type)
        return queryset
