"""
Account API Views.

Implements:
- POST /devices/ - Register a new device or refresh its last-seen time
- GET /admin/devices/ - Device list for staff
- GET /admin/users/ - Users sorted by role
- PATCH /admin/users/{id}/role/ - Change a user's role
"""
import logging

from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.rate_limiting import rate_limit
from .models import Device, UserProfile, ROLE_HIERARCHY, get_role
from .permissions import IsStaffMember, IsAdminRole
from .serializers import (
    DeviceRegisterSerializer,
    DeviceSerializer,
    UserSerializer,
    UserRoleSerializer,
)

logger = logging.getLogger(__name__)


class DeviceRegisterView(APIView):
    """
    POST: Register a device on first visit, touch last_seen_at afterwards.

    Request Body:
    {"device_id": "3f0c6a9e-..."}
    """

    @rate_limit(max_requests=30, window_seconds=60)
    def post(self, request):
        serializer = DeviceRegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        device_id = serializer.validated_data['device_id']

        device, created = Device.objects.get_or_create(
            id=device_id,
            defaults={'user_agent': request.META.get('HTTP_USER_AGENT', '')}
        )
        if not created:
            device.save(update_fields=['last_seen_at'])
        else:
            logger.info(f"Registered device {device_id}")

        return Response(
            DeviceSerializer(device).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
        )


class DeviceListView(generics.ListAPIView):
    """GET: All known devices, most recently seen first."""
    permission_classes = [IsStaffMember]
    serializer_class = DeviceSerializer
    queryset = Device.objects.all()


class UserListView(generics.ListAPIView):
    """GET: All users, admins first, then assistants, then customers."""
    permission_classes = [IsAdminRole]
    serializer_class = UserSerializer
    pagination_class = None

    def list(self, request, *args, **kwargs):
        users = get_user_model().objects.select_related('profile')
        ordered = sorted(
            users,
            key=lambda u: (ROLE_HIERARCHY.index(get_role(u)), (u.email or '').lower())
        )
        return Response(self.get_serializer(ordered, many=True).data)


class UserRoleUpdateView(APIView):
    """PATCH: Change a user's role."""
    permission_classes = [IsAdminRole]

    def patch(self, request, pk):
        user = get_object_or_404(get_user_model(), pk=pk)
        serializer = UserRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        profile, _ = UserProfile.objects.get_or_create(user=user)
        profile.role = serializer.validated_data['role']
        profile.save(update_fields=['role'])
        logger.info(f"User #{user.pk} role changed to {profile.role} by #{request.user.pk}")

        return Response(UserSerializer(user).data)
