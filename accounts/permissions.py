"""
Role-based permissions for back office endpoints.
"""
from rest_framework.permissions import BasePermission

from .models import UserProfile, get_role


class IsStaffMember(BasePermission):
    """Admins and assistants."""
    message = 'Staff access required.'

    def has_permission(self, request, view):
        return get_role(request.user) in (
            UserProfile.Role.ADMIN,
            UserProfile.Role.ASSISTANT,
        )


class IsAdminRole(BasePermission):
    message = 'Admin access required.'

    def has_permission(self, request, view):
        return get_role(request.user) == UserProfile.Role.ADMIN
