"""
Account Models - anonymous devices and staff roles.

Models:
    - Device: Client-generated identifier for an unauthenticated browser
    - UserProfile: Role attached to a Django user (admin, assistant, customer)
"""
from django.conf import settings
from django.db import models


class Device(models.Model):
    """
    Anonymous browser session that orders can be attributed to.

    The id is generated on the client (UUID) and sent with every order.
    """
    id = models.CharField(
        primary_key=True,
        max_length=64,
        help_text="Client-generated device identifier"
    )
    user_agent = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    last_seen_at = models.DateTimeField(auto_now=True, db_index=True)

    class Meta:
        verbose_name = 'Device'
        verbose_name_plural = 'Devices'
        ordering = ['-last_seen_at']

    def __str__(self):
        return self.id


class UserProfile(models.Model):
    """Role of a registered user in the back office."""

    class Role(models.TextChoices):
        ADMIN = 'admin', 'Admin'
        ASSISTANT = 'assistant', 'Assistant'
        CUSTOMER = 'customer', 'Customer'

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='profile'
    )
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.CUSTOMER,
        db_index=True
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'User Profile'
        verbose_name_plural = 'User Profiles'

    def __str__(self):
        return f"{self.user} ({self.role})"

    @property
    def is_staff_member(self) -> bool:
        return self.role in (self.Role.ADMIN, self.Role.ASSISTANT)


ROLE_HIERARCHY = [
    UserProfile.Role.ADMIN,
    UserProfile.Role.ASSISTANT,
    UserProfile.Role.CUSTOMER,
]


def get_role(user) -> str:
    """Resolve a user's role. Superusers are always admins."""
    if user is None or not user.is_authenticated:
        return ''
    if user.is_superuser:
        return UserProfile.Role.ADMIN
    profile = getattr(user, 'profile', None)
    if profile is None:
        return UserProfile.Role.CUSTOMER
    return profile.role
