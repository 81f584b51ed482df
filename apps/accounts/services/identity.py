"""
Identity lookups used by authorization and sharing.

Wraps Django's auth User so that services depend on a small collaborator
instead of querying the auth tables directly. Roles are auth groups.
"""
import logging
from enum import Enum

from django.contrib.auth.models import Group, User

logger = logging.getLogger(__name__)

ROLE_ADMIN = 'Admin'
ROLE_USER = 'User'
ROLE_MODERATOR = 'Moderator'

ROLES = [ROLE_ADMIN, ROLE_USER, ROLE_MODERATOR]


class RoleChange(Enum):
    SUCCESS = 'success'
    USER_NOT_FOUND = 'user_not_found'
    ROLE_NOT_FOUND = 'role_not_found'
    ALREADY_IN_ROLE = 'already_in_role'
    NOT_IN_ROLE = 'not_in_role'


class IdentityProvider:
    """User, role and activation queries."""

    def get_user(self, user_id):
        """Return the User with this id, or None."""
        return User.objects.filter(pk=user_id).first()

    def find_user_by_email(self, email, active_only=True):
        """
        Find a user by email address (case-insensitive).

        Inactive accounts are treated as absent unless `active_only` is False.
        """
        if not email:
            return None

        users = User.objects.filter(email__iexact=email.strip())
        if active_only:
            users = users.filter(is_active=True)
        return users.order_by('id').first()

    def list_users(self):
        """All accounts with their groups prefetched, oldest first."""
        return list(User.objects.prefetch_related('groups').order_by('date_joined', 'id'))

    def is_in_role(self, user, role):
        """Check role membership. Superusers hold every role."""
        if user is None or not user.is_active:
            return False
        if user.is_superuser:
            return True
        return user.groups.filter(name=role).exists()

    def get_roles(self, user):
        return sorted(group.name for group in user.groups.all())

    def is_active(self, user):
        return bool(user is not None and user.is_active)

    def set_active(self, user_id, active):
        """Activate or deactivate an account. Returns the user, or None."""
        user = self.get_user(user_id)
        if user is None:
            return None

        if user.is_active != active:
            user.is_active = active
            user.save(update_fields=['is_active'])
            logger.info(
                f"User {user_id} {'activated' if active else 'deactivated'}",
                extra={'target_user_id': user_id}
            )
        return user

    def add_to_role(self, user_id, role):
        user = self.get_user(user_id)
        if user is None:
            return RoleChange.USER_NOT_FOUND

        group = Group.objects.filter(name=role).first()
        if group is None:
            return RoleChange.ROLE_NOT_FOUND

        if user.groups.filter(pk=group.pk).exists():
            return RoleChange.ALREADY_IN_ROLE

        user.groups.add(group)
        logger.info(f"User {user_id} added to role {role}", extra={'target_user_id': user_id})
        return RoleChange.SUCCESS

    def remove_from_role(self, user_id, role):
        user = self.get_user(user_id)
        if user is None:
            return RoleChange.USER_NOT_FOUND

        group = user.groups.filter(name=role).first()
        if group is None:
            return RoleChange.NOT_IN_ROLE

        user.groups.remove(group)
        logger.info(f"User {user_id} removed from role {role}", extra={'target_user_id': user_id})
        return RoleChange.SUCCESS


identity_provider = IdentityProvider()
