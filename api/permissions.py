"""
Custom permissions for the Family Tree API.
"""
from rest_framework import permissions

from apps.accounts.services import identity_provider, ROLE_ADMIN


class IsActiveUser(permissions.BasePermission):
    """
    Only authenticated users whose account is active.
    """
    message = 'This account has been disabled.'

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return identity_provider.is_active(user)


class IsSiteAdmin(IsActiveUser):
    """
    Active users holding the site Admin role.
    """
    message = 'This action requires the Admin role.'

    def has_permission(self, request, view):
        if not super().has_permission(request, view):
            return False
        return identity_provider.is_in_role(request.user, ROLE_ADMIN)
