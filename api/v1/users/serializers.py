"""
User administration serializers for the Family Tree API.
"""
from django.contrib.auth.models import User
from rest_framework import serializers

from apps.accounts.services import identity_provider, ROLES


class AdminUserSerializer(serializers.ModelSerializer):
    """An account as seen by site administrators."""
    roles = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'is_active', 'date_joined', 'roles']
        read_only_fields = fields

    def get_roles(self, obj):
        return identity_provider.get_roles(obj)


class UserActivationSerializer(serializers.Serializer):
    is_active = serializers.BooleanField()


class UserRoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=ROLES)
