"""
User administration views for the Family Tree API.

Site administrators activate accounts and manage role membership.
"""
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from api.permissions import IsSiteAdmin
from apps.accounts.services import identity_provider, RoleChange

from .serializers import AdminUserSerializer, UserActivationSerializer, UserRoleSerializer

ROLE_CHANGE_ERRORS = {
    RoleChange.USER_NOT_FOUND: (status.HTTP_404_NOT_FOUND, 'User not found'),
    RoleChange.ROLE_NOT_FOUND: (status.HTTP_404_NOT_FOUND, 'Role not found'),
    RoleChange.ALREADY_IN_ROLE: (status.HTTP_400_BAD_REQUEST, 'User already has this role'),
    RoleChange.NOT_IN_ROLE: (status.HTTP_404_NOT_FOUND, 'User does not have this role'),
}


class IdentityMixin:
    identity = identity_provider

    def role_change_response(self, outcome, user_id):
        if outcome != RoleChange.SUCCESS:
            code, message = ROLE_CHANGE_ERRORS[outcome]
            return Response({'error': message}, status=code)
        return Response(AdminUserSerializer(self.identity.get_user(user_id)).data)


class UserListView(IdentityMixin, APIView):
    permission_classes = [IsSiteAdmin]

    @extend_schema(summary="List users with roles", responses=AdminUserSerializer(many=True))
    def get(self, request):
        return Response(AdminUserSerializer(self.identity.list_users(), many=True).data)


class UserActivationView(IdentityMixin, APIView):
    permission_classes = [IsSiteAdmin]

    @extend_schema(summary="Activate or deactivate a user", request=UserActivationSerializer,
                   responses=AdminUserSerializer)
    def patch(self, request, user_id):
        serializer = UserActivationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = self.identity.set_active(user_id, serializer.validated_data['is_active'])
        if user is None:
            return Response({'error': 'User not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(AdminUserSerializer(user).data)


class UserRoleListView(IdentityMixin, APIView):
    permission_classes = [IsSiteAdmin]

    @extend_schema(summary="Add a user to a role", request=UserRoleSerializer, responses=AdminUserSerializer)
    def post(self, request, user_id):
        serializer = UserRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        outcome = self.identity.add_to_role(user_id, serializer.validated_data['role'])
        return self.role_change_response(outcome, user_id)


class UserRoleDetailView(IdentityMixin, APIView):
    permission_classes = [IsSiteAdmin]

    @extend_schema(summary="Remove a user from a role", responses=AdminUserSerializer)
    def delete(self, request, user_id, role):
        outcome = self.identity.remove_from_role(user_id, role)
        return self.role_change_response(outcome, user_id)
