"""
Tests for API permission classes.
"""
from types import SimpleNamespace

import pytest
from django.contrib.auth.models import AnonymousUser, Group

from api.permissions import IsActiveUser, IsSiteAdmin
from apps.accounts.services import ROLE_ADMIN

pytestmark = pytest.mark.django_db


def request_for(user):
    return SimpleNamespace(user=user)


def test_active_user_allowed(owner):
    assert IsActiveUser().has_permission(request_for(owner), None)


def test_anonymous_denied():
    assert not IsActiveUser().has_permission(request_for(AnonymousUser()), None)


def test_disabled_account_denied(owner):
    owner.is_active = False

    assert not IsActiveUser().has_permission(request_for(owner), None)


def test_site_admin_requires_role(owner):
    assert not IsSiteAdmin().has_permission(request_for(owner), None)

    owner.groups.add(Group.objects.get(name=ROLE_ADMIN))

    assert IsSiteAdmin().has_permission(request_for(owner), None)
