"""
Shared fixtures for the Family Tree test suite.
"""
from unittest.mock import MagicMock

import pytest
from django.contrib.auth.models import User
from django.core.files.storage import FileSystemStorage
from rest_framework.test import APIClient

from apps.trees.models import FamilyTree, Person, TreeMember, TreeCollaborator
from apps.trees.services import FamilyMemberService, FamilyTreeService, MediaService


@pytest.fixture
def owner(db):
    return User.objects.create_user(username='owner', email='owner@test.com', password='pw-owner-123')


@pytest.fixture
def collaborator(db):
    return User.objects.create_user(username='collab', email='collab@test.com', password='pw-collab-123')


@pytest.fixture
def stranger(db):
    return User.objects.create_user(username='stranger', email='stranger@test.com', password='pw-stranger-123')


@pytest.fixture
def tree(owner):
    return FamilyTree.objects.create(name='Test Tree', owner=owner)


@pytest.fixture
def grant(tree):
    """Create a collaborator grant: grant(user, 'Edit')."""
    def _grant(user, permission):
        return TreeCollaborator.objects.create(tree=tree, user=user, permission=permission)
    return _grant


@pytest.fixture
def add_member(tree):
    """Create a person and place them in the tree."""
    def _add_member(first_name='John', last_name='Doe', **fields):
        person = Person.objects.create(first_name=first_name, last_name=last_name, **fields)
        TreeMember.objects.create(tree=tree, person=person)
        return person
    return _add_member


@pytest.fixture
def sanitizer():
    """Sanitizer double that returns its input unchanged."""
    mock = MagicMock()
    mock.sanitize.side_effect = lambda html: html
    return mock


@pytest.fixture
def log():
    return MagicMock()


@pytest.fixture
def member_service(sanitizer, log):
    return FamilyMemberService(sanitizer=sanitizer, log=log)


@pytest.fixture
def tree_service(log):
    return FamilyTreeService(log=log)


@pytest.fixture
def storage(tmp_path):
    return FileSystemStorage(location=tmp_path, base_url='/media/')


@pytest.fixture
def media_service(storage, log):
    return MediaService(storage=storage, log=log)


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def owner_client(api_client, owner):
    api_client.force_authenticate(user=owner)
    return api_client
