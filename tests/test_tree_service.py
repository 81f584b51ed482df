"""
Tests for FamilyTreeService.
"""
from datetime import timedelta
from unittest.mock import MagicMock, patch

import pytest
from django.contrib.auth.models import User
from django.utils import timezone

from apps.trees.models import FamilyTree, Person, TreeMember, TreeCollaborator
from apps.trees.results import ServiceError
from apps.trees.services import FamilyTreeService

pytestmark = pytest.mark.django_db


def _age(tree, days):
    """Push a tree's creation time into the past."""
    FamilyTree.objects.filter(pk=tree.pk).update(created_at=timezone.now() - timedelta(days=days))


class TestTreeLifecycle:

    def test_create_sets_owner(self, tree_service, owner):
        result = tree_service.create_tree(owner.id, {'name': 'Smiths', 'description': 'Line', 'is_public': True})

        assert result.ok
        tree = result.value
        assert tree.owner_id == owner.id
        assert tree.is_public
        assert tree.member_count == 0

    def test_get_counts_members(self, tree_service, tree, owner, add_member):
        add_member()
        add_member('Jane', 'Doe')

        result = tree_service.get_tree(tree.id, owner.id)

        assert result.value.member_count == 2

    def test_get_private_tree_as_stranger(self, tree_service, tree, stranger):
        assert tree_service.get_tree(tree.id, stranger.id).error == ServiceError.NO_VIEW_ACCESS

    def test_get_missing_tree(self, tree_service, owner):
        assert tree_service.get_tree(404, owner.id).error == ServiceError.TREE_NOT_FOUND

    def test_edit_collaborator_updates_tree(self, tree_service, tree, collaborator, grant):
        grant(collaborator, 'Edit')

        result = tree_service.update_tree(tree.id, collaborator.id, {'name': 'Renamed', 'is_public': True})

        assert result.ok
        tree.refresh_from_db()
        assert tree.name == 'Renamed'
        assert tree.is_public
        assert tree.updated_at is not None

    def test_view_collaborator_cannot_update(self, tree_service, tree, collaborator, grant):
        grant(collaborator, 'View')

        result = tree_service.update_tree(tree.id, collaborator.id, {'name': 'Nope'})

        assert result.error == ServiceError.NO_EDIT_ACCESS

    def test_owner_deletes_tree_people_survive(self, tree_service, tree, owner, collaborator, grant, add_member):
        person = add_member()
        grant(collaborator, 'View')

        result = tree_service.delete_tree(tree.id, owner.id)

        assert result.ok
        assert not FamilyTree.objects.filter(pk=tree.id).exists()
        assert not TreeMember.objects.exists()
        assert not TreeCollaborator.objects.exists()
        assert Person.objects.filter(pk=person.id).exists()

    def test_admin_collaborator_cannot_delete(self, tree_service, tree, collaborator, grant):
        grant(collaborator, 'Admin')

        result = tree_service.delete_tree(tree.id, collaborator.id)

        assert result.error == ServiceError.NOT_OWNER
        assert FamilyTree.objects.filter(pk=tree.id).exists()


class TestListUserTrees:

    def test_owned_first_then_shared_each_newest_first(self, tree_service, owner, collaborator):
        own_old = FamilyTree.objects.create(name='own-old', owner=collaborator)
        own_new = FamilyTree.objects.create(name='own-new', owner=collaborator)
        shared_old = FamilyTree.objects.create(name='shared-old', owner=owner)
        shared_new = FamilyTree.objects.create(name='shared-new', owner=owner)
        _age(own_old, 10)
        _age(own_new, 5)
        _age(shared_old, 8)
        _age(shared_new, 1)
        TreeCollaborator.objects.create(tree=shared_old, user=collaborator, permission='View')
        TreeCollaborator.objects.create(tree=shared_new, user=collaborator, permission='Edit')

        trees = tree_service.list_user_trees(collaborator.id).value

        assert [t.name for t in trees] == ['own-new', 'own-old', 'shared-new', 'shared-old']

    def test_excludes_unrelated_public_trees(self, tree_service, owner, stranger):
        FamilyTree.objects.create(name='public', owner=owner, is_public=True)

        assert tree_service.list_user_trees(stranger.id).value == []

    def test_trees_appear_once(self, tree_service, tree, owner):
        trees = tree_service.list_user_trees(owner.id).value

        assert [t.id for t in trees] == [tree.id]


class TestSharing:

    def test_owner_shares_by_email(self, tree_service, tree, owner, collaborator):
        result = tree_service.share_tree(tree.id, owner.id, 'COLLAB@test.com', 'Edit')

        assert result.ok
        grant = result.value
        assert grant.user_id == collaborator.id
        assert grant.permission == 'Edit'

    def test_unknown_email(self, tree_service, tree, owner):
        result = tree_service.share_tree(tree.id, owner.id, 'nobody@test.com', 'View')

        assert result.error == ServiceError.USER_NOT_FOUND

    def test_inactive_user_is_not_found(self, tree_service, tree, owner, collaborator):
        collaborator.is_active = False
        collaborator.save()

        result = tree_service.share_tree(tree.id, owner.id, collaborator.email, 'View')

        assert result.error == ServiceError.USER_NOT_FOUND

    def test_already_collaborator(self, tree_service, tree, owner, collaborator, grant):
        grant(collaborator, 'View')

        result = tree_service.share_tree(tree.id, owner.id, collaborator.email, 'Edit')

        assert result.error == ServiceError.ALREADY_COLLABORATOR
        assert TreeCollaborator.objects.get(tree=tree, user=collaborator).permission == 'View'

    def test_cannot_share_with_owner(self, tree_service, tree, owner):
        result = tree_service.share_tree(tree.id, owner.id, owner.email, 'Admin')

        assert result.error == ServiceError.CANNOT_SHARE_WITH_OWNER
        assert not TreeCollaborator.objects.exists()

    def test_edit_collaborator_cannot_share(self, tree_service, tree, collaborator, stranger, grant):
        grant(collaborator, 'Edit')

        result = tree_service.share_tree(tree.id, collaborator.id, stranger.email, 'View')

        assert result.error == ServiceError.NO_MANAGE_ACCESS

    def test_admin_collaborator_can_share(self, tree_service, tree, collaborator, stranger, grant):
        grant(collaborator, 'Admin')

        result = tree_service.share_tree(tree.id, collaborator.id, stranger.email, 'View')

        assert result.ok

    def test_uses_injected_identity(self, tree, owner, log):
        identity = MagicMock()
        identity.find_user_by_email.return_value = None
        service = FamilyTreeService(identity=identity, log=log)

        result = service.share_tree(tree.id, owner.id, 'x@test.com', 'View')

        identity.find_user_by_email.assert_called_once_with('x@test.com')
        assert result.error == ServiceError.USER_NOT_FOUND

    def test_grant_inserted_after_check_hits_unique_constraint(self, tree_service, tree, owner, collaborator, grant):
        grant(collaborator, 'View')

        # The existence check misses a grant committed by a concurrent request
        with patch.object(FamilyTreeService, '_is_collaborator', return_value=False):
            result = tree_service.share_tree(tree.id, owner.id, collaborator.email, 'Edit')

        assert result.error == ServiceError.ALREADY_COLLABORATOR
        grants = TreeCollaborator.objects.filter(tree=tree, user=collaborator)
        assert [g.permission for g in grants] == ['View']


class TestCollaborators:

    def test_list_requires_view(self, tree_service, tree, collaborator, stranger, grant):
        grant(collaborator, 'View')

        assert len(tree_service.list_collaborators(tree.id, collaborator.id).value) == 1
        assert tree_service.list_collaborators(tree.id, stranger.id).error == ServiceError.NO_VIEW_ACCESS

    def test_owner_removes_collaborator(self, tree_service, tree, owner, collaborator, grant):
        row = grant(collaborator, 'Edit')

        result = tree_service.remove_collaborator(tree.id, row.id, owner.id)

        assert result.ok
        assert not TreeCollaborator.objects.exists()

    def test_collaborator_from_other_tree_not_found(self, tree_service, tree, owner, collaborator):
        other = FamilyTree.objects.create(name='Other', owner=owner)
        row = TreeCollaborator.objects.create(tree=other, user=collaborator, permission='View')

        result = tree_service.remove_collaborator(tree.id, row.id, owner.id)

        assert result.error == ServiceError.COLLABORATOR_NOT_FOUND

    def test_view_collaborator_cannot_remove(self, tree_service, tree, collaborator, grant):
        other_user = User.objects.create_user(username='other', email='other@test.com')
        row = grant(other_user, 'View')
        grant(collaborator, 'View')

        result = tree_service.remove_collaborator(tree.id, row.id, collaborator.id)

        assert result.error == ServiceError.NO_MANAGE_ACCESS
