"""
Family tree lifecycle and sharing services.
"""
import logging
from django.db import IntegrityError, transaction
from django.db.models import Count
from django.utils import timezone

from apps.accounts.services import identity_provider

from ..access import (
    get_access_level, can_view, can_edit, can_manage_collaborators, can_delete,
)
from ..models import FamilyTree, TreeCollaborator
from ..results import Result, ServiceError

logger = logging.getLogger(__name__)


def _with_member_count(queryset):
    return queryset.annotate(member_count=Count('members', distinct=True))


class FamilyTreeService:
    """Create, read, update and delete trees; manage collaborators."""

    def __init__(self, identity=None, log=None):
        self.identity = identity or identity_provider
        self.log = log or logger

    def create_tree(self, user_id, data):
        """Any active user may create a tree; they become its owner."""
        tree = FamilyTree.objects.create(
            name=data['name'],
            description=data.get('description'),
            owner_id=user_id,
            is_public=data.get('is_public', False),
        )

        self.log.info(
            f"User {user_id} created family tree {tree.id}",
            extra={'actor_id': user_id, 'tree_id': tree.id}
        )
        return Result.success(self._load(tree.id))

    def list_user_trees(self, user_id):
        """
        Trees the user owns followed by trees shared with them.

        Each group is ordered newest first; a tree appears once.
        """
        owned = _with_member_count(
            FamilyTree.objects.filter(owner_id=user_id)
        ).order_by('-created_at', '-id')

        shared = _with_member_count(
            FamilyTree.objects.filter(collaborators__user_id=user_id)
        ).order_by('-created_at', '-id')

        trees = []
        seen = set()
        for tree in list(owned) + list(shared):
            if tree.id in seen:
                continue
            seen.add(tree.id)
            trees.append(tree)

        return Result.success(trees)

    def get_tree(self, tree_id, user_id):
        tree = self._load(tree_id)
        if tree is None:
            return Result.failure(ServiceError.TREE_NOT_FOUND)

        if not can_view(get_access_level(tree, user_id)):
            return Result.failure(ServiceError.NO_VIEW_ACCESS)

        return Result.success(tree)

    def update_tree(self, tree_id, user_id, data):
        tree = FamilyTree.objects.filter(pk=tree_id).first()
        if tree is None:
            return Result.failure(ServiceError.TREE_NOT_FOUND)

        if not can_edit(get_access_level(tree, user_id)):
            return Result.failure(ServiceError.NO_EDIT_ACCESS)

        tree.name = data['name']
        tree.description = data.get('description')
        tree.is_public = data.get('is_public', False)
        tree.updated_at = timezone.now()
        tree.save()

        self.log.info(
            f"User {user_id} updated family tree {tree.id}",
            extra={'actor_id': user_id, 'tree_id': tree.id}
        )
        return Result.success(self._load(tree.id))

    def delete_tree(self, tree_id, user_id):
        """Owner only. Memberships and grants go with the tree; people stay."""
        tree = FamilyTree.objects.filter(pk=tree_id).first()
        if tree is None:
            return Result.failure(ServiceError.TREE_NOT_FOUND)

        if not can_delete(tree, user_id):
            return Result.failure(ServiceError.NOT_OWNER)

        deleted_id = tree.id
        tree.delete()

        self.log.info(
            f"User {user_id} deleted family tree {deleted_id}",
            extra={'actor_id': user_id, 'tree_id': deleted_id}
        )
        return Result.success()

    # -------------------------------------------------------------------
    # Collaborators
    # -------------------------------------------------------------------

    def share_tree(self, tree_id, user_id, email, permission):
        """
        Grant a user access to the tree by email.

        `permission` must already be one of View, Edit or Admin.
        """
        tree = FamilyTree.objects.filter(pk=tree_id).first()
        if tree is None:
            return Result.failure(ServiceError.TREE_NOT_FOUND)

        if not can_manage_collaborators(get_access_level(tree, user_id)):
            return Result.failure(ServiceError.NO_MANAGE_ACCESS)

        target = self.identity.find_user_by_email(email)
        if target is None:
            return Result.failure(ServiceError.USER_NOT_FOUND)

        if self._is_collaborator(tree, target):
            return Result.failure(ServiceError.ALREADY_COLLABORATOR)

        if tree.owner_id == target.id:
            return Result.failure(ServiceError.CANNOT_SHARE_WITH_OWNER)

        try:
            with transaction.atomic():
                collaborator = TreeCollaborator.objects.create(
                    tree=tree,
                    user=target,
                    permission=permission
                )
        except IntegrityError:
            # A concurrent request created the same grant
            return Result.failure(ServiceError.ALREADY_COLLABORATOR)

        self.log.info(
            f"User {user_id} shared tree {tree.id} with user {target.id} "
            f"with {permission} permission",
            extra={'actor_id': user_id, 'tree_id': tree.id, 'target_user_id': target.id}
        )
        return Result.success(collaborator)

    def list_collaborators(self, tree_id, user_id):
        tree = FamilyTree.objects.filter(pk=tree_id).first()
        if tree is None:
            return Result.failure(ServiceError.TREE_NOT_FOUND)

        if not can_view(get_access_level(tree, user_id)):
            return Result.failure(ServiceError.NO_VIEW_ACCESS)

        collaborators = TreeCollaborator.objects.filter(
            tree=tree
        ).select_related('user').order_by('invited_at', 'id')

        return Result.success(list(collaborators))

    def remove_collaborator(self, tree_id, collaborator_id, user_id):
        tree = FamilyTree.objects.filter(pk=tree_id).first()
        if tree is None:
            return Result.failure(ServiceError.TREE_NOT_FOUND)

        if not can_manage_collaborators(get_access_level(tree, user_id)):
            return Result.failure(ServiceError.NO_MANAGE_ACCESS)

        collaborator = TreeCollaborator.objects.filter(
            pk=collaborator_id, tree=tree
        ).first()
        if collaborator is None:
            return Result.failure(ServiceError.COLLABORATOR_NOT_FOUND)

        collaborator.delete()

        self.log.info(
            f"User {user_id} removed collaborator {collaborator_id} from tree {tree.id}",
            extra={'actor_id': user_id, 'tree_id': tree.id, 'collaborator_id': collaborator_id}
        )
        return Result.success()

    def _is_collaborator(self, tree, user):
        return TreeCollaborator.objects.filter(tree=tree, user=user).exists()

    def _load(self, tree_id):
        return _with_member_count(
            FamilyTree.objects.filter(pk=tree_id).select_related('owner')
        ).first()
