"""
Access resolution for family trees.

`resolve_access` is pure: it only looks at the tree's owner and public
flag plus the requesting user's collaborator permission (if any).
`get_access_level` performs the single grant lookup and delegates.
"""
from enum import IntEnum

from .models import TreeCollaborator


class AccessLevel(IntEnum):
    NO_ACCESS = 0
    VIEW = 1
    EDIT = 2
    ADMIN = 3


_GRANT_LEVELS = {
    TreeCollaborator.PERMISSION_VIEW: AccessLevel.VIEW,
    TreeCollaborator.PERMISSION_EDIT: AccessLevel.EDIT,
    TreeCollaborator.PERMISSION_ADMIN: AccessLevel.ADMIN,
}


def is_owner(tree, user_id) -> bool:
    return tree.owner_id == user_id


def resolve_access(tree, user_id, grant_permission=None) -> AccessLevel:
    """
    Compute the access level of `user_id` on `tree`.

    Args:
        tree: object exposing `owner_id` and `is_public`
        user_id: requesting user id
        grant_permission: the user's collaborator permission on this tree,
            or None when no grant row exists

    Ownership short-circuits everything. A public tree gives view access
    to anyone, a grant gives at least view access.
    """
    if is_owner(tree, user_id):
        return AccessLevel.ADMIN

    level = _GRANT_LEVELS.get(grant_permission, AccessLevel.NO_ACCESS)
    if grant_permission is not None and level == AccessLevel.NO_ACCESS:
        # Unknown permission string on an existing row still implies membership
        level = AccessLevel.VIEW

    if tree.is_public and level < AccessLevel.VIEW:
        level = AccessLevel.VIEW

    return level


def can_view(level) -> bool:
    return level >= AccessLevel.VIEW


def can_edit(level) -> bool:
    return level >= AccessLevel.EDIT


def can_manage_collaborators(level) -> bool:
    return level >= AccessLevel.ADMIN


def can_delete(tree, user_id) -> bool:
    """Deleting a tree is reserved to its owner; Admin collaborators cannot."""
    return is_owner(tree, user_id)


def get_grant_permission(tree, user_id):
    """Return the user's collaborator permission on the tree, or None."""
    return TreeCollaborator.objects.filter(
        tree_id=tree.pk, user_id=user_id
    ).values_list('permission', flat=True).first()


def get_access_level(tree, user_id) -> AccessLevel:
    if is_owner(tree, user_id):
        return AccessLevel.ADMIN
    return resolve_access(tree, user_id, get_grant_permission(tree, user_id))
