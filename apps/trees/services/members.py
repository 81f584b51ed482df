"""
Family member services.

Adding, editing and removing people within a tree, and the parent/child
relationships between them. Business logic separated from views.
"""
import logging
from django.db import transaction
from django.db.models import Q

from ..access import get_access_level, can_view, can_edit
from ..models import FamilyTree, Person, TreeMember, Relationship
from ..results import Result, ServiceError
from .sanitizer import HtmlSanitizer

logger = logging.getLogger(__name__)

# Optional free-text fields copied from input and trimmed
OPTIONAL_TEXT_FIELDS = [
    'middle_name', 'maiden_name', 'birth_place', 'death_place', 'gender',
]


def _trim(value):
    return value.strip() if isinstance(value, str) else value


class FamilyMemberService:
    """
    People in a tree.

    Every operation resolves the tree first, then checks access, then
    validates input. Mutations require edit access, reads require view
    access.
    """

    def __init__(self, sanitizer=None, log=None):
        self.sanitizer = sanitizer or HtmlSanitizer()
        self.log = log or logger

    # -------------------------------------------------------------------
    # People
    # -------------------------------------------------------------------

    def add_person(self, tree_id, user_id, data):
        """
        Create a person and place them in the tree.

        Args:
            tree_id: target tree
            user_id: acting user
            data: mapping of person fields (first_name, last_name required)

        Returns:
            Result with the new Person
        """
        tree = FamilyTree.objects.filter(pk=tree_id).first()
        if tree is None:
            return Result.failure(ServiceError.TREE_NOT_FOUND)

        if not can_edit(get_access_level(tree, user_id)):
            return Result.failure(ServiceError.NO_EDIT_ACCESS)

        person = Person()
        self._apply_fields(person, data)

        error = self._validate_dates(person)
        if error:
            return Result.failure(error)

        with transaction.atomic():
            person.save()
            TreeMember.objects.create(tree=tree, person=person)

        self.log.info(
            f"User {user_id} added person {person.id} to tree {tree.id}",
            extra={'actor_id': user_id, 'person_id': person.id, 'tree_id': tree.id}
        )
        return Result.success(person)

    def list_members(self, tree_id, user_id):
        """Members of the tree ordered by last name, then first name."""
        tree = FamilyTree.objects.filter(pk=tree_id).first()
        if tree is None:
            return Result.failure(ServiceError.TREE_NOT_FOUND)

        if not can_view(get_access_level(tree, user_id)):
            return Result.failure(ServiceError.NO_VIEW_ACCESS)

        members = Person.objects.filter(
            tree_memberships__tree=tree
        ).order_by('last_name', 'first_name', 'id')

        return Result.success(list(members))

    def get_person(self, tree_id, person_id, user_id):
        """A single tree member, with relationships and media prefetched."""
        tree = FamilyTree.objects.filter(pk=tree_id).first()
        if tree is None:
            return Result.failure(ServiceError.TREE_NOT_FOUND)

        if not can_view(get_access_level(tree, user_id)):
            return Result.failure(ServiceError.NO_VIEW_ACCESS)

        if not self._is_member(tree, person_id):
            return Result.failure(ServiceError.PERSON_NOT_FOUND_IN_TREE)

        person = Person.objects.filter(pk=person_id).prefetch_related(
            'parent_relationships__child',
            'child_relationships__parent',
            'media_files',
        ).first()
        if person is None:
            return Result.failure(ServiceError.PERSON_NOT_FOUND)

        return Result.success(person)

    def update_person(self, tree_id, person_id, user_id, data):
        """Replace a member's details. Nothing is saved if validation fails."""
        tree = FamilyTree.objects.filter(pk=tree_id).first()
        if tree is None:
            return Result.failure(ServiceError.TREE_NOT_FOUND)

        if not can_edit(get_access_level(tree, user_id)):
            return Result.failure(ServiceError.NO_EDIT_ACCESS)

        if not self._is_member(tree, person_id):
            return Result.failure(ServiceError.PERSON_NOT_FOUND_IN_TREE)

        person = Person.objects.filter(pk=person_id).first()
        if person is None:
            return Result.failure(ServiceError.PERSON_NOT_FOUND)

        self._apply_fields(person, data)

        error = self._validate_dates(person)
        if error:
            return Result.failure(error)

        person.save()

        self.log.info(
            f"User {user_id} updated person {person.id} in tree {tree.id}",
            extra={'actor_id': user_id, 'person_id': person.id, 'tree_id': tree.id}
        )
        return Result.success(person)

    def remove_person(self, tree_id, person_id, user_id):
        """
        Remove a person from the tree.

        Only the membership row is deleted, the Person survives. Refused
        while any relationship (in any tree) still references the person.
        """
        tree = FamilyTree.objects.filter(pk=tree_id).first()
        if tree is None:
            return Result.failure(ServiceError.TREE_NOT_FOUND)

        if not can_edit(get_access_level(tree, user_id)):
            return Result.failure(ServiceError.NO_EDIT_ACCESS)

        membership = TreeMember.objects.filter(tree=tree, person_id=person_id).first()
        if membership is None:
            return Result.failure(ServiceError.PERSON_NOT_FOUND_IN_TREE)

        has_relationships = Relationship.objects.filter(
            Q(parent_id=person_id) | Q(child_id=person_id)
        ).exists()
        if has_relationships:
            return Result.failure(ServiceError.HAS_EXISTING_RELATIONSHIPS)

        membership.delete()

        self.log.info(
            f"User {user_id} removed person {person_id} from tree {tree.id}",
            extra={'actor_id': user_id, 'person_id': person_id, 'tree_id': tree.id}
        )
        return Result.success()

    # -------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------

    def add_relationship(self, tree_id, user_id, parent_id, child_id,
                         relationship_type=Relationship.TYPE_BIOLOGICAL):
        """Record a parent -> child edge between two members of the tree."""
        tree = FamilyTree.objects.filter(pk=tree_id).first()
        if tree is None:
            return Result.failure(ServiceError.TREE_NOT_FOUND)

        if not can_edit(get_access_level(tree, user_id)):
            return Result.failure(ServiceError.NO_EDIT_ACCESS)

        for person_id in (parent_id, child_id):
            if not Person.objects.filter(pk=person_id).exists():
                return Result.failure(ServiceError.PERSON_NOT_FOUND)
            if not self._is_member(tree, person_id):
                return Result.failure(ServiceError.PERSON_NOT_FOUND_IN_TREE)

        if parent_id == child_id:
            return Result.failure(ServiceError.SELF_RELATIONSHIP)

        if Relationship.objects.filter(parent_id=parent_id, child_id=child_id).exists():
            return Result.failure(ServiceError.DUPLICATE_RELATIONSHIP)

        relationship = Relationship.objects.create(
            parent_id=parent_id,
            child_id=child_id,
            type=relationship_type
        )

        self.log.info(
            f"User {user_id} added relationship {relationship.id} "
            f"({parent_id} -> {child_id}, {relationship_type}) in tree {tree.id}",
            extra={
                'actor_id': user_id,
                'person_id': child_id,
                'parent_id': parent_id,
                'tree_id': tree.id,
            }
        )
        return Result.success(relationship)

    def list_relationships(self, tree_id, user_id):
        """Edges whose parent and child are both members of the tree."""
        tree = FamilyTree.objects.filter(pk=tree_id).first()
        if tree is None:
            return Result.failure(ServiceError.TREE_NOT_FOUND)

        if not can_view(get_access_level(tree, user_id)):
            return Result.failure(ServiceError.NO_VIEW_ACCESS)

        member_ids = TreeMember.objects.filter(tree=tree).values('person_id')
        relationships = Relationship.objects.filter(
            parent_id__in=member_ids,
            child_id__in=member_ids,
        ).select_related('parent', 'child').order_by('id')

        return Result.success(list(relationships))

    def remove_relationship(self, tree_id, relationship_id, user_id):
        tree = FamilyTree.objects.filter(pk=tree_id).first()
        if tree is None:
            return Result.failure(ServiceError.TREE_NOT_FOUND)

        if not can_edit(get_access_level(tree, user_id)):
            return Result.failure(ServiceError.NO_EDIT_ACCESS)

        relationship = Relationship.objects.filter(pk=relationship_id).first()
        if relationship is None or not (
            self._is_member(tree, relationship.parent_id)
            or self._is_member(tree, relationship.child_id)
        ):
            return Result.failure(ServiceError.RELATIONSHIP_NOT_FOUND)

        relationship.delete()

        self.log.info(
            f"User {user_id} removed relationship {relationship_id} from tree {tree.id}",
            extra={
                'actor_id': user_id,
                'person_id': relationship.child_id,
                'parent_id': relationship.parent_id,
                'tree_id': tree.id,
            }
        )
        return Result.success()

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------

    def _is_member(self, tree, person_id):
        return TreeMember.objects.filter(tree=tree, person_id=person_id).exists()

    def _apply_fields(self, person, data):
        person.first_name = _trim(data.get('first_name') or '')
        person.last_name = _trim(data.get('last_name') or '')
        for field in OPTIONAL_TEXT_FIELDS:
            setattr(person, field, _trim(data.get(field)))

        person.birth_date = data.get('birth_date')
        person.death_date = data.get('death_date')

        # The sanitizer never sees blank input
        biography = data.get('biography')
        if biography is None or not biography.strip():
            person.biography = None
        else:
            person.biography = self.sanitizer.sanitize(biography.strip())

    def _validate_dates(self, person):
        if person.birth_date and person.death_date:
            if person.death_date < person.birth_date:
                return ServiceError.INVALID_DATE_RANGE
        return None
