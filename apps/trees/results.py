"""
Outcome types returned by the tree services.

Expected failures (missing rows, denied access, rejected input) are
returned as values, never raised. Callers translate the error category
into a transport status.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

NOT_FOUND = 'not_found'
PERMISSION = 'permission'
VALIDATION = 'validation'


class ServiceError(Enum):
    """Closed vocabulary of expected service failures."""

    # Not found
    TREE_NOT_FOUND = (NOT_FOUND, "Family tree not found")
    PERSON_NOT_FOUND_IN_TREE = (NOT_FOUND, "Person not found in this tree")
    PERSON_NOT_FOUND = (NOT_FOUND, "Person not found")
    COLLABORATOR_NOT_FOUND = (NOT_FOUND, "Collaborator not found")
    USER_NOT_FOUND = (NOT_FOUND, "User not found")
    MEDIA_NOT_FOUND = (NOT_FOUND, "Media file not found")
    RELATIONSHIP_NOT_FOUND = (NOT_FOUND, "Relationship not found")

    # Permission
    NO_EDIT_ACCESS = (PERMISSION, "You don't have permission to edit this tree")
    NO_VIEW_ACCESS = (PERMISSION, "You don't have access to this tree")
    NO_MANAGE_ACCESS = (PERMISSION, "You don't have permission to manage collaborators")
    NOT_OWNER = (PERMISSION, "Only the owner can delete this tree")

    # Validation
    INVALID_DATE_RANGE = (VALIDATION, "Death date cannot be before birth date")
    HAS_EXISTING_RELATIONSHIPS = (
        VALIDATION,
        "Cannot remove person with existing relationships. Remove relationships first."
    )
    ALREADY_COLLABORATOR = (VALIDATION, "User is already a collaborator")
    CANNOT_SHARE_WITH_OWNER = (VALIDATION, "Cannot share tree with its owner")
    INVALID_FILE_TYPE = (VALIDATION, "Invalid file type for this media type")
    FILE_TOO_LARGE = (VALIDATION, "File size exceeds the maximum upload limit")
    MISSING_FILE_EXTENSION = (VALIDATION, "File must have an extension")
    NO_FILE_UPLOADED = (VALIDATION, "No file uploaded")
    SELF_RELATIONSHIP = (VALIDATION, "A person cannot be their own parent")
    DUPLICATE_RELATIONSHIP = (VALIDATION, "This relationship already exists")

    def __init__(self, category, message):
        self.category = category
        self.message = message


@dataclass(frozen=True)
class Result:
    """Either a value (success) or a ServiceError (failure)."""
    value: Any = None
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value=None) -> 'Result':
        return cls(value=value)

    @classmethod
    def failure(cls, error: ServiceError) -> 'Result':
        return cls(error=error)
