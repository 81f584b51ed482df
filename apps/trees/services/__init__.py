from .sanitizer import HtmlSanitizer
from .members import FamilyMemberService
from .trees import FamilyTreeService
from .media import MediaService, compute_content_hash

__all__ = [
    'HtmlSanitizer',
    'FamilyMemberService',
    'FamilyTreeService',
    'MediaService',
    'compute_content_hash',
]
