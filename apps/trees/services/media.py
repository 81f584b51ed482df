"""
Media file services.

Uploads are stored content-addressed: the SHA-256 of the bytes names the
blob, so identical uploads for the same person share one stored file
while each upload still gets its own Media row.
"""
import hashlib
import logging
import os
from django.conf import settings
from django.core.files.storage import default_storage

from ..access import get_access_level, can_view, can_edit
from ..models import FamilyTree, Media, TreeMember
from ..results import Result, ServiceError

logger = logging.getLogger(__name__)


def compute_content_hash(uploaded_file):
    """SHA-256 hex digest of an uploaded file, read in chunks."""
    digest = hashlib.sha256()
    uploaded_file.seek(0)
    for chunk in uploaded_file.chunks():
        digest.update(chunk)
    uploaded_file.seek(0)
    return digest.hexdigest()


class MediaService:
    """Upload, list and delete media files attached to tree members."""

    def __init__(self, storage=None, log=None, max_upload_size=None,
                 allowed_extensions=None, upload_dir=None):
        self.storage = storage or default_storage
        self.log = log or logger
        self.max_upload_size = max_upload_size or settings.MEDIA_MAX_UPLOAD_SIZE
        self.allowed_extensions = allowed_extensions or settings.MEDIA_ALLOWED_EXTENSIONS
        self.upload_dir = upload_dir or settings.MEDIA_UPLOAD_DIR

    def upload_media(self, tree_id, person_id, user_id, uploaded_file, media_type, caption=None):
        """
        Store a file for a person and record its metadata.

        Args:
            uploaded_file: Django UploadedFile
            media_type: Photo, Document or Video

        Returns:
            Result with the new Media row
        """
        error = self._check_person(tree_id, person_id, user_id, can_edit,
                                   ServiceError.NO_EDIT_ACCESS)
        if error:
            return Result.failure(error)

        error = self._validate_file(uploaded_file, media_type)
        if error:
            self.log.warning(
                f"Rejected {media_type} upload for person {person_id}: {error.message}"
            )
            return Result.failure(error)

        extension = os.path.splitext(uploaded_file.name)[1].lower()
        content_hash = compute_content_hash(uploaded_file)
        file_path = f"{self.upload_dir}/{person_id}/{content_hash}{extension}"

        try:
            if not self.storage.exists(file_path):
                saved_path = self.storage.save(file_path, uploaded_file)
                if saved_path != file_path:
                    # Another upload of the same bytes won the race for file_path
                    self.storage.delete(saved_path)
                    self.log.info(f"Discarded duplicate copy {saved_path} of {file_path}")
                else:
                    self.log.info(f"Saved new file: {file_path}")
            else:
                self.log.info(f"File already exists (hash match): {file_path}")
        except Exception:
            self.log.exception(f"Error storing media file for person {person_id}")
            raise

        media = Media.objects.create(
            person_id=person_id,
            file_name=uploaded_file.name,
            file_path=file_path,
            content_hash=content_hash,
            file_size=uploaded_file.size,
            caption=caption.strip() if caption else None,
            media_type=media_type,
        )

        self.log.info(
            f"User {user_id} uploaded {media_type} {media.id} for person {person_id} in tree {tree_id}",
            extra={'actor_id': user_id, 'person_id': person_id, 'tree_id': tree_id, 'media_id': media.id}
        )
        return Result.success(media)

    def list_media(self, tree_id, person_id, user_id):
        """Media of a tree member, newest first."""
        error = self._check_person(tree_id, person_id, user_id, can_view,
                                   ServiceError.NO_VIEW_ACCESS)
        if error:
            return Result.failure(error)

        media_files = Media.objects.filter(person_id=person_id).order_by('-uploaded_at', '-id')
        return Result.success(list(media_files))

    def delete_media(self, tree_id, person_id, media_id, user_id):
        """
        Delete a media row and its blob.

        The blob is kept while another row still references it. A blob
        that is already gone is not an error.
        """
        error = self._check_person(tree_id, person_id, user_id, can_edit,
                                   ServiceError.NO_EDIT_ACCESS)
        if error:
            return Result.failure(error)

        media = Media.objects.filter(pk=media_id, person_id=person_id).first()
        if media is None:
            self.log.warning(f"Media {media_id} not found for person {person_id}")
            return Result.failure(ServiceError.MEDIA_NOT_FOUND)

        file_path = media.file_path
        media.delete()

        shared = Media.objects.filter(file_path=file_path).exists()
        if not shared and self.storage.exists(file_path):
            try:
                self.storage.delete(file_path)
                self.log.info(f"Deleted physical file: {file_path}")
            except OSError as e:
                self.log.warning(f"Could not delete physical file {file_path}: {e}")

        self.log.info(
            f"User {user_id} deleted media {media_id} for person {person_id} in tree {tree_id}",
            extra={'actor_id': user_id, 'person_id': person_id, 'tree_id': tree_id, 'media_id': media_id}
        )
        return Result.success()

    def url_for(self, media):
        return self.storage.url(media.file_path)

    def _check_person(self, tree_id, person_id, user_id, allowed, denied_error):
        tree = FamilyTree.objects.filter(pk=tree_id).first()
        if tree is None:
            self.log.warning(f"Tree {tree_id} not found")
            return ServiceError.TREE_NOT_FOUND

        if not allowed(get_access_level(tree, user_id)):
            self.log.warning(f"User {user_id} denied media access to tree {tree_id}")
            return denied_error

        if not TreeMember.objects.filter(tree=tree, person_id=person_id).exists():
            self.log.warning(f"Person {person_id} not found in tree {tree_id}")
            return ServiceError.PERSON_NOT_FOUND_IN_TREE

        return None

    def _validate_file(self, uploaded_file, media_type):
        if uploaded_file is None or not uploaded_file.size:
            return ServiceError.NO_FILE_UPLOADED

        if uploaded_file.size > self.max_upload_size:
            return ServiceError.FILE_TOO_LARGE

        extension = os.path.splitext(uploaded_file.name or '')[1].lower()
        if not extension:
            return ServiceError.MISSING_FILE_EXTENSION

        if extension not in self.allowed_extensions.get(media_type, []):
            return ServiceError.INVALID_FILE_TYPE

        return None
