"""
Tests for MediaService uploads and deletes.
"""
import hashlib

import pytest
from django.core.files.storage import FileSystemStorage
from django.core.files.uploadedfile import SimpleUploadedFile

from apps.trees.models import Media
from apps.trees.results import ServiceError
from apps.trees.services import MediaService, compute_content_hash

pytestmark = pytest.mark.django_db

PNG_BYTES = b'\x89PNG\r\n\x1a\n' + b'0' * 64


class StaleStorage(FileSystemStorage):
    """Misses the next existence check, as a concurrent writer's view would."""
    stale = False

    def exists(self, name):
        if self.stale:
            self.stale = False
            return False
        return super().exists(name)


def upload(name='portrait.PNG', content=PNG_BYTES):
    return SimpleUploadedFile(name, content, content_type='application/octet-stream')


@pytest.fixture
def person(add_member):
    return add_member()


class TestUpload:

    def test_stores_content_addressed_blob(self, media_service, storage, tree, owner, person):
        result = media_service.upload_media(tree.id, person.id, owner.id, upload(), 'Photo', '  Portrait ')

        assert result.ok
        media = result.value
        digest = hashlib.sha256(PNG_BYTES).hexdigest()
        assert media.file_path == f'uploads/media/{person.id}/{digest}.png'
        assert media.content_hash == digest
        assert media.file_name == 'portrait.PNG'
        assert media.file_size == len(PNG_BYTES)
        assert media.caption == 'Portrait'
        assert storage.exists(media.file_path)

    def test_identical_uploads_share_one_blob(self, media_service, storage, tree, owner, person):
        first = media_service.upload_media(tree.id, person.id, owner.id, upload('a.png'), 'Photo').value
        second = media_service.upload_media(tree.id, person.id, owner.id, upload('b.png'), 'Photo').value

        assert first.id != second.id
        assert first.file_path == second.file_path
        assert Media.objects.count() == 2
        _, files = storage.listdir(f'uploads/media/{person.id}')
        assert len(files) == 1

    def test_view_collaborator_cannot_upload(self, media_service, tree, collaborator, grant, person):
        grant(collaborator, 'View')

        result = media_service.upload_media(tree.id, person.id, collaborator.id, upload(), 'Photo')

        assert result.error == ServiceError.NO_EDIT_ACCESS
        assert not Media.objects.exists()

    def test_person_outside_tree(self, media_service, tree, owner):
        result = media_service.upload_media(tree.id, 999, owner.id, upload(), 'Photo')

        assert result.error == ServiceError.PERSON_NOT_FOUND_IN_TREE

    def test_missing_tree(self, media_service, owner, person):
        result = media_service.upload_media(999, person.id, owner.id, upload(), 'Photo')

        assert result.error == ServiceError.TREE_NOT_FOUND

    def test_concurrent_identical_upload_keeps_one_blob(self, tmp_path, log, tree, owner, person):
        storage = StaleStorage(location=tmp_path, base_url='/media/')
        service = MediaService(storage=storage, log=log)
        first = service.upload_media(tree.id, person.id, owner.id, upload('a.png'), 'Photo').value

        storage.stale = True
        result = service.upload_media(tree.id, person.id, owner.id, upload('b.png'), 'Photo')

        assert result.ok
        assert result.value.file_path == first.file_path
        assert Media.objects.count() == 2
        _, files = storage.listdir(f'uploads/media/{person.id}')
        assert files == [first.file_path.rsplit('/', 1)[1]]

    def test_url_comes_from_service_storage(self, media_service, tree, owner, person):
        media = media_service.upload_media(tree.id, person.id, owner.id, upload(), 'Photo').value

        assert media_service.url_for(media) == f'/media/{media.file_path}'


class TestUploadValidation:

    def test_empty_file(self, media_service, tree, owner, person):
        result = media_service.upload_media(tree.id, person.id, owner.id, upload(content=b''), 'Photo')

        assert result.error == ServiceError.NO_FILE_UPLOADED

    def test_file_too_large(self, storage, log, tree, owner, person):
        service = MediaService(storage=storage, log=log, max_upload_size=16)

        result = service.upload_media(tree.id, person.id, owner.id, upload(), 'Photo')

        assert result.error == ServiceError.FILE_TOO_LARGE
        assert not Media.objects.exists()

    def test_missing_extension(self, media_service, tree, owner, person):
        result = media_service.upload_media(tree.id, person.id, owner.id, upload('portrait'), 'Photo')

        assert result.error == ServiceError.MISSING_FILE_EXTENSION

    def test_extension_not_allowed_for_type(self, media_service, tree, owner, person):
        result = media_service.upload_media(tree.id, person.id, owner.id, upload('notes.pdf'), 'Photo')

        assert result.error == ServiceError.INVALID_FILE_TYPE

    def test_document_extension_accepted_for_document(self, media_service, tree, owner, person):
        result = media_service.upload_media(tree.id, person.id, owner.id, upload('notes.pdf'), 'Document')

        assert result.ok
        assert result.value.file_path.endswith('.pdf')

    def test_unknown_media_type(self, media_service, tree, owner, person):
        result = media_service.upload_media(tree.id, person.id, owner.id, upload(), 'Hologram')

        assert result.error == ServiceError.INVALID_FILE_TYPE

    def test_rejection_is_logged(self, media_service, log, tree, owner, person):
        media_service.upload_media(tree.id, person.id, owner.id, upload('x.exe'), 'Photo')

        log.warning.assert_called_once()


class TestListAndDelete:

    def test_list_newest_first(self, media_service, tree, owner, person):
        older = media_service.upload_media(tree.id, person.id, owner.id, upload('a.png'), 'Photo').value
        newer = media_service.upload_media(tree.id, person.id, owner.id, upload('b.png'), 'Photo').value

        result = media_service.list_media(tree.id, person.id, owner.id)

        assert [m.id for m in result.value] == [newer.id, older.id]

    def test_list_requires_view(self, media_service, tree, stranger, person):
        result = media_service.list_media(tree.id, person.id, stranger.id)

        assert result.error == ServiceError.NO_VIEW_ACCESS

    def test_delete_removes_row_and_blob(self, media_service, storage, tree, owner, person):
        media = media_service.upload_media(tree.id, person.id, owner.id, upload(), 'Photo').value

        result = media_service.delete_media(tree.id, person.id, media.id, owner.id)

        assert result.ok
        assert not Media.objects.exists()
        assert not storage.exists(media.file_path)

    def test_delete_keeps_blob_shared_with_other_row(self, media_service, storage, tree, owner, person):
        first = media_service.upload_media(tree.id, person.id, owner.id, upload('a.png'), 'Photo').value
        second = media_service.upload_media(tree.id, person.id, owner.id, upload('b.png'), 'Photo').value

        media_service.delete_media(tree.id, person.id, first.id, owner.id)

        assert storage.exists(second.file_path)
        assert list(Media.objects.values_list('id', flat=True)) == [second.id]

    def test_delete_tolerates_missing_blob(self, media_service, storage, tree, owner, person):
        media = media_service.upload_media(tree.id, person.id, owner.id, upload(), 'Photo').value
        storage.delete(media.file_path)

        result = media_service.delete_media(tree.id, person.id, media.id, owner.id)

        assert result.ok
        assert not Media.objects.exists()

    def test_delete_unknown_media(self, media_service, tree, owner, person):
        result = media_service.delete_media(tree.id, person.id, 999, owner.id)

        assert result.error == ServiceError.MEDIA_NOT_FOUND

    def test_view_collaborator_cannot_delete(self, media_service, tree, owner, collaborator, grant, person):
        media = media_service.upload_media(tree.id, person.id, owner.id, upload(), 'Photo').value
        grant(collaborator, 'View')

        result = media_service.delete_media(tree.id, person.id, media.id, collaborator.id)

        assert result.error == ServiceError.NO_EDIT_ACCESS
        assert Media.objects.filter(pk=media.id).exists()


def test_content_hash_rewinds_file():
    uploaded = upload()

    digest = compute_content_hash(uploaded)

    assert digest == hashlib.sha256(PNG_BYTES).hexdigest()
    assert uploaded.read() == PNG_BYTES
