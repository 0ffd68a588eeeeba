"""
Tests for album operations.
"""

import pytest

from ospl.exceptions import (
    AlreadyExistsError, EmptyNameError, NotFoundError, PermissionDeniedError, StoreOutcome
)

from conftest import library_state


def refuse_directory(self, path):
    raise PermissionDeniedError(f"Permission denied: {path}")


class TestCreateAlbum:
    """Test album creation."""

    def test_create(self, library, collection):
        album = library.create_album('Pizza Party', 'Friday night', collection.id)

        assert album.id == 1
        assert album.collection == collection
        assert (library.path / 'collections' / '2019' / 'Pizza Party').is_dir()

    def test_load_includes_collection(self, library, album, collection):
        loaded = library.get_album(album.id)

        assert loaded == album
        assert loaded.collection.id == collection.id
        assert loaded.collection.comment == 'Photos from 2019'

    def test_missing_collection_changes_nothing(self, library):
        before = library_state(library)

        with pytest.raises(NotFoundError):
            library.create_album('Orphan', '', 99)
        assert library_state(library) == before

    def test_empty_name_changes_nothing(self, library, collection):
        before = library_state(library)

        with pytest.raises(EmptyNameError):
            library.create_album('', 'no name', collection.id)
        assert library_state(library) == before
        assert library.list_albums_in_collection(collection.id) == []

    def test_failed_placement_leaves_discoverable_row(self, library, collection, monkeypatch):
        monkeypatch.setattr('ospl.io.filesystem.LibraryFilesystem.make_directory', refuse_directory)

        with pytest.raises(PermissionDeniedError) as exc_info:
            library.create_album('Taken', '', collection.id)

        error = exc_info.value
        assert error.outcome is StoreOutcome.RELATIONAL_ONLY
        assert library.get_album(error.element_id).name == 'Taken'

    def test_duplicate_name_changes_nothing(self, library, collection, album, image_file):
        """A second album with a used name would share its directory."""
        library.import_photo_into_album(image_file, album.id)
        before = library_state(library)

        with pytest.raises(AlreadyExistsError) as exc_info:
            library.create_album('Pizza Party', 'again', collection.id)

        assert exc_info.value.outcome is StoreOutcome.NOTHING
        assert library_state(library) == before
        assert library.list_albums_in_collection(collection.id) == [album]

    def test_stray_directory_changes_nothing(self, library, collection):
        (library.path / 'collections' / '2019' / 'Taken').mkdir()
        before = library_state(library)

        with pytest.raises(AlreadyExistsError) as exc_info:
            library.create_album('Taken', '', collection.id)

        assert exc_info.value.outcome is StoreOutcome.NOTHING
        assert library_state(library) == before

    def test_failed_placement_row_can_be_deleted(self, library, collection, monkeypatch):
        with monkeypatch.context() as patch:
            patch.setattr('ospl.io.filesystem.LibraryFilesystem.make_directory', refuse_directory)
            with pytest.raises(PermissionDeniedError) as exc_info:
                library.create_album('Taken', '', collection.id)

        orphan_id = exc_info.value.element_id
        library.delete_album(orphan_id)

        with pytest.raises(NotFoundError):
            library.get_album(orphan_id)
        assert library.list_albums_in_collection(collection.id) == []

    def test_same_name_in_other_collection(self, library, collection):
        other = library.create_collection('2020')
        first = library.create_album('Birthday', '', collection.id)
        second = library.create_album('Birthday', '', other.id)

        assert first.id != second.id
        assert first.path(library.fs) != second.path(library.fs)

    def test_list_albums_in_collection(self, library, collection):
        other = library.create_collection('2020')
        first = library.create_album('A', '', collection.id)
        library.create_album('B', '', other.id)
        third = library.create_album('C', '', collection.id)

        assert library.list_albums_in_collection(collection.id) == [first, third]

    def test_list_albums_in_missing_collection(self, library):
        with pytest.raises(NotFoundError):
            library.list_albums_in_collection(3)

    def test_missing_album(self, library):
        with pytest.raises(NotFoundError):
            library.get_album(1)


class TestRenameAlbum:
    """Test album renaming."""

    def test_rename(self, library, album):
        renamed = library.rename_album(album.id, 'Pasta Party')

        assert renamed.name == 'Pasta Party'
        assert (library.path / 'collections' / '2019' / 'Pasta Party').is_dir()
        assert not (library.path / 'collections' / '2019' / 'Pizza Party').exists()
        assert library.get_album(album.id).name == 'Pasta Party'

    def test_rename_keeps_links(self, library, album, image_file):
        photo = library.import_photo_into_album(image_file, album.id)

        renamed = library.rename_album(album.id, 'Pasta Party')

        assert photo.link_path(library.fs, renamed).is_file()
        assert library.list_photos_in_album(album.id) == [photo]

    def test_rename_onto_sibling(self, library, collection, album):
        library.create_album('Other', '', collection.id)

        with pytest.raises(AlreadyExistsError) as exc_info:
            library.rename_album(album.id, 'Other')

        assert exc_info.value.outcome is StoreOutcome.NOTHING
        assert library.get_album(album.id).name == 'Pizza Party'
        assert album.path(library.fs).is_dir()

    def test_rename_to_blank(self, library, album):
        with pytest.raises(EmptyNameError):
            library.rename_album(album.id, '')


class TestMoveAlbum:
    """Test moving albums between collections."""

    def test_move(self, library, collection, album):
        target = library.create_collection('2020')

        moved = library.move_album(album.id, target.id)

        assert moved.collection == target
        assert (library.path / 'collections' / '2020' / 'Pizza Party').is_dir()
        assert not (library.path / 'collections' / '2019' / 'Pizza Party').exists()

    def test_move_twice(self, library, collection, album):
        """Moving to the same target again is not an error."""
        target = library.create_collection('2020')

        for _ in range(2):
            moved = library.move_album(album.id, target.id)
            assert moved.collection.id == target.id

        assert [p.name for p in target.path(library.fs).iterdir()] == ['Pizza Party']
        assert list(collection.path(library.fs).iterdir()) == []
        assert library.list_albums_in_collection(collection.id) == []

    def test_move_to_own_collection(self, library, collection, album):
        moved = library.move_album(album.id, collection.id)

        assert moved.collection.id == collection.id
        assert album.path(library.fs).is_dir()

    def test_move_finishes_after_disk_step(self, library, collection, album):
        """If only the directory moved last time, moving again completes it."""
        target = library.create_collection('2020')
        album.path(library.fs).rename(target.path(library.fs) / album.name)

        moved = library.move_album(album.id, target.id)

        assert moved.collection.id == target.id
        assert (target.path(library.fs) / album.name).is_dir()

    def test_move_keeps_photos(self, library, album, image_file):
        target = library.create_collection('2020')
        photo = library.import_photo_into_album(image_file, album.id)

        moved = library.move_album(album.id, target.id)

        assert photo.link_path(library.fs, moved).is_file()
        assert library.list_photos_in_album(album.id) == [photo]

    def test_move_onto_existing_directory(self, library, album):
        target = library.create_collection('2020')
        library.create_album('Pizza Party', '', target.id)

        with pytest.raises(AlreadyExistsError) as exc_info:
            library.move_album(album.id, target.id)

        assert exc_info.value.outcome is StoreOutcome.NOTHING
        assert library.get_album(album.id).collection.name == '2019'

    def test_move_onto_name_held_by_row_only(self, library, album, monkeypatch):
        target = library.create_collection('2020')
        with monkeypatch.context() as patch:
            patch.setattr('ospl.io.filesystem.LibraryFilesystem.make_directory', refuse_directory)
            with pytest.raises(PermissionDeniedError):
                library.create_album('Pizza Party', '', target.id)
        before = library_state(library)

        with pytest.raises(AlreadyExistsError) as exc_info:
            library.move_album(album.id, target.id)

        assert exc_info.value.outcome is StoreOutcome.NOTHING
        assert library_state(library) == before
        assert album.path(library.fs).is_dir()

    def test_move_to_missing_collection(self, library, album):
        with pytest.raises(NotFoundError):
            library.move_album(album.id, 99)
        assert album.path(library.fs).is_dir()


class TestDeleteAlbum:
    """Test album deletion."""

    def test_delete(self, library, collection, album):
        library.delete_album(album.id)

        assert not album.path(library.fs).exists()
        assert collection.path(library.fs).is_dir()
        with pytest.raises(NotFoundError):
            library.get_album(album.id)

    def test_delete_keeps_photos(self, library, album, image_file):
        photo = library.import_photo_into_album(image_file, album.id)

        library.delete_album(album.id)

        assert photo.picture_path(library.fs).is_file()
        assert library.list_photos() == [photo]
        assert library.albums_containing_photo(photo.id) == []

    def test_delete_missing(self, library):
        with pytest.raises(NotFoundError):
            library.delete_album(5)
