"""
Library facade.

Every operation touches the relational store and the file tree in a fixed
order and stops at the first failure without undoing earlier steps:

    create          insert row, bind id, place on disk
    rename / move   disk first, then row
    delete          disk first, then row
    assign          edge row first, then hard link

Errors raised by a later step carry the outcome of the earlier ones
(:class:`~ospl.exceptions.StoreOutcome`) and, after a failed placement, the
id of the row that was left behind.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from tqdm import tqdm

from .config import get_config_value
from .containment import ContainmentIndex
from .db.connection import Database
from .db.models import AlbumRow, CollectionRow, PhotoRow
from .element.album import Album, AlbumDraft
from .element.collection import Collection, CollectionDraft
from .element.photo import Photo, PhotoDraft
from .element.traits import Draft, check_name
from .exceptions import AlreadyExistsError, NotFoundError, OsplError, StoreOutcome
from .io.filesystem import LIBRARY_EXTENSION, LibraryFilesystem, translate_os_errors
from .utils.thumbnails import THUMBNAIL_HEIGHT, create_thumbnail

logger = logging.getLogger(__name__)


@contextmanager
def _after(outcome: StoreOutcome, element_id: Optional[int] = None) -> Iterator[None]:
    """Stamp errors from a later step with what the earlier steps applied."""
    try:
        yield
    except OsplError as e:
        e.outcome = outcome
        if element_id is not None:
            e.element_id = element_id
        raise


@dataclass
class ImportResult:
    """Outcome of importing one file of a folder."""
    source: Path
    photo: Optional[Photo] = None
    error: Optional[OsplError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Library:
    """A photo library: a SQLite database and a file tree under one root."""

    def __init__(self, root: Union[str, Path], thumbnail_height: int = THUMBNAIL_HEIGHT):
        self.fs = LibraryFilesystem(root)
        self.db = Database(self.fs.database_path)
        self.containment = ContainmentIndex()
        self.thumbnail_height = thumbnail_height

    def __repr__(self) -> str:
        return f"Library({str(self.path)!r})"

    @property
    def path(self) -> Path:
        return self.fs.root

    @property
    def version(self) -> Optional[str]:
        return self.db.get_setting('version')

    @classmethod
    def create(cls, root: Union[str, Path], **kwargs) -> 'Library':
        """
        Create a new, empty library at ``root``.

        Raises:
            AlreadyExistsError: If ``root`` already exists
            PermissionDeniedError: If ``root`` cannot be created
        """
        fs = LibraryFilesystem.create(root)
        if fs.root.suffix != LIBRARY_EXTENSION:
            logger.warning(f"Library {fs.root.name} does not end in {LIBRARY_EXTENSION}")
        Database.create(fs.database_path).dispose()
        logger.info(f"Created library at {fs.root}")
        return cls(root, **kwargs)

    @classmethod
    def load(cls, root: Union[str, Path], **kwargs) -> 'Library':
        """Open an existing library. NotFoundError if ``root`` is not one."""
        fs = LibraryFilesystem(root)
        if not fs.is_library():
            raise NotFoundError(f"No library at {fs.root}")
        return cls(root, **kwargs)

    @classmethod
    def from_config(cls, config: Dict[str, Any], root: Optional[Union[str, Path]] = None) -> 'Library':
        """Open the library named by ``root`` or by ``library.path`` in ``config``."""
        root = root or get_config_value(config, 'library.path')
        if not root:
            raise NotFoundError("No library path given and library.path is not configured")
        height = get_config_value(config, 'thumbnails.height', THUMBNAIL_HEIGHT)
        return cls.load(Path(root).expanduser(), thumbnail_height=height)

    # Shared sequences

    def _ensure_collection_name_free(self, name: str) -> None:
        """Refuse a name another collection row or directory already uses."""
        with self.db.session() as session:
            taken = session.query(CollectionRow.id).filter_by(name=name).first()
        if taken is not None or (self.fs.collections_path / name).exists():
            raise AlreadyExistsError(f"Collection {name} already exists")

    def _ensure_album_name_free(self, collection: Collection, name: str,
                                check_disk: bool = True) -> None:
        """Refuse a name another album of ``collection`` already uses."""
        with self.db.session() as session:
            taken = session.query(AlbumRow.id).filter_by(collection=collection.id, name=name).first()
        if taken is not None or (check_disk and (collection.path(self.fs) / name).exists()):
            raise AlreadyExistsError(f"Album {name} already exists in {collection.name}")

    def _create(self, draft: Draft):
        with self.db.session() as session:
            element_id = draft.insert(session)
        element = draft.bind(element_id)

        with _after(StoreOutcome.RELATIONAL_ONLY, element_id):
            element.place(self.fs)
        return element

    def _rename(self, element, new_name: str):
        kind = type(element)
        if new_name == element.name:
            logger.warning(f"{kind.__name__} {element.id} is already named {new_name}")
            return element

        element.rename_path(self.fs, new_name)
        with _after(StoreOutcome.FILESYSTEM_ONLY):
            with self.db.session() as session:
                element.rename_record(session, new_name)
                renamed = kind.load(session, element.id)

        logger.info(f"Renamed {kind.__name__.lower()} {element.id}: {element.name} -> {new_name}")
        return renamed

    # Collections

    def create_collection(self, name: str, comment: str = '') -> Collection:
        check_name(name, "collection name")
        self._ensure_collection_name_free(name)
        collection = self._create(CollectionDraft(name=name, comment=comment))
        logger.info(f"Created collection {collection.name} (id {collection.id})")
        return collection

    def get_collection(self, collection_id: int) -> Collection:
        with self.db.session() as session:
            return Collection.load(session, collection_id)

    def list_collections(self) -> List[Collection]:
        with self.db.session() as session:
            rows = session.query(CollectionRow).order_by(CollectionRow.id).all()
            return [Collection.from_row(row) for row in rows]

    def rename_collection(self, collection_id: int, new_name: str) -> Collection:
        check_name(new_name, "collection name")
        collection = self.get_collection(collection_id)
        if new_name != collection.name:
            self._ensure_collection_name_free(new_name)
        return self._rename(collection, new_name)

    def delete_collection(self, collection_id: int) -> None:
        """Delete a collection with all its albums. Photos stay in the library."""
        with self.db.session() as session:
            collection = Collection.load(session, collection_id)
            albums = self._albums_in(session, collection_id)

        collection.remove(self.fs)
        with _after(StoreOutcome.FILESYSTEM_ONLY):
            with self.db.session() as session:
                for album in albums:
                    self.containment.drop_album(session, album.id)
                    album.delete(session)
                collection.delete(session)

        logger.info(f"Deleted collection {collection.name} with {len(albums)} albums")

    def list_albums_in_collection(self, collection_id: int) -> List[Album]:
        with self.db.session() as session:
            Collection.load(session, collection_id)
            return self._albums_in(session, collection_id)

    def _albums_in(self, session, collection_id: int) -> List[Album]:
        rows = session.query(AlbumRow.id).filter_by(
            collection=collection_id
        ).order_by(AlbumRow.id).all()
        return [Album.load(session, album_id) for (album_id,) in rows]

    # Albums

    def create_album(self, name: str, comment: str, collection_id: int) -> Album:
        check_name(name, "album name")
        collection = self.get_collection(collection_id)
        self._ensure_album_name_free(collection, name)
        album = self._create(AlbumDraft(name=name, comment=comment, collection=collection))
        logger.info(f"Created album {album.name} in {collection.name} (id {album.id})")
        return album

    def get_album(self, album_id: int) -> Album:
        with self.db.session() as session:
            return Album.load(session, album_id)

    def rename_album(self, album_id: int, new_name: str) -> Album:
        check_name(new_name, "album name")
        album = self.get_album(album_id)
        if new_name != album.name:
            self._ensure_album_name_free(album.collection, new_name)
        return self._rename(album, new_name)

    def move_album(self, album_id: int, collection_id: int) -> Album:
        """
        Move an album into another collection.

        Moving into the collection the album already belongs to is not an
        error; the directory is left alone and the key rewritten.
        """
        with self.db.session() as session:
            album = Album.load(session, album_id)
            target = Collection.load(session, collection_id)

        if target.id != album.collection.id:
            self._ensure_album_name_free(target, album.name, check_disk=False)

        source = album.path(self.fs)
        destination = target.path(self.fs) / album.name
        moved = False
        if source == destination:
            logger.warning(f"Album {album.name} already in collection {target.name}")
        elif not source.exists() and destination.is_dir():
            logger.warning(f"Album {album.name} already on disk under {target.name}")
        else:
            album.move_path(self.fs, target)
            moved = True

        outcome = StoreOutcome.FILESYSTEM_ONLY if moved else StoreOutcome.NOTHING
        with _after(outcome):
            with self.db.session() as session:
                album.assign_collection(session, target)
                moved_album = Album.load(session, album_id)

        logger.info(f"Moved album {album.name}: {album.collection.name} -> {target.name}")
        return moved_album

    def delete_album(self, album_id: int) -> None:
        album = self.get_album(album_id)

        album.remove(self.fs)
        with _after(StoreOutcome.FILESYSTEM_ONLY):
            with self.db.session() as session:
                edges = self.containment.drop_album(session, album.id)
                album.delete(session)

        logger.info(f"Deleted album {album.name} ({edges} photos unassigned)")

    def list_photos_in_album(self, album_id: int) -> List[Photo]:
        with self.db.session() as session:
            Album.load(session, album_id)
            return self.containment.photos_in(session, album_id)

    def assign_photo_to_album(self, photo_id: int, album_id: int) -> None:
        """Add a photo to an album. Assigning twice changes nothing."""
        with self.db.session() as session:
            photo = Photo.load(session, photo_id)
            album = Album.load(session, album_id)
            added = self.containment.put(session, album, photo)

        with _after(StoreOutcome.RELATIONAL_ONLY, photo.id):
            self.containment.link(self.fs, album, photo)

        if added:
            logger.info(f"Assigned photo {photo.id} to album {album.name}")

    def remove_photo_from_album(self, photo_id: int, album_id: int) -> bool:
        """
        Take a photo out of an album. The photo itself is kept.

        Returns:
            True if the photo was in the album
        """
        with self.db.session() as session:
            photo = Photo.load(session, photo_id)
            album = Album.load(session, album_id)

        self.containment.unlink(self.fs, album, photo)
        with _after(StoreOutcome.FILESYSTEM_ONLY, photo.id):
            with self.db.session() as session:
                removed = self.containment.drop(session, album, photo)

        if removed:
            logger.info(f"Removed photo {photo.id} from album {album.name}")
        return removed

    # Photos

    def import_photo(self, source: Union[str, Path]) -> Photo:
        """
        Copy an image into the library and create its thumbnail.

        Raises:
            NotFoundError, SourceIsDirectoryError, NotAnImageError,
            UnsupportedError: Before anything is written
            ThumbnailError: After the photo is fully stored (outcome FULL)
        """
        photo = self._store_photo(source)
        self._make_thumbnail(photo)
        return photo

    def import_photo_into_album(self, source: Union[str, Path], album_id: int) -> Photo:
        self.get_album(album_id)
        photo = self._store_photo(source)
        try:
            self.assign_photo_to_album(photo.id, album_id)
        except OsplError as e:
            e.element_id = photo.id
            raise
        self._make_thumbnail(photo)
        return photo

    def import_folder_into_album(self, folder: Union[str, Path], album_id: int,
                                 progress: bool = False) -> List[ImportResult]:
        """
        Import every regular file of ``folder`` into an album.

        A file that fails does not stop the others; its error is returned in
        its :class:`ImportResult`.
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise NotFoundError(f"No such folder: {folder}")
        album = self.get_album(album_id)

        with translate_os_errors(folder):
            entries = sorted(entry for entry in folder.iterdir() if entry.is_file())

        results = []
        for entry in tqdm(entries, desc=f"Importing into {album.name}", unit="file",
                          disable=not progress):
            try:
                photo = self.import_photo_into_album(entry, album_id)
                results.append(ImportResult(source=entry, photo=photo))
            except OsplError as e:
                logger.warning(f"Failed to import {entry.name}: {e}")
                stored = None
                if e.outcome is StoreOutcome.FULL and e.element_id is not None:
                    stored = self.get_photo(e.element_id)
                results.append(ImportResult(source=entry, photo=stored, error=e))

        imported = sum(1 for result in results if result.ok)
        logger.info(f"Imported {imported}/{len(results)} files into album {album.name}")
        return results

    def _store_photo(self, source: Union[str, Path]) -> Photo:
        photo = self._create(PhotoDraft.from_file(source))
        logger.info(f"Imported {photo.filename} as {photo.display_name} (id {photo.id})")
        return photo

    def _make_thumbnail(self, photo: Photo) -> None:
        with _after(StoreOutcome.FULL, photo.id):
            create_thumbnail(photo.picture_path(self.fs), photo.thumbnail_path(self.fs),
                             height=self.thumbnail_height)

    def get_photo(self, photo_id: int) -> Photo:
        with self.db.session() as session:
            return Photo.load(session, photo_id)

    def list_photos(self) -> List[Photo]:
        with self.db.session() as session:
            rows = session.query(PhotoRow.id).order_by(PhotoRow.id).all()
            return [Photo.load(session, photo_id) for (photo_id,) in rows]

    def list_thumbnails(self) -> List[Tuple[int, Path]]:
        return [(photo.id, photo.thumbnail_path(self.fs)) for photo in self.list_photos()]

    def albums_containing_photo(self, photo_id: int) -> List[Album]:
        with self.db.session() as session:
            Photo.load(session, photo_id)
            return self.containment.albums_containing(session, photo_id)

    def delete_photo(self, photo_id: int) -> None:
        """Delete a photo, its thumbnail and its links in every album."""
        with self.db.session() as session:
            photo = Photo.load(session, photo_id)
            albums = self.containment.albums_containing(session, photo_id)

        for album in albums:
            self.containment.unlink(self.fs, album, photo)
        photo.remove(self.fs)

        with _after(StoreOutcome.FILESYSTEM_ONLY):
            with self.db.session() as session:
                self.containment.drop_photo(session, photo.id)
                photo.delete(session)

        logger.info(f"Deleted photo {photo.display_name} from {len(albums)} albums")
