"""
Photos: one canonical file in ``pictures/`` plus a thumbnail.

Photos are named by :func:`~ospl.utils.naming.derive_display_name`, so the
name of a stored photo never changes and renaming is not supported.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional, Union, TYPE_CHECKING

from sqlalchemy.orm import Session

from ..db.models import PhotoRow
from ..exceptions import NotFoundError, SourceIsDirectoryError
from ..io.filesystem import LibraryFilesystem, translate_os_errors
from ..utils.naming import (
    derive_display_name, fingerprint_file, fingerprint_from_bytes, fingerprint_to_bytes
)
from ..utils.sniffing import ensure_image
from .traits import Draft, Persistable, Placeable

if TYPE_CHECKING:
    from .album import Album


@dataclass
class PhotoDraft(Draft):
    filename: str
    fingerprint: int
    imported_at: datetime
    source: Path
    rating: int = 0
    starred: bool = False

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> 'PhotoDraft':
        """
        Prepare a file for import.

        Nothing is written anywhere; the file is only checked and hashed.

        Raises:
            NotFoundError: If the file does not exist
            SourceIsDirectoryError: If the path is a directory
            NotAnImageError: If the content is not recognised
            UnsupportedError: If the content is recognised but not an image
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise NotFoundError(f"No such file: {file_path}")
        if file_path.is_dir():
            raise SourceIsDirectoryError(f"Cannot import a directory: {file_path}")

        with translate_os_errors(file_path):
            ensure_image(file_path)
            content_fingerprint = fingerprint_file(file_path)

        return cls(
            filename=file_path.name,
            fingerprint=content_fingerprint,
            imported_at=datetime.now(),
            source=file_path,
        )

    @property
    def display_name(self) -> str:
        return derive_display_name(self.filename, self.imported_at)

    def insert(self, session: Session) -> int:
        row = PhotoRow(
            filename=self.filename,
            hash=fingerprint_to_bytes(self.fingerprint),
            import_datetime=self.imported_at,
            rating=self.rating,
            starred=self.starred,
        )
        session.add(row)
        session.flush()
        return row.id

    def bind(self, element_id: int) -> 'Photo':
        return Photo(
            id=element_id,
            filename=self.filename,
            fingerprint=self.fingerprint,
            imported_at=self.imported_at,
            rating=self.rating,
            starred=self.starred,
            source=self.source,
        )


@dataclass(frozen=True)
class Photo(Persistable, Placeable):
    """
    A stored photo.

    ``source`` is only set on a record fresh from :meth:`PhotoDraft.bind`
    and is what :meth:`place` copies from. Loaded records have none.
    """
    id: int
    filename: str
    fingerprint: int
    imported_at: datetime
    rating: int = 0
    starred: bool = False
    source: Optional[Path] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if self.id < 1:
            raise ValueError(f"Invalid photo id: {self.id}")

    @property
    def display_name(self) -> str:
        return derive_display_name(self.filename, self.imported_at)

    @classmethod
    def load(cls, session: Session, element_id: int) -> 'Photo':
        row = _get_row(session, element_id)
        return cls(
            id=row.id,
            filename=row.filename,
            fingerprint=fingerprint_from_bytes(row.hash),
            imported_at=row.import_datetime,
            rating=row.rating,
            starred=row.starred,
        )

    def picture_path(self, fs: LibraryFilesystem) -> Path:
        return fs.pictures_path / self.display_name

    def thumbnail_path(self, fs: LibraryFilesystem) -> Path:
        return fs.thumbnails_path / self.display_name

    def link_path(self, fs: LibraryFilesystem, album: 'Album') -> Path:
        return album.path(fs) / self.display_name

    def rename_record(self, session: Session, new_name: str) -> None:
        raise NotImplementedError("Photos cannot be renamed")

    def delete(self, session: Session) -> None:
        session.delete(_get_row(session, self.id))
        session.flush()

    def place(self, fs: LibraryFilesystem) -> None:
        if self.source is None:
            raise NotFoundError(f"Photo {self.id} has no source file to place")
        fs.copy_file(self.source, self.picture_path(fs))

    def remove(self, fs: LibraryFilesystem) -> None:
        fs.unlink(self.picture_path(fs), missing_ok=True)
        fs.unlink(self.thumbnail_path(fs), missing_ok=True)

    def rename_path(self, fs: LibraryFilesystem, new_name: str) -> None:
        raise NotImplementedError("Photos cannot be renamed")


def _get_row(session: Session, photo_id: int) -> PhotoRow:
    row = session.get(PhotoRow, photo_id)
    if row is None:
        raise NotFoundError(f"No photo with id {photo_id}")
    return row
