"""
Albums: directories nested in a collection, holding hard links to photos.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from sqlalchemy.orm import Session

from ..db.models import AlbumRow
from ..exceptions import NotFoundError
from ..io.filesystem import LibraryFilesystem
from .collection import Collection
from .traits import Draft, Persistable, Placeable, check_name


@dataclass
class AlbumDraft(Draft):
    name: str
    collection: Collection
    comment: str = ''
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        check_name(self.name, "album name")

    def insert(self, session: Session) -> int:
        row = AlbumRow(
            name=self.name,
            comment=self.comment,
            creation_datetime=self.created_at,
            modification_datetime=self.created_at,
            collection=self.collection.id,
        )
        session.add(row)
        session.flush()
        return row.id

    def bind(self, element_id: int) -> 'Album':
        return Album(
            id=element_id,
            name=self.name,
            comment=self.comment,
            created_at=self.created_at,
            modified_at=self.created_at,
            collection=self.collection,
        )


@dataclass(frozen=True)
class Album(Persistable, Placeable):
    """A stored album together with the collection owning it."""
    id: int
    name: str
    comment: str
    created_at: datetime
    modified_at: datetime
    collection: Collection

    def __post_init__(self):
        if self.id < 1:
            raise ValueError(f"Invalid album id: {self.id}")

    @classmethod
    def load(cls, session: Session, element_id: int) -> 'Album':
        row = _get_row(session, element_id)
        return cls(
            id=row.id,
            name=row.name,
            comment=row.comment,
            created_at=row.creation_datetime,
            modified_at=row.modification_datetime,
            collection=Collection.load(session, row.collection),
        )

    def path(self, fs: LibraryFilesystem) -> Path:
        return self.collection.path(fs) / self.name

    def rename_record(self, session: Session, new_name: str) -> None:
        row = _get_row(session, self.id)
        row.name = new_name
        row.modification_datetime = datetime.now()

    def assign_collection(self, session: Session, collection: Collection) -> None:
        """Point the album's owning-collection key at ``collection``."""
        row = _get_row(session, self.id)
        row.collection = collection.id
        row.modification_datetime = datetime.now()

    def delete(self, session: Session) -> None:
        session.delete(_get_row(session, self.id))
        session.flush()

    def place(self, fs: LibraryFilesystem) -> None:
        fs.make_directory(self.path(fs))

    def remove(self, fs: LibraryFilesystem) -> None:
        fs.remove_tree(self.path(fs), missing_ok=True)

    def rename_path(self, fs: LibraryFilesystem, new_name: str) -> None:
        fs.move(self.path(fs), self.collection.path(fs) / new_name)

    def move_path(self, fs: LibraryFilesystem, collection: Collection) -> None:
        fs.move(self.path(fs), collection.path(fs) / self.name)


def _get_row(session: Session, album_id: int) -> AlbumRow:
    row = session.get(AlbumRow, album_id)
    if row is None:
        raise NotFoundError(f"No album with id {album_id}")
    return row
