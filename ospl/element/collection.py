"""
Collections: top-level directories under ``collections/``.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from sqlalchemy.orm import Session

from ..db.models import CollectionRow
from ..exceptions import NotFoundError
from ..io.filesystem import LibraryFilesystem
from .traits import Draft, Persistable, Placeable, check_name


@dataclass
class CollectionDraft(Draft):
    name: str
    comment: str = ''
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        check_name(self.name, "collection name")

    def insert(self, session: Session) -> int:
        row = CollectionRow(
            name=self.name,
            comment=self.comment,
            creation_datetime=self.created_at,
            modification_datetime=self.created_at,
        )
        session.add(row)
        session.flush()
        return row.id

    def bind(self, element_id: int) -> 'Collection':
        return Collection(
            id=element_id,
            name=self.name,
            comment=self.comment,
            created_at=self.created_at,
            modified_at=self.created_at,
        )


@dataclass(frozen=True)
class Collection(Persistable, Placeable):
    """A stored collection."""
    id: int
    name: str
    comment: str
    created_at: datetime
    modified_at: datetime

    def __post_init__(self):
        if self.id < 1:
            raise ValueError(f"Invalid collection id: {self.id}")

    @classmethod
    def from_row(cls, row: CollectionRow) -> 'Collection':
        return cls(
            id=row.id,
            name=row.name,
            comment=row.comment,
            created_at=row.creation_datetime,
            modified_at=row.modification_datetime,
        )

    @classmethod
    def load(cls, session: Session, element_id: int) -> 'Collection':
        return cls.from_row(_get_row(session, element_id))

    def path(self, fs: LibraryFilesystem) -> Path:
        return fs.collections_path / self.name

    def rename_record(self, session: Session, new_name: str) -> None:
        row = _get_row(session, self.id)
        row.name = new_name
        row.modification_datetime = datetime.now()

    def delete(self, session: Session) -> None:
        session.delete(_get_row(session, self.id))
        session.flush()

    def place(self, fs: LibraryFilesystem) -> None:
        fs.make_directory(self.path(fs))

    def remove(self, fs: LibraryFilesystem) -> None:
        fs.remove_tree(self.path(fs), missing_ok=True)

    def rename_path(self, fs: LibraryFilesystem, new_name: str) -> None:
        fs.move(self.path(fs), fs.collections_path / new_name)


def _get_row(session: Session, collection_id: int) -> CollectionRow:
    row = session.get(CollectionRow, collection_id)
    if row is None:
        raise NotFoundError(f"No collection with id {collection_id}")
    return row
