"""
Capability contracts shared by photos, collections and albums.

A draft is an element that has not been stored yet. It can only be
inserted and then bound to the id the relational store handed out. Bound
records implement both :class:`Persistable` and :class:`Placeable`; the
library decides in which order the two stores are touched.
"""

from abc import ABC, abstractmethod
from typing import Any

from sqlalchemy.orm import Session

from ..exceptions import EmptyNameError
from ..io.filesystem import LibraryFilesystem


def check_name(name: str, kind: str = "name") -> str:
    """Reject blank names."""
    if name is None or not name.strip():
        raise EmptyNameError(f"{kind.capitalize()} must not be empty")
    return name


class Draft(ABC):
    """An element without an id."""

    @abstractmethod
    def insert(self, session: Session) -> int:
        """Add the element's row and return the id assigned to it."""

    @abstractmethod
    def bind(self, element_id: int) -> Any:
        """Promote to the bound record carrying ``element_id``."""


class Persistable(ABC):
    """Relational side of a bound element."""

    @classmethod
    @abstractmethod
    def load(cls, session: Session, element_id: int) -> Any:
        """Fully populated record for ``element_id``, or NotFoundError."""

    @abstractmethod
    def rename_record(self, session: Session, new_name: str) -> None:
        pass

    @abstractmethod
    def delete(self, session: Session) -> None:
        pass


class Placeable(ABC):
    """Filesystem side of a bound element."""

    @abstractmethod
    def place(self, fs: LibraryFilesystem) -> None:
        pass

    @abstractmethod
    def remove(self, fs: LibraryFilesystem) -> None:
        """Remove from disk. Already missing counts as removed."""

    @abstractmethod
    def rename_path(self, fs: LibraryFilesystem, new_name: str) -> None:
        pass
