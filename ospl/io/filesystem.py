"""
File tree of an ospl library.

    <root>/
        database.db
        pictures/       canonical photo files, flat
        thumbnails/     one thumbnail per picture, same file name
        collections/<collection>/<album>/   hard links into pictures/

All primitives translate OSError into library errors.
"""

import logging
import os
import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

from ..exceptions import AlreadyExistsError, NotFoundError, from_os_error

logger = logging.getLogger(__name__)

DATABASE_FILENAME = "database.db"
PICTURES_DIR = "pictures"
THUMBNAILS_DIR = "thumbnails"
COLLECTIONS_DIR = "collections"
LIBRARY_EXTENSION = ".ospl"


@contextmanager
def translate_os_errors(path: Union[str, Path]) -> Iterator[None]:
    try:
        yield
    except OSError as e:
        raise from_os_error(e, path) from e


class LibraryFilesystem:
    """Paths and file operations under a library root."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).expanduser()

    @property
    def database_path(self) -> Path:
        return self.root / DATABASE_FILENAME

    @property
    def pictures_path(self) -> Path:
        return self.root / PICTURES_DIR

    @property
    def thumbnails_path(self) -> Path:
        return self.root / THUMBNAILS_DIR

    @property
    def collections_path(self) -> Path:
        return self.root / COLLECTIONS_DIR

    @classmethod
    def create(cls, root: Union[str, Path]) -> 'LibraryFilesystem':
        """
        Create the root directory and its fixed subdirectories.

        Raises:
            AlreadyExistsError: If ``root`` already exists
            PermissionDeniedError: If the directory cannot be created
        """
        fs = cls(root)
        with translate_os_errors(fs.root):
            fs.root.mkdir(parents=True)
            for directory in (fs.pictures_path, fs.thumbnails_path, fs.collections_path):
                directory.mkdir()
        logger.info(f"Created library tree at {fs.root}")
        return fs

    def is_library(self) -> bool:
        return self.root.is_dir() and self.database_path.is_file()

    def make_directory(self, path: Path) -> None:
        with translate_os_errors(path):
            path.mkdir()
        logger.debug(f"Created directory {path}")

    def remove_tree(self, path: Path, missing_ok: bool = False) -> None:
        if missing_ok and not path.exists():
            logger.warning(f"Nothing to remove at {path}")
            return
        with translate_os_errors(path):
            shutil.rmtree(path)
        logger.debug(f"Removed directory tree {path}")

    def move(self, source: Path, destination: Path) -> None:
        """Rename ``source`` to ``destination``, refusing to replace anything."""
        if not source.exists():
            raise NotFoundError(f"Nothing to move at {source}")
        if destination.exists():
            raise AlreadyExistsError(f"Target already exists: {destination}")
        with translate_os_errors(destination):
            source.rename(destination)
        logger.debug(f"Moved {source} -> {destination}")

    def copy_file(self, source: Path, destination: Path) -> None:
        if destination.exists():
            raise AlreadyExistsError(f"Target already exists: {destination}")
        with translate_os_errors(source):
            shutil.copy2(source, destination)
        logger.debug(f"Copied {source} -> {destination}")

    def link(self, source: Path, destination: Path) -> bool:
        """
        Hard link ``destination`` to ``source``.

        Returns:
            False if ``destination`` already existed and nothing was done
        """
        if destination.exists():
            logger.debug(f"Link already present: {destination}")
            return False
        with translate_os_errors(destination):
            os.link(source, destination)
        logger.debug(f"Created hard link: {source} -> {destination}")
        return True

    def unlink(self, path: Path, missing_ok: bool = False) -> None:
        with translate_os_errors(path):
            path.unlink(missing_ok=missing_ok)
        logger.debug(f"Removed {path}")
