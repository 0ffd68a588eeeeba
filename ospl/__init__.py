"""
ospl - photo library keeping a SQLite database and a file tree in step.
"""

__version__ = "0.1.0"

from .exceptions import (
    OsplError, StoreOutcome, AlreadyExistsError, PermissionDeniedError, NotFoundError,
    NotAnImageError, UnsupportedError, EmptyNameError, SourceIsDirectoryError,
    StoreError, IoError, ThumbnailError
)
from .element import Album, Collection, Photo
from .library import Library, ImportResult

__all__ = [
    'Library', 'ImportResult', 'Album', 'Collection', 'Photo',
    'OsplError', 'StoreOutcome', 'AlreadyExistsError', 'PermissionDeniedError',
    'NotFoundError', 'NotAnImageError', 'UnsupportedError', 'EmptyNameError',
    'SourceIsDirectoryError', 'StoreError', 'IoError', 'ThumbnailError',
]
