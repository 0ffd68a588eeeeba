"""
Error kinds raised by library operations.

Every error carries the state the two stores were left in, so callers can
tell "nothing happened" apart from a partially applied operation.
"""

import enum
import errno
from pathlib import Path
from typing import Optional, Union


class StoreOutcome(enum.Enum):
    """Which stores an operation managed to change before it failed."""
    NOTHING = "nothing"
    RELATIONAL_ONLY = "relational_only"
    FILESYSTEM_ONLY = "filesystem_only"
    FULL = "full"


class OsplError(Exception):
    """Base exception for library operations."""

    def __init__(self, message: str = "", outcome: StoreOutcome = StoreOutcome.NOTHING,
                 element_id: Optional[int] = None):
        super().__init__(message)
        self.outcome = outcome
        self.element_id = element_id


class AlreadyExistsError(OsplError):
    """Target path or library root already present."""
    pass


class PermissionDeniedError(OsplError):
    """Disk access refused."""
    pass


class NotFoundError(OsplError):
    """No row for an id, or a missing prerequisite."""
    pass


class NotAnImageError(OsplError):
    """Content could not be classified as an image."""
    pass


class UnsupportedError(OsplError):
    """Content was classified, but not as an image."""
    pass


class EmptyNameError(OsplError):
    """A required name was blank."""
    pass


class SourceIsDirectoryError(OsplError):
    """Import source is a directory."""
    pass


class StoreError(OsplError):
    """Relational store failure."""
    pass


class IoError(OsplError):
    """Any other filesystem failure."""
    pass


class ThumbnailError(OsplError):
    """Thumbnail generation failed."""
    pass


def from_os_error(exc: OSError, path: Optional[Union[str, Path]] = None) -> OsplError:
    """
    Translate an OSError into the matching library error.

    Args:
        exc: Error raised by a filesystem call
        path: Path the call was operating on, for the message

    Returns:
        Library error (not raised)
    """
    target = path if path is not None else exc.filename
    message = f"{exc.strerror or exc}: {target}"

    if isinstance(exc, FileExistsError) or exc.errno == errno.ENOTEMPTY:
        return AlreadyExistsError(message)
    if isinstance(exc, PermissionError):
        return PermissionDeniedError(message)
    if isinstance(exc, FileNotFoundError):
        return NotFoundError(message)
    return IoError(message)
