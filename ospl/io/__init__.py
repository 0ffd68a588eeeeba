"""File tree of a library."""

from .filesystem import LibraryFilesystem

__all__ = ['LibraryFilesystem']
