"""Relational store of a library."""

from .connection import Database
from .models import Base, PhotoRow, CollectionRow, AlbumRow, PhotoAlbumMap, Setting

__all__ = ['Database', 'Base', 'PhotoRow', 'CollectionRow', 'AlbumRow', 'PhotoAlbumMap', 'Setting']
