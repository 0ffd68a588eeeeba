"""
Database models for an ospl library.

One table per element kind plus the album/photo containment map and a
small settings table.
"""

from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Text, LargeBinary,
    ForeignKey, UniqueConstraint
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()

SCHEMA_VERSION = "1"


class Setting(Base):
    """Library-wide key/value settings."""
    __tablename__ = 'settings'

    name = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)


class PhotoRow(Base):
    """An imported photo."""
    __tablename__ = 'photos'
    __table_args__ = {'sqlite_autoincrement': True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    filename = Column(String(255), nullable=False)
    hash = Column(LargeBinary(16), nullable=False, index=True)
    import_datetime = Column(DateTime, nullable=False)
    rating = Column(Integer, default=0, nullable=False)
    starred = Column(Boolean, default=False, nullable=False)


class CollectionRow(Base):
    """A top-level directory of albums."""
    __tablename__ = 'collections'
    __table_args__ = {'sqlite_autoincrement': True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    comment = Column(Text, default='', nullable=False)
    creation_datetime = Column(DateTime, nullable=False)
    modification_datetime = Column(DateTime, nullable=False)


class AlbumRow(Base):
    """An album directory inside a collection."""
    __tablename__ = 'albums'
    __table_args__ = {'sqlite_autoincrement': True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    comment = Column(Text, default='', nullable=False)
    creation_datetime = Column(DateTime, nullable=False)
    modification_datetime = Column(DateTime, nullable=False)
    collection = Column(Integer, ForeignKey('collections.id'), nullable=False, index=True)


class PhotoAlbumMap(Base):
    """Containment edge between an album and a photo."""
    __tablename__ = 'photos_albums_map'
    __table_args__ = (
        UniqueConstraint('containing_album', 'contained_photo', name='uq_album_photo'),
        {'sqlite_autoincrement': True},
    )

    # Insertion order of edges is the listing order of an album
    id = Column(Integer, primary_key=True, autoincrement=True)
    containing_album = Column(Integer, ForeignKey('albums.id'), nullable=False, index=True)
    contained_photo = Column(Integer, ForeignKey('photos.id'), nullable=False, index=True)
    added_at = Column(DateTime, default=func.now())
