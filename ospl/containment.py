"""
Album/photo containment.

An edge is a row in ``photos_albums_map`` plus a hard link from the album
directory to the photo's canonical file. Photos hold no reference to the
albums containing them; both directions are answered from the map.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from .db.models import PhotoAlbumMap
from .element.album import Album
from .element.photo import Photo
from .io.filesystem import LibraryFilesystem

logger = logging.getLogger(__name__)


class ContainmentIndex:
    """Relational edges and hard links between albums and photos."""

    def put(self, session: Session, album: Album, photo: Photo) -> bool:
        """
        Record that ``album`` contains ``photo``.

        Returns:
            False if the edge was already recorded
        """
        existing = session.query(PhotoAlbumMap).filter_by(
            containing_album=album.id,
            contained_photo=photo.id
        ).first()

        if existing:
            logger.warning(f"Photo {photo.id} already assigned to album {album.id}")
            return False

        session.add(PhotoAlbumMap(containing_album=album.id, contained_photo=photo.id))
        session.flush()
        return True

    def link(self, fs: LibraryFilesystem, album: Album, photo: Photo) -> bool:
        """Hard link the photo into the album directory unless already there."""
        created = fs.link(photo.picture_path(fs), photo.link_path(fs, album))
        if not created:
            logger.warning(f"{photo.display_name} already linked in album {album.name}")
        return created

    def unlink(self, fs: LibraryFilesystem, album: Album, photo: Photo) -> None:
        fs.unlink(photo.link_path(fs, album), missing_ok=True)

    def drop(self, session: Session, album: Album, photo: Photo) -> bool:
        """Remove a single edge. Returns False if there was none."""
        deleted = session.query(PhotoAlbumMap).filter_by(
            containing_album=album.id,
            contained_photo=photo.id
        ).delete(synchronize_session=False)
        return deleted > 0

    def drop_album(self, session: Session, album_id: int) -> int:
        """Remove every edge of an album. Returns the number removed."""
        return session.query(PhotoAlbumMap).filter_by(
            containing_album=album_id
        ).delete(synchronize_session=False)

    def drop_photo(self, session: Session, photo_id: int) -> int:
        """Remove every edge of a photo. Returns the number removed."""
        return session.query(PhotoAlbumMap).filter_by(
            contained_photo=photo_id
        ).delete(synchronize_session=False)

    def photo_ids(self, session: Session, album_id: int) -> List[int]:
        rows = session.query(PhotoAlbumMap.contained_photo).filter_by(
            containing_album=album_id
        ).order_by(PhotoAlbumMap.id).all()
        return [photo_id for (photo_id,) in rows]

    def photos_in(self, session: Session, album_id: int) -> List[Photo]:
        """Current records of the photos in an album, in assignment order."""
        return [Photo.load(session, photo_id) for photo_id in self.photo_ids(session, album_id)]

    def albums_containing(self, session: Session, photo_id: int) -> List[Album]:
        rows = session.query(PhotoAlbumMap.containing_album).filter_by(
            contained_photo=photo_id
        ).order_by(PhotoAlbumMap.id).all()
        return [Album.load(session, album_id) for (album_id,) in rows]
