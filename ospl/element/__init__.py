"""Photos, collections and albums."""

from .album import Album, AlbumDraft
from .collection import Collection, CollectionDraft
from .photo import Photo, PhotoDraft
from .traits import Draft, Persistable, Placeable

__all__ = [
    'Album', 'AlbumDraft', 'Collection', 'CollectionDraft', 'Photo', 'PhotoDraft',
    'Draft', 'Persistable', 'Placeable',
]
