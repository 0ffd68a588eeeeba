"""
Content-type sniffing for import sources.
"""

import enum
import logging
import mimetypes
from pathlib import Path
from typing import Union

from PIL import Image, UnidentifiedImageError

from ..exceptions import NotAnImageError, UnsupportedError

logger = logging.getLogger(__name__)


class ContentKind(enum.Enum):
    """Result of sniffing a file."""
    IMAGE = "image"
    OTHER = "other"          # recognised, but not an image
    UNKNOWN = "unknown"      # could not be classified
    OVERSIZED = "oversized"  # an image over Pillow's pixel limit


def sniff(file_path: Union[str, Path]) -> ContentKind:
    """
    Classify a file by its content.

    Pillow decides whether the bytes form an image. When they don't, the
    file name is used to tell a known non-image type from unknown content.
    Errors opening the file itself propagate.
    """
    file_path = Path(file_path)

    with open(file_path, 'rb') as f:
        try:
            with Image.open(f) as img:
                img.verify()
            return ContentKind.IMAGE
        except Image.DecompressionBombError as e:
            logger.warning(f"Refusing oversized image {file_path.name}: {e}")
            return ContentKind.OVERSIZED
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
            logger.debug(f"Pillow rejected {file_path.name}: {e}")

    mime_type, _ = mimetypes.guess_type(file_path.name)
    if mime_type and not mime_type.startswith('image/'):
        return ContentKind.OTHER
    return ContentKind.UNKNOWN


def ensure_image(file_path: Union[str, Path]) -> None:
    """Raise unless ``file_path`` holds an image."""
    kind = sniff(file_path)
    if kind is ContentKind.OVERSIZED:
        raise UnsupportedError(f"Image exceeds the pixel limit: {file_path}")
    if kind is ContentKind.OTHER:
        raise UnsupportedError(f"Not an image type: {file_path}")
    if kind is ContentKind.UNKNOWN:
        raise NotAnImageError(f"Not a recognised image: {file_path}")
