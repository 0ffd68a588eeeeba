"""
Thumbnail generation for imported photos.
"""

import logging
from pathlib import Path
from typing import Union

from PIL import Image

from ..exceptions import ThumbnailError

logger = logging.getLogger(__name__)

THUMBNAIL_HEIGHT = 325


def create_thumbnail(source: Union[str, Path], destination: Union[str, Path],
                     height: int = THUMBNAIL_HEIGHT) -> Path:
    """
    Write a fixed-height, proportionally scaled copy of an image.

    Args:
        source: Image to scale
        destination: Where to write the thumbnail
        height: Thumbnail height in pixels

    Returns:
        Destination path

    Raises:
        ThumbnailError: If the image cannot be read, scaled or written
    """
    source = Path(source)
    destination = Path(destination)

    try:
        with Image.open(source) as img:
            image_format = img.format
            width = max(1, round(img.width * height / img.height))
            thumb = img.resize((width, height), Image.Resampling.LANCZOS)
        if image_format == 'JPEG' and thumb.mode not in ('RGB', 'L', 'CMYK'):
            thumb = thumb.convert('RGB')
        thumb.save(destination, format=image_format)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        logger.error(f"Thumbnail failed for {source.name}: {e}")
        raise ThumbnailError(f"Failed to create thumbnail for {source}: {e}") from e

    logger.debug(f"Created {width}x{height} thumbnail {destination.name}")
    return destination
