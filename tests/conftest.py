"""
Shared fixtures for ospl tests.
"""

import pytest
from pathlib import Path
from PIL import Image

from ospl.library import Library


def write_image(path: Path, size=(100, 80), color='red', image_format='JPEG') -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = 'RGBA' if image_format == 'PNG' else 'RGB'
    Image.new(mode, size, color=color).save(path, image_format)
    return path


def library_state(library: Library):
    """Everything both stores know, for before/after comparisons."""
    files = sorted(
        str(p.relative_to(library.path))
        for p in library.path.rglob('*')
        if not p.name.startswith('database.db')
    )
    return files, library.list_collections(), library.list_photos()


@pytest.fixture
def library(tmp_path):
    """Empty library in a temporary directory."""
    return Library.create(tmp_path / 'test.ospl')


@pytest.fixture
def sources(tmp_path):
    """Directory for files to import."""
    path = tmp_path / 'sources'
    path.mkdir()
    return path


@pytest.fixture
def image_file(sources):
    """A small JPEG to import."""
    return write_image(sources / 'beach.jpg')


@pytest.fixture
def collection(library):
    return library.create_collection('2019', 'Photos from 2019')


@pytest.fixture
def album(library, collection):
    return library.create_album('Pizza Party', 'Friday night', collection.id)
