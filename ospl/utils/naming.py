"""
Content fingerprints and derived display names for photos.
"""

import hashlib
from datetime import datetime
from pathlib import Path
from typing import Union

TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S-%f"
FINGERPRINT_BYTES = 16


def fingerprint(data: bytes) -> int:
    """Return the 128-bit content fingerprint of ``data``."""
    return int.from_bytes(hashlib.md5(data, usedforsecurity=False).digest(), 'big')


def fingerprint_file(file_path: Union[str, Path], chunk_size: int = 8192) -> int:
    """
    Fingerprint a file without loading it into memory at once.

    Args:
        file_path: Path to the file
        chunk_size: Bytes read per iteration

    Returns:
        128-bit fingerprint, equal to ``fingerprint(file_bytes)``
    """
    hash_obj = hashlib.md5(usedforsecurity=False)
    with open(file_path, 'rb') as f:
        for chunk in iter(lambda: f.read(chunk_size), b''):
            hash_obj.update(chunk)
    return int.from_bytes(hash_obj.digest(), 'big')


def fingerprint_to_bytes(value: int) -> bytes:
    return value.to_bytes(FINGERPRINT_BYTES, 'big')


def fingerprint_from_bytes(raw: bytes) -> int:
    return int.from_bytes(raw, 'big')


def format_import_time(imported_at: datetime) -> str:
    return imported_at.strftime(TIMESTAMP_FORMAT)


def derive_display_name(original_basename: str, imported_at: datetime) -> str:
    """
    Build the on-disk name of an imported photo.

    The microsecond timestamp prefix keeps names unique across imports of
    files sharing a basename and sorts a directory listing by import order.
    """
    return f"{format_import_time(imported_at)}_{original_basename}"
