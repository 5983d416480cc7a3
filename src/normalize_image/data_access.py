from __future__ import annotations

import hashlib
from pathlib import Path


class DataAccessError(Exception):
    pass


def read_source_bytes(path: Path) -> bytes:
    """
    Read an input image from an explicitly passed path.

    The pipeline itself only ever sees bytes; this helper is for entrypoints.
    """

    source = path.expanduser().resolve()
    if not source.is_file():
        raise DataAccessError(f"Input file not found: {str(path)!r}")
    return source.read_bytes()


def sha256_bytes(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()
