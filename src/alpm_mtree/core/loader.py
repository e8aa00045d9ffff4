"""
Load manifests from disk.

pacman stores ``.MTREE`` gzip-compressed inside packages. Compressed input is
detected by its magic bytes and inflated into one buffer before parsing.
"""

from __future__ import annotations

import gzip
import logging
import zlib
from pathlib import Path

from .errors import LoadError
from .parser import ParseResult, parse_manifest

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


def read_bytes(path: Path) -> bytes:
    """
    Read a manifest file, decompressing gzip input.

    Raises:
        LoadError: If the file cannot be read or the gzip stream is corrupt
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise LoadError(f"Cannot read manifest {path}: {e}") from e

    if not raw.startswith(GZIP_MAGIC):
        return raw

    logger.debug("Decompressing gzip manifest %s (%d bytes)", path, len(raw))
    try:
        return gzip.decompress(raw)
    except (OSError, EOFError, zlib.error) as e:
        raise LoadError(f"Corrupt gzip stream in {path}: {e}") from e


def load_text(path: Path) -> str:
    """Read a manifest as text, decoding UTF-8 with replacement characters."""
    return read_bytes(path).decode("utf-8", errors="replace")


def parse_file(path: Path) -> ParseResult:
    """
    Load and parse a manifest file.

    Args:
        path: Path to a plain or gzip-compressed .MTREE file

    Returns:
        ParseResult named after the file

    Raises:
        LoadError: If the file cannot be loaded
    """
    path = Path(path)
    return parse_manifest(load_text(path), source_name=str(path))
