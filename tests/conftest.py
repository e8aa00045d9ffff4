"""Shared pytest fixtures for alpm-mtree tests."""

import gzip
from pathlib import Path

import pytest

DIGEST = "0123456789abcdef" * 4
OTHER_DIGEST = "fedcba9876543210" * 4

SAMPLE_MTREE = f"""#mtree
/set type=file uid=0 gid=0 mode=644
./.BUILDINFO time=1700000000.0 size=5093 sha256digest={DIGEST}
./.PKGINFO time=1700000000.0 size=612 sha256digest={OTHER_DIGEST}
/set mode=755
./usr time=1700000000.0 type=dir
./usr/bin time=1700000000.0 type=dir
./usr/bin/tool time=1700000001.5 size=10240 sha256digest={DIGEST}
./usr/bin/tool-link time=1700000001.0 mode=777 type=link link=tool
/unset mode
./usr/share/doc time=1700000002.0 type=dir
"""


@pytest.fixture
def sample_mtree() -> str:
    """Return a small but realistic .MTREE as pacman writes it."""
    return SAMPLE_MTREE


@pytest.fixture
def mtree_file(tmp_path: Path, sample_mtree: str) -> Path:
    """Write the sample manifest uncompressed."""
    path = tmp_path / ".MTREE.extracted"
    path.write_text(sample_mtree, encoding="utf-8")
    return path


@pytest.fixture
def gzip_mtree_file(tmp_path: Path, sample_mtree: str) -> Path:
    """Write the sample manifest gzip-compressed, like inside a package."""
    path = tmp_path / ".MTREE"
    path.write_bytes(gzip.compress(sample_mtree.encode("utf-8")))
    return path
