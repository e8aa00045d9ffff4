"""Installed version of the alpm-mtree distribution."""

from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION = "alpm-mtree"
UNKNOWN_VERSION = "0.0.0+unknown"


def get_version() -> str:
    """Version recorded by the installer, or a placeholder when run from a bare checkout."""
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        return UNKNOWN_VERSION
