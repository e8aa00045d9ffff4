"""
Property keys and value types of the .MTREE format.

Default properties (``/set`` and ``/unset``) and path properties are two
distinct key sets; only ``mode`` and ``type`` appear in both.
"""

from __future__ import annotations

from enum import Enum


class PathType(str, Enum):
    """What kind of filesystem object a path entry describes."""

    DIR = "dir"
    FILE = "file"
    LINK = "link"


class DefaultKey(str, Enum):
    """Keys accepted by ``/set`` and ``/unset``."""

    UID = "uid"
    GID = "gid"
    MODE = "mode"
    TYPE = "type"


class PropertyKey(str, Enum):
    """Keys accepted on a path line."""

    MODE = "mode"
    TYPE = "type"
    SIZE = "size"
    LINK = "link"
    SHA256_DIGEST = "sha256digest"
    TIME = "time"


# uid and gid are ambient-only and never reach a resolved entry
CARRIED_DEFAULTS: frozenset[DefaultKey] = frozenset({DefaultKey.MODE, DefaultKey.TYPE})

# ResolvedEntry attribute names
ENTRY_ATTRIBUTES: dict[PropertyKey, str] = {
    PropertyKey.MODE: "mode",
    PropertyKey.TYPE: "type",
    PropertyKey.SIZE: "size",
    PropertyKey.LINK: "link",
    PropertyKey.SHA256_DIGEST: "sha256_digest",
    PropertyKey.TIME: "time",
}

DefaultValue = int | str | PathType
PropertyValue = int | str | PathType
