"""
Value converters for property fields.

Each converter takes the raw text after ``=`` and returns the typed value or
raises :class:`~alpm_mtree.core.errors.InvalidValueError` carrying the
diagnostic kind. The grammar decides what to do with the failure.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from .errors import DiagnosticKind, InvalidValueError
from .ir import SHA256_HEX_LENGTH, DefaultKey, DefaultValue, PathType, PropertyKey, PropertyValue

# ASCII digits only; str.isdigit() also accepts other scripts.
_DECIMAL = re.compile(r"[0-9]+")
_OCTAL_MODE = re.compile(r"[0-7]{1,4}")
_HEX = re.compile(r"[0-9a-fA-F]+")
_TIME = re.compile(r"([0-9]+)(?:\.([0-9]+))?")

_PATH_TYPES = {t.value: t for t in PathType}


def parse_decimal(value: str, key: str) -> int:
    """Parse a non-negative base-10 integer."""
    if not _DECIMAL.fullmatch(value):
        raise InvalidValueError(
            DiagnosticKind.INVALID_NUMBER,
            f"invalid number {value!r} for {key} (expected decimal digits)",
        )
    return int(value)


def parse_mode(value: str) -> str:
    """Validate an octal mode; the raw digit string is kept for round-trips."""
    if not _OCTAL_MODE.fullmatch(value):
        raise InvalidValueError(
            DiagnosticKind.INVALID_OCTAL_MODE,
            f"invalid mode {value!r} (expected 1 to 4 octal digits)",
        )
    return value


def parse_path_type(value: str) -> PathType:
    path_type = _PATH_TYPES.get(value)
    if path_type is None:
        expected = ", ".join(_PATH_TYPES)
        raise InvalidValueError(
            DiagnosticKind.INVALID_TYPE,
            f"invalid type {value!r} (expected one of: {expected})",
        )
    return path_type


def parse_sha256_digest(value: str) -> str:
    if len(value) != SHA256_HEX_LENGTH:
        raise InvalidValueError(
            DiagnosticKind.INVALID_DIGEST_LENGTH,
            f"sha256digest must be {SHA256_HEX_LENGTH} hex characters, got {len(value)}",
        )
    if not _HEX.fullmatch(value):
        raise InvalidValueError(
            DiagnosticKind.INVALID_DIGEST,
            f"sha256digest {value!r} contains non-hexadecimal characters",
        )
    return value


def parse_time(value: str) -> int:
    """
    Parse ``<seconds>[.<fraction>]``.

    pacman writes modification times with a fractional part. It is checked
    for digits and then dropped.
    """
    match = _TIME.fullmatch(value)
    if match is None:
        raise InvalidValueError(
            DiagnosticKind.INVALID_NUMBER,
            f"invalid time {value!r} (expected <seconds>[.<fraction>])",
        )
    return int(match.group(1))


def parse_link(value: str) -> str:
    if not value:
        raise InvalidValueError(DiagnosticKind.MISSING_VALUE, "link target must not be empty")
    return value


DEFAULT_VALUE_PARSERS: dict[DefaultKey, Callable[[str], DefaultValue]] = {
    DefaultKey.UID: lambda v: parse_decimal(v, "uid"),
    DefaultKey.GID: lambda v: parse_decimal(v, "gid"),
    DefaultKey.MODE: parse_mode,
    DefaultKey.TYPE: parse_path_type,
}

PROPERTY_VALUE_PARSERS: dict[PropertyKey, Callable[[str], PropertyValue]] = {
    PropertyKey.MODE: parse_mode,
    PropertyKey.TYPE: parse_path_type,
    PropertyKey.SIZE: lambda v: parse_decimal(v, "size"),
    PropertyKey.LINK: parse_link,
    PropertyKey.SHA256_DIGEST: parse_sha256_digest,
    PropertyKey.TIME: parse_time,
}
