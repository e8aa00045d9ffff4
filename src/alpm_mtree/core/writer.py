"""
Manifest writer.

Renders resolved entries back to .MTREE text, one explicit line per entry
and no ``/set`` defaults. Parsing the output yields an equal manifest.
"""

from __future__ import annotations

from collections.abc import Iterable

from .grammar import HEADER_TOKEN
from .ir import ENTRY_ATTRIBUTES, Manifest, PropertyKey, ResolvedEntry

# Canonical field order on a rendered line
FIELD_ORDER: tuple[PropertyKey, ...] = (
    PropertyKey.TYPE,
    PropertyKey.MODE,
    PropertyKey.SIZE,
    PropertyKey.LINK,
    PropertyKey.SHA256_DIGEST,
    PropertyKey.TIME,
)


def _format_value(key: PropertyKey, value: object) -> str:
    if key is PropertyKey.TYPE:
        return value.value  # type: ignore[attr-defined]
    if key is PropertyKey.TIME:
        # pacman writes a fractional part; the parser drops it again
        return f"{value}.0"
    return str(value)


def render_entry(entry: ResolvedEntry) -> str:
    """Render one entry as a single path line (no trailing newline)."""
    parts = [entry.path]
    for key in FIELD_ORDER:
        value = getattr(entry, ENTRY_ATTRIBUTES[key])
        if value is not None:
            parts.append(f"{key.value}={_format_value(key, value)}")
    return " ".join(parts)


def render_entries(entries: Iterable[ResolvedEntry], header: bool = True) -> str:
    lines = [HEADER_TOKEN] if header else []
    lines.extend(render_entry(entry) for entry in entries)
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def render_manifest(manifest: Manifest, header: bool = True) -> str:
    """
    Render a manifest to .MTREE text.

    Args:
        manifest: Manifest to render
        header: Emit the ``#mtree`` header line

    Returns:
        Newline-terminated text
    """
    return render_entries(manifest.entries, header=header)
