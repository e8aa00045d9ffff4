"""
alpm-mtree intermediate representation.

Statement variants come out of the grammar; resolved entries and the
manifest come out of the resolver. Everything is re-exported here.
"""

from .manifest import SHA256_HEX_LENGTH, Manifest, ResolvedEntry
from .properties import (
    CARRIED_DEFAULTS,
    ENTRY_ATTRIBUTES,
    DefaultKey,
    DefaultValue,
    PathType,
    PropertyKey,
    PropertyValue,
)
from .statements import Init, PathEntry, SetDirective, Statement, UnsetDirective

__all__ = [
    # Properties
    "CARRIED_DEFAULTS",
    "ENTRY_ATTRIBUTES",
    "DefaultKey",
    "DefaultValue",
    "PathType",
    "PropertyKey",
    "PropertyValue",
    # Statements
    "Init",
    "PathEntry",
    "SetDirective",
    "Statement",
    "UnsetDirective",
    # Output
    "SHA256_HEX_LENGTH",
    "Manifest",
    "ResolvedEntry",
]
