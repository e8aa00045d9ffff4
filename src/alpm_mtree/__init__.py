"""
alpm-mtree - parser for ALPM .MTREE package file-tree manifests.

Resolves ``/set`` and ``/unset`` defaults into fully specified entries and
reports malformed input as position-tagged diagnostics.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.errors import ConfigError, Diagnostic, DiagnosticKind, LoadError, MtreeError, ParseError
from .core.ir import Manifest, PathType, ResolvedEntry
from .core.loader import parse_file
from .core.parser import ManifestParser, ParseResult, iter_manifest, parse_manifest
from .core.writer import render_manifest

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    # Parsing
    "ManifestParser",
    "ParseResult",
    "iter_manifest",
    "parse_file",
    "parse_manifest",
    "render_manifest",
    # Model
    "Manifest",
    "PathType",
    "ResolvedEntry",
    # Errors
    "ConfigError",
    "Diagnostic",
    "DiagnosticKind",
    "LoadError",
    "MtreeError",
    "ParseError",
]
