"""
alpm-mtree core: segmenter, grammar, resolver and diagnostics.

Pipeline, leaves first::

    lexer -> grammar -> resolver -> parser
                 \\         /
                  errors (diagnostics)
"""

from .errors import (
    ConfigError,
    Diagnostic,
    DiagnosticCollector,
    DiagnosticKind,
    LoadError,
    MtreeError,
    ParseError,
    Severity,
)
from .grammar import StatementResult, parse_statement
from .lexer import Field, Line, SourceText
from .loader import load_text, parse_file
from .parser import ManifestParser, ParseResult, iter_manifest, parse_manifest
from .resolver import DefaultScope, ScopeResolver
from .writer import render_manifest

__all__ = [
    # Errors and diagnostics
    "ConfigError",
    "Diagnostic",
    "DiagnosticCollector",
    "DiagnosticKind",
    "LoadError",
    "MtreeError",
    "ParseError",
    "Severity",
    # Segmenter and grammar
    "Field",
    "Line",
    "SourceText",
    "StatementResult",
    "parse_statement",
    # Resolution
    "DefaultScope",
    "ScopeResolver",
    # Facade
    "ManifestParser",
    "ParseResult",
    "iter_manifest",
    "load_text",
    "parse_file",
    "parse_manifest",
    "render_manifest",
]
