"""
Manifest parser facade.

Drives the segmenter, grammar and resolver over one in-memory buffer.

Entry points:
    ``parse_manifest(text) -> ParseResult``   (eager)
    ``iter_manifest(text) -> Iterator[ResolvedEntry]``   (lazy)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from .errors import (
    Diagnostic,
    DiagnosticCollector,
    DiagnosticKind,
    ErrorContext,
    Severity,
    make_parse_error,
)
from .grammar import parse_statement
from .ir import Manifest, ResolvedEntry
from .lexer import SourceText
from .resolver import ScopeResolver

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_NAME = "<string>"


@dataclass(frozen=True)
class ParseResult:
    """
    Everything a parse produces.

    Attributes:
        manifest: Entries resolved before the end of input (or a fatal error)
        diagnostics: Problems in source order; a fatal one is always last
        source: The parsed text, kept for reporting
        source_name: Display name used in error locations
    """

    manifest: Manifest
    diagnostics: tuple[Diagnostic, ...] = ()
    source: str = field(default="", repr=False)
    source_name: str = DEFAULT_SOURCE_NAME

    @property
    def fatal(self) -> bool:
        return any(d.is_fatal for d in self.diagnostics)

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def raise_for_diagnostics(self) -> None:
        """
        Raise ParseError for the first diagnostic, if there is one.

        Raises:
            ParseError: With the diagnostic's source location attached
        """
        if not self.diagnostics:
            return
        # Imported here; report depends on rich, the core parse path does not.
        from .report import build_context

        first = self.diagnostics[0]
        context: ErrorContext = build_context(
            self.source, first.offset, first.length, file=self.source_name
        )
        raise make_parse_error(first, context)


class ManifestParser:
    """
    Single-use parser for one buffer.

    Holds the segmenter, the diagnostic collector and the scope resolver for
    one input. Two parsers never share state.
    """

    def __init__(self, text: str | bytes, source_name: str = DEFAULT_SOURCE_NAME):
        self.source = SourceText(text)
        self.source_name = source_name
        self.collector = DiagnosticCollector()
        self.resolver = ScopeResolver(self.collector)
        self._started = False

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return self.collector.diagnostics

    def entries(self) -> Iterator[ResolvedEntry]:
        """
        Lazily parse and yield resolved entries.

        Stopping iteration early stops the parse. Diagnostics gathered so
        far are available from :attr:`diagnostics`.

        Raises:
            RuntimeError: If called a second time on the same parser
        """
        if self._started:
            raise RuntimeError("ManifestParser instances are single-use")
        self._started = True

        for line in self.source.lines():
            if not line.terminated:
                self.collector.record(
                    line.offset,
                    line.length,
                    "unterminated directive: line continuation reaches end of input",
                    kind=DiagnosticKind.UNTERMINATED_DIRECTIVE,
                    severity=Severity.FATAL,
                )
                logger.debug("%s: fatal error on line %d", self.source_name, line.number)
                return

            result = parse_statement(line)
            self.collector.extend(result.diagnostics)
            if result.statement is None:
                continue

            entry = self.resolver.resolve(result.statement)
            if entry is not None:
                yield entry

    def parse(self) -> ParseResult:
        """Run the whole parse and package the result."""
        for _ in self.entries():
            pass

        result = ParseResult(
            manifest=Manifest(entries=tuple(self.resolver.entries)),
            diagnostics=self.collector.diagnostics,
            source=self.source.text,
            source_name=self.source_name,
        )
        logger.debug(
            "Parsed %s: %d entries, %d diagnostics",
            self.source_name,
            len(result.manifest),
            len(result.diagnostics),
        )
        return result


def parse_manifest(text: str | bytes, source_name: str = DEFAULT_SOURCE_NAME) -> ParseResult:
    """
    Parse .MTREE text into a manifest plus diagnostics.

    Args:
        text: Manifest text; bytes are decoded as UTF-8 with replacement
        source_name: Display name for error locations

    Returns:
        ParseResult with the best-effort manifest
    """
    return ManifestParser(text, source_name).parse()


def iter_manifest(text: str | bytes) -> Iterator[ResolvedEntry]:
    """
    Lazily yield resolved entries, discarding diagnostics.

    Use ``ManifestParser(text).entries()`` instead when diagnostics matter;
    the parser instance exposes them, including a fatal stop.
    """
    return ManifestParser(text).entries()
