"""
Error types and diagnostics for .MTREE parsing.

Malformed manifest input never raises: the grammar and the resolver record
:class:`Diagnostic` objects into a :class:`DiagnosticCollector` and parsing
carries on. Exceptions are reserved for I/O, configuration, and callers that
opt in through ``ParseResult.raise_for_diagnostics()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class MtreeError(Exception):
    """Base exception for all alpm-mtree errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(MtreeError):
    """
    Raised on request for a manifest that produced diagnostics.

    The parser itself only records diagnostics; this is what
    ``ParseResult.raise_for_diagnostics()`` turns the first one into.
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        diagnostic: Diagnostic | None = None,
    ):
        self.diagnostic = diagnostic
        super().__init__(message, context)


class LoadError(MtreeError):
    """
    Raised when a manifest file cannot be read.

    Examples:
    - Missing or unreadable file
    - Truncated or corrupt gzip stream
    """

    pass


class ConfigError(MtreeError):
    """Raised when ``mtree.toml`` is malformed or holds values of the wrong type."""

    pass


class InvalidValueError(MtreeError):
    """Raised by the value converters; the grammar turns it into a diagnostic."""

    def __init__(self, kind: DiagnosticKind, message: str):
        self.kind = kind
        super().__init__(message)


@dataclass
class ErrorContext:
    """
    Source location of an error, with an optional snippet.

    Attributes:
        file: Path or display name of the manifest
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Source lines around the error
        first_line: Line number of the first snippet line
        width: Number of columns to underline
    """

    file: Path | str
    line: int
    column: int
    snippet: str | None = None
    first_line: int | None = None
    width: int = 1

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: ".MTREE:10:5" followed by the snippet
        """
        location = f"{self.file}:{self.line}:{self.column}"
        if self.snippet is not None:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format code snippet with line numbers and error marker."""
        if self.snippet is None:
            return ""

        formatted = []
        start_line = self.first_line or self.line

        for i, line in enumerate(self.snippet.split("\n")):
            line_num = start_line + i
            prefix = f"{line_num:4d} | "
            formatted.append(prefix + line)

            if line_num == self.line:
                marker_pos = len(prefix) + self.column - 1
                formatted.append(" " * marker_pos + "^" * max(1, self.width))

        return "\n".join(formatted)


class DiagnosticKind(str, Enum):
    """Every problem the parser knows how to report."""

    UNRECOGNIZED_LINE = "UnrecognizedLine"
    MISPLACED_HEADER = "MisplacedHeader"
    UNKNOWN_KEY = "UnknownKey"
    INVALID_NUMBER = "InvalidNumber"
    INVALID_OCTAL_MODE = "InvalidOctalMode"
    INVALID_DIGEST_LENGTH = "InvalidDigestLength"
    INVALID_DIGEST = "InvalidDigest"
    INVALID_TYPE = "InvalidType"
    MISSING_VALUE = "MissingValue"
    UNEXPECTED_TOKEN = "UnexpectedToken"
    UNTERMINATED_DIRECTIVE = "UnterminatedDirective"


class Severity(str, Enum):
    """Recoverable diagnostics let the parse continue; fatal ones stop it."""

    RECOVERABLE = "recoverable"
    FATAL = "fatal"


class Diagnostic(BaseModel):
    """
    A position-tagged parse problem.

    ``offset`` and ``length`` are byte positions in the UTF-8 encoding of the
    parsed buffer. Reporters only need :meth:`as_triple`.
    """

    offset: int = Field(ge=0)
    length: int = Field(ge=0)
    message: str
    kind: DiagnosticKind
    severity: Severity = Severity.RECOVERABLE

    model_config = ConfigDict(frozen=True)

    @property
    def is_fatal(self) -> bool:
        return self.severity is Severity.FATAL

    def as_triple(self) -> tuple[int, int, str]:
        return (self.offset, self.length, self.message)

    def __str__(self) -> str:
        return f"{self.offset}+{self.length}: {self.kind.value}: {self.message}"


class DiagnosticCollector:
    """
    Ordered accumulator of diagnostics for a single parse.

    Recording never fails. The driving parser stops reading input after it
    records a fatal diagnostic.
    """

    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []

    def record(
        self,
        offset: int,
        length: int,
        message: str,
        kind: DiagnosticKind = DiagnosticKind.UNRECOGNIZED_LINE,
        severity: Severity = Severity.RECOVERABLE,
    ) -> Diagnostic:
        diagnostic = Diagnostic(
            offset=offset,
            length=length,
            message=message,
            kind=kind,
            severity=severity,
        )
        self._diagnostics.append(diagnostic)
        return diagnostic

    def extend(self, diagnostics: list[Diagnostic]) -> None:
        self._diagnostics.extend(diagnostics)

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return tuple(self._diagnostics)

    def __len__(self) -> int:
        return len(self._diagnostics)

    def __iter__(self):
        return iter(self._diagnostics)


def make_parse_error(diagnostic: Diagnostic, context: ErrorContext | None = None) -> ParseError:
    """
    Helper to create a ParseError from a diagnostic.

    Args:
        diagnostic: The diagnostic being escalated
        context: Optional source location for the message

    Returns:
        ParseError with context and the originating diagnostic attached
    """
    return ParseError(
        f"{diagnostic.kind.value}: {diagnostic.message}",
        context,
        diagnostic=diagnostic,
    )
