"""
Directive grammar for .MTREE lines.

Classifies a logical line by its first field and parses the rest into typed
values. Dispatch order:

    #mtree          -> Init
    /set k=v ...    -> SetDirective
    /unset [k ...]  -> UnsetDirective
    ./path k=v ...  -> PathEntry
    anything else   -> UnrecognizedLine diagnostic, no statement

Field problems are reported per field and never stop the rest of the line
from parsing, so a line with one bad field still yields a statement.

Entry point:
    ``parse_statement(line) -> StatementResult``
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import Enum
from typing import NamedTuple, TypeVar

from .errors import Diagnostic, DiagnosticKind, InvalidValueError, Severity
from .ir import DefaultKey, Init, PathEntry, PropertyKey, SetDirective, Statement, UnsetDirective
from .lexer import Field, Line
from .values import DEFAULT_VALUE_PARSERS, PROPERTY_VALUE_PARSERS

HEADER_TOKEN = "#mtree"
SET_TOKEN = "/set"
UNSET_TOKEN = "/unset"
PATH_PREFIX = "."

_DEFAULT_KEYS = {k.value: k for k in DefaultKey}
_PROPERTY_KEYS = {k.value: k for k in PropertyKey}

K = TypeVar("K", bound=Enum)


class StatementResult(NamedTuple):
    """Outcome of parsing one line: a statement (or None) and its diagnostics."""

    statement: Statement | None
    diagnostics: list[Diagnostic]


def _diagnostic(
    kind: DiagnosticKind, offset: int, length: int, message: str
) -> Diagnostic:
    return Diagnostic(
        offset=offset,
        length=length,
        message=message,
        kind=kind,
        severity=Severity.RECOVERABLE,
    )


def _parse_assignments(
    fields: Iterable[Field],
    keys: dict[str, K],
    parsers: dict[K, Callable[[str], object]],
    context: str,
    diagnostics: list[Diagnostic],
) -> dict[K, object]:
    """
    Parse ``key=value`` fields into an insertion-ordered mapping.

    A repeated key keeps its first position and takes the last value.
    """
    parsed: dict[K, object] = {}
    for field in fields:
        name, value = field.partition()
        key = keys.get(name)
        if key is None:
            allowed = ", ".join(keys)
            diagnostics.append(
                _diagnostic(
                    DiagnosticKind.UNKNOWN_KEY,
                    field.offset,
                    len(name.encode("utf-8")) or field.length,
                    f"unknown key {name!r} in {context} (expected one of: {allowed})",
                )
            )
            continue
        if value is None:
            diagnostics.append(
                _diagnostic(
                    DiagnosticKind.MISSING_VALUE,
                    field.offset,
                    field.length,
                    f"missing value for {name!r} (expected {name}=<value>)",
                )
            )
            continue
        try:
            parsed[key] = parsers[key](value)
        except InvalidValueError as e:
            offset, length = field.value_span()
            diagnostics.append(_diagnostic(e.kind, offset, length, e.message))
    return parsed


def _parse_header(line: Line, head: Field, rest: list[Field]) -> StatementResult:
    diagnostics = [
        _diagnostic(
            DiagnosticKind.UNEXPECTED_TOKEN,
            field.offset,
            field.length,
            f"unexpected token {field.text!r} after {HEADER_TOKEN}",
        )
        for field in rest
    ]
    return StatementResult(Init(offset=head.offset, length=head.length), diagnostics)


def _parse_set(line: Line, head: Field, rest: list[Field]) -> StatementResult:
    diagnostics: list[Diagnostic] = []
    fields = _parse_assignments(
        rest, _DEFAULT_KEYS, DEFAULT_VALUE_PARSERS, SET_TOKEN, diagnostics
    )
    statement = SetDirective(fields=fields, offset=line.offset, length=line.length)  # type: ignore[arg-type]
    return StatementResult(statement, diagnostics)


def _parse_unset(line: Line, head: Field, rest: list[Field]) -> StatementResult:
    diagnostics: list[Diagnostic] = []
    keys: list[DefaultKey] = []
    for field in rest:
        name, value = field.partition()
        key = _DEFAULT_KEYS.get(name)
        if key is None:
            allowed = ", ".join(_DEFAULT_KEYS)
            diagnostics.append(
                _diagnostic(
                    DiagnosticKind.UNKNOWN_KEY,
                    field.offset,
                    field.length,
                    f"unknown key {name!r} in {UNSET_TOKEN} (expected one of: {allowed})",
                )
            )
            continue
        if value is not None:
            offset, length = field.value_span()
            diagnostics.append(
                _diagnostic(
                    DiagnosticKind.UNEXPECTED_TOKEN,
                    offset - 1,
                    length + 1,
                    f"{UNSET_TOKEN} takes bare keys; ignoring value for {name!r}",
                )
            )
        if key not in keys:
            keys.append(key)
    statement = UnsetDirective(
        keys=tuple(keys), clear_all=not rest, offset=line.offset, length=line.length
    )
    return StatementResult(statement, diagnostics)


def _parse_path(line: Line, head: Field, rest: list[Field]) -> StatementResult:
    diagnostics: list[Diagnostic] = []
    fields = _parse_assignments(
        rest, _PROPERTY_KEYS, PROPERTY_VALUE_PARSERS, f"path entry {head.text!r}", diagnostics
    )
    statement = PathEntry(
        path=head.text,
        fields=fields,  # type: ignore[arg-type]
        offset=line.offset,
        length=line.length,
    )
    return StatementResult(statement, diagnostics)


_DIRECTIVE_PARSERS: dict[str, Callable[[Line, Field, list[Field]], StatementResult]] = {
    HEADER_TOKEN: _parse_header,
    SET_TOKEN: _parse_set,
    UNSET_TOKEN: _parse_unset,
}


def parse_statement(line: Line) -> StatementResult:
    """
    Parse one logical line into a statement.

    Args:
        line: Line from :meth:`SourceText.lines`

    Returns:
        StatementResult; ``statement`` is None for unrecognized lines
    """
    fields = list(line.fields())
    if not fields:
        return StatementResult(
            None,
            [
                _diagnostic(
                    DiagnosticKind.UNRECOGNIZED_LINE,
                    line.offset,
                    line.length,
                    "blank line",
                )
            ],
        )

    head, rest = fields[0], fields[1:]
    parser = _DIRECTIVE_PARSERS.get(head.text)
    if parser is not None:
        return parser(line, head, rest)
    if head.text.startswith(PATH_PREFIX):
        return _parse_path(line, head, rest)

    return StatementResult(
        None,
        [
            _diagnostic(
                DiagnosticKind.UNRECOGNIZED_LINE,
                line.offset,
                line.length,
                f"unrecognized line starting with {head.text!r} "
                f"(expected {HEADER_TOKEN}, {SET_TOKEN}, {UNSET_TOKEN} or a path)",
            )
        ],
    )
