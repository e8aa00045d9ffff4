"""
Default-scope resolver.

Threads the ambient defaults established by ``/set`` and ``/unset`` through
a parse and merges them into each path entry. The scope is flat: a directive
applies from its line to end-of-file, nothing nests.

One :class:`ScopeResolver` serves exactly one parse; it owns its scope and
its list of resolved entries.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import assert_never

from .errors import DiagnosticCollector, DiagnosticKind
from .grammar import HEADER_TOKEN
from .ir import (
    CARRIED_DEFAULTS,
    ENTRY_ATTRIBUTES,
    DefaultKey,
    DefaultValue,
    Init,
    PathEntry,
    ResolvedEntry,
    SetDirective,
    Statement,
    UnsetDirective,
)

logger = logging.getLogger(__name__)


class DefaultScope:
    """Mapping of default keys to their current ambient value."""

    def __init__(self) -> None:
        self._values: dict[DefaultKey, DefaultValue] = {}

    def set(self, fields: dict[DefaultKey, DefaultValue]) -> None:
        self._values.update(fields)

    def unset(self, keys: Iterable[DefaultKey]) -> None:
        """Remove the named keys; absent keys are ignored."""
        for key in keys:
            self._values.pop(key, None)

    def clear(self) -> None:
        self._values.clear()

    def entry_defaults(self) -> dict[str, DefaultValue]:
        """Defaults that carry into a resolved entry, keyed by attribute name."""
        return {
            key.value: value for key, value in self._values.items() if key in CARRIED_DEFAULTS
        }

    def as_dict(self) -> dict[DefaultKey, DefaultValue]:
        return dict(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[DefaultKey]:
        return iter(self._values)


class ScopeResolver:
    """
    Resolve statements in source order.

    ``resolve()`` is total over the statement union and returns the new
    entry for path statements, None otherwise.
    """

    def __init__(self, collector: DiagnosticCollector | None = None):
        self.collector = collector if collector is not None else DiagnosticCollector()
        self.scope = DefaultScope()
        self.entries: list[ResolvedEntry] = []
        self._statements_seen = 0

    def resolve(self, statement: Statement) -> ResolvedEntry | None:
        entry: ResolvedEntry | None = None

        if isinstance(statement, Init):
            self._resolve_init(statement)
        elif isinstance(statement, SetDirective):
            self.scope.set(statement.fields)
        elif isinstance(statement, UnsetDirective):
            if statement.clear_all:
                self.scope.clear()
            else:
                self.scope.unset(statement.keys)
        elif isinstance(statement, PathEntry):
            entry = self._resolve_path(statement)
        else:
            assert_never(statement)

        self._statements_seen += 1
        return entry

    def resolve_all(self, statements: Iterable[Statement]) -> list[ResolvedEntry]:
        for statement in statements:
            self.resolve(statement)
        return self.entries

    def _resolve_init(self, statement: Init) -> None:
        if self._statements_seen:
            self.collector.record(
                statement.offset,
                statement.length,
                f"{HEADER_TOKEN} header must be the first statement",
                kind=DiagnosticKind.MISPLACED_HEADER,
            )

    def _resolve_path(self, statement: PathEntry) -> ResolvedEntry:
        attributes = self.scope.entry_defaults()
        for key, value in statement.fields.items():
            attributes[ENTRY_ATTRIBUTES[key]] = value

        entry = ResolvedEntry(path=statement.path, **attributes)  # type: ignore[arg-type]
        self.entries.append(entry)
        logger.debug("Resolved %s (%d attributes)", entry.path, len(attributes))
        return entry
