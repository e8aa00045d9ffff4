"""
Statement types produced by the directive grammar.

``Statement`` is a closed union of four variants. Statements are short-lived
parser values, so they are plain frozen dataclasses like the lexer's
:class:`~alpm_mtree.core.lexer.Field`; the resolved output lives in
:mod:`alpm_mtree.core.ir.manifest`.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .properties import DefaultKey, DefaultValue, PropertyKey, PropertyValue


@dataclass(frozen=True)
class Init:
    """The ``#mtree`` header line."""

    offset: int = 0
    length: int = 0


@dataclass(frozen=True)
class SetDirective:
    """``/set key=value ...``: overwrite ambient defaults."""

    fields: dict[DefaultKey, DefaultValue] = field(default_factory=dict)
    offset: int = 0
    length: int = 0


@dataclass(frozen=True)
class UnsetDirective:
    """
    ``/unset [key ...]``: clear the named defaults.

    A bare ``/unset`` sets ``clear_all``. When every named key was unknown,
    ``keys`` is empty and ``clear_all`` stays False, so nothing is cleared.
    """

    keys: tuple[DefaultKey, ...] = ()
    clear_all: bool = False
    offset: int = 0
    length: int = 0


@dataclass(frozen=True)
class PathEntry:
    """``./path key=value ...``: one file, directory or symlink."""

    path: str
    fields: dict[PropertyKey, PropertyValue] = field(default_factory=dict)
    offset: int = 0
    length: int = 0


Statement = Init | SetDirective | UnsetDirective | PathEntry
