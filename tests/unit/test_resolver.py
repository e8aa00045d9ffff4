"""Tests for the default-scope resolver."""

from alpm_mtree.core.errors import DiagnosticKind
from alpm_mtree.core.ir import (
    DefaultKey,
    Init,
    PathEntry,
    PathType,
    PropertyKey,
    ResolvedEntry,
    SetDirective,
    UnsetDirective,
)
from alpm_mtree.core.resolver import DefaultScope, ScopeResolver


def _set(**fields) -> SetDirective:
    return SetDirective(fields={DefaultKey(k): v for k, v in fields.items()})


class TestDefaultScope:
    def test_set_overwrites(self) -> None:
        scope = DefaultScope()
        scope.set({DefaultKey.MODE: "644"})
        scope.set({DefaultKey.MODE: "755", DefaultKey.UID: 0})
        assert scope.as_dict() == {DefaultKey.MODE: "755", DefaultKey.UID: 0}

    def test_unset_named_and_absent(self) -> None:
        scope = DefaultScope()
        scope.set({DefaultKey.MODE: "644", DefaultKey.GID: 0})
        scope.unset([DefaultKey.MODE, DefaultKey.TYPE])
        assert scope.as_dict() == {DefaultKey.GID: 0}
        assert DefaultKey.MODE not in scope
        assert list(scope) == [DefaultKey.GID]

    def test_unset_everything(self) -> None:
        scope = DefaultScope()
        scope.set({DefaultKey.MODE: "644", DefaultKey.GID: 0})
        scope.clear()
        assert len(scope) == 0

    def test_entry_defaults_exclude_ownership(self) -> None:
        scope = DefaultScope()
        scope.set({DefaultKey.UID: 0, DefaultKey.GID: 0, DefaultKey.TYPE: PathType.FILE})
        assert scope.entry_defaults() == {"type": PathType.FILE}


class TestScopeResolver:
    def test_defaults_apply_to_later_entries(self) -> None:
        resolver = ScopeResolver()
        resolver.resolve(_set(type=PathType.FILE, mode="0644"))
        entry = resolver.resolve(PathEntry(path="./foo", fields={PropertyKey.SIZE: 10}))
        assert entry == ResolvedEntry(path="./foo", type=PathType.FILE, mode="0644", size=10)

    def test_explicit_field_wins(self) -> None:
        resolver = ScopeResolver()
        resolver.resolve(_set(mode="0644"))
        entry = resolver.resolve(PathEntry(path="./bar", fields={PropertyKey.MODE: "0755"}))
        assert entry is not None
        assert entry.mode == "0755"

    def test_unset_one_key(self) -> None:
        resolver = ScopeResolver()
        resolver.resolve(_set(uid=0, mode="0644"))
        resolver.resolve(UnsetDirective(keys=(DefaultKey.MODE,)))
        entry = resolver.resolve(PathEntry(path="./baz"))
        assert entry == ResolvedEntry(path="./baz")
        assert resolver.scope.as_dict() == {DefaultKey.UID: 0}

    def test_unset_all(self) -> None:
        resolver = ScopeResolver()
        resolver.resolve(_set(uid=0, gid=0, mode="0644"))
        resolver.resolve(UnsetDirective(clear_all=True))
        assert resolver.resolve(PathEntry(path="./qux")) == ResolvedEntry(path="./qux")
        assert len(resolver.scope) == 0

    def test_unset_without_keys_keeps_the_scope(self) -> None:
        resolver = ScopeResolver()
        resolver.resolve(_set(mode="0644"))
        resolver.resolve(UnsetDirective(keys=()))
        assert resolver.scope.as_dict() == {DefaultKey.MODE: "0644"}

    def test_unset_absent_key_is_silent(self) -> None:
        resolver = ScopeResolver()
        resolver.resolve(UnsetDirective(keys=(DefaultKey.TYPE,)))
        assert len(resolver.collector) == 0

    def test_path_entries_do_not_touch_the_scope(self) -> None:
        resolver = ScopeResolver()
        resolver.resolve(_set(mode="0644"))
        before = resolver.scope.as_dict()
        resolver.resolve(PathEntry(path="./a", fields={PropertyKey.MODE: "0700"}))
        assert resolver.scope.as_dict() == before

    def test_entries_keep_source_order(self) -> None:
        resolver = ScopeResolver()
        entries = resolver.resolve_all(
            [
                Init(),
                PathEntry(path="./b"),
                _set(type=PathType.DIR),
                PathEntry(path="./a"),
            ]
        )
        assert [e.path for e in entries] == ["./b", "./a"]
        assert entries[0].type is None
        assert entries[1].type is PathType.DIR

    def test_header_first_is_fine(self) -> None:
        resolver = ScopeResolver()
        resolver.resolve(Init(offset=0, length=6))
        assert len(resolver.collector) == 0

    def test_misplaced_header(self) -> None:
        resolver = ScopeResolver()
        resolver.resolve(_set(mode="644"))
        resolver.resolve(Init(offset=14, length=6))
        (diagnostic,) = resolver.collector
        assert diagnostic.kind is DiagnosticKind.MISPLACED_HEADER
        assert diagnostic.as_triple()[:2] == (14, 6)
        assert not diagnostic.is_fatal
