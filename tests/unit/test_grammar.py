"""Tests for the directive grammar."""

from alpm_mtree.core.errors import DiagnosticKind
from alpm_mtree.core.grammar import StatementResult, parse_statement
from alpm_mtree.core.ir import (
    DefaultKey,
    Init,
    PathEntry,
    PathType,
    PropertyKey,
    SetDirective,
    UnsetDirective,
)
from alpm_mtree.core.lexer import segment

DIGEST = "0123456789abcdef" * 4


def _parse(text: str) -> StatementResult:
    return parse_statement(next(segment(text)))


def _kinds(result: StatementResult) -> list[DiagnosticKind]:
    return [d.kind for d in result.diagnostics]


class TestHeader:
    def test_header(self) -> None:
        result = _parse("#mtree\n")
        assert isinstance(result.statement, Init)
        assert result.diagnostics == []

    def test_trailing_tokens_are_reported(self) -> None:
        result = _parse("#mtree v2\n")
        assert isinstance(result.statement, Init)
        assert _kinds(result) == [DiagnosticKind.UNEXPECTED_TOKEN]
        assert result.diagnostics[0].offset == 7
        assert result.diagnostics[0].length == 2


class TestSet:
    def test_all_default_keys(self) -> None:
        result = _parse("/set type=file uid=0 gid=0 mode=0644\n")
        assert result.statement == SetDirective(
            fields={
                DefaultKey.TYPE: PathType.FILE,
                DefaultKey.UID: 0,
                DefaultKey.GID: 0,
                DefaultKey.MODE: "0644",
            },
            offset=0,
            length=36,
        )
        assert result.diagnostics == []

    def test_empty_set(self) -> None:
        result = _parse("/set\n")
        assert isinstance(result.statement, SetDirective)
        assert result.statement.fields == {}
        assert result.diagnostics == []

    def test_unknown_key_keeps_the_rest(self) -> None:
        result = _parse("/set uid=0 size=5 mode=644\n")
        assert isinstance(result.statement, SetDirective)
        assert result.statement.fields == {DefaultKey.UID: 0, DefaultKey.MODE: "644"}
        assert _kinds(result) == [DiagnosticKind.UNKNOWN_KEY]
        assert result.diagnostics[0].offset == 11
        assert result.diagnostics[0].length == 4

    def test_bad_value_is_scoped_to_the_field(self) -> None:
        result = _parse("/set uid=abc gid=1\n")
        assert isinstance(result.statement, SetDirective)
        assert result.statement.fields == {DefaultKey.GID: 1}
        assert _kinds(result) == [DiagnosticKind.INVALID_NUMBER]
        assert (result.diagnostics[0].offset, result.diagnostics[0].length) == (9, 3)

    def test_last_duplicate_wins(self) -> None:
        result = _parse("/set mode=644 mode=755\n")
        assert isinstance(result.statement, SetDirective)
        assert result.statement.fields == {DefaultKey.MODE: "755"}

    def test_missing_value(self) -> None:
        result = _parse("/set uid\n")
        assert _kinds(result) == [DiagnosticKind.MISSING_VALUE]

    def test_invalid_type(self) -> None:
        result = _parse("/set type=fifo\n")
        assert isinstance(result.statement, SetDirective)
        assert result.statement.fields == {}
        assert _kinds(result) == [DiagnosticKind.INVALID_TYPE]


class TestUnset:
    def test_bare_unset_clears_all(self) -> None:
        result = _parse("/unset\n")
        assert isinstance(result.statement, UnsetDirective)
        assert result.statement.clear_all
        assert result.diagnostics == []

    def test_named_keys(self) -> None:
        result = _parse("/unset mode uid\n")
        assert isinstance(result.statement, UnsetDirective)
        assert result.statement.keys == (DefaultKey.MODE, DefaultKey.UID)
        assert not result.statement.clear_all

    def test_unknown_key(self) -> None:
        result = _parse("/unset size\n")
        assert isinstance(result.statement, UnsetDirective)
        assert result.statement.keys == ()
        assert not result.statement.clear_all
        assert _kinds(result) == [DiagnosticKind.UNKNOWN_KEY]

    def test_value_is_ignored_but_key_unset(self) -> None:
        result = _parse("/unset mode=644\n")
        assert isinstance(result.statement, UnsetDirective)
        assert result.statement.keys == (DefaultKey.MODE,)
        assert _kinds(result) == [DiagnosticKind.UNEXPECTED_TOKEN]


class TestPath:
    def test_path_with_properties(self) -> None:
        result = _parse(f"./usr/bin/tool size=10 type=file sha256digest={DIGEST} time=5.25\n")
        assert isinstance(result.statement, PathEntry)
        assert result.statement.path == "./usr/bin/tool"
        assert result.statement.fields == {
            PropertyKey.SIZE: 10,
            PropertyKey.TYPE: PathType.FILE,
            PropertyKey.SHA256_DIGEST: DIGEST,
            PropertyKey.TIME: 5,
        }
        assert result.diagnostics == []

    def test_root_path(self) -> None:
        result = _parse(". type=dir\n")
        assert isinstance(result.statement, PathEntry)
        assert result.statement.path == "."

    def test_link(self) -> None:
        result = _parse("./lib/libz.so type=link link=libz.so.1\n")
        assert isinstance(result.statement, PathEntry)
        assert result.statement.fields[PropertyKey.LINK] == "libz.so.1"

    def test_unknown_key_keeps_the_rest(self) -> None:
        result = _parse("./foo foo=bar size=3\n")
        assert isinstance(result.statement, PathEntry)
        assert result.statement.fields == {PropertyKey.SIZE: 3}
        assert _kinds(result) == [DiagnosticKind.UNKNOWN_KEY]
        assert result.diagnostics[0].offset == 6

    def test_default_only_keys_are_unknown_on_paths(self) -> None:
        result = _parse("./foo uid=0\n")
        assert _kinds(result) == [DiagnosticKind.UNKNOWN_KEY]

    def test_short_digest_drops_the_field(self) -> None:
        result = _parse(f"./foo sha256digest={DIGEST[:-1]} size=1\n")
        assert isinstance(result.statement, PathEntry)
        assert result.statement.fields == {PropertyKey.SIZE: 1}
        assert _kinds(result) == [DiagnosticKind.INVALID_DIGEST_LENGTH]
        assert result.diagnostics[0].offset == 19
        assert result.diagnostics[0].length == 63

    def test_several_bad_fields(self) -> None:
        result = _parse("./foo mode=9 size=x type=pipe\n")
        assert isinstance(result.statement, PathEntry)
        assert result.statement.fields == {}
        assert _kinds(result) == [
            DiagnosticKind.INVALID_OCTAL_MODE,
            DiagnosticKind.INVALID_NUMBER,
            DiagnosticKind.INVALID_TYPE,
        ]


class TestUnrecognized:
    def test_blank_line(self) -> None:
        result = _parse("\n")
        assert result.statement is None
        assert _kinds(result) == [DiagnosticKind.UNRECOGNIZED_LINE]

    def test_unknown_prefix(self) -> None:
        result = _parse("usr/bin size=1\n")
        assert result.statement is None
        assert _kinds(result) == [DiagnosticKind.UNRECOGNIZED_LINE]
        assert (result.diagnostics[0].offset, result.diagnostics[0].length) == (0, 14)

    def test_directive_needs_exact_token(self) -> None:
        assert _parse("/settype=file\n").statement is None
        assert _parse("#comment\n").statement is None
