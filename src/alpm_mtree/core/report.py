"""
Diagnostic reports.

Renders ``(offset, length, message)`` triples against the source buffer.
Nothing here looks at parser internals: offsets are byte positions into the
UTF-8 encoding of the source, and that is all a report needs.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from rich.console import Console
from rich.style import Style
from rich.text import Text

from .errors import ErrorContext

STYLES = {
    "location": Style(bold=True),
    "error": Style(color="red", bold=True),
    "gutter": Style(color="bright_black"),
    "span": Style(color="red", underline=True),
    "marker": Style(color="red", bold=True),
}


def locate(source: str, offset: int) -> tuple[int, int]:
    """
    Convert a byte offset into a 1-indexed ``(line, column)``.

    Columns count characters, not bytes. Offsets past the end clamp to the
    end of the buffer.
    """
    data = source.encode("utf-8")
    offset = min(max(offset, 0), len(data))
    prefix = data[:offset]
    line = prefix.count(b"\n") + 1
    line_start = prefix.rfind(b"\n") + 1
    column = len(data[line_start:offset].decode("utf-8", errors="replace")) + 1
    return line, column


def build_context(
    source: str,
    offset: int,
    length: int,
    *,
    file: Path | str = "<string>",
    context: int = 1,
) -> ErrorContext:
    """
    Build an ErrorContext with a snippet around a byte span.

    Args:
        source: Full source text
        offset: Byte offset of the span
        length: Byte length of the span
        file: Display name for the location
        context: Number of lines to show before and after

    Returns:
        ErrorContext underlining the span on its first line
    """
    line, column = locate(source, offset)
    lines = source.split("\n")
    first = max(1, line - context)
    last = min(len(lines), line + context)
    snippet = "\n".join(text.rstrip("\r") for text in lines[first - 1 : last])

    end_line, end_column = locate(source, offset + length)
    if end_line == line:
        width = end_column - column
    else:
        width = len(lines[line - 1].rstrip("\r")) - column + 1

    return ErrorContext(
        file=file,
        line=line,
        column=column,
        snippet=snippet,
        first_line=first,
        width=max(1, width),
    )


def format_diagnostic(
    source: str,
    offset: int,
    length: int,
    message: str,
    *,
    file: Path | str = "<string>",
    context: int = 1,
) -> str:
    """Plain-text report: ``file:line:col: error: message`` plus snippet."""
    ctx = build_context(source, offset, length, file=file, context=context)
    location = f"{ctx.file}:{ctx.line}:{ctx.column}"
    snippet = ctx.format().split("\n", 1)[1]
    return f"{location}: error: {message}\n{snippet}"


def _render_rich(
    source: str,
    offset: int,
    length: int,
    message: str,
    *,
    file: Path | str,
    context: int,
) -> Text:
    ctx = build_context(source, offset, length, file=file, context=context)
    text = Text()
    text.append(f"{ctx.file}:{ctx.line}:{ctx.column}: ", style=STYLES["location"])
    text.append("error: ", style=STYLES["error"])
    text.append(message + "\n")

    for i, line in enumerate((ctx.snippet or "").split("\n")):
        line_num = (ctx.first_line or ctx.line) + i
        gutter = f"{line_num:4d} | "
        text.append(gutter, style=STYLES["gutter"])
        if line_num == ctx.line:
            start = ctx.column - 1
            text.append(line[:start])
            text.append(line[start : start + ctx.width], style=STYLES["span"])
            text.append(line[start + ctx.width :] + "\n")
            text.append(" " * (len(gutter) + start))
            text.append("^" * ctx.width + "\n", style=STYLES["marker"])
        else:
            text.append(line + "\n")
    return text


def print_report(
    source: str,
    triples: Iterable[tuple[int, int, str]],
    *,
    file: Path | str = "<string>",
    context: int = 1,
    limit: int = 0,
    console: Console | None = None,
) -> int:
    """
    Print one report per diagnostic triple.

    Args:
        source: Full source text
        triples: ``(offset, length, message)`` tuples
        file: Display name for locations
        context: Lines of context around each span
        limit: Stop after this many reports (0 means no limit)
        console: Target console (stderr by default)

    Returns:
        Number of reports printed
    """
    console = console or Console(stderr=True)
    printed = 0
    for offset, length, message in triples:
        if limit and printed >= limit:
            break
        console.print(
            _render_rich(source, offset, length, message, file=file, context=context),
            end="",
            highlight=False,
        )
        printed += 1
    return printed
