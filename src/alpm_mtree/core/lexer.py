"""
Lexical segmenter for .MTREE text.

Splits a buffer into logical lines and each line into whitespace-separated
fields, keeping byte offsets for diagnostics. Owns no semantics and never
fails: whatever it produces is handed to the grammar unchanged.

A line whose last field is a lone backslash continues on the next physical
line. A backslash glued to a field is part of that field. A continuation that
runs into end-of-input yields a line with ``terminated=False``.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import NamedTuple

_FIELD = re.compile(r"[^ \t\r\n]+")
_BLANK = " \t"


@dataclass(frozen=True)
class Field:
    """
    A single whitespace-delimited field.

    Attributes:
        text: Field content
        offset: Byte offset of the first character
        length: Length in bytes
    """

    text: str
    offset: int
    length: int

    def __repr__(self) -> str:
        return f"Field({self.text!r}, {self.offset}+{self.length})"

    def partition(self) -> tuple[str, str | None]:
        """Split ``key=value`` on the first ``=``; value is None without one."""
        key, sep, value = self.text.partition("=")
        return key, (value if sep else None)

    def value_span(self) -> tuple[int, int]:
        """Byte span of the value part, or of the whole field without ``=``."""
        key, value = self.partition()
        if value is None:
            return self.offset, self.length
        key_bytes = len(key.encode("utf-8")) + 1
        return self.offset + key_bytes, self.length - key_bytes


class Segment(NamedTuple):
    """Character range of line content plus the byte offset of its start."""

    start: int
    end: int
    byte_start: int


@dataclass
class Line:
    """
    A logical line: one or more physical lines joined by continuations.

    Attributes:
        source: The buffer this line belongs to
        number: 1-indexed number of the first physical line
        segments: Content ranges, continuation markers excluded
        terminated: False if a continuation reached end-of-input
    """

    source: SourceText
    number: int
    segments: list[Segment] = field(default_factory=list)
    terminated: bool = True

    def fields(self) -> Iterator[Field]:
        """Lazily yield the fields of this line, in order."""
        text = self.source.text
        width = self.source.width
        for start, end, byte_start in self.segments:
            cursor, cursor_byte = start, byte_start
            for match in _FIELD.finditer(text, start, end):
                cursor_byte += width(text[cursor : match.start()])
                length = width(match.group())
                yield Field(match.group(), cursor_byte, length)
                cursor, cursor_byte = match.end(), cursor_byte + length

    @property
    def text(self) -> str:
        return " ".join(self.source.text[start:end] for start, end, _ in self.segments)

    @property
    def offset(self) -> int:
        return self.segments[0].byte_start

    @property
    def length(self) -> int:
        last = self.segments[-1]
        end = last.byte_start + self.source.width(self.source.text[last.start : last.end])
        return end - self.offset


class SourceText:
    """
    An in-memory manifest buffer.

    Bytes are decoded as UTF-8 with replacement characters. Positions handed
    out to callers are byte offsets into the UTF-8 encoding of :attr:`text`,
    computed one physical line at a time.
    """

    def __init__(self, text: str | bytes):
        if isinstance(text, bytes):
            text = text.decode("utf-8", errors="replace")
        self.text = text
        self._ascii = text.isascii()

    def __len__(self) -> int:
        return len(self.text)

    def width(self, chunk: str) -> int:
        """Length of ``chunk`` in UTF-8 bytes."""
        if self._ascii:
            return len(chunk)
        return len(chunk.encode("utf-8"))

    def lines(self) -> Iterator[Line]:
        """
        Lazily yield logical lines.

        Every call starts a fresh scan, so the sequence can be restarted.
        Handles both ``\\n`` and ``\\r\\n`` endings.
        """
        text = self.text
        size = len(text)
        pos = 0
        byte_pos = 0
        number = 1

        while pos < size:
            line = Line(source=self, number=number)

            while True:
                newline = text.find("\n", pos)
                physical_end = size if newline == -1 else newline
                next_pos = size if newline == -1 else newline + 1
                next_byte_pos = byte_pos + self.width(text[pos:next_pos])
                number += 1

                content_end = physical_end
                if content_end > pos and text[content_end - 1] == "\r":
                    content_end -= 1

                stripped_end = content_end
                while stripped_end > pos and text[stripped_end - 1] in _BLANK:
                    stripped_end -= 1

                marker = stripped_end - 1
                if (
                    marker >= pos
                    and text[marker] == "\\"
                    and (marker == pos or text[marker - 1] in _BLANK)
                ):
                    line.segments.append(Segment(pos, marker, byte_pos))
                    pos, byte_pos = next_pos, next_byte_pos
                    if pos >= size:
                        line.terminated = False
                        yield line
                        return
                    continue

                line.segments.append(Segment(pos, content_end, byte_pos))
                pos, byte_pos = next_pos, next_byte_pos
                break

            yield line


def segment(text: str | bytes) -> Iterator[Line]:
    """
    Convenience function to split text into logical lines.

    Args:
        text: Manifest text (bytes are decoded lossily)

    Returns:
        Lazy iterator over lines
    """
    return SourceText(text).lines()
