"""In-memory text buffer with per-character styles and per-line fold levels."""

from __future__ import annotations

import codecs
from bisect import bisect_right
from pathlib import Path

from reglex.tokens import FOLD_LEVEL_BASE, Position, Span, Style, Token


class Document:
    """Random-access view of a .reg source plus the style and fold storage.

    Lines end after ``\\n`` or after a ``\\r`` that is not followed by
    ``\\n``, so CR, LF and CRLF files all split the same way. A trailing
    line terminator opens a final empty line.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._styles: list[int] = [Style.DEFAULT] * len(text)
        self._line_starts = _compute_line_starts(text)
        self._levels: list[int] = [FOLD_LEVEL_BASE] * len(self._line_starts)
        self._segment_start = 0
        self.level_writes: list[int] = []

    @property
    def text(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    # ------------------------------------------------------------------
    # Characters and lines
    # ------------------------------------------------------------------

    def char_at(self, pos: int, default: str = "\0") -> str:
        if 0 <= pos < len(self._text):
            return self._text[pos]
        return default

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def line_from_position(self, pos: int) -> int:
        line = bisect_right(self._line_starts, pos) - 1
        return min(max(line, 0), len(self._line_starts) - 1)

    def line_start(self, line: int) -> int:
        if line < 0:
            return 0
        if line >= len(self._line_starts):
            return len(self._text)
        return self._line_starts[line]

    def position(self, offset: int) -> Position:
        line = self.line_from_position(offset)
        return Position(line + 1, offset - self._line_starts[line] + 1, offset)

    # ------------------------------------------------------------------
    # Styles
    # ------------------------------------------------------------------

    def style_at(self, pos: int) -> Style:
        if 0 <= pos < len(self._styles):
            return Style(self._styles[pos])
        return Style.DEFAULT

    def start_segment(self, pos: int) -> None:
        self._segment_start = pos

    def colour_to(self, pos: int, style: int) -> None:
        """Style [segment start, pos] and start the next segment after pos."""
        end = min(pos, len(self._styles) - 1)
        for i in range(self._segment_start, end + 1):
            self._styles[i] = style
        self._segment_start = pos + 1

    def tokens(self) -> list[Token]:
        """Split the text into runs of equal style."""
        result: list[Token] = []
        start = 0
        n = len(self._text)
        while start < n:
            style = self._styles[start]
            end = start + 1
            while end < n and self._styles[end] == style:
                end += 1
            span = Span(self.position(start), self.position(end))
            result.append(Token(Style(style), self._text[start:end], span))
            start = end
        return result

    # ------------------------------------------------------------------
    # Fold levels
    # ------------------------------------------------------------------

    def level_at(self, line: int) -> int:
        if 0 <= line < len(self._levels):
            return self._levels[line]
        return FOLD_LEVEL_BASE

    def set_level(self, line: int, level: int) -> None:
        if 0 <= line < len(self._levels):
            self._levels[line] = level
            self.level_writes.append(line)

    @property
    def levels(self) -> list[int]:
        return list(self._levels)


def _compute_line_starts(text: str) -> list[int]:
    starts = [0]
    n = len(text)
    for i, ch in enumerate(text):
        if ch == "\n" or (ch == "\r" and (i + 1 >= n or text[i + 1] != "\n")):
            starts.append(i + 1)
    return starts


def read_reg_file(path: Path) -> str:
    """Read a .reg file; regedit exports UTF-16 with a BOM, older files are 8-bit."""
    data = path.read_bytes()
    if data.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        return data.decode("utf-16")
    return data.decode("utf-8-sig")
