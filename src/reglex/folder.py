"""Fold level computation over an already-styled Document."""

from __future__ import annotations

import logging

from reglex.document import Document
from reglex.options import RegistryOptions
from reglex.tokens import (
    FOLD_LEVEL_BASE,
    FoldFlag,
    is_key_path_state,
    is_space_char,
    level_number,
)

logger = logging.getLogger(__name__)


def _level_after(doc: Document, line: int) -> int:
    """Level a line gets from the line above it: one deeper after a header, else the same."""
    if line <= 0:
        return FOLD_LEVEL_BASE
    prev_level = doc.level_at(line - 1)
    if prev_level & FoldFlag.HEADER:
        return FOLD_LEVEL_BASE + 1
    return prev_level


def fold(
    start_pos: int,
    length: int,
    init_style: int,
    doc: Document,
    options: RegistryOptions,
) -> None:
    """Assign fold levels to the lines covering [start_pos, start_pos + length).

    Every key path line is a header at the base level; the lines under it
    sit one level deeper until the next key path. Must run after lexing.
    """
    if not options.fold:
        logger.debug("folding disabled, skipping fold of %d chars at %d", length, start_pos)
        return

    curr_line = doc.line_from_position(start_pos)
    visible_chars = 0
    at_key_path = False
    end_pos = start_pos + length
    for i in range(start_pos, end_pos):
        if is_key_path_state(doc.style_at(i)):
            at_key_path = True
        curr = doc.char_at(i)
        nxt = doc.char_at(i + 1)
        if not is_space_char(curr):
            visible_chars += 1
        at_eol = (curr == "\r" and nxt != "\n") or curr == "\n"
        if at_eol or i == end_pos - 1:
            level = _level_after(doc, curr_line)
            if not visible_chars and options.fold_compact:
                level |= FoldFlag.WHITE
            elif at_key_path:
                level = FOLD_LEVEL_BASE | FoldFlag.HEADER
            if level != doc.level_at(curr_line):
                doc.set_level(curr_line, level)
            curr_line += 1
            visible_chars = 0
            at_key_path = False

    # Carry the level onto the line after the span so the last line folds too.
    level = _level_after(doc, curr_line)
    if level != doc.level_at(curr_line):
        doc.set_level(curr_line, level)


def last_child(doc: Document, line: int) -> int:
    """Return the last line of the block opened at line (line itself if none)."""
    level = level_number(doc.level_at(line))
    max_line = doc.line_count - 1
    last = line
    while last < max_line:
        level_try = doc.level_at(last + 1)
        if not (level_try & FoldFlag.WHITE or level < level_number(level_try)):
            break
        last += 1
    if last > line:
        # Trailing blank lines in front of a shallower line belong to the parent.
        if level > level_number(doc.level_at(last + 1)) and doc.level_at(last) & FoldFlag.WHITE:
            last -= 1
    return last


def fold_ranges(doc: Document) -> list[tuple[int, int]]:
    """Return (header line, last line) for every header whose block is non-empty."""
    ranges: list[tuple[int, int]] = []
    for line in range(doc.line_count):
        if doc.level_at(line) & FoldFlag.HEADER:
            end = last_child(doc, line)
            if end > line:
                ranges.append((line, end))
    return ranges
