"""--debug token and fold level dumps to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from reglex.document import Document
from reglex.tokens import FoldFlag, Token, level_number


def dump_tokens(tokens: list[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one line per token: position, style name and text."""
    for tok in tokens:
        pos = tok.span.start
        file.write(f"{pos.line}:{pos.column} {tok.style.name} {tok.text!r}\n")


def dump_levels(doc: Document, *, file: TextIO = sys.stderr) -> None:
    """Print one line per document line: level number above base and flags."""
    for line, level in enumerate(doc.levels):
        flags = _flag_names(level)
        suffix = f" {flags}" if flags else ""
        file.write(f"{line + 1}: {level_number(level):#x}{suffix}\n")


def _flag_names(level: int) -> str:
    names = []
    if level & FoldFlag.HEADER:
        names.append("header")
    if level & FoldFlag.WHITE:
        names.append("white")
    return ",".join(names)
