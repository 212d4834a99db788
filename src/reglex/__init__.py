"""Syntax classifier and folder for Windows Registry (.reg) files."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from reglex.tokens import Token

__version__ = "0.1.0"


def tokenize(source: str) -> list[Token]:
    """Lex source and return its runs of equal style."""
    from reglex.lexer import tokenize as _tokenize

    return _tokenize(source)


def fold_levels(source: str, compact: bool = False) -> list[int]:
    """Lex and fold source, returning one fold level per line."""
    from reglex.api import RegistryLexer
    from reglex.document import Document
    from reglex.options import RegistryOptions

    doc = Document(source)
    RegistryLexer(RegistryOptions(fold=True, fold_compact=compact)).colourise(doc)
    return doc.levels
