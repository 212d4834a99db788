"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from reglex.api import RegistryLexer
from reglex.document import Document
from reglex.lexer import tokenize
from reglex.options import RegistryOptions
from reglex.tokens import Style


@pytest.fixture
def lex():
    """Return a helper that lexes source and returns (style, text) runs."""

    def _lex(source: str) -> list[tuple[Style, str]]:
        return [(t.style, t.text) for t in tokenize(source)]

    return _lex


@pytest.fixture
def styled():
    """Return a helper that lexes and folds source, returning the Document."""

    def _styled(source: str, fold: bool = True, compact: bool = False) -> Document:
        doc = Document(source)
        RegistryLexer(RegistryOptions(fold=fold, fold_compact=compact)).colourise(doc)
        return doc

    return _styled

