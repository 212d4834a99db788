"""The lexer object a host editor instantiates and drives."""

from __future__ import annotations

from reglex.document import Document
from reglex.folder import fold
from reglex.lexer import lex
from reglex.options import PropertyType, RegistryOptions, build_option_set
from reglex.tokens import Style

LEXER_NAME = "registry"
LEXER_ID = 115


class RegistryLexer:
    """Registry lexer instance: its own option values plus the Lex/Fold entry points."""

    name = LEXER_NAME
    identifier = LEXER_ID

    def __init__(self, options: RegistryOptions | None = None) -> None:
        self.options = options if options is not None else RegistryOptions()
        self._option_set = build_option_set()

    # Properties

    def property_names(self) -> str:
        return self._option_set.property_names()

    def property_type(self, name: str) -> PropertyType | None:
        return self._option_set.property_type(name)

    def describe_property(self, name: str) -> str | None:
        return self._option_set.describe_property(name)

    def property_set(self, name: str, value: str | bool) -> bool:
        return self._option_set.property_set(self.options, name, value)

    def property_get(self, name: str) -> str | None:
        return self._option_set.property_get(name)

    # Entry points

    def lex(self, start_pos: int, length: int, init_style: int, doc: Document) -> None:
        lex(start_pos, length, init_style, doc)

    def fold(self, start_pos: int, length: int, init_style: int, doc: Document) -> None:
        fold(start_pos, length, init_style, doc, self.options)

    def colourise(self, doc: Document, start: int = 0, end: int | None = None) -> None:
        """Restyle and refold [start, end), widening start back to its line start."""
        if end is None:
            end = len(doc)
        start = doc.line_start(doc.line_from_position(start))
        init_style = doc.style_at(start - 1) if start > 0 else Style.DEFAULT
        self.lex(start, end - start, init_style, doc)
        self.fold(start, end - start, init_style, doc)


def create_lexer() -> RegistryLexer:
    return RegistryLexer()
