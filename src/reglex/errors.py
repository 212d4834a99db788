"""Error types.

Lexing and folding never fail: every input has a classification. The only
errors are configuration mistakes made by whoever drives the lexer.
"""

from __future__ import annotations


class ConfigError(Exception):
    """Raised for an unknown property or a property value of the wrong kind."""

    def __init__(self, message: str, source: str = "<config>") -> None:
        self.message = message
        self.source = source
        super().__init__(self.format())

    def format(self) -> str:
        gutter = "  "
        return f"error: {self.message}\n{gutter}--> {self.source}"
