"""Style tags, fold level encoding, token data structures, and character classes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag


class Style(IntEnum):
    DEFAULT = 0
    COMMENT = 1  # ; to end of line
    VALUENAME = 2  # "name" followed by =
    STRING = 3  # any other quoted string
    HEXDIGIT = 4  # single hex digit of a value payload
    VALUETYPE = 5  # dword, hex(2), ... before :
    ADDEDKEY = 6  # [HKEY_...]
    DELETEDKEY = 7  # [-HKEY_...]
    ESCAPED = 8  # \x inside a string
    KEYPATH_GUID = 9  # {GUID} inside a key path
    STRING_GUID = 10  # {GUID} inside a string
    PARAMETER = 11  # %1 .. %9, %*
    OPERATOR = 12  # - , . = : \ @ ( )


def is_string_state(style: int) -> bool:
    return style in (Style.VALUENAME, Style.STRING)


def is_key_path_state(style: int) -> bool:
    return style in (Style.ADDEDKEY, Style.DELETEDKEY)


# Fold levels: a number in the low 12 bits plus flags.
FOLD_LEVEL_BASE = 0x400
FOLD_LEVEL_NUMBER_MASK = 0x0FFF


class FoldFlag(IntFlag):
    WHITE = 0x1000  # blank line, absorbed into the following block
    HEADER = 0x2000  # line opens a foldable block


def level_number(level: int) -> int:
    """Strip the flag bits from a fold level."""
    return level & FOLD_LEVEL_NUMBER_MASK


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position (end is exclusive)."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A maximal run of characters sharing one style."""

    style: Style
    text: str
    span: Span


OPERATOR_CHARS = frozenset("-,.=:\\@()")


def is_space_char(ch: str) -> bool:
    """Return True for space and the C0 controls \\t \\n \\v \\f \\r."""
    return ch == " " or "\t" <= ch <= "\r"


def is_hex_digit(ch: str) -> bool:
    """Return True if ch is a hexadecimal digit."""
    return ch != "" and ch in "0123456789abcdefABCDEF"


def is_ascii_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def is_ascii_alpha(ch: str) -> bool:
    return "a" <= ch <= "z" or "A" <= ch <= "Z"


def is_byte_value(value: int) -> bool:
    """Return True if value fits in an unsigned byte."""
    return 0 <= value < 256
