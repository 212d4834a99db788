"""Lookahead predicates used to disambiguate context during a scan.

All of these are pure reads over a character accessor; none of them move
the scan position. Out-of-range reads return ``"\\0"``, which every
predicate treats as the end of the buffer.
"""

from __future__ import annotations

from typing import Protocol

from reglex.tokens import is_byte_value, is_hex_digit, is_space_char

__all__ = [
    "CharAccessor",
    "at_last_bracket_on_line",
    "at_line_end",
    "at_line_start",
    "at_value_name",
    "at_value_type",
    "is_byte_value",
    "looks_like_guid",
    "scan_backward_skipping_whitespace",
    "scan_forward_skipping_whitespace",
]


class CharAccessor(Protocol):
    def char_at(self, pos: int, default: str = "\0") -> str: ...


# Hex-or-hyphen run lengths of 01234567-89AB-CDEF-0123-456789ABCDEF,
# each group after the first counting its leading hyphen.
_GUID_GROUPS = (8, 5, 5, 5, 13)

_VALUE_TYPE_REACH = 10


def at_line_end(doc: CharAccessor, pos: int) -> bool:
    curr = doc.char_at(pos)
    nxt = doc.char_at(pos + 1)
    return curr == "\0" or curr == "\n" or (curr == "\r" and nxt != "\n")


def at_line_start(doc: CharAccessor, pos: int) -> bool:
    prev = doc.char_at(pos - 1)
    curr = doc.char_at(pos)
    return curr == "\0" or prev == "\n" or (prev == "\r" and curr != "\n")


def scan_forward_skipping_whitespace(doc: CharAccessor, pos: int, target: str) -> bool:
    """Return True if the next non-blank character after pos on this line is target."""
    while not at_line_end(doc, pos + 1):
        pos += 1
        curr = doc.char_at(pos)
        if curr == target:
            return True
        if not is_space_char(curr):
            return False
    return False


def scan_backward_skipping_whitespace(doc: CharAccessor, pos: int, target: str) -> bool:
    """Return True if the previous non-blank character before pos is target.

    Called at a line start, this crosses the line break behind pos and so
    answers "does the previous line end in target".
    """
    while not at_line_start(doc, pos - 1):
        pos -= 1
        curr = doc.char_at(pos)
        if curr == target:
            return True
        if not is_space_char(curr):
            return False
    return False


def at_value_name(doc: CharAccessor, pos: int) -> bool:
    """From an opening quote, find the closing one and check an ``=`` follows it."""
    escaped = False
    while not at_line_end(doc, pos + 1):
        pos += 1
        curr = doc.char_at(pos)
        if escaped:
            escaped = False
            continue
        escaped = curr == "\\"
        if curr == '"':
            return scan_forward_skipping_whitespace(doc, pos, "=")
        if curr == "\0":
            return False
    return False


def at_last_bracket_on_line(doc: CharAccessor, pos: int) -> bool:
    """Return False if another ``]`` follows pos on the same physical line."""
    while not at_line_end(doc, pos + 1):
        pos += 1
        if doc.char_at(pos) == "]":
            return False
    return True


def looks_like_guid(doc: CharAccessor, pos: int) -> bool:
    """Return True if the ``{`` at pos opens a GUID literal.

    Only group lengths are checked: a hyphen is accepted anywhere a hex
    digit is, so ``{0123-567...}`` shapes pass as long as the counts line up.
    """
    offset = 1
    for count in _GUID_GROUPS:
        for _ in range(count):
            ch = doc.char_at(pos + offset, " ")
            if not (is_hex_digit(ch) or ch == "-"):
                return False
            offset += 1
    return doc.char_at(pos + offset, " ") == "}"


def at_value_type(doc: CharAccessor, pos: int) -> bool:
    """Return True if a ``:`` appears within the next few characters."""
    for i in range(1, _VALUE_TYPE_REACH + 1):
        curr = doc.char_at(pos + i)
        if curr == ":":
            return True
        if curr == "\0":
            return False
    return False
