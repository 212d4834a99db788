"""Registry file lexer: assigns a Style to every character of a span."""

from __future__ import annotations

import logging

from reglex.context import StyleContext
from reglex.document import Document
from reglex.lookahead import (
    at_last_bracket_on_line,
    at_value_name,
    at_value_type,
    is_byte_value,
    looks_like_guid,
    scan_backward_skipping_whitespace,
    scan_forward_skipping_whitespace,
)
from reglex.tokens import (
    OPERATOR_CHARS,
    Style,
    Token,
    is_ascii_alpha,
    is_ascii_digit,
    is_hex_digit,
    is_key_path_state,
    is_string_state,
)

logger = logging.getLogger(__name__)


class Lexer:
    """One scan over [start_pos, start_pos + length) of a Document.

    All scan state lives on the instance and is discarded with it; the only
    context carried in from earlier scans is ``init_style`` and whatever the
    lookahead predicates read back out of the document.
    """

    def __init__(self, start_pos: int, length: int, init_style: int, doc: Document) -> None:
        self._doc = doc
        self._ctx = StyleContext(start_pos, length, init_style, doc)
        self._highlight = True
        self._after_equal_sign = False
        self._last_non_default = Style.DEFAULT
        self._before_escape: Style | None = None
        self._before_guid: Style | None = None

    def run(self) -> None:
        ctx = self._ctx
        while ctx.more() and ctx.ch != "\0":
            if ctx.at_line_start:
                self._start_line()

            state = ctx.state
            if state == Style.COMMENT:
                if ctx.at_line_end:
                    ctx.set_state(Style.DEFAULT)
            elif is_string_state(state):
                self._lex_string()
            elif state == Style.PARAMETER:
                self._lex_parameter()
            elif state == Style.VALUETYPE:
                if ctx.ch == ":":
                    ctx.set_state(Style.DEFAULT)
                    self._after_equal_sign = False
            elif state in (Style.HEXDIGIT, Style.OPERATOR):
                ctx.set_state(Style.DEFAULT)
            elif is_key_path_state(state):
                self._lex_key_path()
            elif state == Style.ESCAPED:
                self._lex_escaped()
            elif state in (Style.STRING_GUID, Style.KEYPATH_GUID):
                self._lex_guid()

            if ctx.state == Style.DEFAULT:
                self._lex_default()
            self._forward_set_state(None)
        ctx.complete()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _forward_set_state(self, new_state: Style | None) -> None:
        """Advance, remembering the style being left if it is not DEFAULT."""
        ctx = self._ctx
        if ctx.state != Style.DEFAULT:
            self._last_non_default = ctx.state
        if new_state is None:
            ctx.forward()
        else:
            ctx.forward_set_state(new_state)

    def _start_line(self) -> None:
        ctx = self._ctx
        continued = scan_backward_skipping_whitespace(self._doc, ctx.current_pos, "\\")
        self._highlight = continued
        if not continued:
            ctx.set_state(Style.DEFAULT)
            self._last_non_default = Style.DEFAULT

    # ------------------------------------------------------------------
    # Per-state transitions
    # ------------------------------------------------------------------

    def _lex_string(self) -> None:
        ctx = self._ctx
        if ctx.ch == '"':
            self._forward_set_state(Style.DEFAULT)
        elif ctx.ch == "\\":
            self._before_escape = ctx.state
            ctx.set_state(Style.ESCAPED)
            ctx.forward()
        elif ctx.ch == "{":
            if looks_like_guid(self._doc, ctx.current_pos):
                self._before_guid = ctx.state
                ctx.set_state(Style.STRING_GUID)
        if (
            ctx.state == Style.STRING
            and ctx.ch == "%"
            and (is_ascii_digit(ctx.ch_next) or ctx.ch_next == "*")
        ):
            ctx.set_state(Style.PARAMETER)

    def _lex_parameter(self) -> None:
        self._forward_set_state(Style.STRING)
        if self._ctx.ch == '"':
            self._forward_set_state(Style.DEFAULT)

    def _lex_key_path(self) -> None:
        ctx = self._ctx
        if ctx.ch == "]" and at_last_bracket_on_line(self._doc, ctx.current_pos):
            self._forward_set_state(Style.DEFAULT)
        elif ctx.ch == "{":
            if looks_like_guid(self._doc, ctx.current_pos):
                self._before_guid = ctx.state
                ctx.set_state(Style.KEYPATH_GUID)

    def _lex_escaped(self) -> None:
        ctx = self._ctx
        if ctx.ch == '"':
            ctx.set_state(_restore(self._before_escape))
            self._forward_set_state(Style.DEFAULT)
        elif ctx.ch == "\\":
            ctx.forward()
        else:
            ctx.set_state(_restore(self._before_escape))
            self._before_escape = None

    def _lex_guid(self) -> None:
        ctx = self._ctx
        if ctx.ch == "}":
            self._forward_set_state(_restore(self._before_guid))
            self._before_guid = None
        # Only reachable once "}" has handed the run back to its outer state.
        if ctx.ch == '"' and is_string_state(ctx.state):
            self._forward_set_state(Style.DEFAULT)
        elif ctx.ch == "]" and is_key_path_state(ctx.state):
            if at_last_bracket_on_line(self._doc, ctx.current_pos):
                self._forward_set_state(Style.DEFAULT)
            else:
                self._forward_set_state(_restore(self._before_guid))
        elif ctx.ch == "\\" and is_string_state(ctx.state):
            self._before_escape = ctx.state
            ctx.set_state(Style.ESCAPED)
            ctx.forward()

    # ------------------------------------------------------------------
    # DEFAULT: decide whether a new run starts here
    # ------------------------------------------------------------------

    def _lex_default(self) -> None:
        ctx = self._ctx
        ch = ctx.ch
        pos = ctx.current_pos

        if ch == ";":
            ctx.set_state(Style.COMMENT)
        elif ch == '"':
            if at_value_name(self._doc, pos):
                ctx.set_state(Style.VALUENAME)
            else:
                ctx.set_state(Style.STRING)
        elif ch == "[":
            if scan_forward_skipping_whitespace(self._doc, pos, "-"):
                ctx.set_state(Style.DELETEDKEY)
            else:
                ctx.set_state(Style.ADDEDKEY)
        elif ch == "=":
            self._after_equal_sign = True
            self._highlight = True
        elif self._after_equal_sign:
            word_start = is_ascii_alpha(ch) and not is_ascii_alpha(ctx.ch_prev)
            if word_start and at_value_type(self._doc, pos):
                ctx.set_state(Style.VALUETYPE)
        elif is_byte_value(ord(ch)) and is_hex_digit(ch) and self._highlight:
            ctx.set_state(Style.HEXDIGIT)

        if ch == "@":
            self._highlight = True
        if ch in OPERATOR_CHARS and self._highlight:
            ctx.set_state(Style.OPERATOR)
        # Line terminators carry the style of the line they end.
        if ch in ("\r", "\n"):
            ctx.set_state(self._last_non_default)


def _restore(saved: Style | None) -> Style:
    return Style.DEFAULT if saved is None else saved


def lex(start_pos: int, length: int, init_style: int, doc: Document) -> None:
    """Style doc[start_pos:start_pos + length], resuming from init_style."""
    logger.debug("lex start=%d length=%d init_style=%d", start_pos, length, init_style)
    Lexer(start_pos, length, init_style, doc).run()


def tokenize(source: str) -> list[Token]:
    """Convenience function: lex a whole source text and return its style runs."""
    doc = Document(source)
    lex(0, len(doc), Style.DEFAULT, doc)
    return doc.tokens()
