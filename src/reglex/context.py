"""Forward scan cursor that commits styles to a Document as it advances."""

from __future__ import annotations

from reglex.document import Document
from reglex.tokens import Style


class StyleContext:
    """Walk [start_pos, start_pos + length) one character at a time.

    ``state`` is the style of the run being built. ``set_state`` commits
    everything before the current position in the old style and starts a
    new run at the current character.
    """

    def __init__(self, start_pos: int, length: int, init_style: int, doc: Document) -> None:
        self._doc = doc
        self._length_document = len(doc)
        self.current_pos = start_pos
        self.end_pos = start_pos + length
        # Let the scan reach the end of the document so the last char is committed.
        if self.end_pos == self._length_document:
            self.end_pos += 1
        self.state = Style(init_style)

        doc.start_segment(start_pos)
        line = doc.line_from_position(start_pos)
        self.at_line_start = doc.line_start(line) == start_pos
        self.ch_prev = "\0"
        self.ch = doc.char_at(start_pos)
        self.ch_next = doc.char_at(start_pos + 1)
        self.at_line_end = self._compute_at_line_end()

    def _compute_at_line_end(self) -> bool:
        return (
            (self.ch == "\r" and self.ch_next != "\n")
            or self.ch == "\n"
            or self.current_pos >= self.end_pos
        )

    def more(self) -> bool:
        return self.current_pos < self.end_pos

    def forward(self) -> None:
        if self.current_pos < self.end_pos:
            self.at_line_start = self.at_line_end
            self.ch_prev = self.ch
            self.current_pos += 1
            self.ch = self.ch_next
            self.ch_next = self._doc.char_at(self.current_pos + 1)
            self.at_line_end = self._compute_at_line_end()
        else:
            self.at_line_start = False
            self.ch_prev = " "
            self.ch = " "
            self.ch_next = " "
            self.at_line_end = True

    def set_state(self, state: int) -> None:
        back = 2 if self.current_pos > self._length_document else 1
        self._doc.colour_to(self.current_pos - back, self.state)
        self.state = Style(state)

    def forward_set_state(self, state: int) -> None:
        self.forward()
        self.set_state(state)

    def complete(self) -> None:
        self._doc.colour_to(self.current_pos - 1, self.state)
