"""Test the lookahead predicates in isolation."""

from reglex.document import Document
from reglex.lookahead import (
    at_last_bracket_on_line,
    at_line_end,
    at_line_start,
    at_value_name,
    at_value_type,
    looks_like_guid,
    scan_backward_skipping_whitespace,
    scan_forward_skipping_whitespace,
)


class TestLineEdges:
    def test_lf(self):
        doc = Document("a\nb")
        assert at_line_end(doc, 1)
        assert not at_line_end(doc, 0)
        assert at_line_start(doc, 2)
        assert not at_line_start(doc, 1)

    def test_crlf_ends_on_lf(self):
        doc = Document("a\r\nb")
        assert not at_line_end(doc, 1)
        assert at_line_end(doc, 2)
        assert not at_line_start(doc, 2)
        assert at_line_start(doc, 3)

    def test_bare_cr(self):
        doc = Document("a\rb")
        assert at_line_end(doc, 1)
        assert at_line_start(doc, 2)

    def test_buffer_end(self):
        doc = Document("ab")
        assert at_line_end(doc, 2)
        assert at_line_start(doc, 2)


class TestScanForward:
    def test_finds_after_spaces(self):
        assert scan_forward_skipping_whitespace(Document("[  -Foo]"), 0, "-")

    def test_stops_at_other_char(self):
        assert not scan_forward_skipping_whitespace(Document("[Foo-]"), 0, "-")

    def test_stops_at_line_end(self):
        assert not scan_forward_skipping_whitespace(Document("[  \n-"), 0, "-")


class TestScanBackward:
    def test_backslash_on_previous_line(self):
        doc = Document("abc \\  \nx")
        assert scan_backward_skipping_whitespace(doc, 8, "\\")

    def test_other_char_on_previous_line(self):
        doc = Document("a\\b\nx")
        assert not scan_backward_skipping_whitespace(doc, 4, "\\")

    def test_start_of_buffer(self):
        assert not scan_backward_skipping_whitespace(Document("x"), 0, "\\")


class TestValueName:
    def test_followed_by_equals(self):
        assert at_value_name(Document('"a" = 1'), 0)

    def test_no_equals(self):
        assert not at_value_name(Document('"a" 1'), 0)

    def test_escaped_quote_skipped(self):
        assert not at_value_name(Document('"a\\"='), 0)
        assert at_value_name(Document('"a\\""='), 0)

    def test_unterminated(self):
        assert not at_value_name(Document('"abc\n"='), 0)


class TestLastBracket:
    def test_more_brackets_ahead(self):
        assert not at_last_bracket_on_line(Document("[a]b]"), 2)

    def test_last(self):
        assert at_last_bracket_on_line(Document("[a]b]"), 4)

    def test_next_line_not_considered(self):
        assert at_last_bracket_on_line(Document("[a]\n]"), 2)


class TestGuid:
    def test_canonical(self):
        assert looks_like_guid(Document("{01234567-89AB-CDEF-0123-456789ABCDEF}"), 0)

    def test_lowercase(self):
        assert looks_like_guid(Document("{01234567-89ab-cdef-0123-456789abcdef}"), 0)

    def test_any_hyphen_layout(self):
        assert looks_like_guid(Document("{" + "0" * 36 + "}"), 0)
        assert looks_like_guid(Document("{" + "-" * 36 + "}"), 0)

    def test_too_short(self):
        assert not looks_like_guid(Document("{0123}"), 0)

    def test_too_long(self):
        assert not looks_like_guid(Document("{" + "0" * 37 + "}"), 0)

    def test_non_hex(self):
        assert not looks_like_guid(Document("{0123456G-89AB-CDEF-0123-456789ABCDEF}"), 0)

    def test_missing_close(self):
        assert not looks_like_guid(Document("{01234567-89AB-CDEF-0123-456789ABCDEF"), 0)


class TestValueType:
    def test_colon_close(self):
        assert at_value_type(Document("dword:1"), 0)

    def test_colon_too_far(self):
        assert not at_value_type(Document("abcdefghijkl:"), 0)

    def test_end_of_buffer(self):
        assert not at_value_type(Document("dw"), 0)
