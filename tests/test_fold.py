"""Test fold level assignment and fold range queries."""

from reglex.document import Document
from reglex.folder import fold, fold_ranges, last_child
from reglex.lexer import lex as lex_span
from reglex.options import RegistryOptions
from reglex.tokens import FOLD_LEVEL_BASE, FoldFlag, Style

HEADER = FOLD_LEVEL_BASE | FoldFlag.HEADER
INNER = FOLD_LEVEL_BASE + 1

TWO_KEYS = '[A]\n"x"=dword:1\n[B]\n"y"="z"\n'


class TestLevels:
    def test_two_key_blocks(self, styled):
        doc = styled(TWO_KEYS)
        assert doc.levels[:4] == [HEADER, INNER, HEADER, INNER]

    def test_last_line_extended(self, styled):
        doc = styled(TWO_KEYS)
        assert doc.levels[4] == INNER

    def test_deleted_key_is_header(self, styled):
        doc = styled("[-A]\nx\n")
        assert doc.levels[:2] == [HEADER, INNER]

    def test_lines_before_first_key_stay_at_base(self, styled):
        doc = styled("Windows Registry Editor Version 5.00\n\n[A]\n")
        assert doc.levels[:3] == [FOLD_LEVEL_BASE, FOLD_LEVEL_BASE, HEADER]

    def test_key_headers_do_not_nest(self, styled):
        doc = styled("[A]\n[A\\B]\n[A\\B\\C]\n")
        assert doc.levels[:3] == [HEADER, HEADER, HEADER]

    def test_comment_inside_block(self, styled):
        doc = styled("[A]\n; c\n\"x\"=\"y\"\n")
        assert doc.levels[:3] == [HEADER, INNER, INNER]


class TestCompact:
    SOURCE = '[A]\n"x"=dword:1\n\n[B]\n'

    def test_blank_line_flagged(self, styled):
        doc = styled(self.SOURCE, compact=True)
        assert doc.levels[:4] == [HEADER, INNER, INNER | FoldFlag.WHITE, HEADER]

    def test_blank_line_plain_without_compact(self, styled):
        doc = styled(self.SOURCE, compact=False)
        assert doc.levels[:4] == [HEADER, INNER, INNER, HEADER]

    def test_single_char_last_line_is_visible(self, styled):
        doc = styled("[A]\nx", compact=True)
        assert doc.levels == [HEADER, INNER]


class TestWrites:
    def test_disabled_writes_nothing(self, styled):
        doc = styled(TWO_KEYS, fold=False)
        assert doc.level_writes == []
        assert set(doc.levels) == {FOLD_LEVEL_BASE}

    def test_refold_writes_nothing_new(self):
        doc = Document(TWO_KEYS)
        options = RegistryOptions(fold=True)
        lex_span(0, len(doc), Style.DEFAULT, doc)
        fold(0, len(doc), Style.DEFAULT, doc, options)
        writes = list(doc.level_writes)
        fold(0, len(doc), Style.DEFAULT, doc, options)
        assert doc.level_writes == writes

    def test_unchanged_lines_not_written(self):
        doc = Document("x\ny\n")
        lex_span(0, len(doc), Style.DEFAULT, doc)
        fold(0, len(doc), Style.DEFAULT, doc, RegistryOptions(fold=True))
        assert doc.level_writes == []

    def test_partial_span_refolds_from_its_line(self):
        doc = Document(TWO_KEYS)
        options = RegistryOptions(fold=True)
        lex_span(0, len(doc), Style.DEFAULT, doc)
        start = doc.line_start(2)
        fold(start, len(doc) - start, Style.DEFAULT, doc, options)
        assert doc.levels[:2] == [FOLD_LEVEL_BASE, FOLD_LEVEL_BASE]
        assert doc.levels[2:4] == [HEADER, INNER]


class TestRanges:
    def test_two_blocks(self, styled):
        doc = styled(TWO_KEYS)
        assert fold_ranges(doc) == [(0, 1), (2, 4)]

    def test_compact_blank_line_in_block(self, styled):
        doc = styled(TestCompact.SOURCE, compact=True)
        assert last_child(doc, 0) == 2
        assert fold_ranges(doc) == [(0, 2), (3, 4)]

    def test_empty_block_not_reported(self, styled):
        doc = styled("[A]\n[B]")
        assert fold_ranges(doc) == []

    def test_last_child_of_plain_line(self, styled):
        doc = styled("x\ny")
        assert last_child(doc, 0) == 0
