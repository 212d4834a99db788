"""Test key path lines: added, deleted, nested brackets."""

from reglex.tokens import Style


class TestAddedKey:
    def test_simple(self, lex):
        assert lex("[HKEY_CURRENT_USER\\Software\\Foo]") == [
            (Style.ADDEDKEY, "[HKEY_CURRENT_USER\\Software\\Foo]")
        ]

    def test_line_terminator_takes_key_style(self, lex):
        assert lex("[HKEY_CURRENT_USER\\Foo]\n") == [
            (Style.ADDEDKEY, "[HKEY_CURRENT_USER\\Foo]\n")
        ]

    def test_dash_inside_path_is_not_deletion(self, lex):
        assert lex("[HKEY_CURRENT_USER\\a-b]") == [(Style.ADDEDKEY, "[HKEY_CURRENT_USER\\a-b]")]


class TestDeletedKey:
    def test_simple(self, lex):
        assert lex("[-HKEY_CURRENT_USER\\Software\\Foo]") == [
            (Style.DELETEDKEY, "[-HKEY_CURRENT_USER\\Software\\Foo]")
        ]

    def test_whitespace_before_dash(self, lex):
        assert lex("[  -HKEY_CURRENT_USER]") == [(Style.DELETEDKEY, "[  -HKEY_CURRENT_USER]")]


class TestBrackets:
    def test_inner_bracket_does_not_close(self, lex):
        assert lex("[HKEY\\a[b]c]") == [(Style.ADDEDKEY, "[HKEY\\a[b]c]")]

    def test_unterminated_runs_to_end(self, lex):
        assert lex("[HKEY\\Foo") == [(Style.ADDEDKEY, "[HKEY\\Foo")]

    def test_unterminated_resets_next_line(self, lex):
        tokens = lex("[HKEY\\Foo\n\"a\"=\"b\"")
        assert tokens[0] == (Style.ADDEDKEY, "[HKEY\\Foo\n")
        assert tokens[1] == (Style.VALUENAME, '"a"')

    def test_text_after_key_line(self, lex):
        tokens = lex("[A]\n[-B]")
        assert tokens == [(Style.ADDEDKEY, "[A]\n"), (Style.DELETEDKEY, "[-B]")]
