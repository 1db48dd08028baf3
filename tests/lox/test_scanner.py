"""Tests for the Lox scanner."""

import re

from lox import LoxTokenType


def _types(tokens):
    return [token.type for token in tokens]


class TestLoxScanner:
    """Test tokenization of Lox source text."""

    def test_empty_source_gives_only_eof(self, helpers):
        """Test that empty input scans to a single EOF token."""
        tokens, reporter = helpers.scan("")
        assert _types(tokens) == [LoxTokenType.EOF]
        assert tokens[0].lexeme == ""
        assert tokens[0].line == 1
        assert not reporter.had_error

    def test_single_character_tokens(self, helpers):
        """Test punctuation that is always one character long."""
        tokens, _ = helpers.scan("(){},.-+;*")
        assert _types(tokens) == [
            LoxTokenType.LEFT_PAREN, LoxTokenType.RIGHT_PAREN,
            LoxTokenType.LEFT_BRACE, LoxTokenType.RIGHT_BRACE,
            LoxTokenType.COMMA, LoxTokenType.DOT, LoxTokenType.MINUS,
            LoxTokenType.PLUS, LoxTokenType.SEMICOLON, LoxTokenType.STAR,
            LoxTokenType.EOF,
        ]

    def test_one_or_two_character_operators(self, helpers):
        """Test that '=' suffixes are consumed greedily."""
        tokens, _ = helpers.scan("! != = == < <= > >= /")
        assert _types(tokens) == [
            LoxTokenType.BANG, LoxTokenType.BANG_EQUAL,
            LoxTokenType.EQUAL, LoxTokenType.EQUAL_EQUAL,
            LoxTokenType.LESS, LoxTokenType.LESS_EQUAL,
            LoxTokenType.GREATER, LoxTokenType.GREATER_EQUAL,
            LoxTokenType.SLASH, LoxTokenType.EOF,
        ]

    def test_maximal_munch_without_spaces(self, helpers):
        """Test that '===' is '==' followed by '='."""
        tokens, _ = helpers.scan("===")
        assert _types(tokens) == [LoxTokenType.EQUAL_EQUAL, LoxTokenType.EQUAL, LoxTokenType.EOF]

    def test_comments_are_skipped(self, helpers):
        """Test that line comments run to the end of the line."""
        tokens, _ = helpers.scan("// nothing here ( ) \"\nprint")
        assert _types(tokens) == [LoxTokenType.PRINT, LoxTokenType.EOF]
        assert tokens[0].line == 2

    def test_comment_at_end_of_file(self, helpers):
        """Test a comment without a trailing newline."""
        tokens, reporter = helpers.scan("1 // trailing")
        assert _types(tokens) == [LoxTokenType.NUMBER, LoxTokenType.EOF]
        assert not reporter.had_error

    def test_numbers(self, helpers):
        """Test integer and fractional number literals."""
        tokens, _ = helpers.scan("123 45.67")
        assert tokens[0].literal == 123.0
        assert isinstance(tokens[0].literal, float)
        assert tokens[1].literal == 45.67
        assert tokens[1].lexeme == "45.67"

    def test_trailing_dot_is_not_part_of_number(self, helpers):
        """Test that '123.' scans as a number followed by a dot."""
        tokens, _ = helpers.scan("123.")
        assert _types(tokens) == [LoxTokenType.NUMBER, LoxTokenType.DOT, LoxTokenType.EOF]
        assert tokens[0].lexeme == "123"

    def test_leading_dot_is_not_part_of_number(self, helpers):
        """Test that '.5' scans as a dot followed by a number."""
        tokens, _ = helpers.scan(".5")
        assert _types(tokens) == [LoxTokenType.DOT, LoxTokenType.NUMBER, LoxTokenType.EOF]
        assert tokens[1].literal == 5.0

    def test_string_literal(self, helpers):
        """Test that the literal excludes the quotes and the lexeme includes them."""
        tokens, _ = helpers.scan('"hello world"')
        assert tokens[0].type == LoxTokenType.STRING
        assert tokens[0].lexeme == '"hello world"'
        assert tokens[0].literal == "hello world"

    def test_strings_have_no_escapes(self, helpers):
        """Test that backslashes are kept as written."""
        tokens, _ = helpers.scan(r'"a\nb"')
        assert tokens[0].literal == "a\\nb"

    def test_multiline_string(self, helpers):
        """Test that strings may span lines and advance the line counter."""
        tokens, reporter = helpers.scan('"one\ntwo"\nx')
        assert not reporter.had_error
        assert tokens[0].literal == "one\ntwo"
        assert tokens[0].line == 2
        assert tokens[1].line == 3

    def test_unterminated_string(self, helpers):
        """Test that an unterminated string is reported and produces no token."""
        tokens, reporter = helpers.scan('"abc')
        assert _types(tokens) == [LoxTokenType.EOF]
        assert reporter.had_error
        assert reporter.diagnostics[0].format() == "[line 1] Error: Unterminated string."

    def test_identifiers_and_keywords(self, helpers):
        """Test that reserved words become keyword tokens."""
        tokens, _ = helpers.scan("and class else false for fun if nil or print return super this true var while")
        assert _types(tokens)[:-1] == [
            LoxTokenType.AND, LoxTokenType.CLASS, LoxTokenType.ELSE, LoxTokenType.FALSE,
            LoxTokenType.FOR, LoxTokenType.FUN, LoxTokenType.IF, LoxTokenType.NIL,
            LoxTokenType.OR, LoxTokenType.PRINT, LoxTokenType.RETURN, LoxTokenType.SUPER,
            LoxTokenType.THIS, LoxTokenType.TRUE, LoxTokenType.VAR, LoxTokenType.WHILE,
        ]

    def test_keyword_prefix_is_identifier(self, helpers):
        """Test that maximal munch keeps 'orchid' an identifier."""
        tokens, _ = helpers.scan("orchid _under score9 varx")
        assert _types(tokens) == [LoxTokenType.IDENTIFIER] * 4 + [LoxTokenType.EOF]
        assert [t.lexeme for t in tokens[:-1]] == ["orchid", "_under", "score9", "varx"]

    def test_unexpected_character_continues(self, helpers):
        """Test that a bad character is reported and scanning carries on."""
        tokens, reporter = helpers.scan("1 @ 2 #")
        assert _types(tokens) == [LoxTokenType.NUMBER, LoxTokenType.NUMBER, LoxTokenType.EOF]
        assert [d.format() for d in reporter.diagnostics] == [
            "[line 1] Error: Unexpected character.",
            "[line 1] Error: Unexpected character.",
        ]

    def test_line_numbers(self, helpers):
        """Test that tokens carry the line they appear on."""
        tokens, _ = helpers.scan("a\n\nb\r\n\tc")
        assert [t.line for t in tokens] == [1, 3, 4, 4]

    def test_lexemes_cover_source(self, helpers):
        """Test that the lexemes, in order, spell out the source minus whitespace and comments."""
        source = "var x = 1.5; // rate\nfun f(a,b){return a>=b and !nil;}\n\tprint \"hi\"+x/2;\n"
        tokens, reporter = helpers.scan(source)
        assert not reporter.had_error
        assert tokens[-1].type == LoxTokenType.EOF
        expected = "".join(re.sub(r"//[^\n]*", "", source).split())
        assert "".join(t.lexeme for t in tokens[:-1]) == expected

    def test_line_numbers_never_decrease(self, helpers):
        """Test that token lines are non-decreasing across comments and multi-line strings."""
        tokens, _ = helpers.scan("a // one\n\"two\nthree\" b\n\n// four\nc\n")
        lines = [t.line for t in tokens]
        assert lines == sorted(lines)
        assert lines[0] == 1
        assert lines[-1] == 6

    def test_token_string_forms(self, helpers):
        """Test the textual forms used by token dumps and debugging."""
        tokens, _ = helpers.scan('x "s" 1')
        assert str(tokens[0]) == "IDENTIFIER x None"
        assert str(tokens[1]) == 'STRING "s" s'
        assert str(tokens[2]) == "NUMBER 1 1.0"
        assert repr(tokens[0]) == "LoxToken(IDENTIFIER, 'x', line=1)"
