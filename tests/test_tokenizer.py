"""Tests for command_syntax.tokenizer."""

from command_syntax.tokenizer import Token, tokenize, tokenize_with_spans


class TestTokenize:
    def test_basic_splitting(self):
        assert tokenize("give Steve 5") == ["give", "Steve", "5"]

    def test_empty_string(self):
        assert tokenize("") == []

    def test_whitespace_only(self):
        assert tokenize("   ") == []

    def test_multiple_spaces(self):
        assert tokenize("give   Steve   5") == ["give", "Steve", "5"]

    def test_tabs_and_newlines(self):
        assert tokenize("give\tSteve\n5") == ["give", "Steve", "5"]

    def test_quotes_are_not_interpreted(self):
        assert tokenize('say "hello world"') == ["say", '"hello', 'world"']

    def test_tokens_never_empty(self):
        assert all(tokenize("  a  b  "))


class TestTokenizeWithSpans:
    def test_spans(self):
        assert tokenize_with_spans("give  5") == [
            Token(text="give", start=0, end=4),
            Token(text="5", start=6, end=7),
        ]

    def test_leading_whitespace_offsets(self):
        tokens = tokenize_with_spans("  tp x")
        assert tokens[0].start == 2
        assert tokens[1].start == 5

    def test_span_slices_source(self):
        line = "msg   Alex  hi there"
        for token in tokenize_with_spans(line):
            assert line[token.start:token.end] == token.text
