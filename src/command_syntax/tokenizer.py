"""Whitespace tokenizer for command lines.

Splits on runs of whitespace and remembers where each token sits in the
original line. Quotes are *not* interpreted here: a quoted phrase arrives
as several tokens and is reassembled by a space-tolerant argument such as
:class:`~command_syntax.arguments.StringArgument`.
"""

from __future__ import annotations

from dataclasses import dataclass

_WHITESPACE = frozenset(" \t\n\r")


@dataclass(frozen=True)
class Token:
    """A token with its character span in the source line."""

    text: str
    start: int
    end: int


def tokenize_with_spans(line: str) -> list[Token]:
    """Split *line* on whitespace, keeping ``[start, end)`` offsets.

    Examples
    --------
    >>> tokenize_with_spans("give  5")
    [Token(text='give', start=0, end=4), Token(text='5', start=6, end=7)]
    """
    tokens: list[Token] = []
    i = 0
    n = len(line)

    while i < n:
        # Skip whitespace
        while i < n and line[i] in _WHITESPACE:
            i += 1
        if i >= n:
            break

        start = i
        while i < n and line[i] not in _WHITESPACE:
            i += 1
        tokens.append(Token(text=line[start:i], start=start, end=i))

    return tokens


def tokenize(line: str) -> list[str]:
    """Split *line* on whitespace.

    Examples
    --------
    >>> tokenize('say "hello world"')
    ['say', '"hello', 'world"']
    """
    return [t.text for t in tokenize_with_spans(line)]
