"""Split a raw command line into a command name and argument tokens.

Produces a :class:`ParsedCommandLine` on success or a :class:`ParseError`
on failure. Does NOT interpret the arguments; that is the matcher's job.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from command_syntax.tokenizer import Token, tokenize_with_spans


@dataclass
class ParsedCommandLine:
    """Successfully split command line."""

    name: str
    tokens: list[Token] = field(default_factory=list)
    raw: str = ""

    @property
    def arguments(self) -> list[str]:
        """Argument token texts, in order."""
        return [t.text for t in self.tokens]


@dataclass
class ParseError:
    """Splitting failure."""

    success: bool = field(default=False, init=False)
    error: str = ""
    raw: str = ""


def parse_command_line(
    line: str,
    prefix: str = "",
    *,
    case_sensitive: bool = False,
) -> ParsedCommandLine | ParseError:
    """Split *line* into a command name and its argument tokens.

    Parameters
    ----------
    line : str
        The raw input, e.g. ``'/give Steve 5'``.
    prefix : str, optional
        Marker the command name must start with (``"/"``, ``"!"``).
        Stripped from the name.
    case_sensitive : bool, optional
        Keep the command name's case instead of lower-casing it.

    Returns
    -------
    ParsedCommandLine | ParseError
        Token spans are offsets into *line* as given.
    """
    tokens = tokenize_with_spans(line)
    raw = line.strip()
    if not tokens:
        return ParseError(error="Empty command line", raw=raw)

    head = tokens[0].text
    if prefix:
        if not head.startswith(prefix):
            return ParseError(error=f"Commands must start with {prefix!r}", raw=raw)
        head = head[len(prefix):]
        if not head:
            return ParseError(error="Missing command name", raw=raw)

    name = head if case_sensitive else head.lower()
    return ParsedCommandLine(name=name, tokens=tokens[1:], raw=raw)
