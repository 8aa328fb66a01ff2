"""Greedy per-token matcher binding a token stream to one command syntax.

Slots are filled left to right. An ordinary slot starts with the next
token and, if it allows spaces, keeps appending tokens until its parse
succeeds. The last slot of a syntax must also account for every token left
over: a single-word last slot that parses while tokens remain is rejected,
while a space-tolerant last slot keeps swallowing them. A ``use_remaining``
slot parses everything left in one attempt.

Outcomes are written into caller-owned accumulators; the matcher itself
never raises for bad input.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

from command_syntax.arguments import ArgumentCapability, ArgumentSyntaxError
from command_syntax.results import FailureIndex, MatchFailure, MatchResults, MatchSuccess
from command_syntax.syntax import CommandSyntax

logger = logging.getLogger(__name__)

# (end position or None when unsatisfied, parsed value, last captured error)
_SlotOutcome = tuple[int | None, Any, ArgumentSyntaxError | None]


def _match_remaining(argument: ArgumentCapability, tokens: Sequence[str], pos: int) -> _SlotOutcome:
    if pos >= len(tokens):
        return None, None, None
    result = argument.parse(" ".join(tokens[pos:]))
    if isinstance(result, ArgumentSyntaxError):
        return None, None, result
    return len(tokens), result, None


def _match_tokens(
    argument: ArgumentCapability,
    tokens: Sequence[str],
    pos: int,
    last: bool,
) -> _SlotOutcome:
    error: ArgumentSyntaxError | None = None
    parts: list[str] = []
    for j in range(pos, len(tokens)):
        parts.append(tokens[j])
        result = argument.parse(" ".join(parts))
        if isinstance(result, ArgumentSyntaxError):
            error = result
            if not argument.allows_space:
                break
            continue
        if last and j + 1 < len(tokens):
            # Tokens would be left over with no slot to claim them
            if not argument.allows_space:
                break
            continue
        return j + 1, result, None
    return None, None, error


def match_syntax(
    syntax: CommandSyntax,
    tokens: Sequence[str],
    successes: list[MatchSuccess] | None = None,
    failures: FailureIndex | None = None,
) -> None:
    """Match *tokens* against *syntax*, recording the outcome.

    Parameters
    ----------
    syntax : CommandSyntax
        The candidate syntax. Read only.
    tokens : sequence of str
        Whitespace-delimited input tokens, without the command name.
    successes : list[MatchSuccess], optional
        Receives a :class:`MatchSuccess` when every slot is bound.
    failures : FailureIndex, optional
        Receives a :class:`MatchFailure` keyed by the first slot that could
        not be satisfied. Later slots are not attempted.
    """
    bindings: dict[ArgumentCapability, Any] = {}
    pos = 0
    last_index = len(syntax) - 1

    for index, argument in enumerate(syntax):
        if argument.use_remaining:
            end, value, error = _match_remaining(argument, tokens, pos)
        else:
            end, value, error = _match_tokens(argument, tokens, pos, index == last_index)

        if end is None:
            logger.debug(
                "Syntax %r failed at slot %d (%s): %s",
                syntax, index, argument.id, error,
            )
            if failures is not None:
                failures.record(
                    MatchFailure(syntax=syntax, index=index, error=error, position=pos)
                )
            return

        bindings[argument] = value
        pos = end

    logger.debug("Syntax %r matched %d token(s)", syntax, len(tokens))
    if successes is not None:
        successes.append(MatchSuccess(syntax=syntax, bindings=bindings))


def match_all(
    syntaxes: Iterable[CommandSyntax],
    tokens: Sequence[str],
    results: MatchResults | None = None,
) -> MatchResults:
    """Try every syntax in order against *tokens* with one shared accumulator."""
    if results is None:
        results = MatchResults()
    for syntax in syntaxes:
        match_syntax(syntax, tokens, results.successes, results.failures)
    return results
