"""Compact response formatting for command results.

Provides standard result formatting with prefix conventions, usage and
failure messages, and fuzzy matching for suggestions.
"""

from __future__ import annotations

import difflib

from command_syntax.results import MatchFailure
from command_syntax.syntax import CommandSyntax


def format_result(
    success: bool,
    message: str,
    prefix: str = "",
) -> str:
    """Format a result line.

    Parameters
    ----------
    success : bool
        Whether the command succeeded.
    message : str
        The result message.
    prefix : str, optional
        Override prefix character. If empty, defaults to ``+`` for success
        and ``!`` for failure.

    Returns
    -------
    str
        Formatted result string.
    """
    if prefix:
        return f"{prefix} {message}"
    if success:
        return f"+ {message}"
    return f"! {message}"


def suggest(input_str: str, candidates: list[str], cutoff: float = 0.6) -> str | None:
    """Find the closest match for *input_str* among *candidates*.

    Uses difflib's SequenceMatcher for fuzzy matching. Returns the best
    match if the similarity ratio is at least *cutoff*, otherwise None.
    """
    if not candidates:
        return None
    matches = difflib.get_close_matches(input_str, candidates, n=1, cutoff=cutoff)
    return matches[0] if matches else None


def format_usage(name: str, syntax: CommandSyntax) -> str:
    """Render ``name <arg> ...`` for *syntax*."""
    return f"{name} {syntax.usage()}"


def format_failure(name: str, failure: MatchFailure, token_count: int) -> str:
    """Describe why *failure* stopped matching.

    When the slot failed without a diagnostic the message depends on
    whether input was left: none left means the argument is missing, some
    left means the syntax ran out of slots for it.
    """
    argument = failure.argument
    if failure.error is not None:
        return (
            f"Invalid {argument.id} '{failure.error.input}': {failure.error.message}"
        )
    if failure.position >= token_count:
        return f"Missing argument <{argument.id}> (usage: {format_usage(name, failure.syntax)})"
    return f"Too many arguments (usage: {format_usage(name, failure.syntax)})"
