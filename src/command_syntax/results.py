"""Accumulators the matcher writes into.

One :class:`MatchResults` belongs to one resolution request. It is threaded
through sequential matcher calls (one per candidate syntax) and must never
be shared between requests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from command_syntax.arguments import ArgumentCapability, ArgumentSyntaxError
from command_syntax.syntax import CommandSyntax


@dataclass(frozen=True)
class MatchSuccess:
    """A syntax that consumed the whole input."""

    syntax: CommandSyntax
    bindings: dict[ArgumentCapability, Any]


@dataclass(frozen=True)
class MatchFailure:
    """Where a syntax stopped matching.

    ``error`` is None when the slot failed without a diagnostic (no tokens
    were left for it).
    """

    syntax: CommandSyntax
    index: int
    error: ArgumentSyntaxError | None = None
    position: int = 0

    @property
    def argument(self) -> ArgumentCapability:
        return self.syntax[self.index]


class FailureIndex:
    """Failure records keyed by failing slot index, iterated in ascending order.

    Recording at an index that already holds a failure replaces it: the
    last syntax tried at a given depth wins.
    """

    def __init__(self) -> None:
        self._records: dict[int, MatchFailure] = {}

    def record(self, failure: MatchFailure) -> None:
        self._records[failure.index] = failure

    def deepest(self) -> MatchFailure | None:
        """The failure with the highest slot index, or None when empty."""
        if not self._records:
            return None
        return self._records[max(self._records)]

    def get(self, index: int) -> MatchFailure | None:
        return self._records.get(index)

    def __getitem__(self, index: int) -> MatchFailure:
        return self._records[index]

    def __contains__(self, index: object) -> bool:
        return index in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._records))

    def items(self) -> list[tuple[int, MatchFailure]]:
        return [(index, self._records[index]) for index in self]


@dataclass
class MatchResults:
    """Success list and failure index for one resolution request."""

    successes: list[MatchSuccess] = field(default_factory=list)
    failures: FailureIndex = field(default_factory=FailureIndex)

    @property
    def matched(self) -> bool:
        return bool(self.successes)

    def first_success(self) -> MatchSuccess | None:
        return self.successes[0] if self.successes else None

    def deepest_failure(self) -> MatchFailure | None:
        return self.failures.deepest()
