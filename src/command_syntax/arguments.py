"""Argument capabilities: the typed slots a command syntax is built from.

Every capability turns a raw candidate string into a value, or returns an
:class:`ArgumentSyntaxError` describing why it could not. Failures are
returned rather than raised: the matcher tries many candidate strings per
slot and most of them are expected to fail.

Two flags steer the matcher:

- ``allows_space`` -- the value may span several whitespace-joined tokens,
  so the matcher keeps growing the candidate after a failure.
- ``use_remaining`` -- the slot swallows every remaining token as one
  string, parsed exactly once.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Iterable, Protocol

# Error codes carried by ArgumentSyntaxError.code
INVALID_NUMBER = 1
RANGE_ERROR = 2
RESTRICTION_ERROR = 3
SPACE_ERROR = 4
QUOTE_ERROR = 5
INVALID_BOOLEAN = 6
LITERAL_ERROR = 7
EMPTY_INPUT = 8

_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")

_QUOTE = '"'
_ESCAPE = "\\"


@dataclass(frozen=True)
class ArgumentSyntaxError:
    """Why a capability rejected a candidate string."""

    input: str
    code: int
    message: str

    def __str__(self) -> str:
        return self.message


class ArgumentCapability(Protocol):
    """Contract the matcher relies on. Implemented per argument kind."""

    id: str
    allows_space: bool
    use_remaining: bool

    def parse(self, raw: str) -> Any | ArgumentSyntaxError:
        """Return the parsed value, or an :class:`ArgumentSyntaxError`."""
        ...

    def suggest(self, prefix: str) -> list[str]:
        """Return completion candidates starting with *prefix*."""
        ...


class Argument:
    """Base class for the bundled argument kinds.

    Instances hash by identity: the same kind (even with the same id) may
    appear more than once in a syntax and each occurrence is its own slot.
    """

    allows_space: bool = False
    use_remaining: bool = False

    def __init__(self, id: str) -> None:
        if not id:
            raise ValueError("Argument id must be non-empty")
        self.id = id

    def parse(self, raw: str) -> Any | ArgumentSyntaxError:
        raise NotImplementedError

    def suggest(self, prefix: str) -> list[str]:
        return []

    def usage(self) -> str:
        if self.use_remaining:
            return f"<{self.id}...>"
        return f"<{self.id}>"

    def _error(self, raw: str, code: int, message: str) -> ArgumentSyntaxError:
        return ArgumentSyntaxError(input=raw, code=code, message=message)

    def _empty(self, raw: str) -> ArgumentSyntaxError:
        return self._error(raw, EMPTY_INPUT, f"Expected a value for '{self.id}'")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id!r})"


class LiteralArgument(Argument):
    """A fixed keyword, e.g. the ``give`` in ``/item give <player>``."""

    def __init__(self, id: str, literal: str | None = None) -> None:
        super().__init__(id)
        self.literal = literal or id

    def parse(self, raw: str) -> str | ArgumentSyntaxError:
        if not raw:
            return self._empty(raw)
        if raw.lower() != self.literal.lower():
            return self._error(raw, LITERAL_ERROR, f"Expected '{self.literal}'")
        return self.literal

    def suggest(self, prefix: str) -> list[str]:
        if self.literal.lower().startswith(prefix.lower()):
            return [self.literal]
        return []

    def usage(self) -> str:
        return self.literal


class WordArgument(Argument):
    """A single word, optionally restricted to a fixed set of values."""

    def __init__(self, id: str, restrictions: Iterable[str] | None = None) -> None:
        super().__init__(id)
        self.restrictions: tuple[str, ...] | None = (
            tuple(restrictions) if restrictions is not None else None
        )

    def parse(self, raw: str) -> str | ArgumentSyntaxError:
        if not raw:
            return self._empty(raw)
        if " " in raw:
            return self._error(raw, SPACE_ERROR, "A word cannot contain spaces")
        if self.restrictions is not None and raw not in self.restrictions:
            allowed = ", ".join(self.restrictions)
            return self._error(raw, RESTRICTION_ERROR, f"Expected one of: {allowed}")
        return raw

    def suggest(self, prefix: str) -> list[str]:
        if self.restrictions is None:
            return []
        return [word for word in self.restrictions if word.startswith(prefix)]


class _NumberArgument(Argument):
    kind = "number"

    def __init__(
        self,
        id: str,
        min: float | None = None,
        max: float | None = None,
    ) -> None:
        super().__init__(id)
        if min is not None and max is not None and min > max:
            raise ValueError(f"min ({min}) is greater than max ({max})")
        self.min = min
        self.max = max

    def _convert(self, raw: str) -> Any | None:
        raise NotImplementedError

    def parse(self, raw: str) -> Any | ArgumentSyntaxError:
        if not raw:
            return self._empty(raw)
        value = self._convert(raw)
        if value is None:
            return self._error(raw, INVALID_NUMBER, f"Expected {self.kind}")
        if self.min is not None and value < self.min:
            return self._error(
                raw, RANGE_ERROR, f"Must be greater than or equal to {self.min}"
            )
        if self.max is not None and value > self.max:
            return self._error(
                raw, RANGE_ERROR, f"Must be less than or equal to {self.max}"
            )
        return value


class IntegerArgument(_NumberArgument):
    kind = "an integer"

    def _convert(self, raw: str) -> int | None:
        if not _INTEGER_RE.match(raw):
            return None
        try:
            return int(raw)
        except ValueError:
            # longer than the interpreter allows for str to int
            return None


class FloatArgument(_NumberArgument):
    kind = "a number"

    def _convert(self, raw: str) -> float | None:
        if not _FLOAT_RE.match(raw):
            return None
        value = float(raw)
        if not math.isfinite(value):
            return None
        return value


class BooleanArgument(Argument):
    _VALUES = {"true": True, "false": False}

    def parse(self, raw: str) -> bool | ArgumentSyntaxError:
        if not raw:
            return self._empty(raw)
        value = self._VALUES.get(raw.lower())
        if value is None:
            return self._error(raw, INVALID_BOOLEAN, "Expected true or false")
        return value

    def suggest(self, prefix: str) -> list[str]:
        return [word for word in self._VALUES if word.startswith(prefix.lower())]


class StringArgument(Argument):
    """A bare word or a double-quoted phrase.

    Quoted phrases may span tokens (``"hello world"``) and support the
    ``\\"`` and ``\\\\`` escapes. An unquoted value must be a single word.
    """

    allows_space = True

    def parse(self, raw: str) -> str | ArgumentSyntaxError:
        if not raw:
            return self._empty(raw)
        if not raw.startswith(_QUOTE):
            if " " in raw:
                return self._error(
                    raw, SPACE_ERROR, "Phrases with spaces must be quoted"
                )
            if _QUOTE in raw:
                return self._error(raw, QUOTE_ERROR, "Unexpected quote")
            return raw
        if len(raw) < 2 or not raw.endswith(_QUOTE):
            return self._error(raw, QUOTE_ERROR, "Unclosed quote")
        return self._unescape(raw, raw[1:-1])

    def _unescape(self, raw: str, body: str) -> str | ArgumentSyntaxError:
        chars: list[str] = []
        i = 0
        n = len(body)
        while i < n:
            ch = body[i]
            if ch == _ESCAPE:
                if i + 1 >= n:
                    # the closing quote itself is escaped
                    return self._error(raw, QUOTE_ERROR, "Unclosed quote")
                nxt = body[i + 1]
                if nxt in (_QUOTE, _ESCAPE):
                    chars.append(nxt)
                    i += 2
                    continue
            elif ch == _QUOTE:
                return self._error(raw, QUOTE_ERROR, "Unescaped quote inside phrase")
            chars.append(ch)
            i += 1
        return "".join(chars)


class GreedyStringArgument(Argument):
    """Everything left on the line, as one string."""

    use_remaining = True

    def parse(self, raw: str) -> str | ArgumentSyntaxError:
        if not raw:
            return self._empty(raw)
        return raw


class StringArrayArgument(Argument):
    """Everything left on the line, as a list of words."""

    use_remaining = True

    def parse(self, raw: str) -> list[str] | ArgumentSyntaxError:
        words = raw.split()
        if not words:
            return self._empty(raw)
        return words
