"""Command syntax: an immutable, ordered sequence of argument slots."""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from command_syntax.arguments import ArgumentCapability
from command_syntax.errors import InvalidSyntaxDefinition


class CommandSyntax:
    """Ordered argument slots plus an opaque *owner*.

    The owner only tags match results (the registry stores the owning
    command there); the matcher never looks at it.
    """

    __slots__ = ("_arguments", "_owner")

    def __init__(
        self,
        arguments: Iterable[ArgumentCapability],
        owner: Any = None,
    ) -> None:
        args = tuple(arguments)
        if not args:
            raise InvalidSyntaxDefinition("A syntax needs at least one argument")
        for i, arg in enumerate(args[:-1]):
            if arg.use_remaining:
                raise InvalidSyntaxDefinition(
                    f"Argument {arg.id!r} consumes the rest of the input "
                    f"and must be last (found at position {i})"
                )
        self._arguments = args
        self._owner = owner

    @property
    def arguments(self) -> tuple[ArgumentCapability, ...]:
        return self._arguments

    @property
    def owner(self) -> Any:
        return self._owner

    def __len__(self) -> int:
        return len(self._arguments)

    def __iter__(self) -> Iterator[ArgumentCapability]:
        return iter(self._arguments)

    def __getitem__(self, index: int) -> ArgumentCapability:
        return self._arguments[index]

    def argument(self, id: str) -> ArgumentCapability | None:
        """Return the first slot whose id is *id*, or None."""
        for arg in self._arguments:
            if arg.id == id:
                return arg
        return None

    def usage(self) -> str:
        """Render the slots as ``<a> <b> literal <rest...>``."""
        parts: list[str] = []
        for arg in self._arguments:
            render = getattr(arg, "usage", None)
            parts.append(render() if render is not None else f"<{arg.id}>")
        return " ".join(parts)

    def __repr__(self) -> str:
        return f"CommandSyntax({self.usage()!r})"
