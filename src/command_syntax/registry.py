"""Command registry: commands, their syntaxes and handlers.

Each command owns an ordered list of syntaxes. Registration order matters:
when several syntaxes accept the same input the first one registered wins.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Iterable

from command_syntax.arguments import ArgumentCapability
from command_syntax.errors import CommandNotFound, DuplicateCommand
from command_syntax.syntax import CommandSyntax

if TYPE_CHECKING:
    from command_syntax.dispatcher import CommandContext

Handler = Callable[["CommandContext"], Any]

logger = logging.getLogger(__name__)


class Command:
    """A named command with one or more argument syntaxes."""

    def __init__(
        self,
        name: str,
        aliases: Iterable[str] = (),
        description: str = "",
        category: str = "general",
    ) -> None:
        if not name or any(ch.isspace() for ch in name):
            raise ValueError(f"Invalid command name: {name!r}")
        self.name = name
        self.aliases: tuple[str, ...] = tuple(aliases)
        self.description = description
        self.category = category
        self.default_handler: Handler | None = None
        self._entries: list[tuple[CommandSyntax, Handler]] = []

    @property
    def all_names(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)

    @property
    def syntaxes(self) -> list[CommandSyntax]:
        """Syntaxes in registration order."""
        return [syntax for syntax, _ in self._entries]

    def add_syntax(self, handler: Handler, *arguments: ArgumentCapability) -> CommandSyntax:
        """Declare a syntax made of *arguments*, run by *handler* on a match."""
        syntax = CommandSyntax(arguments, owner=self)
        self._entries.append((syntax, handler))
        return syntax

    def set_default_handler(self, handler: Handler) -> None:
        """Handler run when the command is given no arguments at all."""
        self.default_handler = handler

    def handler_for(self, syntax: CommandSyntax) -> Handler:
        for candidate, handler in self._entries:
            if candidate is syntax:
                return handler
        raise KeyError(f"Syntax {syntax!r} does not belong to command {self.name!r}")

    def usage_lines(self) -> list[str]:
        lines: list[str] = []
        if self.default_handler is not None:
            lines.append(self.name)
        lines.extend(f"{self.name} {syntax.usage()}" for syntax in self.syntaxes)
        return lines

    def __repr__(self) -> str:
        return f"Command({self.name!r}, syntaxes={len(self._entries)})"


class CommandRegistry:
    """Registry of commands with reference card generation."""

    def __init__(self, case_sensitive: bool = False) -> None:
        self._case_sensitive = case_sensitive
        self._commands: list[Command] = []
        self._map: dict[str, Command] = {}

    @property
    def case_sensitive(self) -> bool:
        return self._case_sensitive

    def _key(self, name: str) -> str:
        return name if self._case_sensitive else name.lower()

    def register(self, command: Command) -> None:
        """Register a command under its name and aliases."""
        keys = [self._key(name) for name in command.all_names]
        for key in keys:
            if key in self._map or keys.count(key) > 1:
                raise DuplicateCommand(f"Command name {key!r} is already registered")
        self._commands.append(command)
        for key in keys:
            self._map[key] = command
        logger.info("Registered command %r with %d syntax(es)", command.name, len(command.syntaxes))

    def register_many(self, commands: Iterable[Command]) -> None:
        for command in commands:
            self.register(command)

    def lookup(self, name: str) -> Command | None:
        """Look up a command by name or alias."""
        return self._map.get(self._key(name))

    def get(self, name: str) -> Command:
        """Like :meth:`lookup` but raises :class:`CommandNotFound`."""
        command = self.lookup(name)
        if command is None:
            raise CommandNotFound(name)
        return command

    @property
    def commands(self) -> list[Command]:
        """All registered commands (insertion order)."""
        return list(self._commands)

    def names(self) -> list[str]:
        """Every registered name and alias."""
        return list(self._map)

    def generate_reference_card(
        self,
        extra_sections: dict[str, str] | None = None,
    ) -> str:
        """Generate a formatted reference card from registered commands.

        Commands are grouped by category. Extra static sections are appended
        after the command listings.
        """
        lines: list[str] = []

        # Group commands by category, preserving insertion order
        seen_categories: list[str] = []
        for c in self._commands:
            if c.category not in seen_categories:
                seen_categories.append(c.category)

        for cat in seen_categories:
            cat_title = cat.replace("_", " ").replace("-", " ").title()
            lines.append(f"### {cat_title}")
            for c in self._commands:
                if c.category != cat:
                    continue
                for usage in c.usage_lines():
                    lines.append(f"  {usage}")
                if c.description:
                    lines.append(f"    {c.description}")
            lines.append("")

        if extra_sections:
            for title, content in extra_sections.items():
                lines.append(f"## {title}")
                lines.append(content)
                lines.append("")

        return "\n".join(lines)
