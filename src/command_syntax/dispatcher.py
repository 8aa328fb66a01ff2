"""Resolve command lines against registered commands and run their handlers.

Resolution tries every syntax of the named command, in registration order,
against the argument tokens. All attempts of one request share a fresh
:class:`~command_syntax.results.MatchResults`; nothing is kept on the
dispatcher between requests, so one dispatcher can serve many callers.

The first syntax that matches wins. When none does, the failure that got
furthest (highest slot index) becomes the :class:`Suggestion` used for error
messages and completion.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from command_syntax.arguments import ArgumentCapability
from command_syntax.command_line import ParseError, ParsedCommandLine, parse_command_line
from command_syntax.errors import CommandSyntaxError
from command_syntax.formatter import format_failure, suggest
from command_syntax.matcher import match_all
from command_syntax.registry import Command, CommandRegistry
from command_syntax.results import MatchFailure, MatchResults
from command_syntax.settings import DispatcherSettings
from command_syntax.syntax import CommandSyntax

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass
class CommandContext:
    """Parsed argument values of the syntax that matched."""

    command: Command
    syntax: CommandSyntax | None
    bindings: dict[ArgumentCapability, Any] = field(default_factory=dict)
    raw: str = ""

    def _find(self, key: ArgumentCapability | str) -> Any:
        if isinstance(key, str):
            for argument, value in self.bindings.items():
                if argument.id == key:
                    return value
            return _MISSING
        return self.bindings.get(key, _MISSING)

    def get(self, key: ArgumentCapability | str, default: Any = None) -> Any:
        """Value bound to an argument instance, or to the first slot with that id."""
        value = self._find(key)
        return default if value is _MISSING else value

    def __getitem__(self, key: ArgumentCapability | str) -> Any:
        value = self._find(key)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def __contains__(self, key: ArgumentCapability | str) -> bool:
        return self._find(key) is not _MISSING

    def as_dict(self) -> dict[str, Any]:
        """Values keyed by argument id (later duplicates win)."""
        return {argument.id: value for argument, value in self.bindings.items()}


@dataclass
class Suggestion:
    """The closest-to-correct failed attempt, anchored in the input line."""

    command: Command
    syntax: CommandSyntax
    index: int
    position: int
    start: int
    input: str
    message: str
    candidates: list[str] = field(default_factory=list)


@dataclass
class Resolution:
    """Outcome of resolving one command line."""

    line: str
    command: Command | None = None
    results: MatchResults = field(default_factory=MatchResults)
    context: CommandContext | None = None
    suggestion: Suggestion | None = None
    error: str = ""
    unknown: bool = False

    @property
    def success(self) -> bool:
        return self.context is not None


@dataclass
class CommandResult:
    """Result of executing a single command line."""

    success: bool
    message: str
    value: Any = None


class CommandDispatcher:
    """Routes command lines to the registered command whose syntax they match."""

    def __init__(
        self,
        registry: CommandRegistry | None = None,
        settings: DispatcherSettings | None = None,
    ) -> None:
        self.settings = settings or DispatcherSettings()
        self.registry = registry or CommandRegistry(
            case_sensitive=self.settings.case_sensitive
        )

    def register(self, command: Command) -> None:
        self.registry.register(command)

    def _parse(self, line: str) -> ParsedCommandLine | ParseError:
        # the registry decides how names compare
        return parse_command_line(
            line, self.settings.prefix, case_sensitive=self.registry.case_sensitive
        )

    def resolve(self, line: str) -> Resolution:
        """Match *line* against the syntaxes of the command it names."""
        parsed = self._parse(line)
        if isinstance(parsed, ParseError):
            return Resolution(line=line, error=parsed.error)

        command = self.registry.lookup(parsed.name)
        if command is None:
            message = f"Unknown command {parsed.name!r}"
            close = suggest(parsed.name, self.registry.names(), self.settings.suggestion_cutoff)
            if close:
                message += f"; did you mean {close!r}?"
            logger.debug("Unknown command %r", parsed.name)
            return Resolution(line=line, error=message, unknown=True)

        tokens = parsed.arguments
        if not tokens and command.default_handler is not None:
            context = CommandContext(command=command, syntax=None, raw=parsed.raw)
            return Resolution(line=line, command=command, context=context)

        results = match_all(command.syntaxes, tokens, MatchResults())
        success = results.first_success()
        if success is not None:
            logger.debug("Resolved %r to %r", line, success.syntax)
            context = CommandContext(
                command=command,
                syntax=success.syntax,
                bindings=success.bindings,
                raw=parsed.raw,
            )
            return Resolution(line=line, command=command, results=results, context=context)

        failure = results.deepest_failure()
        if failure is None:
            # no syntax was attempted
            return Resolution(
                line=line,
                command=command,
                results=results,
                error=f"Command {command.name!r} does not accept this input",
            )

        suggestion = self._build_suggestion(line, command, parsed, failure)
        logger.debug("No syntax of %r matched %r: %s", command.name, line, suggestion.message)
        return Resolution(
            line=line,
            command=command,
            results=results,
            suggestion=suggestion,
            error=suggestion.message,
        )

    def _build_suggestion(
        self,
        line: str,
        command: Command,
        parsed: ParsedCommandLine,
        failure: MatchFailure,
    ) -> Suggestion:
        tokens = parsed.tokens
        if failure.position < len(tokens):
            start = tokens[failure.position].start
            prefix = tokens[failure.position].text
        else:
            start = len(line)
            prefix = ""

        candidates: list[str] = []
        complete = getattr(failure.argument, "suggest", None)
        if complete is not None:
            candidates = list(complete(prefix))[: self.settings.max_candidates]

        return Suggestion(
            command=command,
            syntax=failure.syntax,
            index=failure.index,
            position=failure.position,
            start=start,
            input=prefix,
            message=format_failure(command.name, failure, len(tokens)),
            candidates=candidates,
        )

    def execute(self, line: str) -> CommandResult:
        """Resolve *line* and run the matching handler.

        Resolution failures are returned as unsuccessful results; exceptions
        raised by handlers propagate to the caller.
        """
        resolution = self.resolve(line)
        context = resolution.context
        if context is None:
            return CommandResult(success=False, message=resolution.error or "Invalid command")

        command = context.command
        if context.syntax is None:
            handler = command.default_handler
        else:
            handler = command.handler_for(context.syntax)
        if handler is None:
            raise CommandSyntaxError(f"Command {command.name!r} has no handler for this input")

        logger.debug("Executing %r", command.name)
        value = handler(context)
        message = value if isinstance(value, str) else ""
        return CommandResult(success=True, message=message, value=value)

    def complete(self, line: str) -> list[str]:
        """Completion candidates for the word being typed at the end of *line*.

        After trailing whitespace the next slot is completed from an empty
        prefix. Otherwise the last token is completed by the slots that were
        waiting for it once the tokens before it were matched.
        """
        parsed = self._parse(line)
        if isinstance(parsed, ParseError):
            return []

        limit = self.settings.max_candidates
        after_space = line[-1:].isspace()
        if not parsed.tokens and not after_space:
            names = [name for name in self.registry.names() if name.startswith(parsed.name)]
            return sorted(names)[:limit]

        if after_space:
            resolution = self.resolve(line)
            if resolution.suggestion is None:
                return []
            return resolution.suggestion.candidates

        command = self.registry.lookup(parsed.name)
        if command is None:
            return []
        head = parsed.arguments[:-1]
        word = parsed.tokens[-1].text
        results = match_all(command.syntaxes, head, MatchResults())

        candidates: list[str] = []
        for _, failure in results.failures.items():
            # slots that ran out of tokens exactly where the last word starts
            if failure.position != len(head):
                continue
            complete = getattr(failure.argument, "suggest", None)
            if complete is None:
                continue
            for candidate in complete(word):
                if candidate not in candidates:
                    candidates.append(candidate)
        return candidates[:limit]
