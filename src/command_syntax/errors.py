"""Exception hierarchy for command-syntax.

Argument parse failures are values (:class:`~command_syntax.arguments.ArgumentSyntaxError`),
not exceptions. The classes below cover mistakes made while *declaring*
commands and loading configuration.
"""


class CommandSyntaxError(Exception):
    """Base error type."""


class InvalidSyntaxDefinition(CommandSyntaxError, ValueError):
    """Raised when a syntax is declared with an impossible slot layout."""


class DuplicateCommand(CommandSyntaxError):
    pass


class CommandNotFound(CommandSyntaxError):
    pass


class ConfigError(CommandSyntaxError):
    pass
