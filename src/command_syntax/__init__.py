"""command-syntax -- match tokenized command lines against typed argument syntaxes."""

from command_syntax.arguments import (
    Argument,
    ArgumentCapability,
    ArgumentSyntaxError,
    BooleanArgument,
    FloatArgument,
    GreedyStringArgument,
    IntegerArgument,
    LiteralArgument,
    StringArgument,
    StringArrayArgument,
    WordArgument,
)
from command_syntax.command_line import ParsedCommandLine, ParseError, parse_command_line
from command_syntax.dispatcher import (
    CommandContext,
    CommandDispatcher,
    CommandResult,
    Resolution,
    Suggestion,
)
from command_syntax.errors import (
    CommandNotFound,
    CommandSyntaxError,
    ConfigError,
    DuplicateCommand,
    InvalidSyntaxDefinition,
)
from command_syntax.formatter import format_failure, format_result, format_usage, suggest
from command_syntax.matcher import match_all, match_syntax
from command_syntax.registry import Command, CommandRegistry
from command_syntax.results import FailureIndex, MatchFailure, MatchResults, MatchSuccess
from command_syntax.server import create_command_server
from command_syntax.settings import DispatcherSettings, load_settings
from command_syntax.syntax import CommandSyntax
from command_syntax.tokenizer import Token, tokenize, tokenize_with_spans

__all__ = [
    # Arguments
    "Argument",
    "ArgumentCapability",
    "ArgumentSyntaxError",
    "BooleanArgument",
    "FloatArgument",
    "GreedyStringArgument",
    "IntegerArgument",
    "LiteralArgument",
    "StringArgument",
    "StringArrayArgument",
    "WordArgument",
    # Syntax
    "CommandSyntax",
    # Matcher
    "match_syntax",
    "match_all",
    "MatchSuccess",
    "MatchFailure",
    "FailureIndex",
    "MatchResults",
    # Tokenizer
    "Token",
    "tokenize",
    "tokenize_with_spans",
    "ParsedCommandLine",
    "ParseError",
    "parse_command_line",
    # Registry / dispatch
    "Command",
    "CommandRegistry",
    "CommandContext",
    "CommandDispatcher",
    "CommandResult",
    "Resolution",
    "Suggestion",
    # Formatter
    "format_result",
    "format_usage",
    "format_failure",
    "suggest",
    # Settings
    "DispatcherSettings",
    "load_settings",
    # Errors
    "CommandSyntaxError",
    "InvalidSyntaxDefinition",
    "DuplicateCommand",
    "CommandNotFound",
    "ConfigError",
    # Server
    "create_command_server",
]
