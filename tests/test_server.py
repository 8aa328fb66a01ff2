"""Tests for command_syntax.server."""

from mcp.server.fastmcp import FastMCP

from command_syntax.arguments import IntegerArgument, WordArgument
from command_syntax.dispatcher import CommandDispatcher
from command_syntax.registry import Command
from command_syntax.server import (
    _build_tool_description,
    complete_line,
    create_command_server,
    run_lines,
)
from command_syntax.settings import DispatcherSettings


def _make_dispatcher(settings=None):
    dispatcher = CommandDispatcher(settings=settings)
    give = Command("give", category="items")
    give.add_syntax(
        lambda c: f"gave {c['amount']} to {c['player']}",
        WordArgument("player"),
        IntegerArgument("amount"),
    )
    ping = Command("ping", category="misc")
    ping.set_default_handler(lambda c: None)

    def fail(context):
        raise RuntimeError("broken")

    crash = Command("crash", category="misc")
    crash.add_syntax(fail, WordArgument("w"))
    tp = Command("tp", category="movement")
    tp.add_syntax(lambda c: None, WordArgument("target", ["spawn", "home"]))
    dispatcher.registry.register_many([give, ping, crash, tp])
    return dispatcher


class TestRunLines:
    def test_results_per_line(self):
        output = run_lines(_make_dispatcher(), ["give Steve 5", "give Steve x"])
        lines = output.split("\n")
        assert lines[0] == "+ gave 5 to Steve"
        assert lines[1].startswith("! Invalid amount 'x'")

    def test_empty_message_echoes_line(self):
        assert run_lines(_make_dispatcher(), ["ping"]) == "+ ping"

    def test_handler_error_does_not_stop_batch(self):
        output = run_lines(_make_dispatcher(), ["crash now", "give Steve 1"])
        lines = output.split("\n")
        assert lines[0] == "! crash now: broken"
        assert lines[1] == "+ gave 1 to Steve"


class TestCompleteLine:
    def test_candidates(self):
        assert complete_line(_make_dispatcher(), "tp h") == "home"

    def test_error_when_nothing_to_offer(self):
        assert complete_line(_make_dispatcher(), "give Steve x").startswith("! Invalid amount")

    def test_nothing_for_valid_line(self):
        assert complete_line(_make_dispatcher(), "give Steve 5") == ""


class TestToolDescription:
    def test_groups_commands(self):
        dispatcher = _make_dispatcher()
        text = _build_tool_description("game", dispatcher.registry, "/")
        assert "Call game_help" in text
        assert "ITEMS:" in text
        assert "  /give <player> <amount>" in text
        assert "  /ping" in text

    def test_extra_sections(self):
        dispatcher = _make_dispatcher()
        text = _build_tool_description(
            "game", dispatcher.registry, extra_sections={"notes": "Be nice."}
        )
        assert "NOTES:" in text
        assert "Be nice." in text


class TestCreateServer:
    def test_returns_fastmcp(self):
        server = create_command_server("game", _make_dispatcher(DispatcherSettings(prefix="/")))
        assert isinstance(server, FastMCP)
