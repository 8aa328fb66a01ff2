"""Tests for command_syntax.registry."""

import pytest

from command_syntax.arguments import IntegerArgument, WordArgument
from command_syntax.errors import CommandNotFound, DuplicateCommand
from command_syntax.registry import Command, CommandRegistry


def _noop(context):
    return None


class TestCommand:
    def test_add_syntax_sets_owner(self):
        command = Command("give")
        syntax = command.add_syntax(_noop, WordArgument("player"))
        assert syntax.owner is command
        assert command.syntaxes == [syntax]

    def test_syntaxes_keep_registration_order(self):
        command = Command("give")
        first = command.add_syntax(_noop, WordArgument("player"))
        second = command.add_syntax(_noop, WordArgument("player"), IntegerArgument("n"))
        assert command.syntaxes == [first, second]

    def test_handler_for(self):
        command = Command("give")

        def handler(context):
            return "ok"

        syntax = command.add_syntax(handler, WordArgument("player"))
        assert command.handler_for(syntax) is handler

    def test_handler_for_foreign_syntax(self):
        command = Command("give")
        other = Command("tp").add_syntax(_noop, WordArgument("x"))
        with pytest.raises(KeyError):
            command.handler_for(other)

    def test_invalid_name(self):
        with pytest.raises(ValueError):
            Command("two words")
        with pytest.raises(ValueError):
            Command("")

    def test_usage_lines(self):
        command = Command("give")
        command.set_default_handler(_noop)
        command.add_syntax(_noop, WordArgument("player"), IntegerArgument("amount"))
        assert command.usage_lines() == ["give", "give <player> <amount>"]

    def test_all_names(self):
        assert Command("teleport", aliases=("tp",)).all_names == ("teleport", "tp")


class TestCommandRegistry:
    def test_register_and_lookup(self):
        registry = CommandRegistry()
        command = Command("give")
        registry.register(command)
        assert registry.lookup("give") is command

    def test_lookup_alias(self):
        registry = CommandRegistry()
        command = Command("teleport", aliases=("tp",))
        registry.register(command)
        assert registry.lookup("tp") is command

    def test_lookup_is_case_insensitive(self):
        registry = CommandRegistry()
        command = Command("Give")
        registry.register(command)
        assert registry.lookup("GIVE") is command

    def test_case_sensitive_lookup(self):
        registry = CommandRegistry(case_sensitive=True)
        registry.register(Command("Give"))
        assert registry.case_sensitive
        assert registry.lookup("give") is None
        assert registry.lookup("Give") is not None

    def test_lookup_missing(self):
        assert CommandRegistry().lookup("nonexistent") is None

    def test_get_missing_raises(self):
        with pytest.raises(CommandNotFound):
            CommandRegistry().get("nonexistent")

    def test_duplicate_name(self):
        registry = CommandRegistry()
        registry.register(Command("give"))
        with pytest.raises(DuplicateCommand):
            registry.register(Command("give"))

    def test_alias_clashing_with_name(self):
        registry = CommandRegistry()
        registry.register(Command("tp"))
        with pytest.raises(DuplicateCommand):
            registry.register(Command("teleport", aliases=("tp",)))
        assert registry.lookup("teleport") is None

    def test_register_many_preserves_order(self):
        registry = CommandRegistry()
        registry.register_many([Command("c"), Command("a"), Command("b")])
        assert [c.name for c in registry.commands] == ["c", "a", "b"]

    def test_commands_property_returns_copy(self):
        registry = CommandRegistry()
        registry.register(Command("give"))
        commands = registry.commands
        commands.append(Command("fake"))
        assert len(registry.commands) == 1

    def test_names_include_aliases(self):
        registry = CommandRegistry()
        registry.register(Command("teleport", aliases=("tp",)))
        assert registry.names() == ["teleport", "tp"]


class TestReferenceCard:
    def _registry(self):
        registry = CommandRegistry()
        give = Command("give", description="Give items", category="items")
        give.add_syntax(_noop, WordArgument("player"), IntegerArgument("amount"))
        tp = Command("tp", category="movement")
        tp.add_syntax(_noop, WordArgument("target"))
        registry.register_many([give, tp])
        return registry

    def test_groups_by_category(self):
        card = self._registry().generate_reference_card()
        assert "### Items" in card
        assert "### Movement" in card
        assert "give <player> <amount>" in card
        assert "tp <target>" in card
        assert "Give items" in card

    def test_category_order(self):
        card = self._registry().generate_reference_card()
        assert card.index("### Items") < card.index("### Movement")

    def test_extra_sections(self):
        card = self._registry().generate_reference_card(
            extra_sections={"Notes": "Quote phrases with spaces."}
        )
        assert "## Notes" in card
        assert "Quote phrases with spaces." in card
