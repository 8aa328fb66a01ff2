"""Command server factory: exposes a dispatcher as MCP tools.

Registers 3 tools: {domain}, {domain}_complete, {domain}_help.
Embeds the command reference in the main tool description.
"""

from __future__ import annotations

import logging

from mcp.server.fastmcp import FastMCP
from mcp.types import TextContent

from command_syntax.dispatcher import CommandDispatcher
from command_syntax.formatter import format_result
from command_syntax.registry import CommandRegistry

logger = logging.getLogger(__name__)


def _build_tool_description(
    domain: str,
    registry: CommandRegistry,
    prefix: str = "",
    extra_sections: dict[str, str] | None = None,
) -> str:
    """Build the inline tool description embedding the command reference."""
    lines: list[str] = []
    lines.append(
        f"Run {domain} commands. Each line follows: "
        f"{prefix}COMMAND [ARGUMENT ...]\n"
        f"Call {domain}_help for the full reference card.\n"
    )

    # Group commands by category
    seen_categories: list[str] = []
    for c in registry.commands:
        if c.category not in seen_categories:
            seen_categories.append(c.category)

    for cat in seen_categories:
        cat_title = cat.replace("_", " ").replace("-", " ").upper()
        lines.append(f"{cat_title}:")
        for c in registry.commands:
            if c.category != cat:
                continue
            for usage in c.usage_lines():
                lines.append(f"  {prefix}{usage}")
        lines.append("")

    if extra_sections:
        for title, content in extra_sections.items():
            lines.append(f"{title.upper()}:")
            lines.append(content)
            lines.append("")

    return "\n".join(lines)


def run_lines(dispatcher: CommandDispatcher, lines: list[str]) -> str:
    """Execute each line in order, one result line per command.

    A handler exception is reported for its line and does not stop the
    remaining lines.
    """
    results: list[str] = []
    for line in lines:
        try:
            result = dispatcher.execute(line)
        except Exception as exc:
            logger.exception("Command %r raised", line)
            results.append(format_result(False, f"{line}: {exc}"))
            continue

        message = result.message or (line.strip() if result.success else "")
        results.append(format_result(result.success, message))
    return "\n".join(results)


def complete_line(dispatcher: CommandDispatcher, line: str) -> str:
    """Completion candidates for *line*, one per output line."""
    candidates = dispatcher.complete(line)
    if not candidates:
        resolution = dispatcher.resolve(line)
        if resolution.error:
            return format_result(False, resolution.error)
        return ""
    return "\n".join(candidates)


def create_command_server(
    domain: str,
    dispatcher: CommandDispatcher,
    *,
    extra_sections: dict[str, str] | None = None,
    **kwargs,
) -> FastMCP:
    """Create a fully wired MCP server for the given dispatcher.

    Registers 3 tools:
    - ``{domain}`` -- execute command lines (batch)
    - ``{domain}_complete`` -- completion candidates for a partial line
    - ``{domain}_help`` -- reference card

    Parameters
    ----------
    domain : str
        Domain name, used as tool name prefix.
    dispatcher : CommandDispatcher
        Dispatcher holding the registered commands.
    extra_sections : dict[str, str] | None
        Additional sections for the reference card.
    **kwargs
        Additional arguments passed to FastMCP constructor.

    Returns
    -------
    FastMCP
        Configured MCP server ready to run.
    """
    registry = dispatcher.registry
    mcp = FastMCP(**kwargs)

    tool_description = _build_tool_description(
        domain, registry, dispatcher.settings.prefix, extra_sections
    )
    reference_card = registry.generate_reference_card(extra_sections)

    @mcp.tool(name=domain, description=tool_description, structured_output=False)
    def execute_lines(lines: list[str]) -> TextContent:
        return TextContent(type="text", text=run_lines(dispatcher, lines))

    @mcp.tool(
        name=f"{domain}_complete",
        description=f"Complete the last word of a partial {domain} command line.",
        structured_output=False,
    )
    def execute_complete(line: str) -> TextContent:
        return TextContent(type="text", text=complete_line(dispatcher, line))

    @mcp.tool(
        name=f"{domain}_help",
        description=f"Returns the {domain} reference card with all syntax.",
        structured_output=False,
    )
    def get_help() -> str:
        return reference_card

    logger.info("Created %s server with %d command(s)", domain, len(registry.commands))
    return mcp
