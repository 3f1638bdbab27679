"""Mention MCP server implementation."""

import logging
import signal
import sys
from typing import Any

import anyio
from dotenv import load_dotenv
from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from . import prompts
from .account import AccountCache
from .client import MentionClient
from .config import Config, load_config
from .consts import PACKAGE_VERSION, SERVER_NAME
from .exceptions import ConfigError, MentionMCPError
from .logging_setup import setup_logging
from .tools import ToolRegistry

logger = logging.getLogger("mention-mcp.server")

INSTRUCTIONS = """
Mention MCP server.

This MCP server allows you to:
1. Inspect the Mention account, its groups and the supported languages and sources.
2. Create, update, pause and resume monitoring alerts.
3. Retrieve mentions and statistics for alerts.

Call get_account_info first: it tells you whether advanced (boolean query)
alerts are available and which groups alerts can be created in.
"""


def format_error(error: MentionMCPError) -> str:
    """Render an error for the agent: kind and message, then details."""
    lines = [f"{error.kind}: {error.message}"]
    if error.errors:
        lines.append("Errors:")
        lines.extend(f"- {e}" for e in error.errors)
    if error.suggestions:
        lines.append("Suggestions:")
        lines.extend(f"- {s}" for s in error.suggestions)
    return "\n".join(lines)


def create_server(registry: ToolRegistry) -> Server:
    """Create the MCP server with handlers bound to `registry`."""
    server = Server(
        name=SERVER_NAME,
        version=PACKAGE_VERSION,
        instructions=INSTRUCTIONS,
    )

    @server.list_tools()
    async def list_tools(_req: types.ListToolsRequest | None = None) -> list[types.Tool]:
        return [
            types.Tool(
                name=definition.name,
                description=definition.description,
                inputSchema=definition.input_schema,
            )
            for definition in registry.list_tools()
        ]

    # Arguments are validated by the tool registry, which reports every
    # violated constraint at once.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
        try:
            result = await registry.invoke(name, arguments)
        except MentionMCPError as e:
            return types.CallToolResult(
                content=[types.TextContent(type="text", text=format_error(e))],
                isError=True,
            )
        return types.CallToolResult(content=result.content)

    @server.list_prompts()
    async def list_prompts(_req: types.ListPromptsRequest | None = None) -> list[types.Prompt]:
        return prompts.list_prompts()

    @server.get_prompt()
    async def get_prompt(name: str, arguments: dict[str, str] | None = None) -> types.GetPromptResult:
        return prompts.get_prompt(name, arguments)

    @server.list_resources()
    async def list_resources(_req: types.ListResourcesRequest | None = None) -> list[types.Resource]:
        return []

    return server


def build_registry(config: Config) -> ToolRegistry:
    client = MentionClient(config)
    return ToolRegistry(client, AccountCache(client))


async def serve(config: Config) -> None:
    """Run the server over stdio until the client disconnects."""
    registry = build_registry(config)
    server = create_server(registry)

    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream, write_stream, server.create_initialization_options()
            )
    finally:
        await registry.client.aclose()
        logger.info("Server stopped")


def _exit_on_signal(signum, _frame) -> None:
    # In-flight requests are abandoned
    logger.info(f"Received {signal.Signals(signum).name}, shutting down")
    sys.exit(0)


def main() -> None:
    """Run the MCP server."""
    load_dotenv()

    try:
        config = load_config()
    except ConfigError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        for detail in e.errors:
            print(f"  {detail}", file=sys.stderr)
        sys.exit(1)

    setup_logging(config)
    logger.info(f"Starting {SERVER_NAME} {PACKAGE_VERSION} for {config.base_url}")

    signal.signal(signal.SIGTERM, _exit_on_signal)
    signal.signal(signal.SIGINT, _exit_on_signal)

    anyio.run(serve, config)


if __name__ == "__main__":
    main()
