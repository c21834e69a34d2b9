"""MCP server exposing one blueprint as a single tool over stdio."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from mcp import types as mcp_types
from mcp.server import Server
from mcp.server import stdio as mcp_stdio

from studio_mcp import __version__
from studio_mcp.blueprint import Blueprint
from studio_mcp.config.settings import Settings, settings as default_settings
from studio_mcp.errors import CommandExecutionError, UnknownToolError
from studio_mcp.tools.run_command import execute

server_logger = logging.getLogger(__name__)


def describe_tool(blueprint: Blueprint) -> Dict[str, Any]:
    """Return the ``tools/list`` descriptor of ``blueprint`` as plain JSON data."""
    return {
        "name": blueprint.tool_name,
        "description": blueprint.tool_description,
        "inputSchema": blueprint.input_schema,
    }


async def list_tools(blueprint: Blueprint) -> List[mcp_types.Tool]:
    descriptor = describe_tool(blueprint)
    return [
        mcp_types.Tool(
            name=descriptor["name"],
            description=descriptor["description"],
            inputSchema=descriptor["inputSchema"],
        )
    ]


async def call_tool(
    blueprint: Blueprint,
    name: str,
    arguments: Optional[Dict[str, Any]],
    config: Optional[Settings] = None,
) -> List[mcp_types.TextContent]:
    """Render the blueprint with ``arguments`` and run the resulting command.

    Raises:
        UnknownToolError: If ``name`` is not the blueprint's tool name.
        CommandExecutionError: If the command fails; the SDK turns this into
            an ``isError`` result carrying the command output.
    """
    config = config or default_settings
    if name != blueprint.tool_name:
        server_logger.warning(f"Rejected call to unknown tool '{name}'")
        raise UnknownToolError(name)

    argv = blueprint.build_command_args(arguments or {})
    server_logger.info(f"{name} called, running {argv}")
    try:
        output = await execute(
            argv,
            timeout=config.command_timeout,
            cwd=config.working_directory,
            extra_env=config.extra_env,
        )
    except CommandExecutionError as exc:
        server_logger.warning(f"{name} failed: {exc}")
        raise
    return [mcp_types.TextContent(type="text", text=output)]


def create_server(blueprint: Blueprint, config: Optional[Settings] = None) -> Server:
    """Build a low-level MCP server whose only tool is ``blueprint``."""
    config = config or default_settings
    app = Server(config.mcp_server_name, version=__version__)

    @app.list_tools()
    async def _list_tools() -> List[mcp_types.Tool]:
        return await list_tools(blueprint)

    @app.call_tool()
    async def _call_tool(name: str, arguments: Dict[str, Any]) -> List[mcp_types.TextContent]:
        return await call_tool(blueprint, name, arguments, config)

    return app


async def run_stdio(blueprint: Blueprint, config: Optional[Settings] = None) -> None:
    """Serve ``blueprint`` over stdin/stdout until the client disconnects."""
    app = create_server(blueprint, config)
    server_logger.info(f"Serving {blueprint.tool_name!r}: {blueprint.command_format}")
    async with mcp_stdio.stdio_server() as (read_stream, write_stream):
        await app.run(
            read_stream,
            write_stream,
            app.create_initialization_options(),
        )
