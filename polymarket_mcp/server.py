"""Bind tool descriptors to an MCP server over stdio."""

from typing import Any, Dict, List, Optional

import anyio
from anyio import to_thread
import mcp.types as types
from loguru import logger
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from polymarket_mcp import __version__
from polymarket_mcp.tools.base import ToolResult, ToolSpec

SERVER_NAME = "polymarket"


def to_mcp_tool(tool: ToolSpec) -> types.Tool:
    return types.Tool(
        name=tool.name,
        description=tool.description,
        inputSchema=tool.input_schema(),
        annotations=types.ToolAnnotations(
            readOnlyHint=not tool.mutating,
            destructiveHint=tool.mutating,
        ),
    )


def to_call_result(result: ToolResult) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=result.text)],
        isError=result.is_error,
    )


async def dispatch(tools_by_name: Dict[str, ToolSpec], name: str, arguments: Optional[Dict[str, Any]]) -> ToolResult:
    """Run one tool call in a worker thread; handlers use blocking HTTP clients."""
    tool = tools_by_name.get(name)
    if tool is None:
        return ToolResult.error(f"Unknown tool: {name}")
    logger.debug(f"Calling {name}")
    return await to_thread.run_sync(tool.call, arguments or {})


def create_server(tools: List[ToolSpec]) -> Server:
    server = Server(SERVER_NAME, version=__version__)
    tools_by_name = {t.name: t for t in tools}

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [to_mcp_tool(t) for t in tools]

    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Dict[str, Any]) -> types.CallToolResult:
        return to_call_result(await dispatch(tools_by_name, name, arguments))

    return server


async def serve_stdio(server: Server) -> None:
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Polymarket MCP Server running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run_stdio(server: Server) -> None:
    anyio.run(serve_stdio, server)
