"""App Store Connect MCP Server - Expose App Store Connect to AI assistants."""
import os
import sys
import asyncio
import logging
import traceback
from typing import Any

import httpx
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import (
    Tool,
    TextContent,
    ImageContent,
    EmbeddedResource,
)

from asc_core.auth import load_credentials
from asc_core.client import AppStoreConnectClient, create_http_client
from asc_core.errors import ApiError, AppStoreConnectError

from . import formatters
from . import tools
from . import handlers


# Logging goes to stderr; stdout carries the MCP stdio protocol
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stderr,
    force=True
)
logger = logging.getLogger("asc-mcp")


# MCP Server instance
app = Server("app-store-connect")


@app.list_tools()
async def list_tools() -> list[Tool]:
    """List available MCP tools for App Store Connect."""
    return tools.get_tools()


@app.call_tool()
async def call_tool(name: str, arguments: Any) -> list[TextContent | ImageContent | EmbeddedResource]:
    """Handle MCP tool calls by delegating to the tool handlers."""
    logger.info(f"Tool call: {name} with arguments: {arguments}")

    handler = handlers.HANDLERS.get(name)
    if not handler:
        logger.warning(f"Unknown tool requested: {name}")
        return formatters.text_content(f"Unknown tool: {name}")

    async with create_http_client() as http:
        client = AppStoreConnectClient(http)
        try:
            return await handler(dict(arguments or {}), client)

        except ApiError as e:
            # Remote rejections are shown to the agent verbatim
            logger.error(f"App Store Connect rejected {name} with HTTP {e.status_code}:\n{e.detail}")
            return formatters.text_content(str(e))

        except httpx.RequestError as e:
            # Network/connection errors
            logger.error(f"Request error during {name} call:")
            logger.error(f"  Error type: {type(e).__name__}")
            logger.error(f"  Error message: {str(e)}")
            return formatters.text_content(formatters.format_error(f"Connection failed - {str(e)}"))

        except Exception as e:
            # Catch-all for unexpected errors
            logger.error(f"Unexpected error during {name} call:")
            logger.error(f"  Error type: {type(e).__name__}")
            logger.error(f"  Error message: {str(e)}")
            logger.error(f"  Arguments: {arguments}")
            logger.error(f"  Traceback:\n{traceback.format_exc()}")
            return formatters.text_content(formatters.format_error(f"{type(e).__name__}: {str(e)}"))


async def main():
    """Run the MCP server."""
    # Validate credentials up front so a misconfigured server never accepts work
    try:
        load_credentials()
    except AppStoreConnectError as e:
        logger.error(f"Auth configuration error: {e}")
        sys.exit(1)

    logger.info("App Store Connect MCP server starting on stdio")
    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())


def run():
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
