"""App Store Connect MCP Server - Model Context Protocol integration.

This package exposes the App Store Connect API to AI assistants as MCP tools.

Modules:
- server: stdio MCP server implementation
- formatters: Response formatting utilities
- tools: MCP tool definitions
- handlers: Tool implementation handlers
"""

__version__ = "0.1.0"

from . import formatters
from . import tools
from . import handlers

__all__ = ["formatters", "tools", "handlers", "__version__"]
