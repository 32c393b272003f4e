"""Formatting functions for MCP responses.

Agents get App Store Connect documents back verbatim as pretty-printed JSON,
so nothing in a response is lost in translation.
"""
import json

from mcp.types import TextContent


def format_response(response: dict) -> str:
    """Format an App Store Connect JSON:API document for display."""
    return json.dumps(response, indent=2, ensure_ascii=False)


def format_success(message: str) -> str:
    """Format an acknowledgment for operations that return no content."""
    return json.dumps({"success": True, "message": message})


def format_error(message: str) -> str:
    """Format an error message returned to the agent."""
    return f"Error: {message}"


def text_content(text: str) -> list[TextContent]:
    """Wrap text as MCP tool output."""
    return [TextContent(type="text", text=text)]
