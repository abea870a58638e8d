"""MCP tool definitions for assistant integration."""

from fabcards.mcp.tools import (
    TOOL_DEFINITIONS,
    ToolDefinition,
    execute_tool,
    format_card_full,
    format_card_summary,
)

__all__ = [
    "TOOL_DEFINITIONS",
    "ToolDefinition",
    "execute_tool",
    "format_card_full",
    "format_card_summary",
]
