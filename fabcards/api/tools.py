"""
Tool invocation endpoints.

Exposes the MCP tool set over HTTP so an agent host can list the tools and
call them against the shared card store.
"""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from fabcards.api.dependencies import StoreDep
from fabcards.mcp.tools import TOOL_DEFINITIONS, execute_tool
from fabcards.models.failure import KnownError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tools", tags=["tools"])

_TOOL_NAMES = frozenset(tool.name for tool in TOOL_DEFINITIONS)


class ToolResponse(BaseModel):
    """A tool definition in JSON-schema form."""

    name: str
    description: str
    input_schema: dict[str, Any]


class ToolCallRequest(BaseModel):
    """Arguments for one tool call."""

    arguments: dict[str, Any] = Field(default_factory=dict)


class ToolCallResponse(BaseModel):
    """Result of one tool call."""

    tool: str
    result: dict[str, Any]


@router.get("", response_model=list[ToolResponse])
async def list_tools() -> list[ToolResponse]:
    return [
        ToolResponse(name=tool.name, description=tool.description, input_schema=tool.parameters)
        for tool in TOOL_DEFINITIONS
    ]


@router.post("/{tool_name}", response_model=ToolCallResponse)
async def call_tool(
    tool_name: str,
    request: ToolCallRequest,
    store: StoreDep,
) -> ToolCallResponse:
    """
    Execute a tool by name.

    Known failures (missing arguments, unknown cards or sets) keep their
    status code and carry the failure detail.
    """
    if tool_name not in _TOOL_NAMES:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Tool '{tool_name}' not found",
        )

    try:
        result = execute_tool(store, tool_name, request.arguments)
    except KnownError as e:
        logger.info("Tool %s failed: %s", tool_name, e.message)
        raise HTTPException(
            status_code=e.status_code,
            detail=e.to_detail().model_dump(mode="json"),
        ) from e

    return ToolCallResponse(tool=tool_name, result=result)
