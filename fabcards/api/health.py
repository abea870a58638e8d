"""
Health and service info endpoints.

Both report store statistics so a probe can tell that the corpus loaded.
"""

from importlib.metadata import version as pkg_version

from fastapi import APIRouter
from pydantic import BaseModel

from fabcards.api.dependencies import StoreDep
from fabcards.config import settings

router = APIRouter(tags=["health"])

ENDPOINTS = {
    "GET /": "API info",
    "GET /health": "Health check with stats",
    "GET /cards": (
        "List/search cards (params: name, type, class, set, pitch, keyword, q, "
        "legal_in, limit, offset)"
    ),
    "GET /cards/{id}": "Get card by unique_id or name",
    "GET /cards/{id}/legality": "Get card legality across all formats",
    "GET /sets": "List/search sets (params: name, id, q)",
    "GET /sets/{id}": "Get set details with cards",
    "GET /keywords": "List all keywords",
    "GET /keywords/{name}": "Get keyword description",
    "GET /abilities": "List all abilities",
    "GET /types": "List all card types",
    "GET /tools": "List tool definitions",
    "POST /tools/{name}": "Execute a tool (body: {\"arguments\": {...}})",
}


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    stats: dict[str, int]


class InfoResponse(BaseModel):
    """Service description."""

    name: str
    version: str
    endpoints: dict[str, str]
    stats: dict[str, int]
    indexes: dict[str, int]


@router.get("/", response_model=InfoResponse)
async def index(store: StoreDep) -> InfoResponse:
    """Describe the service and its endpoints."""
    data_stats, index_stats = store.stats()
    return InfoResponse(
        name=settings.app_name,
        version=pkg_version("fabcards"),
        endpoints=ENDPOINTS,
        stats=data_stats,
        indexes=index_stats,
    )


@router.get("/health", response_model=HealthResponse)
async def health(store: StoreDep) -> HealthResponse:
    """
    Liveness probe.

    The store is built before the app accepts requests, so a response here
    means the corpus is loaded.
    """
    data_stats, _ = store.stats()
    return HealthResponse(status="ok", stats=data_stats)
