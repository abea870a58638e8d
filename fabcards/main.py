import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fabcards.api import (
    cards_router,
    health_router,
    keywords_router,
    sets_router,
    tools_router,
)
from fabcards.config import settings
from fabcards.services.card_store import CardStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load the card corpus once; a DataLoadError aborts startup."""
    app.state.store = CardStore.load(settings.data_dir)
    logger.info("Card store ready (%d cards)", len(app.state.store.cards))
    yield


app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    version=pkg_version("fabcards"),
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(cards_router)
app.include_router(sets_router)
app.include_router(keywords_router)
app.include_router(tools_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)
