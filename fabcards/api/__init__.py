from fabcards.api.cards import router as cards_router
from fabcards.api.health import router as health_router
from fabcards.api.keywords import router as keywords_router
from fabcards.api.sets import router as sets_router
from fabcards.api.tools import router as tools_router

__all__ = [
    "cards_router",
    "health_router",
    "keywords_router",
    "sets_router",
    "tools_router",
]
