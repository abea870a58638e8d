"""Request-scoped access to the shared card store."""

from typing import Annotated

from fastapi import Depends, Request

from fabcards.services.card_store import CardStore


def get_store(request: Request) -> CardStore:
    """Return the store built at startup by the application lifespan."""
    store: CardStore = request.app.state.store
    return store


StoreDep = Annotated[CardStore, Depends(get_store)]
