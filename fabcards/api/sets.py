"""
Set API endpoints.
"""

from typing import Any

from fastapi import APIRouter, HTTPException, status

from fabcards.api.dependencies import StoreDep
from fabcards.services.set_search import SetFilter

router = APIRouter(prefix="/sets", tags=["sets"])


@router.get("", response_model=list[dict[str, Any]])
async def list_sets(
    store: StoreDep,
    name: str | None = None,
    id: str | None = None,
    q: str | None = None,
) -> list[dict[str, Any]]:
    """
    List sets, optionally filtered by name, code, or either.

    With no filter every set is returned.
    """
    set_filter = SetFilter(name=name or "", id=id or "", query=q or "")
    return [card_set.to_dict() for card_set in store.search_sets(set_filter)]


@router.get("/{set_id}", response_model=dict[str, Any])
async def get_set(set_id: str, store: StoreDep) -> dict[str, Any]:
    """Get a set by code with every card printed in it, each card once."""
    card_set = store.get_set_by_id(set_id)
    if card_set is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Set '{set_id}' not found",
        )

    result = card_set.to_dict()
    result["cards"] = [card.to_dict() for card in store.get_cards_in_set(set_id)]
    return result
