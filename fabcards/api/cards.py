"""
Card API endpoints.

Provides search, single-card lookup and per-format legality.
"""

from typing import Annotated, Any

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel, Field

from fabcards.api.dependencies import StoreDep
from fabcards.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from fabcards.models.legality import all_legalities
from fabcards.services.card_search import CardFilter

router = APIRouter(prefix="/cards", tags=["cards"])


class CardListResponse(BaseModel):
    """Response model for a page of cards."""

    data: list[dict[str, Any]]
    total: int
    limit: int
    offset: int


class LegalityResponse(BaseModel):
    """Legality of a card in one format."""

    format: str
    legal: bool
    living_legend: bool = False
    banned: bool = False
    suspended: bool = False
    restricted: bool = False


class CardLegalityResponse(BaseModel):
    """Legality of a card across every supported format."""

    card_id: str
    card_name: str
    legalities: list[LegalityResponse] = Field(default_factory=list)


@router.get("", response_model=CardListResponse)
async def list_cards(
    store: StoreDep,
    name: str | None = None,
    type: str | None = None,
    card_class: Annotated[str | None, Query(alias="class")] = None,
    set_id: Annotated[str | None, Query(alias="set")] = None,
    pitch: str | None = None,
    keyword: str | None = None,
    q: str | None = None,
    legal_in: str | None = None,
    limit: str | None = None,
    offset: str | None = None,
) -> CardListResponse:
    """
    Search cards.

    Every parameter is optional and all given parameters must match.
    Malformed limit/offset values fall back to their defaults rather than
    failing the request.
    """
    card_filter = CardFilter.from_params(
        name=name,
        type=type,
        card_class=card_class,
        set_id=set_id,
        pitch=pitch,
        keyword=keyword,
        text_query=q,
        legal_in=legal_in,
        limit=limit,
        offset=offset,
        default_limit=DEFAULT_PAGE_SIZE,
        max_limit=MAX_PAGE_SIZE,
    )

    cards, total = store.search_cards(card_filter)

    return CardListResponse(
        data=[card.to_dict() for card in cards],
        total=total,
        limit=card_filter.limit,
        offset=card_filter.offset,
    )


@router.get("/{card_id}", response_model=dict[str, Any])
async def get_card(card_id: str, store: StoreDep) -> dict[str, Any]:
    """Get a card by unique ID, or by exact name when no ID matches."""
    card = store.get_card(card_id)
    if card is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Card '{card_id}' not found",
        )
    return card.to_dict()


@router.get("/{card_id}/legality", response_model=CardLegalityResponse)
async def get_card_legality(card_id: str, store: StoreDep) -> CardLegalityResponse:
    """Get a card's legality in every format."""
    card = store.get_card_by_id(card_id)
    if card is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Card '{card_id}' not found",
        )

    return CardLegalityResponse(
        card_id=card.unique_id,
        card_name=card.name,
        legalities=[LegalityResponse(**legality.to_dict()) for legality in all_legalities(card)],
    )
