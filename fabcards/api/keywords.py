"""
Reference data endpoints: keywords, abilities and card types.
"""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from fabcards.api.dependencies import StoreDep

router = APIRouter(tags=["reference"])


class KeywordResponse(BaseModel):
    """A keyword and its rules text."""

    unique_id: str
    name: str
    description: str = ""
    description_plain: str = ""


class NamedEntryResponse(BaseModel):
    """A flat reference record (ability or type)."""

    unique_id: str
    name: str


@router.get("/keywords", response_model=list[KeywordResponse])
async def list_keywords(store: StoreDep) -> list[KeywordResponse]:
    return [KeywordResponse(**keyword.to_dict()) for keyword in store.keywords]


@router.get("/keywords/{name}", response_model=KeywordResponse)
async def get_keyword(name: str, store: StoreDep) -> KeywordResponse:
    """Get a keyword by exact name (case-insensitive)."""
    keyword = store.get_keyword_by_name(name)
    if keyword is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Keyword '{name}' not found",
        )
    return KeywordResponse(**keyword.to_dict())


@router.get("/abilities", response_model=list[NamedEntryResponse])
async def list_abilities(store: StoreDep) -> list[NamedEntryResponse]:
    return [NamedEntryResponse(unique_id=a.unique_id, name=a.name) for a in store.abilities]


@router.get("/types", response_model=list[NamedEntryResponse])
async def list_types(store: StoreDep) -> list[NamedEntryResponse]:
    return [NamedEntryResponse(unique_id=t.unique_id, name=t.name) for t in store.types]
