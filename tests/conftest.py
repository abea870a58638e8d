import json
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from fabcards.api.dependencies import get_store
from fabcards.config import DEFAULT_DATA_DIR
from fabcards.main import app
from fabcards.services.card_store import CardStore
from fabcards.services.loader import (
    ABILITY_FILE,
    CARD_FILE,
    KEYWORD_FILE,
    SET_FILE,
    TYPE_FILE,
)


@pytest.fixture(scope="session")
def store() -> CardStore:
    """Store built from the bundled data snapshot.

    The store is immutable, so one instance is shared by the whole session.
    """
    return CardStore.load(DEFAULT_DATA_DIR)


def make_card(unique_id: str, name: str, **fields: Any) -> dict[str, Any]:
    """Minimal upstream card record; extra fields override the defaults."""
    record: dict[str, Any] = {
        "unique_id": unique_id,
        "name": name,
        "types": [],
        "card_keywords": [],
        "functional_text_plain": "",
        "printings": [],
    }
    record.update(fields)
    return record


def make_printing(set_id: str, unique_id: str | None = None, **fields: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "unique_id": unique_id or f"p-{set_id.lower()}",
        "set_id": set_id,
    }
    record.update(fields)
    return record


def make_raw_dataset(
    cards: list[dict[str, Any]] | None = None,
    sets: list[dict[str, Any]] | None = None,
    keywords: list[dict[str, Any]] | None = None,
    abilities: list[dict[str, Any]] | None = None,
    types: list[dict[str, Any]] | None = None,
) -> dict[str, str]:
    """Serialize records into the file mapping accepted by load_dataset."""
    return {
        TYPE_FILE: json.dumps(types or []),
        CARD_FILE: json.dumps(cards or []),
        SET_FILE: json.dumps(sets or []),
        KEYWORD_FILE: json.dumps(keywords or []),
        ABILITY_FILE: json.dumps(abilities or []),
    }


@pytest.fixture
async def client(store: CardStore):
    """Async test client serving the shared store."""
    app.dependency_overrides[get_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
