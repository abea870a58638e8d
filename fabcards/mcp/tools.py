"""
MCP tool definitions for assistant integration.

Defines tools an assistant can call to look up Flesh and Blood cards, sets,
keywords and format legality. Every tool reads from a CardStore passed in by
the caller; results are plain dicts ready for JSON encoding.

Card results come in two shapes:
- summary: identity, type line and whichever of pitch/cost/power/defense
  the card has
- full: summary plus rules text, remaining stats, keywords, traits, the first
  printing's image and the sets the card appears in
"""

import logging
from dataclasses import dataclass
from typing import Any

from fabcards.config import TOOL_DEFAULT_LIMIT, TOOL_MAX_LIMIT
from fabcards.models.card import Card
from fabcards.models.failure import FailureKind, KnownError
from fabcards.models.legality import all_legalities
from fabcards.services.card_search import CardFilter
from fabcards.services.card_store import CardStore
from fabcards.services.set_search import SetFilter

logger = logging.getLogger(__name__)


@dataclass
class ToolDefinition:
    """Definition of an MCP tool."""

    name: str
    description: str
    parameters: dict[str, Any]


_LIMIT_PARAMETER = {
    "type": "integer",
    "description": (
        f"Maximum number of results (default {TOOL_DEFAULT_LIMIT}, max {TOOL_MAX_LIMIT})"
    ),
    "default": TOOL_DEFAULT_LIMIT,
}

TOOL_DEFINITIONS: list[ToolDefinition] = [
    ToolDefinition(
        name="search_cards",
        description=(
            "Search for Flesh and Blood cards by name, type, class, keywords, "
            "or other attributes."
        ),
        parameters={
            "type": "object",
            "properties": {
                "name": {
                    "type": "string",
                    "description": "Filter by card name (partial match)",
                },
                "type": {
                    "type": "string",
                    "description": "Filter by card type (e.g., 'Action', 'Attack', 'Equipment')",
                },
                "class": {
                    "type": "string",
                    "description": "Filter by class (e.g., 'Warrior', 'Ninja', 'Wizard')",
                },
                "set": {
                    "type": "string",
                    "description": "Filter by set code (e.g., 'WTR', 'ARC', 'MON')",
                },
                "pitch": {
                    "type": "string",
                    "enum": ["1", "2", "3"],
                    "description": "Filter by pitch value",
                },
                "keyword": {
                    "type": "string",
                    "description": "Filter by keyword (e.g., 'Go again', 'Dominate')",
                },
                "legal_in": {
                    "type": "string",
                    "enum": ["blitz", "cc", "commoner", "ll", "silver_age", "upf"],
                    "description": "Only cards legal in this format",
                },
                "limit": _LIMIT_PARAMETER,
            },
            "required": [],
        },
    ),
    ToolDefinition(
        name="get_card",
        description="Get full details of a specific Flesh and Blood card by unique ID or name.",
        parameters={
            "type": "object",
            "properties": {
                "id": {
                    "type": "string",
                    "description": "The unique_id or exact name of the card",
                },
            },
            "required": ["id"],
        },
    ),
    ToolDefinition(
        name="list_sets",
        description="List all Flesh and Blood card sets.",
        parameters={"type": "object", "properties": {}, "required": []},
    ),
    ToolDefinition(
        name="search_sets",
        description="Search for Flesh and Blood card sets by name or code.",
        parameters={
            "type": "object",
            "properties": {
                "name": {
                    "type": "string",
                    "description": "Filter by set name (partial match, case-insensitive)",
                },
                "id": {
                    "type": "string",
                    "description": "Filter by set code (partial match, case-insensitive)",
                },
                "q": {
                    "type": "string",
                    "description": "Search both name and code",
                },
            },
            "required": [],
        },
    ),
    ToolDefinition(
        name="get_set",
        description="Get details of a specific set, optionally including its cards.",
        parameters={
            "type": "object",
            "properties": {
                "id": {
                    "type": "string",
                    "description": "The set code (e.g., 'WTR', 'ARC')",
                },
                "include_cards": {
                    "type": "boolean",
                    "description": "Whether to include the list of cards in this set",
                    "default": False,
                },
            },
            "required": ["id"],
        },
    ),
    ToolDefinition(
        name="search_card_text",
        description="Search for cards by text in their abilities or effects.",
        parameters={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Text to search for in card abilities/effects",
                },
                "limit": _LIMIT_PARAMETER,
            },
            "required": ["query"],
        },
    ),
    ToolDefinition(
        name="get_format_legality",
        description="Check a card's legality status across all formats.",
        parameters={
            "type": "object",
            "properties": {
                "id": {
                    "type": "string",
                    "description": "The unique_id or name of the card",
                },
            },
            "required": ["id"],
        },
    ),
    ToolDefinition(
        name="list_keywords",
        description="List all game keywords with their explanations.",
        parameters={"type": "object", "properties": {}, "required": []},
    ),
    ToolDefinition(
        name="get_keyword",
        description="Get the description of a specific keyword.",
        parameters={
            "type": "object",
            "properties": {
                "name": {
                    "type": "string",
                    "description": "The keyword name (e.g., 'Go again', 'Dominate')",
                },
            },
            "required": ["name"],
        },
    ),
]


# =============================================================================
# RESULT FORMATTING
# =============================================================================


def format_card_summary(card: Card) -> dict[str, Any]:
    """Compact card view for result lists. Empty stats are omitted."""
    result: dict[str, Any] = {
        "unique_id": card.unique_id,
        "name": card.name,
        "type_text": card.type_text,
    }

    for field in ("pitch", "cost", "power", "defense"):
        value = getattr(card, field)
        if value:
            result[field] = value

    return result


def format_card_full(card: Card) -> dict[str, Any]:
    """Detailed card view for single-card lookups."""
    result: dict[str, Any] = {
        "unique_id": card.unique_id,
        "name": card.name,
        "type_text": card.type_text,
        "types": list(card.types),
        "functional_text": card.functional_text_plain,
    }

    for field in ("color", "pitch", "cost", "power", "defense", "health", "intelligence"):
        value = getattr(card, field)
        if value:
            result[field] = value

    if card.card_keywords:
        result["keywords"] = list(card.card_keywords)
    if card.traits:
        result["traits"] = list(card.traits)

    if card.printings and card.printings[0].image_url is not None:
        result["image_url"] = card.printings[0].image_url

    set_ids = card.set_ids()
    if set_ids:
        result["sets"] = ", ".join(set_ids)

    return result


def _require_str(arguments: dict[str, Any], key: str) -> str:
    value = arguments.get(key)
    if not isinstance(value, str) or not value.strip():
        raise KnownError(
            kind=FailureKind.MISSING_REQUIRED,
            message=f"{key} is required",
        )
    return value.strip()


def _optional_str(arguments: dict[str, Any], key: str) -> str:
    value = arguments.get(key)
    return value.strip() if isinstance(value, str) else ""


def _resolve_card(store: CardStore, card_id: str) -> Card:
    card = store.get_card(card_id)
    if card is None:
        raise KnownError(
            kind=FailureKind.NOT_FOUND,
            message=f"card not found: {card_id}",
            suggestion="Use search_cards to find the card's unique_id or exact name.",
            status_code=404,
        )
    return card


# =============================================================================
# TOOLS
# =============================================================================


def search_cards_tool(store: CardStore, arguments: dict[str, Any]) -> dict[str, Any]:
    """
    Search cards with structured filters.

    Translates tool arguments like:
    - "Ninja attacks with go again" -> class="Ninja", keyword="go again"
    - "Blitz-legal cards in WTR"    -> set="WTR", legal_in="blitz"
    """
    card_filter = CardFilter.from_params(
        name=arguments.get("name"),
        type=arguments.get("type"),
        card_class=arguments.get("class"),
        set_id=arguments.get("set"),
        pitch=arguments.get("pitch"),
        keyword=arguments.get("keyword"),
        legal_in=arguments.get("legal_in"),
        limit=arguments.get("limit"),
        default_limit=TOOL_DEFAULT_LIMIT,
        max_limit=TOOL_MAX_LIMIT,
    )

    cards, total = store.search_cards(card_filter)
    results = [format_card_summary(card) for card in cards]

    return {"count": len(results), "total": total, "results": results}


def get_card_tool(store: CardStore, arguments: dict[str, Any]) -> dict[str, Any]:
    """Full details of one card, by unique ID or exact name."""
    card = _resolve_card(store, _require_str(arguments, "id"))
    return format_card_full(card)


def list_sets_tool(store: CardStore) -> dict[str, Any]:
    results = [{"id": card_set.id, "name": card_set.name} for card_set in store.sets]
    return {"count": len(results), "sets": results}


def search_sets_tool(store: CardStore, arguments: dict[str, Any]) -> dict[str, Any]:
    set_filter = SetFilter(
        name=_optional_str(arguments, "name"),
        id=_optional_str(arguments, "id"),
        query=_optional_str(arguments, "q"),
    )
    results = [
        {"id": card_set.id, "name": card_set.name} for card_set in store.search_sets(set_filter)
    ]
    return {"count": len(results), "sets": results}


def get_set_tool(store: CardStore, arguments: dict[str, Any]) -> dict[str, Any]:
    """
    Details of one set.

    Card summaries are included only when include_cards is true, since a full
    set can hold hundreds of cards.
    """
    set_id = _require_str(arguments, "id")

    card_set = store.get_set_by_id(set_id)
    if card_set is None:
        raise KnownError(
            kind=FailureKind.NOT_FOUND,
            message=f"set not found: {set_id}",
            suggestion="Use list_sets to see the available set codes.",
            status_code=404,
        )

    result: dict[str, Any] = {
        "id": card_set.id,
        "name": card_set.name,
        "printings": card_set.to_dict()["printings"],
    }

    if arguments.get("include_cards") is True:
        cards = [format_card_summary(card) for card in store.get_cards_in_set(set_id)]
        result["cards"] = cards
        result["card_count"] = len(cards)

    return result


def search_card_text_tool(store: CardStore, arguments: dict[str, Any]) -> dict[str, Any]:
    query = _require_str(arguments, "query")

    card_filter = CardFilter.from_params(
        text_query=query,
        limit=arguments.get("limit"),
        default_limit=TOOL_DEFAULT_LIMIT,
        max_limit=TOOL_MAX_LIMIT,
    )

    cards, _ = store.search_cards(card_filter)
    results = [format_card_summary(card) for card in cards]

    return {"query": query, "count": len(results), "results": results}


def get_format_legality_tool(store: CardStore, arguments: dict[str, Any]) -> dict[str, Any]:
    """Legality of one card in every format, keyed by format name."""
    card = _resolve_card(store, _require_str(arguments, "id"))

    legalities: dict[str, Any] = {}
    for legality in all_legalities(card):
        entry = legality.to_dict()
        legalities[entry.pop("format")] = entry

    return {
        "card_id": card.unique_id,
        "card_name": card.name,
        "legalities": legalities,
    }


def list_keywords_tool(store: CardStore) -> dict[str, Any]:
    results = [
        {"name": keyword.name, "description": keyword.description_plain}
        for keyword in store.keywords
    ]
    return {"count": len(results), "keywords": results}


def get_keyword_tool(store: CardStore, arguments: dict[str, Any]) -> dict[str, Any]:
    name = _require_str(arguments, "name")

    keyword = store.get_keyword_by_name(name)
    if keyword is None:
        raise KnownError(
            kind=FailureKind.NOT_FOUND,
            message=f"keyword not found: {name}",
            suggestion="Use list_keywords to see every keyword.",
            status_code=404,
        )

    return {"name": keyword.name, "description": keyword.description_plain}


def execute_tool(
    store: CardStore,
    tool_name: str,
    arguments: dict[str, Any],
) -> dict[str, Any]:
    """
    Execute an MCP tool by name.

    Args:
        store: Loaded card store
        tool_name: Name of the tool to execute
        arguments: Tool arguments

    Returns:
        Tool result as dict

    Raises:
        KnownError: If a required argument is missing or nothing matches
        ValueError: If tool name is unknown
    """
    logger.debug("Executing tool %s", tool_name)

    if tool_name == "search_cards":
        return search_cards_tool(store, arguments)
    elif tool_name == "get_card":
        return get_card_tool(store, arguments)
    elif tool_name == "list_sets":
        return list_sets_tool(store)
    elif tool_name == "search_sets":
        return search_sets_tool(store, arguments)
    elif tool_name == "get_set":
        return get_set_tool(store, arguments)
    elif tool_name == "search_card_text":
        return search_card_text_tool(store, arguments)
    elif tool_name == "get_format_legality":
        return get_format_legality_tool(store, arguments)
    elif tool_name == "list_keywords":
        return list_keywords_tool(store)
    elif tool_name == "get_keyword":
        return get_keyword_tool(store, arguments)
    else:
        raise ValueError(f"Unknown tool: {tool_name}")
