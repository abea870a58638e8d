"""
Card search service.

Structured, multi-field card search over the loaded store.

Supports queries like:
- "Ninja attacks with go again" -> card_class="Ninja", keyword="go again"
- "Blue pitch Generic cards"    -> card_class="Generic", pitch="3"
- "Cards that draw"             -> text_query="draw a card"
- "Blitz-legal cards in WTR"    -> set_id="WTR", legal_in=Format.BLITZ

ALGORITHM:
1. Candidate selection from the narrowest applicable index, in priority
   order class -> type -> keyword -> set; otherwise the full collection.
2. Residual filtering: every predicate is applied (logical AND) to the
   candidates, in collection order.
3. Total count of the filtered result.
4. Pagination: offset, then limit (limit <= 0 means unbounded).

INVARIANTS:
- Index-accelerated results equal a full scan with the same predicates
  (same cards, same order).
- Never raises: malformed or absent fields mean "no constraint".
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from fabcards.models.card import Card
from fabcards.models.legality import Format, parse_format

if TYPE_CHECKING:
    from fabcards.services.card_store import CardStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CardFilter:
    """
    Card search criteria. All set fields are ANDed together.

    Attributes:
        name: Substring of the card name (case-insensitive)
        type: Exact type tag (e.g., "Action", "Attack", "Equipment")
        card_class: Exact class, case-insensitive (e.g., "Ninja")
        set_id: Exact set code, case-insensitive (e.g., "WTR")
        pitch: Exact pitch value ("1", "2" or "3")
        keyword: Substring of any card keyword (case-insensitive)
        text_query: Substring of the plain ability text (case-insensitive)
        legal_in: Only cards legal in this format
        limit: Page size; 0 or less means unbounded
        offset: Number of matches to skip
    """

    name: str = ""
    type: str = ""
    card_class: str = ""
    set_id: str = ""
    pitch: str = ""
    keyword: str = ""
    text_query: str = ""
    legal_in: Format | None = None
    limit: int = 0
    offset: int = 0

    @classmethod
    def from_params(
        cls,
        *,
        name: Any = None,
        type: Any = None,
        card_class: Any = None,
        set_id: Any = None,
        pitch: Any = None,
        keyword: Any = None,
        text_query: Any = None,
        legal_in: Any = None,
        limit: Any = None,
        offset: Any = None,
        default_limit: int = 0,
        max_limit: int | None = None,
    ) -> CardFilter:
        """
        Build a filter from untrusted inputs (query strings, tool arguments).

        Normalization rules:
        - Non-string values for text fields are ignored
        - Unknown legal_in tokens are ignored
        - Non-numeric limit falls back to default_limit; limit is capped at
          max_limit when given
        - Non-numeric or negative offset becomes 0
        """
        resolved_limit = _coerce_int(limit, default_limit)
        if max_limit is not None and resolved_limit > max_limit:
            resolved_limit = max_limit

        return cls(
            name=_coerce_str(name),
            type=_coerce_str(type),
            card_class=_coerce_str(card_class),
            set_id=_coerce_str(set_id),
            pitch=_coerce_str(pitch),
            keyword=_coerce_str(keyword),
            text_query=_coerce_str(text_query),
            legal_in=parse_format(legal_in) if isinstance(legal_in, (str, Format)) else None,
            limit=resolved_limit,
            offset=max(_coerce_int(offset, 0), 0),
        )


def _coerce_str(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _coerce_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def matches_filter(card: Card, card_filter: CardFilter) -> bool:
    """Check a single card against every predicate in the filter."""
    # Name filter (partial match)
    if card_filter.name and card_filter.name.lower() not in card.name.lower():
        return False

    # Type filter (exact tag)
    if card_filter.type and not card.has_type(card_filter.type):
        return False

    # Class filter
    if card_filter.card_class and card.get_class().lower() != card_filter.card_class.lower():
        return False

    # Set filter (any printing)
    if card_filter.set_id:
        set_id = card_filter.set_id.upper()
        if not any(printing.set_id.upper() == set_id for printing in card.printings):
            return False

    # Pitch filter
    if card_filter.pitch and card.pitch != card_filter.pitch:
        return False

    # Keyword filter (partial match against any keyword)
    if card_filter.keyword:
        needle = card_filter.keyword.lower()
        if not any(needle in kw.lower() for kw in card.card_keywords):
            return False

    # Text search
    if card_filter.text_query:
        if card_filter.text_query.lower() not in card.functional_text_plain.lower():
            return False

    # Format legality
    if card_filter.legal_in is not None and not card.get_legality(card_filter.legal_in).legal:
        return False

    return True


def select_candidates(store: CardStore, card_filter: CardFilter) -> tuple[Sequence[Card], str]:
    """
    Pick the narrowest index bucket that can answer the filter.

    Returns:
        (candidates, index_name). index_name is "full_scan" when no index
        applies. Candidates are always in collection order and contain each
        card at most once.
    """
    if card_filter.card_class:
        return store.cards_by_class.get(card_filter.card_class.lower(), ()), "class"

    if card_filter.type:
        return store.cards_by_type.get(card_filter.type, ()), "type"

    if card_filter.keyword:
        # Union of every bucket whose keyword contains the query
        needle = card_filter.keyword.lower()
        buckets = [
            cards for keyword, cards in store.cards_by_keyword.items() if needle in keyword.lower()
        ]
        return store.merge_in_collection_order(buckets), "keyword"

    if card_filter.set_id:
        # The set bucket holds one entry per printing
        bucket = store.cards_by_set_id.get(card_filter.set_id.upper(), ())
        return store.merge_in_collection_order([bucket]), "set"

    return store.cards, "full_scan"


def paginate(results: list[Card], limit: int, offset: int) -> list[Card]:
    """Slice a result list. offset past the end gives an empty page."""
    if offset > 0:
        if offset >= len(results):
            return []
        results = results[offset:]

    if limit > 0 and len(results) > limit:
        results = results[:limit]

    return results


def search_cards(store: CardStore, card_filter: CardFilter) -> tuple[list[Card], int]:
    """
    Search cards matching the filter.

    Args:
        store: Loaded card store
        card_filter: Search criteria

    Returns:
        (page, total) where total counts all matches before pagination.
    """
    candidates, index_name = select_candidates(store, card_filter)

    results = [card for card in candidates if matches_filter(card, card_filter)]
    total = len(results)

    logger.debug(
        "Card search via %s: %d candidates, %d matches",
        index_name,
        len(candidates),
        total,
    )

    return paginate(results, card_filter.limit, card_filter.offset), total


def scan_cards(cards: Sequence[Card], card_filter: CardFilter) -> list[Card]:
    """Brute-force filter over a card sequence, ignoring pagination."""
    return [card for card in cards if matches_filter(card, card_filter)]
