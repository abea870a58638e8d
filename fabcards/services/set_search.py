"""
Set search service.

Substring search over card sets, plus deduplication of the per-set card
index (a card with several printings in one set is listed once).
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from fabcards.models.card import Card
from fabcards.models.card_set import CardSet


@dataclass(frozen=True, slots=True)
class SetFilter:
    """
    Set search criteria. All set fields are ANDed together.

    Attributes:
        name: Substring of the set name (case-insensitive)
        id: Substring of the set code (case-insensitive)
        query: Substring of either the name or the code
    """

    name: str = ""
    id: str = ""
    query: str = ""

    def is_empty(self) -> bool:
        return not (self.name or self.id or self.query)


def matches_set_filter(card_set: CardSet, set_filter: SetFilter) -> bool:
    set_name = card_set.name.lower()
    set_code = card_set.id.lower()

    if set_filter.name and set_filter.name.lower() not in set_name:
        return False

    if set_filter.id and set_filter.id.lower() not in set_code:
        return False

    if set_filter.query:
        query = set_filter.query.lower()
        if query not in set_name and query not in set_code:
            return False

    return True


def search_sets(sets: Sequence[CardSet], set_filter: SetFilter) -> list[CardSet]:
    """
    Search sets matching the filter.

    An empty filter returns every set, in collection order.
    """
    if set_filter.is_empty():
        return list(sets)
    return [card_set for card_set in sets if matches_set_filter(card_set, set_filter)]


def dedupe_cards(cards: Iterable[Card]) -> list[Card]:
    """Keep the first occurrence of each unique_id, preserving order."""
    seen: set[str] = set()
    results: list[Card] = []
    for card in cards:
        if card.unique_id not in seen:
            seen.add(card.unique_id)
            results.append(card)
    return results
