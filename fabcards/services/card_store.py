"""
Card store.

Holds the loaded corpus and every secondary index over it. The store is
constructed once, fully, and never mutated afterwards: all collections are
tuples and all indexes are read-only mappings of tuples. Concurrent readers
need no locking.

Indexes built at construction:
- cards_by_id:      unique_id -> Card
- cards_by_name:    lowercased name -> Cards (pitch variants share a name)
- cards_by_set_id:  upper-cased set code -> Cards, one entry per printing
- cards_by_class:   lowercased derived class -> Cards
- cards_by_type:    type tag -> Cards
- cards_by_keyword: keyword -> Cards
- sets_by_id:       upper-cased set code -> CardSet
- keywords_by_name: lowercased name -> Keyword
- types_by_name:    type name -> CardType

Every bucket lists cards in collection order.
"""

import heapq
import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from types import MappingProxyType

from fabcards.models.card import Card
from fabcards.models.card_set import CardSet
from fabcards.models.reference import Ability, CardType, Keyword
from fabcards.services import card_search, set_search
from fabcards.services.card_search import CardFilter
from fabcards.services.loader import Dataset, load_dataset
from fabcards.services.set_search import SetFilter

logger = logging.getLogger(__name__)

CardIndex = Mapping[str, tuple[Card, ...]]


def _freeze(index: Mapping[str, list[Card]]) -> CardIndex:
    return MappingProxyType({key: tuple(cards) for key, cards in index.items()})


class CardStore:
    """
    Read-only, indexed card corpus.

    Build one with CardStore(dataset) or CardStore.load(), then share it with
    every consumer. Lookups that find nothing return None or an empty list.
    """

    def __init__(self, dataset: Dataset) -> None:
        self.cards: tuple[Card, ...] = dataset.cards
        self.sets: tuple[CardSet, ...] = dataset.sets
        self.keywords: tuple[Keyword, ...] = dataset.keywords
        self.abilities: tuple[Ability, ...] = dataset.abilities
        self.types: tuple[CardType, ...] = dataset.types

        by_id: dict[str, Card] = {}
        by_name: defaultdict[str, list[Card]] = defaultdict(list)
        by_set_id: defaultdict[str, list[Card]] = defaultdict(list)
        by_class: defaultdict[str, list[Card]] = defaultdict(list)
        by_type: defaultdict[str, list[Card]] = defaultdict(list)
        by_keyword: defaultdict[str, list[Card]] = defaultdict(list)
        # Collection position per card object, used to restore collection
        # order when several buckets are merged
        positions: dict[int, int] = {}
        multi_class: list[str] = []
        duplicate_ids: list[str] = []

        for position, card in enumerate(self.cards):
            positions[id(card)] = position
            if card.unique_id in by_id:
                duplicate_ids.append(card.unique_id)
            by_id[card.unique_id] = card
            by_name[card.name.lower()].append(card)

            for printing in card.printings:
                by_set_id[printing.set_id.upper()].append(card)

            card_class = card.get_class()
            if card_class:
                by_class[card_class.lower()].append(card)
            if len(card.class_tags()) > 1:
                multi_class.append(card.unique_id)

            for card_type in dict.fromkeys(card.types):
                by_type[card_type].append(card)

            for keyword in dict.fromkeys(card.card_keywords):
                by_keyword[keyword].append(card)

        if multi_class:
            logger.warning(
                "%d cards carry more than one class tag; first tag is used as class: %s",
                len(multi_class),
                multi_class[:10],
            )
        if duplicate_ids:
            logger.warning(
                "%d cards reuse an earlier unique_id; the later record wins the ID: %s",
                len(duplicate_ids),
                duplicate_ids[:10],
            )

        self.cards_by_id: Mapping[str, Card] = MappingProxyType(by_id)
        self.cards_by_name = _freeze(by_name)
        self.cards_by_set_id = _freeze(by_set_id)
        self.cards_by_class = _freeze(by_class)
        self.cards_by_type = _freeze(by_type)
        self.cards_by_keyword = _freeze(by_keyword)
        self.sets_by_id: Mapping[str, CardSet] = MappingProxyType(
            {card_set.id.upper(): card_set for card_set in self.sets}
        )
        self.keywords_by_name: Mapping[str, Keyword] = MappingProxyType(
            {keyword.name.lower(): keyword for keyword in self.keywords}
        )
        self.types_by_name: Mapping[str, CardType] = MappingProxyType(
            {card_type.name: card_type for card_type in self.types}
        )
        self._positions: Mapping[int, int] = MappingProxyType(positions)

    @classmethod
    def load(cls, source: Path | Mapping[str, bytes | str] | None = None) -> "CardStore":
        """Load the corpus and build the store. Raises DataLoadError on failure."""
        return cls(load_dataset(source))

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_card_by_id(self, unique_id: str) -> Card | None:
        return self.cards_by_id.get(unique_id)

    def get_cards_by_name(self, name: str) -> list[Card]:
        """All cards with exactly this name (case-insensitive), e.g. every pitch."""
        return list(self.cards_by_name.get(name.lower(), ()))

    def get_card(self, id_or_name: str) -> Card | None:
        """
        Resolve a card by unique ID, falling back to the first exact name match.
        """
        card = self.get_card_by_id(id_or_name)
        if card is not None:
            return card
        by_name = self.cards_by_name.get(id_or_name.lower())
        return by_name[0] if by_name else None

    def get_set_by_id(self, set_id: str) -> CardSet | None:
        """Set by code (e.g., "WTR"), case-insensitive."""
        return self.sets_by_id.get(set_id.upper())

    def get_keyword_by_name(self, name: str) -> Keyword | None:
        """Keyword by exact name, case-insensitive."""
        return self.keywords_by_name.get(name.lower())

    def get_type_by_name(self, name: str) -> CardType | None:
        return self.types_by_name.get(name)

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def search_cards(self, card_filter: CardFilter) -> tuple[list[Card], int]:
        """Filtered, paginated card search. Returns (page, total)."""
        return card_search.search_cards(self, card_filter)

    def search_sets(self, set_filter: SetFilter) -> list[CardSet]:
        return set_search.search_sets(self.sets, set_filter)

    def get_cards_in_set(self, set_id: str) -> list[Card]:
        """Cards printed in a set, each card once, in collection order."""
        return set_search.dedupe_cards(self.cards_by_set_id.get(set_id.upper(), ()))

    def merge_in_collection_order(self, buckets: Iterable[Sequence[Card]]) -> list[Card]:
        """
        Union index buckets into one list in collection order, each card once.

        Each bucket must already be in collection order.
        """
        results: list[Card] = []
        for card in heapq.merge(*buckets, key=lambda c: self._positions[id(c)]):
            # Copies of one card are adjacent after the merge
            if not results or results[-1] is not card:
                results.append(card)
        return results

    # -------------------------------------------------------------------------
    # Observability
    # -------------------------------------------------------------------------

    def stats(self) -> tuple[dict[str, int], dict[str, int]]:
        """
        Entity counts and index bucket counts.

        Returns:
            (data_stats, index_stats)
        """
        data_stats = {
            "cards": len(self.cards),
            "sets": len(self.sets),
            "keywords": len(self.keywords),
            "abilities": len(self.abilities),
            "types": len(self.types),
        }
        index_stats = {
            "cards_by_id": len(self.cards_by_id),
            "cards_by_name": len(self.cards_by_name),
            "cards_by_set_id": len(self.cards_by_set_id),
            "sets_by_id": len(self.sets_by_id),
            "keywords_by_name": len(self.keywords_by_name),
            "types_by_name": len(self.types_by_name),
            "cards_by_class": len(self.cards_by_class),
            "cards_by_type": len(self.cards_by_type),
            "cards_by_keyword": len(self.cards_by_keyword),
        }
        return data_stats, index_stats
