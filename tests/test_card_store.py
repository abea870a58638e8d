"""Tests for the indexed card store."""

import dataclasses
import logging

import pytest

from conftest import make_card, make_printing, make_raw_dataset
from fabcards.services.card_store import CardStore


class TestCardLookup:
    def test_get_card_by_id(self, store: CardStore) -> None:
        card = store.get_card_by_id("dawnblade")

        assert card is not None
        assert card.name == "Dawnblade"

    def test_get_card_by_id_is_exact(self, store: CardStore) -> None:
        """IDs are not case-folded."""
        assert store.get_card_by_id("DAWNBLADE") is None
        assert store.get_card_by_id("nope") is None

    def test_get_cards_by_name_returns_pitch_variants(self, store: CardStore) -> None:
        """All cards sharing a name are returned, in collection order."""
        cards = store.get_cards_by_name("Head Jab")

        assert [c.pitch for c in cards] == ["1", "2", "3"]

    @pytest.mark.parametrize("name", ["Enlightened Strike", "enlightened strike"])
    def test_get_cards_by_name_case_insensitive(self, store: CardStore, name: str) -> None:
        cards = store.get_cards_by_name(name)

        assert len(cards) == 1
        assert cards[0].unique_id == "enlightened-strike-red"

    def test_get_cards_by_name_unknown(self, store: CardStore) -> None:
        assert store.get_cards_by_name("Not A Card") == []

    def test_get_card_prefers_id(self, store: CardStore) -> None:
        card = store.get_card("head-jab-blue")

        assert card.pitch == "3"

    def test_get_card_falls_back_to_first_name_match(self, store: CardStore) -> None:
        """A name lookup returns the first printing-order variant."""
        card = store.get_card("head jab")

        assert card.unique_id == "head-jab-red"

    def test_get_card_unknown(self, store: CardStore) -> None:
        assert store.get_card("Nothing Here") is None

    def test_duplicate_id_later_record_wins(self, caplog: pytest.LogCaptureFixture) -> None:
        """The later record takes the ID slot; both stay in the collection."""
        raw = make_raw_dataset(
            cards=[
                make_card("twin", "First Twin"),
                make_card("twin", "Second Twin"),
                make_card("other", "Other"),
            ]
        )

        with caplog.at_level(logging.WARNING, logger="fabcards.services.card_store"):
            store = CardStore.load(raw)

        assert store.get_card_by_id("twin").name == "Second Twin"
        assert len(store.cards) == 3
        assert store.get_cards_by_name("First Twin")[0].unique_id == "twin"
        assert "reuse an earlier unique_id" in caplog.text
        assert "twin" in caplog.text
        assert "other" not in caplog.text


class TestSetLookup:
    @pytest.mark.parametrize("code", ["WTR", "wtr", "Wtr"])
    def test_get_set_by_id_case_insensitive(self, store: CardStore, code: str) -> None:
        card_set = store.get_set_by_id(code)

        assert card_set is not None
        assert card_set.name == "Welcome to Rathe"

    def test_get_set_unknown(self, store: CardStore) -> None:
        assert store.get_set_by_id("XYZ") is None

    def test_set_index_holds_one_entry_per_printing(self, store: CardStore) -> None:
        """A card with two printings in a set appears twice in the raw index."""
        bucket = store.cards_by_set_id["WTR"]
        strikes = [c for c in bucket if c.unique_id == "enlightened-strike-red"]

        assert len(strikes) == 2

    def test_get_cards_in_set_deduplicates(self, store: CardStore) -> None:
        cards = store.get_cards_in_set("WTR")
        ids = [c.unique_id for c in cards]

        assert len(ids) == len(set(ids))
        assert len(cards) == 17
        assert "enlightened-strike-red" in ids

    def test_get_cards_in_set_collection_order(self, store: CardStore) -> None:
        positions = {card.unique_id: i for i, card in enumerate(store.cards)}

        ids = [c.unique_id for c in store.get_cards_in_set("wtr")]

        assert ids == sorted(ids, key=positions.__getitem__)

    def test_reprint_appears_in_both_sets(self, store: CardStore) -> None:
        assert [c.unique_id for c in store.get_cards_in_set("CRU")] == ["sink-below-red"]

    def test_set_without_cards(self, store: CardStore) -> None:
        """A known set with no cards yields an empty list."""
        assert store.get_set_by_id("1HP") is not None
        assert store.get_cards_in_set("1HP") == []

    def test_unknown_set_has_no_cards(self, store: CardStore) -> None:
        assert store.get_cards_in_set("XYZ") == []


class TestReferenceLookup:
    @pytest.mark.parametrize("name", ["Go again", "go again", "GO AGAIN"])
    def test_get_keyword_by_name(self, store: CardStore, name: str) -> None:
        keyword = store.get_keyword_by_name(name)

        assert keyword is not None
        assert keyword.name == "Go again"
        assert keyword.description_plain.startswith("Go again is a keyword")

    def test_get_keyword_no_partial_match(self, store: CardStore) -> None:
        assert store.get_keyword_by_name("Go") is None

    def test_get_type_by_name(self, store: CardStore) -> None:
        assert store.get_type_by_name("Equipment").unique_id == "ty-equipment"


class TestClassIndex:
    def test_class_is_first_class_tag(self, store: CardStore) -> None:
        """A card tagged Light and Warrior is indexed under Light only."""
        light_ids = [c.unique_id for c in store.cards_by_class["light"]]
        warrior_ids = [c.unique_id for c in store.cards_by_class["warrior"]]

        assert "boltyn" in light_ids
        assert "boltyn" not in warrior_ids

    def test_classless_cards_are_not_indexed(self, store: CardStore) -> None:
        indexed = {c.unique_id for bucket in store.cards_by_class.values() for c in bucket}

        assert "quicken" not in indexed

    def test_multi_class_cards_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        raw = make_raw_dataset(
            cards=[
                make_card("dual", "Dual", types=["Light", "Warrior", "Hero"]),
                make_card("single", "Single", types=["Ninja", "Action"]),
            ]
        )

        with caplog.at_level(logging.WARNING, logger="fabcards.services.card_store"):
            CardStore.load(raw)

        assert "more than one class tag" in caplog.text
        assert "dual" in caplog.text
        assert "single" not in caplog.text


class TestKeywordIndex:
    def test_repeated_keyword_indexed_once(self) -> None:
        """A keyword listed twice on one card does not duplicate the card."""
        raw = make_raw_dataset(
            cards=[make_card("a", "Alpha", card_keywords=["Go again", "Go again"])]
        )

        store = CardStore.load(raw)

        assert len(store.cards_by_keyword["Go again"]) == 1


class TestImmutability:
    def test_indexes_are_read_only(self, store: CardStore) -> None:
        with pytest.raises(TypeError):
            store.cards_by_id["new"] = store.cards[0]  # type: ignore[index]

    def test_buckets_are_tuples(self, store: CardStore) -> None:
        assert isinstance(store.cards_by_name["head jab"], tuple)

    def test_cards_are_frozen(self, store: CardStore) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            store.cards[0].name = "Changed"  # type: ignore[misc]

    def test_lookup_results_are_copies(self, store: CardStore) -> None:
        """Mutating a returned list does not affect the store."""
        cards = store.get_cards_by_name("Head Jab")
        cards.clear()

        assert len(store.get_cards_by_name("Head Jab")) == 3


class TestMerge:
    def test_merge_restores_collection_order(self, store: CardStore) -> None:
        first, last = store.cards[0], store.cards[-1]

        merged = store.merge_in_collection_order([(last,), (first,)])

        assert merged == [first, last]

    def test_merge_removes_duplicates(self, store: CardStore) -> None:
        card = store.cards[3]

        merged = store.merge_in_collection_order([(card,), (card,), (card, card)])

        assert merged == [card]


class TestStats:
    def test_data_stats(self, store: CardStore) -> None:
        data_stats, _ = store.stats()

        assert data_stats == {
            "cards": 23,
            "sets": 5,
            "keywords": 8,
            "abilities": 5,
            "types": 20,
        }

    def test_index_stats(self, store: CardStore) -> None:
        _, index_stats = store.stats()

        assert index_stats["cards_by_id"] == 23
        # Three Head Jab variants share a name
        assert index_stats["cards_by_name"] == 21
        # 1HP has no cards
        assert index_stats["cards_by_set_id"] == 4
        assert index_stats["sets_by_id"] == 5
        assert index_stats["cards_by_class"] == 6
        assert index_stats["cards_by_keyword"] == 6


class TestEmptyStore:
    def test_empty_dataset(self) -> None:
        """A store over empty files answers every lookup with nothing."""
        store = CardStore.load(make_raw_dataset())

        assert store.get_card("anything") is None
        assert store.get_set_by_id("WTR") is None
        assert store.get_cards_in_set("WTR") == []
        assert store.stats()[0]["cards"] == 0

    def test_printing_set_codes_are_case_folded(self) -> None:
        raw = make_raw_dataset(
            cards=[make_card("a", "Alpha", printings=[make_printing("wtr")])],
        )

        store = CardStore.load(raw)

        assert [c.unique_id for c in store.get_cards_in_set("WTR")] == ["a"]
