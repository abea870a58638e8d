"""Tests for filtered, paginated card search."""

import pytest

from fabcards.models.legality import Format
from fabcards.services.card_search import (
    CardFilter,
    paginate,
    scan_cards,
    search_cards,
    select_candidates,
)
from fabcards.services.card_store import CardStore

EQUIVALENCE_FILTERS = [
    CardFilter(card_class="Ninja"),
    CardFilter(card_class="ninja", pitch="1"),
    CardFilter(card_class="Generic", keyword="Go again"),
    CardFilter(card_class="Light"),
    CardFilter(card_class="Nonexistent"),
    CardFilter(type="Attack"),
    CardFilter(type="Attack", set_id="WTR"),
    CardFilter(type="attack"),
    CardFilter(keyword="go"),
    CardFilter(keyword="a"),
    CardFilter(keyword="ar"),
    CardFilter(keyword="zzz"),
    CardFilter(set_id="wtr"),
    CardFilter(set_id="CRU"),
    CardFilter(set_id="1HP"),
    CardFilter(pitch="1"),
    CardFilter(name="head"),
    CardFilter(text_query="draw a card"),
    CardFilter(legal_in=Format.BLITZ, card_class="Ninja"),
    CardFilter(legal_in=Format.UPF),
    CardFilter(),
]


def ids(cards) -> list[str]:
    return [card.unique_id for card in cards]


class TestIndexEquivalence:
    @pytest.mark.parametrize("card_filter", EQUIVALENCE_FILTERS)
    def test_index_matches_full_scan(self, store: CardStore, card_filter: CardFilter) -> None:
        """Index-accelerated search returns the same cards, in order, as a scan."""
        page, total = search_cards(store, card_filter)
        expected = scan_cards(store.cards, card_filter)

        assert page == expected
        assert total == len(expected)

    def test_results_have_no_duplicates(self, store: CardStore) -> None:
        for card_filter in EQUIVALENCE_FILTERS:
            page, _ = search_cards(store, card_filter)
            assert len(ids(page)) == len(set(ids(page)))


class TestCandidateSelection:
    @pytest.mark.parametrize(
        "card_filter,index_name",
        [
            (CardFilter(card_class="Ninja", type="Attack", keyword="go", set_id="WTR"), "class"),
            (CardFilter(type="Attack", keyword="go", set_id="WTR"), "type"),
            (CardFilter(keyword="go", set_id="WTR"), "keyword"),
            (CardFilter(set_id="WTR"), "set"),
            (CardFilter(name="head", pitch="1"), "full_scan"),
        ],
    )
    def test_index_priority(
        self, store: CardStore, card_filter: CardFilter, index_name: str
    ) -> None:
        """Class beats type beats keyword beats set."""
        _, selected = select_candidates(store, card_filter)

        assert selected == index_name

    def test_set_candidates_are_deduplicated(self, store: CardStore) -> None:
        candidates, _ = select_candidates(store, CardFilter(set_id="WTR"))

        assert len(ids(candidates)) == len(set(ids(candidates))) == 17


class TestKeywordFilter:
    def test_substring_matches_every_bucket(self, store: CardStore) -> None:
        """A query contained in several keywords returns the union of their cards."""
        page, _ = search_cards(store, CardFilter(keyword="a"))

        assert ids(page) == [
            "head-jab-red",
            "head-jab-yellow",
            "head-jab-blue",
            "art-of-war",
            "arcanite-skullcap",
            "ironrot-helm",
        ]

    def test_card_in_two_matching_buckets_listed_once(self, store: CardStore) -> None:
        """Legendary and Arcane Barrier both contain "ar"."""
        page, _ = search_cards(store, CardFilter(keyword="ar"))

        assert ids(page) == ["arcanite-skullcap"]

    def test_case_insensitive(self, store: CardStore) -> None:
        lower, _ = search_cards(store, CardFilter(keyword="go again"))
        upper, _ = search_cards(store, CardFilter(keyword="GO AGAIN"))

        assert lower == upper
        assert len(lower) == 4

    def test_granted_keywords_do_not_match(self, store: CardStore) -> None:
        """Only the card's own keywords are searched."""
        page, _ = search_cards(store, CardFilter(keyword="go again"))

        assert "quicken" not in ids(page)


class TestFieldFilters:
    def test_name_substring(self, store: CardStore) -> None:
        page, total = search_cards(store, CardFilter(name="HEAD jab"))

        assert ids(page) == ["head-jab-red", "head-jab-yellow", "head-jab-blue"]
        assert total == 3

    def test_type_is_exact(self, store: CardStore) -> None:
        """Type matches whole tags only."""
        page, _ = search_cards(store, CardFilter(type="Attack"))

        assert "pummel-red" not in ids(page)
        assert all("Attack" in card.types for card in page)

    def test_class_is_derived(self, store: CardStore) -> None:
        """Class filtering uses the derived class, not any class tag."""
        warriors, _ = search_cards(store, CardFilter(card_class="Warrior"))
        light, _ = search_cards(store, CardFilter(card_class="light"))

        assert "boltyn" not in ids(warriors)
        assert ids(light) == ["boltyn"]

    def test_class_results_are_sound(self, store: CardStore) -> None:
        page, _ = search_cards(store, CardFilter(card_class="NINJA"))

        assert len(page) == 6
        assert all(card.get_class().lower() == "ninja" for card in page)

    def test_set_case_insensitive(self, store: CardStore) -> None:
        upper, _ = search_cards(store, CardFilter(set_id="ARC"))
        lower, _ = search_cards(store, CardFilter(set_id="arc"))

        assert upper == lower
        assert len(upper) == 5

    def test_pitch(self, store: CardStore) -> None:
        page, total = search_cards(store, CardFilter(pitch="3"))

        assert ids(page) == ["head-jab-blue", "energy-potion"]
        assert total == 2

    def test_text_query(self, store: CardStore) -> None:
        page, _ = search_cards(store, CardFilter(text_query="DRAW A CARD"))

        assert ids(page) == ["enlightened-strike-red", "sink-below-red", "snatch-red"]

    def test_legal_in_results_are_sound(self, store: CardStore) -> None:
        for fmt in Format:
            page, _ = search_cards(store, CardFilter(legal_in=fmt))
            assert all(card.get_legality(fmt).legal for card in page)

    def test_legal_in_excludes_living_legend(self, store: CardStore) -> None:
        page, _ = search_cards(store, CardFilter(legal_in=Format.BLITZ, card_class="Warrior"))

        assert "dorinthea-ironsong" not in ids(page)
        assert "dawnblade" in ids(page)

    def test_predicates_are_anded(self, store: CardStore) -> None:
        page, _ = search_cards(
            store,
            CardFilter(card_class="Generic", type="Attack", set_id="WTR", text_query="draw"),
        )

        assert ids(page) == ["enlightened-strike-red", "snatch-red"]

    def test_no_match_is_empty(self, store: CardStore) -> None:
        page, total = search_cards(store, CardFilter(name="zzzz"))

        assert page == []
        assert total == 0


class TestPagination:
    def test_pages_cover_full_result(self, store: CardStore) -> None:
        """Concatenated pages equal the unpaginated result."""
        full, total = search_cards(store, CardFilter(pitch="1"))

        pages = []
        for offset in range(0, total, 5):
            page, page_total = search_cards(store, CardFilter(pitch="1", limit=5, offset=offset))
            assert page_total == total
            pages.extend(page)

        assert pages == full
        assert total == 12

    def test_offset_past_end(self, store: CardStore) -> None:
        page, total = search_cards(store, CardFilter(pitch="1", offset=12))

        assert page == []
        assert total == 12

    def test_limit_zero_is_unbounded(self, store: CardStore) -> None:
        page, total = search_cards(store, CardFilter(limit=0))

        assert len(page) == total == 23

    def test_negative_limit_is_unbounded(self, store: CardStore) -> None:
        page, _ = search_cards(store, CardFilter(limit=-1))

        assert len(page) == 23

    def test_paginate_slices(self) -> None:
        assert paginate(list("abcdef"), limit=2, offset=3) == ["d", "e"]
        assert paginate(list("abc"), limit=10, offset=0) == ["a", "b", "c"]
        assert paginate(list("abc"), limit=0, offset=3) == []


class TestFromParams:
    def test_strings_are_trimmed(self) -> None:
        card_filter = CardFilter.from_params(name="  Head ", card_class="ninja ")

        assert card_filter.name == "Head"
        assert card_filter.card_class == "ninja"

    def test_non_strings_are_ignored(self) -> None:
        card_filter = CardFilter.from_params(name=123, keyword=["Go again"])

        assert card_filter.name == ""
        assert card_filter.keyword == ""

    def test_legal_in_parsed(self) -> None:
        assert CardFilter.from_params(legal_in="Blitz").legal_in is Format.BLITZ

    def test_unknown_legal_in_means_no_constraint(self) -> None:
        assert CardFilter.from_params(legal_in="standard").legal_in is None

    @pytest.mark.parametrize(
        "limit,expected",
        [
            (None, 50),
            ("abc", 50),
            ("10", 10),
            (10, 10),
            (12.7, 12),
            ("500", 100),
            (True, 50),
            (float("nan"), 50),
            (float("inf"), 50),
        ],
    )
    def test_limit_normalization(self, limit, expected: int) -> None:
        card_filter = CardFilter.from_params(limit=limit, default_limit=50, max_limit=100)

        assert card_filter.limit == expected

    @pytest.mark.parametrize(
        "offset,expected",
        [
            (None, 0),
            ("x", 0),
            ("-3", 0),
            ("7", 7),
            (float("inf"), 0),
            (float("-inf"), 0),
            (float("nan"), 0),
        ],
    )
    def test_offset_normalization(self, offset, expected: int) -> None:
        assert CardFilter.from_params(offset=offset).offset == expected

    def test_store_search_delegates(self, store: CardStore) -> None:
        """CardStore.search_cards is the same search."""
        card_filter = CardFilter.from_params(keyword="combo")

        assert store.search_cards(card_filter) == search_cards(store, card_filter)
