"""
fabcards services.

Data loading, indexing and search over the card corpus.
"""

from fabcards.services.card_search import (
    CardFilter,
    matches_filter,
    paginate,
    scan_cards,
    search_cards,
    select_candidates,
)
from fabcards.services.card_store import CardStore
from fabcards.services.loader import DATA_FILES, Dataset, decode_array, load_dataset, read_data_dir
from fabcards.services.set_search import SetFilter, dedupe_cards, matches_set_filter, search_sets

__all__ = [
    # Loading
    "DATA_FILES",
    "Dataset",
    "decode_array",
    "load_dataset",
    "read_data_dir",
    # Store and indexes
    "CardStore",
    # Card search
    "CardFilter",
    "matches_filter",
    "paginate",
    "scan_cards",
    "search_cards",
    "select_candidates",
    # Set search
    "SetFilter",
    "dedupe_cards",
    "matches_set_filter",
    "search_sets",
]
