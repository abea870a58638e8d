"""
Card data loader.

Decodes the five upstream JSON arrays (types, cards, sets, keywords,
abilities) into typed, immutable collections.

Loading is all-or-nothing: a missing file, malformed JSON, a top-level value
that is not an array, or a record missing a required field raises
DataLoadError and no Dataset is produced.
"""

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypeVar

from fabcards.config import settings
from fabcards.models.card import Card
from fabcards.models.card_set import CardSet
from fabcards.models.failure import DataLoadError
from fabcards.models.reference import Ability, CardType, Keyword

logger = logging.getLogger(__name__)

T = TypeVar("T")

TYPE_FILE = "type.json"
CARD_FILE = "card.json"
SET_FILE = "set.json"
KEYWORD_FILE = "keyword.json"
ABILITY_FILE = "ability.json"

DATA_FILES = (TYPE_FILE, CARD_FILE, SET_FILE, KEYWORD_FILE, ABILITY_FILE)


@dataclass(frozen=True, slots=True)
class Dataset:
    """The full decoded corpus, in source order."""

    types: tuple[CardType, ...]
    cards: tuple[Card, ...]
    sets: tuple[CardSet, ...]
    keywords: tuple[Keyword, ...]
    abilities: tuple[Ability, ...]


def read_data_dir(path: Path) -> dict[str, bytes]:
    """
    Read every data file from a directory.

    Raises:
        DataLoadError: If the directory or any file is missing or unreadable
    """
    raw: dict[str, bytes] = {}
    for filename in DATA_FILES:
        file_path = path / filename
        try:
            raw[filename] = file_path.read_bytes()
        except OSError as e:
            raise DataLoadError(filename, f"cannot read {file_path}: {e}") from e
    return raw


def decode_array(
    filename: str,
    raw: bytes | str,
    factory: Callable[[dict[str, Any]], T],
) -> tuple[T, ...]:
    """
    Decode one JSON array of records.

    Args:
        filename: Name used in error messages
        raw: JSON document
        factory: Builds a typed record from one JSON object

    Raises:
        DataLoadError: On malformed JSON, a non-array document, or a bad record
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DataLoadError(filename, f"invalid JSON: {e}") from e

    if not isinstance(data, list):
        raise DataLoadError(filename, f"expected a JSON array, got {type(data).__name__}")

    records: list[T] = []
    for position, item in enumerate(data):
        if not isinstance(item, dict):
            raise DataLoadError(filename, f"record {position} is not an object")
        try:
            records.append(factory(item))
        except (KeyError, TypeError, ValueError) as e:
            raise DataLoadError(filename, f"record {position}: {e}") from e

    return tuple(records)


def load_dataset(source: Path | Mapping[str, bytes | str] | None = None) -> Dataset:
    """
    Load the full corpus.

    Args:
        source: A directory holding the data files, a mapping of data file
            names to raw JSON, or None for the configured data directory.

    Returns:
        Dataset with every collection decoded.

    Raises:
        DataLoadError: If any file is missing or malformed
    """
    if source is None:
        source = settings.data_dir

    raw = read_data_dir(source) if isinstance(source, Path) else source

    missing = [filename for filename in DATA_FILES if filename not in raw]
    if missing:
        raise DataLoadError(missing[0], "file not provided")

    dataset = Dataset(
        types=decode_array(TYPE_FILE, raw[TYPE_FILE], CardType.from_dict),
        cards=decode_array(CARD_FILE, raw[CARD_FILE], Card.from_dict),
        sets=decode_array(SET_FILE, raw[SET_FILE], CardSet.from_dict),
        keywords=decode_array(KEYWORD_FILE, raw[KEYWORD_FILE], Keyword.from_dict),
        abilities=decode_array(ABILITY_FILE, raw[ABILITY_FILE], Ability.from_dict),
    )

    logger.info(
        "Loaded %d cards, %d sets, %d keywords, %d abilities, %d types",
        len(dataset.cards),
        len(dataset.sets),
        len(dataset.keywords),
        len(dataset.abilities),
        len(dataset.types),
    )

    return dataset
