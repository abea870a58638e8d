from fabcards.models.card import CARD_CLASSES, Card, DoubleSidedInfo, Printing
from fabcards.models.card_set import CardSet, SetPrinting
from fabcards.models.failure import DataLoadError, FailureDetail, FailureKind, KnownError
from fabcards.models.legality import (
    Format,
    Legality,
    all_legalities,
    parse_format,
    resolve_legality,
)
from fabcards.models.reference import Ability, CardType, Keyword

__all__ = [
    "Ability",
    "CARD_CLASSES",
    "Card",
    "CardSet",
    "CardType",
    "DataLoadError",
    "DoubleSidedInfo",
    "FailureDetail",
    "FailureKind",
    "Format",
    "Keyword",
    "KnownError",
    "Legality",
    "Printing",
    "SetPrinting",
    "all_legalities",
    "parse_format",
    "resolve_legality",
]
