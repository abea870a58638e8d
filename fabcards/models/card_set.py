from dataclasses import asdict, dataclass
from typing import Any

from fabcards.models.decoding import (
    Record,
    bool_field,
    optional_str,
    record_list,
    require,
    str_field,
)


@dataclass(frozen=True, slots=True)
class SetPrinting:
    """One edition/print run of a set, with its release metadata."""

    unique_id: str
    edition: str = ""
    start_card_id: str = ""
    end_card_id: str = ""
    initial_release_date: str = ""
    out_of_print: bool = False
    card_database: str | None = None
    product_page: str | None = None
    collectors_center: str | None = None
    card_gallery: str | None = None
    release_notes: str | None = None
    set_logo: str | None = None

    @classmethod
    def from_dict(cls, data: Record) -> "SetPrinting":
        return cls(
            unique_id=str(require(data, "unique_id")),
            edition=str_field(data, "edition"),
            start_card_id=str_field(data, "start_card_id"),
            end_card_id=str_field(data, "end_card_id"),
            initial_release_date=str_field(data, "initial_release_date"),
            out_of_print=bool_field(data, "out_of_print"),
            card_database=optional_str(data, "card_database"),
            product_page=optional_str(data, "product_page"),
            collectors_center=optional_str(data, "collectors_center"),
            card_gallery=optional_str(data, "card_gallery"),
            release_notes=optional_str(data, "release_notes"),
            set_logo=optional_str(data, "set_logo"),
        )


@dataclass(frozen=True, slots=True)
class CardSet:
    """
    A card set.

    Attributes:
        unique_id: Upstream identifier
        id: Set code (e.g., "WTR", "ARC")
        name: Full set name (e.g., "Welcome to Rathe")
        printings: Editions of the set
    """

    unique_id: str
    id: str
    name: str
    printings: tuple[SetPrinting, ...] = ()

    @classmethod
    def from_dict(cls, data: Record) -> "CardSet":
        return cls(
            unique_id=str(require(data, "unique_id")),
            id=str(require(data, "id")),
            name=str(require(data, "name")),
            printings=tuple(SetPrinting.from_dict(p) for p in record_list(data, "printings")),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
