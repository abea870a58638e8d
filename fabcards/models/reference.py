"""Flat, name-keyed reference records: keywords, abilities, types."""

from dataclasses import asdict, dataclass
from typing import Any

from fabcards.models.decoding import Record, require, str_field


@dataclass(frozen=True, slots=True)
class Keyword:
    """A game keyword and its rules description."""

    unique_id: str
    name: str
    description: str = ""
    description_plain: str = ""

    @classmethod
    def from_dict(cls, data: Record) -> "Keyword":
        return cls(
            unique_id=str(require(data, "unique_id")),
            name=str(require(data, "name")),
            description=str_field(data, "description"),
            description_plain=str_field(data, "description_plain"),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class Ability:
    unique_id: str
    name: str

    @classmethod
    def from_dict(cls, data: Record) -> "Ability":
        return cls(unique_id=str(require(data, "unique_id")), name=str(require(data, "name")))


@dataclass(frozen=True, slots=True)
class CardType:
    unique_id: str
    name: str

    @classmethod
    def from_dict(cls, data: Record) -> "CardType":
        return cls(unique_id=str(require(data, "unique_id")), name=str(require(data, "name")))
