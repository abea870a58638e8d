from dataclasses import asdict, dataclass
from typing import Any

from fabcards.models.decoding import (
    Record,
    bool_field,
    int_field,
    optional_str,
    record_list,
    require,
    str_field,
    str_tuple,
)
from fabcards.models.legality import Format, Legality, resolve_legality

# Type tags that denote a card's class. A card's class is derived from its
# types, never stored.
CARD_CLASSES = frozenset(
    {
        "Generic",
        "Warrior",
        "Brute",
        "Guardian",
        "Ninja",
        "Mechanologist",
        "Ranger",
        "Runeblade",
        "Wizard",
        "Illusionist",
        "Elemental",
        "Light",
        "Shadow",
        "Ice",
        "Lightning",
        "Earth",
        "Mystic",
        "Assassin",
        "Shapeshifter",
        "Bard",
        "Adjudicator",
        "Necromancer",
        "Draconic",
        "Royal",
    }
)


@dataclass(frozen=True, slots=True)
class DoubleSidedInfo:
    """Link from one face of a double-sided printing to the other."""

    other_face_unique_id: str
    is_front: bool = False
    is_dfc: bool = False

    @classmethod
    def from_dict(cls, data: Record) -> "DoubleSidedInfo":
        return cls(
            other_face_unique_id=str_field(data, "other_face_unique_id"),
            is_front=bool_field(data, "is_front"),
            is_dfc=bool_field(data, "is_DFC"),
        )


@dataclass(frozen=True, slots=True)
class Printing:
    """
    A specific set/edition/artwork instance of a card.

    Attributes:
        unique_id: Upstream identifier of this printing
        set_id: Set code the printing belongs to (e.g., "WTR")
        id: Collector-style card ID within the set (e.g., "WTR159")
        edition: Edition marker (e.g., "A" alpha, "U" unlimited)
        rarity: Rarity code (e.g., "C", "R", "M", "L", "T")
    """

    unique_id: str
    set_id: str
    set_printing_unique_id: str = ""
    id: str = ""
    edition: str = ""
    foiling: str = ""
    rarity: str = ""
    expansion_slot: bool = False
    artists: tuple[str, ...] = ()
    art_variations: tuple[str, ...] = ()
    flavor_text: str = ""
    flavor_text_plain: str = ""
    image_url: str | None = None
    image_rotation_degrees: int = 0
    tcgplayer_product_id: str | None = None
    tcgplayer_url: str | None = None
    double_sided_card_info: tuple[DoubleSidedInfo, ...] = ()

    @classmethod
    def from_dict(cls, data: Record) -> "Printing":
        return cls(
            unique_id=str(require(data, "unique_id")),
            set_id=str(require(data, "set_id")),
            set_printing_unique_id=str_field(data, "set_printing_unique_id"),
            id=str_field(data, "id"),
            edition=str_field(data, "edition"),
            foiling=str_field(data, "foiling"),
            rarity=str_field(data, "rarity"),
            expansion_slot=bool_field(data, "expansion_slot"),
            artists=str_tuple(data, "artists"),
            art_variations=str_tuple(data, "art_variations"),
            flavor_text=str_field(data, "flavor_text"),
            flavor_text_plain=str_field(data, "flavor_text_plain"),
            image_url=optional_str(data, "image_url"),
            image_rotation_degrees=int_field(data, "image_rotation_degrees"),
            tcgplayer_product_id=optional_str(data, "tcgplayer_product_id"),
            tcgplayer_url=optional_str(data, "tcgplayer_url"),
            double_sided_card_info=tuple(
                DoubleSidedInfo.from_dict(item)
                for item in record_list(data, "double_sided_card_info")
            ),
        )


@dataclass(frozen=True, slots=True)
class Card:
    """
    A unique Flesh and Blood card.

    Names are not unique: pitch variants of the same card (red/yellow/blue)
    share a name and differ in unique_id and pitch.

    Stat fields (pitch, cost, power, defense, health, intelligence, arcane)
    are string-encoded and empty when the card has no such stat.
    """

    unique_id: str
    name: str
    color: str = ""
    pitch: str = ""
    cost: str = ""
    power: str = ""
    defense: str = ""
    health: str = ""
    intelligence: str = ""
    arcane: str = ""
    types: tuple[str, ...] = ()
    traits: tuple[str, ...] = ()
    card_keywords: tuple[str, ...] = ()
    abilities_and_effects: tuple[str, ...] = ()
    ability_and_effect_keywords: tuple[str, ...] = ()
    granted_keywords: tuple[str, ...] = ()
    removed_keywords: tuple[str, ...] = ()
    interacts_with_keywords: tuple[str, ...] = ()
    functional_text: str = ""
    functional_text_plain: str = ""
    type_text: str = ""
    played_horizontally: bool = False
    # Base legality
    blitz_legal: bool = False
    cc_legal: bool = False
    commoner_legal: bool = False
    ll_legal: bool = False
    silver_age_legal: bool = False
    # Living legend
    blitz_living_legend: bool = False
    blitz_living_legend_start: str | None = None
    cc_living_legend: bool = False
    cc_living_legend_start: str | None = None
    # Bans
    blitz_banned: bool = False
    blitz_banned_start: str | None = None
    cc_banned: bool = False
    cc_banned_start: str | None = None
    commoner_banned: bool = False
    commoner_banned_start: str | None = None
    ll_banned: bool = False
    ll_banned_start: str | None = None
    silver_age_banned: bool = False
    silver_age_banned_start: str | None = None
    upf_banned: bool = False
    upf_banned_start: str | None = None
    # Suspensions
    blitz_suspended: bool = False
    blitz_suspended_start: str | None = None
    blitz_suspended_end: str | None = None
    cc_suspended: bool = False
    cc_suspended_start: str | None = None
    cc_suspended_end: str | None = None
    commoner_suspended: bool = False
    commoner_suspended_start: str | None = None
    commoner_suspended_end: str | None = None
    # Living Legend format restriction
    ll_restricted: bool = False
    ll_restricted_affects_full_cycle: bool = False
    ll_restricted_start: str | None = None
    referenced_cards: tuple[str, ...] = ()
    cards_referenced_by: tuple[str, ...] = ()
    printings: tuple[Printing, ...] = ()

    @classmethod
    def from_dict(cls, data: Record) -> "Card":
        """Decode an upstream card record. Unknown keys are ignored."""
        return cls(
            unique_id=str(require(data, "unique_id")),
            name=str(require(data, "name")),
            color=str_field(data, "color"),
            pitch=str_field(data, "pitch"),
            cost=str_field(data, "cost"),
            power=str_field(data, "power"),
            defense=str_field(data, "defense"),
            health=str_field(data, "health"),
            intelligence=str_field(data, "intelligence"),
            arcane=str_field(data, "arcane"),
            types=str_tuple(data, "types"),
            traits=str_tuple(data, "traits"),
            card_keywords=str_tuple(data, "card_keywords"),
            abilities_and_effects=str_tuple(data, "abilities_and_effects"),
            ability_and_effect_keywords=str_tuple(data, "ability_and_effect_keywords"),
            granted_keywords=str_tuple(data, "granted_keywords"),
            removed_keywords=str_tuple(data, "removed_keywords"),
            interacts_with_keywords=str_tuple(data, "interacts_with_keywords"),
            functional_text=str_field(data, "functional_text"),
            functional_text_plain=str_field(data, "functional_text_plain"),
            type_text=str_field(data, "type_text"),
            played_horizontally=bool_field(data, "played_horizontally"),
            blitz_legal=bool_field(data, "blitz_legal"),
            cc_legal=bool_field(data, "cc_legal"),
            commoner_legal=bool_field(data, "commoner_legal"),
            ll_legal=bool_field(data, "ll_legal"),
            silver_age_legal=bool_field(data, "silver_age_legal"),
            blitz_living_legend=bool_field(data, "blitz_living_legend"),
            blitz_living_legend_start=optional_str(data, "blitz_living_legend_start"),
            cc_living_legend=bool_field(data, "cc_living_legend"),
            cc_living_legend_start=optional_str(data, "cc_living_legend_start"),
            blitz_banned=bool_field(data, "blitz_banned"),
            blitz_banned_start=optional_str(data, "blitz_banned_start"),
            cc_banned=bool_field(data, "cc_banned"),
            cc_banned_start=optional_str(data, "cc_banned_start"),
            commoner_banned=bool_field(data, "commoner_banned"),
            commoner_banned_start=optional_str(data, "commoner_banned_start"),
            ll_banned=bool_field(data, "ll_banned"),
            ll_banned_start=optional_str(data, "ll_banned_start"),
            silver_age_banned=bool_field(data, "silver_age_banned"),
            silver_age_banned_start=optional_str(data, "silver_age_banned_start"),
            upf_banned=bool_field(data, "upf_banned"),
            upf_banned_start=optional_str(data, "upf_banned_start"),
            blitz_suspended=bool_field(data, "blitz_suspended"),
            blitz_suspended_start=optional_str(data, "blitz_suspended_start"),
            blitz_suspended_end=optional_str(data, "blitz_suspended_end"),
            cc_suspended=bool_field(data, "cc_suspended"),
            cc_suspended_start=optional_str(data, "cc_suspended_start"),
            cc_suspended_end=optional_str(data, "cc_suspended_end"),
            commoner_suspended=bool_field(data, "commoner_suspended"),
            commoner_suspended_start=optional_str(data, "commoner_suspended_start"),
            commoner_suspended_end=optional_str(data, "commoner_suspended_end"),
            ll_restricted=bool_field(data, "ll_restricted"),
            ll_restricted_affects_full_cycle=bool_field(data, "ll_restricted_affects_full_cycle"),
            ll_restricted_start=optional_str(data, "ll_restricted_start"),
            referenced_cards=str_tuple(data, "referenced_cards"),
            cards_referenced_by=str_tuple(data, "cards_referenced_by"),
            printings=tuple(Printing.from_dict(p) for p in record_list(data, "printings")),
        )

    def get_legality(self, fmt: Format | str) -> Legality:
        """Derive this card's legality in a format (never cached)."""
        return resolve_legality(self, fmt)

    def get_class(self) -> str:
        """
        Get the card's class.

        Returns the first type tag that is a class, or "" if none is.
        Cards are expected to carry at most one class tag; when more are
        present, type order decides.
        """
        for card_type in self.types:
            if card_type in CARD_CLASSES:
                return card_type
        return ""

    def class_tags(self) -> list[str]:
        """All class tags on the card, in type order."""
        return [t for t in self.types if t in CARD_CLASSES]

    def has_type(self, type_name: str) -> bool:
        return type_name in self.types

    def has_keyword(self, keyword: str) -> bool:
        return keyword in self.card_keywords

    def set_ids(self) -> list[str]:
        """Distinct set codes this card is printed in, first-seen order."""
        seen: list[str] = []
        for printing in self.printings:
            if printing.set_id not in seen:
                seen.append(printing.set_id)
        return seen

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
