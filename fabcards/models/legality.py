"""
Format Legality: Per-Format Derivation From Raw Card Flags.

Legality is never stored. It is recomputed on every call from the card's
raw legal/banned/suspended/restricted/living-legend flags, so the result is
a pure function of (card, format).

Composition rules:
- blitz, cc:   base-legal AND NOT banned AND NOT suspended AND NOT living legend
- commoner:    base-legal AND NOT banned AND NOT suspended
- ll:          base-legal AND NOT banned AND NOT restricted
- silver_age:  base-legal AND NOT banned
- upf:         NOT banned (there is no base-legal flag for UPF)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fabcards.models.card import Card


class Format(str, Enum):
    """Supported play formats."""

    BLITZ = "blitz"
    CC = "cc"
    COMMONER = "commoner"
    LL = "ll"
    SILVER_AGE = "silver_age"
    UPF = "upf"


# Human-readable spellings accepted wherever a format token comes from outside
FORMAT_ALIASES: dict[str, Format] = {
    "classic constructed": Format.CC,
    "classic_constructed": Format.CC,
    "living legend": Format.LL,
    "living_legend": Format.LL,
    "silver age": Format.SILVER_AGE,
    "silverage": Format.SILVER_AGE,
    "universal play format": Format.UPF,
}


@dataclass(frozen=True, slots=True)
class Legality:
    """
    A card's legality status in one format.

    Flags that have no meaning for the format are always False. For an
    unrecognized format token, `format` holds the raw token and every flag
    is False.
    """

    format: Format | str
    legal: bool = False
    living_legend: bool = False
    banned: bool = False
    suspended: bool = False
    restricted: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "format": self.format.value if isinstance(self.format, Format) else self.format,
            "legal": self.legal,
            "living_legend": self.living_legend,
            "banned": self.banned,
            "suspended": self.suspended,
            "restricted": self.restricted,
        }


def parse_format(token: str | Format | None) -> Format | None:
    """
    Map a raw format token to a Format.

    Matching is case-insensitive and accepts the aliases in FORMAT_ALIASES.
    Unknown or empty tokens return None, which callers treat as
    "no format constraint".
    """
    if token is None:
        return None
    if isinstance(token, Format):
        return token

    normalized = token.strip().lower()
    if not normalized:
        return None
    try:
        return Format(normalized)
    except ValueError:
        return FORMAT_ALIASES.get(normalized)


def resolve_legality(card: Card, fmt: Format | str) -> Legality:
    """
    Derive a card's legality in a format.

    Args:
        card: The card to check
        fmt: Format enum member or raw token

    Returns:
        Legality record. An unrecognized format yields an all-False record.
    """
    resolved = parse_format(fmt)

    if resolved is Format.BLITZ:
        return Legality(
            format=resolved,
            legal=(
                card.blitz_legal
                and not card.blitz_banned
                and not card.blitz_suspended
                and not card.blitz_living_legend
            ),
            living_legend=card.blitz_living_legend,
            banned=card.blitz_banned,
            suspended=card.blitz_suspended,
        )
    if resolved is Format.CC:
        return Legality(
            format=resolved,
            legal=(
                card.cc_legal
                and not card.cc_banned
                and not card.cc_suspended
                and not card.cc_living_legend
            ),
            living_legend=card.cc_living_legend,
            banned=card.cc_banned,
            suspended=card.cc_suspended,
        )
    if resolved is Format.COMMONER:
        return Legality(
            format=resolved,
            legal=card.commoner_legal and not card.commoner_banned and not card.commoner_suspended,
            banned=card.commoner_banned,
            suspended=card.commoner_suspended,
        )
    if resolved is Format.LL:
        return Legality(
            format=resolved,
            legal=card.ll_legal and not card.ll_banned and not card.ll_restricted,
            banned=card.ll_banned,
            restricted=card.ll_restricted,
        )
    if resolved is Format.SILVER_AGE:
        return Legality(
            format=resolved,
            legal=card.silver_age_legal and not card.silver_age_banned,
            banned=card.silver_age_banned,
        )
    if resolved is Format.UPF:
        # UPF consults only the ban list
        return Legality(
            format=resolved,
            legal=not card.upf_banned,
            banned=card.upf_banned,
        )

    # Unknown format: nothing is legal
    return Legality(format=str(fmt))


def all_legalities(card: Card) -> list[Legality]:
    """Legality of a card in every supported format, in Format order."""
    return [resolve_legality(card, fmt) for fmt in Format]
