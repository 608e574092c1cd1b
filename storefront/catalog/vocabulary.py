"""Facet vocabularies.

Club categories and brands are supplied by configuration as ordered
token → label mappings. Hand, condition and player level are fixed
enumerations.

Example usage:
    vocabulary = FacetVocabulary.from_mappings(
        club_categories={"drivers": "Drivers", "putters": "Putters"},
        brands={"titleist": "Titleist"},
    )
    vocabulary.options(Facet.CATEGORY)[0].label  # 'Drivers'
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from storefront.domain.filters import Condition, Facet, Hand, PlayerLevel


DEFAULT_CLUB_CATEGORIES: dict[str, str] = {
    "drivers": "Drivers",
    "irons": "Iron Sets",
    "wedges": "Wedges",
    "putters": "Putters",
    "woods": "Fairway Woods",
    "hybrids": "Hybrids",
}

DEFAULT_BRANDS: dict[str, str] = {
    "titleist": "Titleist",
    "taylormade": "TaylorMade",
    "callaway": "Callaway",
    "ping": "PING",
    "mizuno": "Mizuno",
    "cobra": "Cobra",
}


@dataclass(frozen=True)
class FacetOption:
    """A selectable token with its display label.

    Attributes:
        value: Stable machine token (used in the address).
        label: Human-readable label.
    """

    value: str
    label: str


@dataclass(frozen=True)
class FacetVocabulary:
    """Selectable options for every facet."""

    club_categories: tuple[FacetOption, ...] = ()
    brands: tuple[FacetOption, ...] = ()
    hands: tuple[FacetOption, ...] = field(
        default_factory=lambda: tuple(FacetOption(h.value, h.label) for h in Hand)
    )
    conditions: tuple[FacetOption, ...] = field(
        default_factory=lambda: tuple(
            FacetOption(c.value, c.label) for c in Condition
        )
    )
    levels: tuple[FacetOption, ...] = field(
        default_factory=lambda: tuple(
            FacetOption(lv.value, lv.label) for lv in PlayerLevel
        )
    )

    @classmethod
    def from_mappings(
        cls,
        club_categories: Mapping[str, str],
        brands: Mapping[str, str],
    ) -> "FacetVocabulary":
        """Build a vocabulary from configured token → label mappings.

        Args:
            club_categories: Category token to label, in display order.
            brands: Brand token to label, in display order.

        Returns:
            FacetVocabulary with the fixed enumerations filled in.
        """
        return cls(
            club_categories=tuple(
                FacetOption(value, label) for value, label in club_categories.items()
            ),
            brands=tuple(FacetOption(value, label) for value, label in brands.items()),
        )

    @classmethod
    def default(cls) -> "FacetVocabulary":
        """Golf club vocabulary used when nothing is configured."""
        return cls.from_mappings(DEFAULT_CLUB_CATEGORIES, DEFAULT_BRANDS)

    def options(self, facet: Facet | str) -> tuple[FacetOption, ...]:
        """Get the options of a facet.

        Args:
            facet: Facet or facet name.

        Returns:
            Options in display order.
        """
        return {
            Facet.HAND: self.hands,
            Facet.CATEGORY: self.club_categories,
            Facet.BRAND: self.brands,
            Facet.CONDITION: self.conditions,
            Facet.LEVEL: self.levels,
        }[Facet.parse(facet)]

    def label_for(self, facet: Facet | str, token: str) -> str | None:
        """Look up the label of a token, or None if it is not offered."""
        for option in self.options(facet):
            if option.value == token:
                return option.label
        return None
