"""Filter state for the product listing.

A FilterState holds, for each facet, the set of tokens the shopper has
selected. It only changes by toggling a single token, and every change
produces a new, complete snapshot.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Self

from storefront.domain.base import ValueObject
from storefront.domain.exceptions import InvalidFilterTokenError, UnknownFacetError


# ============================================================================
# Facets and fixed vocabularies
# ============================================================================


class Facet(str, Enum):
    """Independent filterable dimensions.

    The value doubles as the query-string key for the facet.
    """

    HAND = "hand"
    CATEGORY = "category"
    BRAND = "brand"
    CONDITION = "condition"
    LEVEL = "level"

    @classmethod
    def parse(cls, value: "Facet | str") -> "Facet":
        """Resolve a facet from its name.

        Args:
            value: Facet or facet name.

        Returns:
            Matching Facet.

        Raises:
            UnknownFacetError: If the name is not a known facet.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownFacetError(str(value)) from None


class Condition(str, Enum):
    """Condition grades of a second-hand club."""

    NEW = "new"
    LIKE_NEW = "like-new"
    GOOD = "good"
    FAIR = "fair"

    @property
    def label(self) -> str:
        return _CONDITION_LABELS[self]


class PlayerLevel(str, Enum):
    """Player levels a club is aimed at."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    PRO = "pro"

    @property
    def label(self) -> str:
        return _LEVEL_LABELS[self]


class Hand(str, Enum):
    """Hand preference; matched against the product title."""

    RIGHT = "right"
    LEFT = "left"

    @property
    def label(self) -> str:
        return f"{self.value.title()} Handed"


_CONDITION_LABELS: dict[Condition, str] = {
    Condition.NEW: "New",
    Condition.LIKE_NEW: "Like New",
    Condition.GOOD: "Good",
    Condition.FAIR: "Fair",
}

_LEVEL_LABELS: dict[PlayerLevel, str] = {
    PlayerLevel.BEGINNER: "Beginner",
    PlayerLevel.INTERMEDIATE: "Intermediate",
    PlayerLevel.ADVANCED: "Advanced",
    PlayerLevel.PRO: "Professional",
}


# ============================================================================
# Filter State
# ============================================================================


@dataclass(frozen=True)
class FilterState(ValueObject):
    """Selected tokens per facet.

    Token order is irrelevant and tokens are unique per facet. An empty
    facet imposes no constraint.

    Example:
        state = FilterState.empty().toggle(Facet.BRAND, "titleist")
        state.selected(Facet.BRAND)  # frozenset({'titleist'})
        state.toggle("brand", "titleist") == FilterState.empty()  # True
    """

    hand: frozenset[str] = frozenset()
    category: frozenset[str] = frozenset()
    brand: frozenset[str] = frozenset()
    condition: frozenset[str] = frozenset()
    level: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        """Coerce each facet to a frozenset."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, frozenset):
                object.__setattr__(self, f.name, frozenset(value))

    @classmethod
    def empty(cls) -> Self:
        """Create a state with no selections.

        Returns:
            FilterState with every facet empty.
        """
        return cls()

    @classmethod
    def from_selections(cls, selections: Mapping[Facet | str, Iterable[str]]) -> Self:
        """Bulk-create a state, used only when loading from the address.

        Blank tokens are dropped.

        Args:
            selections: Mapping of facet to selected tokens.

        Returns:
            New FilterState.

        Raises:
            UnknownFacetError: If a mapping key is not a facet.
        """
        values: dict[str, frozenset[str]] = {}
        for key, tokens in selections.items():
            facet = Facet.parse(key)
            values[facet.value] = frozenset(t for t in tokens if t and t.strip())
        return cls(**values)

    def selected(self, facet: Facet | str) -> frozenset[str]:
        """Get the selected tokens of a facet.

        Args:
            facet: Facet or facet name.

        Returns:
            Selected tokens (possibly empty).
        """
        return getattr(self, Facet.parse(facet).value)

    def is_selected(self, facet: Facet | str, token: str) -> bool:
        """Check whether a token is selected."""
        return token in self.selected(facet)

    def toggle(self, facet: Facet | str, token: str) -> Self:
        """Insert a token if absent, remove it if present.

        Toggling the same token twice returns an equal state.

        Args:
            facet: Facet to toggle in.
            token: Token to toggle.

        Returns:
            New FilterState.

        Raises:
            UnknownFacetError: If the facet is unknown.
            InvalidFilterTokenError: If the token is blank.
        """
        facet = Facet.parse(facet)
        if not token or not token.strip():
            raise InvalidFilterTokenError(facet.value, token)
        current = self.selected(facet)
        updated = current - {token} if token in current else current | {token}
        return replace(self, **{facet.value: updated})

    def is_empty(self) -> bool:
        """Check whether no facet has a selection.

        Returns:
            True if every facet is empty.
        """
        return not any(self.selected(facet) for facet in Facet)

    def to_selections(self) -> dict[Facet, frozenset[str]]:
        """Get every facet with its selection, in facet order."""
        return {facet: self.selected(facet) for facet in Facet}
