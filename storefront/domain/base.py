"""Base classes for domain layer.

Provides the foundational abstractions for value objects and view events.
"""

from abc import ABC
from dataclasses import dataclass


# ============================================================================
# Value Object Base
# ============================================================================


@dataclass(frozen=True)
class ValueObject(ABC):
    """Base class for value objects.

    Value objects are immutable and compared by their attributes,
    not by identity. They have no lifecycle and are interchangeable
    when their values are equal.

    Example:
        @dataclass(frozen=True)
        class Price(ValueObject):
            amount: str | None
            currency_code: str
    """

    pass


# ============================================================================
# View Event Base
# ============================================================================


@dataclass(frozen=True)
class ViewEvent(ABC):
    """Base class for view-state events.

    A view event is a discrete shopper action (a facet toggle, a price
    edit, a sort change). Events are immutable and are folded into the
    current view state by the reducer.
    """

    pass
