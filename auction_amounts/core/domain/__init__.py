"""
Domain models and value objects.

Contains FractionSpec and the order item models (offer/consideration,
spent/received).
"""

from auction_amounts.core.domain.fraction import FractionSpec
from auction_amounts.core.domain.items import (
    ConsiderationItem,
    ItemType,
    OfferItem,
    ReceivedItem,
    SpentItem,
)

__all__ = [
    # Fraction
    "FractionSpec",
    # Items
    "ItemType",
    "OfferItem",
    "ConsiderationItem",
    "SpentItem",
    "ReceivedItem",
]
