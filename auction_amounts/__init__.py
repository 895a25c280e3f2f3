"""
auction-amounts — settlement amounts for linear auctions and partial fills.

Public API:
    locate_current_amount, get_fraction, apply_fraction, derive_amount
"""

from auction_amounts.core.math import (
    AmountDerivationError,
    AmountDeriver,
    AmountDeriverConfig,
    AmountDivisionByZero,
    ArithmeticOverflow,
    InexactFraction,
    apply_fraction,
    get_fraction,
    locate_current_amount,
)
from auction_amounts.core.contracts import derive_amount

__version__ = "0.1.0"

__all__ = [
    "AmountDerivationError",
    "AmountDeriver",
    "AmountDeriverConfig",
    "AmountDivisionByZero",
    "ArithmeticOverflow",
    "InexactFraction",
    "apply_fraction",
    "derive_amount",
    "get_fraction",
    "locate_current_amount",
]
