"""
Core math modules для auction_amounts

Целочисленная арифметика uint256 с проверкой переполнения и вычисление
settlement-сумм для аукционов и частичных исполнений.
"""

# Errors
from auction_amounts.core.math.errors import (
    AmountDerivationError,
    AmountDivisionByZero,
    ArithmeticOverflow,
    InexactFraction,
)

# UInt256
from auction_amounts.core.math.uint256 import (
    UINT256_MAX,
    WORD_BITS,
    checked_add,
    checked_mul,
    checked_sub,
    is_uint,
    max_uint,
    require_uint,
)

# Amount Deriver
from auction_amounts.core.math.amount_deriver import (
    FRACTION_SPEC_FIELDS,
    AmountDeriver,
    AmountDeriverConfig,
    apply_fraction,
    get_fraction,
    locate_current_amount,
)

# Item Amounts
from auction_amounts.core.math.item_amounts import (
    OrderAmounts,
    derive_order_amounts,
    derive_received_item,
    derive_received_items,
    derive_spent_item,
    derive_spent_items,
)

__all__ = [
    # Errors
    "AmountDerivationError",
    "AmountDivisionByZero",
    "ArithmeticOverflow",
    "InexactFraction",
    # UInt256 — Constants
    "UINT256_MAX",
    "WORD_BITS",
    # UInt256 — Functions
    "checked_add",
    "checked_mul",
    "checked_sub",
    "is_uint",
    "max_uint",
    "require_uint",
    # Amount Deriver — Constants
    "FRACTION_SPEC_FIELDS",
    # Amount Deriver — Types
    "AmountDeriver",
    "AmountDeriverConfig",
    # Amount Deriver — Functions
    "apply_fraction",
    "get_fraction",
    "locate_current_amount",
    # Item Amounts — Types
    "OrderAmounts",
    # Item Amounts — Functions
    "derive_order_amounts",
    "derive_received_item",
    "derive_received_items",
    "derive_spent_item",
    "derive_spent_items",
]
