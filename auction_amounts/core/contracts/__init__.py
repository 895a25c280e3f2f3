"""
Contract Validation Module

Модуль для валидации JSON контрактов входных данных auction_amounts.
"""

from .requests import derive_amount
from .validators import (
    AmountRequestValidator,
    ContractValidator,
    FractionSpecValidator,
    SchemaLoader,
    StrictIntegerValidator,
    load_fraction_spec,
    validate_amount_request,
    validate_fraction_spec,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "StrictIntegerValidator",
    "ContractValidator",
    "FractionSpecValidator",
    "AmountRequestValidator",
    # Functions
    "validate_fraction_spec",
    "validate_amount_request",
    "load_fraction_spec",
    "derive_amount",
]
