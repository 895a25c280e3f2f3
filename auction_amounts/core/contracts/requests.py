"""
Amount Request — вход расчёта суммы по JSON контракту

derive_amount принимает уже распарсенный amount_request (dict), проверяет
его против amount_request.json и передаёт поля в AmountDeriver.apply_fraction.

Порядок:
1. Контракт (jsonschema, строгие целые) → ValidationError
2. FractionSpec (pydantic, frozen/strict)
3. apply_fraction → InexactFraction / ArithmeticOverflow / AmountDivisionByZero
"""

import logging
from typing import Any, Dict

from auction_amounts.core.contracts.validators import AmountRequestValidator
from auction_amounts.core.domain.fraction import FractionSpec
from auction_amounts.core.math.amount_deriver import AmountDeriver


logger = logging.getLogger(__name__)

_DEFAULT_DERIVER = AmountDeriver()


def derive_amount(request: Dict[str, Any], deriver: AmountDeriver | None = None) -> int:
    """
    Settlement-сумма для amount_request.

    Args:
        request: Данные по контракту amount_request (schema_version "1")
        deriver: AmountDeriver; по умолчанию uint256 с защитой делителей

    Returns:
        Текущая сумма для исполняемой доли

    Raises:
        ValidationError: Запрос не соответствует контракту
        AmountDerivationError: Ошибка арифметики (см. apply_fraction)
    """
    validator = AmountRequestValidator()
    errors = validator.describe_errors(request)
    if errors:
        logger.warning("Amount request rejected: %s", "; ".join(errors))
        validator.validate(request)

    spec = FractionSpec(**request["fraction_spec"])
    return (deriver or _DEFAULT_DERIVER).apply_fraction(
        request["start_amount"],
        request["end_amount"],
        spec,
        request["round_up"],
    )
