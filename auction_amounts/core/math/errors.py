"""
Amount Derivation Errors — таксономия ошибок вычисления сумм

Все ошибки фатальны для вызова: операции детерминированы, поэтому повтор
с теми же входами воспроизведёт ту же ошибку. Частичный результат
никогда не возвращается.

Иерархия:
    AmountDerivationError
    ├── ArithmeticOverflow    (также OverflowError)
    ├── InexactFraction       (также ArithmeticError)
    └── AmountDivisionByZero  (также ZeroDivisionError)
"""

from typing import Any, Dict, Optional


class AmountDerivationError(Exception):
    """
    Базовая ошибка вычисления settlement-суммы.

    context — диагностические данные (входы операции, сторона и индекс
    item при item-level вычислениях). Используется для логирования и аудита.
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context: Dict[str, Any] = dict(context or {})


class ArithmeticOverflow(AmountDerivationError, OverflowError):
    """
    Результат умножения/сложения не помещается в машинное слово.

    Также используется для входов вне диапазона слова (отрицательные или
    шире word_bits). Не восстанавливается локально: прерывает settlement.
    """

    pass


class InexactFraction(AmountDerivationError, ArithmeticError):
    """
    Дробь numerator/denominator не делит value нацело.

    Сигнализирует о нарушении контракта вызывающей стороной
    (несоответствие дроби и размера ордера).
    """

    def __init__(self, numerator: int, denominator: int, value: int):
        super().__init__(
            f"Inexact fraction: {numerator}/{denominator} of {value} "
            f"cannot be represented without remainder",
            context={"numerator": numerator, "denominator": denominator, "value": value},
        )
        self.numerator = numerator
        self.denominator = denominator
        self.value = value


class AmountDivisionByZero(AmountDerivationError, ZeroDivisionError):
    """Нулевой делитель (duration, denominator или numerator при проверке точности)."""

    pass
