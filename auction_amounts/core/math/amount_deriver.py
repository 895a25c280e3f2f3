"""
AmountDeriver — Settlement Amounts for Linear Auctions and Partial Fills

Модуль вычисляет сумму item на текущий момент времени для ордеров, у
которых цена линейно меняется в окне [start, end] (восходящий или
нисходящий аукцион) и которые могут исполняться частично (дробь
numerator/denominator от исходного размера).

Три чистые операции:
- locate_current_amount — линейная интерполяция между start и end
- get_fraction          — точная доля значения (неточная дробь отвергается)
- apply_fraction        — дробь к обоим концам диапазона, затем интерполяция

ФОРМУЛЫ:
    total  = start_amount * remaining + end_amount * elapsed
             + (duration - 1 if round_up else 0)
    amount = total // duration

    new_value = value * numerator // denominator
    точность:  new_value * denominator // numerator == value

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Вся арифметика в uint256 с проверкой переполнения (ArithmeticOverflow)
2. Неточная дробь → InexactFraction, никогда не округление
3. Порядок в apply_fraction: сначала дробь, потом интерполяция
   (в целочисленной арифметике операции не коммутируют)
4. Нулевой делитель прерывает вызов (AmountDivisionByZero / ZeroDivisionError)
5. Инварианты жизненного цикла ордера (elapsed + remaining == duration,
   numerator <= denominator) здесь НЕ проверяются
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final

from auction_amounts.core.math.errors import (
    AmountDivisionByZero,
    InexactFraction,
)
from auction_amounts.core.math.uint256 import (
    WORD_BITS,
    checked_add,
    checked_mul,
    checked_sub,
    max_uint,
    require_uint,
)

logger = logging.getLogger(__name__)

# Поля FractionSpec, которые читает apply_fraction
FRACTION_SPEC_FIELDS: Final[tuple[str, ...]] = (
    "numerator",
    "denominator",
    "elapsed",
    "remaining",
    "duration",
)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class AmountDeriverConfig:
    """Конфигурация AmountDeriver.

    word_bits: ширина беззнакового слова (по умолчанию 256)
    guard_zero_divisors: True → нулевой делитель даёт AmountDivisionByZero
        до деления; False → всплывает встроенный ZeroDivisionError
    """

    word_bits: int = WORD_BITS
    guard_zero_divisors: bool = True

    def __post_init__(self) -> None:
        # max_uint валидирует ширину
        max_uint(self.word_bits)


# =============================================================================
# AMOUNT DERIVER
# =============================================================================


class AmountDeriver:
    """Вычислитель settlement-сумм.

    Не хранит состояния кроме неизменяемой конфигурации: безопасен для
    конкурентного использования без синхронизации.
    """

    def __init__(self, config: AmountDeriverConfig | None = None):
        """Инициализация.

        Args:
            config: конфигурация (опционально, используется default)
        """
        self.config = config or AmountDeriverConfig()

    # -------------------------------------------------------------------------
    # Interpolator
    # -------------------------------------------------------------------------

    def locate_current_amount(
        self,
        start_amount: int,
        end_amount: int,
        elapsed: int,
        remaining: int,
        duration: int,
        round_up: bool,
    ) -> int:
        """
        Сумма на текущий момент внутри окна действия.

        start_amount взвешивается по remaining, end_amount по elapsed:
        при elapsed=0 результат равен start_amount, при elapsed=duration
        равен end_amount. Знак разности (восходящий/нисходящий диапазон)
        обрабатывать не требуется.

        Args:
            start_amount: Сумма в начале окна
            end_amount: Сумма в конце окна
            elapsed: Прошедшее время
            remaining: Оставшееся время
            duration: Длительность окна (ожидается > 0)
            round_up: True → округление вверх (ceiling), False → вниз (floor)

        Returns:
            Текущая сумма

        Raises:
            ArithmeticOverflow: Переполнение промежуточных произведений/сумм
            AmountDivisionByZero: duration == 0 при start_amount != end_amount

        Examples:
            >>> AmountDeriver().locate_current_amount(100, 200, 3, 7, 10, False)
            130
            >>> AmountDeriver().locate_current_amount(0, 1, 1, 2, 3, True)
            1
        """
        bits = self.config.word_bits
        for name, value in (
            ("start_amount", start_amount),
            ("end_amount", end_amount),
            ("elapsed", elapsed),
            ("remaining", remaining),
            ("duration", duration),
        ):
            require_uint(value, name, bits)

        return self._locate(start_amount, end_amount, elapsed, remaining, duration, round_up)

    def _locate(
        self,
        start_amount: int,
        end_amount: int,
        elapsed: int,
        remaining: int,
        duration: int,
        round_up: bool,
    ) -> int:
        if start_amount == end_amount:
            return end_amount

        if duration == 0 and self.config.guard_zero_divisors:
            raise AmountDivisionByZero(
                "duration must be non-zero for a changing amount",
                context={"start_amount": start_amount, "end_amount": end_amount},
            )

        bits = self.config.word_bits
        total = checked_add(
            checked_mul(start_amount, remaining, bits),
            checked_mul(end_amount, elapsed, bits),
            bits,
        )
        if round_up:
            # floor((x + d - 1) / d) == ceil(x / d)
            total = checked_add(total, checked_sub(duration, 1, bits), bits)

        return total // duration

    # -------------------------------------------------------------------------
    # FractionExtractor
    # -------------------------------------------------------------------------

    def get_fraction(self, numerator: int, denominator: int, value: int) -> int:
        """
        Точная доля numerator/denominator от value.

        Результат проверяется обратным вычислением: если
        new_value * denominator // numerator != value, дробь неточна и
        отвергается. Молчаливое усечение привело бы к дрейфу сумм при
        многократных частичных исполнениях одного ордера.

        Args:
            numerator: Числитель доли
            denominator: Знаменатель доли (ожидается > 0)
            value: Исходное значение

        Returns:
            value * numerator // denominator

        Raises:
            InexactFraction: Доля не делит value нацело
            ArithmeticOverflow: value * numerator не помещается в слово
            AmountDivisionByZero: Нулевой denominator (или numerator при
                проверке точности)

        Examples:
            >>> AmountDeriver().get_fraction(2, 3, 9)
            6
        """
        bits = self.config.word_bits
        require_uint(numerator, "numerator", bits)
        require_uint(denominator, "denominator", bits)
        require_uint(value, "value", bits)

        return self._fraction(numerator, denominator, value)

    def _fraction(self, numerator: int, denominator: int, value: int) -> int:
        if numerator == denominator:
            return value

        guard = self.config.guard_zero_divisors
        if denominator == 0 and guard:
            raise AmountDivisionByZero(
                "denominator must be non-zero",
                context={"numerator": numerator, "value": value},
            )

        bits = self.config.word_bits
        new_value = checked_mul(value, numerator, bits) // denominator

        if numerator == 0 and guard:
            raise AmountDivisionByZero(
                "numerator must be non-zero to verify fraction exactness",
                context={"denominator": denominator, "value": value},
            )

        if checked_mul(new_value, denominator, bits) // numerator != value:
            logger.warning(
                "Inexact fraction rejected: %d/%d of %d", numerator, denominator, value
            )
            raise InexactFraction(numerator, denominator, value)

        return new_value

    # -------------------------------------------------------------------------
    # Composer
    # -------------------------------------------------------------------------

    def apply_fraction(
        self,
        start_amount: int,
        end_amount: int,
        fraction_spec: Any,
        round_up: bool,
    ) -> int:
        """
        Сумма для исполняемой доли ордера на текущий момент.

        Если start_amount == end_amount, доля применяется один раз к
        end_amount. Иначе доля применяется к каждому концу диапазона
        независимо, и результат интерполируется.

        ВАЖНО: порядок "дробь → интерполяция" обязателен. Обратный порядок
        даёт другую ошибку округления и другой численный результат.

        Args:
            start_amount: Сумма в начале окна (для полного ордера)
            end_amount: Сумма в конце окна (для полного ордера)
            fraction_spec: FractionSpec, Mapping или объект с полями
                numerator, denominator, elapsed, remaining, duration
            round_up: Направление округления интерполяции

        Returns:
            Сумма для доли ордера

        Raises:
            InexactFraction, ArithmeticOverflow, AmountDivisionByZero
        """
        bits = self.config.word_bits
        require_uint(start_amount, "start_amount", bits)
        require_uint(end_amount, "end_amount", bits)
        spec = _read_fraction_spec(fraction_spec)
        for name in FRACTION_SPEC_FIELDS:
            require_uint(spec[name], name, bits)

        numerator = spec["numerator"]
        denominator = spec["denominator"]

        if start_amount == end_amount:
            return self._fraction(numerator, denominator, end_amount)

        fractional_start = self._fraction(numerator, denominator, start_amount)
        fractional_end = self._fraction(numerator, denominator, end_amount)

        return self._locate(
            fractional_start,
            fractional_end,
            spec["elapsed"],
            spec["remaining"],
            spec["duration"],
            round_up,
        )


def _read_fraction_spec(fraction_spec: Any) -> dict[str, Any]:
    """Извлечение полей FractionSpec из модели, Mapping или объекта."""
    if isinstance(fraction_spec, Mapping):
        missing = [name for name in FRACTION_SPEC_FIELDS if name not in fraction_spec]
        if missing:
            raise TypeError(f"fraction_spec is missing fields: {', '.join(missing)}")
        return {name: fraction_spec[name] for name in FRACTION_SPEC_FIELDS}

    try:
        return {name: getattr(fraction_spec, name) for name in FRACTION_SPEC_FIELDS}
    except AttributeError as e:
        raise TypeError(f"fraction_spec does not expose required fields: {e}") from e


# =============================================================================
# MODULE-LEVEL API
# =============================================================================

_DEFAULT_DERIVER = AmountDeriver()


def locate_current_amount(
    start_amount: int,
    end_amount: int,
    elapsed: int,
    remaining: int,
    duration: int,
    round_up: bool,
) -> int:
    """Интерполяция суммы (uint256, нулевые делители отвергаются)."""
    return _DEFAULT_DERIVER.locate_current_amount(
        start_amount, end_amount, elapsed, remaining, duration, round_up
    )


def get_fraction(numerator: int, denominator: int, value: int) -> int:
    """Точная доля value (uint256, неточная дробь отвергается)."""
    return _DEFAULT_DERIVER.get_fraction(numerator, denominator, value)


def apply_fraction(start_amount: int, end_amount: int, fraction_spec: Any, round_up: bool) -> int:
    """Доля ордера, затем интерполяция (uint256)."""
    return _DEFAULT_DERIVER.apply_fraction(start_amount, end_amount, fraction_spec, round_up)

