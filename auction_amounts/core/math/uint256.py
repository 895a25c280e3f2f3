"""
UInt256 — Checked Unsigned Word Arithmetic

Модуль эмулирует беззнаковое машинное слово фиксированной ширины
(по умолчанию 256 бит) поверх Python int:
- Проверка типа и диапазона входов
- Сложение/вычитание/умножение с проверкой переполнения
- Никакой wrapping-арифметики

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат любой операции лежит в [0, 2**word_bits - 1]
2. Выход за диапазон → ArithmeticOverflow (никогда не усечение по модулю)
3. bool не является допустимым целым (True/False отвергаются)
"""

from typing import Final

from auction_amounts.core.math.errors import ArithmeticOverflow

# =============================================================================
# ПАРАМЕТРЫ СЛОВА
# =============================================================================

# Ширина слова по умолчанию (бит)
WORD_BITS: Final[int] = 256

# Максимальное значение 256-битного беззнакового слова
UINT256_MAX: Final[int] = 2**256 - 1


# =============================================================================
# ДИАПАЗОН И ТИПЫ
# =============================================================================


def max_uint(word_bits: int = WORD_BITS) -> int:
    """
    Максимальное значение беззнакового слова заданной ширины.

    Args:
        word_bits: Ширина слова в битах (положительное, кратное 8)

    Returns:
        2**word_bits - 1

    Raises:
        ValueError: Если ширина не положительна или не кратна 8
    """
    if word_bits <= 0 or word_bits % 8 != 0:
        raise ValueError(f"word_bits must be a positive multiple of 8, got {word_bits}")
    if word_bits == WORD_BITS:
        return UINT256_MAX
    return (1 << word_bits) - 1


def is_uint(value: object, word_bits: int = WORD_BITS) -> bool:
    """
    Проверка, является ли значение допустимым беззнаковым словом.

    Examples:
        >>> is_uint(0)
        True
        >>> is_uint(2**256)
        False
        >>> is_uint(True)
        False
    """
    if not isinstance(value, int) or isinstance(value, bool):
        return False
    return 0 <= value <= max_uint(word_bits)


def require_uint(value: object, name: str, word_bits: int = WORD_BITS) -> int:
    """
    Валидация входа как беззнакового слова.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        word_bits: Ширина слова

    Returns:
        value без изменений

    Raises:
        TypeError: Если value не int (или bool)
        ArithmeticOverflow: Если value < 0 или > 2**word_bits - 1
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")

    limit = max_uint(word_bits)
    if value < 0 or value > limit:
        raise ArithmeticOverflow(
            f"{name}={value} is outside uint{word_bits} range [0, {limit}]",
            context={name: value, "word_bits": word_bits},
        )
    return value


# =============================================================================
# CHECKED-ОПЕРАЦИИ
# =============================================================================


def _check_result(result: int, op: str, a: int, b: int, word_bits: int) -> int:
    if result < 0 or result > max_uint(word_bits):
        raise ArithmeticOverflow(
            f"uint{word_bits} overflow in {op}: {a} {op} {b}",
            context={"op": op, "a": a, "b": b, "word_bits": word_bits},
        )
    return result


def checked_add(a: int, b: int, word_bits: int = WORD_BITS) -> int:
    """
    Сложение с проверкой переполнения.

    Raises:
        ArithmeticOverflow: Если a + b > 2**word_bits - 1
    """
    return _check_result(a + b, "+", a, b, word_bits)


def checked_sub(a: int, b: int, word_bits: int = WORD_BITS) -> int:
    """
    Вычитание с проверкой underflow.

    Raises:
        ArithmeticOverflow: Если a - b < 0
    """
    return _check_result(a - b, "-", a, b, word_bits)


def checked_mul(a: int, b: int, word_bits: int = WORD_BITS) -> int:
    """
    Умножение с проверкой переполнения.

    Examples:
        >>> checked_mul(2**128, 2**127)
        57896044618658097711785492504343953926634992332820282019728792003956564819968
        >>> checked_mul(2**128, 2**128)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        ArithmeticOverflow: ...

    Raises:
        ArithmeticOverflow: Если a * b > 2**word_bits - 1
    """
    return _check_result(a * b, "*", a, b, word_bits)
