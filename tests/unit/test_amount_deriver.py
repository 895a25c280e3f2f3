"""
Тесты для AmountDeriver — Interpolator, FractionExtractor, Composer

Проверяемые инварианты:
1. start_amount == end_amount → end_amount без арифметики
2. elapsed=0 → start_amount, elapsed=duration → end_amount
3. Монотонность интерполяции по elapsed
4. round_up не завышает результат при точном делении
5. Неточная дробь → InexactFraction, никогда не усечение
6. Переполнение → ArithmeticOverflow (отдельно от неточности)
7. Порядок "дробь → интерполяция" в apply_fraction
8. Нулевые делители прерывают вызов
"""

import dataclasses
import logging
from types import SimpleNamespace

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from auction_amounts.core.domain.fraction import FractionSpec
from auction_amounts.core.math.amount_deriver import (
    AmountDeriver,
    AmountDeriverConfig,
    apply_fraction,
    get_fraction,
    locate_current_amount,
)
from auction_amounts.core.math.errors import (
    AmountDerivationError,
    AmountDivisionByZero,
    ArithmeticOverflow,
    InexactFraction,
)
from auction_amounts.core.math.uint256 import UINT256_MAX

uint256 = st.integers(min_value=0, max_value=UINT256_MAX)
uint128 = st.integers(min_value=0, max_value=2**128 - 1)


def _spec(numerator, denominator, elapsed=0, remaining=1, duration=1) -> dict:
    return {
        "numerator": numerator,
        "denominator": denominator,
        "elapsed": elapsed,
        "remaining": remaining,
        "duration": duration,
    }


# =============================================================================
# ТЕСТЫ: Interpolator
# =============================================================================


class TestLocateCurrentAmount:
    """Тесты locate_current_amount: линейная интерполяция."""

    def test_ascending_floor(self):
        """700 + 600 = 1300; 1300 / 10 = 130"""
        assert locate_current_amount(100, 200, 3, 7, 10, round_up=False) == 130

    def test_round_up_vs_floor_on_fractional_quotient(self):
        """0 + 1 (+2) над 3: ceiling = 1, floor = 0"""
        assert locate_current_amount(0, 1, 1, 2, 3, round_up=True) == 1
        assert locate_current_amount(0, 1, 1, 2, 3, round_up=False) == 0

    def test_round_up_exact_quotient_not_inflated(self):
        """Точное деление: round_up не добавляет лишнюю единицу"""
        assert locate_current_amount(100, 200, 3, 7, 10, round_up=True) == 130

    def test_descending_range(self):
        """Нисходящий аукцион: 1400 + 300 = 1700; 1700 / 10 = 170"""
        assert locate_current_amount(200, 100, 3, 7, 10, round_up=False) == 170

    def test_descending_rounding(self):
        """10 * 2 = 20 над 3: floor = 6, ceiling = 7"""
        assert locate_current_amount(10, 0, 1, 2, 3, round_up=False) == 6
        assert locate_current_amount(10, 0, 1, 2, 3, round_up=True) == 7

    def test_window_boundaries(self):
        """elapsed=0 → start, elapsed=duration → end"""
        for round_up in (False, True):
            assert locate_current_amount(100, 200, 0, 10, 10, round_up) == 100
            assert locate_current_amount(100, 200, 10, 0, 10, round_up) == 200

    def test_equal_amounts_skip_arithmetic(self):
        """start == end возвращает end даже при нулевой длительности"""
        assert locate_current_amount(5, 5, 0, 0, 0, round_up=True) == 5
        assert locate_current_amount(UINT256_MAX, UINT256_MAX, 7, 3, 10, False) == UINT256_MAX

    def test_product_overflow(self):
        """start_amount * remaining за пределами слова"""
        with pytest.raises(ArithmeticOverflow):
            locate_current_amount(UINT256_MAX, 0, 0, 2, 2, round_up=False)

    def test_sum_overflow(self):
        """Каждое произведение помещается, а сумма нет"""
        with pytest.raises(ArithmeticOverflow):
            locate_current_amount(2**255, 2**255 + 1, 1, 1, 2, round_up=False)

    def test_ceiling_addition_overflow(self):
        """Сумма ровно UINT256_MAX, добавка duration - 1 переполняет"""
        assert locate_current_amount(2**255, 2**255 - 1, 1, 1, 2, round_up=False) == 2**255 - 1
        with pytest.raises(ArithmeticOverflow):
            locate_current_amount(2**255, 2**255 - 1, 1, 1, 2, round_up=True)

    def test_zero_duration_raises(self):
        """Нулевая длительность при изменяющейся сумме"""
        with pytest.raises(AmountDivisionByZero):
            locate_current_amount(1, 2, 0, 0, 0, round_up=False)

        with pytest.raises(ZeroDivisionError):
            locate_current_amount(1, 2, 0, 0, 0, round_up=False)

    def test_out_of_range_input_raises(self):
        with pytest.raises(ArithmeticOverflow, match="elapsed=-1"):
            locate_current_amount(1, 2, -1, 1, 1, round_up=False)

    def test_non_int_input_raises(self):
        with pytest.raises(TypeError, match="duration must be an int"):
            locate_current_amount(1, 2, 1, 1, 2.0, round_up=False)

    @given(amount=uint256, elapsed=uint256, remaining=uint256, duration=uint256, round_up=st.booleans())
    def test_equal_amounts_property(self, amount, elapsed, remaining, duration, round_up):
        """Для любых временных параметров start == end → end"""
        assert locate_current_amount(amount, amount, elapsed, remaining, duration, round_up) == amount

    @given(
        start=uint128,
        end=uint128,
        duration=st.integers(min_value=1, max_value=2**64),
        round_up=st.booleans(),
    )
    def test_boundaries_property(self, start, end, duration, round_up):
        """Границы окна воспроизводят концы диапазона в обоих режимах округления"""
        assert locate_current_amount(start, end, 0, duration, duration, round_up) == start
        assert locate_current_amount(start, end, duration, 0, duration, round_up) == end

    @settings(max_examples=50)
    @given(
        start=st.integers(min_value=0, max_value=10**30),
        delta=st.integers(min_value=1, max_value=10**30),
        duration=st.integers(min_value=1, max_value=200),
        round_up=st.booleans(),
    )
    def test_monotonicity(self, start, delta, duration, round_up):
        """Восходящий диапазон не убывает, нисходящий не возрастает"""
        end = start + delta
        ascending = [
            locate_current_amount(start, end, e, duration - e, duration, round_up)
            for e in range(duration + 1)
        ]
        descending = [
            locate_current_amount(end, start, e, duration - e, duration, round_up)
            for e in range(duration + 1)
        ]
        assert ascending == sorted(ascending)
        assert descending == sorted(descending, reverse=True)

    @given(
        start=uint128,
        end=uint128,
        elapsed=st.integers(min_value=0, max_value=2**64),
        remaining=st.integers(min_value=0, max_value=2**64),
    )
    def test_ceiling_is_floor_plus_remainder_indicator(self, start, end, elapsed, remaining):
        """ceiling - floor == 1 тогда и только тогда, когда есть остаток"""
        duration = elapsed + remaining
        if start == end or duration == 0:
            return
        floor = locate_current_amount(start, end, elapsed, remaining, duration, False)
        ceiling = locate_current_amount(start, end, elapsed, remaining, duration, True)
        has_remainder = (start * remaining + end * elapsed) % duration != 0
        assert ceiling - floor == (1 if has_remainder else 0)


# =============================================================================
# ТЕСТЫ: FractionExtractor
# =============================================================================


class TestGetFraction:
    """Тесты get_fraction: точная доля значения."""

    def test_exact_fraction(self):
        """2/3 от 9 = 6; обратная проверка 6 * 3 / 2 = 9"""
        assert get_fraction(2, 3, 9) == 6

    def test_inexact_fraction_rejected(self):
        """2/3 от 10: 20 / 3 = 6; 6 * 3 / 2 = 9 != 10"""
        with pytest.raises(InexactFraction) as exc_info:
            get_fraction(2, 3, 10)

        error = exc_info.value
        assert (error.numerator, error.denominator, error.value) == (2, 3, 10)
        assert error.context == {"numerator": 2, "denominator": 3, "value": 10}
        assert isinstance(error, AmountDerivationError)
        assert isinstance(error, ArithmeticError)

    def test_inexact_fraction_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="auction_amounts.core.math.amount_deriver"):
            with pytest.raises(InexactFraction):
                get_fraction(1, 2, 3)
        assert "Inexact fraction rejected: 1/2 of 3" in caplog.text

    def test_whole_fraction_fast_path(self):
        """numerator == denominator → value без изменений (даже 0/0)"""
        assert get_fraction(7, 7, 10) == 10
        assert get_fraction(0, 0, 10) == 10
        assert get_fraction(UINT256_MAX, UINT256_MAX, UINT256_MAX) == UINT256_MAX

    def test_fraction_greater_than_one(self):
        """3/2 от 4 = 6"""
        assert get_fraction(3, 2, 4) == 6

    def test_zero_value(self):
        assert get_fraction(1, 2, 0) == 0

    def test_large_value(self):
        assert get_fraction(1, 2, 2**255) == 2**254

    def test_overflow_distinct_from_inexact(self):
        """value * numerator за пределами слова → ArithmeticOverflow"""
        with pytest.raises(ArithmeticOverflow):
            get_fraction(2, 3, UINT256_MAX)

    def test_zero_denominator_raises(self):
        with pytest.raises(AmountDivisionByZero, match="denominator"):
            get_fraction(1, 0, 10)

    def test_zero_numerator_raises_on_exactness_check(self):
        """Обратная проверка делит на numerator"""
        with pytest.raises(AmountDivisionByZero, match="numerator"):
            get_fraction(0, 2, 10)

    @given(value=uint256, whole=st.integers(min_value=0, max_value=UINT256_MAX))
    def test_whole_fraction_property(self, value, whole):
        assert get_fraction(whole, whole, value) == value

    @given(
        numerator=st.integers(min_value=1, max_value=1000),
        denominator=st.integers(min_value=1, max_value=1000),
        value=st.integers(min_value=0, max_value=2**200),
    )
    def test_exactness_invariant(self, numerator, denominator, value):
        """Успешный результат всегда проходит обратную проверку"""
        try:
            result = get_fraction(numerator, denominator, value)
        except InexactFraction:
            return
        assert result * denominator // numerator == value

    @given(
        numerator=st.integers(min_value=1, max_value=1000),
        denominator=st.integers(min_value=1, max_value=1000),
        multiple=st.integers(min_value=0, max_value=2**128),
    )
    def test_multiples_of_denominator_are_exact(self, numerator, denominator, multiple):
        """k * denominator всегда делится: результат k * numerator"""
        assert get_fraction(numerator, denominator, multiple * denominator) == multiple * numerator


# =============================================================================
# ТЕСТЫ: Composer
# =============================================================================


class TestApplyFraction:
    """Тесты apply_fraction: дробь к концам диапазона, затем интерполяция."""

    def test_fixed_amount_half_fill(self):
        """100 → 100, доля 1/2 = 50; временные параметры не используются"""
        spec = _spec(1, 2, elapsed=0, remaining=0, duration=0)
        assert apply_fraction(100, 100, spec, round_up=False) == 50

    def test_partial_fill_interpolated(self):
        """1/2: 100 → 50, 200 → 100; 50 * 7 + 100 * 3 = 650; 650 / 10 = 65"""
        spec = FractionSpec(numerator=1, denominator=2, elapsed=3, remaining=7, duration=10)
        assert apply_fraction(100, 200, spec, round_up=False) == 65

    def test_full_fill_matches_interpolation(self):
        spec = FractionSpec.full_fill(elapsed=3, remaining=7, duration=10)
        assert apply_fraction(100, 200, spec, round_up=False) == locate_current_amount(
            100, 200, 3, 7, 10, round_up=False
        )

    def test_fraction_applied_before_interpolation(self):
        """
        Обратный порядок даёт другой результат.

        Дробь → интерполяция: 2 → 1, 4 → 2; (1*2 + 2*1 + 2) / 3 = 2.
        Интерполяция → дробь: (2*2 + 4*1 + 2) / 3 = 3; 1/2 от 3 неточно.
        """
        spec = _spec(1, 2, elapsed=1, remaining=2, duration=3)
        assert apply_fraction(2, 4, spec, round_up=True) == 2

        interpolated = locate_current_amount(2, 4, 1, 2, 3, round_up=True)
        assert interpolated == 3
        with pytest.raises(InexactFraction):
            get_fraction(1, 2, interpolated)

    def test_inexact_endpoint_rejected(self):
        """Неточная доля start_amount прерывает вызов"""
        with pytest.raises(InexactFraction) as exc_info:
            apply_fraction(10, 21, _spec(2, 3, 1, 1, 2), round_up=False)
        assert exc_info.value.value == 10

    def test_inexact_end_amount_rejected(self):
        with pytest.raises(InexactFraction) as exc_info:
            apply_fraction(9, 10, _spec(2, 3, 1, 1, 2), round_up=False)
        assert exc_info.value.value == 10

    def test_accepts_plain_object(self):
        spec = SimpleNamespace(numerator=1, denominator=2, elapsed=3, remaining=7, duration=10)
        assert apply_fraction(100, 200, spec, round_up=False) == 65

    def test_missing_field_raises_type_error(self):
        with pytest.raises(TypeError, match="duration"):
            apply_fraction(1, 2, {"numerator": 1, "denominator": 1, "elapsed": 0, "remaining": 1}, False)

        with pytest.raises(TypeError, match="required fields"):
            apply_fraction(1, 2, object(), False)

    def test_fraction_fields_validated_even_for_fixed_amount(self):
        with pytest.raises(ArithmeticOverflow, match="elapsed"):
            apply_fraction(100, 100, _spec(1, 2, elapsed=-1), round_up=False)

    def test_zero_duration_after_fraction(self):
        with pytest.raises(AmountDivisionByZero):
            apply_fraction(2, 4, _spec(1, 2, 0, 0, 0), round_up=False)

    @given(
        start=uint128,
        end=uint128,
        elapsed=st.integers(min_value=0, max_value=2**64),
        remaining=st.integers(min_value=0, max_value=2**64),
        round_up=st.booleans(),
    )
    def test_full_fill_is_noop_property(self, start, end, elapsed, remaining, round_up):
        duration = elapsed + remaining
        if duration == 0:
            return
        spec = FractionSpec.full_fill(elapsed=elapsed, remaining=remaining, duration=duration)
        assert apply_fraction(start, end, spec, round_up) == locate_current_amount(
            start, end, elapsed, remaining, duration, round_up
        )


# =============================================================================
# ТЕСТЫ: Config
# =============================================================================


class TestAmountDeriverConfig:
    """Тесты AmountDeriverConfig и AmountDeriver с пользовательской конфигурацией."""

    def test_defaults(self):
        config = AmountDeriverConfig()
        assert config.word_bits == 256
        assert config.guard_zero_divisors is True
        assert AmountDeriver().config == config

    def test_config_is_frozen(self):
        config = AmountDeriverConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.word_bits = 128  # type: ignore[misc]

    def test_invalid_word_bits(self):
        with pytest.raises(ValueError, match="positive multiple of 8"):
            AmountDeriverConfig(word_bits=12)

    def test_narrow_word_overflow(self):
        """uint8: 200 * 1 + 100 * 1 = 300 > 255"""
        deriver = AmountDeriver(AmountDeriverConfig(word_bits=8))
        assert deriver.locate_current_amount(100, 50, 1, 1, 2, round_up=False) == 75
        with pytest.raises(ArithmeticOverflow, match="uint8"):
            deriver.locate_current_amount(200, 100, 1, 1, 2, round_up=False)

    def test_narrow_word_rejects_wide_input(self):
        deriver = AmountDeriver(AmountDeriverConfig(word_bits=8))
        with pytest.raises(ArithmeticOverflow):
            deriver.get_fraction(1, 2, 256)

    def test_unguarded_division_by_zero_is_builtin(self):
        """guard_zero_divisors=False: встроенный ZeroDivisionError"""
        deriver = AmountDeriver(AmountDeriverConfig(guard_zero_divisors=False))

        with pytest.raises(ZeroDivisionError) as exc_info:
            deriver.locate_current_amount(1, 2, 0, 0, 0, round_up=False)
        assert not isinstance(exc_info.value, AmountDivisionByZero)

        with pytest.raises(ZeroDivisionError) as exc_info:
            deriver.get_fraction(1, 0, 10)
        assert not isinstance(exc_info.value, AmountDivisionByZero)

    def test_deterministic_failure(self):
        """Повтор с теми же входами воспроизводит ту же ошибку"""
        deriver = AmountDeriver()
        for _ in range(3):
            with pytest.raises(InexactFraction):
                deriver.get_fraction(2, 3, 10)
