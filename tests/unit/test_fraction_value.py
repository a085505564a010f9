"""
Тесты для FractionValue

Проверяет:
1. Конструкторы (смешанное число с нормализацией знака, десятичный литерал)
2. Форматы Mixed/Common/Decimal и lossless entry-текст
3. Разбор 2 и 3 частей
4. Степень (точная, вещественный корень, покомпонентная, double)
5. GCD, усечённый остаток, floor/ceiling, целая/дробная части
"""

import math
from fractions import Fraction

import pytest

from rpncalc.core.domain.complex_value import ComplexValue
from rpncalc.core.domain.context import CalculatorContext, FractionFormat
from rpncalc.core.domain.double_value import DoubleValue
from rpncalc.core.domain.fraction_value import FractionValue
from rpncalc.core.domain.integer_value import IntegerValue


def _frac(numerator: int, denominator: int = 1) -> FractionValue:
    return FractionValue.from_parts(numerator, denominator)


# =============================================================================
# КОНСТРУКТОРЫ
# =============================================================================


class TestFractionConstruction:
    def test_mixed_sign_normalisation(self) -> None:
        """(-2, 1, 2) → -5/2, а не -3/2"""
        assert FractionValue.from_mixed(-2, 1, 2).value == Fraction(-5, 2)

    def test_lowest_terms(self) -> None:
        x = _frac(6, -4)
        assert (x.numerator, x.denominator) == (-3, 2)

    def test_from_decimal(self) -> None:
        assert FractionValue.from_decimal(0.33) == _frac(33, 100)

    def test_zero_denominator_raises(self) -> None:
        with pytest.raises(ZeroDivisionError):
            _frac(1, 0)


# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================


class TestFractionFormatting:
    def test_mixed_display(self, default_context: CalculatorContext) -> None:
        assert _frac(-5, 2).to_display_string(default_context) == "-2 1/2"

    def test_mixed_display_without_whole(self, default_context: CalculatorContext) -> None:
        assert _frac(1, 3).to_display_string(default_context) == "1/3"

    def test_common_display(self, common_context: CalculatorContext) -> None:
        assert _frac(-5, 2).to_display_string(common_context) == "-5/2"

    def test_decimal_display(self, decimal_fraction_context: CalculatorContext) -> None:
        assert _frac(-5, 2).to_display_string(decimal_fraction_context) == "-2.5"

    def test_decimal_display_overflow_falls_back_to_common(
        self, decimal_fraction_context: CalculatorContext
    ) -> None:
        x = _frac(10**400, 3)
        assert x.to_display_string(decimal_fraction_context) == f"{10**400}/3"

    def test_canonical_is_mixed(self) -> None:
        assert str(_frac(7, 2)) == "3 1/2"

    def test_entry_mixed(self, default_context: CalculatorContext) -> None:
        assert _frac(-5, 2).get_entry_value(default_context) == "-2_1_2"

    def test_entry_common(self, common_context: CalculatorContext) -> None:
        assert _frac(-5, 2).get_entry_value(common_context) == "-5_2"

    def test_entry_never_decimal(self, decimal_fraction_context: CalculatorContext) -> None:
        assert _frac(1, 3).get_entry_value(decimal_fraction_context) == "1_3"

    def test_all_display_formats(self, default_context: CalculatorContext) -> None:
        formats = list(_frac(-5, 2).get_all_display_formats(default_context))
        assert [(f.name, f.text) for f in formats] == [
            ("Mixed", "-2 1/2"),
            ("Common", "-5/2"),
            ("Decimal", "-2.5"),
        ]

    def test_all_display_formats_skip_mixed_without_whole(self) -> None:
        names = [f.name for f in _frac(1, 3).get_all_display_formats()]
        assert names == ["Common", "Decimal"]

    def test_all_display_formats_skip_non_finite_decimal(self) -> None:
        names = [f.name for f in _frac(10**400, 3).get_all_display_formats()]
        assert names == ["Mixed", "Common"]


# =============================================================================
# РАЗБОР
# =============================================================================


class TestFractionParsing:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("1_1_2", Fraction(3, 2)),
            ("-2_1_2", Fraction(-5, 2)),
            ("3/4", Fraction(3, 4)),
            ("3_4", Fraction(3, 4)),
            ("-3/-4", Fraction(3, 4)),
            ("1 1/2", Fraction(3, 2)),
        ],
    )
    def test_valid(self, text: str, expected: Fraction) -> None:
        assert FractionValue.try_parse(text).value == expected

    @pytest.mark.parametrize(
        "text", ["1/0", "1_-1_2", "1_2_0", "1", "a/b", "", "1_2_3_4", "1.5/2"]
    )
    def test_invalid(self, text: str) -> None:
        assert FractionValue.try_parse(text) is None

    @pytest.mark.parametrize("fraction_format", list(FractionFormat))
    @pytest.mark.parametrize(
        "value", [Fraction(-5, 2), Fraction(1, 3), Fraction(7), Fraction(0), Fraction(-1, 7)]
    )
    def test_entry_round_trip(self, value: Fraction, fraction_format: FractionFormat) -> None:
        context = CalculatorContext(fraction_format=fraction_format)
        x = FractionValue(value=value)
        assert FractionValue.try_parse(x.get_entry_value(context), context) == x


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


class TestFractionArithmetic:
    def test_basic_operations(self) -> None:
        half, third = _frac(1, 2), _frac(1, 3)
        assert half.add(third) == _frac(5, 6)
        assert half.subtract(third) == _frac(1, 6)
        assert half.multiply(third) == _frac(1, 6)
        assert half.divide(third) == _frac(3, 2)

    def test_divide_by_zero_raises(self) -> None:
        with pytest.raises(ZeroDivisionError):
            _frac(1, 2).divide(_frac(0))

    def test_modulus_truncated(self) -> None:
        assert _frac(-7, 2).modulus(_frac(1)) == _frac(-1, 2)

    def test_negate_absolute_invert(self) -> None:
        assert _frac(3, 4).negate() == _frac(-3, 4)
        assert _frac(-3, 4).absolute() == _frac(3, 4)
        assert _frac(-3, 4).invert() == _frac(-4, 3)

    def test_invert_zero_raises(self) -> None:
        with pytest.raises(ZeroDivisionError):
            _frac(0).invert()

    def test_gcd(self) -> None:
        assert _frac(1, 2).gcd(_frac(3, 4)) == _frac(1, 4)

    def test_floor_ceiling(self) -> None:
        assert _frac(-7, 2).floor() == IntegerValue(value=-4)
        assert _frac(-7, 2).ceiling() == IntegerValue(value=-3)

    def test_whole_and_fractional_parts(self) -> None:
        assert _frac(-7, 2).get_whole_part() == IntegerValue(value=-3)
        assert _frac(-7, 2).get_fractional_part() == _frac(-1, 2)

    def test_conversions(self) -> None:
        assert _frac(-7, 2).to_integer() == -3
        assert _frac(-7, 2).to_double() == -3.5


class TestFractionPower:
    def test_integer_exponent_exact(self) -> None:
        assert _frac(2, 3).power(_frac(2)) == _frac(4, 9)
        assert _frac(2, 3).power(_frac(-2)) == _frac(9, 4)

    def test_cube_root_of_negative_is_real(self) -> None:
        """Кубический корень из -8 равен -2, а не главному комплексному значению"""
        result = _frac(-8).power(_frac(1, 3))
        assert isinstance(result, DoubleValue)
        assert result.value == pytest.approx(-2.0)

    def test_negative_base_odd_root_of_square(self) -> None:
        result = _frac(-8).power(_frac(2, 3))
        assert isinstance(result, DoubleValue)
        assert result.value == pytest.approx(4.0)

    def test_componentwise_exact_result(self) -> None:
        assert _frac(4).power(_frac(1, 2)) == _frac(2)
        assert _frac(1, 4).power(_frac(1, 2)) == _frac(1, 2)

    def test_irrational_result_is_double(self) -> None:
        result = _frac(2).power(_frac(1, 2))
        assert isinstance(result, DoubleValue)
        assert result.value == pytest.approx(math.sqrt(2))

    def test_negative_base_even_root_is_complex(self) -> None:
        result = _frac(-4).power(_frac(1, 2))
        assert isinstance(result, ComplexValue)
        assert result.value.imag == pytest.approx(2.0)
        assert result.value.real == pytest.approx(0.0, abs=1e-12)

    def test_oversized_integer_exponent_falls_back_to_double(self) -> None:
        result = _frac(3, 2).power(_frac(10**6))
        assert isinstance(result, DoubleValue)
        assert result.value == math.inf


class TestFractionOrdering:
    def test_compare_to(self) -> None:
        assert _frac(1, 3).compare_to(_frac(1, 2)) == -1
        assert _frac(2, 4).compare_to(_frac(1, 2)) == 0

    def test_sign(self) -> None:
        assert _frac(-1, 3).sign == -1
        assert _frac(0).sign == 0
