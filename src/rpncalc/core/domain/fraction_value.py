"""
FractionValue — Рациональное число произвольной точности

Хранит fractions.Fraction (несократимая дробь, знаменатель > 0).

Форматы отображения:
- Mixed: целая часть + дробный остаток ("-2 1/2")
- Common: числитель/знаменатель ("-5/2")
- Decimal: double по настройкам контекста; если конверсия даёт
  inf/NaN, используется Common

Entry-текст всегда lossless (Mixed "-2_1_2" или Common "-5_2"),
никогда Decimal, поэтому повторный разбор не теряет точность.
"""

import math
import re
from decimal import Decimal
from fractions import Fraction
from typing import ClassVar, Final, Iterator, Optional

from pydantic import Field

from rpncalc.core.domain.context import CalculatorContext, FractionFormat, resolve_context
from rpncalc.core.domain.double_value import DoubleValue
from rpncalc.core.domain.formatting import format_double
from rpncalc.core.domain.integer_value import IntegerValue
from rpncalc.core.domain.value import DisplayFormat, NumericValue, sign_of
from rpncalc.core.domain.value_type import ValueType
from rpncalc.core.math.numerical_safeguards import (
    ieee_divide,
    ieee_power,
    int_to_double,
    integral_value,
    is_valid_float,
    rational_to_double,
    signed_root,
)
from rpncalc.core.math.rational import (
    exact_power,
    fraction_from_decimal,
    fraction_from_mixed,
    fractional_part,
    parse_integer,
    rational_gcd,
    truncated_remainder,
    whole_part,
)

# Разделитель при вводе (как на Casio fx-85)
ENTRY_SEPARATOR: Final[str] = "_"

# Разделитель при отображении
DISPLAY_SEPARATOR: Final[str] = "/"

_PART_SPLITTER: Final[re.Pattern[str]] = re.compile(r"[_/\s]+")


# =============================================================================
# ФОРМАТЫ
# =============================================================================


def _common_format(value: Fraction, separator: str) -> str:
    return f"{value.numerator}{separator}{value.denominator}"


def _mixed_format(value: Fraction, separator: str) -> str:
    whole = whole_part(value)
    remainder = fractional_part(value)
    if whole == 0:
        return _common_format(remainder, separator)

    # При отображении целая и дробная части разделены пробелом
    whole_separator = " " if separator == DISPLAY_SEPARATOR else separator
    # Знак уже выведен в целой части
    return f"{whole}{whole_separator}{_common_format(abs(remainder), separator)}"


def _decimal_format(value: Fraction, context: CalculatorContext) -> tuple[str, bool]:
    """
    Returns:
        (текст, True) для конечного double; (Common, False) при inf/NaN
    """
    double_value = rational_to_double(value)
    if not is_valid_float(double_value):
        return _common_format(value, DISPLAY_SEPARATOR), False
    return format_double(double_value, context), True


# =============================================================================
# FRACTION VALUE
# =============================================================================


class FractionValue(NumericValue):
    """
    Значение-дробь.

    Конструкторы:
    - FractionValue(value=Fraction(...))
    - FractionValue.from_parts(numerator, denominator)
    - FractionValue.from_mixed(whole, numerator, denominator)
    - FractionValue.from_decimal(0.33)  → 33/100
    """

    value_type: ClassVar[ValueType] = ValueType.FRACTION

    value: Fraction = Field(..., description="Рациональное значение")

    @classmethod
    def from_parts(cls, numerator: int, denominator: int) -> "FractionValue":
        """
        Raises:
            ZeroDivisionError: Если denominator == 0
        """
        return cls(value=Fraction(numerator, denominator))

    @classmethod
    def from_mixed(cls, whole: int, numerator: int, denominator: int) -> "FractionValue":
        """
        Смешанное число: знак целой части распространяется на дробную,
        (-2, 1, 2) → -5/2.
        """
        return cls(value=fraction_from_mixed(whole, numerator, denominator))

    @classmethod
    def from_decimal(cls, value: Decimal | float | str) -> "FractionValue":
        return cls(value=fraction_from_decimal(value))

    @property
    def numerator(self) -> int:
        return self.value.numerator

    @property
    def denominator(self) -> int:
        return self.value.denominator

    @property
    def sign(self) -> int:
        return sign_of(self.value)

    # =========================================================================
    # ФОРМАТИРОВАНИЕ
    # =========================================================================

    def to_canonical_string(self) -> str:
        return _mixed_format(self.value, DISPLAY_SEPARATOR)

    def to_display_string(self, context: CalculatorContext | None = None) -> str:
        context = resolve_context(context)
        if context.fraction_format == FractionFormat.MIXED:
            return _mixed_format(self.value, DISPLAY_SEPARATOR)
        if context.fraction_format == FractionFormat.DECIMAL:
            text, _ = _decimal_format(self.value, context)
            return text
        return _common_format(self.value, DISPLAY_SEPARATOR)

    def get_entry_value(self, context: CalculatorContext | None = None) -> str:
        # Decimal обрабатывается как Common: entry всегда lossless
        if resolve_context(context).fraction_format == FractionFormat.MIXED:
            return _mixed_format(self.value, ENTRY_SEPARATOR)
        return _common_format(self.value, ENTRY_SEPARATOR)

    def get_all_display_formats(
        self, context: CalculatorContext | None = None
    ) -> Iterator[DisplayFormat]:
        """
        Mixed (только при ненулевой целой части), Common,
        Decimal (только если конверсия в double конечна).
        """
        context = resolve_context(context)
        if whole_part(self.value) != 0:
            yield DisplayFormat(
                FractionFormat.MIXED.value, _mixed_format(self.value, DISPLAY_SEPARATOR)
            )
        yield DisplayFormat(
            FractionFormat.COMMON.value, _common_format(self.value, DISPLAY_SEPARATOR)
        )
        text, is_decimal = _decimal_format(self.value, context)
        if is_decimal:
            yield DisplayFormat(FractionFormat.DECIMAL.value, text)

    # =========================================================================
    # РАЗБОР
    # =========================================================================

    @classmethod
    def try_parse(
        cls, text: str, context: CalculatorContext | None = None
    ) -> Optional["FractionValue"]:
        """
        Разбор 2 или 3 целых частей, разделённых '_', '/' или пробелами.

        - 2 части (common): знаки любые, знаменатель ненулевой
        - 3 части (mixed): числитель >= 0, знаменатель > 0,
          знак задаётся только целой частью

        Returns:
            FractionValue или None
        """
        if text is None or not text.strip():
            return None

        raw_parts = [part for part in _PART_SPLITTER.split(text.strip()) if part]
        parts = [parse_integer(part) for part in raw_parts]
        if any(part is None for part in parts):
            return None

        if len(parts) == 2:
            numerator, denominator = parts
            if denominator == 0:
                return None
            return cls.from_parts(numerator, denominator)

        if len(parts) == 3:
            whole, numerator, denominator = parts
            if numerator < 0 or denominator <= 0:
                return None
            return cls.from_mixed(whole, numerator, denominator)

        return None

    # =========================================================================
    # КОНВЕРСИИ
    # =========================================================================

    def to_double(self) -> float:
        return rational_to_double(self.value)

    def to_integer(self) -> int:
        """Усечение к нулю."""
        return whole_part(self.value)

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def add(self, other: "FractionValue") -> "FractionValue":
        return FractionValue(value=self.value + other.value)

    def subtract(self, other: "FractionValue") -> "FractionValue":
        return FractionValue(value=self.value - other.value)

    def multiply(self, other: "FractionValue") -> "FractionValue":
        return FractionValue(value=self.value * other.value)

    def divide(self, other: "FractionValue") -> "FractionValue":
        """
        Raises:
            ZeroDivisionError: Если other == 0
        """
        return FractionValue(value=self.value / other.value)

    def modulus(self, other: "FractionValue") -> "FractionValue":
        """Усечённый остаток (знак делимого)."""
        return FractionValue(value=truncated_remainder(self.value, other.value))

    def negate(self) -> "FractionValue":
        return FractionValue(value=-self.value)

    def absolute(self) -> "FractionValue":
        return self if self.sign >= 0 else self.negate()

    def invert(self) -> "FractionValue":
        """
        Raises:
            ZeroDivisionError: Если значение == 0
        """
        return FractionValue(value=1 / self.value)

    def power(self, exponent: "FractionValue") -> NumericValue:
        """
        Возведение в рациональную степень.

        Порядок правил:
        1. Целый показатель → точная дробь (double, если результат слишком велик)
        2. Отрицательное основание, положительный показатель с нечётным
           знаменателем → вещественный корень со знаком (кубический корень
           из -8 равен -2, а не главному комплексному значению)
        3. Положительные основание и показатель → степень числителя и
           знаменателя по отдельности; если оба результата целые, точная
           дробь, иначе double
        4. Иначе → степень double
        """
        if exponent.denominator == 1:
            exact = exact_power(self.value, exponent.numerator)
            if exact is not None:
                return FractionValue(value=exact)
            return self._double_power(exponent)

        if self.sign < 0 and exponent.sign > 0 and exponent.denominator % 2 == 1:
            radicand = exact_power(self.value, exponent.numerator)
            if radicand is not None:
                radicand_double = rational_to_double(radicand)
            else:
                radicand_double = ieee_power(self.to_double(), float(exponent.numerator))
            return DoubleValue(value=signed_root(radicand_double, exponent.denominator))

        if self.sign > 0 and exponent.sign > 0:
            exponent_double = exponent.to_double()
            numerator_double = ieee_power(int_to_double(self.numerator), exponent_double)
            denominator_double = ieee_power(int_to_double(self.denominator), exponent_double)
            result_numerator = integral_value(numerator_double)
            result_denominator = integral_value(denominator_double)
            if result_numerator is not None and result_denominator:
                return FractionValue.from_parts(result_numerator, result_denominator)
            return DoubleValue(value=ieee_divide(numerator_double, denominator_double))

        return self._double_power(exponent)

    def _double_power(self, exponent: "FractionValue") -> NumericValue:
        return DoubleValue(value=self.to_double()).power(DoubleValue(value=exponent.to_double()))

    def gcd(self, other: "FractionValue") -> "FractionValue":
        """
        Наибольший общий делитель (алгоритм Евклида на дробях).

        Raises:
            GcdIterationLimitExceeded: Если алгоритм не сошёлся
        """
        return FractionValue(value=rational_gcd(self.value, other.value))

    def floor(self) -> "IntegerValue":
        return IntegerValue(value=math.floor(self.value))

    def ceiling(self) -> "IntegerValue":
        return IntegerValue(value=math.ceil(self.value))

    def get_whole_part(self) -> "IntegerValue":
        """Целая часть с усечением к нулю."""
        return IntegerValue(value=whole_part(self.value))

    def get_fractional_part(self) -> "FractionValue":
        return FractionValue(value=fractional_part(self.value))

    # =========================================================================
    # СРАВНЕНИЕ
    # =========================================================================

    def compare_to(self, other: "FractionValue") -> int:
        return sign_of(self.value - other.value)


