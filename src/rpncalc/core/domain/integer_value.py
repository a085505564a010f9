"""
IntegerValue — Целое число произвольной точности

Деление возвращает IntegerValue, если результат целый, иначе FractionValue.
Отрицательная степень даёт FractionValue; слишком большой точный
результат степени заменяется double.
"""

import math
from fractions import Fraction
from typing import ClassVar, Iterator, Optional

from pydantic import Field

from rpncalc.core.domain.context import CalculatorContext, DecimalFormat, resolve_context
from rpncalc.core.domain.double_value import DoubleValue
from rpncalc.core.domain.formatting import format_double
from rpncalc.core.domain.value import DisplayFormat, NumericValue, sign_of
from rpncalc.core.domain.value_type import ValueType
from rpncalc.core.math.numerical_safeguards import int_to_double, is_valid_float
from rpncalc.core.math.rational import exact_power, parse_integer


class IntegerValue(NumericValue):
    """Целое значение."""

    value_type: ClassVar[ValueType] = ValueType.INTEGER

    value: int = Field(..., description="Целое произвольной точности")

    @property
    def sign(self) -> int:
        return sign_of(self.value)

    # =========================================================================
    # ФОРМАТИРОВАНИЕ
    # =========================================================================

    def to_canonical_string(self) -> str:
        return str(self.value)

    def get_all_display_formats(
        self, context: CalculatorContext | None = None
    ) -> Iterator[DisplayFormat]:
        """Integer и Scientific (если значение конечно как double)."""
        context = resolve_context(context)
        yield DisplayFormat(ValueType.INTEGER.value, str(self.value))
        double_value = int_to_double(self.value)
        if is_valid_float(double_value):
            yield DisplayFormat(
                DecimalFormat.SCIENTIFIC.value,
                format_double(double_value, context, DecimalFormat.SCIENTIFIC),
            )

    @classmethod
    def try_parse(
        cls, text: str, context: CalculatorContext | None = None
    ) -> Optional["IntegerValue"]:
        if text is None:
            return None
        value = parse_integer(text)
        return None if value is None else cls(value=value)

    # =========================================================================
    # КОНВЕРСИИ
    # =========================================================================

    def to_double(self) -> float:
        return int_to_double(self.value)

    def to_integer(self) -> int:
        return self.value

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def add(self, other: "IntegerValue") -> "IntegerValue":
        return IntegerValue(value=self.value + other.value)

    def subtract(self, other: "IntegerValue") -> "IntegerValue":
        return IntegerValue(value=self.value - other.value)

    def multiply(self, other: "IntegerValue") -> "IntegerValue":
        return IntegerValue(value=self.value * other.value)

    def divide(self, other: "IntegerValue") -> NumericValue:
        """
        Точное деление: IntegerValue при нулевом остатке, иначе FractionValue.

        Raises:
            ZeroDivisionError: Если other == 0
        """
        from rpncalc.core.domain.fraction_value import FractionValue  # circular

        quotient = Fraction(self.value, other.value)
        if quotient.denominator == 1:
            return IntegerValue(value=quotient.numerator)
        return FractionValue(value=quotient)

    def modulus(self, other: "IntegerValue") -> "IntegerValue":
        """
        Усечённый остаток (знак делимого).

        Raises:
            ZeroDivisionError: Если other == 0
        """
        remainder = abs(self.value) % abs(other.value)
        return IntegerValue(value=-remainder if self.value < 0 else remainder)

    def power(self, exponent: "IntegerValue") -> NumericValue:
        """
        Целая степень.

        Returns:
            IntegerValue для exponent >= 0, FractionValue для exponent < 0,
            DoubleValue если точный результат слишком велик

        Raises:
            ZeroDivisionError: 0 в отрицательной степени
        """
        from rpncalc.core.domain.fraction_value import FractionValue  # circular

        exact = exact_power(Fraction(self.value), exponent.value)
        if exact is None:
            return DoubleValue(value=self.to_double()).power(
                DoubleValue(value=exponent.to_double())
            )
        if exact.denominator == 1:
            return IntegerValue(value=exact.numerator)
        return FractionValue(value=exact)

    def negate(self) -> "IntegerValue":
        return IntegerValue(value=-self.value)

    def absolute(self) -> "IntegerValue":
        return IntegerValue(value=abs(self.value))

    def invert(self) -> NumericValue:
        """
        Raises:
            ZeroDivisionError: Если значение == 0
        """
        return IntegerValue(value=1).divide(self)

    def gcd(self, other: "IntegerValue") -> "IntegerValue":
        return IntegerValue(value=math.gcd(self.value, other.value))

    # =========================================================================
    # СРАВНЕНИЕ
    # =========================================================================

    def compare_to(self, other: "IntegerValue") -> int:
        return sign_of(self.value - other.value)
