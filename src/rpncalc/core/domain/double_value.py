"""
DoubleValue — IEEE-754 double

Арифметика следует IEEE-754 (x/0 → ±inf, переполнение → ±inf) через
numerical_safeguards. Отрицательное основание в дробной степени даёт
ComplexValue (главное значение).

Порядок: NaN меньше любого числа и равен NaN. Равенство и хеш
следуют тому же порядку, поэтому NaN переживает entry round-trip.
"""

import math
from typing import Any, ClassVar, Iterator, Optional

from pydantic import Field

from rpncalc.core.domain.complex_value import ComplexValue
from rpncalc.core.domain.context import CalculatorContext, DecimalFormat, resolve_context
from rpncalc.core.domain.formatting import format_double, format_round_trip, parse_double_text
from rpncalc.core.domain.value import DisplayFormat, NumericValue, sign_of
from rpncalc.core.domain.value_type import ValueType
from rpncalc.core.math.numerical_safeguards import (
    ieee_divide,
    ieee_fmod,
    ieee_power,
    nan_hash_key,
)


class DoubleValue(NumericValue):
    """Значение double."""

    value_type: ClassVar[ValueType] = ValueType.DOUBLE

    value: float = Field(..., description="Значение IEEE-754 double")

    # =========================================================================
    # ФОРМАТИРОВАНИЕ
    # =========================================================================

    def to_canonical_string(self) -> str:
        return format_double(self.value, resolve_context(None), DecimalFormat.STANDARD)

    def to_display_string(self, context: CalculatorContext | None = None) -> str:
        return format_double(self.value, resolve_context(context))

    def get_entry_value(self, context: CalculatorContext | None = None) -> str:
        return format_round_trip(self.value)

    def get_all_display_formats(
        self, context: CalculatorContext | None = None
    ) -> Iterator[DisplayFormat]:
        """Standard, Fixed, Scientific — без повторов одинакового текста."""
        context = resolve_context(context)
        seen: set[str] = set()
        for decimal_format in DecimalFormat:
            text = format_double(self.value, context, decimal_format)
            if text not in seen:
                seen.add(text)
                yield DisplayFormat(decimal_format.value, text)

    @classmethod
    def try_parse(
        cls, text: str, context: CalculatorContext | None = None
    ) -> Optional["DoubleValue"]:
        if text is None:
            return None
        value = parse_double_text(text)
        return None if value is None else cls(value=value)

    # =========================================================================
    # КОНВЕРСИИ
    # =========================================================================

    def to_double(self) -> float:
        return self.value

    def to_integer(self) -> int:
        """
        Усечение к нулю.

        Raises:
            ValueError: Для NaN
            OverflowError: Для ±inf
        """
        return int(self.value)

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def add(self, other: "DoubleValue") -> "DoubleValue":
        return DoubleValue(value=self.value + other.value)

    def subtract(self, other: "DoubleValue") -> "DoubleValue":
        return DoubleValue(value=self.value - other.value)

    def multiply(self, other: "DoubleValue") -> "DoubleValue":
        return DoubleValue(value=self.value * other.value)

    def divide(self, other: "DoubleValue") -> "DoubleValue":
        return DoubleValue(value=ieee_divide(self.value, other.value))

    def modulus(self, other: "DoubleValue") -> "DoubleValue":
        return DoubleValue(value=ieee_fmod(self.value, other.value))

    def power(self, exponent: "DoubleValue") -> NumericValue:
        """
        Степень; для отрицательного основания и дробного показателя
        возвращает ComplexValue.
        """
        result = ieee_power(self.value, exponent.value)
        if isinstance(result, complex):
            return ComplexValue(value=result)
        return DoubleValue(value=result)

    def negate(self) -> "DoubleValue":
        return DoubleValue(value=-self.value)

    def absolute(self) -> "DoubleValue":
        return DoubleValue(value=abs(self.value))

    def invert(self) -> "DoubleValue":
        return DoubleValue(value=ieee_divide(1.0, self.value))

    @property
    def sign(self) -> int:
        """
        Raises:
            ArithmeticError: Знак NaN не определён
        """
        if math.isnan(self.value):
            raise ArithmeticError("Sign of NaN is undefined")
        return sign_of(self.value)

    # =========================================================================
    # СРАВНЕНИЕ
    # =========================================================================

    def compare_to(self, other: "DoubleValue") -> int:
        x_nan = math.isnan(self.value)
        y_nan = math.isnan(other.value)
        if x_nan or y_nan:
            return y_nan - x_nan
        return (self.value > other.value) - (self.value < other.value)

    def __eq__(self, other: Any) -> bool:
        """Равенство через compare_to: NaN == NaN, 0.0 == -0.0."""
        if type(other) is not type(self):
            return NotImplemented
        return self.compare_to(other) == 0

    def __hash__(self) -> int:
        return hash((self.value_type, nan_hash_key(self.value)))
