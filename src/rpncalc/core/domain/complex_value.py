"""
ComplexValue — Комплексное число (пара double)

Форматы:
- Rectangular: (re, im)
- Polar: (r, ∠θ), θ в единицах context.angle_mode

Entry-текст всегда прямоугольный с lossless double, поэтому разбор
не зависит от текущего формата. Комплексные значения не упорядочены,
но равенство покомпонентное с NaN == NaN.
"""

import cmath
import math
from typing import Any, ClassVar, Final, Iterator, Optional

from pydantic import Field

from rpncalc.core.domain.context import (
    AngleMode,
    CalculatorContext,
    ComplexFormat,
    resolve_context,
)
from rpncalc.core.domain.formatting import format_double, format_round_trip, parse_double_text
from rpncalc.core.domain.value import DisplayFormat, NumericValue
from rpncalc.core.domain.value_type import ValueType
from rpncalc.core.math.numerical_safeguards import nan_equal, nan_hash_key

ANGLE_MARK: Final[str] = "∠"


class ComplexValue(NumericValue):
    """
    Комплексное значение.

    ToDouble возвращает вещественную часть.
    """

    value_type: ClassVar[ValueType] = ValueType.COMPLEX

    value: complex = Field(..., description="Комплексное значение")

    # =========================================================================
    # ФОРМАТИРОВАНИЕ
    # =========================================================================

    def to_canonical_string(self) -> str:
        return self._rectangular(resolve_context(None))

    def to_display_string(self, context: CalculatorContext | None = None) -> str:
        context = resolve_context(context)
        if context.complex_format == ComplexFormat.POLAR:
            return self._polar(context)
        return self._rectangular(context)

    def get_entry_value(self, context: CalculatorContext | None = None) -> str:
        re = format_round_trip(self.value.real)
        im = format_round_trip(self.value.imag)
        return f"({re}, {im})"

    def get_all_display_formats(
        self, context: CalculatorContext | None = None
    ) -> Iterator[DisplayFormat]:
        context = resolve_context(context)
        yield DisplayFormat(ComplexFormat.RECTANGULAR.value, self._rectangular(context))
        yield DisplayFormat(ComplexFormat.POLAR.value, self._polar(context))

    def _rectangular(self, context: CalculatorContext) -> str:
        re = format_double(self.value.real, context)
        im = format_double(self.value.imag, context)
        return f"({re}, {im})"

    def _polar(self, context: CalculatorContext) -> str:
        magnitude, phase = cmath.polar(self.value)
        if context.angle_mode == AngleMode.DEGREES:
            phase = math.degrees(phase)
        return f"({format_double(magnitude, context)}, {ANGLE_MARK}{format_double(phase, context)})"

    # =========================================================================
    # РАЗБОР
    # =========================================================================

    @classmethod
    def try_parse(
        cls, text: str, context: CalculatorContext | None = None
    ) -> Optional["ComplexValue"]:
        """
        Разбор (re, im) или (r, ∠θ); скобки необязательны.

        Угол в полярной форме интерпретируется в единицах
        context.angle_mode (радианы без контекста).

        Returns:
            ComplexValue или None
        """
        if text is None:
            return None
        text = text.strip()
        if text.startswith("(") and text.endswith(")"):
            text = text[1:-1]

        parts = text.split(",")
        if len(parts) != 2:
            return None

        first = parse_double_text(parts[0])
        second_text = parts[1].strip()
        is_polar = second_text.startswith(ANGLE_MARK)
        if is_polar:
            second_text = second_text[len(ANGLE_MARK):]
        second = parse_double_text(second_text)
        if first is None or second is None:
            return None

        if is_polar:
            if resolve_context(context).angle_mode == AngleMode.DEGREES:
                second = math.radians(second)
            return cls(value=cmath.rect(first, second))
        return cls(value=complex(first, second))

    # =========================================================================
    # КОНВЕРСИИ
    # =========================================================================

    def to_double(self) -> float:
        return self.value.real

    def to_integer(self) -> int:
        return int(self.value.real)

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def add(self, other: "ComplexValue") -> "ComplexValue":
        return ComplexValue(value=self.value + other.value)

    def subtract(self, other: "ComplexValue") -> "ComplexValue":
        return ComplexValue(value=self.value - other.value)

    def multiply(self, other: "ComplexValue") -> "ComplexValue":
        return ComplexValue(value=self.value * other.value)

    def divide(self, other: "ComplexValue") -> "ComplexValue":
        """Деление; делитель 0 даёт (NaN, NaN)."""
        if other.value == 0:
            return ComplexValue(value=complex(math.nan, math.nan))
        return ComplexValue(value=self.value / other.value)

    def power(self, exponent: "ComplexValue") -> "ComplexValue":
        """
        Главное значение степени.

        Raises:
            ZeroDivisionError: 0 в отрицательной или комплексной степени
            OverflowError: Переполнение результата
        """
        return ComplexValue(value=self.value**exponent.value)

    def negate(self) -> "ComplexValue":
        return ComplexValue(value=-self.value)

    def invert(self) -> "ComplexValue":
        return ComplexValue(value=complex(1.0, 0.0)).divide(self)

    def magnitude(self) -> float:
        return abs(self.value)

    def unit_vector(self) -> "ComplexValue":
        """
        Знак комплексного числа: вектор единичной длины той же фазы.

        Для нуля возвращает ноль.
        """
        if self.value == 0:
            return ComplexValue(value=complex(0.0, 0.0))
        magnitude = abs(self.value)
        return ComplexValue(value=complex(self.value.real / magnitude, self.value.imag / magnitude))

    # =========================================================================
    # РАВЕНСТВО
    # =========================================================================

    def __eq__(self, other: Any) -> bool:
        """Покомпонентное равенство, в котором NaN равен NaN."""
        if type(other) is not type(self):
            return NotImplemented
        return nan_equal(self.value.real, other.value.real) and nan_equal(
            self.value.imag, other.value.imag
        )

    def __hash__(self) -> int:
        return hash(
            (self.value_type, nan_hash_key(self.value.real), nan_hash_key(self.value.imag))
        )
