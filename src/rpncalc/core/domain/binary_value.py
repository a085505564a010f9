"""
BinaryValue — Беззнаковое 64-битное слово с внешним word size

Значение хранит только 64-битную ячейку. Word size (1..64) передаётся
в каждую операцию через CalculatorContext и никогда не сохраняется:
значение остаётся immutable независимо от настроек калькулятора.

Текстовый формат: "# <цифры><суффикс>", суффикс b/o/d/h.

АСИММЕТРИЯ ЗНАКА (как на HP48):
- negate/sign трактуют значение как two's complement (бит word_size - 1)
- to_integer, to_double, invert, power, неявное повышение типов и разбор
  всегда трактуют значение как неотрицательное
"""

from typing import ClassVar, Final, Iterator, Optional

from pydantic import Field

from rpncalc.core.domain.context import BinaryFormat, CalculatorContext, resolve_context
from rpncalc.core.domain.fraction_value import FractionValue
from rpncalc.core.domain.integer_value import IntegerValue
from rpncalc.core.domain.value import DisplayFormat, NumericValue
from rpncalc.core.domain.value_type import ValueType
from rpncalc.core.math.words import (
    UINT64_MAX,
    format_digits,
    mask_to_word_size,
    ones_complement,
    parse_digits,
    rotate_left,
    rotate_right,
    sign_bit_set,
    wrap_uint64,
)

# =============================================================================
# ЛИТЕРАЛЫ
# =============================================================================

PREFIX: Final[str] = "#"
HEX_PREFIX: Final[str] = "0x"

# Суффиксы чувствительны к регистру и имеют приоритет над цифрами
SUFFIXES: Final[dict[str, BinaryFormat]] = {
    "b": BinaryFormat.BINARY,
    "o": BinaryFormat.OCTAL,
    "d": BinaryFormat.DECIMAL,
    "h": BinaryFormat.HEXADECIMAL,
}

_SUFFIX_BY_FORMAT: Final[dict[BinaryFormat, str]] = {
    binary_format: suffix for suffix, binary_format in SUFFIXES.items()
}


def format_binary(value: int, binary_format: BinaryFormat) -> str:
    """
    Литерал "# <цифры><суффикс>" в заданном основании.

    Значение всегда трактуется как беззнаковое; буквенные цифры
    в верхнем регистре.

    Examples:
        >>> format_binary(255, BinaryFormat.HEXADECIMAL)
        '# FFh'
    """
    digits = format_digits(value, binary_format.base)
    return f"{PREFIX} {digits}{_SUFFIX_BY_FORMAT[binary_format]}"


def _parse_suffixed(text: str, context: CalculatorContext | None) -> int | None:
    # В Hex режиме "#123d": десятичное 123, "#123D": hex 0x123D,
    # "#abcd" не разбирается (суффикс d, невалидные десятичные "abc")
    if not text:
        return None

    binary_format = context.binary_format if context is not None else BinaryFormat.DECIMAL
    suffix_format = SUFFIXES.get(text[-1])
    if suffix_format is not None:
        binary_format = suffix_format
        text = text[:-1]

    return parse_digits(text, binary_format.base)


class BinaryValue(NumericValue):
    """
    Binary значение (беззнаковая 64-битная ячейка).

    Арифметика выполняется с 64-битным wraparound и маскируется
    до word size из контекста.
    """

    value_type: ClassVar[ValueType] = ValueType.BINARY

    value: int = Field(..., ge=0, le=UINT64_MAX, description="Беззнаковая 64-битная ячейка")

    def masked(self, context: CalculatorContext | None = None) -> int:
        """Значение ячейки, замаскированное до текущего word size."""
        return mask_to_word_size(self.value, resolve_context(context).binary_word_size)

    @staticmethod
    def _wrap(value: int, context: CalculatorContext | None) -> "BinaryValue":
        word_size = resolve_context(context).binary_word_size
        return BinaryValue(value=mask_to_word_size(wrap_uint64(value), word_size))

    # =========================================================================
    # ФОРМАТИРОВАНИЕ
    # =========================================================================

    def to_canonical_string(self) -> str:
        return format_binary(self.value, BinaryFormat.DECIMAL)

    def to_display_string(self, context: CalculatorContext | None = None) -> str:
        context = resolve_context(context)
        return format_binary(self.masked(context), context.binary_format)

    def get_entry_value(self, context: CalculatorContext | None = None) -> str:
        # Полная ячейка без маски: биты за пределами word size не теряются
        return format_binary(self.value, resolve_context(context).binary_format)

    def get_all_display_formats(
        self, context: CalculatorContext | None = None
    ) -> Iterator[DisplayFormat]:
        masked = self.masked(context)
        for binary_format in BinaryFormat:
            yield DisplayFormat(binary_format.value, format_binary(masked, binary_format))

    # =========================================================================
    # РАЗБОР
    # =========================================================================

    @classmethod
    def try_parse(
        cls, text: str, context: CalculatorContext | None = None
    ) -> Optional["BinaryValue"]:
        """
        Разбор binary литерала в порядке приоритета:
        1. "#цифры[суффикс]" — суффикс b/o/d/h (с учётом регистра) имеет
           приоритет над цифрой; без суффикса используется основание из
           контекста (Decimal без контекста)
        2. "0x..." — hex независимо от контекста
        3. Десятичные цифры без префикса

        Returns:
            BinaryValue или None (значение вне 64 бит тоже None)
        """
        if text is None:
            return None
        text = text.strip()
        if not text:
            return None

        if text.startswith(PREFIX):
            value = _parse_suffixed(text[len(PREFIX):].strip(), context)
        elif len(text) > len(HEX_PREFIX) and text[: len(HEX_PREFIX)].lower() == HEX_PREFIX:
            value = parse_digits(text[len(HEX_PREFIX):], 16)
        else:
            value = parse_digits(text, 10)

        if value is None or value > UINT64_MAX:
            return None
        return cls(value=value)

    # =========================================================================
    # КОНВЕРСИИ
    # =========================================================================

    def to_double(self) -> float:
        return float(self.value)

    def to_integer(self) -> int:
        return self.value

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def add(self, other: "BinaryValue", context: CalculatorContext | None = None) -> "BinaryValue":
        return self._wrap(self.value + other.value, context)

    def subtract(
        self, other: "BinaryValue", context: CalculatorContext | None = None
    ) -> "BinaryValue":
        """Сложение с two's complement отрицанием other при текущем word size."""
        return self.add(other.negate(context), context)

    def multiply(
        self, other: "BinaryValue", context: CalculatorContext | None = None
    ) -> "BinaryValue":
        return self._wrap(self.value * other.value, context)

    def divide(
        self, other: "BinaryValue", context: CalculatorContext | None = None
    ) -> "BinaryValue":
        """
        Raises:
            ZeroDivisionError: Если other == 0
        """
        return self._wrap(self.value // other.value, context)

    def modulus(
        self, other: "BinaryValue", context: CalculatorContext | None = None
    ) -> "BinaryValue":
        """
        Raises:
            ZeroDivisionError: Если other == 0
        """
        return self._wrap(self.value % other.value, context)

    def negate(self, context: CalculatorContext | None = None) -> "BinaryValue":
        """Two's complement: ones' complement + 1, маскировано до word size."""
        return self._wrap(self.bitwise_not(context).value + 1, context)

    def absolute(self, context: CalculatorContext | None = None) -> "BinaryValue":
        return self.negate(context) if self.sign(context) < 0 else self

    def sign(self, context: CalculatorContext | None = None) -> int:
        """
        -1/0/1 по старшему биту слова (бит word_size - 1).

        Несогласовано с to_integer/power/invert, которые считают значение
        неотрицательным; так же ведёт себя HP48.
        """
        if self.value == 0:
            return 0
        word_size = resolve_context(context).binary_word_size
        return -1 if sign_bit_set(self.value, word_size) else 1

    def power(self, exponent: "BinaryValue") -> NumericValue:
        """
        Целая степень.

        Returns:
            BinaryValue, если результат помещается в 64 бита без знака,
            иначе результат целочисленной степени (IntegerValue или DoubleValue)
        """
        result = IntegerValue(value=self.value).power(IntegerValue(value=exponent.value))
        if isinstance(result, IntegerValue) and 0 <= result.value <= UINT64_MAX:
            return BinaryValue(value=result.value)
        return result

    def invert(self) -> FractionValue:
        """
        1/x — всегда FractionValue (binary не представляет дроби).

        Raises:
            ZeroDivisionError: Если значение == 0
        """
        return FractionValue.from_parts(1, self.value)

    # =========================================================================
    # ПОБИТОВЫЕ ОПЕРАЦИИ
    # =========================================================================

    def bitwise_and(self, other: "BinaryValue") -> "BinaryValue":
        return BinaryValue(value=self.value & other.value)

    def bitwise_or(self, other: "BinaryValue") -> "BinaryValue":
        return BinaryValue(value=self.value | other.value)

    def bitwise_xor(self, other: "BinaryValue") -> "BinaryValue":
        return BinaryValue(value=self.value ^ other.value)

    def bitwise_not(self, context: CalculatorContext | None = None) -> "BinaryValue":
        word_size = resolve_context(context).binary_word_size
        return BinaryValue(value=ones_complement(self.value, word_size))

    def shift_left(self, num_bits: int, context: CalculatorContext | None = None) -> "BinaryValue":
        return self._wrap(self.value << num_bits, context)

    def shift_right(
        self, num_bits: int, context: CalculatorContext | None = None
    ) -> "BinaryValue":
        return self._wrap(self.value >> num_bits, context)

    def rotate_left(
        self, num_bits: int, context: CalculatorContext | None = None
    ) -> "BinaryValue":
        """
        Raises:
            ValueError: Если num_bits вне [0, word_size)
        """
        word_size = resolve_context(context).binary_word_size
        return BinaryValue(value=rotate_left(self.value, num_bits, word_size))

    def rotate_right(
        self, num_bits: int, context: CalculatorContext | None = None
    ) -> "BinaryValue":
        """
        Raises:
            ValueError: Если num_bits вне [0, word_size)
        """
        word_size = resolve_context(context).binary_word_size
        return BinaryValue(value=rotate_right(self.value, num_bits, word_size))

    # =========================================================================
    # СРАВНЕНИЕ
    # =========================================================================

    def compare_to(self, other: "BinaryValue") -> int:
        return (self.value > other.value) - (self.value < other.value)
