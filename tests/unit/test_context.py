"""
Тесты для CalculatorContext и ValueType

Проверяет:
1. Значения по умолчанию
2. Валидацию диапазонов (word size, decimal digits)
3. Immutability настроек
4. Разбор тегов ValueType
"""

import pytest
from pydantic import ValidationError

from rpncalc.core.domain.context import (
    DEFAULT_CONTEXT,
    AngleMode,
    BinaryFormat,
    CalculatorContext,
    ComplexFormat,
    DecimalFormat,
    FractionFormat,
    resolve_context,
)
from rpncalc.core.domain.value_type import NUMERIC_TYPES, ValueType, parse_value_type


class TestCalculatorContextDefaults:
    def test_defaults(self, default_context: CalculatorContext) -> None:
        assert default_context.binary_word_size == 32
        assert default_context.binary_format == BinaryFormat.DECIMAL
        assert default_context.fraction_format == FractionFormat.MIXED
        assert default_context.decimal_format == DecimalFormat.STANDARD
        assert default_context.decimal_digits == 6
        assert default_context.angle_mode == AngleMode.RADIANS
        assert default_context.complex_format == ComplexFormat.RECTANGULAR

    def test_resolve_none_returns_default(self) -> None:
        assert resolve_context(None) is DEFAULT_CONTEXT

    def test_resolve_keeps_explicit_context(self, byte_context: CalculatorContext) -> None:
        assert resolve_context(byte_context) is byte_context


class TestCalculatorContextValidation:
    @pytest.mark.parametrize("word_size", [0, 65, -8])
    def test_word_size_out_of_range(self, word_size: int) -> None:
        with pytest.raises(ValidationError):
            CalculatorContext(binary_word_size=word_size)

    @pytest.mark.parametrize("word_size", [1, 64])
    def test_word_size_bounds_accepted(self, word_size: int) -> None:
        assert CalculatorContext(binary_word_size=word_size).binary_word_size == word_size

    @pytest.mark.parametrize("digits", [-1, 16])
    def test_decimal_digits_out_of_range(self, digits: int) -> None:
        with pytest.raises(ValidationError):
            CalculatorContext(decimal_digits=digits)

    def test_unknown_format_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CalculatorContext(binary_format="Base36")

    def test_enum_from_text(self) -> None:
        """Настройки принимаются текстом (как при загрузке из узла)"""
        context = CalculatorContext.model_validate(
            {"binary_format": "Hexadecimal", "binary_word_size": "16"}
        )
        assert context.binary_format == BinaryFormat.HEXADECIMAL
        assert context.binary_word_size == 16


class TestCalculatorContextImmutability:
    def test_assignment_rejected(self, default_context: CalculatorContext) -> None:
        with pytest.raises(ValidationError):
            default_context.binary_word_size = 8

    def test_model_copy_creates_new_instance(self, default_context: CalculatorContext) -> None:
        updated = default_context.model_copy(update={"binary_word_size": 8})
        assert updated.binary_word_size == 8
        assert default_context.binary_word_size == 32


class TestBinaryFormatBase:
    @pytest.mark.parametrize(
        "binary_format,base",
        [
            (BinaryFormat.BINARY, 2),
            (BinaryFormat.OCTAL, 8),
            (BinaryFormat.DECIMAL, 10),
            (BinaryFormat.HEXADECIMAL, 16),
        ],
    )
    def test_base(self, binary_format: BinaryFormat, base: int) -> None:
        assert binary_format.base == base


class TestValueType:
    def test_tag_text(self) -> None:
        assert ValueType.DATE_TIME.value == "DateTime"
        assert ValueType.TIME_SPAN.value == "TimeSpan"

    def test_parse_known_tag(self) -> None:
        assert parse_value_type("Fraction") == ValueType.FRACTION

    @pytest.mark.parametrize("text", ["fraction", "Quaternion", "", None])
    def test_parse_unknown_tag(self, text) -> None:
        """Разбор тега чувствителен к регистру"""
        assert parse_value_type(text) is None

    def test_numeric_types(self) -> None:
        assert ValueType.DATE_TIME not in NUMERIC_TYPES
        assert ValueType.TIME_SPAN not in NUMERIC_TYPES
        assert len(NUMERIC_TYPES) == 5
