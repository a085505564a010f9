"""
Тесты для BinaryValue

Проверяет:
1. 64-битный wraparound и маскирование до word size
2. Two's complement negate (инволюция) и знак по старшему биту
3. Побитовые операции, сдвиги и ротации
4. Степень и обращение (беззнаковая трактовка)
5. Форматирование "# <цифры><суффикс>" и разбор с приоритетом суффикса
6. Lossless entry-текст
"""

import pytest
from pydantic import ValidationError

from rpncalc.core.domain.binary_value import BinaryValue, format_binary
from rpncalc.core.domain.context import BinaryFormat, CalculatorContext
from rpncalc.core.domain.fraction_value import FractionValue
from rpncalc.core.domain.integer_value import IntegerValue
from rpncalc.core.domain.value_type import ValueType
from rpncalc.core.math.words import UINT64_MAX


def _binary(value: int) -> BinaryValue:
    return BinaryValue(value=value)


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


class TestBinaryArithmetic:
    def test_add_wraps_to_word_size(self, byte_context: CalculatorContext) -> None:
        assert _binary(250).add(_binary(10), byte_context) == _binary(4)

    def test_add_wraps_at_64_bits(self, hex_context: CalculatorContext) -> None:
        assert _binary(UINT64_MAX).add(_binary(2), hex_context) == _binary(1)

    def test_subtract_below_zero(self, byte_context: CalculatorContext) -> None:
        """3 - 5 в 8-битном слове = 0xFE"""
        assert _binary(3).subtract(_binary(5), byte_context) == _binary(0xFE)

    def test_multiply_overflow(self, byte_context: CalculatorContext) -> None:
        assert _binary(16).multiply(_binary(16), byte_context) == _binary(0)

    def test_divide_truncates(self, default_context: CalculatorContext) -> None:
        assert _binary(7).divide(_binary(2), default_context) == _binary(3)

    def test_modulus(self, default_context: CalculatorContext) -> None:
        assert _binary(7).modulus(_binary(3), default_context) == _binary(1)

    def test_divide_by_zero_raises(self, default_context: CalculatorContext) -> None:
        with pytest.raises(ZeroDivisionError):
            _binary(7).divide(_binary(0), default_context)
        with pytest.raises(ZeroDivisionError):
            _binary(7).modulus(_binary(0), default_context)

    def test_default_context_is_32_bits(self) -> None:
        assert _binary(0xFFFFFFFF).add(_binary(1)) == _binary(0)


class TestBinaryNegateAndSign:
    def test_negate_one(self, byte_context: CalculatorContext) -> None:
        assert _binary(1).negate(byte_context) == _binary(0xFF)

    def test_negate_zero(self, byte_context: CalculatorContext) -> None:
        assert _binary(0).negate(byte_context) == _binary(0)

    @pytest.mark.parametrize("word_size", [1, 8, 16, 32, 64])
    @pytest.mark.parametrize("value", [0, 1, 0x7F, 0x80, 0xDEADBEEF, UINT64_MAX])
    def test_negate_is_involution(self, value: int, word_size: int) -> None:
        """negate(negate(x)) == x, замаскированное до word size"""
        context = CalculatorContext(binary_word_size=word_size)
        x = _binary(value)
        assert x.negate(context).negate(context).value == x.masked(context)

    def test_sign_from_top_bit(self, byte_context: CalculatorContext) -> None:
        assert _binary(0x80).sign(byte_context) == -1
        assert _binary(0x7F).sign(byte_context) == 1
        assert _binary(0).sign(byte_context) == 0

    def test_sign_depends_on_word_size(self) -> None:
        assert _binary(0x80).sign(CalculatorContext(binary_word_size=16)) == 1

    def test_absolute_negates_when_sign_bit_set(self, byte_context: CalculatorContext) -> None:
        assert _binary(0xFF).absolute(byte_context) == _binary(1)
        assert _binary(0x05).absolute(byte_context) == _binary(5)

    def test_conversions_are_unsigned(self, byte_context: CalculatorContext) -> None:
        """Знак по старшему биту не влияет на to_integer/to_double"""
        x = _binary(0xFF)
        assert x.sign(byte_context) == -1
        assert x.to_integer() == 255
        assert x.to_double() == 255.0


class TestBinaryBitwise:
    def test_and_or_xor(self) -> None:
        assert _binary(0b1100).bitwise_and(_binary(0b1010)) == _binary(0b1000)
        assert _binary(0b1100).bitwise_or(_binary(0b1010)) == _binary(0b1110)
        assert _binary(0b1100).bitwise_xor(_binary(0b1010)) == _binary(0b0110)

    def test_not_is_masked(self, byte_context: CalculatorContext) -> None:
        assert _binary(0).bitwise_not(byte_context) == _binary(0xFF)

    def test_shifts_are_masked(self, byte_context: CalculatorContext) -> None:
        assert _binary(0x81).shift_left(1, byte_context) == _binary(0x02)
        assert _binary(0x80).shift_right(7, byte_context) == _binary(1)

    def test_rotations(self, byte_context: CalculatorContext) -> None:
        assert _binary(0x81).rotate_left(1, byte_context) == _binary(0x03)
        assert _binary(0x03).rotate_right(1, byte_context) == _binary(0x81)

    def test_rotate_by_word_size_rejected(self, byte_context: CalculatorContext) -> None:
        with pytest.raises(ValueError):
            _binary(1).rotate_left(8, byte_context)


class TestBinaryPowerAndInvert:
    def test_power_fits(self) -> None:
        result = _binary(2).power(_binary(10))
        assert result == _binary(1024)

    def test_power_exceeding_64_bits_returns_integer(self) -> None:
        result = _binary(2).power(_binary(64))
        assert isinstance(result, IntegerValue)
        assert result.value == 2**64

    @pytest.mark.parametrize("base", [0, 1])
    def test_power_of_zero_and_one_stays_binary(self, base: int) -> None:
        """Огромный показатель не выводит 0 и 1 из Binary"""
        assert _binary(base).power(_binary(2_000_000)) == _binary(base)

    def test_invert_is_fraction(self) -> None:
        assert _binary(4).invert() == FractionValue.from_parts(1, 4)

    def test_invert_zero_raises(self) -> None:
        with pytest.raises(ZeroDivisionError):
            _binary(0).invert()


# =============================================================================
# ФОРМАТИРОВАНИЕ
# =============================================================================


class TestBinaryFormatting:
    def test_format_binary(self) -> None:
        assert format_binary(255, BinaryFormat.HEXADECIMAL) == "# FFh"
        assert format_binary(5, BinaryFormat.BINARY) == "# 101b"
        assert format_binary(8, BinaryFormat.OCTAL) == "# 10o"

    def test_canonical_is_unmasked_decimal(self) -> None:
        assert str(_binary(255)) == "# 255d"

    def test_display_masks_to_word_size(self) -> None:
        context = CalculatorContext(binary_word_size=4, binary_format=BinaryFormat.HEXADECIMAL)
        assert _binary(0xFF).to_display_string(context) == "# Fh"

    def test_entry_keeps_full_cell(self, byte_context: CalculatorContext) -> None:
        """Entry-текст не маскируется: биты выше word size сохраняются"""
        assert _binary(0x1FF).get_entry_value(byte_context) == "# 1FFh"

    def test_all_display_formats(self, byte_context: CalculatorContext) -> None:
        formats = list(_binary(255).get_all_display_formats(byte_context))
        assert [f.name for f in formats] == ["Binary", "Octal", "Decimal", "Hexadecimal"]
        assert [f.text for f in formats] == ["# 11111111b", "# 377o", "# 255d", "# FFh"]

    def test_all_display_formats_restartable(self, byte_context: CalculatorContext) -> None:
        value = _binary(7)
        assert list(value.get_all_display_formats(byte_context)) == list(
            value.get_all_display_formats(byte_context)
        )


# =============================================================================
# РАЗБОР
# =============================================================================


class TestBinaryParsing:
    def test_lowercase_suffix_wins_over_hex_digit(self, hex_context: CalculatorContext) -> None:
        """В Hex режиме '#123d' означает десятичное 123"""
        assert BinaryValue.try_parse("#123d", hex_context) == _binary(123)

    def test_uppercase_letter_is_hex_digit(self, hex_context: CalculatorContext) -> None:
        assert BinaryValue.try_parse("#123D", hex_context) == _binary(0x123D)

    def test_suffix_with_invalid_digits_fails(self, hex_context: CalculatorContext) -> None:
        """'#abcd': суффикс d, 'abc' не десятичные цифры"""
        assert BinaryValue.try_parse("#abcd", hex_context) is None

    def test_context_base_without_suffix(self, hex_context: CalculatorContext) -> None:
        assert BinaryValue.try_parse("#FF", hex_context) == _binary(255)

    def test_decimal_without_context(self) -> None:
        assert BinaryValue.try_parse("#FF") is None
        assert BinaryValue.try_parse("#42") == _binary(42)

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("#101b", 5),
            ("# 17o", 15),
            ("#FFh", 255),
            ("0x1f", 31),
            ("0X1F", 31),
            ("42", 42),
            ("#FFFFFFFFFFFFFFFFh", UINT64_MAX),
        ],
    )
    def test_valid_literals(self, text: str, expected: int) -> None:
        assert BinaryValue.try_parse(text) == _binary(expected)

    @pytest.mark.parametrize(
        "text", ["", "#", "0x", "-1", "#12z", "1.5", str(2**64), "#10000000000000000h"]
    )
    def test_invalid_literals(self, text: str) -> None:
        assert BinaryValue.try_parse(text) is None

    @pytest.mark.parametrize("binary_format", list(BinaryFormat))
    @pytest.mark.parametrize("value", [0, 1, 0x1FF, 0xDEADBEEF, UINT64_MAX])
    def test_entry_round_trip(self, value: int, binary_format: BinaryFormat) -> None:
        context = CalculatorContext(binary_word_size=8, binary_format=binary_format)
        x = _binary(value)
        assert BinaryValue.try_parse(x.get_entry_value(context), context) == x


class TestBinaryModel:
    def test_value_type(self) -> None:
        assert _binary(1).value_type == ValueType.BINARY

    def test_frozen(self) -> None:
        x = _binary(1)
        with pytest.raises(ValidationError):
            x.value = 2

    @pytest.mark.parametrize("value", [-1, UINT64_MAX + 1])
    def test_out_of_range_rejected(self, value: int) -> None:
        with pytest.raises(ValidationError):
            _binary(value)

    def test_ordering(self) -> None:
        assert _binary(1) < _binary(2)
        assert _binary(1).compare_to(_binary(1)) == 0
