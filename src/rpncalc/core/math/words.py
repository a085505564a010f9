"""
Words — Операции над 64-битной беззнаковой ячейкой

Модуль содержит примитивы для BinaryValue:
- Wraparound 64-битной арифметики (аналог unchecked ulong)
- Маскирование до текущего word size (1..64 бит)
- Ones'-complement и ротации относительно word size
- Форматирование и разбор цифр в основаниях 2, 8, 10, 16

Word size никогда не хранится в значении: он передаётся в каждую операцию
извне (из CalculatorContext).
"""

from typing import Final

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Максимальный размер слова (бит)
MAX_WORD_SIZE: Final[int] = 64

# Минимальный размер слова (бит)
MIN_WORD_SIZE: Final[int] = 1

# Максимальное значение беззнаковой 64-битной ячейки
UINT64_MAX: Final[int] = (1 << MAX_WORD_SIZE) - 1

# Допустимые основания для цифр
SUPPORTED_BASES: Final[tuple[int, ...]] = (2, 8, 10, 16)

_DIGITS: Final[str] = "0123456789ABCDEF"


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_word_size(word_size: int) -> None:
    """
    Проверка, что word size в диапазоне [1, 64].

    Args:
        word_size: Размер слова в битах

    Raises:
        ValueError: Если word size вне диапазона
    """
    if not MIN_WORD_SIZE <= word_size <= MAX_WORD_SIZE:
        raise ValueError(
            f"word_size must be in [{MIN_WORD_SIZE}, {MAX_WORD_SIZE}], got {word_size}"
        )


# =============================================================================
# WRAPAROUND И МАСКИРОВАНИЕ
# =============================================================================


def wrap_uint64(value: int) -> int:
    """
    Приведение произвольного int к 64-битной беззнаковой ячейке.

    Эквивалент unchecked-переполнения: отрицательные значения
    интерпретируются как two's complement.

    Examples:
        >>> wrap_uint64(-1) == UINT64_MAX
        True
        >>> wrap_uint64(UINT64_MAX + 2)
        1
    """
    return value & UINT64_MAX


def mask_to_word_size(value: int, word_size: int) -> int:
    """
    Маскирование значения до word size бит.

    Старшие неиспользуемые биты выталкиваются сдвигом влево
    и возвращаются сдвигом вправо (логическое усечение, не насыщение).

    Args:
        value: Значение ячейки (будет приведено к 64 битам)
        word_size: Размер слова в битах [1, 64]

    Returns:
        Значение, содержащее только младшие word_size бит

    Examples:
        >>> mask_to_word_size(0x1FF, 8)
        255
        >>> mask_to_word_size(0xFF, 64)
        255
    """
    validate_word_size(word_size)
    shift = MAX_WORD_SIZE - word_size
    return wrap_uint64(value << shift) >> shift


def ones_complement(value: int, word_size: int) -> int:
    """Побитовое NOT, замаскированное до word size."""
    return mask_to_word_size(~value, word_size)


def sign_bit_set(value: int, word_size: int) -> bool:
    """Проверка старшего бита слова (бит word_size - 1)."""
    validate_word_size(word_size)
    return (value >> (word_size - 1)) & 1 == 1


# =============================================================================
# РОТАЦИИ
# =============================================================================


def _validate_rotate_bits(num_bits: int, word_size: int) -> None:
    validate_word_size(word_size)
    if not 0 <= num_bits < word_size:
        raise ValueError(f"num_bits must be in [0, {word_size}), got {num_bits}")


def rotate_left(value: int, num_bits: int, word_size: int) -> int:
    """
    Циклический сдвиг влево в пределах word size.

    Ячейка делится на выталкиваемый сегмент (старшие num_bits бит слова)
    и остаток; сегменты меняются местами и результат маскируется.

    Raises:
        ValueError: Если num_bits вне [0, word_size)

    Examples:
        >>> rotate_left(0b1000_0001, 1, 8)
        3
    """
    _validate_rotate_bits(num_bits, word_size)
    word = mask_to_word_size(value, word_size)
    shifted_out = word >> (word_size - num_bits)
    shifted_in = wrap_uint64(word << num_bits)
    return mask_to_word_size(shifted_in + shifted_out, word_size)


def rotate_right(value: int, num_bits: int, word_size: int) -> int:
    """
    Циклический сдвиг вправо в пределах word size.

    Raises:
        ValueError: Если num_bits вне [0, word_size)

    Examples:
        >>> rotate_right(0b0000_0011, 1, 8)
        129
    """
    _validate_rotate_bits(num_bits, word_size)
    word = mask_to_word_size(value, word_size)
    shifted_in = wrap_uint64(word << (word_size - num_bits))
    shifted_out = word >> num_bits
    return mask_to_word_size(shifted_in + shifted_out, word_size)


# =============================================================================
# ЦИФРЫ
# =============================================================================


def format_digits(value: int, base: int) -> str:
    """
    Беззнаковое представление ячейки в заданном основании (верхний регистр).

    Args:
        value: Неотрицательное значение
        base: Основание (2, 8, 10, 16)

    Returns:
        Строка цифр без префиксов

    Examples:
        >>> format_digits(255, 16)
        'FF'
        >>> format_digits(0, 2)
        '0'
    """
    if base not in SUPPORTED_BASES:
        raise ValueError(f"base must be one of {SUPPORTED_BASES}, got {base}")
    if value < 0:
        raise ValueError(f"value must be non-negative, got {value}")

    if value == 0:
        return "0"

    digits = []
    while value:
        value, remainder = divmod(value, base)
        digits.append(_DIGITS[remainder])
    return "".join(reversed(digits))


def parse_digits(text: str, base: int) -> int | None:
    """
    Разбор строки цифр в заданном основании.

    Знаки, префиксы и разделители не допускаются. Буквенные цифры
    принимаются в любом регистре.

    Args:
        text: Строка цифр (пробелы по краям игнорируются)
        base: Основание (2, 8, 10, 16)

    Returns:
        Неотрицательное значение или None, если строка невалидна
    """
    if base not in SUPPORTED_BASES:
        raise ValueError(f"base must be one of {SUPPORTED_BASES}, got {base}")

    text = text.strip()
    if not text:
        return None

    allowed = set(_DIGITS[:base])
    if any(ch.upper() not in allowed for ch in text):
        return None

    return int(text, base)
