"""
Formatting — Текстовые представления double

Общие правила форматирования и разбора double для DoubleValue,
ComplexValue и десятичного формата FractionValue.
"""

import math
from typing import Final

from rpncalc.core.domain.context import CalculatorContext, DecimalFormat

# Разрядность стандартного формата (аналог "G15")
STANDARD_PRECISION: Final[int] = 15

POSITIVE_INFINITY_TEXT: Final[str] = "Infinity"
NEGATIVE_INFINITY_TEXT: Final[str] = "-Infinity"
NAN_TEXT: Final[str] = "NaN"


def format_double(
    value: float,
    context: CalculatorContext,
    decimal_format: DecimalFormat | None = None,
) -> str:
    """
    Отображение double по настройкам контекста.

    Args:
        value: Значение
        context: Настройки (decimal_format, decimal_digits)
        decimal_format: Явный формат вместо context.decimal_format

    Returns:
        Текст для отображения (не обязательно lossless)
    """
    if math.isnan(value):
        return NAN_TEXT
    if math.isinf(value):
        return POSITIVE_INFINITY_TEXT if value > 0 else NEGATIVE_INFINITY_TEXT

    decimal_format = decimal_format or context.decimal_format
    digits = context.decimal_digits

    if decimal_format == DecimalFormat.FIXED:
        return f"{value:.{digits}f}"
    if decimal_format == DecimalFormat.SCIENTIFIC:
        return f"{value:.{digits}e}"
    return f"{value:.{STANDARD_PRECISION}g}"


def format_round_trip(value: float) -> str:
    """Lossless текст double (repr), разбираемый float()."""
    return repr(value)


def parse_double_text(text: str) -> float | None:
    """
    Разбор текста double.

    Принимает десятичную и экспоненциальную запись, Infinity/NaN.
    '_' запрещён (разделитель дробей).

    Returns:
        Значение или None, если текст невалиден
    """
    text = text.strip()
    if not text or "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None
