"""
ValueType — Закрытое перечисление вариантов значений

Значения членов перечисления являются текстом тега при сохранении
(ключ ValueType в persistence node).
"""

from enum import Enum
from typing import Final


class ValueType(str, Enum):
    """Тег варианта значения"""

    BINARY = "Binary"
    COMPLEX = "Complex"
    DATE_TIME = "DateTime"
    DOUBLE = "Double"
    FRACTION = "Fraction"
    INTEGER = "Integer"
    TIME_SPAN = "TimeSpan"


# Варианты, участвующие в неявном повышении типов
NUMERIC_TYPES: Final[frozenset[ValueType]] = frozenset(
    {
        ValueType.BINARY,
        ValueType.INTEGER,
        ValueType.FRACTION,
        ValueType.DOUBLE,
        ValueType.COMPLEX,
    }
)


def parse_value_type(text: str | None) -> ValueType | None:
    """
    Разбор текста тега (с учётом регистра).

    Returns:
        ValueType или None, если тег отсутствует или неизвестен
    """
    if text is None:
        return None
    try:
        return ValueType(text)
    except ValueError:
        return None
