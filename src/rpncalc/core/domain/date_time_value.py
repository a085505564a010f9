"""
DateTimeValue — Календарная дата и время (naive, разрешение микросекунда)

Разбор ISO 8601 через datetime.fromisoformat; значения с часовым
поясом отклоняются.
"""

from datetime import datetime
from typing import ClassVar, Iterator, Optional

from pydantic import Field, field_validator

from rpncalc.core.domain.context import CalculatorContext
from rpncalc.core.domain.time_span_value import TimeSpanValue
from rpncalc.core.domain.value import DisplayFormat, Value
from rpncalc.core.domain.value_type import ValueType


def format_date_time(value: datetime) -> str:
    """YYYY-MM-DD HH:MM:SS, с .ffffff только при ненулевых микросекундах."""
    text = value.isoformat(sep=" ", timespec="seconds")
    if value.microsecond:
        text = f"{text}.{value.microsecond:06d}"
    return text


class DateTimeValue(Value):
    """Момент времени (не числовое значение)."""

    value_type: ClassVar[ValueType] = ValueType.DATE_TIME

    value: datetime = Field(..., description="Naive дата и время")

    @field_validator("value")
    @classmethod
    def validate_naive(cls, v: datetime) -> datetime:
        """Проверка, что время без часового пояса"""
        if v.tzinfo is not None:
            raise ValueError(f"DateTime value must be naive, got tzinfo={v.tzinfo}")
        return v

    # =========================================================================
    # ФОРМАТИРОВАНИЕ
    # =========================================================================

    def to_canonical_string(self) -> str:
        return format_date_time(self.value)

    def get_entry_value(self, context: CalculatorContext | None = None) -> str:
        return self.value.isoformat(sep=" ")

    def get_all_display_formats(
        self, context: CalculatorContext | None = None
    ) -> Iterator[DisplayFormat]:
        yield DisplayFormat("Date and time", format_date_time(self.value))
        yield DisplayFormat("Date", self.value.date().isoformat())
        yield DisplayFormat("Time", self.value.time().isoformat())
        yield DisplayFormat("ISO 8601", self.value.isoformat())

    @classmethod
    def try_parse(
        cls, text: str, context: CalculatorContext | None = None
    ) -> Optional["DateTimeValue"]:
        """
        Разбор ISO 8601 ("2024-03-01", "2024-03-01 12:30:00", "2024-03-01T12:30").

        Returns:
            DateTimeValue или None (в том числе для значений с часовым поясом)
        """
        if text is None or not text.strip():
            return None
        try:
            value = datetime.fromisoformat(text.strip())
        except ValueError:
            return None
        if value.tzinfo is not None:
            return None
        return cls(value=value)

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def add_time_span(self, span: TimeSpanValue) -> "DateTimeValue":
        """
        Raises:
            OverflowError: Результат вне календарного диапазона
        """
        return DateTimeValue(value=self.value + span.value)

    def subtract_time_span(self, span: TimeSpanValue) -> "DateTimeValue":
        """
        Raises:
            OverflowError: Результат вне календарного диапазона
        """
        return DateTimeValue(value=self.value - span.value)

    def subtract(self, other: "DateTimeValue") -> TimeSpanValue:
        """Интервал между двумя моментами."""
        return TimeSpanValue(value=self.value - other.value)

    # =========================================================================
    # СРАВНЕНИЕ
    # =========================================================================

    def compare_to(self, other: "DateTimeValue") -> int:
        return (self.value > other.value) - (self.value < other.value)
