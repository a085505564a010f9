"""
TimeSpanValue — Знаковая длительность с разрешением в микросекунду

Формат: [-][d.]hh:mm:ss[.ffffff]
- "1.02:03:04.5" → 1 день 2 ч 3 мин 4.5 с
- "-00:00:01"    → минус одна секунда
- "3"            → 3 дня (голое число при разборе)

TimeSpan не участвует в неявном повышении типов; смешанная арифметика
с числами и DateTime описана таблицей cross-family правил в engine.
"""

import re
from datetime import timedelta
from typing import ClassVar, Final, Iterator, Optional

from pydantic import Field

from rpncalc.core.domain.context import CalculatorContext, resolve_context
from rpncalc.core.domain.double_value import DoubleValue
from rpncalc.core.domain.formatting import format_double
from rpncalc.core.domain.value import DisplayFormat, Value, sign_of
from rpncalc.core.domain.value_type import ValueType

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

MICROSECONDS_PER_SECOND: Final[int] = 1_000_000
SECONDS_PER_MINUTE: Final[int] = 60
SECONDS_PER_HOUR: Final[int] = 3_600
SECONDS_PER_DAY: Final[int] = 86_400
HOURS_PER_DAY: Final[int] = 24

_ONE_MICROSECOND: Final[timedelta] = timedelta(microseconds=1)

_TIME_SPAN_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?P<sign>[+-])?"
    r"(?:(?P<days>\d+)\.)?"
    r"(?P<hours>\d{1,2}):(?P<minutes>\d{1,2}):(?P<seconds>\d{1,2})"
    r"(?:\.(?P<fraction>\d{1,6}))?$"
)

_DAYS_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(?P<sign>[+-])?(?P<days>\d+)$")

# (название, делитель в секундах) для альтернативных представлений
_TOTALS: Final[tuple[tuple[str, int], ...]] = (
    ("Total days", SECONDS_PER_DAY),
    ("Total hours", SECONDS_PER_HOUR),
    ("Total minutes", SECONDS_PER_MINUTE),
    ("Total seconds", 1),
)


def format_time_span(value: timedelta) -> str:
    """
    Текст [-][d.]hh:mm:ss[.ffffff].

    Дни выводятся только при ненулевом значении, микросекунды только
    при ненулевой дробной части секунды.

    Examples:
        >>> format_time_span(timedelta(days=1, hours=2, minutes=3, seconds=4))
        '1.02:03:04'
        >>> format_time_span(timedelta(seconds=-1.5))
        '-00:00:01.500000'
    """
    total_microseconds = value // _ONE_MICROSECOND
    sign = "-" if total_microseconds < 0 else ""
    total_seconds, microseconds = divmod(abs(total_microseconds), MICROSECONDS_PER_SECOND)
    days, seconds = divmod(total_seconds, SECONDS_PER_DAY)
    hours, seconds = divmod(seconds, SECONDS_PER_HOUR)
    minutes, seconds = divmod(seconds, SECONDS_PER_MINUTE)

    text = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if days:
        text = f"{days}.{text}"
    if microseconds:
        text = f"{text}.{microseconds:06d}"
    return sign + text


def parse_time_span(text: str) -> timedelta | None:
    """
    Разбор [-][d.]hh:mm:ss[.ffffff] или целого числа дней.

    Часы < 24, минуты и секунды < 60.

    Returns:
        timedelta или None, если текст невалиден или вне диапазона timedelta
    """
    text = text.strip()

    days_match = _DAYS_PATTERN.match(text)
    if days_match is not None:
        days = int(days_match["days"])
        negative = days_match["sign"] == "-"
        try:
            return timedelta(days=-days if negative else days)
        except OverflowError:
            return None

    match = _TIME_SPAN_PATTERN.match(text)
    if match is None:
        return None

    hours = int(match["hours"])
    minutes = int(match["minutes"])
    seconds = int(match["seconds"])
    if (
        hours >= HOURS_PER_DAY
        or minutes >= SECONDS_PER_MINUTE
        or seconds >= SECONDS_PER_MINUTE
    ):
        return None

    fraction = match["fraction"] or ""
    microseconds = int(fraction.ljust(6, "0")) if fraction else 0

    try:
        value = timedelta(
            days=int(match["days"] or 0),
            hours=hours,
            minutes=minutes,
            seconds=seconds,
            microseconds=microseconds,
        )
    except OverflowError:
        return None
    return -value if match["sign"] == "-" else value


# =============================================================================
# TIME SPAN VALUE
# =============================================================================


class TimeSpanValue(Value):
    """Длительность (не числовое значение)."""

    value_type: ClassVar[ValueType] = ValueType.TIME_SPAN

    value: timedelta = Field(..., description="Длительность")

    @property
    def sign(self) -> int:
        return sign_of(self.microseconds)

    @property
    def microseconds(self) -> int:
        """Длительность в целых микросекундах."""
        return self.value // _ONE_MICROSECOND

    def total_seconds(self) -> float:
        return self.value.total_seconds()

    # =========================================================================
    # ФОРМАТИРОВАНИЕ
    # =========================================================================

    def to_canonical_string(self) -> str:
        return format_time_span(self.value)

    def get_all_display_formats(
        self, context: CalculatorContext | None = None
    ) -> Iterator[DisplayFormat]:
        context = resolve_context(context)
        yield DisplayFormat(ValueType.TIME_SPAN.value, format_time_span(self.value))
        total_seconds = self.value.total_seconds()
        for name, divisor in _TOTALS:
            yield DisplayFormat(name, format_double(total_seconds / divisor, context))

    @classmethod
    def try_parse(
        cls, text: str, context: CalculatorContext | None = None
    ) -> Optional["TimeSpanValue"]:
        if text is None:
            return None
        value = parse_time_span(text)
        return None if value is None else cls(value=value)

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def add(self, other: "TimeSpanValue") -> "TimeSpanValue":
        """
        Raises:
            OverflowError: Результат вне диапазона timedelta
        """
        return TimeSpanValue(value=self.value + other.value)

    def subtract(self, other: "TimeSpanValue") -> "TimeSpanValue":
        """
        Raises:
            OverflowError: Результат вне диапазона timedelta
        """
        return TimeSpanValue(value=self.value - other.value)

    def negate(self) -> "TimeSpanValue":
        return TimeSpanValue(value=-self.value)

    def absolute(self) -> "TimeSpanValue":
        return TimeSpanValue(value=abs(self.value))

    def multiply_by_double(self, factor: float) -> "TimeSpanValue":
        """
        Умножение на число; результат округляется до микросекунды.

        Raises:
            OverflowError: Результат вне диапазона timedelta
            ValueError: Множитель NaN
        """
        return TimeSpanValue(value=self.value * factor)

    def divide_by_double(self, divisor: float) -> "TimeSpanValue":
        """
        Raises:
            ZeroDivisionError: Если divisor == 0
            OverflowError: Результат вне диапазона timedelta
        """
        return TimeSpanValue(value=self.value / divisor)

    def divide(self, other: "TimeSpanValue") -> DoubleValue:
        """
        Отношение двух длительностей.

        Raises:
            ZeroDivisionError: Если other — нулевая длительность
        """
        return DoubleValue(value=self.value / other.value)

    # =========================================================================
    # СРАВНЕНИЕ
    # =========================================================================

    def compare_to(self, other: "TimeSpanValue") -> int:
        return sign_of(self.microseconds - other.microseconds)
