"""
Rational — Примитивы произвольной точности на fractions.Fraction

Модуль обеспечивает точную рациональную арифметику для FractionValue
и IntegerValue:
- Построение дроби из десятичного литерала через основание 10
  (0.33 → 33/100, а не дробь масштаба 2^52)
- Смешанные числа (whole, numerator, denominator) с нормализацией знака
- Целая и дробная части, усечённый остаток (знак делимого)
- Алгоритм Евклида на рациональных числах с ограничением итераций
- Ограниченное точное возведение в степень
- Строгий разбор целочисленных литералов

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Знаменатель всегда > 0 (гарантируется Fraction)
2. Смешанное число -a b/c трактуется как -(a + b/c)
3. GCD никогда не зацикливается (GcdIterationLimitExceeded)
"""

import math
import re
from decimal import Decimal
from fractions import Fraction
from typing import Final

from rpncalc.config.logging import get_logger

logger = get_logger(__name__)

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Граница итераций алгоритма Евклида на рациональных числах
MAX_GCD_ITERATIONS: Final[int] = 10_000

# Граница размера точного результата степени (бит числителя/знаменателя)
MAX_EXACT_POWER_BITS: Final[int] = 1_000_000

_INTEGER_PATTERN: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")


class GcdIterationLimitExceeded(ArithmeticError):
    """
    Алгоритм Евклида превысил MAX_GCD_ITERATIONS итераций.

    Сигнализирует о вырожденном входе: результат не может быть получен,
    безопасного альтернативного представления нет.
    """


# =============================================================================
# ПОСТРОЕНИЕ
# =============================================================================


def parse_integer(text: str) -> int | None:
    """
    Строгий разбор целого числа: необязательный знак и десятичные цифры.

    В отличие от int(), не принимает '_' (разделитель дробей)
    и не-ASCII цифры.

    Returns:
        Целое значение или None, если строка невалидна

    Examples:
        >>> parse_integer(" -42 ")
        -42
        >>> parse_integer("1_000") is None
        True
    """
    text = text.strip()
    if not _INTEGER_PATTERN.fullmatch(text):
        return None
    return int(text)


def fraction_from_decimal(value: Decimal | float | str) -> Fraction:
    """
    Построение дроби из десятичного значения через основание 10.

    Float сначала приводится к кратчайшему десятичному представлению
    (repr), поэтому 0.33 даёт 33/100.

    Args:
        value: Decimal, float или десятичный литерал

    Returns:
        Точная дробь

    Raises:
        ValueError: Если значение не конечно или не является литералом

    Examples:
        >>> fraction_from_decimal(0.33)
        Fraction(33, 100)
        >>> fraction_from_decimal("-1.25")
        Fraction(-5, 4)
    """
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Cannot convert non-finite value to fraction: {value}")
        value = repr(value)

    try:
        decimal_value = Decimal(value)
    except ArithmeticError as e:
        raise ValueError(f"Invalid decimal literal: {value!r}") from e

    if not decimal_value.is_finite():
        raise ValueError(f"Cannot convert non-finite value to fraction: {value}")

    return Fraction(decimal_value)


def fraction_from_mixed(whole: int, numerator: int, denominator: int) -> Fraction:
    """
    Построение дроби из смешанного числа с нормализацией знака.

    Знак числителя принудительно совпадает со знаком целой части,
    знаменатель берётся по модулю. Без нормализации (-2, 1, 2) давало бы
    (-2*2 + 1)/2 = -3/2; здесь результат -5/2: знак распространяется
    на всё смешанное число. Нулевая целая часть считается положительной.

    Raises:
        ZeroDivisionError: Если denominator == 0

    Examples:
        >>> fraction_from_mixed(-2, 1, 2)
        Fraction(-5, 2)
        >>> fraction_from_mixed(2, -1, -2)
        Fraction(5, 2)
    """
    numerator = abs(numerator)
    if whole < 0:
        numerator = -numerator
    denominator = abs(denominator)
    return whole + Fraction(numerator, denominator)


# =============================================================================
# ЧАСТИ И ОСТАТКИ
# =============================================================================


def whole_part(value: Fraction) -> int:
    """Целая часть с усечением к нулю (-7/2 → -3)."""
    return math.trunc(value)


def fractional_part(value: Fraction) -> Fraction:
    """Дробная часть со знаком значения (-7/2 → -1/2)."""
    return value - whole_part(value)


def truncated_remainder(x: Fraction, y: Fraction) -> Fraction:
    """
    Остаток от деления с усечением частного к нулю.

    Знак остатка совпадает со знаком делимого (в отличие от оператора %,
    который использует floor).

    Raises:
        ZeroDivisionError: Если y == 0

    Examples:
        >>> truncated_remainder(Fraction(-7, 2), Fraction(1))
        Fraction(-1, 2)
    """
    return x - y * math.trunc(x / y)


# =============================================================================
# GCD
# =============================================================================


def rational_gcd(x: Fraction, y: Fraction) -> Fraction:
    """
    Наибольший общий делитель двух рациональных чисел (алгоритм Евклида).

    gcd(0, 0) определён как 1. Результат неотрицателен.

    Raises:
        GcdIterationLimitExceeded: Если итераций больше MAX_GCD_ITERATIONS

    Examples:
        >>> rational_gcd(Fraction(1, 2), Fraction(3, 4))
        Fraction(1, 4)
    """
    if x == 0 and y == 0:
        return Fraction(1)

    iteration = 0
    while y != 0:
        x, y = y, truncated_remainder(x, y)
        iteration += 1
        if iteration > MAX_GCD_ITERATIONS:
            logger.error(
                "rational.gcd_iteration_limit",
                iterations=iteration,
                limit=MAX_GCD_ITERATIONS,
            )
            raise GcdIterationLimitExceeded(
                f"GCD did not converge within {MAX_GCD_ITERATIONS} iterations"
            )

    return abs(x)


# =============================================================================
# СТЕПЕНИ
# =============================================================================


def exact_power_fits(base: Fraction, exponent: int) -> bool:
    """
    Проверка, что точный результат base ** exponent не превысит
    MAX_EXACT_POWER_BITS по числителю и знаменателю.

    Оценка по компоненте c: (bit_length(c) - 1) * |exponent| + 1, то есть
    0 и ±1 в любой степени занимают один бит.

    Examples:
        >>> exact_power_fits(Fraction(-1), 10**9)
        True
        >>> exact_power_fits(Fraction(2), 2_000_000)
        False
    """
    largest = max(abs(base.numerator).bit_length(), base.denominator.bit_length())
    return max(largest - 1, 0) * abs(exponent) + 1 <= MAX_EXACT_POWER_BITS


def exact_power(base: Fraction, exponent: int) -> Fraction | None:
    """
    Точное возведение рационального числа в целую степень.

    Returns:
        Точный результат или None, если результат слишком велик
        (вызывающий код откатывается на double)

    Raises:
        ZeroDivisionError: Если base == 0 и exponent < 0
    """
    if not exact_power_fits(base, exponent):
        return None
    return base**exponent
