"""
Numerical Safeguards — IEEE-754 семантика для float

Python float отличается от IEEE-754 в нескольких местах: деление на ноль,
переполнение степени и конверсия больших int бросают исключения вместо
±inf/NaN. Модуль восстанавливает IEEE-поведение для DoubleValue
и для конверсий точных типов в double:
- Деление без исключений (x/0 → ±inf, 0/0 → NaN)
- Степень без исключений (переполнение → ±inf)
- Конверсия int/Fraction → float с переполнением в ±inf
- Проверка, что double является целым числом
- Равенство и ключ хеша, в которых NaN равен NaN
- Знаковый вещественный корень нечётной степени

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ни одна функция не бросает ZeroDivisionError/OverflowError
2. NaN/Inf возвращаются как значения, а не исключения
"""

import math
from fractions import Fraction


# =============================================================================
# ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Returns:
        True если значение конечно
    """
    return math.isfinite(value)


def integral_value(value: float) -> int | None:
    """
    Целое значение double, если оно представимо точно.

    Returns:
        int(value), если value конечно и не имеет дробной части, иначе None

    Examples:
        >>> integral_value(8.0)
        8
        >>> integral_value(2.5) is None
        True
        >>> integral_value(float('inf')) is None
        True
    """
    if not is_valid_float(value) or value != math.floor(value):
        return None
    return int(value)


def nan_equal(x: float, y: float) -> bool:
    """
    Равенство double, в котором NaN равен NaN.

    Examples:
        >>> nan_equal(math.nan, math.nan)
        True
        >>> nan_equal(0.0, -0.0)
        True
    """
    return x == y or (math.isnan(x) and math.isnan(y))


def nan_hash_key(value: float) -> float | None:
    """Ключ хеша, согласованный с nan_equal (все NaN дают один ключ)."""
    return None if math.isnan(value) else value


# =============================================================================
# КОНВЕРСИИ
# =============================================================================


def int_to_double(value: int) -> float:
    """
    Конверсия int → float с переполнением в ±inf.

    Examples:
        >>> int_to_double(10**400)
        inf
    """
    try:
        return float(value)
    except OverflowError:
        return -math.inf if value < 0 else math.inf


def rational_to_double(value: Fraction) -> float:
    """
    Конверсия Fraction → float с переполнением в ±inf.
    """
    try:
        return float(value)
    except OverflowError:
        return -math.inf if value < 0 else math.inf


# =============================================================================
# IEEE-ОПЕРАЦИИ
# =============================================================================


def ieee_divide(numerator: float, denominator: float) -> float:
    """
    Деление по IEEE-754: без ZeroDivisionError.

    Returns:
        numerator / denominator; при denominator == 0:
        - NaN если numerator == 0 или NaN
        - ±inf со знаком numerator * знак нуля

    Examples:
        >>> ieee_divide(1.0, 0.0)
        inf
        >>> ieee_divide(1.0, -0.0)
        -inf
        >>> math.isnan(ieee_divide(0.0, 0.0))
        True
    """
    if denominator == 0.0:
        if numerator == 0.0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def ieee_fmod(x: float, y: float) -> float:
    """
    Остаток с усечением (знак делимого), NaN при y == 0 или x == ±inf.
    """
    if y == 0.0 or math.isinf(x) or math.isnan(x) or math.isnan(y):
        return math.nan
    return math.fmod(x, y)


def ieee_power(base: float, exponent: float) -> float | complex:
    """
    Степень без исключений.

    Отрицательное основание с дробным показателем даёт complex
    (главное значение), как и оператор ** в Python.

    Returns:
        base ** exponent; при переполнении ±inf, при ±0 ** отрицательное → ±inf
        (-inf только для -0.0 в нечётной целой степени)

    Examples:
        >>> ieee_power(2.0, 10.0)
        1024.0
        >>> ieee_power(10.0, 400.0)
        inf
        >>> ieee_power(0.0, -1.0)
        inf
        >>> ieee_power(-0.0, -3.0)
        -inf
    """
    try:
        return base**exponent
    except ZeroDivisionError:
        # -0.0 в отрицательной нечётной степени даёт -inf
        negative = math.copysign(1.0, base) < 0 and _is_odd_integer(exponent)
        return -math.inf if negative else math.inf
    except OverflowError:
        negative = base < 0 and _is_odd_integer(exponent)
        return -math.inf if negative else math.inf


def _is_odd_integer(value: float) -> bool:
    integral = integral_value(value)
    return integral is not None and integral % 2 == 1


def signed_root(radicand: float, root_degree: int) -> float:
    """
    Вещественный корень нечётной степени со знаком подкоренного выражения.

    sign(radicand) * |radicand| ** (1 / root_degree)

    Для отрицательного radicand возвращает вещественный корень (-8 → -2),
    а не главное комплексное значение.

    Raises:
        ValueError: Если root_degree чётная или не положительная

    Examples:
        >>> signed_root(-8.0, 3)
        -2.0
    """
    if root_degree <= 0 or root_degree % 2 == 0:
        raise ValueError(f"root_degree must be a positive odd integer, got {root_degree}")

    magnitude = ieee_power(abs(radicand), 1.0 / root_degree)
    return math.copysign(magnitude, radicand) if radicand != 0 else 0.0
