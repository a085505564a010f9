"""
Promotion — Неявное повышение числовых типов

Решётка: Binary → Integer → Fraction → Double → Complex.

Join задан явной таблицей по неупорядоченным парам тегов (все 15 пар
пяти числовых типов), поэтому join(A, B) == join(B, A) по построению.
Точные типы (Binary, Integer, Fraction) объединяются внутри точных,
прежде чем переходить к Double.

Конверсии заданы таблицей (source, target) → функция; каждая конверсия
только расширяет значение:
- Binary трактуется как беззнаковое (HP48 semantics)
- Integer → Double переполняется в ±inf
- Complex получает нулевую мнимую часть
"""

from fractions import Fraction
from typing import Callable, Final

from rpncalc.config.logging import get_logger
from rpncalc.core.domain.binary_value import BinaryValue
from rpncalc.core.domain.complex_value import ComplexValue
from rpncalc.core.domain.double_value import DoubleValue
from rpncalc.core.domain.fraction_value import FractionValue
from rpncalc.core.domain.integer_value import IntegerValue
from rpncalc.core.domain.value import NumericValue, Value
from rpncalc.core.domain.value_type import NUMERIC_TYPES, ValueType

logger = get_logger(__name__)

_B = ValueType.BINARY
_I = ValueType.INTEGER
_F = ValueType.FRACTION
_D = ValueType.DOUBLE
_C = ValueType.COMPLEX

# =============================================================================
# JOIN TABLE
# =============================================================================

PROMOTION_TABLE: Final[dict[frozenset[ValueType], ValueType]] = {
    frozenset({_B}): _B,
    frozenset({_I}): _I,
    frozenset({_F}): _F,
    frozenset({_D}): _D,
    frozenset({_C}): _C,
    frozenset({_B, _I}): _I,
    frozenset({_B, _F}): _F,
    frozenset({_B, _D}): _D,
    frozenset({_B, _C}): _C,
    frozenset({_I, _F}): _F,
    frozenset({_I, _D}): _D,
    frozenset({_I, _C}): _C,
    frozenset({_F, _D}): _D,
    frozenset({_F, _C}): _C,
    frozenset({_D, _C}): _C,
}


# =============================================================================
# CONVERTERS
# =============================================================================


def _to_complex(value: NumericValue) -> ComplexValue:
    return ComplexValue(value=complex(value.to_double(), 0.0))


def _to_double(value: NumericValue) -> DoubleValue:
    return DoubleValue(value=value.to_double())


Converter = Callable[[NumericValue], NumericValue]

CONVERTERS: Final[dict[tuple[ValueType, ValueType], Converter]] = {
    (_B, _I): lambda v: IntegerValue(value=v.value),
    (_B, _F): lambda v: FractionValue(value=Fraction(v.value)),
    (_B, _D): _to_double,
    (_B, _C): _to_complex,
    (_I, _F): lambda v: FractionValue(value=Fraction(v.value)),
    (_I, _D): _to_double,
    (_I, _C): _to_complex,
    (_F, _D): _to_double,
    (_F, _C): _to_complex,
    (_D, _C): _to_complex,
}


# =============================================================================
# PUBLIC API
# =============================================================================


def join(x_type: ValueType, y_type: ValueType) -> ValueType | None:
    """
    Наименьший общий тип двух тегов.

    Returns:
        Тег результата или None, если хотя бы один тег не числовой

    Examples:
        >>> join(ValueType.BINARY, ValueType.FRACTION)
        <ValueType.FRACTION: 'Fraction'>
        >>> join(ValueType.INTEGER, ValueType.TIME_SPAN) is None
        True
    """
    return PROMOTION_TABLE.get(frozenset({x_type, y_type}))


def promote(value: NumericValue, target: ValueType) -> NumericValue:
    """
    Повышение значения до целевого типа.

    Raises:
        ValueError: Если target ниже типа значения в решётке
    """
    if value.value_type == target:
        return value
    converter = CONVERTERS.get((value.value_type, target))
    if converter is None:
        raise ValueError(f"Cannot promote {value.value_type.value} to {target.value}")
    return converter(value)


def promote_pair(x: Value, y: Value) -> tuple[Value, Value]:
    """
    Приведение двух значений к общему типу.

    Нечисловые значения и значения одного типа возвращаются как есть.
    """
    if x.value_type == y.value_type:
        return x, y
    if x.value_type not in NUMERIC_TYPES or y.value_type not in NUMERIC_TYPES:
        return x, y

    target = join(x.value_type, y.value_type)
    logger.debug(
        "value.promoted",
        x_type=x.value_type.value,
        y_type=y.value_type.value,
        target=target.value,
    )
    return promote(x, target), promote(y, target)
