"""
Cross-family rules — операции над парами разных семейств типов

Правила применяются, когда после неявного повышения теги операндов
различаются:
- DateTime ± TimeSpan → DateTime
- TimeSpan + DateTime → DateTime
- TimeSpan × Numeric, Numeric × TimeSpan → TimeSpan
- TimeSpan ÷ Numeric → TimeSpan

Числовой операнд используется через to_double() (для Complex это
вещественная часть). Пары, которых нет в таблице, не поддерживаются.
"""

from enum import Enum
from typing import Callable, Final

from rpncalc.core.domain.value import Value
from rpncalc.core.domain.value_type import NUMERIC_TYPES, ValueType


class Operation(str, Enum):
    """Операции dispatcher (значение используется в сообщениях об ошибках)"""

    ADD = "Add"
    SUBTRACT = "Subtract"
    MULTIPLY = "Multiply"
    DIVIDE = "Divide"
    MODULUS = "Modulus"
    POWER = "Power"
    NEGATE = "Negate"
    ABS = "Abs"
    SIGN = "Sign"
    INVERT = "Invert"
    COMPARE = "Compare"


CrossFamilyRule = Callable[[Value, Value], Value]

_DT = ValueType.DATE_TIME
_TS = ValueType.TIME_SPAN


def _build_rules() -> dict[tuple[Operation, ValueType, ValueType], CrossFamilyRule]:
    rules: dict[tuple[Operation, ValueType, ValueType], CrossFamilyRule] = {
        (Operation.ADD, _DT, _TS): lambda x, y: x.add_time_span(y),
        (Operation.ADD, _TS, _DT): lambda x, y: y.add_time_span(x),
        (Operation.SUBTRACT, _DT, _TS): lambda x, y: x.subtract_time_span(y),
    }
    for numeric_type in sorted(NUMERIC_TYPES):
        rules[(Operation.MULTIPLY, _TS, numeric_type)] = lambda x, y: x.multiply_by_double(
            y.to_double()
        )
        rules[(Operation.MULTIPLY, numeric_type, _TS)] = lambda x, y: y.multiply_by_double(
            x.to_double()
        )
        rules[(Operation.DIVIDE, _TS, numeric_type)] = lambda x, y: x.divide_by_double(
            y.to_double()
        )
    return rules


CROSS_FAMILY_RULES: Final[dict[tuple[Operation, ValueType, ValueType], CrossFamilyRule]] = (
    _build_rules()
)


def find_rule(
    operation: Operation, x_type: ValueType, y_type: ValueType
) -> CrossFamilyRule | None:
    return CROSS_FAMILY_RULES.get((operation, x_type, y_type))
