"""
Value Dispatcher — Полиморфная точка входа для операций над значениями

Порядок обработки бинарной операции:
1. Неявное повышение числовых операндов до общего типа (promotion)
2. Одинаковые теги → реализация варианта из таблицы операции
3. Разные теги → таблица cross-family правил
4. Иначе → UnsupportedOperationError с названием операции и тегов

Поддержка одного тега по операциям:
- add: Binary, Complex, Double, Fraction, Integer, TimeSpan
- subtract: как add, плюс DateTime (→ TimeSpan)
- multiply, power: Binary, Complex, Double, Fraction, Integer
- divide: как multiply, плюс TimeSpan (→ Double отношение)
- modulus: Binary, Double, Fraction, Integer
- negate, abs_value, sign: все, кроме DateTime
- invert: Binary, Integer, Fraction, Double, Complex

Контекст передаётся явно и влияет только на Binary арифметику
(word size) и на разбор литералов.
"""

from typing import Callable, Final, Optional

from rpncalc.config.logging import get_logger
from rpncalc.core.domain.binary_value import BinaryValue
from rpncalc.core.domain.complex_value import ComplexValue
from rpncalc.core.domain.context import CalculatorContext, resolve_context
from rpncalc.core.domain.date_time_value import DateTimeValue
from rpncalc.core.domain.double_value import DoubleValue
from rpncalc.core.domain.fraction_value import FractionValue
from rpncalc.core.domain.integer_value import IntegerValue
from rpncalc.core.domain.time_span_value import TimeSpanValue
from rpncalc.core.domain.value import Value, compare_with_nulls
from rpncalc.core.domain.value_type import ValueType
from rpncalc.engine.cross_family import Operation, find_rule
from rpncalc.engine.promotion import promote_pair

logger = get_logger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class UnsupportedOperationError(ArithmeticError):
    """Операция не определена для данных типов операндов."""

    def __init__(self, operation: Operation, value_types: tuple[ValueType, ...]):
        self.operation = operation
        self.value_types = value_types
        type_names = ", ".join(value_type.value for value_type in value_types)
        super().__init__(f"{operation.value} is not supported for ({type_names})")


# =============================================================================
# HANDLER TABLES
# =============================================================================

BinaryHandler = Callable[[Value, Value, CalculatorContext], Value]
UnaryHandler = Callable[[Value, CalculatorContext], Value]


def _plain(method_name: str) -> BinaryHandler:
    """Метод варианта без контекста: x.method(y)."""
    return lambda x, y, context: getattr(x, method_name)(y)


def _contextual(method_name: str) -> BinaryHandler:
    """Метод варианта с контекстом: x.method(y, context)."""
    return lambda x, y, context: getattr(x, method_name)(y, context)


def _plain_unary(method_name: str) -> UnaryHandler:
    return lambda x, context: getattr(x, method_name)()


def _contextual_unary(method_name: str) -> UnaryHandler:
    return lambda x, context: getattr(x, method_name)(context)


def _sign_as_integer(x: Value, context: CalculatorContext) -> IntegerValue:
    return IntegerValue(value=x.sign)


_B = ValueType.BINARY
_C = ValueType.COMPLEX
_DT = ValueType.DATE_TIME
_D = ValueType.DOUBLE
_F = ValueType.FRACTION
_I = ValueType.INTEGER
_TS = ValueType.TIME_SPAN

BINARY_OPERATIONS: Final[dict[Operation, dict[ValueType, BinaryHandler]]] = {
    Operation.ADD: {
        _B: _contextual("add"),
        _C: _plain("add"),
        _D: _plain("add"),
        _F: _plain("add"),
        _I: _plain("add"),
        _TS: _plain("add"),
    },
    Operation.SUBTRACT: {
        _B: _contextual("subtract"),
        _C: _plain("subtract"),
        _DT: _plain("subtract"),
        _D: _plain("subtract"),
        _F: _plain("subtract"),
        _I: _plain("subtract"),
        _TS: _plain("subtract"),
    },
    Operation.MULTIPLY: {
        _B: _contextual("multiply"),
        _C: _plain("multiply"),
        _D: _plain("multiply"),
        _F: _plain("multiply"),
        _I: _plain("multiply"),
    },
    Operation.DIVIDE: {
        _B: _contextual("divide"),
        _C: _plain("divide"),
        _D: _plain("divide"),
        _F: _plain("divide"),
        _I: _plain("divide"),
        _TS: _plain("divide"),
    },
    Operation.MODULUS: {
        _B: _contextual("modulus"),
        _D: _plain("modulus"),
        _F: _plain("modulus"),
        _I: _plain("modulus"),
    },
    Operation.POWER: {
        _B: _plain("power"),
        _C: _plain("power"),
        _D: _plain("power"),
        _F: _plain("power"),
        _I: _plain("power"),
    },
}

UNARY_OPERATIONS: Final[dict[Operation, dict[ValueType, UnaryHandler]]] = {
    Operation.NEGATE: {
        _B: _contextual_unary("negate"),
        _C: _plain_unary("negate"),
        _D: _plain_unary("negate"),
        _F: _plain_unary("negate"),
        _I: _plain_unary("negate"),
        _TS: _plain_unary("negate"),
    },
    Operation.ABS: {
        _B: _contextual_unary("absolute"),
        _C: lambda x, context: DoubleValue(value=x.magnitude()),
        _D: _plain_unary("absolute"),
        _F: _plain_unary("absolute"),
        _I: _plain_unary("absolute"),
        _TS: _plain_unary("absolute"),
    },
    Operation.SIGN: {
        _B: lambda x, context: IntegerValue(value=x.sign(context)),
        _C: _plain_unary("unit_vector"),
        _D: _sign_as_integer,
        _F: _sign_as_integer,
        _I: _sign_as_integer,
        _TS: _sign_as_integer,
    },
    Operation.INVERT: {
        _B: _plain_unary("invert"),
        _C: _plain_unary("invert"),
        _D: _plain_unary("invert"),
        _F: _plain_unary("invert"),
        _I: _plain_unary("invert"),
    },
}

PARSERS: Final[dict[ValueType, type[Value]]] = {
    _B: BinaryValue,
    _C: ComplexValue,
    _DT: DateTimeValue,
    _D: DoubleValue,
    _F: FractionValue,
    _I: IntegerValue,
    _TS: TimeSpanValue,
}


# =============================================================================
# DISPATCH
# =============================================================================


def _unsupported(operation: Operation, *values: Value) -> UnsupportedOperationError:
    value_types = tuple(value.value_type for value in values)
    logger.debug(
        "value.unsupported_operation",
        operation=operation.value,
        value_types=[value_type.value for value_type in value_types],
    )
    return UnsupportedOperationError(operation, value_types)


def _dispatch_binary(
    operation: Operation, x: Value, y: Value, context: CalculatorContext | None
) -> Value:
    context = resolve_context(context)
    px, py = promote_pair(x, y)

    if px.value_type == py.value_type:
        handler = BINARY_OPERATIONS[operation].get(px.value_type)
        if handler is not None:
            return handler(px, py, context)
    else:
        rule = find_rule(operation, px.value_type, py.value_type)
        if rule is not None:
            return rule(px, py)

    raise _unsupported(operation, x, y)


def _dispatch_unary(operation: Operation, x: Value, context: CalculatorContext | None) -> Value:
    handler = UNARY_OPERATIONS[operation].get(x.value_type)
    if handler is None:
        raise _unsupported(operation, x)
    return handler(x, resolve_context(context))


def try_parse(
    value_type: ValueType, text: str, context: CalculatorContext | None = None
) -> Optional[Value]:
    """
    Разбор текста как значения указанного варианта.

    Args:
        value_type: Вариант
        text: Текст (entry или display формат)
        context: Влияет только на допустимые литералы (основание binary,
            единицы угла complex), но не на разобранное значение

    Returns:
        Value или None, если текст не разбирается
    """
    return PARSERS[value_type].try_parse(text, context)


def add(x: Value, y: Value, context: CalculatorContext | None = None) -> Value:
    """
    x + y.

    Raises:
        UnsupportedOperationError: Если сложение не определено для пары типов
    """
    return _dispatch_binary(Operation.ADD, x, y, context)


def subtract(x: Value, y: Value, context: CalculatorContext | None = None) -> Value:
    """
    x - y. DateTime - DateTime даёт TimeSpan.

    Raises:
        UnsupportedOperationError: Если вычитание не определено для пары типов
    """
    return _dispatch_binary(Operation.SUBTRACT, x, y, context)


def multiply(x: Value, y: Value, context: CalculatorContext | None = None) -> Value:
    return _dispatch_binary(Operation.MULTIPLY, x, y, context)


def divide(x: Value, y: Value, context: CalculatorContext | None = None) -> Value:
    """
    x / y.

    Raises:
        UnsupportedOperationError: Если деление не определено для пары типов
        ZeroDivisionError: Деление на ноль в точных типах и TimeSpan
    """
    return _dispatch_binary(Operation.DIVIDE, x, y, context)


def modulus(x: Value, y: Value, context: CalculatorContext | None = None) -> Value:
    return _dispatch_binary(Operation.MODULUS, x, y, context)


def power(x: Value, y: Value, context: CalculatorContext | None = None) -> Value:
    return _dispatch_binary(Operation.POWER, x, y, context)


def negate(x: Value, context: CalculatorContext | None = None) -> Value:
    return _dispatch_unary(Operation.NEGATE, x, context)


def abs_value(x: Value, context: CalculatorContext | None = None) -> Value:
    """|x|; для Complex возвращает DoubleValue с модулем."""
    return _dispatch_unary(Operation.ABS, x, context)


def sign(x: Value, context: CalculatorContext | None = None) -> Value:
    """
    Знак как IntegerValue (-1/0/1); для Complex — единичный вектор.

    Raises:
        UnsupportedOperationError: Для DateTime
        ArithmeticError: Для Double NaN
    """
    return _dispatch_unary(Operation.SIGN, x, context)


def invert(x: Value, context: CalculatorContext | None = None) -> Value:
    """
    1/x; Binary даёт FractionValue, Integer — FractionValue (IntegerValue для ±1).

    Raises:
        ZeroDivisionError: Для нуля в точных типах
    """
    return _dispatch_unary(Operation.INVERT, x, context)


def compare(
    x: Optional[Value], y: Optional[Value], context: CalculatorContext | None = None
) -> int:
    """
    Трёхзначное сравнение после неявного повышения типов.

    None меньше любого значения; два None равны. Позволяет сравнить
    3/2 с 3.75, хотя это разные варианты.

    Raises:
        UnsupportedOperationError: Для несовместимых пар и любого Complex операнда
    """
    result = compare_with_nulls(x, y)
    if result is not None:
        return result

    px, py = promote_pair(x, y)
    if px.value_type != py.value_type or px.value_type == ValueType.COMPLEX:
        raise _unsupported(Operation.COMPARE, x, y)
    return px.compare_to(py)
