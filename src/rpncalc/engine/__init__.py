"""
Engine: полиморфные операции над значениями и их сохранение.

Dispatcher повышает типы операндов, выбирает реализацию варианта
или cross-family правило; persistence сохраняет значения и настройки
в абстрактном key/value узле.
"""

from rpncalc.engine.cross_family import CROSS_FAMILY_RULES, Operation, find_rule
from rpncalc.engine.promotion import (
    CONVERTERS,
    PROMOTION_TABLE,
    join,
    promote,
    promote_pair,
)
from rpncalc.engine.dispatcher import (
    BINARY_OPERATIONS,
    PARSERS,
    UNARY_OPERATIONS,
    UnsupportedOperationError,
    abs_value,
    add,
    compare,
    divide,
    invert,
    modulus,
    multiply,
    negate,
    power,
    sign,
    subtract,
    try_parse,
)
from rpncalc.engine.persistence import (
    CONTEXT_KEYS,
    ENTRY_VALUE_KEY,
    VALUE_TYPE_KEY,
    MemoryNode,
    ValueNode,
    load_context,
    load_value,
    save_context,
    save_value,
)

__all__ = [
    # Promotion
    "PROMOTION_TABLE",
    "CONVERTERS",
    "join",
    "promote",
    "promote_pair",
    # Cross-family rules
    "Operation",
    "CROSS_FAMILY_RULES",
    "find_rule",
    # Dispatcher
    "UnsupportedOperationError",
    "BINARY_OPERATIONS",
    "UNARY_OPERATIONS",
    "PARSERS",
    "try_parse",
    "add",
    "subtract",
    "multiply",
    "divide",
    "modulus",
    "power",
    "negate",
    "abs_value",
    "sign",
    "invert",
    "compare",
    # Persistence
    "ValueNode",
    "MemoryNode",
    "VALUE_TYPE_KEY",
    "ENTRY_VALUE_KEY",
    "CONTEXT_KEYS",
    "save_value",
    "load_value",
    "save_context",
    "load_context",
]
