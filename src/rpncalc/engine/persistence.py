"""
Persistence Adapter — Сохранение значений и настроек в key/value узле

Значение хранится как пара текстовых ключей:
- ValueType: тег варианта ("Fraction", "Binary", ...)
- EntryValue: lossless entry-текст варианта

Форма записи проверяется по JSON Schema (value_record.json) до разбора.
Ввод-вывод самого узла (реестр, XML, файл) находится вне пакета:
достаточно реализовать протокол ValueNode. MemoryNode — реализация
на dict для тестов и встраивания.

Настройки калькулятора сохраняются в тот же узел отдельными ключами;
невалидная настройка заменяется значением по умолчанию с warning в логе.
"""

from enum import Enum
from typing import Any, Final, Optional, Protocol

from pydantic import ValidationError

from rpncalc.config.logging import get_logger
from rpncalc.core.contracts.validators import value_record_problems
from rpncalc.core.domain.context import DEFAULT_CONTEXT, CalculatorContext, resolve_context
from rpncalc.core.domain.value import Value
from rpncalc.core.domain.value_type import ValueType
from rpncalc.engine.dispatcher import try_parse

logger = get_logger(__name__)

# =============================================================================
# KEYS
# =============================================================================

VALUE_TYPE_KEY: Final[str] = "ValueType"
ENTRY_VALUE_KEY: Final[str] = "EntryValue"

# Поле CalculatorContext → ключ в узле
CONTEXT_KEYS: Final[dict[str, str]] = {
    "binary_word_size": "BinaryWordSize",
    "binary_format": "BinaryFormat",
    "fraction_format": "FractionFormat",
    "decimal_format": "DecimalFormat",
    "decimal_digits": "DecimalDigits",
    "angle_mode": "AngleMode",
    "complex_format": "ComplexFormat",
}


# =============================================================================
# NODE CONTRACT
# =============================================================================


class ValueNode(Protocol):
    """Абстрактный key/value узел с текстовыми значениями."""

    def get_value(self, key: str, default: Optional[str] = None) -> Optional[str]: ...

    def set_value(self, key: str, value: str) -> None: ...


class MemoryNode:
    """Узел в памяти на основе dict."""

    def __init__(self, values: dict[str, str] | None = None):
        self.values: dict[str, str] = dict(values or {})

    def get_value(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.values.get(key, default)

    def set_value(self, key: str, value: str) -> None:
        self.values[key] = value

    def __repr__(self) -> str:
        return f"MemoryNode({self.values!r})"


# =============================================================================
# VALUES
# =============================================================================


def save_value(value: Value, node: ValueNode, context: CalculatorContext | None = None) -> None:
    """
    Запись значения в узел.

    Entry-текст зависит от контекста (основание binary, формат дробей),
    но всегда разбирается обратно в равное значение.
    """
    node.set_value(VALUE_TYPE_KEY, value.value_type.value)
    node.set_value(ENTRY_VALUE_KEY, value.get_entry_value(resolve_context(context)))


def load_value(
    node: Optional[ValueNode], context: CalculatorContext | None = None
) -> Optional[Value]:
    """
    Чтение значения из узла.

    Returns:
        Value или None, если узла нет, тег отсутствует или неизвестен,
        запись не проходит JSON Schema или текст не разбирается
    """
    if node is None:
        return None

    record: dict[str, Any] = {}
    for key in (VALUE_TYPE_KEY, ENTRY_VALUE_KEY):
        text = node.get_value(key)
        if text is not None:
            record[key] = text

    problems = value_record_problems(record)
    if problems:
        logger.info(
            "value.load_skipped", reason="invalid_record", record=record, problems=problems
        )
        return None

    value_type = ValueType(record[VALUE_TYPE_KEY])
    value = try_parse(value_type, record[ENTRY_VALUE_KEY], context)
    if value is None:
        logger.info("value.load_skipped", reason="unparseable", record=record)
    return value


# =============================================================================
# CONTEXT
# =============================================================================


def save_context(context: CalculatorContext, node: ValueNode) -> None:
    """Запись настроек в узел (enum по значению, числа текстом)."""
    for field_name, key in CONTEXT_KEYS.items():
        field_value = getattr(context, field_name)
        text = field_value.value if isinstance(field_value, Enum) else str(field_value)
        node.set_value(key, text)


def load_context(node: Optional[ValueNode]) -> CalculatorContext:
    """
    Чтение настроек из узла.

    Отсутствующие ключи получают значения по умолчанию. Невалидная
    настройка (word size вне 1..64, неизвестный формат) пропускается
    с warning, остальные настройки применяются.
    """
    if node is None:
        return DEFAULT_CONTEXT

    settings: dict[str, str] = {}
    for field_name, key in CONTEXT_KEYS.items():
        text = node.get_value(key)
        if text is None:
            continue
        try:
            CalculatorContext.model_validate({field_name: text})
        except ValidationError as e:
            logger.warning(
                "context.load_failed",
                key=key,
                value=text,
                errors=e.error_count(),
            )
            continue
        settings[field_name] = text

    return CalculatorContext.model_validate(settings)
