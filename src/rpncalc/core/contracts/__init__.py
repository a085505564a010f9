"""
Record Contracts

Проверка сохранённых записей значений по JSON Schema.
"""

from .validators import (
    VALUE_RECORD,
    RecordContract,
    is_valid_value_record,
    load_contract,
    validate_value_record,
    value_record_problems,
)

__all__ = [
    "VALUE_RECORD",
    "RecordContract",
    "load_contract",
    "validate_value_record",
    "is_valid_value_record",
    "value_record_problems",
]
