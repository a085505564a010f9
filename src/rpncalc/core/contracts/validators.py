"""
Record Contracts — JSON Schema для записей в key/value узле

Запись, которую persistence читает из узла настроек, проверяется
по контракту до разбора entry-текста. Контракт = схема из
contracts/schema/<name>.json + скомпилированный Draft 2020-12 валидатор.

Контракты:
- value_record: пара (ValueType, EntryValue), в которой хранится значение

Ошибки контракта возвращаются как короткие строки "<json path>: <сообщение>",
чтобы их можно было положить в лог без объектов jsonschema.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Final, Mapping

from jsonschema import Draft202012Validator, SchemaError, ValidationError

SCHEMA_DIR: Final[Path] = Path(__file__).parent / "schema"

VALUE_RECORD: Final[str] = "value_record"


# =============================================================================
# CONTRACT
# =============================================================================


class RecordContract:
    """
    Контракт одной формы записи.

    Схема проверяется meta-валидацией при создании, поэтому сломанный
    файл схемы обнаруживается сразу, а не на первой записи.

    Raises:
        FileNotFoundError: Если файла схемы нет
        ValueError: Если файл не является валидной JSON Schema
    """

    def __init__(self, name: str, schema_dir: Path = SCHEMA_DIR):
        schema_path = schema_dir / f"{name}.json"
        if not schema_path.is_file():
            raise FileNotFoundError(f"Record contract not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_path.name}: {e.message}") from e

        self.name = name
        self.schema: dict[str, Any] = schema
        self._validator = Draft202012Validator(schema)

    def check(self, record: Mapping[str, Any]) -> None:
        """
        Raises:
            ValidationError: Первое (наиболее релевантное) нарушение
        """
        self._validator.validate(record)

    def accepts(self, record: Mapping[str, Any]) -> bool:
        return self._validator.is_valid(record)

    def problems(self, record: Mapping[str, Any]) -> list[str]:
        """
        Все нарушения контракта в стабильном порядке.

        Examples:
            >>> load_contract("value_record").problems({"ValueType": "Integer"})
            ["$: 'EntryValue' is a required property"]
        """
        errors = sorted(self._validator.iter_errors(record), key=_error_sort_key)
        return [f"{error.json_path}: {error.message}" for error in errors]


def _error_sort_key(error: ValidationError) -> tuple[str, str]:
    return error.json_path, error.message


@lru_cache(maxsize=None)
def load_contract(name: str) -> RecordContract:
    """Контракт из пакетного каталога схем (один экземпляр на имя)."""
    return RecordContract(name)


# =============================================================================
# VALUE RECORD
# =============================================================================


def validate_value_record(record: Mapping[str, Any]) -> None:
    """
    Проверка записи {"ValueType": ..., "EntryValue": ...}.

    Raises:
        ValidationError: Если запись не соответствует контракту
    """
    load_contract(VALUE_RECORD).check(record)


def is_valid_value_record(record: Mapping[str, Any]) -> bool:
    return load_contract(VALUE_RECORD).accepts(record)


def value_record_problems(record: Mapping[str, Any]) -> list[str]:
    """Нарушения контракта записи значения; пустой список для валидной записи."""
    return load_contract(VALUE_RECORD).problems(record)
