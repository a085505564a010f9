"""
Value — Базовый контракт всех значений калькулятора

Каждый вариант (BinaryValue, FractionValue, ...) является immutable
Pydantic моделью (frozen=True) и реализует:
- value_type: постоянный тег варианта
- str(value): каноническое представление без контекста
- to_display_string(context): отображение по настройкам калькулятора
- get_entry_value(context): lossless текст, всегда разбираемый обратно
- get_all_display_formats(context): ленивая конечная последовательность
  альтернативных представлений (каждый вызов начинает заново)

Все операции создают новые экземпляры; мутаций нет.
"""

from abc import abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Iterator, Optional

from pydantic import BaseModel

from rpncalc.core.domain.context import CalculatorContext, resolve_context
from rpncalc.core.domain.value_type import ValueType


@dataclass(frozen=True)
class DisplayFormat:
    """Именованное альтернативное представление значения."""

    name: str
    text: str


def compare_with_nulls(x: Optional[Any], y: Optional[Any]) -> Optional[int]:
    """
    Сравнение с семантикой null.

    None меньше любого значения, два None равны.

    Returns:
        -1/0/1 если хотя бы один аргумент None, иначе None
        (сравнение должно выполнить вызывающий код)
    """
    if x is None:
        return 0 if y is None else -1
    if y is None:
        return 1
    return None


def sign_of(value: Any) -> int:
    """Знак числа: -1, 0 или 1."""
    return (value > 0) - (value < 0)


class Value(BaseModel):
    """
    Абстрактное значение калькулятора.

    Сравнение операторами <, <=, >, >= определено только между
    значениями одного варианта; разнотипное сравнение выполняет
    dispatcher после повышения типов.
    """

    value_type: ClassVar[ValueType]

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    def __str__(self) -> str:
        return self.to_canonical_string()

    @abstractmethod
    def to_canonical_string(self) -> str:
        """Представление без контекста (не зависит от настроек)."""

    def to_display_string(self, context: CalculatorContext | None = None) -> str:
        return self.to_canonical_string()

    def get_entry_value(self, context: CalculatorContext | None = None) -> str:
        return self.to_display_string(resolve_context(context))

    def get_all_display_formats(
        self, context: CalculatorContext | None = None
    ) -> Iterator[DisplayFormat]:
        yield DisplayFormat(self.value_type.value, self.to_display_string(context))

    def compare_to(self, other: "Value") -> int:
        """
        Трёхзначное сравнение со значением того же варианта.

        Raises:
            TypeError: Если вариант неупорядочен или типы различаются
        """
        raise TypeError(f"{self.value_type.value} values are not ordered")

    def _ordered(self, other: Any) -> Optional[int]:
        if other is not None and type(other) is not type(self):
            return None
        result = compare_with_nulls(self, other)
        return self.compare_to(other) if result is None else result

    def __lt__(self, other: Any) -> bool:
        result = self._ordered(other)
        return NotImplemented if result is None else result < 0

    def __le__(self, other: Any) -> bool:
        result = self._ordered(other)
        return NotImplemented if result is None else result <= 0

    def __gt__(self, other: Any) -> bool:
        result = self._ordered(other)
        return NotImplemented if result is None else result > 0

    def __ge__(self, other: Any) -> bool:
        result = self._ordered(other)
        return NotImplemented if result is None else result >= 0


class NumericValue(Value):
    """
    Значение, участвующее в арифметике и неявном повышении типов.

    Binary, Integer, Fraction, Double, Complex.
    """

    @abstractmethod
    def to_double(self) -> float:
        """Конверсия в double (может переполниться в ±inf)."""

    @abstractmethod
    def to_integer(self) -> int:
        """Конверсия в целое произвольной точности."""
