"""
CalculatorContext — Настройки калькулятора, передаваемые в операции

Immutable Pydantic модель. Передаётся явно в каждую контекстно-зависимую
операцию (форматирование, разбор, binary-арифметика). Значения никогда
не сохраняют и не кэшируют контекст.
"""

from enum import Enum
from typing import Final

from pydantic import BaseModel, Field

from rpncalc.core.math.words import MAX_WORD_SIZE, MIN_WORD_SIZE


# =============================================================================
# ENUMS
# =============================================================================


class BinaryFormat(str, Enum):
    """Основание отображения binary значений"""

    BINARY = "Binary"
    OCTAL = "Octal"
    DECIMAL = "Decimal"
    HEXADECIMAL = "Hexadecimal"

    @property
    def base(self) -> int:
        return _BASES[self]


_BASES: Final[dict[BinaryFormat, int]] = {
    BinaryFormat.BINARY: 2,
    BinaryFormat.OCTAL: 8,
    BinaryFormat.DECIMAL: 10,
    BinaryFormat.HEXADECIMAL: 16,
}


class FractionFormat(str, Enum):
    """Формат отображения дробей"""

    MIXED = "Mixed"
    COMMON = "Common"
    DECIMAL = "Decimal"


class DecimalFormat(str, Enum):
    """Формат отображения double"""

    STANDARD = "Standard"
    FIXED = "Fixed"
    SCIENTIFIC = "Scientific"


class AngleMode(str, Enum):
    """Единицы углов для полярной формы complex"""

    RADIANS = "Radians"
    DEGREES = "Degrees"


class ComplexFormat(str, Enum):
    """Форма отображения complex"""

    RECTANGULAR = "Rectangular"
    POLAR = "Polar"


# =============================================================================
# CONTEXT MODEL
# =============================================================================


class CalculatorContext(BaseModel):
    """
    Настройки калькулятора, влияющие на арифметику и форматирование.

    Immutable модель (frozen=True). Изменение настроек создаёт
    новый экземпляр через model_copy(update=...).
    """

    binary_word_size: int = Field(
        32, ge=MIN_WORD_SIZE, le=MAX_WORD_SIZE, description="Размер слова binary (бит)"
    )
    binary_format: BinaryFormat = Field(
        BinaryFormat.DECIMAL, description="Основание отображения binary"
    )
    fraction_format: FractionFormat = Field(
        FractionFormat.MIXED, description="Формат отображения дробей"
    )
    decimal_format: DecimalFormat = Field(
        DecimalFormat.STANDARD, description="Формат отображения double"
    )
    decimal_digits: int = Field(
        6, ge=0, le=15, description="Число знаков после запятой для Fixed/Scientific"
    )
    angle_mode: AngleMode = Field(AngleMode.RADIANS, description="Единицы углов")
    complex_format: ComplexFormat = Field(
        ComplexFormat.RECTANGULAR, description="Форма отображения complex"
    )

    model_config = {"frozen": True}


DEFAULT_CONTEXT: Final[CalculatorContext] = CalculatorContext()


def resolve_context(context: CalculatorContext | None) -> CalculatorContext:
    """Контекст по умолчанию, если вызывающий код не передал свой."""
    return DEFAULT_CONTEXT if context is None else context
