"""Shared pytest fixtures: calculator contexts."""

import pytest

from rpncalc.core.domain.context import (
    AngleMode,
    BinaryFormat,
    CalculatorContext,
    ComplexFormat,
    DecimalFormat,
    FractionFormat,
)


@pytest.fixture
def default_context() -> CalculatorContext:
    """Контекст со значениями по умолчанию (word size 32, Decimal)."""
    return CalculatorContext()


@pytest.fixture
def byte_context() -> CalculatorContext:
    """8-битное слово, отображение в hex."""
    return CalculatorContext(binary_word_size=8, binary_format=BinaryFormat.HEXADECIMAL)


@pytest.fixture
def hex_context() -> CalculatorContext:
    """64-битное слово, отображение и разбор в hex."""
    return CalculatorContext(binary_word_size=64, binary_format=BinaryFormat.HEXADECIMAL)


@pytest.fixture
def common_context() -> CalculatorContext:
    return CalculatorContext(fraction_format=FractionFormat.COMMON)


@pytest.fixture
def decimal_fraction_context() -> CalculatorContext:
    return CalculatorContext(fraction_format=FractionFormat.DECIMAL)


@pytest.fixture
def fixed_context() -> CalculatorContext:
    """Fixed формат с 2 знаками."""
    return CalculatorContext(decimal_format=DecimalFormat.FIXED, decimal_digits=2)


@pytest.fixture
def polar_degrees_context() -> CalculatorContext:
    return CalculatorContext(complex_format=ComplexFormat.POLAR, angle_mode=AngleMode.DEGREES)
