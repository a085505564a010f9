"""
Domain models: варианты значений калькулятора и их настройки.

Contains the value variants (Binary, Integer, Fraction, Double, Complex,
TimeSpan, DateTime), the ValueType tag and CalculatorContext.
"""

from rpncalc.core.domain.value_type import NUMERIC_TYPES, ValueType, parse_value_type
from rpncalc.core.domain.context import (
    DEFAULT_CONTEXT,
    AngleMode,
    BinaryFormat,
    CalculatorContext,
    ComplexFormat,
    DecimalFormat,
    FractionFormat,
    resolve_context,
)
from rpncalc.core.domain.value import (
    DisplayFormat,
    NumericValue,
    Value,
    compare_with_nulls,
    sign_of,
)
from rpncalc.core.domain.complex_value import ComplexValue
from rpncalc.core.domain.double_value import DoubleValue
from rpncalc.core.domain.integer_value import IntegerValue
from rpncalc.core.domain.fraction_value import FractionValue
from rpncalc.core.domain.binary_value import BinaryValue, format_binary
from rpncalc.core.domain.time_span_value import (
    TimeSpanValue,
    format_time_span,
    parse_time_span,
)
from rpncalc.core.domain.date_time_value import DateTimeValue, format_date_time

__all__ = [
    # Value type tag
    "ValueType",
    "NUMERIC_TYPES",
    "parse_value_type",
    # Context
    "CalculatorContext",
    "DEFAULT_CONTEXT",
    "resolve_context",
    "BinaryFormat",
    "FractionFormat",
    "DecimalFormat",
    "AngleMode",
    "ComplexFormat",
    # Base contract
    "Value",
    "NumericValue",
    "DisplayFormat",
    "compare_with_nulls",
    "sign_of",
    # Numeric variants
    "BinaryValue",
    "IntegerValue",
    "FractionValue",
    "DoubleValue",
    "ComplexValue",
    "format_binary",
    # Time variants
    "TimeSpanValue",
    "DateTimeValue",
    "format_time_span",
    "parse_time_span",
    "format_date_time",
]
