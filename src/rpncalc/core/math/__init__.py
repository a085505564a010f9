"""
Core math modules для rpncalc

Математические примитивы: 64-битные слова, рациональные числа,
IEEE-754 семантика для double.
"""

# Words (64-bit cell)
from rpncalc.core.math.words import (
    MAX_WORD_SIZE,
    MIN_WORD_SIZE,
    SUPPORTED_BASES,
    UINT64_MAX,
    format_digits,
    mask_to_word_size,
    ones_complement,
    parse_digits,
    rotate_left,
    rotate_right,
    sign_bit_set,
    validate_word_size,
    wrap_uint64,
)

# Rational
from rpncalc.core.math.rational import (
    MAX_EXACT_POWER_BITS,
    MAX_GCD_ITERATIONS,
    GcdIterationLimitExceeded,
    exact_power,
    exact_power_fits,
    fraction_from_decimal,
    fraction_from_mixed,
    fractional_part,
    parse_integer,
    rational_gcd,
    truncated_remainder,
    whole_part,
)

# Numerical Safeguards (IEEE-754)
from rpncalc.core.math.numerical_safeguards import (
    ieee_divide,
    ieee_fmod,
    ieee_power,
    int_to_double,
    integral_value,
    is_valid_float,
    rational_to_double,
    signed_root,
)

__all__ = [
    # Words — Constants
    "MAX_WORD_SIZE",
    "MIN_WORD_SIZE",
    "SUPPORTED_BASES",
    "UINT64_MAX",
    # Words — Functions
    "format_digits",
    "mask_to_word_size",
    "ones_complement",
    "parse_digits",
    "rotate_left",
    "rotate_right",
    "sign_bit_set",
    "validate_word_size",
    "wrap_uint64",
    # Rational — Constants
    "MAX_EXACT_POWER_BITS",
    "MAX_GCD_ITERATIONS",
    # Rational — Exceptions
    "GcdIterationLimitExceeded",
    # Rational — Functions
    "exact_power",
    "exact_power_fits",
    "fraction_from_decimal",
    "fraction_from_mixed",
    "fractional_part",
    "parse_integer",
    "rational_gcd",
    "truncated_remainder",
    "whole_part",
    # Numerical Safeguards — Functions
    "ieee_divide",
    "ieee_fmod",
    "ieee_power",
    "int_to_double",
    "integral_value",
    "is_valid_float",
    "rational_to_double",
    "signed_root",
]
