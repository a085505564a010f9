"""
rpncalc — value engine for an RPN calculator

Exact arithmetic over binary words, integers and fractions with implicit
promotion to double and complex, plus time spans and date-times.
"""

__version__ = "0.1.0"
