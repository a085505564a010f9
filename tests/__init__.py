"""
Test suite for rpncalc

Contains:
- tests/unit/          : Unit tests for individual modules
"""
