"""
Core value model, mathematical primitives, and record contracts.

This module contains the foundational building blocks that are independent
of any calculator front end (stack, UI, storage backend).
"""
