"""Matching operators and expression helpers for access-control policies."""

__version__ = "0.1.0"
__all__ = ["builtin_operators", "util"]