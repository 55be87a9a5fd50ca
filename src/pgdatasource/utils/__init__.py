"""Utility functions and helpers for pgdatasource."""

from pgdatasource.utils.decorators import traced

__all__ = [
    "traced",
]
