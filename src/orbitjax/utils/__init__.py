"""Shared utility functions for orbitjax.

Provides angle conversion and wrapping helpers.
"""

from orbitjax.utils._angle import from_radians, to_radians, wrap_to_2pi

__all__ = [
    "from_radians",
    "to_radians",
    "wrap_to_2pi",
]
