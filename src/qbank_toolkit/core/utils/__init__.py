"""
Utils Package

Permutation helpers. Serialization lives in core.utils.serialization and
is imported by path.
"""

from .shuffling import ShuffleMethod, apply_permutation, is_permutation, permute

__all__ = [
    "ShuffleMethod",
    "apply_permutation",
    "is_permutation",
    "permute",
]
