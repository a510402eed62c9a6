"""
Module: builder.resolving

Purpose:
    Resolve shuffled selections back into canonical, displayable content.
"""

from .resolver import (
    DanglingReferenceError,
    RecipientBank,
    ResolvedChoice,
    ResolvedQuestion,
    resolve_bank,
    resolve_question,
    resolve_set,
)

__all__ = [
    "DanglingReferenceError",
    "RecipientBank",
    "ResolvedChoice",
    "ResolvedQuestion",
    "resolve_bank",
    "resolve_question",
    "resolve_set",
]
