"""
Question Bank Toolkit Core Package

Shared data models and utilities. Everything in here is free of I/O
except core.utils.serialization.
"""

from .models import (
    Category,
    QuestionRecord,
    PoolHeader,
    Recipient,
    QuestionPool,
    ShuffledQuestion,
    ShuffledQuestionSet,
)
from .utils.shuffling import ShuffleMethod, permute

__all__ = [
    "Category",
    "QuestionRecord",
    "PoolHeader",
    "Recipient",
    "QuestionPool",
    "ShuffledQuestion",
    "ShuffledQuestionSet",
    "ShuffleMethod",
    "permute",
]
