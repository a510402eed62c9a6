"""
Core Models Package

Immutable, validated data models shared by the selection engine, the
storage adapters and the renderers.

All records are frozen dataclasses. The only type that changes after
construction is ShuffledQuestionSet, and only its order.
"""

from .questions import Category, ChoiceAnswer, QuestionRecord
from .header import PoolHeader
from .recipients import Recipient
from .pool import QuestionPool
from .shuffled import ShuffledQuestion, ShuffledQuestionSet

__all__ = [
    "Category",
    "ChoiceAnswer",
    "QuestionRecord",
    "PoolHeader",
    "Recipient",
    "QuestionPool",
    "ShuffledQuestion",
    "ShuffledQuestionSet",
]
