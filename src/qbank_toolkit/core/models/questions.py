"""
Module: questions

Purpose:
    Provides the QuestionRecord dataclass - one canonical question from the
    pool with its group tag, category, text and ordered choices. Records
    are owned by the pool and never mutated by the selection engine.

Key Classes:
    - Category: Expected answer shape (single, double, short answer)
    - QuestionRecord: Immutable question with (choice text, is-correct) pairs

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - core.models.pool.QuestionPool
    - builder.selection: GroupIndex and Selector
    - builder.resolving.resolver: ContentResolver
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Hashable, Optional, Tuple

ChoiceAnswer = Tuple[str, bool]


class Category(IntEnum):
    """
    Answer shape of a question.

    Attributes:
        SINGLE: Exactly one choice is correct
        DOUBLE: Exactly two choices are correct
        SHORT_ANSWER: Free response; the first choice holds the canonical
            answer text and the correctness flags carry no meaning
    """

    SINGLE = 1
    DOUBLE = 2
    SHORT_ANSWER = 3

    @property
    def required_answers(self) -> int:
        """Number of answers an interactive collaborator must collect."""
        return 2 if self is Category.DOUBLE else 1

    @property
    def display_name(self) -> str:
        """Fallback label when the pool header has none for this category."""
        return {
            Category.SINGLE: "Single choice",
            Category.DOUBLE: "Double choice",
            Category.SHORT_ANSWER: "Short answer",
        }[self]


@dataclass(frozen=True)
class QuestionRecord:
    """
    Canonical question (immutable).

    Records sharing a group are mutually exclusive variants of the same
    underlying question and never appear together on one exam.

    Attributes:
        id: Stable, externally assigned identifier (>= 1)
        group: Mutual-exclusion tag
        category: Answer shape, see Category
        text: Question text
        choices: Ordered (choice text, is-correct) pairs

    Invariants:
        - SINGLE has exactly one correct choice
        - DOUBLE has exactly two correct choices
        - SHORT_ANSWER has at least one choice

    Example:
        >>> q = QuestionRecord(1, 1, Category.SINGLE, "2 + 2?",
        ...                    (("3", False), ("4", True)))
        >>> q.choice_count
        2
    """

    id: int
    group: Hashable
    category: Category
    text: str
    choices: tuple[ChoiceAnswer, ...] = ()

    def __post_init__(self) -> None:
        """Validate record on construction."""
        if self.id < 1:
            raise ValueError(f"question id must be positive: {self.id}")
        try:
            category = Category(self.category)
        except ValueError:
            raise ValueError(f"unknown category for question {self.id}: {self.category!r}") from None
        # Normalise plain ints and lists coming from storage
        object.__setattr__(self, "category", category)
        object.__setattr__(
            self, "choices", tuple((str(text), bool(flag)) for text, flag in self.choices)
        )

        correct = sum(1 for _, flag in self.choices if flag)
        if category is Category.SINGLE and correct != 1:
            raise ValueError(
                f"question {self.id}: single-choice needs exactly one correct choice, got {correct}"
            )
        if category is Category.DOUBLE and correct != 2:
            raise ValueError(
                f"question {self.id}: double-choice needs exactly two correct choices, got {correct}"
            )
        if category is Category.SHORT_ANSWER and not self.choices:
            raise ValueError(f"question {self.id}: short answer needs its answer text")

    @property
    def choice_count(self) -> int:
        """Number of choices."""
        return len(self.choices)

    def get_choice(self, number: int) -> Optional[ChoiceAnswer]:
        """
        Get a choice by its 1-based index.

        Args:
            number: 1-based choice index

        Returns:
            (text, is_correct) pair, or None when out of range
        """
        if 1 <= number <= len(self.choices):
            return self.choices[number - 1]
        return None

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "id": self.id,
            "group": self.group,
            "category": int(self.category),
            "text": self.text,
            "choices": [{"text": text, "is_answer": flag} for text, flag in self.choices],
        }

    @classmethod
    def from_dict(cls, data: dict) -> QuestionRecord:
        """Deserialize from a dictionary produced by to_dict()."""
        return cls(
            id=int(data["id"]),
            group=data["group"],
            category=Category(int(data["category"])),
            text=data["text"],
            choices=tuple(
                (choice["text"], bool(choice.get("is_answer", False)))
                for choice in data.get("choices", [])
            ),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return (
            f"QuestionRecord({self.id}, group={self.group!r}, "
            f"category={int(self.category)}, choices={self.choice_count})"
        )
