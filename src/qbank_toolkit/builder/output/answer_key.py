"""
Module: builder.output.answer_key

Purpose:
    Answer keys for resolved questions, expressed in displayed positions
    so they match the shuffled paper a recipient actually sees.

Key Functions:
    - answer_key(): Key for one question
    - bank_answer_keys(): Keys for a whole RecipientBank

Used By:
    - builder.output.text_writer: Answer cards
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from qbank_toolkit.core.models import Category
from qbank_toolkit.builder.resolving import RecipientBank, ResolvedQuestion


@dataclass(frozen=True)
class AnswerKey:
    """
    Key for one question on a paper.

    Attributes:
        position: 1-based question position on the paper
        category: Answer shape
        correct_positions: Displayed choice numbers that are correct
        answer_text: Canonical answer for short-answer questions
    """

    position: int
    category: Category
    correct_positions: tuple[int, ...]
    answer_text: Optional[str] = None

    def format(self) -> str:
        """Compact form used on answer cards: '3', '(1, 4)' or the answer text."""
        if self.category is Category.SHORT_ANSWER:
            return self.answer_text or ""
        if len(self.correct_positions) == 1:
            return str(self.correct_positions[0])
        return "(" + ", ".join(str(p) for p in self.correct_positions) + ")"


def answer_key(position: int, question: ResolvedQuestion) -> AnswerKey:
    """Build the key for `question` shown at `position`."""
    if question.category is Category.SHORT_ANSWER:
        text = question.choices[0].text if question.choices else ""
        return AnswerKey(position, question.category, (), text)
    return AnswerKey(position, question.category, question.correct_positions)


def bank_answer_keys(bank: RecipientBank) -> tuple[AnswerKey, ...]:
    return tuple(answer_key(i, q) for i, q in enumerate(bank.questions, 1))
