"""
Module: builder.resolving.resolver

Purpose:
    Map a ShuffledQuestion back to canonical, displayable content: text,
    category label and the choices in permuted order with their
    correctness flags, so the answer key survives shuffling.

Key Functions:
    - resolve_question(): Resolve one ShuffledQuestion against a pool
    - resolve_set(): Resolve every member of a ShuffledQuestionSet
    - resolve_bank(): Resolve a set into a RecipientBank

Key Classes:
    - ResolvedChoice: One displayed choice
    - ResolvedQuestion: Render-ready question
    - RecipientBank: A resolved set with its recipient and header
    - DanglingReferenceError: Selection no longer matches the pool

Used By:
    - builder.controller: resolve_recipient_bank()
    - builder.session: ExamSession stepping
    - builder.output: answer keys and text rendering
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from qbank_toolkit.core.models import (
    Category,
    PoolHeader,
    QuestionPool,
    Recipient,
    ShuffledQuestion,
    ShuffledQuestionSet,
)

logger = logging.getLogger(__name__)


class DanglingReferenceError(Exception):
    """A selection references an id or choice index the pool no longer has."""

    def __init__(self, question_id: int, choice_index: Optional[int] = None):
        if choice_index is None:
            message = f"Question {question_id} is not in the pool"
        else:
            message = f"Question {question_id} has no choice {choice_index}"
        super().__init__(message)
        self.question_id = question_id
        self.choice_index = choice_index


@dataclass(frozen=True)
class ResolvedChoice:
    """Choice as displayed: text and whether it is correct."""

    text: str
    is_correct: bool


@dataclass(frozen=True)
class ResolvedQuestion:
    """
    Render-ready question (immutable).

    Attributes:
        question_id: Canonical record id
        category: Answer shape
        category_label: Header label for the category
        text: Question text
        choices: Choices in displayed (permuted) order
    """

    question_id: int
    category: Category
    category_label: str
    text: str
    choices: tuple[ResolvedChoice, ...]

    @property
    def correct_positions(self) -> tuple[int, ...]:
        """1-based displayed positions of correct choices (none for short answers)."""
        if self.category is Category.SHORT_ANSWER:
            return ()
        return tuple(i for i, c in enumerate(self.choices, 1) if c.is_correct)


def resolve_question(pool: QuestionPool, shuffled: ShuffledQuestion) -> ResolvedQuestion:
    """
    Resolve a ShuffledQuestion against the canonical pool.

    Args:
        pool: Current question pool
        shuffled: Selection to resolve

    Returns:
        ResolvedQuestion with choices in permuted order

    Raises:
        DanglingReferenceError: If the id is absent or a permuted index is
            outside the record's current choice count
    """
    record = pool.get(shuffled.question_id)
    if record is None:
        raise DanglingReferenceError(shuffled.question_id)

    choices = []
    for canonical in shuffled.permutation:
        choice = record.get_choice(canonical)
        if choice is None:
            raise DanglingReferenceError(shuffled.question_id, canonical)
        choices.append(ResolvedChoice(text=choice[0], is_correct=choice[1]))

    return ResolvedQuestion(
        question_id=record.id,
        category=record.category,
        category_label=pool.category_label_for(record),
        text=record.text,
        choices=tuple(choices),
    )


def resolve_set(pool: QuestionPool, qset: ShuffledQuestionSet) -> tuple[ResolvedQuestion, ...]:
    """
    Resolve every member of a set, in the set's current order.

    Raises:
        DanglingReferenceError: On the first member that no longer resolves
    """
    return tuple(resolve_question(pool, shuffled) for shuffled in qset)


@dataclass(frozen=True)
class RecipientBank:
    """
    A recipient's set resolved into render-ready content.

    Attributes:
        recipient: Who the exam belongs to
        header: Pool header, passed through verbatim to renderers
        questions: Resolved questions in the set's order
    """

    recipient: Recipient
    header: PoolHeader
    questions: tuple[ResolvedQuestion, ...]

    def __len__(self) -> int:
        return len(self.questions)


def resolve_bank(pool: QuestionPool, qset: ShuffledQuestionSet) -> RecipientBank:
    """Resolve a set and attach its recipient and the pool header."""
    return RecipientBank(
        recipient=qset.recipient,
        header=pool.header,
        questions=resolve_set(pool, qset),
    )
