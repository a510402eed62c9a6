"""
Module: builder.session

Purpose:
    Sequential presentation of one recipient's set for interactive use.
    A cursor starts before the first question; every next() advances it
    and returns the question at the new position, or None once it has
    moved past the last one.

Key Classes:
    - PresentedQuestion: (position, category label, text, choices)
    - ExamSession: Stateful cursor over a single ShuffledQuestionSet

Used By:
    - builder.controller: ExamBatchGenerator.next()
    - qbank_toolkit.cli: preview command
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from qbank_toolkit.core.models import Category, QuestionPool, ShuffledQuestionSet

from .resolving import ResolvedChoice, resolve_question

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PresentedQuestion:
    """
    One question as handed to an interactive surface.

    Attributes:
        position: 1-based position within the set
        category: Answer shape (tells the input loop how many answers to collect)
        category_label: Header label for the category
        text: Question text
        choices: Choices in displayed order, with correctness flags
    """

    position: int
    category: Category
    category_label: str
    text: str
    choices: tuple[ResolvedChoice, ...]


class ExamSession:
    """
    Cursor over a single recipient's set.

    Positions run 0..=len(set). The cursor never steps several sets at
    once; make one session per recipient.

    Example:
        >>> session = ExamSession(pool, qset)
        >>> session.next().position
        1
    """

    def __init__(self, pool: QuestionPool, qset: ShuffledQuestionSet):
        self._pool = pool
        self._qset = qset
        self._position = 0

    @property
    def position(self) -> int:
        """Position of the question last returned (0 before the first call)."""
        return min(self._position, len(self._qset))

    @property
    def exhausted(self) -> bool:
        return self._position > len(self._qset)

    @property
    def question_set(self) -> ShuffledQuestionSet:
        return self._qset

    def next(self) -> Optional[PresentedQuestion]:
        """
        Advance and return the question at the new position.

        Returns:
            PresentedQuestion, or None once past the end

        Raises:
            DanglingReferenceError: If the current member no longer resolves
        """
        if self.exhausted:
            return None
        self._position += 1
        if self._position > len(self._qset):
            logger.debug(f"Session for {self._qset.recipient!r} exhausted")
            return None

        resolved = resolve_question(self._pool, self._qset[self._position - 1])
        return PresentedQuestion(
            position=self._position,
            category=resolved.category,
            category_label=resolved.category_label,
            text=resolved.text,
            choices=resolved.choices,
        )

    def reset(self) -> None:
        """Move the cursor back before the first question."""
        self._position = 0

    def __iter__(self) -> Iterator[PresentedQuestion]:
        while True:
            presented = self.next()
            if presented is None:
                return
            yield presented
