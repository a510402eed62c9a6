"""
Module: shuffled

Purpose:
    Value objects produced by selection: a ShuffledQuestion references a
    canonical record by id and carries a permutation of its choices; a
    ShuffledQuestionSet is one recipient's ordered list of them.

Key Classes:
    - ShuffledQuestion: (question id, choice permutation)
    - ShuffledQuestionSet: Recipient plus ordered ShuffledQuestions

Dependencies:
    - core.utils.shuffling: permutation helpers
    - .recipients.Recipient

Used By:
    - builder.selection.selector: Produces ShuffledQuestion values
    - builder.controller: Builds one set per recipient
    - builder.resolving.resolver: Maps them back to content

Design Notes:
    The permutation length is fixed when the value is created and is never
    revalidated against the pool. Stale references are detected at
    resolution time instead (DanglingReferenceError).
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from ..utils.shuffling import ShuffleMethod, apply_permutation, is_permutation, permute
from .recipients import Recipient


@dataclass(frozen=True)
class ShuffledQuestion:
    """
    Reference to a canonical question with a permuted choice order.

    Attributes:
        question_id: Id of the canonical QuestionRecord
        permutation: Displayed slot i shows canonical choice permutation[i]
            (both 1-based)

    Invariants:
        - permutation is a bijection on 1..=len(permutation)

    Example:
        >>> sq = ShuffledQuestion(7, (3, 1, 2))
        >>> sq.choice(1)
        3
    """

    question_id: int
    permutation: tuple[int, ...]

    def __post_init__(self) -> None:
        """Validate permutation on construction."""
        object.__setattr__(self, "permutation", tuple(self.permutation))
        if not is_permutation(self.permutation):
            raise ValueError(
                f"question {self.question_id}: {self.permutation} is not a "
                f"permutation of 1..{len(self.permutation)}"
            )

    @property
    def choice_count(self) -> int:
        return len(self.permutation)

    def choice(self, number: int) -> int:
        """Canonical choice index displayed at 1-based slot `number`."""
        if not 1 <= number <= len(self.permutation):
            raise IndexError(f"choice slot out of range: {number}")
        return self.permutation[number - 1]


class ShuffledQuestionSet:
    """
    One recipient's exam: an ordered sequence of ShuffledQuestion.

    Members are fixed at construction. Only their order may change, via
    shuffle(), which never touches a member's own choice permutation.

    Attributes:
        recipient: Who this set belongs to (read-only)
        questions: Current order of members

    Invariants:
        - no two members reference the same question id
    """

    __slots__ = ("_recipient", "_questions")

    def __init__(self, recipient: Recipient, questions: Iterable[ShuffledQuestion]):
        members = list(questions)
        ids = [q.question_id for q in members]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate questions in set for {recipient!r}")
        self._recipient = recipient
        self._questions = members

    @property
    def recipient(self) -> Recipient:
        return self._recipient

    @property
    def questions(self) -> tuple[ShuffledQuestion, ...]:
        return tuple(self._questions)

    @property
    def question_ids(self) -> tuple[int, ...]:
        return tuple(q.question_id for q in self._questions)

    def shuffle(
        self,
        rng: Optional[random.Random] = None,
        method: ShuffleMethod = ShuffleMethod.UNIFORM,
    ) -> None:
        """Re-randomize the order of members in place."""
        order = permute(len(self._questions), rng, method)
        self._questions = apply_permutation(self._questions, order)

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self) -> Iterator[ShuffledQuestion]:
        return iter(tuple(self._questions))

    def __getitem__(self, index: int) -> ShuffledQuestion:
        return self._questions[index]

    def __repr__(self) -> str:
        return f"ShuffledQuestionSet({self._recipient!r}, ids={list(self.question_ids)})"
