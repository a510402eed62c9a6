"""
Module: builder.selection.selector

Purpose:
    Draw a fixed number of questions such that no two share a group, and
    give each drawn question its own choice permutation.

Key Functions:
    - select_questions(): Main entry point for selection

Key Classes:
    - Selector: Orchestrates the draw

Algorithm:
    1. Require at least `count` distinct groups in the index
    2. Repeat `count` times:
       a. Draw a uniform index into the remaining tags and remove that tag
       b. Draw one member of the tag uniformly
       c. Permute the member's choices (identity for short answers)
    3. Return the ShuffledQuestion values in draw order

Dependencies:
    - qbank_toolkit.core.models: ShuffledQuestion, Category
    - qbank_toolkit.core.utils.shuffling: permute
    - builder.selection.group_index: GroupIndex

Used By:
    - builder.controller: Per-recipient set construction
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Hashable, List, Optional

from qbank_toolkit.core.models import Category, ShuffledQuestion
from qbank_toolkit.core.utils.shuffling import ShuffleMethod, permute

from .errors import InsufficientGroupsError
from .group_index import GroupIndex

logger = logging.getLogger(__name__)


def select_questions(
    index: GroupIndex,
    count: int,
    *,
    rng: Optional[random.Random] = None,
    method: ShuffleMethod = ShuffleMethod.UNIFORM,
) -> tuple[ShuffledQuestion, ...]:
    """
    Select `count` group-distinct questions from an index.

    Args:
        index: Group index over the requested range
        count: Number of questions to draw
        rng: Random source; a fresh unseeded one when omitted
        method: Algorithm for the choice permutations

    Returns:
        `count` ShuffledQuestion values, each from a different group

    Raises:
        InsufficientGroupsError: If index has fewer than `count` groups

    Invariants:
        - len(result) == count
        - no two results share a group tag

    Example:
        >>> picked = select_questions(index, 4, rng=random.Random(1))
        >>> len({pool.get(q.question_id).group for q in picked})
        4
    """
    selector = Selector(index, count, rng=rng, method=method)
    return selector.run()


@dataclass
class Selector:
    """
    Group-exclusive question draw.

    Attributes:
        index: Group index to draw from
        count: Number of questions to draw
        rng: Random source
        method: Choice shuffle algorithm
    """

    index: GroupIndex
    count: int
    rng: Optional[random.Random] = None
    method: ShuffleMethod = ShuffleMethod.UNIFORM

    # Internal state
    _available: List[Hashable] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        if self.rng is None:
            self.rng = random.Random()

    def run(self) -> tuple[ShuffledQuestion, ...]:
        """
        Execute the draw.

        Returns:
            Selected questions in draw order
        """
        if self.index.group_count < self.count:
            raise InsufficientGroupsError(self.count, self.index.group_count)

        self._available = self.index.tags
        selected = []
        for _ in range(self.count):
            tag = self._draw_tag()
            question_id = self._draw_member(tag)
            selected.append(
                ShuffledQuestion(question_id, self._permutation_for(question_id))
            )

        logger.debug(
            f"Selected {len(selected)} of {self.index.group_count} groups "
            f"({self.index.question_count} questions) "
            f"in [{self.index.start}, {self.index.end}]"
        )
        return tuple(selected)

    def _draw_tag(self) -> Hashable:
        """Remove and return a uniformly drawn remaining tag."""
        position = self.rng.randrange(len(self._available))
        return self._available.pop(position)

    def _draw_member(self, tag: Hashable) -> int:
        """Pick one of the mutually exclusive variants filed under `tag`."""
        members = self.index.members(tag)
        return members[self.rng.randrange(len(members))]

    def _permutation_for(self, question_id: int) -> tuple[int, ...]:
        record = self.index.pool.get(question_id)
        n = record.choice_count
        # Short answers keep the canonical answer in slot 1
        if record.category is Category.SHORT_ANSWER:
            return tuple(range(1, n + 1))
        return permute(n, self.rng, self.method)
