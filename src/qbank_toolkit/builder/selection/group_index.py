"""
Module: builder.selection.group_index

Purpose:
    Partition the records of a requested id range by group tag. Rebuilt
    fresh for every generation call; the pool itself is never touched.

Key Functions:
    - build_group_index(): Validate the range and index it

Key Classes:
    - GroupIndex: tag -> member ids, plus the pool it was built from

Dependencies:
    - qbank_toolkit.core.models: QuestionPool

Used By:
    - builder.selection.selector: Group-exclusive draws
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Hashable, List

from qbank_toolkit.core.models import QuestionPool

from .errors import InvalidRangeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupIndex:
    """
    Records in [start, end] grouped by tag.

    Attributes:
        start: First id of the indexed range
        end: Last id of the indexed range
        groups: Group tag -> member ids, both in pool order
        pool: Pool the index was built from (for choice counts)
    """

    start: int
    end: int
    groups: Dict[Hashable, tuple[int, ...]]
    pool: QuestionPool = field(repr=False, compare=False)

    @property
    def tags(self) -> list[Hashable]:
        """Group tags in first-seen order."""
        return list(self.groups)

    @property
    def group_count(self) -> int:
        return len(self.groups)

    @property
    def question_count(self) -> int:
        return sum(len(ids) for ids in self.groups.values())

    def members(self, tag: Hashable) -> tuple[int, ...]:
        """Ids filed under `tag` (empty when unknown)."""
        return self.groups.get(tag, ())


def build_group_index(pool: QuestionPool, start: int, end: int) -> GroupIndex:
    """
    Index the records whose id lies in [start, end] by group tag.

    Args:
        pool: Question pool to read from
        start: First id (inclusive, >= 1)
        end: Last id (inclusive)

    Returns:
        GroupIndex over the range

    Raises:
        InvalidRangeError: If start is 0, start > end, or either bound
            exceeds the pool's maximum id

    Example:
        >>> index = build_group_index(pool, 1, 5)
        >>> index.group_count
        4
    """
    max_id = pool.max_id
    if start < 1 or start > end or start > max_id or end > max_id:
        raise InvalidRangeError(start, end, max_id)

    grouped: Dict[Hashable, List[int]] = {}
    for record in pool:
        if start <= record.id <= end:
            grouped.setdefault(record.group, []).append(record.id)

    logger.debug(
        f"Indexed {sum(len(v) for v in grouped.values())} questions "
        f"in [{start}, {end}] into {len(grouped)} groups"
    )
    return GroupIndex(
        start=start,
        end=end,
        groups={tag: tuple(ids) for tag, ids in grouped.items()},
        pool=pool,
    )
