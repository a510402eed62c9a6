"""
Module: builder.selection.config

Purpose:
    Configuration dataclass for selection. Immutable configuration with
    validation on construction.

Key Classes:
    - SelectionConfig: Range, count, seeding and shuffle algorithm

Used By:
    - builder.controller: ExamBatchGenerator
    - builder.config: BuilderConfig.selection_config
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from qbank_toolkit.core.utils.shuffling import ShuffleMethod


@dataclass(frozen=True)
class SelectionConfig:
    """
    Configuration for building shuffled question sets (immutable).

    Attributes:
        start: First question id of the range (inclusive)
        end: Last question id of the range (inclusive)
        count: Questions per set
        seed: Base seed; recipient i draws from seed + i. None = fresh entropy
        shuffle_method: Permutation algorithm for choices and question order
        reorder: Reshuffle each set's question order after selection

    Invariants:
        - count > 0

    Range bounds are checked against the pool when the group index is
    built, so that they surface as InvalidRangeError.

    Example:
        >>> config = SelectionConfig(start=1, end=50, count=25, seed=3)
        >>> config.seed_for(2)
        5
    """

    start: int
    end: int
    count: int
    seed: Optional[int] = None
    shuffle_method: ShuffleMethod = ShuffleMethod.UNIFORM
    reorder: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.count <= 0:
            raise ValueError(f"count must be positive: {self.count}")

    def seed_for(self, index: int) -> Optional[int]:
        """
        Seed for the recipient at roster position `index`.

        Returns:
            seed + index, or None when no base seed is set
        """
        if self.seed is None:
            return None
        return self.seed + index
