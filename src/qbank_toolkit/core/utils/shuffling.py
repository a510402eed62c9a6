"""
Module: core.utils.shuffling

Purpose:
    Random permutations of 1-based positions. Used both for the order of
    choices inside a question and for the order of questions inside a
    recipient's set.

Key Functions:
    - permute(): Permutation of 1..=n
    - apply_permutation(): Reorder a sequence by a 1-based permutation
    - is_permutation(): Bijection check on 1..=n

Key Classes:
    - ShuffleMethod: Algorithm selector

Dependencies:
    - random (std)

Used By:
    - builder.selection.selector: Choice permutations
    - core.models.shuffled.ShuffledQuestionSet: Question reordering
"""

from __future__ import annotations

import random
from enum import Enum
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")

# Passes made by the transposition shuffle
TRANSPOSITION_PASSES = 3


class ShuffleMethod(Enum):
    """
    How a permutation is drawn.

    Both methods always produce a bijection; only the distribution differs.

    Attributes:
        UNIFORM: Single Fisher-Yates pass, every permutation equally likely.
        TRANSPOSITION: Three passes swapping each position with a uniformly
            drawn position (self-swaps allowed). Not uniform; kept for
            reproducing papers generated by the legacy generator.
    """

    UNIFORM = "uniform"
    TRANSPOSITION = "transposition"


def permute(
    n: int,
    rng: Optional[random.Random] = None,
    method: ShuffleMethod = ShuffleMethod.UNIFORM,
) -> tuple[int, ...]:
    """
    Draw a permutation of 1..=n.

    Args:
        n: Number of positions (>= 0)
        rng: Random source; a fresh unseeded one when omitted
        method: Shuffle algorithm

    Returns:
        Tuple in which every value of 1..=n appears exactly once

    Example:
        >>> sorted(permute(4, random.Random(7)))
        [1, 2, 3, 4]
    """
    if n < 0:
        raise ValueError(f"cannot permute a negative number of positions: {n}")
    if rng is None:
        rng = random.Random()

    positions = list(range(1, n + 1))
    if method is ShuffleMethod.UNIFORM:
        rng.shuffle(positions)
    else:
        for _ in range(TRANSPOSITION_PASSES):
            for i in range(n):
                j = rng.randrange(n)
                positions[i], positions[j] = positions[j], positions[i]
    return tuple(positions)


def apply_permutation(items: Sequence[T], permutation: Sequence[int]) -> list[T]:
    """
    Reorder items so that slot i holds items[permutation[i] - 1].

    Raises:
        ValueError: If permutation is not a bijection on 1..=len(items)
    """
    if len(permutation) != len(items) or not is_permutation(permutation):
        raise ValueError(
            f"permutation {tuple(permutation)} does not match {len(items)} items"
        )
    return [items[p - 1] for p in permutation]


def is_permutation(values: Sequence[int]) -> bool:
    """True when values is a bijection on 1..=len(values)."""
    return sorted(values) == list(range(1, len(values) + 1))
