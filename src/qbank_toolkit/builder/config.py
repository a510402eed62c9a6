"""
Module: builder.config

Purpose:
    Configuration dataclass for the file-based generation pipeline.
    Immutable configuration with validation on construction.

Key Classes:
    - BuilderConfig: Pool location, selection parameters and output options

Used By:
    - builder.controller: generate_exams()
    - qbank_toolkit.cli
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from qbank_toolkit.core.utils.shuffling import ShuffleMethod

from .selection.config import SelectionConfig


@dataclass(frozen=True)
class BuilderConfig:
    """
    Configuration for generating exams from a pool directory (immutable).

    Attributes:
        pool_dir: Directory read by DirectoryRepository
        count: Questions per exam
        start: First question id of the range
        end: Last question id of the range; None = pool's max id
        seed: Base seed for reproducible batches
        shuffle_method: Permutation algorithm
        output_dir: Where papers.txt / answers.txt are written;
            None = pool_dir / "output"
        include_answer_key: Also write answers.txt
        one_set: Ignore the roster and build a single anonymous exam
        strict: Full JSON Schema validation of pool files

    Example:
        >>> config = BuilderConfig(pool_dir=Path("pools/security"), count=25)
        >>> config.selection_config(max_id=51).end
        51
    """

    pool_dir: Path
    count: int
    start: int = 1
    end: Optional[int] = None
    seed: Optional[int] = None
    shuffle_method: ShuffleMethod = ShuffleMethod.UNIFORM
    output_dir: Optional[Path] = None
    include_answer_key: bool = True
    one_set: bool = False
    strict: bool = False

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.count <= 0:
            raise ValueError(f"count must be positive: {self.count}")
        object.__setattr__(self, "pool_dir", Path(self.pool_dir))
        if self.output_dir is not None:
            object.__setattr__(self, "output_dir", Path(self.output_dir))

    @property
    def resolved_output_dir(self) -> Path:
        return self.output_dir if self.output_dir is not None else self.pool_dir / "output"

    def selection_config(self, max_id: int) -> SelectionConfig:
        """
        Selection parameters for a loaded pool.

        Args:
            max_id: Pool's largest id, used when `end` is None
        """
        return SelectionConfig(
            start=self.start,
            end=self.end if self.end is not None else max_id,
            count=self.count,
            seed=self.seed,
            shuffle_method=self.shuffle_method,
        )
