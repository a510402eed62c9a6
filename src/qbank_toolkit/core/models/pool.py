"""
Module: pool

Purpose:
    Provides QuestionPool - the read-only collection of QuestionRecord
    entries plus the pool header. The selection engine only ever reads
    from it; a "changed" pool is a new QuestionPool instance.

Key Functions:
    - QuestionPool.get(id): Lookup by stable id
    - QuestionPool.max_id: Upper bound for range checks
    - QuestionPool.category_label_for(record): Header label for a record

Dependencies:
    - .questions.QuestionRecord
    - .header.PoolHeader

Used By:
    - builder.selection.group_index: GroupIndex
    - builder.resolving.resolver: ContentResolver
    - builder.loading: repository adapters
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import Dict, Iterator, Optional

from .header import PoolHeader
from .questions import QuestionRecord


@dataclass(frozen=True)
class QuestionPool:
    """
    Canonical question pool (immutable).

    Attributes:
        records: Question records in storage order
        header: Pool-level metadata

    Invariants:
        - record ids are unique
    """

    records: tuple[QuestionRecord, ...]
    header: PoolHeader = field(default_factory=PoolHeader.default)

    def __post_init__(self) -> None:
        """Validate pool on construction."""
        object.__setattr__(self, "records", tuple(self.records))
        seen: set[int] = set()
        duplicates = set()
        for record in self.records:
            if record.id in seen:
                duplicates.add(record.id)
            seen.add(record.id)
        if duplicates:
            raise ValueError(f"Duplicate question ids in pool: {sorted(duplicates)}")

    @cached_property
    def _by_id(self) -> Dict[int, QuestionRecord]:
        return {record.id: record for record in self.records}

    @property
    def max_id(self) -> int:
        """Largest id in the pool, 0 when empty."""
        return max(self._by_id, default=0)

    def get(self, question_id: int) -> Optional[QuestionRecord]:
        """Find a record by id, None when absent."""
        return self._by_id.get(question_id)

    def category_label_for(self, record: QuestionRecord) -> str:
        return self.header.category_label(record.category)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._by_id

    def __iter__(self) -> Iterator[QuestionRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __repr__(self) -> str:
        return f"QuestionPool(records={len(self.records)}, title={self.header.title!r})"
