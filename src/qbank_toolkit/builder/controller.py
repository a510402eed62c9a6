"""
Module: builder.controller

Purpose:
    Orchestrate exam generation.
    Index → Select → Reorder (per recipient) → Resolve → Render

Key Functions:
    - build_question_set(): One recipient's ShuffledQuestionSet
    - build_one(): Single anonymous set (self-study, interactive use)
    - build_batch(): One set per roster entry, all-or-nothing
    - resolve_recipient_bank(): Resolve one recipient's set for rendering
    - generate_exams(): File pipeline driven by BuilderConfig

Key Classes:
    - BatchResult: Sets built for a roster
    - ExamBatchGenerator: Holds a pool and its batch, resolves and steps it
    - GenerationResult: Outcome of generate_exams()

Dependencies:
    - builder.selection: Group index and selector
    - builder.resolving: Content resolution
    - builder.session: Stepping cursor
    - builder.loading: Pool storage
    - builder.output: Text rendering

Used By:
    - qbank_toolkit.cli
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from qbank_toolkit.core.models import QuestionPool, Recipient, ShuffledQuestionSet

from .config import BuilderConfig
from .loading import DirectoryRepository
from .output import write_exam_files
from .resolving import RecipientBank, resolve_bank
from .selection import SelectionConfig, SelectionError, build_group_index, select_questions
from .session import ExamSession, PresentedQuestion

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchResult:
    """
    Sets built for a roster (immutable container).

    Attributes:
        sets: One ShuffledQuestionSet per roster entry, in roster order
        config: Selection configuration used
    """

    sets: tuple[ShuffledQuestionSet, ...]
    config: SelectionConfig

    def get_set(self, idx: int) -> Optional[ShuffledQuestionSet]:
        """Set at roster position `idx`, None when out of range."""
        if 0 <= idx < len(self.sets):
            return self.sets[idx]
        return None

    def __len__(self) -> int:
        return len(self.sets)


def build_question_set(
    pool: QuestionPool,
    config: SelectionConfig,
    recipient: Recipient,
    rng: Optional[random.Random] = None,
) -> ShuffledQuestionSet:
    """
    Build one recipient's set.

    The group index is rebuilt for every call. Failures propagate
    unchanged and nothing is returned.

    Raises:
        InvalidRangeError: If the range does not fit the pool
        InsufficientGroupsError: If the range has fewer groups than config.count
        SelectionError: If the drawn questions repeat a group
    """
    if rng is None:
        rng = random.Random()
    index = build_group_index(pool, config.start, config.end)
    selected = select_questions(index, config.count, rng=rng, method=config.shuffle_method)
    groups = [pool.get(sq.question_id).group for sq in selected]
    if len(set(groups)) != len(groups):
        raise SelectionError(f"Selection for {recipient!r} repeats a group: {groups}")
    qset = ShuffledQuestionSet(recipient, selected)
    if config.reorder:
        qset.shuffle(rng, config.shuffle_method)
    return qset


def build_one(pool: QuestionPool, config: SelectionConfig) -> ShuffledQuestionSet:
    """Build a single set for the anonymous recipient."""
    rng = random.Random(config.seed_for(0))
    return build_question_set(pool, config, Recipient.anonymous(), rng)


def build_batch(
    pool: QuestionPool,
    config: SelectionConfig,
    roster: Sequence[Recipient],
) -> BatchResult:
    """
    Build one independent set per roster entry.

    Every recipient gets its own random source (seeded from config.seed_for
    its roster position). Recipients are not coordinated, so two sets may
    overlap by chance.

    Raises:
        SelectionError: The first recipient failure aborts the whole batch
    """
    if not roster:
        logger.warning("Roster is empty, no exams built")

    sets = []
    for i, recipient in enumerate(roster):
        rng = random.Random(config.seed_for(i))
        sets.append(build_question_set(pool, config, recipient, rng))

    logger.info(
        f"Built {len(sets)} sets of {config.count} questions "
        f"from range [{config.start}, {config.end}]"
    )
    return BatchResult(sets=tuple(sets), config=config)


def resolve_recipient_bank(pool: QuestionPool, batch: BatchResult, idx: int) -> RecipientBank:
    """
    Resolve the set at roster position `idx` against the current pool.

    Raises:
        IndexError: If idx is outside the batch
        DanglingReferenceError: If the set no longer matches the pool
    """
    qset = batch.get_set(idx)
    if qset is None:
        raise IndexError(f"No set at position {idx} (batch has {len(batch)})")
    return resolve_bank(pool, qset)


class ExamBatchGenerator:
    """
    A pool together with the sets generated from it.

    Also owns a single stepping cursor over one recipient's set for
    interactive sessions.

    Example:
        >>> generator = ExamBatchGenerator.one_set(pool, SelectionConfig(1, 5, 4))
        >>> generator.next().position
        1
    """

    def __init__(self, pool: QuestionPool, batch: BatchResult):
        self.pool = pool
        self.batch = batch
        self._session: Optional[ExamSession] = None

    @classmethod
    def one_set(cls, pool: QuestionPool, config: SelectionConfig) -> ExamBatchGenerator:
        """Generator holding one anonymous set."""
        return cls(pool, BatchResult(sets=(build_one(pool, config),), config=config))

    @classmethod
    def for_roster(
        cls,
        pool: QuestionPool,
        config: SelectionConfig,
        roster: Sequence[Recipient],
    ) -> ExamBatchGenerator:
        """Generator holding one set per roster entry."""
        return cls(pool, build_batch(pool, config, roster))

    def get_set(self, idx: int) -> Optional[ShuffledQuestionSet]:
        return self.batch.get_set(idx)

    def resolve_recipient_bank(self, idx: int) -> RecipientBank:
        return resolve_recipient_bank(self.pool, self.batch, idx)

    def resolve_all(self) -> tuple[RecipientBank, ...]:
        return tuple(resolve_bank(self.pool, qset) for qset in self.batch.sets)

    def start_session(self, idx: int = 0) -> ExamSession:
        """Point the cursor at the set of recipient `idx`, before its first question."""
        qset = self.batch.get_set(idx)
        if qset is None:
            raise IndexError(f"No set at position {idx} (batch has {len(self.batch)})")
        self._session = ExamSession(self.pool, qset)
        return self._session

    def next(self) -> Optional[PresentedQuestion]:
        """
        Step the cursor (started on the first set if needed).

        Returns:
            The next PresentedQuestion, or None once the set is exhausted
        """
        if self._session is None:
            self.start_session(0)
        return self._session.next()


@dataclass(frozen=True)
class GenerationResult:
    """
    Outcome of generate_exams().

    Attributes:
        papers_path: Combined papers file
        answers_path: Combined answer cards (None when disabled)
        batch: Sets that were generated
        banks: Resolved banks in roster order
        elapsed: Wall time in seconds
    """

    papers_path: Path
    answers_path: Optional[Path]
    batch: BatchResult
    banks: tuple[RecipientBank, ...]
    elapsed: float


def generate_exams(config: BuilderConfig) -> GenerationResult:
    """
    Generate papers for a pool directory.

    Pipeline:
    1. Load pool and roster
    2. Build one set per recipient (or one anonymous set)
    3. Resolve every set
    4. Write papers.txt and answers.txt

    Raises:
        RepositoryError: If pool files cannot be read
        SelectionError: If the sets cannot be built
        DanglingReferenceError: If a set fails to resolve
    """
    start_time = time.perf_counter()
    repository = DirectoryRepository(config.pool_dir, strict=config.strict)

    pool = repository.read_pool()
    selection = config.selection_config(pool.max_id)
    logger.info(
        f"Generating {selection.count}-question exams from {config.pool_dir} "
        f"range [{selection.start}, {selection.end}]"
    )

    if config.one_set:
        generator = ExamBatchGenerator.one_set(pool, selection)
    else:
        generator = ExamBatchGenerator.for_roster(pool, selection, repository.read_roster())

    banks = generator.resolve_all()
    papers_path, answers_path = write_exam_files(
        banks,
        config.resolved_output_dir,
        include_answer_key=config.include_answer_key,
    )

    elapsed = time.perf_counter() - start_time
    logger.info(f"Exam generation completed in {elapsed:.2f}s")
    return GenerationResult(
        papers_path=papers_path,
        answers_path=answers_path,
        batch=generator.batch,
        banks=banks,
        elapsed=elapsed,
    )
