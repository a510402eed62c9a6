"""
Module: builder.loading.repository

Purpose:
    Narrow capability interface over question-pool storage, plus the
    adapters shipped with the toolkit. The selection engine only needs
    read access; headers can also be written back.

Key Classes:
    - PoolRepository: Protocol (read pool, read roster, read/write header)
    - InMemoryRepository: Pool held in memory (tests, embedding callers)
    - DirectoryRepository: header.json + questions.jsonl + roster.jsonl
    - RepositoryError: Storage cannot be read or written

Dependencies:
    - core.utils.serialization: JSON / JSONL round-trips
    - core.schemas.validator: payload validation

Used By:
    - builder.controller: generate_exams()
    - qbank_toolkit.cli
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Protocol, runtime_checkable

from qbank_toolkit.core.models import PoolHeader, QuestionPool, QuestionRecord, Recipient
from qbank_toolkit.core.schemas import ValidationError
from qbank_toolkit.core.utils.serialization import (
    load_header_json,
    load_records_jsonl,
    load_roster_jsonl,
    save_header_json,
    save_records_jsonl,
    save_roster_jsonl,
)

logger = logging.getLogger(__name__)

HEADER_FILE = "header.json"
QUESTIONS_FILE = "questions.jsonl"
ROSTER_FILE = "roster.jsonl"


class RepositoryError(Exception):
    """Error reading or writing pool storage."""
    pass


@runtime_checkable
class PoolRepository(Protocol):
    """What the engine needs from storage. Adapters need not subclass this."""

    def read_pool(self) -> QuestionPool:
        ...

    def read_roster(self) -> tuple[Recipient, ...]:
        ...

    def read_header(self) -> PoolHeader:
        ...

    def write_header(self, header: PoolHeader) -> None:
        ...


class InMemoryRepository:
    """
    Repository backed by in-memory values.

    Example:
        >>> repo = InMemoryRepository(records, roster=[Recipient("Ada", "1")])
        >>> len(repo.read_pool())
        5
    """

    def __init__(
        self,
        records: Iterable[QuestionRecord],
        roster: Iterable[Recipient] = (),
        header: PoolHeader | None = None,
    ):
        self._records = tuple(records)
        self._roster = tuple(roster)
        self._header = header if header is not None else PoolHeader.default()

    def read_pool(self) -> QuestionPool:
        return QuestionPool(self._records, self._header)

    def read_roster(self) -> tuple[Recipient, ...]:
        return self._roster

    def read_header(self) -> PoolHeader:
        return self._header

    def write_header(self, header: PoolHeader) -> None:
        self._header = header


class DirectoryRepository:
    """
    Repository stored as a directory of JSON files.

    Layout:
        root/
        ├── header.json      # Optional, PoolHeader.default() when missing
        ├── questions.jsonl  # Required for read_pool()
        └── roster.jsonl     # Optional, empty roster when missing

    Attributes:
        root: Directory holding the files
        strict: Run full JSON Schema validation on every payload
    """

    def __init__(self, root: Path, *, strict: bool = False):
        self.root = Path(root)
        self.strict = strict

    @property
    def header_path(self) -> Path:
        return self.root / HEADER_FILE

    @property
    def questions_path(self) -> Path:
        return self.root / QUESTIONS_FILE

    @property
    def roster_path(self) -> Path:
        return self.root / ROSTER_FILE

    def read_header(self) -> PoolHeader:
        if not self.header_path.exists():
            logger.debug(f"No {HEADER_FILE} in {self.root}, using default header")
            return PoolHeader.default()
        try:
            return load_header_json(self.header_path, strict=self.strict)
        except ValidationError as e:
            raise RepositoryError(f"Invalid header in {self.header_path}: {e}") from e

    def write_header(self, header: PoolHeader) -> None:
        try:
            save_header_json(header, self.header_path)
        except OSError as e:
            raise RepositoryError(f"Failed to write {self.header_path}: {e}") from e

    def read_pool(self) -> QuestionPool:
        """
        Load header and questions.

        Raises:
            RepositoryError: If questions.jsonl is missing or invalid
        """
        if not self.questions_path.exists():
            raise RepositoryError(f"Question file does not exist: {self.questions_path}")
        header = self.read_header()
        try:
            records = load_records_jsonl(self.questions_path, strict=self.strict)
            pool = QuestionPool(tuple(records), header)
        except (ValidationError, ValueError) as e:
            raise RepositoryError(f"Failed to load {self.questions_path}: {e}") from e

        logger.info(f"Loaded {len(pool)} questions from {self.questions_path}")
        return pool

    def read_roster(self) -> tuple[Recipient, ...]:
        if not self.roster_path.exists():
            logger.debug(f"No {ROSTER_FILE} in {self.root}")
            return ()
        try:
            roster = tuple(load_roster_jsonl(self.roster_path, strict=self.strict))
        except ValidationError as e:
            raise RepositoryError(f"Failed to load {self.roster_path}: {e}") from e
        logger.info(f"Loaded {len(roster)} recipients from {self.roster_path}")
        return roster

    def write_pool(self, pool: QuestionPool) -> None:
        """Write header and questions, replacing existing files."""
        self.write_header(pool.header)
        try:
            save_records_jsonl(pool.records, self.questions_path)
        except OSError as e:
            raise RepositoryError(f"Failed to write {self.questions_path}: {e}") from e

    def write_roster(self, roster: Iterable[Recipient]) -> None:
        try:
            save_roster_jsonl(roster, self.roster_path)
        except OSError as e:
            raise RepositoryError(f"Failed to write {self.roster_path}: {e}") from e
