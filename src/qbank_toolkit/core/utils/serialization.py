"""
Serialization Utilities

JSON / JSONL round-trips for pool records, the pool header and rosters.

File formats:
- questions.jsonl: one QuestionRecord.to_dict() per line
- header.json: PoolHeader.to_dict() plus "schema_version"
- roster.jsonl: one {"name": ..., "id": ...} per line

Every line is validated before it is turned into a model; errors carry
the file and line number.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Iterable, TypeVar

from ..models.header import PoolHeader
from ..models.questions import QuestionRecord
from ..models.recipients import Recipient
from ..schemas.validator import (
    POOL_SCHEMA_VERSION,
    ValidationError,
    validate_header,
    validate_question_record,
    validate_recipient,
)

T = TypeVar("T")


# ─────────────────────────────────────────────────────────────────────────────
# JSONL Utilities
# ─────────────────────────────────────────────────────────────────────────────

def _load_jsonl(
    path: Path,
    build: Callable[[dict[str, Any]], T],
) -> list[T]:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    items = []
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                items.append(build(json.loads(line)))
            except (json.JSONDecodeError, ValidationError, ValueError, KeyError) as e:
                raise ValidationError(
                    f"Error parsing line {line_no}: {e}",
                    path=str(path),
                    errors=[str(e)],
                ) from e
    return items


def _save_jsonl(rows: Iterable[dict[str, Any]], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        for row in rows:
            f.write(json.dumps(row, ensure_ascii=False))
            f.write("\n")


def load_records_jsonl(path: Path, *, strict: bool = False) -> list[QuestionRecord]:
    """
    Load question records from a JSONL file.

    Args:
        path: Path to questions.jsonl
        strict: Run full JSON Schema validation on each line

    Returns:
        Records in file order

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If any line is invalid
    """
    def build(data: dict[str, Any]) -> QuestionRecord:
        validate_question_record(data, strict=strict)
        return QuestionRecord.from_dict(data)

    return _load_jsonl(path, build)


def save_records_jsonl(records: Iterable[QuestionRecord], path: Path) -> None:
    """Save question records to a JSONL file."""
    _save_jsonl((record.to_dict() for record in records), path)


def load_roster_jsonl(path: Path, *, strict: bool = False) -> list[Recipient]:
    """Load roster entries from a JSONL file."""
    def build(data: dict[str, Any]) -> Recipient:
        validate_recipient(data, strict=strict)
        return Recipient.from_dict(data)

    return _load_jsonl(path, build)


def save_roster_jsonl(roster: Iterable[Recipient], path: Path) -> None:
    """Save roster entries to a JSONL file."""
    _save_jsonl((recipient.to_dict() for recipient in roster), path)


# ─────────────────────────────────────────────────────────────────────────────
# Header
# ─────────────────────────────────────────────────────────────────────────────

def load_header_json(path: Path, *, strict: bool = False) -> PoolHeader:
    """
    Load the pool header.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If the payload is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Header file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON: {e}", path=str(path)) from e

    validate_header(data, strict=strict)
    return PoolHeader.from_dict(data)


def save_header_json(header: PoolHeader, path: Path) -> None:
    """Save the pool header, stamped with the current schema version."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {"schema_version": POOL_SCHEMA_VERSION, **header.to_dict()}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
