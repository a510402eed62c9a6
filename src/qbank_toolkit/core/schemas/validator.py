"""
Schema Validation Utilities

Validates raw JSON payloads (questions, header, roster entries) before
they are turned into models.

Two levels:
- basic checks (always): required fields and types, raised with a field
  path so storage errors point at the offending line
- strict mode: full JSON Schema validation through `jsonschema`
"""

from __future__ import annotations

from typing import Any

import jsonschema

# Schema version written into header.json
POOL_SCHEMA_VERSION = 1


QUESTION_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "QuestionRecord",
    "type": "object",
    "required": ["id", "group", "category", "text", "choices"],
    "properties": {
        "id": {"type": "integer", "minimum": 1},
        "group": {"type": ["integer", "string"]},
        "category": {"type": "integer", "enum": [1, 2, 3]},
        "text": {"type": "string"},
        "choices": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["text"],
                "properties": {
                    "text": {"type": "string"},
                    "is_answer": {"type": "boolean"},
                },
            },
        },
    },
}

HEADER_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "PoolHeader",
    "type": "object",
    "properties": {
        "schema_version": {"type": "integer"},
        "title": {"type": "string"},
        "name": {"type": "string"},
        "id": {"type": "string"},
        "categories": {"type": "array", "items": {"type": "string"}},
        "notice": {"type": "string"},
    },
}

RECIPIENT_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Recipient",
    "type": "object",
    "required": ["name", "id"],
    "properties": {
        "name": {"type": "string"},
        "id": {"type": ["string", "integer"]},
    },
}


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def _run_jsonschema(data: Any, schema: dict[str, Any]) -> None:
    validator = jsonschema.Draft7Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        first = errors[0]
        raise ValidationError(
            f"Schema violation: {first.message}",
            path="/".join(str(p) for p in first.path),
            errors=[e.message for e in errors],
        )


def validate_question_record(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a raw question payload.

    Args:
        data: Question dictionary (one questions.jsonl line)
        strict: If True, also run full JSON Schema validation

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Question must be an object, got {type(data).__name__}")

    required = ["id", "group", "category", "text", "choices"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing],
        )

    qid = data["id"]
    if not isinstance(qid, int) or isinstance(qid, bool) or qid < 1:
        raise ValidationError(f"Invalid id: {qid!r} (must be a positive integer)", path="id")

    group = data["group"]
    if isinstance(group, bool) or not isinstance(group, (int, str)):
        raise ValidationError(
            f"Invalid group for question {qid}: {group!r} (must be an integer or string)",
            path="group",
        )

    category = data["category"]
    if not isinstance(category, int) or isinstance(category, bool) or category not in (1, 2, 3):
        raise ValidationError(
            f"Invalid category for question {qid}: {category!r}", path="category"
        )

    if not isinstance(data["text"], str):
        raise ValidationError(f"text must be a string for question {qid}", path="text")

    choices = data["choices"]
    if not isinstance(choices, list):
        raise ValidationError(f"choices must be a list for question {qid}", path="choices")
    for i, choice in enumerate(choices):
        if not isinstance(choice, dict) or not isinstance(choice.get("text"), str):
            raise ValidationError(
                f"Choice {i + 1} of question {qid} has no text", path=f"choices/{i}"
            )
        if "is_answer" in choice and not isinstance(choice["is_answer"], bool):
            raise ValidationError(
                f"Choice {i + 1} of question {qid}: is_answer must be true or false, "
                f"got {choice['is_answer']!r}",
                path=f"choices/{i}/is_answer",
            )

    if strict:
        _run_jsonschema(data, QUESTION_SCHEMA)


def validate_header(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a raw header payload.

    Raises:
        ValidationError: If data is invalid or the schema version is unknown
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Header must be an object, got {type(data).__name__}")

    version = data.get("schema_version", POOL_SCHEMA_VERSION)
    if version != POOL_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported pool schema version: {version} (expected {POOL_SCHEMA_VERSION})",
            path="schema_version",
        )
    categories = data.get("categories", [])
    if not isinstance(categories, list):
        raise ValidationError("categories must be a list", path="categories")

    if strict:
        _run_jsonschema(data, HEADER_SCHEMA)


def validate_recipient(data: dict[str, Any], *, strict: bool = False) -> None:
    """Validate a raw roster entry."""
    if not isinstance(data, dict):
        raise ValidationError(f"Roster entry must be an object, got {type(data).__name__}")
    missing = [f for f in ("name", "id") if f not in data]
    if missing:
        raise ValidationError(f"Missing required fields: {missing}")
    if strict:
        _run_jsonschema(data, RECIPIENT_SCHEMA)
