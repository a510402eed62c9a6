"""
Schemas Package

Validation of raw pool payloads before deserialization.
"""

from .validator import (
    POOL_SCHEMA_VERSION,
    ValidationError,
    validate_header,
    validate_question_record,
    validate_recipient,
)

__all__ = [
    "POOL_SCHEMA_VERSION",
    "ValidationError",
    "validate_header",
    "validate_question_record",
    "validate_recipient",
]
