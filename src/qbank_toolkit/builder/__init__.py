"""
Module: builder

Purpose:
    Exam generation from a grouped question pool: group-exclusive
    selection, choice and question shuffling, resolution back to content,
    interactive stepping and plain-text output.

Key Functions:
    - build_one(): Single anonymous set
    - build_batch(): One set per roster entry
    - resolve_recipient_bank(): Render-ready content for one recipient
    - generate_exams(): File pipeline

Key Classes:
    - BuilderConfig: Configuration for the file pipeline
    - SelectionConfig: Configuration for set construction
    - ExamBatchGenerator: Pool plus generated sets, with a stepping cursor
    - ExamSession: Single-recipient cursor

Used By:
    - qbank_toolkit.cli
"""

from .config import BuilderConfig
from .selection import (
    SelectionConfig,
    SelectionError,
    InvalidRangeError,
    InsufficientGroupsError,
)
from .resolving import DanglingReferenceError, RecipientBank
from .loading import DirectoryRepository, InMemoryRepository, RepositoryError
from .session import ExamSession, PresentedQuestion
from .controller import (
    BatchResult,
    ExamBatchGenerator,
    GenerationResult,
    build_batch,
    build_one,
    build_question_set,
    generate_exams,
    resolve_recipient_bank,
)

__all__ = [
    # Config
    "BuilderConfig",
    "SelectionConfig",
    # Errors
    "SelectionError",
    "InvalidRangeError",
    "InsufficientGroupsError",
    "DanglingReferenceError",
    "RepositoryError",
    # Storage
    "DirectoryRepository",
    "InMemoryRepository",
    # Generation
    "BatchResult",
    "ExamBatchGenerator",
    "GenerationResult",
    "build_batch",
    "build_one",
    "build_question_set",
    "generate_exams",
    "resolve_recipient_bank",
    # Sessions
    "ExamSession",
    "PresentedQuestion",
    "RecipientBank",
]
