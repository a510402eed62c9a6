"""
Module: builder.selection

Purpose:
    Group-exclusive question selection. Indexes a pool range by group tag,
    draws one question per distinct group and permutes each question's
    choices.

Key Functions:
    - build_group_index(): Index a pool range by group tag
    - select_questions(): Draw group-distinct ShuffledQuestions

Key Classes:
    - SelectionConfig: Configuration for set construction
    - GroupIndex: tag -> member ids
    - Selector: Draw orchestrator

Used By:
    - builder.controller: ExamBatchGenerator
"""

from .config import SelectionConfig
from .errors import InsufficientGroupsError, InvalidRangeError, SelectionError
from .group_index import GroupIndex, build_group_index
from .selector import Selector, select_questions

__all__ = [
    "SelectionConfig",
    "SelectionError",
    "InvalidRangeError",
    "InsufficientGroupsError",
    "GroupIndex",
    "build_group_index",
    "Selector",
    "select_questions",
]
