"""
Module: builder.output

Purpose:
    Answer keys and plain-text rendering of resolved recipient banks.
"""

from .answer_key import AnswerKey, answer_key, bank_answer_keys
from .text_writer import render_answer_card, render_paper, write_exam_files

__all__ = [
    "AnswerKey",
    "answer_key",
    "bank_answer_keys",
    "render_paper",
    "render_answer_card",
    "write_exam_files",
]
