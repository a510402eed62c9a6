"""
Module: builder.output.text_writer

Purpose:
    Plain-text papers and answer cards for resolved recipient banks.
    Header text is passed through verbatim.

Key Functions:
    - render_paper(): One recipient's paper
    - render_answer_card(): One recipient's answer card
    - write_exam_files(): papers.txt and answers.txt for a batch

Used By:
    - builder.controller: generate_exams()
    - qbank_toolkit.cli: preview command
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence

from qbank_toolkit.core.models import Category
from qbank_toolkit.builder.resolving import RecipientBank

from .answer_key import bank_answer_keys

logger = logging.getLogger(__name__)

PAPERS_FILE = "papers.txt"
ANSWERS_FILE = "answers.txt"

# Separator between recipients in combined files
PAGE_BREAK = "\f\n"


def render_question_lines(position: int, label: str, text: str, choices: Sequence[str],
                          category: Category) -> list[str]:
    """Lines for one question: '{n}. [{label}] {text}' then tab-indented choices."""
    lines = [f"{position}. [{label}] {text}"]
    if category is not Category.SHORT_ANSWER:
        lines.extend(f"\t{i}) {choice}" for i, choice in enumerate(choices, 1))
    lines.append("")
    return lines


def render_paper(bank: RecipientBank) -> str:
    """
    Render a recipient's paper.

    Layout:
        Title
        Name: <name>    ID: <id>
        <notice>

        1. [Type A] Question text
            1) choice
            ...
    """
    header = bank.header
    lines = [header.title]
    lines.append(f"{header.name}: {bank.recipient.name}\t{header.id}: {bank.recipient.id}")
    if header.notice:
        lines.append(header.notice)
    lines.append("")

    for position, question in enumerate(bank.questions, 1):
        lines.extend(
            render_question_lines(
                position,
                question.category_label,
                question.text,
                [c.text for c in question.choices],
                question.category,
            )
        )
    return "\n".join(lines)


def render_answer_card(bank: RecipientBank) -> str:
    """Render 'Name: ..\tID: ..' followed by '1. 3\t2. (1, 4)\t...'."""
    header = bank.header
    first = f"{header.name}: {bank.recipient.name}\t{header.id}: {bank.recipient.id}"
    keys = "\t".join(f"{key.position}. {key.format()}" for key in bank_answer_keys(bank))
    return f"{first}\n{keys}\n"


def write_exam_files(
    banks: Iterable[RecipientBank],
    output_dir: Path,
    *,
    include_answer_key: bool = True,
) -> tuple[Path, Optional[Path]]:
    """
    Write every paper to papers.txt and, optionally, every answer card to
    answers.txt, one recipient per page.

    Returns:
        (papers path, answers path or None)
    """
    banks = list(banks)
    output_dir.mkdir(parents=True, exist_ok=True)

    papers_path = output_dir / PAPERS_FILE
    papers_path.write_text(PAGE_BREAK.join(render_paper(b) for b in banks), encoding="utf-8")
    logger.info(f"Wrote {len(banks)} papers to {papers_path}")

    answers_path = None
    if include_answer_key:
        answers_path = output_dir / ANSWERS_FILE
        answers_path.write_text("\n".join(render_answer_card(b) for b in banks), encoding="utf-8")
        logger.info(f"Wrote {len(banks)} answer cards to {answers_path}")

    return papers_path, answers_path
