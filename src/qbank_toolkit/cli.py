"""
Command line entry point.

    qbank-toolkit generate POOL_DIR --count 25 [--start 1] [--end 51] [--seed 7]
    qbank-toolkit preview POOL_DIR --count 5
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from qbank_toolkit import __version__
from qbank_toolkit.builder import (
    BuilderConfig,
    DanglingReferenceError,
    ExamBatchGenerator,
    RepositoryError,
    SelectionError,
    generate_exams,
)
from qbank_toolkit.builder.loading import DirectoryRepository
from qbank_toolkit.core.models import Category
from qbank_toolkit.core.utils.shuffling import ShuffleMethod

logger = logging.getLogger(__name__)


def _add_selection_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("pool_dir", type=Path, help="Directory holding questions.jsonl")
    parser.add_argument("--count", "-k", type=int, required=True, help="Questions per exam")
    parser.add_argument("--start", type=int, default=1, help="First question id (default: 1)")
    parser.add_argument("--end", type=int, default=None, help="Last question id (default: largest id)")
    parser.add_argument("--seed", type=int, default=None, help="Base seed for reproducible exams")
    parser.add_argument(
        "--method",
        choices=[m.value for m in ShuffleMethod],
        default=ShuffleMethod.UNIFORM.value,
        help="Permutation algorithm (default: uniform)",
    )
    parser.add_argument("--strict", action="store_true", help="Full JSON Schema validation of pool files")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qbank-toolkit",
        description="Build randomized multiple-choice exams from a grouped question pool",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Write papers.txt and answers.txt")
    _add_selection_arguments(generate)
    generate.add_argument("--one-set", action="store_true", help="Ignore the roster, build one anonymous exam")
    generate.add_argument("--output", "-o", type=Path, default=None, help="Output directory (default: POOL_DIR/output)")
    generate.add_argument("--no-answers", action="store_true", help="Skip answers.txt")

    preview = subparsers.add_parser("preview", help="Print one anonymous exam question by question")
    _add_selection_arguments(preview)
    preview.add_argument("--show-answers", action="store_true", help="Mark correct choices")
    return parser


def _builder_config(args: argparse.Namespace) -> BuilderConfig:
    return BuilderConfig(
        pool_dir=args.pool_dir,
        count=args.count,
        start=args.start,
        end=args.end,
        seed=args.seed,
        shuffle_method=ShuffleMethod(args.method),
        output_dir=getattr(args, "output", None),
        include_answer_key=not getattr(args, "no_answers", False),
        one_set=getattr(args, "one_set", True),
        strict=args.strict,
    )


def _run_generate(config: BuilderConfig) -> None:
    result = generate_exams(config)
    logger.info(f"Wrote {len(result.banks)} exams to {result.papers_path}")
    if result.answers_path is not None:
        logger.info(f"Wrote answer cards to {result.answers_path}")


def _run_preview(config: BuilderConfig, show_answers: bool) -> None:
    pool = DirectoryRepository(config.pool_dir, strict=config.strict).read_pool()
    generator = ExamBatchGenerator.one_set(pool, config.selection_config(pool.max_id))
    print(pool.header.title)
    print()
    while True:
        presented = generator.next()
        if presented is None:
            break
        print(f"{presented.position}. [{presented.category_label}] {presented.text}")
        if presented.category is not Category.SHORT_ANSWER:
            for i, choice in enumerate(presented.choices, 1):
                mark = " *" if show_answers and choice.is_correct else ""
                print(f"\t{i}) {choice.text}{mark}")
        elif show_answers:
            print(f"\tAnswer: {presented.choices[0].text}")
        print()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        config = _builder_config(args)
    except ValueError as e:
        parser.error(str(e))

    try:
        if args.command == "generate":
            _run_generate(config)
        else:
            _run_preview(config, args.show_answers)
    except (SelectionError, RepositoryError, DanglingReferenceError) as e:
        logger.error(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
