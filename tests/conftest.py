import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import qbank_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from qbank_toolkit.core.models import (  # noqa: E402
    Category,
    PoolHeader,
    QuestionPool,
    QuestionRecord,
    Recipient,
)


def make_record(qid, group, category=Category.SINGLE, correct=(1,), n_choices=4, text=None):
    """Build a record with `n_choices` choices, marking `correct` (1-based) as answers."""
    choices = tuple((f"Q{qid} choice {i}", i in correct) for i in range(1, n_choices + 1))
    return QuestionRecord(
        id=qid,
        group=group,
        category=category,
        text=text or f"Question {qid}",
        choices=choices,
    )


# Common test fixtures
@pytest.fixture
def grouped_records():
    """Ids 1..5 with groups [1, 1, 2, 3, 4]: ids 1 and 2 are variants."""
    return [
        make_record(1, 1, correct=(3,)),
        make_record(2, 1, correct=(1,)),
        make_record(3, 2, category=Category.DOUBLE, correct=(1, 4)),
        make_record(4, 3, correct=(2,), n_choices=5),
        QuestionRecord(5, 4, Category.SHORT_ANSWER, "Capital of France?", (("Paris", True),)),
    ]


@pytest.fixture
def grouped_pool(grouped_records):
    return QuestionPool(tuple(grouped_records), PoolHeader.default())


@pytest.fixture
def roster():
    return [
        Recipient("Ada Lovelace", "2024-001"),
        Recipient("Alan Turing", "2024-002"),
        Recipient("Grace Hopper", "2024-003"),
    ]


@pytest.fixture
def record_factory():
    """Factory building records, see make_record()."""
    return make_record
