"""
Tests for the qbank-toolkit command line.
"""

import json

import pytest

from qbank_toolkit.builder.loading import DirectoryRepository
from qbank_toolkit.cli import build_parser, main


@pytest.fixture
def pool_dir(tmp_path, grouped_pool, roster):
    repo = DirectoryRepository(tmp_path / "pool")
    repo.write_pool(grouped_pool)
    repo.write_roster(roster)
    return repo.root


class TestParser:
    """Tests for argument parsing."""

    def test_parse_when_generate_then_defaults(self, tmp_path):
        args = build_parser().parse_args(["generate", str(tmp_path), "--count", "3"])

        assert args.start == 1
        assert args.end is None
        assert args.method == "uniform"
        assert not args.one_set

    def test_parse_when_count_missing_then_exits_with_usage_error(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            build_parser().parse_args(["generate", str(tmp_path)])

        assert exc.value.code == 2

    def test_parse_when_unknown_method_then_exits_with_usage_error(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            build_parser().parse_args(["preview", str(tmp_path), "-k", "1", "--method", "bogo"])

        assert exc.value.code == 2


class TestMain:
    """Tests for main()."""

    def test_generate_when_valid_then_writes_files(self, pool_dir, tmp_path):
        out = tmp_path / "out"

        code = main(["generate", str(pool_dir), "--count", "4", "--seed", "1", "--output", str(out)])

        assert code == 0
        assert (out / "papers.txt").exists()
        assert (out / "answers.txt").exists()

    def test_generate_when_too_many_questions_then_exit_one(self, pool_dir, caplog):
        code = main(["generate", str(pool_dir), "--count", "5"])

        assert code == 1
        assert "only 4 distinct groups" in caplog.text

    def test_generate_when_bad_range_then_exit_one(self, pool_dir):
        assert main(["generate", str(pool_dir), "--count", "1", "--start", "0"]) == 1

    def test_generate_when_missing_pool_then_exit_one(self, tmp_path):
        assert main(["generate", str(tmp_path / "nowhere"), "--count", "1"]) == 1

    def test_generate_when_zero_count_then_usage_error(self, pool_dir):
        with pytest.raises(SystemExit) as exc:
            main(["generate", str(pool_dir), "--count", "0"])

        assert exc.value.code == 2

    def test_preview_when_valid_then_prints_each_question(self, pool_dir, capsys):
        code = main(["preview", str(pool_dir), "--count", "4", "--seed", "2", "--show-answers", "--method", "transposition"])

        out = capsys.readouterr().out
        assert code == 0
        assert out.startswith("Examination")
        for position in range(1, 5):
            assert f"\n{position}. [" in out
        assert "Answer: Paris" in out

    def test_generate_when_unhashable_group_then_exit_one(self, tmp_path, caplog):
        pool = tmp_path / "bad"
        pool.mkdir()
        row = {
            "id": 1,
            "group": [1],
            "category": 1,
            "text": "Q",
            "choices": [{"text": "a", "is_answer": True}],
        }
        (pool / "questions.jsonl").write_text(json.dumps(row) + "\n", encoding="utf-8")

        code = main(["generate", str(pool), "--count", "1", "--one-set"])

        assert code == 1
        assert "Invalid group" in caplog.text
