"""
Tests for batch generation and the file pipeline.
"""

import logging

import pytest

from qbank_toolkit.builder import (
    BuilderConfig,
    ExamBatchGenerator,
    InsufficientGroupsError,
    InvalidRangeError,
    RepositoryError,
    SelectionConfig,
    build_batch,
    build_one,
    generate_exams,
    resolve_recipient_bank,
)
from qbank_toolkit.builder.loading import DirectoryRepository
from qbank_toolkit.core.models import QuestionPool, Recipient


class TestBuildBatch:
    """Tests for build_one() and build_batch()."""

    def test_build_one_when_called_then_anonymous_set(self, grouped_pool):
        qset = build_one(grouped_pool, SelectionConfig(1, 5, 4, seed=1))

        assert qset.recipient.is_anonymous
        assert len(qset) == 4

    def test_build_batch_when_roster_then_one_set_per_recipient(self, grouped_pool, roster):
        # Act
        batch = build_batch(grouped_pool, SelectionConfig(1, 5, 3, seed=5), roster)

        # Assert
        assert len(batch) == 3
        assert [s.recipient for s in batch.sets] == roster
        for qset in batch.sets:
            groups = {grouped_pool.get(i).group for i in qset.question_ids}
            assert len(groups) == 3

    def test_build_batch_when_same_seed_then_reproducible(self, grouped_pool, roster):
        config = SelectionConfig(1, 5, 4, seed=123)

        first = build_batch(grouped_pool, config, roster)
        second = build_batch(grouped_pool, config, roster)

        assert [s.questions for s in first.sets] == [s.questions for s in second.sets]

    def test_build_batch_when_insufficient_groups_then_no_partial_batch(self, grouped_pool, roster):
        with pytest.raises(InsufficientGroupsError):
            build_batch(grouped_pool, SelectionConfig(1, 5, 5), roster)

    def test_build_batch_when_bad_range_then_raises_invalid_range(self, grouped_pool, roster):
        with pytest.raises(InvalidRangeError):
            build_batch(grouped_pool, SelectionConfig(0, 5, 2), roster)

    def test_build_batch_when_empty_roster_then_warns(self, grouped_pool, caplog):
        with caplog.at_level(logging.WARNING):
            batch = build_batch(grouped_pool, SelectionConfig(1, 5, 2), [])

        assert len(batch) == 0
        assert "Roster is empty" in caplog.text

    def test_build_batch_when_reorder_disabled_then_draw_order_kept(self, grouped_pool):
        """Without reordering the set keeps selection order, which is still valid."""
        config = SelectionConfig(1, 5, 4, seed=8, reorder=False)

        qset = build_one(grouped_pool, config)

        assert len(set(qset.question_ids)) == 4

    def test_get_set_when_out_of_range_then_none(self, grouped_pool, roster):
        batch = build_batch(grouped_pool, SelectionConfig(1, 5, 2, seed=1), roster)

        assert batch.get_set(3) is None
        assert batch.get_set(-1) is None


class TestResolveRecipientBank:
    """Tests for resolve_recipient_bank()."""

    def test_resolve_when_valid_index_then_bank_for_recipient(self, grouped_pool, roster):
        batch = build_batch(grouped_pool, SelectionConfig(1, 5, 4, seed=2), roster)

        bank = resolve_recipient_bank(grouped_pool, batch, 1)

        assert bank.recipient == roster[1]
        assert [q.question_id for q in bank.questions] == list(batch.sets[1].question_ids)

    def test_resolve_when_bad_index_then_raises_index_error(self, grouped_pool, roster):
        batch = build_batch(grouped_pool, SelectionConfig(1, 5, 4, seed=2), roster)

        with pytest.raises(IndexError):
            resolve_recipient_bank(grouped_pool, batch, 5)


class TestExamBatchGenerator:
    """Tests for ExamBatchGenerator."""

    def test_next_when_one_set_then_steps_to_none(self, grouped_pool):
        generator = ExamBatchGenerator.one_set(grouped_pool, SelectionConfig(1, 5, 2, seed=4))

        positions = [generator.next().position, generator.next().position]

        assert positions == [1, 2]
        assert generator.next() is None

    def test_start_session_when_other_recipient_then_steps_that_set(self, grouped_pool, roster):
        generator = ExamBatchGenerator.for_roster(grouped_pool, SelectionConfig(1, 5, 3, seed=4), roster)

        session = generator.start_session(2)

        assert session.question_set is generator.get_set(2)

    def test_start_session_when_bad_index_then_raises_index_error(self, grouped_pool):
        generator = ExamBatchGenerator.one_set(grouped_pool, SelectionConfig(1, 5, 2))

        with pytest.raises(IndexError):
            generator.start_session(1)

    def test_resolve_all_when_roster_then_bank_per_recipient(self, grouped_pool, roster):
        generator = ExamBatchGenerator.for_roster(grouped_pool, SelectionConfig(1, 5, 3), roster)

        banks = generator.resolve_all()

        assert [b.recipient for b in banks] == roster
        assert generator.resolve_recipient_bank(0) == banks[0]

    def test_resolve_when_pool_changed_then_only_that_lookup_fails(self, grouped_pool, roster):
        """A stale set fails resolution; the batch itself stays usable."""
        from qbank_toolkit.builder import DanglingReferenceError

        generator = ExamBatchGenerator.for_roster(grouped_pool, SelectionConfig(3, 5, 3, seed=1), roster)
        generator.pool = QuestionPool(tuple(r for r in grouped_pool if r.id != 4))

        with pytest.raises(DanglingReferenceError):
            generator.resolve_recipient_bank(0)
        assert len(generator.batch) == 3


class TestGenerateExams:
    """Tests for generate_exams()."""

    @pytest.fixture
    def pool_dir(self, tmp_path, grouped_pool, roster):
        repo = DirectoryRepository(tmp_path / "pool")
        repo.write_pool(grouped_pool)
        repo.write_roster(roster)
        return repo.root

    def test_generate_when_roster_then_writes_paper_per_recipient(self, pool_dir, roster):
        # Act
        result = generate_exams(BuilderConfig(pool_dir=pool_dir, count=4, seed=10))

        # Assert
        papers = result.papers_path.read_text(encoding="utf-8")
        assert result.papers_path == pool_dir / "output" / "papers.txt"
        assert len(result.banks) == 3
        for recipient in roster:
            assert recipient.name in papers
        assert result.answers_path.exists()

    def test_generate_when_one_set_then_single_anonymous_paper(self, pool_dir, tmp_path):
        result = generate_exams(
            BuilderConfig(pool_dir=pool_dir, count=2, one_set=True, output_dir=tmp_path / "out")
        )

        assert len(result.banks) == 1
        assert result.banks[0].recipient.is_anonymous

    def test_generate_when_no_answers_then_skips_answer_file(self, pool_dir):
        result = generate_exams(BuilderConfig(pool_dir=pool_dir, count=2, include_answer_key=False))

        assert result.answers_path is None
        assert not (pool_dir / "output" / "answers.txt").exists()

    def test_generate_when_end_omitted_then_uses_max_id(self, pool_dir):
        result = generate_exams(BuilderConfig(pool_dir=pool_dir, count=4, seed=3))

        assert result.batch.config.end == 5

    def test_generate_when_missing_pool_then_raises_repository_error(self, tmp_path):
        with pytest.raises(RepositoryError):
            generate_exams(BuilderConfig(pool_dir=tmp_path / "empty", count=1))


class TestBuilderConfig:
    """Tests for BuilderConfig."""

    def test_init_when_zero_count_then_raises_error(self, tmp_path):
        with pytest.raises(ValueError, match="count must be positive"):
            BuilderConfig(pool_dir=tmp_path, count=0)

    def test_resolved_output_dir_when_unset_then_under_pool(self, tmp_path):
        assert BuilderConfig(pool_dir=str(tmp_path), count=1).resolved_output_dir == tmp_path / "output"

    def test_selection_config_when_end_given_then_kept(self, tmp_path):
        config = BuilderConfig(pool_dir=tmp_path, count=2, start=2, end=4, seed=9)

        selection = config.selection_config(max_id=50)

        assert (selection.start, selection.end, selection.count, selection.seed) == (2, 4, 2, 9)


def test_recipient_order_when_batch_built_then_matches_roster(grouped_pool):
    roster = [Recipient(f"Student {i}", str(i)) for i in range(10)]

    batch = build_batch(grouped_pool, SelectionConfig(1, 5, 1, seed=0), roster)

    assert [s.recipient.id for s in batch.sets] == [str(i) for i in range(10)]


def test_build_question_set_when_selector_repeats_group_then_raises(grouped_pool, monkeypatch):
    """Ids 1 and 2 share group 1 and must never land on one exam."""
    from qbank_toolkit.builder import SelectionError, build_question_set
    from qbank_toolkit.builder import controller
    from qbank_toolkit.core.models import ShuffledQuestion

    def repeating_select(index, count, *, rng=None, method=None):
        return (ShuffledQuestion(1, (1, 2, 3, 4)), ShuffledQuestion(2, (1, 2, 3, 4)))

    monkeypatch.setattr(controller, "select_questions", repeating_select)

    with pytest.raises(SelectionError, match="repeats a group"):
        build_question_set(grouped_pool, SelectionConfig(1, 5, 2), Recipient.anonymous())
