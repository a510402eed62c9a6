"""
Unit tests for payload validation.
"""

import pytest

from qbank_toolkit.core.schemas import (
    POOL_SCHEMA_VERSION,
    ValidationError,
    validate_header,
    validate_question_record,
    validate_recipient,
)


@pytest.fixture
def question_data():
    return {
        "id": 1,
        "group": 1,
        "category": 1,
        "text": "Which port does HTTPS use?",
        "choices": [
            {"text": "80", "is_answer": False},
            {"text": "443", "is_answer": True},
        ],
    }


class TestValidateQuestionRecord:
    """Tests for validate_question_record()."""

    def test_validate_when_valid_then_passes(self, question_data):
        validate_question_record(question_data)
        validate_question_record(question_data, strict=True)

    def test_validate_when_missing_field_then_lists_it(self, question_data):
        del question_data["group"]

        with pytest.raises(ValidationError) as exc:
            validate_question_record(question_data)

        assert "Missing field: group" in exc.value.errors

    @pytest.mark.parametrize("bad_id", [0, -3, "1", True])
    def test_validate_when_bad_id_then_raises_error(self, question_data, bad_id):
        question_data["id"] = bad_id

        with pytest.raises(ValidationError, match="Invalid id"):
            validate_question_record(question_data)

    def test_validate_when_unknown_category_then_raises_error(self, question_data):
        question_data["category"] = 4

        with pytest.raises(ValidationError) as exc:
            validate_question_record(question_data)

        assert exc.value.path == "category"

    def test_validate_when_choice_without_text_then_raises_error(self, question_data):
        question_data["choices"].append({"is_answer": False})

        with pytest.raises(ValidationError, match="Choice 3"):
            validate_question_record(question_data)

    @pytest.mark.parametrize("flag", ["no", "false", 0, 1, None])
    def test_validate_when_flag_not_bool_then_raises_error(self, question_data, flag):
        """A string flag would otherwise be read as a correct choice."""
        question_data["choices"][0]["is_answer"] = flag

        with pytest.raises(ValidationError, match="is_answer must be true or false") as exc:
            validate_question_record(question_data)

        assert exc.value.path == "choices/0/is_answer"

    def test_validate_when_flag_omitted_then_passes(self, question_data):
        del question_data["choices"][0]["is_answer"]

        validate_question_record(question_data)

    @pytest.mark.parametrize("group", [[1], {"g": 1}, True, 1.5, None])
    def test_validate_when_group_not_int_or_str_then_raises_error(self, question_data, group):
        question_data["group"] = group

        with pytest.raises(ValidationError, match="Invalid group") as exc:
            validate_question_record(question_data)

        assert exc.value.path == "group"

    @pytest.mark.parametrize("group", [7, "networks"])
    def test_validate_when_group_int_or_str_then_passes(self, question_data, group):
        question_data["group"] = group

        validate_question_record(question_data)
        validate_question_record(question_data, strict=True)

    @pytest.mark.parametrize("category", [True, 1.0, "1"])
    def test_validate_when_category_not_int_then_raises_error(self, question_data, category):
        question_data["category"] = category

        with pytest.raises(ValidationError, match="Invalid category"):
            validate_question_record(question_data)

    def test_validate_when_text_not_string_then_raises_error(self, question_data):
        question_data["text"] = 12

        with pytest.raises(ValidationError, match="text must be a string"):
            validate_question_record(question_data)

    def test_validate_when_choice_text_not_string_then_raises_error(self, question_data):
        question_data["choices"][1]["text"] = 443

        with pytest.raises(ValidationError, match="Choice 2"):
            validate_question_record(question_data)


class TestValidateHeader:
    """Tests for validate_header()."""

    def test_validate_when_unknown_version_then_raises_error(self):
        with pytest.raises(ValidationError, match="Unsupported pool schema version"):
            validate_header({"schema_version": POOL_SCHEMA_VERSION + 1})

    def test_validate_when_categories_not_list_then_raises_error(self):
        with pytest.raises(ValidationError, match="categories must be a list"):
            validate_header({"categories": "Type A"})

    def test_validate_when_strict_and_wrong_title_type_then_raises_error(self):
        with pytest.raises(ValidationError):
            validate_header({"title": 5}, strict=True)


class TestValidateRecipient:
    """Tests for validate_recipient()."""

    def test_validate_when_not_object_then_raises_error(self):
        with pytest.raises(ValidationError, match="must be an object"):
            validate_recipient(["Ada", "1"])

    def test_validate_when_numeric_id_and_strict_then_passes(self):
        validate_recipient({"name": "Ada", "id": 7}, strict=True)
