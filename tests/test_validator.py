"""
Unit tests for snapquiz/validator.py
Tests: strict parse, {...} recovery, format checks, strict per-question checks
"""

import json

import pytest

from conftest import make_question, make_quiz_json
from snapquiz.errors import MalformedResponse, QuizValidationError
from snapquiz.models import Quiz
from snapquiz.validator import parse_json_payload, validate_quiz


def _payload(*questions):
    return json.dumps({"questions": list(questions)})


class TestParsing:

    def test_valid_quiz(self, quiz_json):
        quiz = validate_quiz(quiz_json)
        assert isinstance(quiz, Quiz)
        assert quiz.total_questions == 3

    def test_recovers_from_surrounding_prose(self):
        raw = ('Here is your quiz: {"questions":[{"id":1,"question":"Q?",'
               '"options":["A","B","C","D"],"correctAnswer":1}]} Thanks!')
        quiz = validate_quiz(raw)
        assert len(quiz.questions) == 1
        assert quiz.questions[0].correct_answer == 1
        assert quiz.questions[0].explanation is None

    def test_not_json_rejected(self):
        with pytest.raises(QuizValidationError, match="no valid JSON found"):
            validate_quiz("not json at all")

    def test_broken_braces_rejected(self):
        with pytest.raises(QuizValidationError, match="no valid JSON found"):
            validate_quiz('prefix {"questions": [ } suffix')

    def test_validation_error_is_malformed_response(self):
        with pytest.raises(MalformedResponse):
            validate_quiz("")

    def test_parse_json_payload_strict_path(self):
        assert parse_json_payload('{"a": [1, 2]}') == {"a": [1, 2]}

    def test_deeply_nested_json_rejected(self):
        raw = '{"questions": ' + "[" * 100000 + "]" * 100000 + "}"
        with pytest.raises(QuizValidationError, match="nested too deeply"):
            validate_quiz(raw)


class TestFormat:

    def test_missing_questions_key(self):
        with pytest.raises(QuizValidationError, match="unexpected format"):
            validate_quiz('{"items": []}')

    def test_questions_not_a_list(self):
        with pytest.raises(QuizValidationError, match="unexpected format"):
            validate_quiz('{"questions": {"id": 1}}')

    def test_top_level_array_rejected(self):
        with pytest.raises(QuizValidationError, match="unexpected format"):
            validate_quiz(json.dumps([make_question(1)]))

    def test_empty_question_list_rejected(self):
        with pytest.raises(QuizValidationError):
            validate_quiz('{"questions": []}')

    def test_extra_keys_ignored(self):
        data = json.loads(make_quiz_json(2))
        data["title"] = "Bonus"
        data["questions"][0]["difficulty"] = "easy"
        assert validate_quiz(json.dumps(data)).total_questions == 2


class TestStrictQuestions:

    def test_three_options_rejected(self):
        with pytest.raises(QuizValidationError, match="options"):
            validate_quiz(_payload(make_question(1, options=["A", "B", "C"])))

    def test_five_options_rejected(self):
        with pytest.raises(QuizValidationError):
            validate_quiz(_payload(make_question(1, options=["A", "B", "C", "D", "E"])))

    @pytest.mark.parametrize("answer", [-1, 4, 10])
    def test_answer_out_of_range_rejected(self, answer):
        with pytest.raises(QuizValidationError, match="correctAnswer"):
            validate_quiz(_payload(make_question(1, correctAnswer=answer)))

    def test_missing_answer_rejected(self):
        question = make_question(1)
        del question["correctAnswer"]
        with pytest.raises(QuizValidationError):
            validate_quiz(_payload(question))

    def test_blank_question_text_rejected(self):
        with pytest.raises(QuizValidationError, match="question"):
            validate_quiz(_payload(make_question(1, question="   ")))

    def test_duplicate_options_rejected(self):
        with pytest.raises(QuizValidationError, match="distinct"):
            validate_quiz(_payload(make_question(1, options=["Yes", "No", "Yes", "Maybe"])))

    def test_duplicate_ids_rejected(self):
        with pytest.raises(QuizValidationError, match="unique"):
            validate_quiz(_payload(make_question(1), make_question(1)))

    @pytest.mark.parametrize("answer", [True, False, "2", 1.0, None])
    def test_answer_must_be_a_real_integer(self, answer):
        with pytest.raises(QuizValidationError, match="correctAnswer"):
            validate_quiz(_payload(make_question(1, correctAnswer=answer)))

    @pytest.mark.parametrize("qid", [True, "1", 1.0])
    def test_id_must_be_a_real_integer(self, qid):
        with pytest.raises(QuizValidationError, match="id"):
            validate_quiz(_payload(make_question(qid)))

    @pytest.mark.parametrize("ids", [[0, 1], [0, 7], [2, 3], [2, 1], [1, 3]])
    def test_ids_must_run_from_one(self, ids):
        with pytest.raises(QuizValidationError, match="1..n"):
            validate_quiz(_payload(*[make_question(i) for i in ids]))

    def test_sequential_ids_kept(self):
        quiz = validate_quiz(make_quiz_json(4))
        assert [q.id for q in quiz.questions] == [1, 2, 3, 4]

    def test_one_bad_question_rejects_whole_quiz(self):
        good = make_question(1)
        bad = make_question(2, options=["A", "B"])
        with pytest.raises(QuizValidationError):
            validate_quiz(_payload(good, bad))

    def test_every_answer_within_options(self):
        quiz = validate_quiz(make_quiz_json(8))
        assert quiz.total_questions == len(quiz.questions) == 8
        for q in quiz.questions:
            assert 0 <= q.correct_answer < len(q.options)
