"""
Unit tests for snapquiz/prompts.py
Tests: determinism, embedded source text, output contract, blank input
"""

import pytest

from snapquiz.errors import InvalidInput
from snapquiz.prompts import build_quiz_prompt

SOURCE = "Photosynthesis converts light energy into chemical energy stored in glucose."


class TestBuildQuizPrompt:

    def test_deterministic(self):
        assert build_quiz_prompt(SOURCE) == build_quiz_prompt(SOURCE)

    def test_embeds_source_verbatim(self):
        text = "Line one.\n  Indented {braces} and \"quotes\"."
        assert text in build_quiz_prompt(text)

    def test_different_text_different_prompt(self):
        assert build_quiz_prompt(SOURCE) != build_quiz_prompt(SOURCE + " Chlorophyll is green.")

    def test_requests_three_to_eight_questions(self):
        assert "3 to 8" in build_quiz_prompt(SOURCE)

    def test_describes_output_keys(self):
        prompt = build_quiz_prompt(SOURCE)
        for key in ('"questions"', '"id"', '"question"', '"options"', '"correctAnswer"', '"explanation"'):
            assert key in prompt

    def test_forbids_prose_and_fences(self):
        prompt = build_quiz_prompt(SOURCE)
        assert "ONLY" in prompt
        assert "code fences" in prompt

    def test_asks_for_distributed_answers(self):
        assert "distributed (0, 1, 2, 3)" in build_quiz_prompt(SOURCE)

    @pytest.mark.parametrize("blank", ["", "   ", "\n\t"])
    def test_blank_text_rejected(self, blank):
        with pytest.raises(InvalidInput):
            build_quiz_prompt(blank)
