"""
Shared pytest fixtures for the SnapQuiz test suite.
No network, Gemini key or tesseract binary required.
"""

import json
import os

import pytest

os.environ.setdefault("LOG_LEVEL", "WARNING")


def make_question(qid, correct=0, **overrides):
    data = {
        "id": qid,
        "question": f"Question {qid}?",
        "options": [f"Option {qid}-{c}" for c in "ABCD"],
        "correctAnswer": correct,
        "explanation": f"Because of reason {qid}.",
    }
    data.update(overrides)
    return data


def make_quiz_json(count=3, **overrides):
    return json.dumps({"questions": [make_question(i + 1, correct=i % 4, **overrides) for i in range(count)]})


class FakeLLM:
    """
    Completion service stub.

    ``replies`` maps a model name to either a reply string or an exception
    instance to raise. Unknown models raise a "model not found" error.
    """

    def __init__(self, replies=None):
        self.replies = dict(replies or {})
        self.calls = []

    async def complete(self, model_name, prompt):
        self.calls.append((model_name, prompt))
        reply = self.replies.get(model_name, RuntimeError(f"404 models/{model_name} is not found"))
        if isinstance(reply, BaseException):
            raise reply
        return reply


@pytest.fixture
def quiz_json():
    return make_quiz_json(3)


@pytest.fixture
def fake_llm():
    return FakeLLM()
