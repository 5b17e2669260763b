"""Question-by-question quiz taking: navigation, answers, timer and score."""

import math
import time
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel

from snapquiz.config import TIME_LIMIT_SECONDS
from snapquiz.errors import QuizSessionError
from snapquiz.models import Question, Quiz


def percent(correct: int, total: int) -> int:
    """Rounded percentage; .5 rounds up."""
    if total <= 0:
        return 0
    return int(correct * 100 / total + 0.5)


class QuestionReview(BaseModel):
    question: Question
    chosen: Optional[int] = None

    @property
    def is_correct(self) -> bool:
        return self.chosen == self.question.correct_answer


class QuizResult(BaseModel):
    score: int
    correct: int
    total: int
    reviews: List[QuestionReview]

    def to_markdown(self) -> str:
        lines = ["# Quiz Results", "", f"Score: **{self.score}%** ({self.correct} of {self.total} correct)", ""]
        for n, review in enumerate(self.reviews, start=1):
            q = review.question
            lines.append(f"## Q{n}: {q.question}")
            for i, opt in enumerate(q.options):
                marks = []
                if i == q.correct_answer:
                    marks.append("correct")
                if i == review.chosen:
                    marks.append("your answer")
                suffix = f" _({', '.join(marks)})_" if marks else ""
                lines.append(f"- {chr(65 + i)}. {opt}{suffix}")
            if review.chosen is None:
                lines.append("- _Not answered_")
            if q.explanation:
                lines.append("")
                lines.append(f"> {q.explanation}")
            lines.append("")
        return "\n".join(lines)


class QuizSession:
    """
    Mutable state for one person taking one quiz.

    Answers are stored per question id; the quiz itself is never touched.
    """

    def __init__(self, quiz: Quiz, time_limit: int = TIME_LIMIT_SECONDS,
                 clock: Callable[[], float] = time.monotonic):
        self.quiz = quiz
        self.time_limit = time_limit
        self._clock = clock
        self.restart()

    def restart(self):
        self.current_index = 0
        self.answers: Dict[int, int] = {}
        self.started_at = self._clock()
        self._result: Optional[QuizResult] = None

    # ── navigation ──────────────────────────────────────────

    @property
    def total(self) -> int:
        return self.quiz.total_questions

    @property
    def current_question(self) -> Question:
        return self.quiz.questions[self.current_index]

    @property
    def is_first(self) -> bool:
        return self.current_index == 0

    @property
    def is_last(self) -> bool:
        return self.current_index == self.total - 1

    def go_to(self, index: int) -> Question:
        self.current_index = max(0, min(index, self.total - 1))
        return self.current_question

    def next(self) -> bool:
        """Move forward; False when already on the last question."""
        if self.is_last:
            return False
        self.current_index += 1
        return True

    def previous(self) -> bool:
        if self.is_first:
            return False
        self.current_index -= 1
        return True

    # ── answers ─────────────────────────────────────────────

    def _question_at(self, index: Optional[int]) -> Question:
        if index is None:
            return self.current_question
        if not 0 <= index < self.total:
            raise QuizSessionError(f"question index {index} out of range")
        return self.quiz.questions[index]

    def select_answer(self, option_index: int, index: Optional[int] = None):
        if self.is_finished:
            raise QuizSessionError("quiz already finished")
        question = self._question_at(index)
        if not 0 <= option_index < len(question.options):
            raise QuizSessionError(f"option {option_index} out of range")
        self.answers[question.id] = option_index

    def answer_for(self, index: Optional[int] = None) -> Optional[int]:
        return self.answers.get(self._question_at(index).id)

    @property
    def answered_count(self) -> int:
        return len(self.answers)

    @property
    def correct_count(self) -> int:
        return sum(1 for q in self.quiz.questions if self.answers.get(q.id) == q.correct_answer)

    @property
    def score_percent(self) -> int:
        return percent(self.correct_count, self.total)

    # ── timer ───────────────────────────────────────────────

    def time_remaining(self) -> int:
        elapsed = self._clock() - self.started_at
        return max(0, math.ceil(self.time_limit - elapsed))

    @property
    def is_expired(self) -> bool:
        return self.time_remaining() <= 0

    # ── results ─────────────────────────────────────────────

    @property
    def is_finished(self) -> bool:
        return self._result is not None

    def finish(self) -> QuizResult:
        if self._result is None:
            reviews = [QuestionReview(question=q, chosen=self.answers.get(q.id))
                       for q in self.quiz.questions]
            self._result = QuizResult(score=self.score_percent, correct=self.correct_count,
                                      total=self.total, reviews=reviews)
        return self._result
