import asyncio
import logging
from typing import Optional, Sequence

from snapquiz.candidates import DEFAULT_MODELS
from snapquiz.config import TIME_LIMIT_SECONDS
from snapquiz.errors import AllModelsFailed, InvalidInput, MalformedResponse
from snapquiz.models import DiagnosticsReport, GeneratedQuiz, GenerationAttempt
from snapquiz.prompts import build_quiz_prompt
from snapquiz.sanitizer import sanitize_response
from snapquiz.validator import validate_quiz

logger = logging.getLogger(__name__)

PING_PROMPT = "ping"


class QuizEngine:
    """
    Generates a quiz by trying each candidate model in order.

    ``llm_model`` is any object with ``async complete(model_name, prompt) -> str``.
    Models are tried one at a time, once each; the first reply that survives
    sanitizing and validation wins.
    """

    def __init__(self, llm_model, candidates: Sequence[str] = DEFAULT_MODELS,
                 timeout: Optional[float] = None, time_limit: int = TIME_LIMIT_SECONDS):
        if not candidates:
            raise ValueError("at least one candidate model is required")
        self.llm = llm_model
        self.candidates = list(candidates)
        self.timeout = timeout
        self.time_limit = time_limit

    async def _complete(self, model_name: str, prompt: str) -> str:
        call = self.llm.complete(model_name, prompt)
        if self.timeout is None:
            return await call
        return await asyncio.wait_for(call, timeout=self.timeout)

    def _error_message(self, exc: Exception) -> str:
        if isinstance(exc, asyncio.TimeoutError) and not str(exc):
            return f"Timed out after {self.timeout}s"
        return str(exc) or type(exc).__name__

    async def generate_quiz(self, source_text: str) -> GeneratedQuiz:
        if not source_text or not source_text.strip():
            raise InvalidInput("Missing 'text' in request body")

        prompt = build_quiz_prompt(source_text)
        attempts = []

        for model_name in self.candidates:
            try:
                response = await self._complete(model_name, prompt)
            except Exception as e:
                error_msg = self._error_message(e)
                logger.warning("%s failed: %s", model_name, error_msg)
                attempts.append(GenerationAttempt(model=model_name, ok=False, error=error_msg))
                continue

            try:
                quiz = validate_quiz(sanitize_response(response))
            except MalformedResponse as e:
                logger.warning("%s returned an unusable quiz: %s | raw: %s",
                               model_name, e, response[:200])
                attempts.append(GenerationAttempt(model=model_name, ok=False, error=str(e)))
                continue

            attempts.append(GenerationAttempt(model=model_name, ok=True))
            logger.info("Generated %d questions with %s (attempt %d/%d)",
                        quiz.total_questions, model_name, len(attempts), len(self.candidates))
            return GeneratedQuiz(quiz=quiz, model_used=model_name,
                                 time_limit_seconds=self.time_limit)

        logger.error("All %d candidate models failed: %s", len(attempts),
                     ", ".join(a.model for a in attempts))
        raise AllModelsFailed(attempts)

    async def ping(self) -> DiagnosticsReport:
        """Find the first candidate model that answers a trivial prompt."""
        tried = []
        for model_name in self.candidates:
            try:
                await self._complete(model_name, PING_PROMPT)
            except Exception as e:
                tried.append(GenerationAttempt(model=model_name, ok=False,
                                               error=self._error_message(e)))
                continue
            tried.append(GenerationAttempt(model=model_name, ok=True))
            logger.info("Diagnostics: %s is responding", model_name)
            return DiagnosticsReport(ok=True, working_model=model_name, tried=tried)

        logger.error("Diagnostics: no candidate model responded")
        return DiagnosticsReport(ok=False, tried=tried)
