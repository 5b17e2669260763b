"""Gemini completion service used by the quiz engine."""

import asyncio
import logging

import google.generativeai as genai

from snapquiz.errors import ConfigurationError, ServiceUnavailable

logger = logging.getLogger(__name__)

_QUOTA_MARKERS = ("429", "quota", "Resource has been exhausted")
_SERVER_MARKERS = ("500", "503", "504", "internal server error")


def classify_error(error_msg: str) -> str:
    """Short label for log lines: QUOTA, SERVER ERR or ERROR."""
    if any(x in error_msg for x in _QUOTA_MARKERS):
        return "QUOTA"
    if any(x in error_msg for x in _SERVER_MARKERS):
        return "SERVER ERR"
    return "ERROR"


class GeminiClient:
    """Sends a prompt to a named Gemini model and returns the reply text."""

    def __init__(self, api_key, generation_config=None):
        if not api_key:
            raise ConfigurationError("Server misconfiguration: GEMINI_API_KEY not set")
        genai.configure(api_key=api_key)
        self.generation_config = generation_config

    async def complete(self, model_name: str, prompt: str) -> str:
        try:
            model = genai.GenerativeModel(model_name, generation_config=self.generation_config)
            # sync SDK call in a worker thread; the grpc aio client is tied to one event loop
            result = await asyncio.to_thread(model.generate_content, prompt)
            # .text raises ValueError when the reply was blocked or empty
            return result.text.strip()
        except Exception as e:
            error_msg = str(e) or type(e).__name__
            logger.warning("%s %s: %s", model_name, classify_error(error_msg), error_msg[:100])
            raise ServiceUnavailable(error_msg, model=model_name) from e
