"""Parse sanitized model output and check it against the quiz schema."""

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from snapquiz.errors import QuizValidationError
from snapquiz.models import Quiz

logger = logging.getLogger(__name__)

_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


def parse_json_payload(text: str) -> Any:
    """Strict parse, then one retry on the first-{ to last-} substring."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass
    except RecursionError:
        raise QuizValidationError("JSON nested too deeply") from None

    match = _OBJECT_RE.search(text or "")
    if match:
        try:
            return json.loads(match.group(0))
        except json.JSONDecodeError:
            logger.debug("Recovered {...} block is not valid JSON either")
        except RecursionError:
            raise QuizValidationError("JSON nested too deeply") from None

    raise QuizValidationError("no valid JSON found")


def _describe(exc: ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(part) for part in err["loc"])
    return f"invalid question data at {loc}: {err['msg']}" if loc else f"invalid quiz: {err['msg']}"


def validate_quiz(json_string: str) -> Quiz:
    """
    Turn a candidate JSON string into a Quiz.

    Raises QuizValidationError when the text holds no JSON object, when the
    object has no ``questions`` list, or when any question breaks the schema
    (blank text, not exactly 4 distinct options, answer index out of range,
    duplicate ids). One bad question rejects the whole payload.
    """
    data = parse_json_payload(json_string)

    if not isinstance(data, dict) or not isinstance(data.get("questions"), list):
        raise QuizValidationError("unexpected format")

    try:
        quiz = Quiz.model_validate({"questions": data["questions"]})
    except ValidationError as exc:
        raise QuizValidationError(_describe(exc)) from exc

    logger.debug("Validated quiz with %d questions", quiz.total_questions)
    return quiz
