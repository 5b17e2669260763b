"""Exceptions raised while generating and taking a quiz."""


class QuizGenerationError(Exception):
    """Base class for every quiz generation failure."""


class InvalidInput(QuizGenerationError):
    """The caller supplied blank or missing source text."""


class ConfigurationError(QuizGenerationError):
    """The server is missing settings it needs (e.g. an API key)."""


class ServiceUnavailable(QuizGenerationError):
    """The completion service rejected or failed a request for one model."""

    def __init__(self, message, model=None):
        super().__init__(message)
        self.model = model


class MalformedResponse(QuizGenerationError):
    """The model answered, but not with anything usable."""


class QuizValidationError(MalformedResponse):
    """The payload is not valid JSON or does not match the quiz schema."""


class AllModelsFailed(QuizGenerationError):
    """Every candidate model was tried and none produced a valid quiz."""

    def __init__(self, attempts, message=None):
        self.attempts = list(attempts)
        super().__init__(
            message
            or f"All {len(self.attempts)} Gemini models failed. "
            "Check model availability/region and billing."
        )

    @property
    def last_error(self):
        for attempt in reversed(self.attempts):
            if attempt.error:
                return attempt.error
        return None


class QuizSessionError(Exception):
    """A quiz session was used in a way its state does not allow."""
