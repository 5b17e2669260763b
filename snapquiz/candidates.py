"""Ordered list of Gemini models to try for a request."""

from typing import Optional, Sequence, List

# Priority order matters: the first model that answers with a valid quiz wins.
DEFAULT_MODELS = (
    "gemini-2.5-flash",
    "gemini-2.5-pro",
    "gemini-1.5-flash-8b",
    "gemini-2.5-pro-latest",
    "gemini-2.5-flash-latest",
)


def resolve_candidates(override: Optional[str] = None,
                       fallback: Sequence[str] = DEFAULT_MODELS) -> List[str]:
    """
    Return the models to attempt, in order.

    A non-blank override replaces the whole list; otherwise the fallback
    list is returned as declared.
    """
    if override and override.strip():
        return [override.strip()]
    if not fallback:
        raise ValueError("fallback model list must not be empty")
    return list(fallback)
