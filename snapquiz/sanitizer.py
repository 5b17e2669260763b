import re

# ```json / ``` fences, with the newline that usually follows them
_CODE_FENCE_RE = re.compile(r"```(?:json)?\n?")


def sanitize_response(raw_text: str) -> str:
    """
    Strip markdown fences and surrounding commentary from a model reply.

    Never fails; the result may still be invalid JSON.
    """
    text = _CODE_FENCE_RE.sub("", raw_text or "")

    start = text.find("{")
    if start > 0:
        text = text[start:]

    end = text.rfind("}")
    if 0 < end < len(text) - 1:
        text = text[:end + 1]

    return text.strip()
