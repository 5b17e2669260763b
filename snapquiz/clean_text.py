import re

# -, *, – and — count as bullets only when followed by whitespace
_BULLET_RE = re.compile(r"^(?:[•·▪●]+\s*|[*\-–—]+(?:\s+|$))")
_SPACES_RE = re.compile(r"[ \t]{2,}")


def clean_ocr_text(text: str) -> str:
    """
    Cleans raw OCR output before it is sent for question generation
    """
    lines = (text or "").splitlines()
    cleaned_lines = []

    for line in lines:
        line = line.strip()

        # Skip empty lines
        if not line:
            continue

        # Normalize bullets
        line = _BULLET_RE.sub("", line).strip()
        if not line:
            continue

        line = _SPACES_RE.sub(" ", line)
        cleaned_lines.append(line)

    return "\n".join(cleaned_lines)


def extracted_text_filename(today) -> str:
    """Download name for extracted text, e.g. extracted-text-2024-05-01.md"""
    return f"extracted-text-{today.isoformat()}.md"
