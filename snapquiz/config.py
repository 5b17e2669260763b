import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from snapquiz.candidates import resolve_candidates

# Load environment variables from .env file, if present
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")

# Fixed quiz length sent to clients as timeLimit
TIME_LIMIT_SECONDS = 300


def _first(*keys: str) -> Optional[str]:
    """
    Return the value of the first environment variable found in keys.
    """
    for key in keys:
        val = os.getenv(key)
        if val:
            return val
    return None


def _timeout(raw: Optional[str], default: float = 60.0) -> Optional[float]:
    if raw is None or not raw.strip():
        return default
    value = float(raw)
    # 0 turns the per-model timeout off
    return value if value > 0 else None


class Settings(BaseModel):
    gemini_api_key: Optional[str] = _first("GEMINI_API_KEY", "NEXT_PUBLIC_GEMINI_API_KEY")
    gemini_model: Optional[str] = os.getenv("GEMINI_MODEL")
    candidate_timeout: Optional[float] = _timeout(os.getenv("CANDIDATE_TIMEOUT_SECONDS"))
    ocr_lang: str = os.getenv("OCR_LANG", "eng")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def candidates(self) -> List[str]:
        return resolve_candidates(self.gemini_model)


# Singleton instance for app-wide settings
settings = Settings()
