"""
⚡ SnapQuiz — FastAPI Backend Server
Turns extracted or pasted text into a Gemini-generated multiple-choice quiz.
"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends, FastAPI, File, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from PIL import UnidentifiedImageError
from pydantic import BaseModel
import pytesseract

from snapquiz.config import settings
from snapquiz.errors import AllModelsFailed, ConfigurationError, InvalidInput
from snapquiz.image_ocr import SUPPORTED_EXTENSIONS, extract_text_from_image, is_supported_image
from snapquiz.llm import GeminiClient
from snapquiz.quiz_engine import QuizEngine

# ==================================================
# 1. SETUP & CONFIG
# ==================================================
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("snapquiz.server")


@lru_cache(maxsize=1)
def get_quiz_engine() -> QuizEngine:
    """Build the engine on first use so the app can start without a key."""
    llm = GeminiClient(settings.gemini_api_key)
    engine = QuizEngine(
        llm,
        candidates=settings.candidates,
        timeout=settings.candidate_timeout,
    )
    logger.info("Quiz engine ready with %d candidate model(s): %s",
                len(engine.candidates), ", ".join(engine.candidates))
    return engine


# ==================================================
# 2. FASTAPI APP
# ==================================================
app = FastAPI(title="SnapQuiz", version="1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request, exc: ConfigurationError):
    logger.error("Configuration error: %s", exc)
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request, exc: InvalidInput):
    return JSONResponse(status_code=400, content={"error": str(exc)})


# ==================================================
# 3. PYDANTIC MODELS
# ==================================================
class GenerateRequest(BaseModel):
    text: Optional[str] = None


def source_text(req: GenerateRequest) -> str:
    """Reject blank text before the engine (and its API key) is touched."""
    if not req.text or not req.text.strip():
        raise InvalidInput("Missing 'text' in request body")
    return req.text


# ==================================================
# 4. API ENDPOINTS
# ==================================================
@app.post("/api/generate")
async def api_generate(text: str = Depends(source_text), engine: QuizEngine = Depends(get_quiz_engine)):
    """Generate a multiple-choice quiz from source text."""
    try:
        result = await engine.generate_quiz(text)
    except AllModelsFailed as e:
        return JSONResponse(
            status_code=502,
            content={
                "error": e.last_error or str(e),
                "attempts": [a.model_dump() for a in e.attempts],
            },
        )
    return result.to_payload()


@app.get("/api/diagnostics/gemini")
async def api_diagnostics(engine: QuizEngine = Depends(get_quiz_engine)):
    """Report which candidate model currently answers."""
    report = await engine.ping()
    return JSONResponse(status_code=200 if report.ok else 502, content=report.to_payload())


@app.post("/api/ocr")
async def api_ocr(file: UploadFile = File(...)):
    """Extract text from an uploaded image."""
    if not is_supported_image(file.filename):
        return JSONResponse(
            status_code=400,
            content={"error": f"Unsupported file type. Use one of: {', '.join(SUPPORTED_EXTENSIONS)}"},
        )

    data = await file.read()
    try:
        text = await run_in_threadpool(extract_text_from_image, data, settings.ocr_lang)
    except UnidentifiedImageError:
        return JSONResponse(status_code=400, content={"error": "Could not read the uploaded image"})
    except pytesseract.TesseractNotFoundError:
        logger.error("Tesseract binary not found on PATH")
        return JSONResponse(status_code=500, content={"error": "OCR engine is not installed"})
    except pytesseract.TesseractError as e:
        logger.error("OCR failed for %s: %s", file.filename, e)
        return JSONResponse(status_code=500, content={"error": f"OCR failed: {e}"})

    if not text:
        return JSONResponse(status_code=400, content={"error": "No text found in the image"})
    return {"text": text, "characters": len(text)}


# ==================================================
# 5. RUN SERVER
# ==================================================
if __name__ == "__main__":
    import uvicorn
    print("\n⚡ SnapQuiz server starting...")
    print("🌐 API on http://localhost:8000 (docs at /docs)\n")
    uvicorn.run(app, host="0.0.0.0", port=8000)
