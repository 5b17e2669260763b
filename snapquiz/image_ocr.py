import io
import logging
from pathlib import Path
from typing import Callable, Optional

from PIL import Image
import pytesseract

from snapquiz.clean_text import clean_ocr_text

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = [".jpg", ".jpeg", ".png"]


def is_supported_image(filename: str) -> bool:
    return Path(filename or "").suffix.lower() in SUPPORTED_EXTENSIONS


def _open_image(image) -> Image.Image:
    if isinstance(image, Image.Image):
        return image
    if isinstance(image, (bytes, bytearray)):
        return Image.open(io.BytesIO(image))
    # path or file-like object
    return Image.open(image)


def extract_text_from_image(image, lang: str = "eng",
                            progress: Optional[Callable[[int], None]] = None) -> str:
    """
    Extract text from an image using OCR

    ``image`` may be a path, raw bytes, a file-like object or a PIL image.
    ``progress`` receives percentages from 0 to 100 as the work advances.
    """
    def report(pct):
        if progress is not None:
            progress(pct)

    report(0)
    img = _open_image(image)
    report(10)
    # tesseract is happiest with RGB or grayscale input
    if img.mode not in ("RGB", "L"):
        img = img.convert("RGB")
    report(25)
    text = pytesseract.image_to_string(img, lang=lang)
    report(100)
    logger.info("OCR extracted %d characters", len(text))
    return clean_ocr_text(text)
