"""Tesseract OCR for uploaded images and scanned PDF pages."""

import io
import logging
import shutil

logger = logging.getLogger(__name__)

# Tesseract tooling is imported lazily so text-only deployments still work.
try:
    import fitz  # pymupdf
except ImportError:
    fitz = None  # type: ignore[assignment]

try:
    import pytesseract
except ImportError:
    pytesseract = None  # type: ignore[assignment]

try:
    from PIL import Image, ImageFilter
except ImportError:
    Image = None  # type: ignore[assignment]
    ImageFilter = None  # type: ignore[assignment]

POINTS_PER_INCH = 72


def _missing(package: str) -> str:
    return f"{package} is required for OCR but is not installed (pip install {package})."


class OcrEngine:
    """Recognizes text in images with Tesseract.

    Images go through a best-effort pre-processing step (downscale so
    neither side exceeds ``MAX_DIMENSION``, then sharpen) before
    recognition. Scanned PDF pages are rendered with PyMuPDF first.

    Tesseract runs as a separate process per call, so an engine holds
    no state between calls. Create one per file.

    Usage::

        engine = OcrEngine()
        available, _ = engine.check_availability()
        if available:
            text = engine.recognize(engine.preprocess(image_bytes))
    """

    DPI = 300
    LANGUAGE = "eng"
    MAX_DIMENSION = 2000

    def __init__(self, *, dpi: int = DPI, language: str = LANGUAGE):
        self.dpi = dpi
        self.language = language

    def check_availability(self) -> tuple[bool, str]:
        """Report whether images can be recognized on this host.

        Returns ``(available, reason)``; *reason* is empty when available.
        """
        if pytesseract is None:
            return False, _missing("pytesseract")
        if Image is None:
            return False, _missing("Pillow")
        if shutil.which("tesseract"):
            return True, ""
        try:
            pytesseract.get_tesseract_version()
        except Exception:
            return False, "The tesseract binary is not installed or not on PATH."
        return True, ""

    def preprocess(self, data: bytes) -> bytes:
        """Downscale and sharpen an image for OCR.

        Never raises: on any failure the original bytes are returned
        unchanged and the problem is logged.
        """
        if Image is None:
            logger.warning("Pillow not installed; skipping image pre-processing")
            return data
        try:
            image = Image.open(io.BytesIO(data))
            if image.mode not in ("L", "RGB"):
                image = image.convert("RGB")
            # thumbnail() keeps aspect ratio and never enlarges
            image.thumbnail((self.MAX_DIMENSION, self.MAX_DIMENSION))
            image = image.filter(ImageFilter.SHARPEN)
            output = io.BytesIO()
            image.save(output, format="PNG")
            return output.getvalue()
        except Exception as e:
            logger.warning("Image optimization failed, using original: %s", e)
            return data

    def recognize(self, data: bytes) -> str:
        """Run Tesseract over encoded image bytes and return the text.

        Raises:
            RuntimeError: OCR dependencies are missing.
            Exception: whatever Pillow or Tesseract raise on bad input.
        """
        if pytesseract is None or Image is None:
            _, reason = self.check_availability()
            raise RuntimeError(reason)
        image = Image.open(io.BytesIO(data))
        text = pytesseract.image_to_string(image, lang=self.language)
        logger.debug("OCR recognized %d chars", len(text))
        return text

    def ocr_pdf_pages(self, data: bytes, page_numbers: list[int]) -> dict[int, str]:
        """Render the given 1-based pages of a PDF and recognize each one.

        Returns a ``{page_number: text}`` mapping with surrounding
        whitespace stripped.
        """
        if fitz is None:
            raise RuntimeError(_missing("pymupdf"))
        scale = self.dpi / POINTS_PER_INCH
        texts: dict[int, str] = {}
        pdf = fitz.open(stream=data, filetype="pdf")
        try:
            for number in page_numbers:
                rendered = pdf[number - 1].get_pixmap(matrix=fitz.Matrix(scale, scale))
                texts[number] = self.recognize(rendered.tobytes("png")).strip()
                logger.debug("Scanned page %d yielded %d chars", number, len(texts[number]))
        finally:
            pdf.close()
        return texts
