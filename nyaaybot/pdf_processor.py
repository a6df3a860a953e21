"""PDF text extraction for legal documents."""

import io
import logging

import pdfplumber

from nyaaybot.exceptions import ExtractionError, PasswordProtectedError

logger = logging.getLogger(__name__)


class PdfProcessor:
    """Extracts the concatenated page text of an in-memory PDF.

    Primary extractor: pdfplumber
    Fallback extractor: pypdf

    When most pages carry almost no text the document is treated as a
    scan and its sparse pages are OCR'd. OCR here is best-effort: if it
    is unavailable or fails, the text layer is returned as-is.

    Usage::

        processor = PdfProcessor()
        text = processor.extract(pdf_bytes)
    """

    SCANNED_MIN_CHARS_PER_PAGE: int = 50
    SCANNED_PAGE_RATIO: float = 0.80

    def __init__(self, *, ocr_scanned: bool = True):
        self.ocr_scanned = ocr_scanned

    def extract(self, data: bytes) -> str:
        """Return the text of every page joined by newlines.

        Raises:
            PasswordProtectedError: the PDF is encrypted.
            ExtractionError: both extractors failed to parse the stream.
        """
        try:
            pages = self._extract_with_pdfplumber(data)
        except Exception as pdfplumber_err:
            # Check for password-protected before falling back
            if _is_encryption_error(pdfplumber_err):
                raise PasswordProtectedError(
                    "PDF is password-protected and cannot be processed."
                ) from pdfplumber_err
            logger.info("pdfplumber failed (%s); falling back to pypdf", pdfplumber_err)
            try:
                pages = self._extract_with_pypdf(data)
            except PasswordProtectedError:
                raise
            except Exception as fallback_err:
                raise ExtractionError(
                    f"Failed to extract text from PDF: {fallback_err}"
                ) from fallback_err

        logger.info("Extracted %d pages from PDF", len(pages))

        if self.ocr_scanned and self._detect_scanned(pages):
            self._attempt_ocr(data, pages)

        return "\n".join(p["text"] for p in pages)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _extract_with_pdfplumber(data: bytes) -> list[dict]:
        pages: list[dict] = []
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            for page in pdf.pages:
                pages.append({
                    "page_number": page.page_number,
                    "text": page.extract_text() or "",
                })
        return pages

    @staticmethod
    def _extract_with_pypdf(data: bytes) -> list[dict]:
        """Fallback extraction using pypdf."""
        from pypdf import PdfReader  # only needed when pdfplumber fails

        reader = PdfReader(io.BytesIO(data))
        if reader.is_encrypted:
            raise PasswordProtectedError(
                "PDF is password-protected and cannot be processed."
            )

        return [
            {"page_number": i + 1, "text": page.extract_text() or ""}
            for i, page in enumerate(reader.pages)
        ]

    def _detect_scanned(self, pages: list[dict]) -> bool:
        """Heuristic: most pages yield very little text."""
        if not pages:
            return False
        sparse = sum(
            1 for p in pages
            if len(p["text"].strip()) < self.SCANNED_MIN_CHARS_PER_PAGE
        )
        return (sparse / len(pages)) >= self.SCANNED_PAGE_RATIO

    def _attempt_ocr(self, data: bytes, pages: list[dict]) -> None:
        """OCR sparse pages, replacing their text in-place where OCR succeeds."""
        from nyaaybot import ocr

        engine = ocr.OcrEngine()
        available, reason = engine.check_availability()
        if not available:
            logger.warning("PDF looks scanned but OCR is unavailable: %s", reason)
            return

        sparse_page_nums = [
            p["page_number"]
            for p in pages
            if len(p["text"].strip()) < self.SCANNED_MIN_CHARS_PER_PAGE
        ]

        try:
            ocr_texts = engine.ocr_pdf_pages(data, sparse_page_nums)
        except Exception as e:
            logger.warning("OCR of scanned PDF failed, keeping text layer: %s", e)
            return

        for page in pages:
            if page["page_number"] in ocr_texts:
                page["text"] = ocr_texts[page["page_number"]]
        logger.info("OCR applied to %d pages: %s", len(ocr_texts), list(ocr_texts))


def _is_encryption_error(exc: Exception) -> bool:
    """Check if an exception is a PDF encryption error (pdfminer)."""
    try:
        from pdfminer.pdfdocument import PDFEncryptionError
        return isinstance(exc, PDFEncryptionError)
    except ImportError:
        return "encrypt" in str(exc).lower()
