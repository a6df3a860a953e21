"""Per-format text extractors.

Each extractor takes raw file bytes and returns plain text, raising
:class:`ExtractionError` (or a subclass) when it cannot.
"""

import io
import logging
from typing import Callable

import docx

from nyaaybot.exceptions import ExtractionError, UnsupportedFileType
from nyaaybot.formats import FileFormat, detect_format
from nyaaybot.models import UploadedFile
from nyaaybot.ocr import OcrEngine
from nyaaybot.pdf_processor import PdfProcessor

logger = logging.getLogger(__name__)

DOC_UNSUPPORTED_MESSAGE = (
    "DOC files (binary format) are not fully supported. "
    "Please convert to DOCX or PDF format for better compatibility."
)


def extract_pdf(data: bytes) -> str:
    try:
        return PdfProcessor().extract(data)
    except ExtractionError:
        raise
    except Exception as e:
        raise ExtractionError(f"Failed to extract text from PDF: {e}") from e


def extract_docx(data: bytes) -> str:
    """Raw text of a DOCX package: body paragraphs, then table cells."""
    try:
        document = docx.Document(io.BytesIO(data))
        lines = [p.text for p in document.paragraphs]
        for table in document.tables:
            for row in table.rows:
                lines.extend(cell.text for cell in row.cells)
        return "\n".join(lines).strip()
    except Exception as e:
        raise ExtractionError(f"Failed to extract text from DOCX: {e}") from e


def reject_doc(data: bytes) -> str:
    raise ExtractionError(DOC_UNSUPPORTED_MESSAGE)


def extract_txt(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def extract_image(data: bytes) -> str:
    """Pre-process then OCR an image.

    Pre-processing falls back to the original bytes on its own; only
    the recognition step can fail.
    """
    engine = OcrEngine()
    prepared = engine.preprocess(data)
    try:
        return engine.recognize(prepared)
    except Exception as e:
        raise ExtractionError(
            f"Failed to extract text from image using OCR: {e}"
        ) from e


EXTRACTORS: dict[FileFormat, Callable[[bytes], str]] = {
    FileFormat.PDF: extract_pdf,
    FileFormat.DOCX: extract_docx,
    FileFormat.DOC: reject_doc,
    FileFormat.TXT: extract_txt,
    FileFormat.IMAGE: extract_image,
}


def extract_text(file: UploadedFile) -> str:
    """Detect the file's format and run the matching extractor.

    Files of unknown type are tried as images; if OCR fails too,
    :class:`UnsupportedFileType` names the declared MIME type.
    """
    file_format = detect_format(file.name, file.mime_type)
    logger.debug("Detected %s as %s", file.name, file_format.value)

    if file_format is FileFormat.UNKNOWN:
        try:
            return extract_image(file.data)
        except ExtractionError as e:
            logger.warning("OCR fallback failed for %s: %s", file.name, e)
            raise UnsupportedFileType(
                f"Unsupported file type: {file.mime_type or 'unknown'}"
            ) from e

    return EXTRACTORS[file_format](file.data)
