"""Classify uploaded files by name and declared MIME type."""

from enum import Enum


class FileFormat(str, Enum):
    PDF = "pdf"
    DOCX = "docx"
    DOC = "doc"
    TXT = "txt"
    IMAGE = "image"
    UNKNOWN = "unknown"


PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOC_MIME = "application/msword"
TXT_MIME = "text/plain"

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp")


def detect_format(filename: str, mime_type: str = "") -> FileFormat:
    """Return the format tag for a file; first matching rule wins.

    Extension checks are case-insensitive. ``.docx`` is tested before
    ``.doc`` so the legacy rule never shadows the modern one.
    """
    name = (filename or "").lower()
    mime = (mime_type or "").lower()

    if name.endswith(".pdf") or mime == PDF_MIME:
        return FileFormat.PDF
    if name.endswith(".docx") or mime == DOCX_MIME:
        return FileFormat.DOCX
    if name.endswith(".doc") or mime == DOC_MIME:
        return FileFormat.DOC
    if name.endswith(".txt") or mime == TXT_MIME:
        return FileFormat.TXT
    if name.endswith(IMAGE_EXTENSIONS) or mime.startswith("image/"):
        return FileFormat.IMAGE
    return FileFormat.UNKNOWN
