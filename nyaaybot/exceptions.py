class ExtractionError(Exception):
    """Raised when text cannot be extracted from a single file."""


class UnsupportedFileType(ExtractionError):
    """Raised for files matching no known format whose OCR fallback failed."""


class PasswordProtectedError(ExtractionError):
    """Raised when a PDF is password-protected."""


class BatchValidationError(ValueError):
    """Raised when a batch request is structurally invalid (no files)."""
