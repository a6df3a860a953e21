"""Data types passed between pipeline stages."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class UploadedFile:
    """A file as received from the client, before extraction."""

    name: str
    mime_type: str
    data: bytes = field(repr=False)


@dataclass(frozen=True)
class ExtractionResult:
    """Extracted text for one file.

    When ``failed`` is true, ``text`` holds the human-readable error
    message instead of document content.
    """

    file_name: str
    text: str
    failed: bool = False


class Severity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass(frozen=True)
class NarrativeResult:
    """Model output, or a degraded stand-in when the model call failed.

    ``reason`` is ``None`` on success, ``"connection"`` when the model
    could not be reached, and ``"error"`` for any other failure.
    """

    text: str
    reason: Optional[str] = None
    model: str = ""

    @property
    def degraded(self) -> bool:
        return self.reason is not None

    @property
    def model_unavailable(self) -> bool:
        return self.reason == "connection"


@dataclass(frozen=True)
class CaseMetrics:
    severity: Severity
    confidence: int
    court: str
    summary: str
    elapsed_seconds: float


@dataclass(frozen=True)
class FilePreview:
    file_name: str
    text_length: int
    preview: str


@dataclass(frozen=True)
class AnalysisResponse:
    narrative: NarrativeResult
    metrics: CaseMetrics
    per_file: list[FilePreview]
    total_files: int

    def to_dict(self) -> dict:
        """Serialize to the JSON shape returned by ``POST /api/analyze``."""
        return {
            "analysis": self.narrative.text,
            "stats": {
                "severity": self.metrics.severity.value,
                "confidence": self.metrics.confidence,
                "timeTaken": self.metrics.elapsed_seconds,
                "summary": self.metrics.summary,
                "court": self.metrics.court,
            },
            "files": [
                {
                    "fileName": f.file_name,
                    "textLength": f.text_length,
                    "preview": f.preview,
                }
                for f in self.per_file
            ],
            "totalFiles": self.total_files,
        }
