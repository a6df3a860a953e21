"""Build the final analysis response from the pipeline's parts."""

from typing import Sequence

from nyaaybot.models import (
    AnalysisResponse,
    CaseMetrics,
    ExtractionResult,
    FilePreview,
    NarrativeResult,
)

PREVIEW_CHARS = 200


def build_preview(result: ExtractionResult) -> FilePreview:
    text = result.text
    preview = text[:PREVIEW_CHARS] + ("..." if len(text) > PREVIEW_CHARS else "")
    return FilePreview(
        file_name=result.file_name,
        text_length=len(text),
        preview=preview,
    )


def assemble_response(
    results: Sequence[ExtractionResult],
    narrative: NarrativeResult,
    metrics: CaseMetrics,
) -> AnalysisResponse:
    """One preview per extraction result, in the order given."""
    return AnalysisResponse(
        narrative=narrative,
        metrics=metrics,
        per_file=[build_preview(r) for r in results],
        total_files=len(results),
    )
