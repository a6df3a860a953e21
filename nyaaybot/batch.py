"""Run extraction over every file in a request, isolating per-file failures."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, Sequence

from nyaaybot.exceptions import BatchValidationError
from nyaaybot.extractors import extract_text
from nyaaybot.models import ExtractionResult, UploadedFile

logger = logging.getLogger(__name__)

EMPTY_TEXT_PLACEHOLDER = "No text could be extracted from this file."
ERROR_PREFIX = "Error processing file: "
FILE_SEPARATOR = "---\n\n"


class BatchProcessor:
    """Extracts text from a batch of uploads.

    Files are extracted concurrently on a thread pool (OCR can take
    several seconds per image), but results always come back in
    submission order. A failing file becomes an ``ExtractionResult``
    with ``failed=True`` and never aborts the rest of the batch.

    Usage::

        results = BatchProcessor().process(files)
        combined = combine_documents(results)
    """

    def __init__(
        self,
        *,
        max_workers: int = 4,
        extractor: Optional[Callable[[UploadedFile], str]] = None,
    ):
        self.max_workers = max(1, max_workers)
        self.extractor = extractor or extract_text

    def process(self, files: Sequence[UploadedFile]) -> list[ExtractionResult]:
        """Extract every file; raises only when *files* is empty."""
        if not files:
            raise BatchValidationError("No files provided")

        workers = min(self.max_workers, len(files))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            # map() yields in input order regardless of completion order
            results = list(pool.map(self._process_one, files))

        failed = sum(1 for r in results if r.failed)
        logger.info("Processed %d files (%d failed)", len(results), failed)
        return results

    def _process_one(self, file: UploadedFile) -> ExtractionResult:
        try:
            text = self.extractor(file)
        except Exception as e:
            logger.warning("Failed to process %s: %s", file.name, e)
            return ExtractionResult(
                file_name=file.name, text=f"{ERROR_PREFIX}{e}", failed=True
            )
        return ExtractionResult(
            file_name=file.name, text=text or EMPTY_TEXT_PLACEHOLDER
        )


def combine_documents(results: Sequence[ExtractionResult]) -> str:
    """Concatenate results as ``File: <name>\\n<text>\\n\\n`` blocks.

    Blocks are separated by ``---\\n\\n`` and kept in the given order.
    """
    return FILE_SEPARATOR.join(
        f"File: {r.file_name}\n{r.text}\n\n" for r in results
    )
