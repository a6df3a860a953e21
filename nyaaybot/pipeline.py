"""End-to-end case analysis: extract, narrate, classify, assemble."""

import logging
import time
from typing import Optional, Sequence

from nyaaybot.analyzer import NarrativeAnalyzer
from nyaaybot.assembler import assemble_response
from nyaaybot.batch import BatchProcessor, combine_documents
from nyaaybot.config import Settings
from nyaaybot.metrics import derive_metrics
from nyaaybot.models import AnalysisResponse, UploadedFile

logger = logging.getLogger(__name__)


class CaseAnalysisPipeline:
    """Runs one analysis request.

    Holds no per-request state, so one instance can serve concurrent
    requests.

    Usage::

        pipeline = CaseAnalysisPipeline()
        response = pipeline.run(files, "India")
    """

    def __init__(
        self,
        *,
        settings: Optional[Settings] = None,
        batch: Optional[BatchProcessor] = None,
        analyzer: Optional[NarrativeAnalyzer] = None,
    ):
        self.settings = settings or Settings.from_env()
        self.batch = batch or BatchProcessor(max_workers=self.settings.max_workers)
        self.analyzer = analyzer or NarrativeAnalyzer(settings=self.settings)

    def run(
        self,
        files: Sequence[UploadedFile],
        jurisdiction: Optional[str] = None,
    ) -> AnalysisResponse:
        """Analyze *files* for *jurisdiction* (default from settings).

        Raises:
            BatchValidationError: *files* is empty.
        """
        started = time.monotonic()
        jurisdiction = (jurisdiction or "").strip() or self.settings.default_jurisdiction

        results = self.batch.process(files)
        combined = combine_documents(results)

        narrative = self.analyzer.analyze(combined, jurisdiction)
        if narrative.degraded:
            logger.warning("Narrative degraded (%s); classifying fallback text", narrative.reason)

        elapsed = round(time.monotonic() - started, 1)
        metrics = derive_metrics(combined, narrative.text, jurisdiction, elapsed)
        logger.info(
            "Analyzed %d files for %s: severity=%s confidence=%d in %.1fs",
            len(results), jurisdiction, metrics.severity.value, metrics.confidence, elapsed,
        )
        return assemble_response(results, narrative, metrics)
