"""NyaayBot — legal document extraction, analysis, and case metrics."""

__version__ = "0.3.0"

from nyaaybot.analyzer import NarrativeAnalyzer
from nyaaybot.batch import BatchProcessor, combine_documents
from nyaaybot.formats import FileFormat, detect_format
from nyaaybot.ocr import OcrEngine
from nyaaybot.pdf_processor import PdfProcessor
from nyaaybot.pipeline import CaseAnalysisPipeline

__all__ = [
    "NarrativeAnalyzer", "BatchProcessor", "combine_documents",
    "FileFormat", "detect_format", "OcrEngine", "PdfProcessor",
    "CaseAnalysisPipeline",
]
