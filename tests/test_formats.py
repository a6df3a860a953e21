"""Tests for nyaaybot.formats — detect_format."""

import pytest

from nyaaybot.formats import FileFormat, detect_format


@pytest.mark.parametrize("filename, mime, expected", [
    ("judgment.pdf", "", FileFormat.PDF),
    ("JUDGMENT.PDF", "", FileFormat.PDF),
    ("upload", "application/pdf", FileFormat.PDF),
    ("petition.docx", "", FileFormat.DOCX),
    ("upload", "application/vnd.openxmlformats-officedocument.wordprocessingml.document", FileFormat.DOCX),
    ("old_brief.doc", "", FileFormat.DOC),
    ("upload", "application/msword", FileFormat.DOC),
    ("notes.txt", "", FileFormat.TXT),
    ("upload", "text/plain", FileFormat.TXT),
    ("scan.jpg", "", FileFormat.IMAGE),
    ("scan.JPEG", "", FileFormat.IMAGE),
    ("scan.png", "", FileFormat.IMAGE),
    ("scan.gif", "", FileFormat.IMAGE),
    ("scan.bmp", "", FileFormat.IMAGE),
    ("scan.webp", "", FileFormat.IMAGE),
    ("photo", "image/tiff", FileFormat.IMAGE),
    ("archive.zip", "application/zip", FileFormat.UNKNOWN),
    ("", "", FileFormat.UNKNOWN),
])
def test_detect_format(filename, mime, expected):
    assert detect_format(filename, mime) is expected


def test_pdf_rule_wins_over_later_rules():
    """First match wins: a .pdf name beats a text/plain MIME type."""
    assert detect_format("report.pdf", "text/plain") is FileFormat.PDF


def test_docx_not_mistaken_for_doc():
    assert detect_format("contract.docx", "application/msword") is FileFormat.DOCX


def test_doc_name_beats_image_mime():
    assert detect_format("brief.doc", "image/png") is FileFormat.DOC


def test_none_inputs_are_unknown():
    assert detect_format(None, None) is FileFormat.UNKNOWN
