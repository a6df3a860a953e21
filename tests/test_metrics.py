"""Tests for nyaaybot.metrics — the case metrics classifiers."""

import pytest

from nyaaybot.metrics import (
    COURTS_BY_JURISDICTION,
    DEFAULT_COURTS,
    classify_severity,
    derive_metrics,
    extract_summary,
    resolve_court,
    score_confidence,
)
from nyaaybot.models import CaseMetrics, Severity


# ------------------------------------------------------------------
# Severity
# ------------------------------------------------------------------


def test_single_high_keyword_is_high():
    assert classify_severity("The accused is charged with murder.") is Severity.HIGH


def test_high_keyword_match_is_case_insensitive():
    assert classify_severity("COUNT ONE: TERRORISM") is Severity.HIGH


def test_repeated_medium_keyword_is_medium():
    text = "A complaint of theft was lodged. The theft occurred at night."
    assert classify_severity(text) is Severity.MEDIUM


def test_three_distinct_medium_keywords_escalate_to_high():
    text = "Allegations include theft, assault and forgery of documents."
    assert classify_severity(text) is Severity.HIGH


def test_two_distinct_medium_keywords_stay_medium():
    assert classify_severity("theft and harassment") is Severity.MEDIUM


def test_single_low_keyword_is_low():
    assert classify_severity("A challan for a traffic violation was issued.") is Severity.LOW


def test_two_low_keywords_without_medium_are_medium():
    text = "Notice regarding a traffic violation and trespassing on private land."
    assert classify_severity(text) is Severity.MEDIUM


def test_no_keywords_long_document_is_medium():
    assert classify_severity("word " * 5001) is Severity.MEDIUM


def test_no_keywords_mid_length_document_is_low():
    assert classify_severity("word " * 1500) is Severity.LOW


def test_no_keywords_short_document_is_low():
    assert classify_severity("A short note.") is Severity.LOW
    assert classify_severity("") is Severity.LOW


@pytest.mark.parametrize("base", [
    "theft and harassment were reported",
    "a traffic violation",
    "word " * 2000,
    "",
])
def test_adding_high_keyword_never_lowers_severity(base):
    order = [Severity.LOW, Severity.MEDIUM, Severity.HIGH]
    before = classify_severity(base)
    after = classify_severity(base + " kidnapping")
    assert order.index(after) >= order.index(before)
    assert after is Severity.HIGH


# ------------------------------------------------------------------
# Confidence
# ------------------------------------------------------------------


def test_empty_narrative_scores_minimum():
    assert score_confidence("") == 50


def test_forty_words_without_legal_terms_is_fifty():
    assert score_confidence(" ".join(["alpha"] * 40)) == 50


def test_medium_length_narrative_keeps_base():
    assert score_confidence(" ".join(["alpha"] * 120)) == 75


def test_between_fifty_and_hundred_words_loses_fifteen():
    assert score_confidence(" ".join(["alpha"] * 70)) == 60


def test_long_narrative_bonus():
    assert score_confidence(" ".join(["alpha"] * 600)) == 85


def test_very_long_narrative_bonus_is_cumulative():
    assert score_confidence(" ".join(["alpha"] * 1200)) == 90


def test_legal_terms_add_two_each():
    narrative = " ".join(["alpha"] * 120) + " article section"
    assert score_confidence(narrative) == 79


def test_legal_terms_count_distinct_only():
    narrative = " ".join(["alpha"] * 120) + " article article article"
    assert score_confidence(narrative) == 77


def test_legal_term_bonus_capped_and_total_clamped():
    terms = "article section clause provision amendment constitution law legal right duty"
    narrative = " ".join(["alpha"] * 1200) + " " + terms
    assert score_confidence(narrative) == 95


@pytest.mark.parametrize("narrative", [
    "",
    "   ",
    "x",
    "law " * 30,
    "right " * 5000,
    "\n\n## Heading\n\n* bullet",
])
def test_confidence_always_in_range(narrative):
    assert 50 <= score_confidence(narrative) <= 95


# ------------------------------------------------------------------
# Court
# ------------------------------------------------------------------


def test_india_high_court():
    assert resolve_court(Severity.HIGH, "India") == "Supreme Court of India or High Court"


@pytest.mark.parametrize("alias", ["United States", "USA", "us", "  usa  "])
def test_united_states_aliases(alias):
    assert resolve_court(Severity.HIGH, alias) == COURTS_BY_JURISDICTION["united states"][Severity.HIGH]


@pytest.mark.parametrize("alias", ["United Kingdom", "UK", "Britain"])
def test_united_kingdom_aliases(alias):
    assert resolve_court(Severity.LOW, alias) == COURTS_BY_JURISDICTION["uk"][Severity.LOW]


def test_unknown_jurisdiction_uses_generic_courts():
    assert resolve_court(Severity.HIGH, "Narnia") == "Supreme Court or High Court"
    assert resolve_court(Severity.MEDIUM, "Narnia") == "High Court or District Court"
    assert resolve_court(Severity.LOW, "Narnia") == "District Court or Lower Court"


def test_accepts_severity_value_strings():
    assert resolve_court("Medium", "Canada") == COURTS_BY_JURISDICTION["canada"][Severity.MEDIUM]


@pytest.mark.parametrize("severity", list(Severity))
@pytest.mark.parametrize("jurisdiction", [
    "India", "United States", "usa", "us", "United Kingdom", "uk", "britain",
    "Canada", "Australia", "Narnia", "", None,
])
def test_court_resolver_is_total(severity, jurisdiction):
    court = resolve_court(severity, jurisdiction)
    assert isinstance(court, str) and court


def test_default_courts_cover_every_severity():
    assert set(DEFAULT_COURTS) == set(Severity)
    for courts in COURTS_BY_JURISDICTION.values():
        assert set(courts) == set(Severity)


# ------------------------------------------------------------------
# Summary
# ------------------------------------------------------------------


def test_summary_from_overview_section():
    narrative = (
        "# Analysis\n"
        "## What This Case Is About\n"
        "The petitioner challenges the eviction order issued by the landlord.\n"
        "Short line.\n"
        "\n"
        "The tenant claims the notice period under the lease was ignored.\n"
        "## Key Legal Points\n"
        "Section 106 of the Transfer of Property Act applies here.\n"
    )

    assert extract_summary(narrative, "ignored") == (
        "The petitioner challenges the eviction order issued by the landlord. "
        "The tenant claims the notice period under the lease was ignored."
    )


def test_summary_strips_bold_markers():
    narrative = (
        "**About the dispute**\n"
        "**The dispute** concerns unpaid wages owed to three workers.\n"
    )
    assert extract_summary(narrative, "") == "The dispute concerns unpaid wages owed to three workers."


def test_summary_collects_at_most_four_lines():
    body = "\n".join(f"Line number {i} of the overview section here." for i in range(6))
    summary = extract_summary(f"Summary\n{body}", "")

    assert "Line number 3" in summary
    assert "Line number 4" not in summary


def test_summary_truncates_to_500_chars():
    long_line = "The court examined the evidence in considerable detail " * 5
    narrative = "What this case is about\n" + "\n".join([long_line] * 4)

    summary = extract_summary(narrative, "")

    assert len(summary) == 503
    assert summary.endswith("...")


def test_summary_falls_back_to_sentences():
    narrative = (
        "The lease was terminated without any notice. "
        "The landlord changed the locks on the premises. "
        "Rent was paid in full through March 2024. "
        "A fourth sentence that should not be included."
    )

    assert extract_summary(narrative, "") == (
        "The lease was terminated without any notice. "
        "The landlord changed the locks on the premises. "
        "Rent was paid in full through March 2024."
    )


def test_sentence_fallback_skips_markdown_and_short_sentences():
    narrative = "- Note: see below. Too short. `code` is a long enough sentence but marked. Plain sentence that is long enough here."
    assert extract_summary(narrative, "") == "Plain sentence that is long enough here."


def test_summary_falls_back_to_combined_text():
    combined = "File: fir.txt\nThe complainant reports a dispute over land.\n\n"

    assert extract_summary("", combined) == (
        "This case involves File: fir.txt The complainant reports a dispute over land...."
    )


def test_combined_fallback_takes_first_fifty_words():
    combined = " ".join(f"w{i}" for i in range(80))

    summary = extract_summary("", combined)

    words = summary[len("This case involves "):-len("...")].split()
    assert len(words) == 50
    assert words[-1] == "w49"


def test_summary_never_empty_for_non_empty_documents():
    assert extract_summary("", "x")
    assert extract_summary("short.", "File: a.txt\nx\n\n")
    assert extract_summary("## Heading only", "File: a.txt\nx\n\n")


# ------------------------------------------------------------------
# derive_metrics
# ------------------------------------------------------------------


def test_derive_metrics_combines_all_classifiers():
    combined = "File: fir.txt\nThe accused is charged with murder.\n\n"
    narrative = " ".join(["alpha"] * 40)

    metrics = derive_metrics(combined, narrative, "India", 2.5)

    assert metrics == CaseMetrics(
        severity=Severity.HIGH,
        confidence=50,
        court="Supreme Court of India or High Court",
        summary=extract_summary(narrative, combined),
        elapsed_seconds=2.5,
    )
