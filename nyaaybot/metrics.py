"""Heuristic case metrics: severity, confidence, recommended court, summary.

These are user-facing labels derived from keyword and length signals,
not legal determinations. Every function here is pure.
"""

import re

from nyaaybot.models import CaseMetrics, Severity

HIGH_SEVERITY_KEYWORDS = frozenset({
    "murder",
    "homicide",
    "manslaughter",
    "terrorism",
    "kidnapping",
    "abduction",
    "rape",
    "fraud",
    "money laundering",
    "human trafficking",
    "armed robbery",
    "extortion",
    "treason",
    "sedition",
    "dowry death",
})

MEDIUM_SEVERITY_KEYWORDS = frozenset({
    "theft",
    "negligence",
    "harassment",
    "assault",
    "burglary",
    "cheating",
    "forgery",
    "defamation",
    "embezzlement",
    "bribery",
    "domestic violence",
    "criminal intimidation",
    "breach of contract",
    "breach of trust",
})

LOW_SEVERITY_KEYWORDS = frozenset({
    "traffic violation",
    "trespassing",
    "parking violation",
    "noise complaint",
    "public nuisance",
    "littering",
    "petty offence",
    "petty offense",
    "minor dispute",
    "rent arrears",
    "boundary dispute",
})

LEGAL_TERMS = frozenset({
    "article",
    "section",
    "clause",
    "provision",
    "amendment",
    "constitution",
    "law",
    "legal",
    "right",
    "duty",
})

BASE_CONFIDENCE = 75
MIN_CONFIDENCE = 50
MAX_CONFIDENCE = 95

# Keyed by lower-cased jurisdiction name; aliases share one entry.
_INDIA = {
    Severity.HIGH: "Supreme Court of India or High Court",
    Severity.MEDIUM: "High Court or District Court",
    Severity.LOW: "District Court or Magistrate Court",
}
_UNITED_STATES = {
    Severity.HIGH: "U.S. Supreme Court or Federal Court of Appeals",
    Severity.MEDIUM: "Federal District Court or State Superior Court",
    Severity.LOW: "State Court or Municipal Court",
}
_UNITED_KINGDOM = {
    Severity.HIGH: "UK Supreme Court or Court of Appeal",
    Severity.MEDIUM: "High Court or Crown Court",
    Severity.LOW: "County Court or Magistrates' Court",
}
_CANADA = {
    Severity.HIGH: "Supreme Court of Canada or Provincial Court of Appeal",
    Severity.MEDIUM: "Superior Court or Federal Court",
    Severity.LOW: "Provincial Court or Small Claims Court",
}
_AUSTRALIA = {
    Severity.HIGH: "High Court of Australia or Federal Court",
    Severity.MEDIUM: "Supreme Court or District Court",
    Severity.LOW: "Local Court or Magistrates Court",
}

COURTS_BY_JURISDICTION: dict[str, dict[Severity, str]] = {
    "india": _INDIA,
    "united states": _UNITED_STATES,
    "united states of america": _UNITED_STATES,
    "usa": _UNITED_STATES,
    "us": _UNITED_STATES,
    "united kingdom": _UNITED_KINGDOM,
    "uk": _UNITED_KINGDOM,
    "britain": _UNITED_KINGDOM,
    "great britain": _UNITED_KINGDOM,
    "canada": _CANADA,
    "australia": _AUSTRALIA,
}

DEFAULT_COURTS = {
    Severity.HIGH: "Supreme Court or High Court",
    Severity.MEDIUM: "High Court or District Court",
    Severity.LOW: "District Court or Lower Court",
}

SUMMARY_MAX_CHARS = 500
SUMMARY_MAX_LINES = 4
SUMMARY_MIN_LINE_CHARS = 20
SUMMARY_MAX_SENTENCES = 3
FALLBACK_SUMMARY_WORDS = 50

_OVERVIEW_MARKERS = ("what this case is about", "summary", "this case")
_MARKDOWN_CHARS = ("#", "*", "`", "|")
_MARKDOWN_STRIP = re.compile(r"\*\*|__|^#+\s*", re.MULTILINE)
_SENTENCE_SPLIT = re.compile(r"[.!?]+")


def _count_present(text: str, keywords: frozenset) -> int:
    """Number of distinct keywords occurring as substrings of *text*."""
    return sum(1 for keyword in keywords if keyword in text)


def classify_severity(combined_text: str) -> Severity:
    """Classify case severity from keyword counts, then document length."""
    text = combined_text.lower()
    high = _count_present(text, HIGH_SEVERITY_KEYWORDS)
    medium = _count_present(text, MEDIUM_SEVERITY_KEYWORDS)
    low = _count_present(text, LOW_SEVERITY_KEYWORDS)

    if high > 0 or (high == 0 and medium >= 3):
        return Severity.HIGH
    if medium > 0 or (medium == 0 and low >= 2):
        return Severity.MEDIUM
    if low > 0:
        return Severity.LOW

    # No keywords at all: long bundles tend to be contested matters
    if len(combined_text.split()) > 5000:
        return Severity.MEDIUM
    return Severity.LOW


def score_confidence(narrative_text: str) -> int:
    """Score 50-95 from narrative length and legal-term coverage."""
    word_count = len(narrative_text.split())
    score = BASE_CONFIDENCE

    if word_count > 500:
        score += 10
    if word_count > 1000:
        score += 5

    terms = _count_present(narrative_text.lower(), LEGAL_TERMS)
    score += min(2 * terms, 10)

    if word_count < 100:
        score -= 15
    if word_count < 50:
        score -= 10

    return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, score))


def resolve_court(severity: Severity, jurisdiction: str) -> str:
    """Recommended court for *severity* in *jurisdiction*.

    Unknown jurisdictions use a generic mapping, so this never returns
    an empty string.
    """
    severity = Severity(severity)
    courts = COURTS_BY_JURISDICTION.get((jurisdiction or "").strip().lower(), DEFAULT_COURTS)
    return courts[severity]


def extract_summary(narrative_text: str, combined_text: str) -> str:
    """Short case summary with three fallbacks.

    1. Lines following an overview heading in the narrative.
    2. The first sentences of the narrative.
    3. The opening words of the combined documents.
    """
    summary = _summary_from_overview(narrative_text)
    if summary:
        return summary

    summary = _summary_from_sentences(narrative_text)
    if summary:
        return summary

    words = combined_text.split()[:FALLBACK_SUMMARY_WORDS]
    return f"This case involves {' '.join(words)}..."


def _is_overview_heading(line: str) -> bool:
    lower = line.lower()
    if any(marker in lower for marker in _OVERVIEW_MARKERS):
        return True
    return "**" in line and "about" in lower


def _summary_from_overview(narrative_text: str) -> str:
    found = False
    collected: list[str] = []

    for raw in narrative_text.split("\n"):
        line = raw.strip()
        if not found:
            found = _is_overview_heading(line)
            continue
        if not line:
            continue
        if line.startswith("#"):
            break
        if len(line) > SUMMARY_MIN_LINE_CHARS:
            collected.append(line)
            if len(collected) >= SUMMARY_MAX_LINES:
                break

    if not collected:
        return ""

    summary = _MARKDOWN_STRIP.sub("", " ".join(collected)).strip()
    if len(summary) > SUMMARY_MAX_CHARS:
        summary = summary[:SUMMARY_MAX_CHARS] + "..."
    return summary


def _summary_from_sentences(narrative_text: str) -> str:
    sentences = [
        s.strip()
        for s in _SENTENCE_SPLIT.split(narrative_text)
        if len(s.strip()) > SUMMARY_MIN_LINE_CHARS
        and not any(ch in s for ch in _MARKDOWN_CHARS)
    ]
    if not sentences:
        return ""
    return ". ".join(sentences[:SUMMARY_MAX_SENTENCES]) + "."


def derive_metrics(
    combined_text: str,
    narrative_text: str,
    jurisdiction: str,
    elapsed_seconds: float,
) -> CaseMetrics:
    """Run all four classifiers and bundle their results."""
    severity = classify_severity(combined_text)
    return CaseMetrics(
        severity=severity,
        confidence=score_confidence(narrative_text),
        court=resolve_court(severity, jurisdiction),
        summary=extract_summary(narrative_text, combined_text),
        elapsed_seconds=elapsed_seconds,
    )
