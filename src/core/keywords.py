"""Keyword deduplication for Seller Tools."""

from __future__ import annotations

from .models import AnalysisResult, KeywordMetrics, KeywordRow


def extract_keywords(keywords: str | None) -> list[str]:
    """Split a comma-separated keyword string into lower-cased, trimmed keywords."""
    if not keywords:
        return []
    return [k.strip().lower() for k in keywords.split(",") if k.strip()]


def deduplicate(keywords: list[str]) -> KeywordMetrics:
    """Remove duplicates, keeping the first occurrence order."""
    cleaned = list(dict.fromkeys(keywords))
    return KeywordMetrics(
        cleaned_keywords=cleaned,
        duplicates_removed=len(keywords) - len(cleaned),
    )


def compute_keyword_metrics(row: KeywordRow) -> KeywordMetrics:
    return deduplicate(row.keywords)


def analyze_keywords(row: KeywordRow, metrics: KeywordMetrics) -> AnalysisResult:
    result = AnalysisResult()
    if metrics.duplicates_removed:
        result.issues.append(f"{metrics.duplicates_removed} duplicate keywords removed")
        result.recommendations.append("Use the cleaned keyword list in your backend search terms.")
    else:
        result.issues.append("No duplicate keywords found.")
        result.recommendations.append("Keyword list is already clean.")
    return result
