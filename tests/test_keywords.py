"""Tests for keyword deduplication."""

from __future__ import annotations

from src.core.keywords import analyze_keywords, compute_keyword_metrics, deduplicate, extract_keywords
from src.core.models import KeywordRow


def test_extract_keywords() -> None:
    assert extract_keywords(" Yoga Mat ,Non Slip,, ") == ["yoga mat", "non slip"]
    assert extract_keywords(None) == []
    assert extract_keywords("") == []


def test_deduplicate_keeps_first_occurrence_order() -> None:
    metrics = deduplicate(["b", "a", "b", "c", "a"])

    assert metrics.cleaned_keywords == ["b", "a", "c"]
    assert metrics.duplicates_removed == 2


def test_analysis_reports_duplicates() -> None:
    row = KeywordRow("Mat", ["yoga mat", "yoga mat", "exercise"])
    metrics = compute_keyword_metrics(row)
    result = analyze_keywords(row, metrics)

    assert result.issues == ["1 duplicate keywords removed"]


def test_analysis_clean_list() -> None:
    row = KeywordRow("Mat", ["yoga mat", "exercise"])
    result = analyze_keywords(row, compute_keyword_metrics(row))

    assert result.issues == ["No duplicate keywords found."]
    assert result.recommendations == ["Keyword list is already clean."]
