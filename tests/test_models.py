"""Tests for data models."""

from __future__ import annotations

import pytest

from src.core.models import (
    AnalysisResult,
    Competition,
    FbaMetrics,
    FbaRow,
    PipelineResult,
    SkippedRow,
    ToolKind,
    ToolResult,
)


class TestToolKind:
    """Tests for ToolKind enum."""

    def test_from_string(self) -> None:
        assert ToolKind.from_string("PPC") == ToolKind.PPC
        assert ToolKind.from_string(" keywords ") == ToolKind.KEYWORDS

    def test_from_string_unknown(self) -> None:
        with pytest.raises(ValueError):
            ToolKind.from_string("inventory")

    def test_values(self) -> None:
        assert ToolKind.values() == ["ppc", "acos", "fba", "keywords", "listing", "sales"]


class TestCompetition:
    """Tests for Competition enum."""

    def test_from_string(self) -> None:
        assert Competition.from_string("low") == Competition.LOW
        assert Competition.from_string("HIGH") == Competition.HIGH

    def test_from_string_unknown(self) -> None:
        with pytest.raises(ValueError):
            Competition.from_string("extreme")


class TestResults:
    """Tests for result containers."""

    def test_analysis_extend(self) -> None:
        result = AnalysisResult(issues=["a"], recommendations=["b"])
        result.extend(AnalysisResult(issues=["c"], recommendations=[]))

        assert result.issues == ["a", "c"]
        assert result.recommendations == ["b"]

    def test_tool_result_key(self) -> None:
        result = ToolResult(index=0, row=FbaRow("Mat", 1, 2, 0), metrics=FbaMetrics())

        assert result.key == "Mat"

    def test_summary_without_skipped(self) -> None:
        result = PipelineResult(tool=ToolKind.FBA, results=[
            ToolResult(index=0, row=FbaRow("Mat", 1, 2, 0), metrics=FbaMetrics()),
        ], rows_read=1)

        assert result.summary() == "Successfully processed 1 rows."
        assert result.rows_skipped == 0

    def test_summary_with_skipped(self) -> None:
        result = PipelineResult(skipped=[SkippedRow(0, "bad"), SkippedRow(2, "bad")], rows_read=2)

        assert result.rows_processed == 0
        assert result.summary() == "Successfully processed 0 rows. Skipped 2 invalid rows."
