"""Tests for the manual entry session."""

from __future__ import annotations

from pathlib import Path

import pytest

from src.core.models import SkippedRow, ToolKind, ToolResult
from src.core.pipeline import BatchPipeline
from src.core.session import DuplicateEntryError, ResultSession


class TestResultSession:
    """Tests for ResultSession."""

    def test_add_manual_entry(self, settings) -> None:
        session = ResultSession(ToolKind.FBA, settings)
        outcome = session.add_manual({"product": "Mat", "cost": "10", "price": "30", "fees": "5"})

        assert isinstance(outcome, ToolResult)
        assert outcome.metrics.profit == 15
        assert len(session) == 1

    def test_manual_policy_rejects_zero_price(self, settings) -> None:
        session = ResultSession(ToolKind.FBA, settings)
        outcome = session.add_manual({"product": "Mat", "cost": "10", "price": "0", "fees": "5"})

        assert isinstance(outcome, SkippedRow)
        assert outcome.reason == "Invalid or negative price value"
        assert len(session) == 0

    def test_duplicate_name_case_insensitive(self, settings) -> None:
        session = ResultSession(ToolKind.ACOS, settings)
        session.add_manual({"campaign": "Brand Defense", "adSpend": "10", "sales": "100"})

        with pytest.raises(DuplicateEntryError) as exc_info:
            session.add_manual({"campaign": " brand defense ", "adSpend": "20", "sales": "50"})

        assert exc_info.value.name == "brand defense"
        assert len(session) == 1

    def test_upload_replaces_manual_entries(self, settings, ppc_csv_path: Path) -> None:
        session = ResultSession(ToolKind.PPC, settings)
        session.add_manual({
            "name": "Manual", "type": "Manual", "spend": "1", "sales": "2",
            "impressions": "3", "clicks": "1",
        })

        session.replace(BatchPipeline(ToolKind.PPC, settings).run_file(ppc_csv_path))

        assert [r.key for r in session.results] == ["Camp1", "Camp2", "Camp4"]

    def test_clear(self, settings) -> None:
        session = ResultSession("keywords", settings)
        session.add_manual({"product": "Mat", "keywords": "yoga"})
        session.clear()

        assert len(session) == 0
        assert session.tool == ToolKind.KEYWORDS
