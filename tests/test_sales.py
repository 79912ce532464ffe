"""Tests for the sales estimator."""

from __future__ import annotations

import pytest

from src.core.models import Competition, SalesRow
from src.core.sales import SalesEstimator


class TestSalesEstimator:
    """Tests for SalesEstimator."""

    @pytest.mark.parametrize(
        "price,factor",
        [(5, 2.0), (9.99, 2.0), (10, 1.5), (24.99, 1.5), (25, 1.0), (49.99, 1.0), (50, 0.7), (200, 0.7)],
    )
    def test_price_bands(self, settings, price, factor) -> None:
        assert SalesEstimator(settings).get_price_factor(price) == factor

    def test_known_category(self, settings) -> None:
        row = SalesRow("Case", "Electronics", 19.99, Competition.MEDIUM)
        metrics = SalesEstimator(settings).estimate(row)

        assert metrics.estimated_sales == 225
        assert metrics.estimated_revenue == pytest.approx(4497.75)
        assert metrics.confidence == "Medium"

    def test_low_competition_cheap_product(self, settings) -> None:
        row = SalesRow("Novel", "Books", 5.0, Competition.LOW)
        metrics = SalesEstimator(settings).estimate(row)

        assert metrics.estimated_sales == 182
        assert metrics.estimated_revenue == pytest.approx(910.0)
        assert metrics.confidence == "High"

    def test_unknown_category_uses_default(self, settings) -> None:
        estimator = SalesEstimator(settings)
        row = SalesRow("Gadget", "Gizmos", 60.0, Competition.HIGH)
        metrics = estimator.estimate(row)
        result = estimator.analyze(row, metrics)

        assert metrics.estimated_sales == 49
        assert metrics.confidence == "Low"
        assert result.issues[0] == "Unknown category 'Gizmos', using default base sales"
        assert len(result.issues) == 2

    def test_analysis_sentinels(self, settings) -> None:
        estimator = SalesEstimator(settings)
        row = SalesRow("Case", "Electronics", 19.99)
        result = estimator.analyze(row, estimator.estimate(row))

        assert result.issues == ["No major issues found"]
        assert len(result.recommendations) == 1

    def test_category_table_is_configurable(self, settings) -> None:
        settings.sales.category_base_sales["Garden"] = 40
        row = SalesRow("Hose", "Garden", 30.0)

        assert SalesEstimator(settings).estimate(row).estimated_sales == 40
