"""Monthly sales estimation for Seller Tools."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from .models import AnalysisResult, Competition, SalesMetrics, SalesRow

if TYPE_CHECKING:
    from .config import Settings


class SalesEstimator:
    """Estimates monthly unit sales from category, price band and competition."""

    def __init__(self, settings: Settings) -> None:
        self.config = settings.sales

    def get_base_sales(self, category: str) -> int:
        return self.config.category_base_sales.get(category, self.config.default_base_sales)

    def get_price_factor(self, price: float) -> float:
        for upper_bound, factor in self.config.price_bands:
            if price < upper_bound:
                return factor
        return self.config.high_price_factor

    def get_competition_factor(self, competition: Competition) -> float:
        return self.config.competition_factors.get(competition.value, 1.0)

    @staticmethod
    def get_confidence(competition: Competition, price: float) -> str:
        if competition == Competition.LOW and price < 30:
            return "High"
        if competition == Competition.HIGH and price > 50:
            return "Low"
        return "Medium"

    def estimate(self, row: SalesRow) -> SalesMetrics:
        """Estimate monthly sales and revenue for one product."""
        raw_sales = (
            self.get_base_sales(row.category)
            * self.get_price_factor(row.price)
            * self.get_competition_factor(row.competition)
        )
        # Half-up rounding
        estimated_sales = math.floor(raw_sales + 0.5)
        return SalesMetrics(
            estimated_sales=estimated_sales,
            estimated_revenue=round(estimated_sales * row.price, 2),
            confidence=self.get_confidence(row.competition, row.price),
        )

    def analyze(self, row: SalesRow, metrics: SalesMetrics) -> AnalysisResult:
        result = AnalysisResult()
        if row.category not in self.config.category_base_sales:
            result.issues.append(
                f"Unknown category '{row.category}', using default base sales"
            )
        if metrics.confidence == "Low":
            result.issues.append("Low confidence estimate (high competition, premium price)")
            result.recommendations.append(
                "Validate demand with keyword search volume before committing inventory."
            )
        if not result.issues:
            result.issues.append("No major issues found")
        if not result.recommendations:
            result.recommendations.append("Estimate is based on category averages; monitor actual sales.")
        return result
