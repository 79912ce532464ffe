"""Issue and recommendation rules for Seller Tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .metrics import acos_rating
from .models import (
    AcosRow,
    AnalysisResult,
    CampaignMetrics,
    CampaignRow,
    FbaMetrics,
    FbaRow,
)

if TYPE_CHECKING:
    from .config import Settings

NO_ISSUES = "No major performance issues detected."
STABLE = "Performance looks stable. Continue monitoring key metrics."


def apply_sentinels(result: AnalysisResult) -> AnalysisResult:
    """Insert the default lines when no rule fired."""
    if not result.issues:
        result.issues.append(NO_ISSUES)
    if not result.recommendations:
        result.recommendations.append(STABLE)
    return result


class CampaignAnalyzer:
    """Applies the PPC audit rules to one campaign.

    Rules are independent and evaluated in order; several may fire for the
    same campaign. A campaign without sales short-circuits the rest.
    """

    def __init__(self, settings: Settings) -> None:
        self.thresholds = settings.ppc

    def no_sales(self, spend: float) -> AnalysisResult:
        if spend > 0:
            recommendation = (
                "Investigate targeting, product appeal, and listing quality. "
                "Consider pausing if spend is significant."
            )
        else:
            recommendation = (
                "Campaign has no spend and no sales. Review setup or consider activating if intended."
            )
        return AnalysisResult(issues=["No Sales Recorded"], recommendations=[recommendation])

    def high_acos(self, acos: float) -> AnalysisResult:
        return AnalysisResult(
            issues=[f"High ACoS ({acos:.1f}%)"],
            recommendations=[
                "Review search term reports and target performance. Reduce bids on unprofitable targets.",
                "Add negative keywords/ASINs to prevent irrelevant spend.",
            ],
        )

    def low_ctr(self, ctr: float) -> AnalysisResult:
        return AnalysisResult(
            issues=[f"Low CTR ({ctr:.2f}%)"],
            recommendations=[
                "Improve ad relevance: check keywords, ad copy (if applicable), and main image.",
                "Ensure targeting is specific enough.",
            ],
        )

    def low_conversion(self, conversion_rate: float) -> AnalysisResult:
        return AnalysisResult(
            issues=[f"Low Conversion Rate ({conversion_rate:.1f}%)"],
            recommendations=[
                "Optimize product detail page (title, bullets, description, images, A+ content, price, reviews).",
                "Ensure keywords/targets align closely with the product benefits and features.",
            ],
        )

    def low_clicks(self, clicks: int) -> AnalysisResult:
        return AnalysisResult(
            issues=[f"Low Click Volume ({clicks})"],
            recommendations=[
                "Consider increasing bids strategically on relevant, high-potential targets.",
                "Review campaign budget; ensure it is not limiting performance.",
            ],
        )

    def auto_harvest(self, campaign_type: str, acos: float) -> AnalysisResult:
        if "auto" in campaign_type.lower() and acos < self.thresholds.good_auto_acos_pct:
            return AnalysisResult(
                recommendations=[
                    "Harvest high-performing search terms/ASINs from this Auto campaign "
                    "into Manual campaigns for granular control."
                ]
            )
        return AnalysisResult()

    def analyze(self, row: CampaignRow, metrics: CampaignMetrics) -> AnalysisResult:
        """Build the issue and recommendation lists for one campaign."""
        # Zero sales gives an infinite (or zero-over-zero) ACoS
        if row.sales == 0:
            return self.no_sales(row.spend)

        result = AnalysisResult()
        t = self.thresholds

        if metrics.acos > t.high_acos_pct:
            result.extend(self.high_acos(metrics.acos))
        if metrics.ctr < t.low_ctr_pct:
            result.extend(self.low_ctr(metrics.ctr))
        if metrics.conversion_rate < t.low_conversion_pct:
            result.extend(self.low_conversion(metrics.conversion_rate))
        if row.clicks < t.low_click_volume:
            result.extend(self.low_clicks(row.clicks))
        result.extend(self.auto_harvest(row.type, metrics.acos))

        return apply_sentinels(result)


class AcosAnalyzer:
    """Rates ACoS and suggests what to do about it."""

    RECOMMENDATIONS = {
        "Excellent": "ACoS is excellent. Consider scaling budget on this campaign.",
        "Good": "ACoS is healthy. Keep optimizing bids on top performers.",
        "Fair": "ACoS is borderline. Review bids and add negative keywords.",
        "Poor": "ACoS is too high. Reduce bids or pause unprofitable targets.",
    }

    def __init__(self, settings: Settings) -> None:
        self.bands = settings.acos_rating

    def analyze(self, row: AcosRow, metrics: CampaignMetrics) -> AnalysisResult:
        if row.sales == 0:
            if row.ad_spend > 0:
                return AnalysisResult(
                    issues=["ACoS rating: Poor", "No Sales Recorded"],
                    recommendations=[
                        self.RECOMMENDATIONS["Poor"],
                        "Spend without sales: check targeting and listing quality, "
                        "or pause the campaign.",
                    ],
                )
            return AnalysisResult(
                issues=["No spend and no sales"],
                recommendations=["Campaign is inactive. Review setup or activate it if intended."],
            )

        rating = acos_rating(metrics.acos, self.bands)
        result = AnalysisResult(
            issues=[f"ACoS rating: {rating} ({metrics.acos:.2f}%)"],
            recommendations=[self.RECOMMENDATIONS[rating]],
        )
        return apply_sentinels(result)


class FbaAnalyzer:
    """Flags unprofitable or thin-margin FBA products."""

    def __init__(self, settings: Settings) -> None:
        self.thresholds = settings.fba

    def analyze(self, row: FbaRow, metrics: FbaMetrics) -> AnalysisResult:
        result = AnalysisResult()
        t = self.thresholds

        if metrics.profit < 0:
            result.issues.append(f"Unprofitable product (profit {metrics.profit:.2f})")
            result.recommendations.append(
                "Raise the selling price or negotiate a lower unit cost before restocking."
            )
        elif metrics.margin < t.low_margin_pct:
            result.issues.append(f"Low margin ({metrics.margin:.2f}%)")
            result.recommendations.append(
                "Review fees and pricing; thin margins leave no room for advertising."
            )

        if metrics.profit >= 0 and metrics.roi < t.low_roi_pct:
            result.issues.append(f"Low ROI ({metrics.roi:.2f}%)")
            result.recommendations.append("Look for a cheaper supplier to improve return on stock.")

        return apply_sentinels(result)
