"""Metric formulas for Seller Tools.

Every ratio has a defined value for a zero denominator, so no function here
returns NaN: the result is either a finite number rounded to 2 decimals or a
signed infinity.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from .models import AcosRow, CampaignMetrics, CampaignRow, FbaMetrics, FbaRow

if TYPE_CHECKING:
    from .config import AcosRatingBands

INF = math.inf


def round_ratio(value: float) -> float:
    """Round finite values to 2 decimals; infinities pass through."""
    if math.isinf(value):
        return value
    return round(value, 2)


def _signed_infinity(numerator: float) -> float:
    if numerator > 0:
        return INF
    if numerator < 0:
        return -INF
    return 0.0


def safe_ratio(numerator: float, denominator: float, scale: float = 1.0) -> float:
    """numerator / denominator * scale, with the sign rule for zero denominators."""
    if denominator == 0:
        return _signed_infinity(numerator)
    return round_ratio(numerator / denominator * scale)


def calculate_acos(spend: float, sales: float) -> float:
    """Advertising cost of sales (%)."""
    return safe_ratio(spend, sales, 100)


def calculate_roas(spend: float, sales: float) -> float:
    """Return on ad spend (x)."""
    return safe_ratio(sales, spend)


def calculate_ctr(clicks: int, impressions: int) -> float:
    """Click-through rate (%); zero impressions is 0."""
    if impressions == 0:
        return 0.0
    return round_ratio(clicks / impressions * 100)


def calculate_cpc(spend: float, clicks: int) -> float:
    """Cost per click."""
    return safe_ratio(spend, clicks)


def calculate_conversion_rate(sales: float, clicks: int) -> float:
    """Revenue per click (%), sales / clicks * 100."""
    return safe_ratio(sales, clicks, 100)


def calculate_campaign_metrics(
    spend: float, sales: float, impressions: int, clicks: int
) -> CampaignMetrics:
    """Derive all advertising ratios for one campaign."""
    return CampaignMetrics(
        acos=calculate_acos(spend, sales),
        roas=calculate_roas(spend, sales),
        ctr=calculate_ctr(clicks, impressions),
        cpc=calculate_cpc(spend, clicks),
        conversion_rate=calculate_conversion_rate(sales, clicks),
    )


def compute_campaign_metrics(row: CampaignRow) -> CampaignMetrics:
    return calculate_campaign_metrics(row.spend, row.sales, row.impressions, row.clicks)


def compute_acos_metrics(row: AcosRow) -> CampaignMetrics:
    return calculate_campaign_metrics(row.ad_spend, row.sales, row.impressions, row.clicks)


def calculate_fba_metrics(cost: float, price: float, fees: float) -> FbaMetrics:
    """Profit, ROI (%) and margin (%) for an FBA product."""
    profit = price - cost - fees
    return FbaMetrics(
        profit=round_ratio(profit),
        roi=safe_ratio(profit, cost, 100),
        margin=safe_ratio(profit, price, 100),
    )


def compute_fba_metrics(row: FbaRow) -> FbaMetrics:
    return calculate_fba_metrics(row.cost, row.price, row.fees)


def acos_rating(acos: float, bands: AcosRatingBands) -> str:
    """Rate an ACoS percentage; infinite ACoS is Poor."""
    if math.isinf(acos):
        return "Poor"
    if acos < bands.excellent_below:
        return "Excellent"
    if acos < bands.good_below:
        return "Good"
    if acos < bands.fair_below:
        return "Fair"
    return "Poor"
