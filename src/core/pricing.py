"""Competitive pricing and product score calculations."""

from __future__ import annotations

# Score thresholds on the 0-1 product score scale
PREMIUM_SCORE = 0.8
DISCOUNT_SCORE = 0.6
SCORE_ADJUSTMENT = 0.5

# Allowed band around the competitor price range
LOWER_BOUND_FACTOR = 0.9
UPPER_BOUND_FACTOR = 1.1

# Normalisation ceilings for product score inputs
EXCELLENT_CONVERSION_PCT = 20.0
EXCELLENT_SESSIONS = 500
EXCELLENT_REVIEW_COUNT = 100

PRODUCT_SCORE_WEIGHTS = {
    "conversion": 0.3,
    "sessions": 0.15,
    "rating": 0.2,
    "reviews": 0.15,
    "price_competitiveness": 0.1,
    "inventory_health": 0.1,
}


def calculate_optimal_price(competitor_prices: list[float], product_score: float) -> float:
    """Price relative to the competitor average, adjusted by product score.

    Scores above 0.8 earn a premium and scores below 0.6 a discount. The
    result is clamped to 10% below the cheapest and 10% above the dearest
    competitor.
    """
    if not competitor_prices:
        raise ValueError("At least one competitor price is required")

    average = sum(competitor_prices) / len(competitor_prices)
    lower_bound = min(competitor_prices) * LOWER_BOUND_FACTOR
    upper_bound = max(competitor_prices) * UPPER_BOUND_FACTOR

    price = average
    if product_score > PREMIUM_SCORE:
        price = average * (1 + (product_score - PREMIUM_SCORE) * SCORE_ADJUSTMENT)
    elif product_score < DISCOUNT_SCORE:
        price = average * (1 - (DISCOUNT_SCORE - product_score) * SCORE_ADJUSTMENT)

    return round(max(lower_bound, min(upper_bound, price)), 2)


def calculate_product_score(
    conversion_rate: float,
    sessions: int,
    review_rating: float,
    review_count: int,
    price_competitiveness: float,
    inventory_health: float,
) -> float:
    """Weighted product score on a 0-100 scale."""
    normalized = {
        "conversion": min(conversion_rate / EXCELLENT_CONVERSION_PCT, 1.0),
        "sessions": min(sessions / EXCELLENT_SESSIONS, 1.0),
        "rating": review_rating / 5,
        "reviews": min(review_count / EXCELLENT_REVIEW_COUNT, 1.0),
        "price_competitiveness": price_competitiveness,
        "inventory_health": inventory_health,
    }
    score = sum(normalized[name] * weight for name, weight in PRODUCT_SCORE_WEIGHTS.items())
    return round(score * 100, 2)
