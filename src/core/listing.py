"""Listing quality scoring for Seller Tools."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from .models import AnalysisResult, ListingMetrics, ListingRow

if TYPE_CHECKING:
    from .config import ListingScoringConfig, Settings


class ListingScorer:
    """Scores a listing out of 100 and collects issues and suggestions.

    Each section contributes up to its weight; partial credit is the floored
    proportion of the recommended amount.
    """

    def __init__(self, settings: Settings) -> None:
        self.config: ListingScoringConfig = settings.listing
        self.prohibited = {k.lower() for k in self.config.prohibited_keywords}

    def score_title(self, title: str, result: AnalysisResult) -> int:
        c = self.config
        length = len(title)
        if not title:
            result.issues.append("Missing product title")
            result.recommendations.append("Add a descriptive title with main keywords.")
            return 0
        if c.min_title_length <= length <= c.max_title_length:
            return c.weight_title
        if length < c.min_title_length:
            result.issues.append(f"Title too short ({length}/{c.min_title_length} chars)")
            result.recommendations.append("Expand title with relevant keywords and key features.")
            return math.floor(length / c.min_title_length * c.weight_title)
        result.issues.append(f"Title exceeds maximum length ({length}/{c.max_title_length} chars)")
        result.recommendations.append("Optimize title length while maintaining key information.")
        return math.floor(c.max_title_length / length * c.weight_title)

    def score_description(self, description: str, result: AnalysisResult) -> int:
        c = self.config
        length = len(description)
        if not description:
            result.issues.append("Missing product description")
            result.recommendations.append("Add a comprehensive product description.")
            return 0
        if c.min_description_length <= length <= c.max_description_length:
            return c.weight_description
        if length < c.min_description_length:
            result.issues.append(
                f"Description too short ({length}/{c.min_description_length} chars)"
            )
            result.recommendations.append("Expand description with detailed product information.")
            return math.floor(length / c.min_description_length * c.weight_description)
        result.issues.append(
            f"Description exceeds recommended length ({length}/{c.max_description_length} chars)"
        )
        result.recommendations.append("Consider condensing while maintaining key details.")
        return math.floor(c.max_description_length / length * c.weight_description)

    def _score_count(
        self,
        count: int,
        minimum: int,
        recommended: int,
        weight: int,
        noun: str,
        add_phrase: str,
        result: AnalysisResult,
    ) -> int:
        if count >= recommended:
            return weight
        if count >= minimum:
            result.recommendations.append(f"Consider adding {recommended - count} more {noun}.")
            return math.floor(count / recommended * weight)
        result.issues.append(f"Insufficient {noun} ({count}/{minimum} minimum)")
        result.recommendations.append(f"Add at least {minimum - count} more {add_phrase}.")
        return math.floor(count / minimum * weight) if count > 0 else 0

    def score_keywords(self, keywords: list[str], result: AnalysisResult) -> int:
        c = self.config
        if not keywords:
            result.issues.append("Missing keywords")
            result.recommendations.append("Add relevant keywords to improve searchability.")
            return 0

        score = self._score_count(
            len(keywords),
            c.min_keywords,
            c.recommended_keywords,
            c.weight_keywords,
            "keywords",
            "relevant keywords",
            result,
        )

        prohibited_count = sum(1 for k in keywords if k.lower() in self.prohibited)
        if prohibited_count:
            result.issues.append(f"Found {prohibited_count} prohibited keywords")
            result.recommendations.append("Remove or replace prohibited keywords.")
            score = max(0, score - prohibited_count * c.prohibited_keyword_penalty)
        return score

    def score(self, row: ListingRow) -> tuple[int, AnalysisResult]:
        """Calculate the listing score and its issues/suggestions."""
        c = self.config
        result = AnalysisResult()
        total = 0

        total += self.score_title(row.title, result)
        total += self.score_description(row.description, result)
        total += self._score_count(
            len(row.bullet_points),
            c.min_bullet_points,
            c.recommended_bullet_points,
            c.weight_bullet_points,
            "bullet points",
            "bullet points",
            result,
        )
        total += self._score_count(
            row.images,
            c.min_images,
            c.recommended_images,
            c.weight_images,
            "images",
            "high-quality images",
            result,
        )
        total += self.score_keywords(row.keywords, result)

        if row.brand:
            total += c.weight_brand
        else:
            result.recommendations.append("Add brand information if applicable.")

        if row.rating and row.rating >= c.min_rating:
            total += c.weight_rating
        elif row.rating:
            result.issues.append(f"Low product rating ({row.rating:.1f}/5.0)")
            result.recommendations.append("Address common customer concerns to improve rating.")

        if row.review_count and row.review_count >= c.min_review_count:
            total += c.weight_review_count
        elif row.review_count:
            result.recommendations.append("Work on getting more customer reviews.")

        if not result.issues:
            result.issues.append("No major issues found")
        if not result.recommendations:
            result.recommendations.append("Listing looks good!")

        return max(0, min(100, total)), result

    def compute(self, row: ListingRow) -> ListingMetrics:
        score, result = self.score(row)
        return ListingMetrics(score=score, analysis=result)

    def analyze(self, row: ListingRow, metrics: ListingMetrics) -> AnalysisResult:
        if metrics.analysis is not None:
            return metrics.analysis
        _, result = self.score(row)
        return result
