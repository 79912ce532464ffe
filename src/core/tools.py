"""Tool registry: wires each tool's validator, metrics and analyzer together."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from .analysis import AcosAnalyzer, CampaignAnalyzer, FbaAnalyzer
from .keywords import analyze_keywords, compute_keyword_metrics
from .listing import ListingScorer
from .metrics import compute_acos_metrics, compute_campaign_metrics, compute_fba_metrics
from .models import AnalysisResult, ToolKind
from .sales import SalesEstimator
from .validation import (
    AcosValidator,
    CampaignValidator,
    FbaValidator,
    KeywordValidator,
    ListingValidator,
    RowValidator,
    SalesValidator,
)

if TYPE_CHECKING:
    from .config import FbaValidationPolicy, Settings


@dataclass
class Tool:
    """One seller tool's processing stages."""

    kind: ToolKind
    validator: RowValidator
    compute: Callable[[Any], Any]
    analyze: Callable[[Any, Any], AnalysisResult]

    @property
    def required_headers(self) -> list[str]:
        return self.validator.get_required_headers()

    @property
    def known_headers(self) -> list[str]:
        return self.validator.REQUIRED_HEADERS + self.validator.OPTIONAL_HEADERS


def build_tool(
    kind: ToolKind,
    settings: Settings,
    fba_policy: FbaValidationPolicy | None = None,
) -> Tool:
    """Create the stages for a tool.

    ``fba_policy`` overrides the bulk upload sign policy for the FBA tool
    (manual entries use ``settings.validation.fba_manual``).
    """
    if kind == ToolKind.PPC:
        return Tool(
            kind,
            CampaignValidator(settings),
            compute_campaign_metrics,
            CampaignAnalyzer(settings).analyze,
        )
    if kind == ToolKind.ACOS:
        return Tool(
            kind,
            AcosValidator(settings),
            compute_acos_metrics,
            AcosAnalyzer(settings).analyze,
        )
    if kind == ToolKind.FBA:
        return Tool(
            kind,
            FbaValidator(settings, fba_policy),
            compute_fba_metrics,
            FbaAnalyzer(settings).analyze,
        )
    if kind == ToolKind.KEYWORDS:
        return Tool(kind, KeywordValidator(settings), compute_keyword_metrics, analyze_keywords)
    if kind == ToolKind.LISTING:
        scorer = ListingScorer(settings)
        return Tool(kind, ListingValidator(settings), scorer.compute, scorer.analyze)
    if kind == ToolKind.SALES:
        estimator = SalesEstimator(settings)
        return Tool(kind, SalesValidator(settings), estimator.estimate, estimator.analyze)
    raise ValueError(f"Unknown tool: {kind}")
