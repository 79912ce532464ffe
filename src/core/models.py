"""Core data models for Seller Tools."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar, Union

# Raw cell values as produced by the CSV reader or a JSON body
RawValue = Union[str, int, float, None]
RawRecord = dict[str, RawValue]

RowT = TypeVar("RowT")


class ToolKind(str, Enum):
    """Supported seller tools."""

    PPC = "ppc"
    ACOS = "acos"
    FBA = "fba"
    KEYWORDS = "keywords"
    LISTING = "listing"
    SALES = "sales"

    @classmethod
    def from_string(cls, value: str) -> "ToolKind":
        """Convert string to ToolKind enum."""
        value_lower = value.strip().lower()
        for tool in cls:
            if tool.value == value_lower:
                return tool
        raise ValueError(f"Unknown tool: {value}")

    @classmethod
    def values(cls) -> list[str]:
        """Get list of tool keys."""
        return [t.value for t in cls]


class Competition(str, Enum):
    """Competition level used by the sales estimator."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def from_string(cls, value: str) -> "Competition":
        """Convert string to Competition enum (case-insensitive)."""
        value_lower = value.strip().lower()
        for level in cls:
            if level.value.lower() == value_lower:
                return level
        raise ValueError(f"Unknown competition level: {value}")


# --- Validation outcome ---


@dataclass(frozen=True)
class Ok(Generic[RowT]):
    """A row that passed validation."""

    index: int
    row: RowT


@dataclass(frozen=True)
class SkippedRow:
    """A row that failed validation."""

    index: int
    reason: str


# --- Validated rows ---


@dataclass
class CampaignRow:
    """PPC campaign row."""

    name: str
    type: str
    spend: float
    sales: float
    impressions: int
    clicks: int

    @property
    def key(self) -> str:
        return self.name


@dataclass
class AcosRow:
    """ACoS calculator row; impressions and clicks are optional columns."""

    campaign: str
    ad_spend: float
    sales: float
    impressions: int = 0
    clicks: int = 0

    @property
    def key(self) -> str:
        return self.campaign


@dataclass
class FbaRow:
    """FBA calculator row."""

    product: str
    cost: float
    price: float
    fees: float

    @property
    def key(self) -> str:
        return self.product


@dataclass
class KeywordRow:
    """Keyword deduplicator row (keywords already split and lower-cased)."""

    product: str
    keywords: list[str] = field(default_factory=list)

    @property
    def key(self) -> str:
        return self.product


@dataclass
class ListingRow:
    """Listing quality checker row."""

    product: str
    title: str = ""
    description: str = ""
    bullet_points: list[str] = field(default_factory=list)
    images: int = 0
    keywords: list[str] = field(default_factory=list)
    brand: str = ""
    rating: float | None = None
    review_count: int | None = None

    @property
    def key(self) -> str:
        return self.product


@dataclass
class SalesRow:
    """Sales estimator row."""

    product: str
    category: str
    price: float
    competition: Competition = Competition.MEDIUM

    @property
    def key(self) -> str:
        return self.product


# --- Computed metrics ---


@dataclass
class CampaignMetrics:
    """Derived advertising ratios. Infinite values are explicit, never NaN."""

    acos: float = 0.0
    roas: float = 0.0
    ctr: float = 0.0
    cpc: float = 0.0
    conversion_rate: float = 0.0


@dataclass
class FbaMetrics:
    """FBA profit figures."""

    profit: float = 0.0
    roi: float = 0.0
    margin: float = 0.0


@dataclass
class KeywordMetrics:
    """Deduplication outcome."""

    cleaned_keywords: list[str] = field(default_factory=list)
    duplicates_removed: int = 0


@dataclass
class ListingMetrics:
    """Listing quality score (0-100)."""

    score: int = 0
    analysis: AnalysisResult | None = field(default=None, repr=False, compare=False)


@dataclass
class SalesMetrics:
    """Monthly sales estimate."""

    estimated_sales: int = 0
    estimated_revenue: float = 0.0
    confidence: str = "Medium"


# --- Analysis and results ---


@dataclass
class AnalysisResult:
    """Issues and recommendations for one row. Never empty after analysis."""

    issues: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def extend(self, other: "AnalysisResult") -> None:
        """Append another result's lines to this one."""
        self.issues.extend(other.issues)
        self.recommendations.extend(other.recommendations)


@dataclass
class ToolResult:
    """One validated row merged with its metrics and analysis."""

    index: int
    row: object
    metrics: object
    analysis: AnalysisResult = field(default_factory=AnalysisResult)

    @property
    def key(self) -> str:
        return getattr(self.row, "key", "")


@dataclass
class PipelineResult:
    """Result of a batch pipeline run."""

    tool: ToolKind = ToolKind.PPC
    results: list[ToolResult] = field(default_factory=list)
    skipped: list[SkippedRow] = field(default_factory=list)
    rows_read: int = 0

    @property
    def rows_processed(self) -> int:
        return len(self.results)

    @property
    def rows_skipped(self) -> int:
        return len(self.skipped)

    def summary(self) -> str:
        """Human-readable processing summary."""
        message = f"Successfully processed {self.rows_processed} rows."
        if self.skipped:
            message += f" Skipped {self.rows_skipped} invalid rows."
        return message
