"""Export functionality for Seller Tools."""

from __future__ import annotations

import csv
import io
import math
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

import pandas as pd
from openpyxl.utils import get_column_letter

from src.core.models import ToolKind, ToolResult

ISSUE_SEPARATOR = "; "
KEYWORD_SEPARATOR = ", "


def format_number(value: float | int | None) -> str:
    """Two-decimal text for finite numbers, 'Infinity'/'-Infinity' otherwise."""
    if value is None:
        return ""
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return f"{value:.2f}"


def _join(values: list[str], separator: str = ISSUE_SEPARATOR) -> str:
    return separator.join(values)


Column = tuple[str, Callable[[ToolResult], Any]]

_ANALYSIS_COLUMNS: list[Column] = [
    ("Issues", lambda r: _join(r.analysis.issues)),
    ("Recommendations", lambda r: _join(r.analysis.recommendations)),
]

COLUMNS: dict[ToolKind, list[Column]] = {
    ToolKind.PPC: [
        ("Name", lambda r: r.row.name),
        ("Type", lambda r: r.row.type),
        ("Spend", lambda r: format_number(r.row.spend)),
        ("Sales", lambda r: format_number(r.row.sales)),
        ("ACoS_Percent", lambda r: format_number(r.metrics.acos)),
        ("ROAS", lambda r: format_number(r.metrics.roas)),
        ("Impressions", lambda r: r.row.impressions),
        ("Clicks", lambda r: r.row.clicks),
        ("CTR_Percent", lambda r: format_number(r.metrics.ctr)),
        ("CPC", lambda r: format_number(r.metrics.cpc)),
        ("ConversionRate_Percent", lambda r: format_number(r.metrics.conversion_rate)),
        *_ANALYSIS_COLUMNS,
    ],
    ToolKind.ACOS: [
        ("campaign", lambda r: r.row.campaign),
        ("adSpend", lambda r: format_number(r.row.ad_spend)),
        ("sales", lambda r: format_number(r.row.sales)),
        ("acos", lambda r: format_number(r.metrics.acos)),
        ("roas", lambda r: format_number(r.metrics.roas)),
        ("impressions", lambda r: r.row.impressions),
        ("clicks", lambda r: r.row.clicks),
        ("ctr", lambda r: format_number(r.metrics.ctr)),
        ("cpc", lambda r: format_number(r.metrics.cpc)),
        ("conversionRate", lambda r: format_number(r.metrics.conversion_rate)),
        *_ANALYSIS_COLUMNS,
    ],
    ToolKind.FBA: [
        ("product", lambda r: r.row.product),
        ("cost", lambda r: format_number(r.row.cost)),
        ("price", lambda r: format_number(r.row.price)),
        ("fees", lambda r: format_number(r.row.fees)),
        ("profit", lambda r: format_number(r.metrics.profit)),
        ("roi", lambda r: format_number(r.metrics.roi)),
        ("margin", lambda r: format_number(r.metrics.margin)),
        *_ANALYSIS_COLUMNS,
    ],
    ToolKind.KEYWORDS: [
        ("Product", lambda r: r.row.product),
        ("Original_Keywords", lambda r: _join(r.row.keywords, KEYWORD_SEPARATOR)),
        ("Cleaned_Keywords", lambda r: _join(r.metrics.cleaned_keywords, KEYWORD_SEPARATOR)),
        ("Duplicates_Removed", lambda r: r.metrics.duplicates_removed),
    ],
    ToolKind.LISTING: [
        ("product", lambda r: r.row.product),
        ("title", lambda r: r.row.title),
        ("description", lambda r: r.row.description),
        ("bullet_points", lambda r: _join(r.row.bullet_points)),
        ("images", lambda r: r.row.images),
        ("keywords", lambda r: _join(r.row.keywords, KEYWORD_SEPARATOR)),
        ("brand", lambda r: r.row.brand),
        ("rating", lambda r: format_number(r.row.rating)),
        ("review_count", lambda r: "" if r.row.review_count is None else r.row.review_count),
        ("score", lambda r: r.metrics.score),
        *_ANALYSIS_COLUMNS,
    ],
    ToolKind.SALES: [
        ("product", lambda r: r.row.product),
        ("category", lambda r: r.row.category),
        ("price", lambda r: format_number(r.row.price)),
        ("competition", lambda r: r.row.competition.value),
        ("estimatedSales", lambda r: r.metrics.estimated_sales),
        ("estimatedRevenue", lambda r: format_number(r.metrics.estimated_revenue)),
        ("confidence", lambda r: r.metrics.confidence),
    ],
}


class Exporter:
    """Flattens tool results to CSV and Excel."""

    @staticmethod
    def get_headers(tool: ToolKind) -> list[str]:
        return [header for header, _ in COLUMNS[tool]]

    @staticmethod
    def results_to_dict(results: list[ToolResult], tool: ToolKind) -> list[dict[str, Any]]:
        """Convert results to ordered dictionaries for export."""
        columns = COLUMNS[tool]
        return [{header: getter(r) for header, getter in columns} for r in results]

    @classmethod
    def to_csv(cls, results: list[ToolResult], tool: ToolKind) -> str:
        """Serialize results to CSV text with a fixed column order."""
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=cls.get_headers(tool), lineterminator="\n")
        writer.writeheader()
        writer.writerows(cls.results_to_dict(results, tool))
        return buffer.getvalue()

    @classmethod
    def export_to_csv(cls, results: list[ToolResult], tool: ToolKind, file_path: str | Path) -> None:
        """Export results to a CSV file."""
        path = Path(file_path)
        with open(path, "w", newline="", encoding="utf-8") as f:
            f.write(cls.to_csv(results, tool))

    @classmethod
    def export_to_xlsx(cls, results: list[ToolResult], tool: ToolKind, file_path: str | Path) -> None:
        """Export results to Excel."""
        df = pd.DataFrame(cls.results_to_dict(results, tool), columns=cls.get_headers(tool))
        sheet_name = tool.value.upper()

        path = Path(file_path)
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name=sheet_name)

            # Auto-adjust column widths
            worksheet = writer.sheets[sheet_name]
            for i, col in enumerate(df.columns, start=1):
                values = df[col].astype(str).apply(len)
                max_length = max(values.max() if len(values) else 0, len(col))
                worksheet.column_dimensions[get_column_letter(i)].width = min(max_length + 2, 50)

    @classmethod
    def generate_filename(cls, tool: ToolKind, extension: str) -> str:
        """Generate a timestamped filename for export."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return f"{tool.value}_results_{timestamp}.{extension}"
