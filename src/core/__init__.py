"""Core business logic for Seller Tools."""

from .config import Settings
from .models import (
    AnalysisResult,
    Competition,
    Ok,
    PipelineResult,
    SkippedRow,
    ToolKind,
    ToolResult,
)
from .pipeline import (
    BatchPipeline,
    CsvParseError,
    EmptyFileError,
    FileTooLargeError,
    MissingColumnsError,
    NoValidRowsError,
    PipelineError,
)
from .session import DuplicateEntryError, ResultSession
from .inventory import InventoryCalculator, InventoryStatus
from .pricing import calculate_optimal_price, calculate_product_score

__all__ = [
    "Settings",
    "AnalysisResult",
    "Competition",
    "Ok",
    "PipelineResult",
    "SkippedRow",
    "ToolKind",
    "ToolResult",
    "BatchPipeline",
    "PipelineError",
    "CsvParseError",
    "EmptyFileError",
    "FileTooLargeError",
    "MissingColumnsError",
    "NoValidRowsError",
    "DuplicateEntryError",
    "ResultSession",
    "InventoryCalculator",
    "InventoryStatus",
    "calculate_optimal_price",
    "calculate_product_score",
]
