"""Batch pipeline: CSV ingestion, header checks and per-row processing."""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Iterable

from .config import FbaValidationPolicy, Settings
from .models import Ok, PipelineResult, RawRecord, SkippedRow, ToolKind, ToolResult
from .tools import Tool, build_tool

logger = logging.getLogger(__name__)


class PipelineError(Exception):
    """Base class for structural failures that abort a whole run."""


class CsvParseError(PipelineError):
    """Raised when the input cannot be read as CSV."""


class MissingColumnsError(PipelineError):
    """Raised when required columns are absent from the header row."""

    def __init__(self, message: str, missing_headers: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing_headers = missing_headers or []


class EmptyFileError(PipelineError):
    """Raised when the input has no data rows."""

    def __init__(self, message: str = "The uploaded CSV file appears to be empty or contains no data rows.") -> None:
        super().__init__(message)


class NoValidRowsError(PipelineError):
    """Raised when every data row failed validation."""

    def __init__(self, rows_read: int, skipped: list[SkippedRow] | None = None) -> None:
        super().__init__(
            f"No valid data found after processing {rows_read} rows. "
            "Please check the CSV format."
        )
        self.rows_read = rows_read
        self.skipped = skipped or []


class FileTooLargeError(PipelineError):
    """Raised when an upload exceeds the configured size limit."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            f"File is too large ({size / 1024 / 1024:.1f}MB). "
            f"Maximum size is {limit // 1024 // 1024}MB."
        )
        self.size = size
        self.limit = limit


def read_csv_text(text: str) -> tuple[list[str], list[RawRecord]]:
    """Parse CSV text into (headers, records).

    Blank lines are skipped and a leading BOM is tolerated.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    try:
        reader = csv.DictReader(io.StringIO(text, newline=""))
        headers = [h.strip() for h in reader.fieldnames or []]
        records: list[RawRecord] = []
        for row in reader:
            # Extra cells beyond the header land under the None key
            record = {
                key.strip(): value
                for key, value in row.items()
                if key is not None and not isinstance(value, list)
            }
            if all(value is None or not str(value).strip() for value in record.values()):
                continue
            records.append(record)
    except csv.Error as e:
        raise CsvParseError(f"Failed to parse CSV: {e}") from e

    return headers, records


class BatchPipeline:
    """Runs one tool over a batch of raw records.

    Structural problems (missing columns, no rows, no valid rows) raise a
    ``PipelineError``; invalid rows are reported as ``SkippedRow`` values and
    processing continues.
    """

    def __init__(
        self,
        tool: ToolKind | str,
        settings: Settings | None = None,
        fba_policy: FbaValidationPolicy | None = None,
    ) -> None:
        if isinstance(tool, str) and not isinstance(tool, ToolKind):
            tool = ToolKind.from_string(tool)
        self.settings = settings or Settings()
        self.tool: Tool = build_tool(tool, self.settings, fba_policy)

    @property
    def kind(self) -> ToolKind:
        return self.tool.kind

    def header_map(self, headers: Iterable[str]) -> dict[str, str]:
        """Map each present header to its canonical column name, ignoring case."""
        canonical = {name.lower(): name for name in self.tool.known_headers}
        mapping: dict[str, str] = {}
        for header in headers:
            name = canonical.get(header.strip().lower())
            if name and name not in mapping.values():
                mapping[header] = name
        return mapping

    def validate_headers(self, headers: Iterable[str]) -> dict[str, str]:
        """Check required columns and return the header mapping."""
        mapping = self.header_map(headers)
        present = set(mapping.values())
        required = self.tool.required_headers
        missing = [h for h in required if h not in present]

        if missing:
            raise MissingColumnsError(
                f"Missing required columns: {', '.join(missing)}. "
                f"Required columns are: {', '.join(required)}",
                missing_headers=missing,
            )
        return mapping

    @staticmethod
    def canonicalize(record: RawRecord, mapping: dict[str, str]) -> RawRecord:
        return {mapping[key]: value for key, value in record.items() if key in mapping}

    def process_record(self, raw: RawRecord, index: int) -> ToolResult | SkippedRow:
        """Validate, compute and analyze a single canonical record."""
        outcome = self.tool.validator.validate(raw, index)
        if not isinstance(outcome, Ok):
            return outcome

        metrics = self.tool.compute(outcome.row)
        analysis = self.tool.analyze(outcome.row, metrics)
        return ToolResult(index=index, row=outcome.row, metrics=metrics, analysis=analysis)

    def run(self, records: list[RawRecord], headers: Iterable[str] | None = None) -> PipelineResult:
        """Process records in order.

        ``headers`` defaults to the keys of the first record. Missing columns
        are reported before an empty body.
        """
        if headers is None:
            if not records:
                raise EmptyFileError()
            headers = list(records[0].keys())
        else:
            headers = list(headers)
            if not headers:
                raise EmptyFileError()

        mapping = self.validate_headers(headers)
        if not records:
            raise EmptyFileError()

        result = PipelineResult(tool=self.kind, rows_read=len(records))
        for index, record in enumerate(records):
            outcome = self.process_record(self.canonicalize(record, mapping), index)
            if isinstance(outcome, SkippedRow):
                logger.warning(f"{self.kind.value}: skipped row {index}: {outcome.reason}")
                result.skipped.append(outcome)
            else:
                result.results.append(outcome)

        if not result.results:
            raise NoValidRowsError(len(records), result.skipped)

        logger.info(
            f"{self.kind.value}: processed {result.rows_processed} of {result.rows_read} rows, "
            f"skipped {result.rows_skipped}"
        )
        return result

    def run_text(self, text: str) -> PipelineResult:
        """Run over CSV text."""
        size = len(text.encode("utf-8"))
        if size > self.settings.max_upload_bytes:
            raise FileTooLargeError(size, self.settings.max_upload_bytes)

        headers, records = read_csv_text(text)
        return self.run(records, headers)

    def run_file(self, file_path: str | Path) -> PipelineResult:
        """Run over a CSV file on disk."""
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        size = path.stat().st_size
        if size > self.settings.max_upload_bytes:
            raise FileTooLargeError(size, self.settings.max_upload_bytes)

        try:
            text = path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as e:
            raise CsvParseError(f"File is not valid UTF-8: {e}") from e

        logger.info(f"Reading {self.kind.value} CSV from {path}")
        return self.run_text(text)
