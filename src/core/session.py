"""Manual entry session: the result collection held between user actions."""

from __future__ import annotations

import logging

from .config import Settings
from .models import PipelineResult, RawRecord, SkippedRow, ToolKind, ToolResult
from .pipeline import BatchPipeline

logger = logging.getLogger(__name__)


class DuplicateEntryError(ValueError):
    """Raised when a manual entry reuses an existing product or campaign name."""

    def __init__(self, name: str) -> None:
        super().__init__(f'An entry named "{name}" already exists')
        self.name = name


class ResultSession:
    """Holds the current results for one tool.

    An upload replaces the collection; manual entries are appended one at a
    time after validation with the manual-entry policy.
    """

    def __init__(self, tool: ToolKind | str, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self.pipeline = BatchPipeline(
            tool,
            self.settings,
            fba_policy=self.settings.validation.fba_manual,
        )
        self.results: list[ToolResult] = []

    @property
    def tool(self) -> ToolKind:
        return self.pipeline.kind

    def __len__(self) -> int:
        return len(self.results)

    def replace(self, result: PipelineResult) -> None:
        """Replace the collection with an upload's results."""
        self.results = list(result.results)
        logger.info(f"{self.tool.value}: session replaced with {len(self.results)} results")

    def contains(self, name: str) -> bool:
        """Case-insensitive check for an existing entry name."""
        wanted = name.strip().lower()
        return any(r.key.strip().lower() == wanted for r in self.results)

    def add_manual(self, raw: RawRecord) -> ToolResult | SkippedRow:
        """Validate and append one manual entry.

        Returns the new result, or the ``SkippedRow`` explaining why the
        entry was rejected. Raises ``DuplicateEntryError`` for a name that is
        already in the collection.
        """
        mapping = self.pipeline.header_map(raw.keys())
        outcome = self.pipeline.process_record(
            self.pipeline.canonicalize(raw, mapping), len(self.results)
        )
        if isinstance(outcome, SkippedRow):
            return outcome

        if self.contains(outcome.key):
            raise DuplicateEntryError(outcome.key)

        self.results.append(outcome)
        return outcome

    def clear(self) -> None:
        self.results = []
