"""
Statement Orchestrator - Main pipeline coordinator.

Runs each document through the full pipeline:
1. Per-page extraction (streams, tokens, lines, records)
2. Noise filtering on the dominant source column
3. Cross-page deduplication
4. Balance reconciliation

Documents are independent: one failing document does not stop the batch.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

import structlog
from pdfminer.psparser import PSException

from ..config import Settings, get_settings
from ..errors import BatchFailed, StatementError
from ..ingestion import PageExtractor, iter_page_roots
from ..models import Record, Value
from .balance import BalanceReconciler
from .dedup import deduplicate
from .noise_filter import filter_on_source_column

logger = structlog.get_logger()

PathLike = Union[str, Path]


@dataclass
class DocumentFailure:
    """A document which could not be turned into values."""
    path: str
    error: Exception


@dataclass
class DocumentResult:
    """Values extracted from one document."""
    path: str
    values: List[Value]


@dataclass
class BatchResult:
    """Outcome of processing several documents."""
    documents: List[DocumentResult] = field(default_factory=list)
    failures: List[DocumentFailure] = field(default_factory=list)

    @property
    def values(self) -> List[Value]:
        return [v for d in self.documents for v in d.values]

    @property
    def processed(self) -> int:
        return len(self.documents) + len(self.failures)

    @property
    def failed(self) -> int:
        return len(self.failures)

    def raise_for_failures(self) -> None:
        if self.failures:
            raise BatchFailed(self.failed, self.processed)


class StatementOrchestrator:
    """Main orchestrator for the statement pipeline."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.page_extractor = PageExtractor(self.settings)
        self.reconciler = BalanceReconciler(self.settings)

    def extract_records(self, path: PathLike) -> List[Record]:
        """Return the filtered, deduplicated records of a PDF statement."""
        pages: List[List[Record]] = []
        with open(path, "rb") as fp:
            for page_number, root in enumerate(iter_page_roots(fp), start=1):
                records = filter_on_source_column(self.page_extractor.extract_page(root))
                logger.debug("Parsed page", path=str(path), page=page_number, records=len(records))
                pages.append(records)
        return deduplicate(pages)

    def extract_document_values(self, path: PathLike) -> List[Value]:
        """Run one document through the whole pipeline."""
        return self.reconciler.reconcile(self.extract_records(path))

    def extract_file_values(self, paths: List[PathLike]) -> BatchResult:
        """
        Process documents one after the other, collecting failures.

        Values of successful documents are kept when others fail.
        """
        result = BatchResult()
        for path in paths:
            try:
                values = self.extract_document_values(path)
            except (StatementError, PSException, OSError) as e:
                logger.error("Report failed", path=str(path), error=str(e))
                result.failures.append(DocumentFailure(path=str(path), error=e))
                continue
            result.documents.append(DocumentResult(path=str(path), values=values))

        logger.info(
            "Batch complete",
            processed=result.processed,
            failed=result.failed,
            values=len(result.values),
        )
        return result
