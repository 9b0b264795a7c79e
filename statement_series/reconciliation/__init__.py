"""Record consolidation and balance reconciliation components."""

from .noise_filter import filter_on_source_column
from .dedup import deduplicate
from .balance import BalanceReconciler
from .orchestrator import BatchResult, StatementOrchestrator

__all__ = [
    "filter_on_source_column",
    "deduplicate",
    "BalanceReconciler",
    "BatchResult",
    "StatementOrchestrator",
]
