"""Weeds out change records printed outside the page's source column."""

from typing import Dict, List, Optional

import structlog

from ..models import Record

logger = structlog.get_logger()


def dominant_source_column(records: List[Record]) -> Optional[float]:
    """
    Return the most frequent source column.

    Ties go to the column that first reached the maximum count.
    """
    counts: Dict[float, int] = {}
    best_column: Optional[float] = None
    best_count = 0
    for record in records:
        if record.source_column is None:
            continue
        n = counts.get(record.source_column, 0) + 1
        counts[record.source_column] = n
        if n > best_count:
            best_count = n
            best_column = record.source_column
    return best_column


def filter_on_source_column(records: List[Record]) -> List[Record]:
    """
    Keep records without a source column and those in the dominant one.

    Account changes are always printed with their label in the same column,
    so change-looking lines elsewhere are layout noise.
    """
    column = dominant_source_column(records)
    kept = []
    for record in records:
        if record.source_column is None or record.source_column == column:
            kept.append(record)
        else:
            logger.debug(
                "Dropping off-column record",
                source=record.source,
                column=record.source_column,
                dominant=column,
            )
    return kept
