"""Cross-page deduplication of statement records."""

from typing import List

import structlog

from ..models import Record

logger = structlog.get_logger()


def deduplicate(pages: List[List[Record]]) -> List[Record]:
    """
    Flatten per-page records in page order, keeping first occurrences.

    Statements repeat transactions at the top of overflow pages; records are
    compared on date, source and amount.
    """
    seen = set()
    records: List[Record] = []
    for page_number, page in enumerate(pages, start=1):
        for record in page:
            key = record.dedup_key()
            if key in seen:
                logger.debug("Dropping duplicate record", page=page_number, source=record.source)
                continue
            seen.add(key)
            records.append(record)
    return records
