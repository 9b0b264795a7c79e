"""
Balance reconciliation.

Applies account changes to the opening balance and checks every stated
account total along the way:

    B_t = B_{t-1} + amount_t
"""

from datetime import date, datetime
from typing import List, Optional

import structlog

from ..config import Settings, get_settings
from ..errors import (
    InvalidRecordDate,
    MissingBoundaryTotal,
    NotEnoughRecords,
    OrphanChange,
    TotalMismatch,
)
from ..models import Record, Value

logger = structlog.get_logger()


class BalanceReconciler:
    """Turns a document's records into a validated, dated balance series."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def _parse_date(self, text: Optional[str], record: Record) -> date:
        if text is None:
            raise InvalidRecordDate(f"record has no date: {record!r}")
        try:
            return datetime.strptime(text, self.settings.date_format).date()
        except ValueError as e:
            raise InvalidRecordDate(f"invalid date {text!r}: {record!r}") from e

    def resolve_date(self, record: Record, previous: date) -> date:
        """
        Complete a day.month date with the year of the previous value.

        A result earlier than the previous date means the statement crossed
        into a new year.
        """
        resolved = self._parse_date(f"{record.date}.{previous.year}", record)
        if resolved < previous:
            resolved = self._parse_date(f"{record.date}.{previous.year + 1}", record)
        return resolved

    def reconcile(self, records: List[Record]) -> List[Value]:
        """
        Check the records start and end with account totals, apply changes
        iteratively and verify intermediate totals.

        Returns one Value per record, in input order.
        """
        self.check_boundaries(records)
        return self.apply(records)

    @staticmethod
    def check_boundaries(records: List[Record]) -> None:
        if len(records) < 2:
            raise NotEnoughRecords(len(records))
        if not records[0].is_total:
            raise MissingBoundaryTotal(
                f"first operation is not an account record: {records[0]!r}")
        if not records[-1].is_total:
            raise MissingBoundaryTotal(
                f"last operation is not an account record: {records[-1]!r}")

    def apply(self, records: List[Record]) -> List[Value]:
        """Apply changes to the running total, checking every stated total."""
        if not records:
            return []
        values: List[Value] = []
        total = records[0].amount
        for record in records:
            if record.is_total:
                if record.amount != total:
                    raise TotalMismatch(record, expected=total, found=record.amount)
                resolved = self._parse_date(record.date, record)
            else:
                if not values:
                    raise OrphanChange(record)
                if record.amount is None:
                    logger.warning("Change record without amount", source=record.source, date=record.date)
                else:
                    total += record.amount
                resolved = self.resolve_date(record, values[-1].date)
            values.append(Value(date=resolved, source=record.source, value=total))

        logger.info(
            "Reconciled records",
            values=len(values),
            opening=values[0].value,
            closing=values[-1].value,
        )
        return values
