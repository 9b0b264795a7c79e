"""
Statement line parser.

Turns reconstructed lines into account total and account change records.
A change can span several lines, like:

    26.02 SOURCE
          SOURCE CONTINUED
          SOURCE CONTINUED  123,34

so records parsed from undated lines are merged into the previous one.
"""

import re
from typing import List, Optional, Tuple

import structlog

from ..config import Settings, get_settings
from ..errors import MalformedTotal
from ..models import Fragment, Line, Record, join_fragments

logger = structlog.get_logger()

DIGITS = re.compile(r"^\d+$")


def _is_digits(text: str) -> bool:
    return bool(DIGITS.match(text))


class RecordParser:
    """
    Parser for the transaction lines of a single content stream.

    The sign of an amount is read from its column: debits and credits are
    printed in two distinct columns split by settings.sign_column_threshold.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.total_pattern = re.compile(self.settings.total_line_pattern)

    def strip_amount(
        self,
        fragments: List[Fragment],
    ) -> Tuple[List[Fragment], Optional[int]]:
        """
        Extract a trailing amount like "123 , 45" or "12 . 345 , 67".

        Returns the remaining fragments and the signed amount in cents, or
        the fragments untouched and None.
        """
        if len(fragments) < 3:
            return fragments, None
        head, comma, cents = fragments[-3:]
        if not (_is_digits(head.text) and comma.text == ","
                and _is_digits(cents.text) and len(cents.text) == 2):
            return fragments, None

        consumed = 3
        digits = head.text + cents.text
        # Thousands group
        if (len(fragments) >= 5 and fragments[-4].text == "."
                and _is_digits(fragments[-5].text)):
            digits = fragments[-5].text + digits
            consumed = 5

        amount = int(digits)
        first = fragments[-consumed]
        if self.settings.is_debit_column(first.column):
            amount = -amount
        return fragments[:-consumed], amount

    @staticmethod
    def strip_date(fragments: List[Fragment]) -> Tuple[List[Fragment], Optional[str]]:
        """Extract a leading "13 . 06" date, returned as "13.06"."""
        if len(fragments) < 3:
            return fragments, None
        day, dot, month = fragments[:3]
        if not (_is_digits(day.text) and dot.text == "." and _is_digits(month.text)):
            return fragments, None
        return fragments[3:], day.text + dot.text + month.text

    def parse_total_line(self, line: Line) -> Optional[Record]:
        """
        Parse an account state line.

        Returns None when the line does not look like one, and raises
        MalformedTotal when it does but carries no amount.
        """
        m = self.total_pattern.search(line.value)
        if m is None:
            return None
        fragments, amount = self.strip_amount(line.fragments)
        if amount is None:
            raise MalformedTotal(line.value)
        return Record(
            date=m.group(1),
            source=join_fragments(fragments),
            source_column=None,
            amount=amount,
            is_total=True,
        )

    def parse_change_line(self, line: Line) -> Optional[Record]:
        """
        Parse an account change line, possibly partial.

        Returns None for summary lines carrying two trailing amounts.
        """
        fragments, date = self.strip_date(line.fragments)
        fragments, amount = self.strip_amount(fragments)
        _, second = self.strip_amount(fragments)
        if second is not None:
            return None
        return Record(
            date=date,
            source=join_fragments(fragments),
            source_column=fragments[0].column if fragments else None,
            amount=amount,
        )

    def parse(self, lines: List[Line]) -> List[Record]:
        """Return the records of one stream with partial records consolidated."""
        records: List[Record] = []
        for line in lines:
            if any(line.value.startswith(p) for p in self.settings.skip_line_prefixes):
                continue
            if any(line.value.startswith(p) for p in self.settings.stop_line_prefixes):
                break

            record = self.parse_total_line(line)
            if record is None:
                record = self.parse_change_line(line)
            if record is None:
                logger.debug("Skipping summary line", line=line.value)
                continue

            if record.date is not None:
                records.append(record)
            elif records:
                self._merge(records[-1], record)
        return records

    @staticmethod
    def _merge(prev: Record, record: Record) -> None:
        """Fold an undated continuation record into its predecessor."""
        if record.amount is not None and prev.amount is None:
            prev.amount = record.amount
        if not record.source or prev.is_total:
            return
        if prev.source_column is None:
            # Date-only predecessor: the first source line sets the column
            prev.source = record.source
            prev.source_column = record.source_column
        elif record.source_column == prev.source_column:
            prev.source = f"{prev.source} {record.source}"
