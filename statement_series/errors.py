"""Exceptions raised while extracting and reconciling statements."""

from typing import Optional


class StatementError(Exception):
    """Base class for all statement processing failures."""


class UnsupportedFilter(StatementError):
    """A stream declares a compression filter we cannot decode."""

    def __init__(self, filter_name: str):
        super().__init__(f"unknown stream filter: {filter_name}")
        self.filter_name = filter_name


class TokenizeError(StatementError):
    """A content stream could not be tokenized. Raw bytes are kept in data."""

    def __init__(self, message: str, data: bytes = b""):
        super().__init__(f"could not tokenize: {message}")
        self.data = data


class MalformedTotal(StatementError):
    """A line looks like an account total but carries no trailing amount."""

    def __init__(self, line: str):
        super().__init__(f"could not parse total line: {line}")
        self.line = line


class InvalidRecordDate(StatementError):
    """A record date cannot be turned into a calendar date."""


class MissingBoundaryTotal(StatementError):
    """The record sequence does not start and end with an account total."""


class NotEnoughRecords(MissingBoundaryTotal):
    """Fewer than two records were extracted from a document."""

    def __init__(self, count: int):
        super().__init__(f"not enough operations in report: {count}")
        self.count = count


class TotalMismatch(StatementError):
    """A stated account total disagrees with the running total."""

    def __init__(self, record, expected: int, found: int):
        super().__init__(
            f"running total does not match account record {record!r}: "
            f"{found} != {expected}"
        )
        self.record = record
        self.expected = expected
        self.found = found


class OrphanChange(StatementError):
    """A change record appears before any dated record."""

    def __init__(self, record):
        super().__init__(f"operation without an account record: {record!r}")
        self.record = record


class BatchFailed(StatementError):
    """One or more documents of a batch failed."""

    def __init__(self, failed: int, total: Optional[int] = None):
        super().__init__(f"{failed} reports failed")
        self.failed = failed
        self.total = total


class CorruptStream(StatementError):
    """A stream declared a filter but its bytes do not decode with it."""
