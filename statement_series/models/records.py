"""Record and value models for statement reconciliation."""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional, Tuple


@dataclass
class Record:
    """
    A transaction candidate parsed from one or more statement lines.

    Total records are account snapshots: they always carry an amount and a
    full day.month.year date. Change records move the balance and may be
    partial (date only, source only, source and amount) until merged with
    the following lines. All amounts are in CENTS.
    """
    date: Optional[str] = None
    source: str = ""
    source_column: Optional[float] = None  # None for total records
    amount: Optional[int] = None
    is_total: bool = False

    @property
    def has_amount(self) -> bool:
        return self.amount is not None

    def dedup_key(self) -> Tuple[Optional[str], str, Optional[int]]:
        """Identity used to drop transactions repeated on overflow pages."""
        return (self.date, self.source, self.amount)


@dataclass(frozen=True)
class Value:
    """
    Account balance after applying the operation described by source.

    value is expressed in CENTS.
    """
    date: date
    source: str
    value: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "source": self.source,
            "value": self.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Value":
        return cls(
            date=date.fromisoformat(data["date"]),
            source=data["source"],
            value=int(data["value"]),
        )
