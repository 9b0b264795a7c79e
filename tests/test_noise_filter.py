"""
Tests for source column filtering and cross-page deduplication.
"""

from statement_series.models import Record
from statement_series.reconciliation.dedup import deduplicate
from statement_series.reconciliation.noise_filter import (
    dominant_source_column,
    filter_on_source_column,
)


def change(column, source="X", date="01.01", amount=-100):
    return Record(date=date, source=source, source_column=column, amount=amount)


def total(amount=1000, date="31.12.2020"):
    return Record(date=date, source="SOLDE", amount=amount, is_total=True)


class TestNoiseFilter:
    """Test suite for the majority vote on source columns."""

    def test_majority_column_wins(self):
        opening = total()
        records = [opening, change(100), change(100), change(250), change(100)]

        kept = filter_on_source_column(records)

        assert len(kept) == 4
        assert kept[0] is opening
        assert all(r.source_column in (None, 100) for r in kept)

    def test_ties_keep_first_maximum(self):
        assert dominant_source_column([change(250), change(100), change(100), change(250)]) == 100
        assert dominant_source_column([change(100), change(250)]) == 100

    def test_totals_only(self):
        records = [total(), total(date="31.01.2021")]

        assert dominant_source_column(records) is None
        assert filter_on_source_column(records) == records

    def test_order_is_preserved(self):
        records = [change(100, "A"), change(300, "noise"), total(), change(100, "B")]

        kept = filter_on_source_column(records)

        assert [r.source for r in kept] == ["A", "SOLDE", "B"]


class TestDeduplicate:
    """Test suite for overflow page duplicates."""

    def test_repeated_records_kept_once(self):
        first_page = [total(), change(100, "A"), change(100, "B"), change(100, "C")]
        second_page = [change(100, "A"), change(100, "B"), change(100, "C"),
                       total(amount=700, date="31.01.2021")]

        records = deduplicate([first_page, second_page])

        assert [r.source for r in records] == ["SOLDE", "A", "B", "C", "SOLDE"]
        assert records[1] is first_page[1]

    def test_key_includes_amount_and_date(self):
        pages = [[change(100, "A", amount=-100)],
                 [change(100, "A", amount=-200), change(100, "A", date="02.01", amount=-100)]]

        assert len(deduplicate(pages)) == 3

    def test_empty(self):
        assert deduplicate([[], []]) == []
