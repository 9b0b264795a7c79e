"""
Tests for balance reconciliation.
"""

from datetime import date

import pytest

from statement_series.errors import (
    InvalidRecordDate,
    MissingBoundaryTotal,
    NotEnoughRecords,
    OrphanChange,
    TotalMismatch,
)
from statement_series.models import Record
from statement_series.reconciliation.balance import BalanceReconciler


@pytest.fixture
def reconciler(settings):
    return BalanceReconciler(settings)


def total(date_text, amount, source="SOLDE"):
    return Record(date=date_text, source=source, amount=amount, is_total=True)


def change(date_text, amount, source="OP"):
    return Record(date=date_text, source=source, source_column=100, amount=amount)


class TestBalanceReconciler:
    """Test suite for the running total checks."""

    def test_series(self, reconciler):
        records = [
            total("01.03.2021", 10000),
            change("03.03", -2500, "CB"),
            change("10.03", 500, "VIR"),
            total("31.03.2021", 8000),
        ]

        values = reconciler.reconcile(records)

        assert [v.value for v in values] == [10000, 7500, 8000, 8000]
        assert [v.date for v in values] == [
            date(2021, 3, 1), date(2021, 3, 3), date(2021, 3, 10), date(2021, 3, 31)]
        assert [v.source for v in values] == ["SOLDE", "CB", "VIR", "SOLDE"]
        assert values[-1].value == records[-1].amount

    def test_year_rollover(self, reconciler):
        records = [
            total("31.12.2020", 1000),
            change("02.01", -100),
            total("31.01.2021", 900),
        ]

        values = reconciler.reconcile(records)

        assert values[1].date == date(2021, 1, 2)

    def test_same_day_keeps_year(self, reconciler):
        records = [total("31.12.2020", 1000), change("31.12", 5), total("31.12.2020", 1005)]

        assert reconciler.reconcile(records)[1].date == date(2020, 12, 31)

    def test_missing_opening_total(self, reconciler):
        records = [change("02.01", -100), total("31.01.2021", 900)]

        with pytest.raises(MissingBoundaryTotal, match="first operation"):
            reconciler.reconcile(records)

    def test_missing_closing_total(self, reconciler):
        records = [total("31.12.2020", 1000), change("02.01", -100)]

        with pytest.raises(MissingBoundaryTotal, match="last operation"):
            reconciler.reconcile(records)

    def test_not_enough_records(self, reconciler):
        with pytest.raises(NotEnoughRecords):
            reconciler.reconcile([total("31.12.2020", 1000)])

    def test_total_mismatch(self, reconciler):
        records = [total("31.12.2020", 1000), change("02.01", -100), total("31.01.2021", 1000)]

        with pytest.raises(TotalMismatch) as exc_info:
            reconciler.reconcile(records)

        assert exc_info.value.expected == 900
        assert exc_info.value.found == 1000

    def test_invalid_date(self, reconciler):
        records = [total("31.12.2020", 1000), change("32.01", -100), total("31.01.2021", 900)]

        with pytest.raises(InvalidRecordDate):
            reconciler.reconcile(records)

    def test_change_without_amount_keeps_balance(self, reconciler):
        records = [total("01.03.2021", 1000), change("02.03", None), total("31.03.2021", 1000)]

        values = reconciler.reconcile(records)

        assert values[1].value == 1000

    def test_orphan_change(self, reconciler):
        with pytest.raises(OrphanChange):
            reconciler.apply([change("02.01", -100), total("31.01.2021", 900)])

