"""Tests for the CSV export tables."""

from datetime import date, datetime

from bisnisflow.exports import cashflow_frame, performance_frame, recap_frame, stock_frame, transactions_frame
from bisnisflow.ledger import DateRange, cashflow_timeline, product_performance, recap_summary
from bisnisflow.models import BusinessMode, Expense, ExpenseCategory, OrderStatus, Product

from conftest import make_txn

JUNE = DateRange.of(date(2025, 6, 1), date(2025, 6, 30))


class TestTransactionsFrame:
    def test_rows_filtered_by_range_and_mode(self):
        txns = [
            make_txn("o1", datetime(2025, 6, 3, 9, 15), status=OrderStatus.SENT, tracking_number="JN1"),
            make_txn("r1", datetime(2025, 6, 4), mode=BusinessMode.RETAIL, payment="Cash"),
            make_txn("o2", datetime(2025, 7, 1), status=OrderStatus.SENT),
        ]
        df = transactions_frame(txns, JUNE, BusinessMode.ONLINE)

        assert list(df["Transaction ID"]) == ["o1"]
        row = df.iloc[0]
        assert row["Date"] == "03/06/2025"
        assert row["Time"] == "09:15:00"
        assert row["Status"] == "Sent"
        assert row["Tracking"] == "JN1"
        assert row["Items"] == "Kopi Susu (1)"

    def test_retail_rows_show_dash_for_online_fields(self):
        df = transactions_frame([make_txn("r1", datetime(2025, 6, 4), mode=BusinessMode.RETAIL)], JUNE)
        assert df.iloc[0]["Status"] == "-"
        assert df.iloc[0]["Tracking"] == "-"

    def test_empty_has_header(self):
        df = transactions_frame([], JUNE)
        assert df.empty
        assert "Net Profit" in df.columns


class TestOtherFrames:
    def test_recap_frame(self):
        txns = [make_txn("o1", datetime(2025, 6, 3), revenue=100000, cost=40000)]
        expenses = [Expense("e1", datetime(2025, 6, 3), ExpenseCategory.MARKETING, 20000, "Ads")]
        df = recap_frame(recap_summary(txns, expenses, JUNE), JUNE)

        values = dict(zip(df["Metric"], df["Value"]))
        assert values["Period"] == "2025-06-01 to 2025-06-30"
        assert values["Net Profit"] == 40000
        assert values["ROAS"] == "5.00"

    def test_performance_frame(self):
        txns = [make_txn("o1", datetime(2025, 6, 3))]
        df = performance_frame(product_performance(txns, JUNE))
        assert list(df.columns) == ["Product", "Qty Sold", "Revenue", "Gross Profit", "Transactions"]
        assert df.iloc[0]["Product"] == "Kopi Susu"

    def test_performance_frame_empty(self):
        assert performance_frame([]).empty

    def test_cashflow_frame(self):
        txns = [make_txn("o1", datetime(2025, 6, 3), revenue=100000)]
        expenses = [Expense("e1", datetime(2025, 6, 5), ExpenseCategory.RENT, 40000, "Sewa")]
        df = cashflow_frame(cashflow_timeline(txns, expenses, JUNE))
        assert list(df["Type"]) == ["Expense", "Income"]
        assert list(df["Amount (Rp)"]) == [-40000, 100000]

    def test_stock_frame_status(self):
        products = [
            Product("p1", "Kopi", "Minuman", 1, 2, 50, 10),
            Product("p2", "Roti", "Makanan", 1, 2, 10, 10),
        ]
        df = stock_frame(products)
        assert list(df["Status"]) == ["OK", "Low Stock"]
