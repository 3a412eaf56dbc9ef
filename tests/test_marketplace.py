"""Tests for the marketplace import pipeline.

Covers:
- Status classification per marketplace, cancellation override
- Column resolution by header substring, mandatory columns
- Order aggregation: grouping, cancellation zeroing, first-seen order
- Sheet reading (CSV bytes) and the full parse
- Preview statistics
- Reconciliation against existing transactions
"""

import io

import pytest

from bisnisflow.errors import EmptySheetError, UnrecognizedFormatError
from bisnisflow.marketplace import (
    ColumnMap,
    aggregate_orders,
    classify_status,
    parse_marketplace_file,
    preview_stats,
    read_sheet,
    reconcile,
    resolve_columns,
    to_number,
)
from bisnisflow.models import BusinessMode, Marketplace, OrderStatus
from bisnisflow.settings import ImportPolicy

from conftest import make_txn

SHOPEE_HEADER = ["No. Pesanan", "Status Pesanan", "Nama Produk", "Jumlah Produk", "Harga Awal",
                 "Total Pembayaran"]

# ---------------------------------------------------------------------------
# Status classification
# ---------------------------------------------------------------------------


class TestClassifyStatus:
    """Free-text status to OrderStatus."""

    @pytest.mark.parametrize("raw", [
        "Selesai (Pengembalian Dana)",
        "Dibatalkan oleh pembeli",
        "Cancelled",
        "Pengiriman Gagal",
        "Return/Refund",
        "Paket dikembalikan",
    ])
    def test_cancellation_keywords_win(self, raw):
        """Any cancel/refund fragment beats every other keyword."""
        for market in Marketplace:
            assert classify_status(raw, market) == OrderStatus.CANCELLED

    @pytest.mark.parametrize("market, raw, expected", [
        (Marketplace.SHOPEE, "Selesai", OrderStatus.COMPLETED),
        (Marketplace.SHOPEE, "Sedang Dikirim", OrderStatus.SENT),
        (Marketplace.SHOPEE, "Sedang Dikemas", OrderStatus.PACKING),
        (Marketplace.TIKTOK, "Completed", OrderStatus.COMPLETED),
        (Marketplace.TIKTOK, "In transit", OrderStatus.SENT),
        (Marketplace.TIKTOK, "Awaiting shipment", OrderStatus.PACKING),
        (Marketplace.TOKOPEDIA, "Pesanan Selesai", OrderStatus.COMPLETED),
        (Marketplace.TOKOPEDIA, "Dalam Pengiriman", OrderStatus.SENT),
        (Marketplace.TOKOPEDIA, "Pesanan Baru", OrderStatus.PACKING),
        (Marketplace.LAZADA, "Delivered", OrderStatus.COMPLETED),
        (Marketplace.LAZADA, "Shipped", OrderStatus.SENT),
        (Marketplace.LAZADA, "Ready to ship", OrderStatus.PACKING),
    ])
    def test_marketplace_vocabulary(self, market, raw, expected):
        assert classify_status(raw, market) == expected

    def test_case_and_whitespace_are_ignored(self):
        assert classify_status("   SELESAI  ", Marketplace.SHOPEE) == OrderStatus.COMPLETED

    @pytest.mark.parametrize("raw", ["", None, "Belum Bayar", "unpaid"])
    def test_unknown_falls_back_to_pending(self, raw):
        assert classify_status(raw, Marketplace.SHOPEE) == OrderStatus.PENDING

    def test_vocabulary_is_per_marketplace(self):
        """'delivered' only means Completed for Lazada."""
        assert classify_status("Delivered", Marketplace.LAZADA) == OrderStatus.COMPLETED
        assert classify_status("Delivered", Marketplace.SHOPEE) == OrderStatus.PENDING


# ---------------------------------------------------------------------------
# Column resolution
# ---------------------------------------------------------------------------


class TestResolveColumns:
    def test_shopee_header(self):
        cols = resolve_columns(SHOPEE_HEADER + ["No. Resi"], Marketplace.SHOPEE)
        assert cols == ColumnMap(order_id=0, status=1, product_name=2, quantity=3,
                                 unit_price=4, total_amount=5, tracking_number=6)

    def test_optional_columns_default_to_minus_one(self):
        cols = resolve_columns(["Order ID", "Order Status"], Marketplace.TIKTOK)
        assert cols.order_id == 0
        assert cols.status == 1
        assert cols.quantity == -1
        assert cols.tracking_number == -1

    def test_tokopedia_invoice_header(self):
        cols = resolve_columns(["Nomor Invoice", "Status Terakhir", "Nama Produk"], Marketplace.TOKOPEDIA)
        assert (cols.order_id, cols.status, cols.product_name) == (0, 1, 2)

    def test_lazada_quantity_found_by_substring(self):
        header = ["Order Number", "Status", "Item Name", "Paid Price", "Quantity"]
        cols = resolve_columns(header, Marketplace.LAZADA)
        assert cols.quantity == 4
        assert cols.total_amount == 3

    def test_first_matching_header_wins(self):
        cols = resolve_columns(["Order ID", "Order Status", "Order Status Detail"], Marketplace.TIKTOK)
        assert cols.status == 1

    @pytest.mark.parametrize("header", [
        ["Order ID", "Product Name"],
        ["Order Status", "Product Name"],
        [],
    ])
    def test_missing_mandatory_column_raises(self, header):
        with pytest.raises(UnrecognizedFormatError) as exc:
            resolve_columns(header, Marketplace.TIKTOK)
        assert "TikTok" in str(exc.value)
        assert exc.value.marketplace == "TikTok"

    def test_wrong_marketplace_is_rejected(self):
        """A Shopee sheet does not satisfy the TikTok rules."""
        with pytest.raises(UnrecognizedFormatError):
            resolve_columns(SHOPEE_HEADER, Marketplace.TIKTOK)


# ---------------------------------------------------------------------------
# Number coercion
# ---------------------------------------------------------------------------


class TestToNumber:
    @pytest.mark.parametrize("val, expected", [
        ("150000", 150000.0),
        ("Rp150000", 150000.0),
        ("IDR 25000", 25000.0),
        (42, 42.0),
        ("", 0.0),
        (None, 0.0),
        ("abc", 0.0),
        ("1.2.3", 0.0),
    ])
    def test_coercion(self, val, expected):
        assert to_number(val) == expected

    @pytest.mark.parametrize("val, expected", [
        ("Rp18.000", 18000.0),
        ("Rp 1.250.000", 1250000.0),
        ("-5.000", -5000.0),
        ("18000.5", 18000.5),
        ("0.065", 0.065),
        ("1.5", 1.5),
    ])
    def test_dotted_thousands(self, val, expected):
        assert to_number(val) == pytest.approx(expected)

    def test_without_strip_currency_text_is_invalid(self):
        assert to_number("Rp 5000", strip=False) == 0.0
        assert to_number("5000", strip=False) == 5000.0


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def _shopee_columns():
    return resolve_columns(SHOPEE_HEADER + ["No. Resi"], Marketplace.SHOPEE)


class TestAggregateOrders:
    def test_rows_with_same_order_id_are_grouped(self, now):
        rows = [
            ["INV001", "Sedang Dikirim", "Kopi Susu", "2", "18000", "36000", "SPX123"],
            ["INV001", "Sedang Dikirim", "Croissant", "1", "25000", "25000", "SPX123"],
        ]
        orders = aggregate_orders(rows, _shopee_columns(), Marketplace.SHOPEE, now=now)

        assert len(orders) == 1
        order = orders[0]
        assert order.id == "INV001"
        assert order.status == OrderStatus.SENT
        assert len(order.items) == 2
        assert order.total_revenue == 61000
        assert order.tracking_number == "SPX123"

    def test_grouped_totals_equal_sum_of_rows(self, now):
        policy = ImportPolicy(cost_ratio=0.6, platform_fee_rate=0.08, packing_cost=2000)
        rows = [
            ["A1", "Selesai", "X", "2", "10000", "20000", ""],
            ["A1", "Selesai", "Y", "1", "30000", "30000", ""],
        ]
        order = aggregate_orders(rows, _shopee_columns(), Marketplace.SHOPEE, policy=policy, now=now)[0]

        assert order.total_revenue == pytest.approx(50000)
        assert order.total_cost == pytest.approx(2 * 10000 * 0.6 + 30000 * 0.6)
        assert order.platform_fee == pytest.approx(50000 * 0.08)
        assert order.packing_cost == 2000
        assert order.net_profit == pytest.approx(
            order.total_revenue - order.total_cost - order.platform_fee - order.packing_cost
        )

    def test_cancelled_order_is_zeroed(self, now):
        rows = [["INV002", "Dibatalkan oleh pembeli", "Kopi Susu", "5", "30000", "150000", ""]]
        order = aggregate_orders(rows, _shopee_columns(), Marketplace.SHOPEE, now=now)[0]

        assert order.status == OrderStatus.CANCELLED
        assert order.total_revenue == 0
        assert order.total_cost == 0
        assert order.platform_fee == 0
        assert order.packing_cost == 0
        assert order.net_profit == 0
        # The line item is still recorded
        assert order.items[0].quantity == 5

    def test_later_rows_do_not_revive_cancelled_order(self, now):
        rows = [
            ["C1", "Batal", "X", "1", "10000", "10000", ""],
            ["C1", "Selesai", "Y", "1", "20000", "20000", ""],
        ]
        order = aggregate_orders(rows, _shopee_columns(), Marketplace.SHOPEE, now=now)[0]
        assert order.status == OrderStatus.CANCELLED
        assert len(order.items) == 2
        assert order.total_revenue == order.net_profit == 0

    def test_cancelled_later_row_adds_no_money(self, now):
        rows = [
            ["M", "Selesai", "X", "1", "10000", "10000", ""],
            ["M", "Dibatalkan", "Y", "5", "10000", "50000", ""],
        ]
        order = aggregate_orders(rows, _shopee_columns(), Marketplace.SHOPEE, now=now)[0]

        assert order.status == OrderStatus.COMPLETED
        assert len(order.items) == 2
        assert order.total_revenue == 10000
        assert order.total_cost == pytest.approx(6000)
        assert order.platform_fee == pytest.approx(800)
        assert order.net_profit == pytest.approx(10000 - 6000 - 800 - 2000)

    def test_tracking_number_taken_from_first_non_empty_row(self, now):
        rows = [
            ["T7", "Sedang Dikirim", "X", "1", "10000", "10000", ""],
            ["T7", "Sedang Dikirim", "Y", "1", "10000", "10000", "SPX777"],
            ["T7", "Sedang Dikirim", "Z", "1", "10000", "10000", "SPX999"],
        ]
        order = aggregate_orders(rows, _shopee_columns(), Marketplace.SHOPEE, now=now)[0]
        assert order.tracking_number == "SPX777"

    def test_dotted_rupiah_amounts(self, now):
        rows = [["R1", "Selesai", "X", "2", "Rp18.000", "Rp36.000", ""]]
        order = aggregate_orders(rows, _shopee_columns(), Marketplace.SHOPEE, now=now)[0]
        assert order.items[0].price_at_sale == 18000
        assert order.total_revenue == 36000

    def test_rows_without_order_id_are_skipped(self, now):
        rows = [
            ["", "Selesai", "X", "1", "10000", "10000", ""],
            ["   ", "Selesai", "X", "1", "10000", "10000", ""],
            ["B1", "Selesai", "Y", "1", "10000", "10000", ""],
        ]
        orders = aggregate_orders(rows, _shopee_columns(), Marketplace.SHOPEE, now=now)
        assert [o.id for o in orders] == ["B1"]

    def test_orders_come_out_in_first_seen_order(self, now):
        rows = [
            ["Z9", "Selesai", "X", "1", "1000", "1000", ""],
            ["A1", "Selesai", "X", "1", "1000", "1000", ""],
            ["Z9", "Selesai", "Y", "1", "1000", "1000", ""],
            ["M5", "Selesai", "X", "1", "1000", "1000", ""],
        ]
        orders = aggregate_orders(rows, _shopee_columns(), Marketplace.SHOPEE, now=now)
        assert [o.id for o in orders] == ["Z9", "A1", "M5"]

    def test_missing_optional_columns_use_defaults(self, now):
        cols = resolve_columns(["Order ID", "Order Status", "Unit Price"], Marketplace.TIKTOK)
        rows = [["T1", "Completed", "20000"]]
        order = aggregate_orders(rows, cols, Marketplace.TIKTOK, now=now)[0]

        item = order.items[0]
        assert item.product_name == "Unknown Product"
        assert item.quantity == 1
        # No total column: revenue is price x quantity
        assert order.total_revenue == 20000
        assert order.tracking_number == ""

    def test_invalid_quantity_defaults_to_one(self, now):
        rows = [["Q1", "Selesai", "X", "abc", "5000", "", ""]]
        order = aggregate_orders(rows, _shopee_columns(), Marketplace.SHOPEE, now=now)[0]
        assert order.items[0].quantity == 1
        assert order.total_revenue == 5000

    def test_imported_order_defaults(self, now):
        rows = [["D1", "Selesai", "Kopi", "1", "10000", "10000", "R1"]]
        order = aggregate_orders(rows, _shopee_columns(), Marketplace.SHOPEE, now=now)[0]

        assert order.date == now
        assert order.mode == BusinessMode.ONLINE
        assert order.source == "Shopee"
        assert order.payment_method == "Marketplace"
        assert order.customer_name == "Marketplace User"
        assert order.carrier == "Standard"
        assert order.cod_fee == 0
        assert order.shipping_cost == 0
        item = order.items[0]
        assert item.product_id.startswith("IMP-")
        assert item.hpp_at_sale == pytest.approx(6000)

    def test_policy_override(self, now):
        policy = ImportPolicy(cost_ratio=0.5, platform_fee_rate=0.1, packing_cost=0)
        rows = [["P1", "Selesai", "X", "1", "10000", "10000", ""]]
        order = aggregate_orders(rows, _shopee_columns(), Marketplace.SHOPEE, policy=policy, now=now)[0]
        assert order.total_cost == 5000
        assert order.platform_fee == 1000
        assert order.net_profit == 4000


# ---------------------------------------------------------------------------
# Reading and full parse
# ---------------------------------------------------------------------------


class TestReadSheet:
    def test_csv_rows_are_text(self, shopee_csv):
        rows = read_sheet(shopee_csv, "orders.csv")
        assert rows[0][0] == "No. Pesanan"
        assert rows[1][0] == "INV001"
        assert rows[1][4] == "2"
        assert rows[3][2] == ""  # empty cell, not NaN

    def test_header_only_is_empty(self):
        with pytest.raises(EmptySheetError):
            read_sheet(b"No. Pesanan,Status Pesanan\n", "orders.csv")

    def test_unreadable_file(self):
        with pytest.raises(EmptySheetError):
            read_sheet(b"", "orders.csv")

    def test_garbage_xlsx(self):
        with pytest.raises(EmptySheetError):
            read_sheet(b"not a workbook", "orders.xlsx")

    def test_legacy_xls_export(self, now):
        xlwt = pytest.importorskip("xlwt")
        book = xlwt.Workbook()
        sheet = book.add_sheet("orders")
        table = [
            SHOPEE_HEADER,
            ["X1", "Selesai", "Kopi Susu", "2", "18000", "36000"],
            ["X2", "Batal", "Croissant", "1", "25000", "25000"],
        ]
        for r, row in enumerate(table):
            for c, val in enumerate(row):
                sheet.write(r, c, val)
        buf = io.BytesIO()
        book.save(buf)

        rows = read_sheet(buf.getvalue(), "orders.xls")
        assert rows[0][0] == "No. Pesanan"
        assert rows[1][:2] == ["X1", "Selesai"]

        orders = parse_marketplace_file(buf.getvalue(), "orders.xls", Marketplace.SHOPEE, now=now)
        assert [o.id for o in orders] == ["X1", "X2"]
        assert orders[0].total_revenue == 36000
        assert orders[1].status == OrderStatus.CANCELLED


class TestParseMarketplaceFile:
    def test_shopee_export(self, shopee_csv, now):
        orders = parse_marketplace_file(shopee_csv, "orders.csv", Marketplace.SHOPEE, now=now)

        assert [o.id for o in orders] == ["INV001", "INV002", "INV003"]
        inv1, inv2, inv3 = orders
        assert inv1.status == OrderStatus.SENT
        assert len(inv1.items) == 2
        assert inv1.total_revenue == 36000 + 25000
        assert inv1.items[0].price_at_sale == 18000
        assert inv2.status == OrderStatus.CANCELLED
        assert inv2.total_revenue == 0
        assert inv3.status == OrderStatus.COMPLETED

    def test_wrong_marketplace_selected(self, shopee_csv):
        with pytest.raises(UnrecognizedFormatError):
            parse_marketplace_file(shopee_csv, "orders.csv", Marketplace.LAZADA)


class TestPreviewStats:
    def test_counts_and_revenue(self, tiktok_rows, now):
        cols = resolve_columns(tiktok_rows[0], Marketplace.TIKTOK)
        extra = [["5770003", "Cancelled", "Tumbler", "1", "50000", "50000", ""]]
        orders = aggregate_orders(tiktok_rows[1:] + extra, cols, Marketplace.TIKTOK, now=now)

        stats = preview_stats(orders)
        assert stats == {
            "orders": 3,
            "completed": 1,
            "in_process": 1,
            "cancelled": 1,
            "estimated_revenue": 150000,
        }

    def test_empty(self):
        assert preview_stats([])["orders"] == 0


# ---------------------------------------------------------------------------
# Reconciliation
# ---------------------------------------------------------------------------


class TestReconcile:
    def test_duplicates_are_counted_not_accepted(self, now):
        existing = [make_txn("B", now)]
        incoming = [make_txn("A", now), make_txn("B", now), make_txn("C", now)]

        result = reconcile(existing, incoming)
        assert [t.id for t in result.accepted] == ["A", "C"]
        assert result.duplicate_count == 1

    def test_second_reconcile_accepts_nothing(self, now):
        existing = [make_txn("X", now)]
        batch = [make_txn("A", now), make_txn("C", now)]

        first = reconcile(existing, batch)
        merged = first.accepted + existing
        second = reconcile(merged, batch)
        assert second.accepted == []
        assert second.duplicate_count == 2

    def test_exact_id_match_only(self, now):
        result = reconcile([make_txn("inv001", now)], [make_txn("INV001", now)])
        assert len(result.accepted) == 1

    def test_empty_batch(self, now):
        result = reconcile([make_txn("A", now)], [])
        assert result.accepted == []
        assert result.duplicate_count == 0
