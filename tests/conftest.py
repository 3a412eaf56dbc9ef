"""
Pytest fixtures shared across the BisnisFlow test suite.

Everything here is in-memory: sample marketplace sheets as CSV bytes,
small catalogs and hand-built transactions with fixed dates.
"""

from datetime import datetime

import pytest

from bisnisflow.data_state import SessionState
from bisnisflow.models import (
    BusinessMode, Expense, ExpenseCategory, OrderStatus, Product, Transaction, TransactionItem,
)

# =============================================================================
# CLOCK
# =============================================================================

@pytest.fixture
def now() -> datetime:
    """Fixed 'now' so date filters are reproducible."""
    return datetime(2025, 6, 15, 10, 30)


# =============================================================================
# SAMPLE SHEETS
# =============================================================================

@pytest.fixture
def shopee_csv() -> bytes:
    """Shopee export: INV001 spans two rows, INV002 was cancelled by the buyer."""
    content = """No. Pesanan,Status Pesanan,No. Resi,Nama Produk,Jumlah Produk,Harga Awal,Total Pembayaran
INV001,Sedang Dikirim,SPX123,Kopi Susu,2,Rp18000,36000
INV001,Sedang Dikirim,SPX123,Croissant,1,25000,25000
INV002,Dibatalkan oleh pembeli,,Kopi Susu,5,30000,150000
INV003,Selesai,SPX999,Iced Americano,3,15000,45000
,Selesai,,Orphan Row,1,1000,1000
"""
    return content.encode("utf-8")


@pytest.fixture
def tiktok_rows() -> list:
    return [
        ["Order ID", "Order Status", "Product Name", "Quantity", "Unit Price", "Order Subtotal", "Tracking ID"],
        ["5770001", "Completed", "Tumbler", "1", "50000", "50000", "JX01"],
        ["5770002", "In transit", "Tumbler", "2", "50000", "100000", "JX02"],
    ]


# =============================================================================
# SESSION FIXTURES
# =============================================================================

@pytest.fixture
def products() -> list:
    return [
        Product("p1", "Kopi Susu", "Minuman", 8500, 18000, 45, 10),
        Product("p2", "Croissant", "Makanan", 12000, 25000, 3, 5),
    ]


def make_txn(txn_id, when, mode=BusinessMode.ONLINE, status=OrderStatus.COMPLETED,
             revenue=100000.0, cost=60000.0, net=None, payment="Wallet", items=None, **kwargs):
    """Build a Transaction with sensible defaults for ledger tests."""
    return Transaction(
        id=txn_id,
        date=when,
        mode=mode,
        source="Store" if mode == BusinessMode.RETAIL else "Shopee",
        items=items if items is not None else [TransactionItem("p1", "Kopi Susu", 1, revenue, cost)],
        total_revenue=revenue,
        total_cost=cost,
        net_profit=revenue - cost if net is None else net,
        payment_method=payment,
        status=None if mode == BusinessMode.RETAIL else status,
        **kwargs,
    )


@pytest.fixture
def session(products, now) -> SessionState:
    expenses = [Expense("e1", now, ExpenseCategory.MARKETING, 50000, "Ads")]
    return SessionState(products=products, transactions=[], expenses=expenses)
