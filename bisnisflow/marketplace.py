"""
marketplace.py — Marketplace order-export import.

Pipeline: read_sheet -> resolve_columns -> aggregate_orders -> reconcile.
Each marketplace names its columns and order statuses differently, so the
per-marketplace vocabulary lives in the rule tables below and the functions
that consume them are shared.
"""

import io
import logging
import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime

import pandas as pd

from bisnisflow.errors import EmptySheetError, UnrecognizedFormatError
from bisnisflow.models import BusinessMode, Marketplace, OrderStatus, Transaction, TransactionItem
from bisnisflow.settings import SETTINGS

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════════
#  STATUS RULES
# ══════════════════════════════════════════════════════════════════════════════

# Checked before any marketplace rule: "Selesai (Pengembalian Dana)" is a refund.
CANCEL_KEYWORDS = ("batal", "cancel", "gagal", "return", "refund", "pengembalian", "dikembalikan")

# Ordered tiers, first match wins. Anything unmatched is Pending.
STATUS_RULES = {
    Marketplace.SHOPEE: [
        (OrderStatus.COMPLETED, ("selesai", "completed")),
        (OrderStatus.SENT, ("sedang dikirim", "dijemput kurir", "dikirim", "dalam perjalanan",
                            "sedang transit", "terkirim")),
        (OrderStatus.PACKING, ("perlu dikirim", "sedang dikemas", "siap dikirim", "menunggu pengambilan")),
    ],
    Marketplace.TIKTOK: [
        (OrderStatus.COMPLETED, ("completed", "selesai")),
        (OrderStatus.SENT, ("in transit", "shipped", "dikirim", "sedang dikirim", "sedang transit")),
        (OrderStatus.PACKING, ("awaiting shipment", "awaiting collection", "siap dikirim",
                               "menunggu pengambilan")),
    ],
    Marketplace.TOKOPEDIA: [
        (OrderStatus.COMPLETED, ("selesai", "pesanan selesai")),
        (OrderStatus.SENT, ("sedang dikirim", "dalam pengiriman", "sampai tujuan", "terkirim")),
        (OrderStatus.PACKING, ("pesanan baru", "siap dikirim", "diproses penjual", "menunggu pengambilan")),
    ],
    Marketplace.LAZADA: [
        (OrderStatus.COMPLETED, ("delivered", "confirmed")),
        (OrderStatus.SENT, ("shipped", "dalam pengiriman", "sedang transit")),
        (OrderStatus.PACKING, ("ready to ship", "diproses", "menunggu pengambilan")),
    ],
}


def classify_status(raw_status, marketplace):
    """Map a marketplace's free-text order status to an OrderStatus. Never fails."""
    s = str(raw_status or "").lower().strip()
    if any(k in s for k in CANCEL_KEYWORDS):
        return OrderStatus.CANCELLED
    for status, keywords in STATUS_RULES.get(Marketplace(marketplace), []):
        if any(k in s for k in keywords):
            return status
    return OrderStatus.PENDING


# ══════════════════════════════════════════════════════════════════════════════
#  COLUMN RULES
# ══════════════════════════════════════════════════════════════════════════════

COLUMN_RULES = {
    Marketplace.SHOPEE: {
        "order_id": ("no. pesanan",),
        "status": ("status pesanan",),
        "product_name": ("nama produk",),
        "quantity": ("jumlah produk",),
        "unit_price": ("harga awal",),
        "total_amount": ("total pembayaran",),
        "tracking_number": ("no. resi",),
    },
    Marketplace.TIKTOK: {
        "order_id": ("order id",),
        "status": ("order status",),
        "product_name": ("product name",),
        "quantity": ("quantity",),
        "unit_price": ("unit price",),
        "total_amount": ("order subtotal",),
        "tracking_number": ("tracking id",),
    },
    Marketplace.TOKOPEDIA: {
        "order_id": ("invoice", "nomor invoice"),
        "status": ("status",),
        "product_name": ("nama produk",),
        "quantity": ("jumlah",),
        "unit_price": ("harga jual",),
        "total_amount": ("total harga", "nilai total"),
        "tracking_number": ("no resi", "nomor resi"),
    },
    Marketplace.LAZADA: {
        "order_id": ("order item id", "order number"),
        "status": ("status",),
        "product_name": ("item name",),
        "quantity": ("quantity",),
        "unit_price": ("unit price",),
        "total_amount": ("paid price",),
        "tracking_number": ("tracking code",),
    },
}


@dataclass
class ColumnMap:
    """Column index per logical field; -1 when the sheet has no such column."""
    order_id: int = -1
    status: int = -1
    product_name: int = -1
    quantity: int = -1
    unit_price: int = -1
    total_amount: int = -1
    tracking_number: int = -1


def _find_column(headers, needles):
    for idx, h in enumerate(headers):
        if any(n in h for n in needles):
            return idx
    return -1


def resolve_columns(header_row, marketplace):
    """Locate each field's column by header substring.

    Order id and status are mandatory; UnrecognizedFormatError otherwise.
    """
    marketplace = Marketplace(marketplace)
    headers = [str(h if h is not None else "").lower() for h in header_row]
    rules = COLUMN_RULES[marketplace]
    columns = ColumnMap(**{name: _find_column(headers, needles) for name, needles in rules.items()})
    if columns.order_id == -1 or columns.status == -1:
        raise UnrecognizedFormatError(marketplace.value)
    logger.debug("Resolved %s columns: %s", marketplace.value, columns)
    return columns


# ══════════════════════════════════════════════════════════════════════════════
#  CELL HELPERS
# ══════════════════════════════════════════════════════════════════════════════

_NON_NUMERIC = re.compile(r"[^0-9.\-]+")
# "18.000", "1.250.000": dots grouping thousands, as rupiah amounts are written
_DOTTED_THOUSANDS = re.compile(r"-?[1-9]\d{0,2}(?:\.\d{3})+")


def to_number(val, strip=True):
    """Coerce a cell to float. Currency symbols are stripped; invalid input is 0.

    With ``strip`` on, dotted thousands groups are read as rupiah
    ("Rp18.000" is 18000), so a cell like "1.500" is 1500, never 1.5.
    """
    if val is None:
        return 0.0
    if isinstance(val, (int, float)) and not isinstance(val, bool):
        return 0.0 if pd.isna(val) else float(val)
    text = str(val).strip()
    if strip:
        text = _NON_NUMERIC.sub("", text)
        if _DOTTED_THOUSANDS.fullmatch(text):
            text = text.replace(".", "")
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return 0.0


def _cell(row, idx):
    if idx < 0 or idx >= len(row):
        return ""
    val = row[idx]
    if val is None or (isinstance(val, float) and pd.isna(val)):
        return ""
    return str(val).strip()


def _quantity(text):
    qty = to_number(text, strip=False)
    if qty <= 0:
        return 1
    return int(qty) if float(qty).is_integer() else qty


def _synthetic_product_id():
    return "IMP-" + uuid.uuid4().hex[:5]


# ══════════════════════════════════════════════════════════════════════════════
#  AGGREGATION
# ══════════════════════════════════════════════════════════════════════════════

def aggregate_orders(data_rows, columns, marketplace, policy=None, now=None):
    """Group data rows into one Online Transaction per order id.

    Returns the orders in first-seen order. Cancelled rows contribute no money:
    a cancelled order has every monetary field at zero whatever the sheet says.
    """
    marketplace = Marketplace(marketplace)
    policy = policy or SETTINGS.import_policy
    now = now or datetime.now()
    orders: dict[str, Transaction] = {}

    for row in data_rows:
        order_id = _cell(row, columns.order_id)
        if not order_id:
            continue

        status = classify_status(_cell(row, columns.status), marketplace)
        product_name = _cell(row, columns.product_name) if columns.product_name > -1 else "Unknown Product"
        qty = _quantity(_cell(row, columns.quantity)) if columns.quantity > -1 else 1
        price = to_number(_cell(row, columns.unit_price)) if columns.unit_price > -1 else 0.0
        if columns.total_amount > -1:
            total_amt = to_number(_cell(row, columns.total_amount))
        else:
            total_amt = price * qty
        tracking = _cell(row, columns.tracking_number)

        cancelled = status == OrderStatus.CANCELLED
        revenue = 0.0 if cancelled else (total_amt or price * qty)
        cost = 0.0 if cancelled else price * policy.cost_ratio * qty
        fee = revenue * policy.platform_fee_rate

        item = TransactionItem(
            product_id=_synthetic_product_id(),
            product_name=product_name or "Unknown Product",
            quantity=qty,
            price_at_sale=price,
            hpp_at_sale=price * policy.cost_ratio,
        )

        order = orders.get(order_id)
        if order is not None:
            order.items.append(item)
            if not order.tracking_number:
                order.tracking_number = tracking
            if not cancelled and not order.is_cancelled:
                order.total_revenue += revenue
                order.total_cost += cost
                order.platform_fee += fee
                order.net_profit = (order.total_revenue - order.total_cost
                                    - order.platform_fee - order.packing_cost)
            continue

        packing = 0.0 if cancelled else policy.packing_cost
        orders[order_id] = Transaction(
            id=order_id,
            date=now,
            mode=BusinessMode.ONLINE,
            source=marketplace.value,
            items=[item],
            total_revenue=revenue,
            total_cost=cost,
            platform_fee=fee,
            cod_fee=0.0,
            shipping_cost=0.0,
            packing_cost=packing,
            net_profit=0.0 if cancelled else revenue - cost - fee - packing,
            payment_method="Marketplace",
            customer_name="Marketplace User",
            status=status,
            tracking_number=tracking,
            carrier="Standard",
        )

    logger.info("Aggregated %d %s order(s)", len(orders), marketplace.value)
    return list(orders.values())


# ══════════════════════════════════════════════════════════════════════════════
#  FILE READING
# ══════════════════════════════════════════════════════════════════════════════

def read_sheet(content, filename):
    """Read the first sheet of a .csv/.xlsx/.xls export into rows of text cells."""
    name = (filename or "").lower()
    try:
        if name.endswith((".xlsx", ".xls")):
            df = pd.read_excel(io.BytesIO(content), header=None, dtype=str, keep_default_na=False)
        else:
            df = pd.read_csv(io.BytesIO(content), header=None, dtype=str, keep_default_na=False)
    except Exception as e:
        raise EmptySheetError(f"Could not read {filename}: {e}") from e
    rows = df.values.tolist()
    if len(rows) < 2:
        raise EmptySheetError()
    return rows


def parse_marketplace_file(content, filename, marketplace, policy=None, now=None):
    """Read, resolve and aggregate an uploaded export into an import preview."""
    rows = read_sheet(content, filename)
    columns = resolve_columns(rows[0], marketplace)
    return aggregate_orders(rows[1:], columns, marketplace, policy=policy, now=now)


def preview_stats(orders):
    completed = sum(1 for t in orders if t.status == OrderStatus.COMPLETED)
    in_process = sum(1 for t in orders if t.status in (OrderStatus.SENT, OrderStatus.PACKING))
    cancelled = sum(1 for t in orders if t.status == OrderStatus.CANCELLED)
    revenue = sum(t.total_revenue for t in orders if t.status != OrderStatus.CANCELLED)
    return {
        "orders": len(orders),
        "completed": completed,
        "in_process": in_process,
        "cancelled": cancelled,
        "estimated_revenue": revenue,
    }


# ══════════════════════════════════════════════════════════════════════════════
#  RECONCILE
# ══════════════════════════════════════════════════════════════════════════════

@dataclass
class ReconcileResult:
    accepted: list = field(default_factory=list)
    duplicate_count: int = 0


def reconcile(existing, incoming):
    """Drop incoming transactions whose id is already present (exact match)."""
    existing_ids = {t.id for t in existing}
    accepted = [t for t in incoming if t.id not in existing_ids]
    result = ReconcileResult(accepted=accepted, duplicate_count=len(incoming) - len(accepted))
    if result.duplicate_count:
        logger.info("Rejected %d duplicate transaction(s)", result.duplicate_count)
    return result
