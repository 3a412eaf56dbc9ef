"""
data_state.py — The running session's products, transactions and expenses.
This is the single source of truth for dashboard data. Pages and callbacks
read it through STATE and change it only through the named commands below;
every command replaces the whole collection in one step.
Nothing is persisted: a restart brings back the demo data.
"""

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timedelta

from bisnisflow.marketplace import reconcile, to_number
from bisnisflow.models import (
    BusinessMode, Expense, ExpenseCategory, OrderStatus, Product, Transaction, TransactionItem,
)

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════════
#  UTILITY FUNCTIONS
# ══════════════════════════════════════════════════════════════════════════════

def money(val):
    """Format a number as Rp 1.234.567 (Indonesian thousands separator)."""
    val = round(val or 0)
    text = f"{abs(val):,.0f}".replace(",", ".")
    if val < 0:
        return f"-Rp {text}"
    return f"Rp {text}"


def new_id():
    return uuid.uuid4().hex[:12]


@dataclass
class ImportOutcome:
    accepted: int
    duplicates: int

    @property
    def added(self):
        return self.accepted > 0

    def message(self):
        if self.accepted == 0 and self.duplicates == 0:
            return "No orders found in the file. Nothing was added."
        if self.accepted == 0:
            return (f"All {self.duplicates} order(s) are already in the system. "
                    "No new data was added.")
        msg = f"Imported {self.accepted} transaction(s)."
        if self.duplicates:
            msg += f" {self.duplicates} duplicate(s) were skipped so nothing is counted twice."
        return msg


# ══════════════════════════════════════════════════════════════════════════════
#  SESSION
# ══════════════════════════════════════════════════════════════════════════════

class SessionState:
    def __init__(self, products=None, transactions=None, expenses=None):
        self._products = list(products or [])
        self._transactions = list(transactions or [])
        self._expenses = list(expenses or [])

    @property
    def products(self):
        return tuple(self._products)

    @property
    def transactions(self):
        return tuple(self._transactions)

    @property
    def expenses(self):
        return tuple(self._expenses)

    def get_product(self, product_id):
        for p in self._products:
            if p.id == product_id:
                return p
        return None

    # ── Products ──────────────────────────────────────────────────────────
    def add_product(self, product):
        self._products = [*self._products, product]
        logger.info("Added product %s (%s)", product.name, product.id)
        return product

    def update_stock(self, product_id, new_stock):
        stock = max(0, int(to_number(new_stock, strip=False)))
        self._products = [replace(p, stock=stock) if p.id == product_id else p for p in self._products]

    def delete_product(self, product_id):
        self._products = [p for p in self._products if p.id != product_id]

    # ── Transactions ─────────────────────────────────────────────────────
    def checkout(self, transaction):
        """Record a sale and deduct its quantities from stock (never below 0)."""
        sold = {}
        for item in transaction.items:
            sold[item.product_id] = sold.get(item.product_id, 0) + item.quantity
        self._transactions = [transaction, *self._transactions]
        self._products = [
            replace(p, stock=max(0, p.stock - sold[p.id])) if p.id in sold else p
            for p in self._products
        ]
        logger.info("Checkout %s: %d item line(s), revenue %.0f",
                    transaction.id, len(transaction.items), transaction.total_revenue)
        return transaction

    def import_batch(self, incoming):
        """Merge imported orders, skipping ids that already exist."""
        result = reconcile(self._transactions, incoming)
        if result.accepted:
            self._transactions = [*result.accepted, *self._transactions]
        logger.info("Import: %d accepted, %d duplicate(s)", len(result.accepted), result.duplicate_count)
        return ImportOutcome(accepted=len(result.accepted), duplicates=result.duplicate_count)

    def delete_transaction(self, transaction_id):
        self._transactions = [t for t in self._transactions if t.id != transaction_id]

    # ── Expenses ─────────────────────────────────────────────────────────
    def add_expense(self, category, amount, description, date=None):
        """Record an expense. Returns None when amount or description is missing."""
        amount = to_number(amount, strip=False)
        description = (description or "").strip()
        if amount <= 0 or not description:
            return None
        expense = Expense(
            id=new_id(),
            date=date or datetime.now(),
            category=ExpenseCategory(category),
            amount=amount,
            description=description,
        )
        self._expenses = [expense, *self._expenses]
        return expense

    def delete_expense(self, expense_id):
        self._expenses = [e for e in self._expenses if e.id != expense_id]

    # ── Demo data ────────────────────────────────────────────────────────
    @classmethod
    def with_demo_data(cls, now=None):
        now = now or datetime.now()
        products = [
            Product("1", "Kopi Susu Gula Aren", "Minuman", 8500, 18000, 45, 10),
            Product("2", "Croissant Butter", "Makanan", 12000, 25000, 12, 5),
            Product("3", "Iced Americano", "Minuman", 4000, 15000, 100, 20),
            Product("4", "Nasi Goreng Spesial", "Makanan", 15000, 32000, 20, 5),
        ]
        transactions = [
            Transaction(
                id="t1", date=now - timedelta(days=1), mode=BusinessMode.RETAIL, source="Store",
                items=[TransactionItem("1", "Kopi Susu Gula Aren", 5, 18000, 8500)],
                total_revenue=90000, total_cost=42500, net_profit=47500,
                payment_method="Cash", amount_paid=100000, change=10000,
            ),
            Transaction(
                id="t2", date=now, mode=BusinessMode.ONLINE, source="Tokopedia",
                items=[TransactionItem("2", "Croissant Butter", 6, 25000, 12000)],
                total_revenue=150000, total_cost=72000, platform_fee=7500, packing_cost=2000,
                net_profit=68500, payment_method="Wallet",
                status=OrderStatus.SENT, carrier="JNE", tracking_number="JP123456789",
            ),
        ]
        expenses = [
            Expense("e1", now, ExpenseCategory.MARKETING, 500000, "Facebook Ads Harian"),
            Expense("e2", now, ExpenseCategory.OPERATIONAL, 150000, "Beli Gas Elpiji"),
        ]
        return cls(products, transactions, expenses)


STATE = SessionState.with_demo_data()
