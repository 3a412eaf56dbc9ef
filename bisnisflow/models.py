"""
models.py — Record shapes shared by the session, importer, POS and ledger.
Monetary values are plain floats in Rupiah.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class BusinessMode(str, Enum):
    RETAIL = "Retail"
    ONLINE = "Online"


class OrderStatus(str, Enum):
    PENDING = "Pending"
    PACKING = "Packing"
    SENT = "Sent"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class ExpenseCategory(str, Enum):
    OPERATIONAL = "Operational"
    MARKETING = "Marketing"
    SALARY = "Salary"
    RENT = "Rent"
    OTHER = "Other"


class Marketplace(str, Enum):
    SHOPEE = "Shopee"
    TIKTOK = "TikTok"
    TOKOPEDIA = "Tokopedia"
    LAZADA = "Lazada"


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    category: str
    hpp: float
    price: float
    stock: int
    min_stock: int

    @property
    def is_low_stock(self):
        return self.stock <= self.min_stock


@dataclass(frozen=True)
class TransactionItem:
    """One sold line. Price and HPP are snapshots taken at sale time."""
    product_id: str
    product_name: str
    quantity: int
    price_at_sale: float
    hpp_at_sale: float

    @property
    def revenue(self):
        return self.quantity * self.price_at_sale

    @property
    def gross_profit(self):
        return self.quantity * (self.price_at_sale - self.hpp_at_sale)


@dataclass
class Transaction:
    id: str
    date: datetime
    mode: BusinessMode
    source: str
    items: list[TransactionItem] = field(default_factory=list)
    total_revenue: float = 0.0
    total_cost: float = 0.0
    platform_fee: float = 0.0
    cod_fee: float = 0.0
    shipping_cost: float = 0.0
    packing_cost: float = 0.0
    net_profit: float = 0.0
    payment_method: str = "Cash"
    customer_name: Optional[str] = None
    notes: Optional[str] = None
    # Retail
    amount_paid: Optional[float] = None
    change: Optional[float] = None
    # Online
    status: Optional[OrderStatus] = None
    tracking_number: Optional[str] = None
    carrier: Optional[str] = None

    @property
    def is_cancelled(self):
        return self.status == OrderStatus.CANCELLED

    @property
    def total_fees(self):
        return self.platform_fee + self.cod_fee + self.shipping_cost + self.packing_cost


@dataclass(frozen=True)
class Expense:
    id: str
    date: datetime
    category: ExpenseCategory
    amount: float
    description: str
