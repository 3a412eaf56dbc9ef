"""
pos.py — Cashier cart and checkout for Retail (store) and Online orders.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from bisnisflow.data_state import new_id
from bisnisflow.errors import CheckoutError
from bisnisflow.models import BusinessMode, OrderStatus, Transaction, TransactionItem

# Online sources offered at checkout with their usual admin fee (%).
PRESET_SOURCES = [
    {"name": "WhatsApp", "fee": 0},
    {"name": "Shopee", "fee": 6.5},
    {"name": "Tokopedia", "fee": 5.5},
    {"name": "TikTok Shop", "fee": 4.5},
    {"name": "Website", "fee": 0},
]

PAYMENT_METHODS = ["Cash", "QRIS", "Transfer", "Wallet"]
CARRIERS = ["JNE", "J&T", "SiCepat", "AnterAja", "GoSend", "GrabExpress"]
QUICK_CASH = [2000, 5000, 10000, 20000, 50000, 100000]


class Cart:
    """Items being rung up. Price and HPP are snapshotted when a product is added."""

    def __init__(self, items=None):
        self.items: list[TransactionItem] = list(items or [])

    def add(self, product):
        for i, item in enumerate(self.items):
            if item.product_id == product.id:
                self.items[i] = replace(item, quantity=item.quantity + 1)
                return
        self.items.append(TransactionItem(
            product_id=product.id,
            product_name=product.name,
            quantity=1,
            price_at_sale=product.price,
            hpp_at_sale=product.hpp,
        ))

    def update_quantity(self, product_id, delta):
        for i, item in enumerate(self.items):
            if item.product_id == product_id and item.quantity + delta > 0:
                self.items[i] = replace(item, quantity=item.quantity + delta)

    def remove(self, product_id):
        self.items = [i for i in self.items if i.product_id != product_id]

    def clear(self):
        self.items = []

    @property
    def total_revenue(self):
        return sum(i.quantity * i.price_at_sale for i in self.items)

    @property
    def total_cost(self):
        return sum(i.quantity * i.hpp_at_sale for i in self.items)

    def __len__(self):
        return len(self.items)


@dataclass
class CheckoutRequest:
    mode: BusinessMode = BusinessMode.RETAIL
    date: Optional[datetime] = None
    payment_method: str = "Cash"
    customer_name: str = ""
    online_source: str = "WhatsApp"
    platform_fee_percent: float = 0.0
    is_cod: bool = False
    cod_fee_percent: float = 0.0
    shipping_cost: float = 0.0
    packing_cost: float = 2000.0
    carrier: str = "JNE"
    tracking_number: str = ""
    status: OrderStatus = OrderStatus.PENDING
    amount_paid: float = 0.0


def compute_fees(revenue, request):
    """Platform and COD fees for an online order."""
    platform_fee = revenue * (request.platform_fee_percent / 100)
    cod_fee = (revenue + request.shipping_cost) * (request.cod_fee_percent / 100) if request.is_cod else 0.0
    return platform_fee, cod_fee


def build_transaction(cart, request):
    """Turn a cart into a Transaction.

    Retail profit is revenue minus HPP. Online profit also subtracts the
    platform, COD, shipping and packing costs.
    """
    if not cart.items:
        raise CheckoutError("Cart is empty")

    mode = BusinessMode(request.mode)
    revenue = cart.total_revenue
    cost = cart.total_cost

    if mode == BusinessMode.RETAIL:
        if request.payment_method == "Cash" and request.amount_paid < revenue:
            raise CheckoutError("Payment is less than the total")
        return Transaction(
            id=new_id(),
            date=request.date or datetime.now(),
            mode=mode,
            source="Store",
            items=list(cart.items),
            total_revenue=revenue,
            total_cost=cost,
            net_profit=revenue - cost,
            payment_method=request.payment_method,
            customer_name=request.customer_name or None,
            amount_paid=request.amount_paid,
            change=request.amount_paid - revenue,
        )

    platform_fee, cod_fee = compute_fees(revenue, request)
    net = revenue - cost - platform_fee - cod_fee - request.shipping_cost - request.packing_cost
    return Transaction(
        id=new_id(),
        date=request.date or datetime.now(),
        mode=mode,
        source=request.online_source,
        items=list(cart.items),
        total_revenue=revenue,
        total_cost=cost,
        platform_fee=platform_fee,
        cod_fee=cod_fee,
        shipping_cost=request.shipping_cost,
        packing_cost=request.packing_cost,
        net_profit=net,
        payment_method="COD" if request.is_cod else request.payment_method,
        customer_name=request.customer_name or None,
        status=OrderStatus(request.status),
        tracking_number=request.tracking_number,
        carrier=request.carrier,
    )


def search_products(products, query="", category="All"):
    q = (query or "").lower()
    return [
        p for p in products
        if (category in ("All", None, "") or p.category == category)
        and (q in p.name.lower() or q in p.category.lower())
    ]


def categories(products):
    seen = []
    for p in products:
        if p.category not in seen:
            seen.append(p.category)
    return ["All", *seen]


def low_stock(products):
    return [p for p in products if p.is_low_stock]
