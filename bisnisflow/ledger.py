"""
ledger.py — Read-side folds behind the Dashboard, Profit Recap and Cashflow pages.
Every function is pure: it takes the session's collections and a date range
and returns fresh values. Empty input gives zeros and empty lists.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

import pandas as pd

from bisnisflow.models import BusinessMode, ExpenseCategory, OrderStatus

ALL_TIME_START = date(2020, 1, 1)


# ══════════════════════════════════════════════════════════════════════════════
#  DATE RANGES
# ══════════════════════════════════════════════════════════════════════════════

def _as_date(val):
    if isinstance(val, datetime):
        return val.date()
    if isinstance(val, date):
        return val
    return datetime.strptime(str(val)[:10], "%Y-%m-%d").date()


@dataclass(frozen=True)
class DateRange:
    """Inclusive range from start 00:00:00 to end 23:59:59.999999."""
    start: datetime
    end: datetime

    @classmethod
    def of(cls, start, end):
        return cls(datetime.combine(_as_date(start), time.min),
                   datetime.combine(_as_date(end), time.max))

    def contains(self, when):
        if when.tzinfo is not None:
            when = when.replace(tzinfo=None)
        return self.start <= when <= self.end


def preset_range(name, today=None):
    """Quick filters: today, yesterday, this_month, this_year, all."""
    today = _as_date(today or date.today())
    if name == "today":
        return DateRange.of(today, today)
    if name == "yesterday":
        y = today - timedelta(days=1)
        return DateRange.of(y, y)
    if name == "this_month":
        return DateRange.of(today.replace(day=1), today)
    if name == "this_year":
        return DateRange.of(today.replace(month=1, day=1), today.replace(month=12, day=31))
    if name == "all":
        return DateRange.of(ALL_TIME_START, today)
    raise ValueError(f"Unknown date preset: {name}")


def in_range(records, rng):
    return [r for r in records if rng.contains(r.date)]


# ══════════════════════════════════════════════════════════════════════════════
#  DASHBOARD
# ══════════════════════════════════════════════════════════════════════════════

@dataclass
class DashboardSummary:
    transaction_count: int = 0
    gross_revenue: float = 0.0
    net_profit: float = 0.0
    potential_revenue: float = 0.0
    pending_orders: int = 0
    sent_orders: int = 0
    completed_orders: int = 0
    cancelled_orders: int = 0
    total_packing_cost: float = 0.0
    total_platform_fees: float = 0.0
    cash_in_drawer: float = 0.0
    qris_total: float = 0.0


def dashboard_summary(transactions, rng, mode):
    """Period summary for one business mode.

    Online profit only counts Completed orders; money still on its way
    (Pending, Packing, Sent) is reported as potential revenue instead.
    """
    mode = BusinessMode(mode)
    txns = [t for t in in_range(transactions, rng) if t.mode == mode]
    valid = [t for t in txns if not t.is_cancelled]
    if mode == BusinessMode.RETAIL:
        settled = valid
    else:
        settled = [t for t in valid if t.status == OrderStatus.COMPLETED]
    in_flight = (OrderStatus.PENDING, OrderStatus.PACKING, OrderStatus.SENT)

    return DashboardSummary(
        transaction_count=len(txns),
        gross_revenue=sum(t.total_revenue for t in valid),
        net_profit=sum(t.net_profit for t in settled),
        potential_revenue=sum(t.total_revenue for t in valid if t.status in in_flight),
        pending_orders=sum(1 for t in txns if t.status in (OrderStatus.PENDING, OrderStatus.PACKING)),
        sent_orders=sum(1 for t in txns if t.status == OrderStatus.SENT),
        completed_orders=sum(1 for t in txns if t.status == OrderStatus.COMPLETED),
        cancelled_orders=sum(1 for t in txns if t.status == OrderStatus.CANCELLED),
        total_packing_cost=sum(t.packing_cost for t in valid),
        total_platform_fees=sum(t.platform_fee for t in valid),
        cash_in_drawer=sum(t.total_revenue for t in txns if t.payment_method == "Cash"),
        qris_total=sum(t.total_revenue for t in txns if t.payment_method == "QRIS"),
    )


# ══════════════════════════════════════════════════════════════════════════════
#  PROFIT RECAP
# ══════════════════════════════════════════════════════════════════════════════

@dataclass
class RecapSummary:
    total_revenue: float = 0.0
    total_hpp: float = 0.0
    gross_profit: float = 0.0
    ad_spend: float = 0.0
    other_expenses: float = 0.0
    platform_fees: float = 0.0
    net_profit: float = 0.0
    roas: float = 0.0
    margin: float = 0.0


def recap_summary(transactions, expenses, rng):
    txns = in_range(transactions, rng)
    exps = in_range(expenses, rng)
    revenue = sum(t.total_revenue for t in txns)
    hpp = sum(t.total_cost for t in txns)
    gross = revenue - hpp
    ad_spend = sum(e.amount for e in exps if e.category == ExpenseCategory.MARKETING)
    other = sum(e.amount for e in exps if e.category != ExpenseCategory.MARKETING)
    fees = sum(t.total_fees for t in txns)
    net = gross - ad_spend - other - fees
    return RecapSummary(
        total_revenue=revenue,
        total_hpp=hpp,
        gross_profit=gross,
        ad_spend=ad_spend,
        other_expenses=other,
        platform_fees=fees,
        net_profit=net,
        roas=revenue / ad_spend if ad_spend > 0 else 0.0,
        margin=net / revenue * 100 if revenue > 0 else 0.0,
    )


PERFORMANCE_COLUMNS = ["product_id", "name", "qty", "revenue", "profit", "count"]


def product_performance(transactions, rng=None):
    """Per-product quantity, revenue and gross profit, highest revenue first."""
    txns = in_range(transactions, rng) if rng else list(transactions)
    rows = [
        {
            "product_id": item.product_id,
            "name": item.product_name,
            "qty": item.quantity,
            "revenue": item.revenue,
            "profit": item.gross_profit,
        }
        for t in txns for item in t.items
    ]
    if not rows:
        return []
    df = pd.DataFrame(rows)
    perf = df.groupby("product_id", sort=False).agg(
        name=("name", "first"),
        qty=("qty", "sum"),
        revenue=("revenue", "sum"),
        profit=("profit", "sum"),
        count=("name", "count"),
    ).reset_index()
    perf = perf.sort_values("revenue", ascending=False, kind="stable")
    return perf[PERFORMANCE_COLUMNS].to_dict("records")


# ══════════════════════════════════════════════════════════════════════════════
#  CASHFLOW
# ══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CashflowEntry:
    id: str
    date: datetime
    kind: str  # "income" | "expense"
    amount: float  # signed: income positive, expense negative
    title: str
    subtitle: str


def cashflow_timeline(transactions, expenses, rng):
    """Sales as income and expenses as outflow, newest first."""
    entries = [
        CashflowEntry(t.id, t.date, "income", t.total_revenue,
                      f"Sale {t.source}", f"{len(t.items)} item(s)")
        for t in transactions
    ] + [
        CashflowEntry(e.id, e.date, "expense", -e.amount, e.description, ExpenseCategory(e.category).value)
        for e in expenses
    ]
    entries = [e for e in entries if rng.contains(e.date)]
    return sorted(entries, key=lambda e: e.date, reverse=True)


def cashflow_totals(entries):
    income = sum(e.amount for e in entries if e.kind == "income")
    expense = -sum(e.amount for e in entries if e.kind == "expense")
    return {"income": income, "expense": expense, "net": income - expense}
