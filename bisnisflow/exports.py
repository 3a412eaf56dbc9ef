"""CSV export tables. Each one is a DataFrame built from a ledger fold."""
import pandas as pd

from bisnisflow.ledger import in_range
from bisnisflow.models import BusinessMode


def transactions_frame(transactions, rng, mode=None):
    txns = in_range(transactions, rng)
    if mode is not None:
        txns = [t for t in txns if t.mode == BusinessMode(mode)]
    rows = []
    for t in txns:
        rows.append({
            "Transaction ID": t.id,
            "Date": t.date.strftime("%d/%m/%Y"),
            "Time": t.date.strftime("%H:%M:%S"),
            "Mode": BusinessMode(t.mode).value,
            "Source": t.source,
            "Items": "; ".join(f"{i.product_name} ({i.quantity})" for i in t.items),
            "Revenue": t.total_revenue,
            "HPP": t.total_cost,
            "Platform Fee": t.platform_fee,
            "Shipping": t.shipping_cost,
            "Packing": t.packing_cost,
            "Net Profit": t.net_profit,
            "Status": t.status.value if t.status else "-",
            "Tracking": t.tracking_number or "-",
            "Payment": t.payment_method,
        })
    return pd.DataFrame(rows, columns=[
        "Transaction ID", "Date", "Time", "Mode", "Source", "Items", "Revenue", "HPP",
        "Platform Fee", "Shipping", "Packing", "Net Profit", "Status", "Tracking", "Payment",
    ])


def recap_frame(summary, rng):
    return pd.DataFrame([
        ("Period", f"{rng.start:%Y-%m-%d} to {rng.end:%Y-%m-%d}"),
        ("Total Revenue", summary.total_revenue),
        ("Total HPP", summary.total_hpp),
        ("Gross Profit", summary.gross_profit),
        ("Ad Spend", summary.ad_spend),
        ("Platform & Other Costs", summary.platform_fees + summary.other_expenses),
        ("Net Profit", summary.net_profit),
        ("ROAS", f"{summary.roas:.2f}"),
        ("Margin %", f"{summary.margin:.2f}%"),
    ], columns=["Metric", "Value"])


def performance_frame(performance):
    df = pd.DataFrame(performance, columns=["product_id", "name", "qty", "revenue", "profit", "count"])
    return df.drop(columns=["product_id"]).rename(columns={
        "name": "Product", "qty": "Qty Sold", "revenue": "Revenue",
        "profit": "Gross Profit", "count": "Transactions",
    })


def cashflow_frame(entries):
    return pd.DataFrame([
        {
            "Date": e.date.strftime("%d/%m/%Y"),
            "Time": e.date.strftime("%H:%M:%S"),
            "Type": "Income" if e.kind == "income" else "Expense",
            "Category/Source": e.subtitle,
            "Description": e.title,
            "Amount (Rp)": e.amount,
        }
        for e in entries
    ], columns=["Date", "Time", "Type", "Category/Source", "Description", "Amount (Rp)"])


def stock_frame(products):
    return pd.DataFrame([
        {
            "ID": p.id,
            "Product": p.name,
            "Category": p.category,
            "HPP": p.hpp,
            "Price": p.price,
            "Stock": p.stock,
            "Status": "Low Stock" if p.is_low_stock else "OK",
        }
        for p in products
    ], columns=["ID", "Product", "Category", "HPP", "Price", "Stock", "Status"])
