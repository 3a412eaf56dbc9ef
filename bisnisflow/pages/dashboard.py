"""Dashboard page — KPI strip, daily revenue chart, transaction list."""
from collections import defaultdict

from dash import html, dcc
import dash_bootstrap_components as dbc
import plotly.graph_objects as go

from bisnisflow.theme import *
from bisnisflow.components.kpi import kpi_pill, kpi_strip
from bisnisflow.components.cards import section, make_chart, empty_note
from bisnisflow.components.date_filter import date_filter
from bisnisflow.components.tables import transactions_table
from bisnisflow.data_state import money
from bisnisflow.models import BusinessMode


def build_kpis(summary, mode):
    mode = BusinessMode(mode)
    color = MODE_COLORS[mode.value]
    pills = [
        kpi_pill("Rp", "Gross Revenue", money(summary.gross_revenue), color,
                 f"{summary.transaction_count} transaction(s)"),
        kpi_pill("+", "Net Profit", money(summary.net_profit), GREEN,
                 "Completed orders only" if mode == BusinessMode.ONLINE else "After HPP"),
    ]
    if mode == BusinessMode.ONLINE:
        pills += [
            kpi_pill("~", "Potential Revenue", money(summary.potential_revenue), ORANGE,
                     "Pending, packing or on the way"),
            kpi_pill("#", "Orders", f"{summary.pending_orders} / {summary.sent_orders} / "
                                    f"{summary.completed_orders}", BLUE,
                     f"pending / sent / done, {summary.cancelled_orders} cancelled"),
            kpi_pill("%", "Platform Fees", money(summary.total_platform_fees), PURPLE,
                     f"Packing {money(summary.total_packing_cost)}"),
        ]
    else:
        pills += [
            kpi_pill("$", "Cash in Drawer", money(summary.cash_in_drawer), TEAL),
            kpi_pill("Q", "QRIS", money(summary.qris_total), CYAN),
        ]
    return kpi_strip(pills)


def build_revenue_chart(transactions):
    """Daily revenue and net profit bars for the filtered transactions."""
    if not transactions:
        return empty_note("No transactions in this period.")
    revenue = defaultdict(float)
    profit = defaultdict(float)
    for t in transactions:
        if t.is_cancelled:
            continue
        day = t.date.date()
        revenue[day] += t.total_revenue
        profit[day] += t.net_profit
    days = sorted(revenue)

    fig = go.Figure()
    fig.add_trace(go.Bar(x=days, y=[revenue[d] for d in days], name="Revenue", marker_color=BLUE))
    fig.add_trace(go.Bar(x=days, y=[profit[d] for d in days], name="Net Profit", marker_color=GREEN))
    make_chart(fig, height=300)
    fig.update_layout(barmode="group", yaxis_tickprefix="Rp ")
    return dcc.Graph(figure=fig, config={"displayModeBar": False})


def build_transaction_list(transactions):
    if not transactions:
        return empty_note("No transactions in this period.")
    return transactions_table(transactions, delete_type="dash-txn-delete")


def layout():
    return html.Div([
        dcc.Store(id="dash-refresh", data=0),
        dcc.Download(id="dash-download"),
        date_filter("dash"),
        html.Div(id="dash-kpis"),
        dbc.Row([
            dbc.Col(section("Daily Revenue", html.Div(id="dash-chart"), BLUE), md=12),
        ]),
        section("Transactions", [
            html.Div(
                dbc.Button("Export CSV", id="dash-export-btn", color="info", size="sm", outline=True),
                style={"textAlign": "right", "marginBottom": "8px"},
            ),
            html.Div(id="dash-table"),
        ], GREEN),
    ])
