"""Profit Recap page — period P&L and per-product performance."""
from dash import html, dcc
import dash_bootstrap_components as dbc
import plotly.graph_objects as go

from bisnisflow.theme import *
from bisnisflow.components.cards import section, row_item, make_chart, empty_note
from bisnisflow.components.kpi import kpi_pill, kpi_strip
from bisnisflow.components.date_filter import date_filter
from bisnisflow.data_state import money


def build_general(summary):
    return html.Div([
        kpi_strip([
            kpi_pill("Rp", "Revenue", money(summary.total_revenue), BLUE),
            kpi_pill("+", "Net Profit", money(summary.net_profit),
                     GREEN if summary.net_profit >= 0 else RED),
            kpi_pill("x", "ROAS", f"{summary.roas:.2f}x", PURPLE, "Revenue per Rp of ads"),
            kpi_pill("%", "Margin", f"{summary.margin:.1f}%", TEAL),
        ]),
        section("Profit & Loss", [
            row_item("Total Revenue", summary.total_revenue),
            row_item("Total HPP", -summary.total_hpp),
            row_item("Gross Profit", summary.gross_profit, bold=True),
            row_item("Ad Spend (Marketing)", -summary.ad_spend),
            row_item("Platform & Logistics Fees", -summary.platform_fees),
            row_item("Other Expenses", -summary.other_expenses),
            row_item("Net Profit", summary.net_profit, bold=True, color=GREEN),
        ], GREEN),
    ])


def build_products(performance):
    if not performance:
        return empty_note("No product sales in this period.")
    top = performance[:10]
    fig = go.Figure(go.Bar(
        x=[p["revenue"] for p in top][::-1],
        y=[p["name"] for p in top][::-1],
        orientation="h",
        marker_color=BLUE,
        name="Revenue",
    ))
    make_chart(fig, height=max(240, 36 * len(top)), legend_h=False)
    fig.update_layout(xaxis_tickprefix="Rp ", margin=dict(t=20, b=30, l=160, r=20))

    rows = [
        html.Tr([
            html.Td(f"{rank}", style={"color": DARKGRAY, "width": "30px"}),
            html.Td(p["name"], style={"fontSize": "13px"}),
            html.Td(f"{p['qty']}", style={"textAlign": "center", "fontFamily": "monospace"}),
            html.Td(f"{p['count']}", style={"textAlign": "center", "fontFamily": "monospace",
                                             "color": GRAY}),
            html.Td(money(p["revenue"]), style={"textAlign": "right", "fontFamily": "monospace"}),
            html.Td(money(p["profit"]), style={"textAlign": "right", "fontFamily": "monospace",
                                                "color": GREEN if p["profit"] >= 0 else RED}),
        ])
        for rank, p in enumerate(performance, start=1)
    ]
    return html.Div([
        dcc.Graph(figure=fig, config={"displayModeBar": False}),
        dbc.Table([
            html.Thead(html.Tr([
                html.Th("#"), html.Th("Product"),
                html.Th("Qty", style={"textAlign": "center"}),
                html.Th("Orders", style={"textAlign": "center"}),
                html.Th("Revenue", style={"textAlign": "right"}),
                html.Th("Gross Profit", style={"textAlign": "right"}),
            ])),
            html.Tbody(rows),
        ], striped=True, hover=True, size="sm"),
    ])


def layout():
    return html.Div([
        dcc.Download(id="recap-download"),
        date_filter("recap"),
        html.Div([
            dbc.Tabs([
                dbc.Tab(label="General", tab_id="general"),
                dbc.Tab(label="Products", tab_id="products"),
            ], id="recap-tab", active_tab="general", className="mb-3"),
            dbc.Button("Export CSV", id="recap-export-btn", color="info", size="sm", outline=True),
        ], style={"display": "flex", "justifyContent": "space-between", "alignItems": "flex-start"}),
        html.Div(id="recap-content"),
    ])
