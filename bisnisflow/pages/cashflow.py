"""Cashflow page — expense entry and the income/expense timeline."""
from dash import html, dcc
import dash_bootstrap_components as dbc

from bisnisflow.theme import *
from bisnisflow.components.cards import section, empty_note
from bisnisflow.components.kpi import kpi_pill, kpi_strip
from bisnisflow.components.date_filter import date_filter
from bisnisflow.data_state import money

_LABEL = {"color": GRAY, "fontSize": "12px", "marginBottom": "2px"}


def build_timeline(entries, totals):
    strip = kpi_strip([
        kpi_pill("+", "Income", money(totals["income"]), GREEN),
        kpi_pill("−", "Expenses", money(totals["expense"]), RED),
        kpi_pill("=", "Net Cashflow", money(totals["net"]), BLUE if totals["net"] >= 0 else RED),
    ])
    if not entries:
        return html.Div([strip, empty_note("No cash movement in this period.")])

    rows = []
    for e in entries:
        income = e.kind == "income"
        color = GREEN if income else EXPENSE_COLORS.get(e.subtitle, RED)
        rows.append(html.Div([
            html.Span("●", style={"color": color, "fontSize": "12px", "marginRight": "10px"}),
            html.Div([
                html.Div(e.title, style={"color": WHITE, "fontSize": "13px"}),
                html.Div(f"{e.date:%d/%m/%Y %H:%M} · {e.subtitle}",
                         style={"color": DARKGRAY, "fontSize": "11px"}),
            ], style={"flex": "1"}),
            html.Span(("+" if income else "") + money(e.amount),
                      style={"color": GREEN if income else RED, "fontFamily": "monospace",
                             "fontSize": "13px"}),
            # Sales are deleted from the Dashboard
            None if income else dbc.Button("✕", id={"type": "cash-expense-delete", "index": e.id},
                                           color="link", size="sm", style={"color": RED, "padding": "0 6px"}),
        ], style={"display": "flex", "alignItems": "center", "padding": "6px 0",
                  "borderBottom": "1px solid #ffffff10"}))
    return html.Div([strip, html.Div(rows)])


def layout():
    return html.Div([
        dcc.Store(id="cash-refresh", data=0),
        dcc.Download(id="cash-download"),
        date_filter("cash"),
        dbc.Row([
            dbc.Col(section("Add Expense", [
                html.Div([
                    html.Label("Category", style=_LABEL),
                    dbc.Select(id="cash-category",
                               options=[{"label": c, "value": c} for c in EXPENSE_CATEGORY_OPTIONS],
                               value=EXPENSE_CATEGORY_OPTIONS[0]),
                ], className="mb-2"),
                html.Div([
                    html.Label("Amount (Rp)", style=_LABEL),
                    dbc.Input(id="cash-amount", type="number", min=0),
                ], className="mb-2"),
                html.Div([
                    html.Label("Description", style=_LABEL),
                    dbc.Input(id="cash-description", type="text"),
                ], className="mb-2"),
                dbc.Button("Save Expense", id="cash-add-btn", color="danger", className="w-100"),
                html.Div(id="cash-add-status", className="mt-2"),
            ], RED), md=4),
            dbc.Col(section("Timeline", [
                html.Div(
                    dbc.Button("Export CSV", id="cash-export-btn", color="info", size="sm", outline=True),
                    style={"textAlign": "right", "marginBottom": "8px"},
                ),
                html.Div(id="cash-timeline"),
            ], BLUE), md=8),
        ]),
    ])
