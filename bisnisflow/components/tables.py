"""Reusable table builders."""
from dash import html
import dash_bootstrap_components as dbc
from bisnisflow.theme import *
from bisnisflow.components.cards import status_badge
from bisnisflow.data_state import money


def stock_level_bar(stock, min_stock):
    """Stock gauge: full at 3x the minimum, red at or below the minimum."""
    ceiling = max(min_stock * 3, 1)
    pct = max(0, min(100, (stock / ceiling) * 100))
    color = RED if stock <= min_stock else (ORANGE if stock <= min_stock * 2 else GREEN)
    return html.Div([
        html.Div(style={"width": f"{max(pct, 4)}%", "height": "8px",
                         "background": f"linear-gradient(90deg, {color}88, {color})",
                         "borderRadius": "4px",
                         "transition": "width 0.3s ease"}),
    ], style={"width": "80px", "height": "8px", "backgroundColor": "#0d0d1a",
              "borderRadius": "4px", "display": "inline-block", "verticalAlign": "middle",
              "overflow": "hidden"})


def _num_cell(value, color=WHITE):
    return html.Td(money(value), style={"fontFamily": "monospace", "textAlign": "right",
                                        "fontSize": "12px", "color": color})


def transactions_table(transactions, delete_type=None):
    """Transaction list. Pass delete_type to add a delete button per row."""
    rows = []
    for t in transactions:
        items = ", ".join(f"{i.product_name} x{i.quantity}" for i in t.items)
        cells = [
            html.Td([
                html.Div(t.date.strftime("%d/%m/%Y %H:%M"), style={"fontSize": "12px"}),
                html.Div(t.id, style={"color": DARKGRAY, "fontSize": "10px", "fontFamily": "monospace"}),
            ]),
            html.Td([
                html.Div(t.source, style={"color": MODE_COLORS.get(getattr(t.mode, "value", t.mode), GRAY),
                                          "fontWeight": "600", "fontSize": "12px"}),
                html.Div(items, style={"color": GRAY, "fontSize": "11px"}),
            ]),
            html.Td(status_badge(t.status), style={"textAlign": "center"}),
            _num_cell(t.total_revenue),
            _num_cell(t.net_profit, GREEN if t.net_profit >= 0 else RED),
        ]
        if delete_type:
            cells.append(html.Td(dbc.Button(
                "✕", id={"type": delete_type, "index": t.id},
                color="link", size="sm", style={"color": RED, "padding": "0 6px"},
            )))
        rows.append(html.Tr(cells))

    header = [
        html.Th("Date"), html.Th("Source / Items"),
        html.Th("Status", style={"textAlign": "center"}),
        html.Th("Revenue", style={"textAlign": "right"}),
        html.Th("Net Profit", style={"textAlign": "right"}),
    ]
    if delete_type:
        header.append(html.Th(""))
    return dbc.Table([html.Thead(html.Tr(header)), html.Tbody(rows)],
                     striped=True, hover=True, size="sm", className="mb-0")
