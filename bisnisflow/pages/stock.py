"""Stock page — catalog with stock levels, manual edits, low-stock alert."""
from dash import html, dcc
import dash_bootstrap_components as dbc

from bisnisflow.theme import *
from bisnisflow.components.cards import section, empty_note
from bisnisflow.components.kpi import kpi_pill, kpi_strip
from bisnisflow.components.tables import stock_level_bar
from bisnisflow.data_state import money
from bisnisflow.pos import low_stock


def build_stock_view(products, all_products):
    """KPI strip, low-stock alert and the editable stock table."""
    low = low_stock(all_products)
    stock_value = sum(p.hpp * p.stock for p in all_products)
    header = [
        kpi_strip([
            kpi_pill("#", "Products", str(len(all_products)), BLUE),
            kpi_pill("!", "Low Stock", str(len(low)), RED if low else GREEN),
            kpi_pill("Rp", "Stock Value (HPP)", money(stock_value), ORANGE),
        ]),
    ]
    if low:
        header.append(dbc.Alert(
            "Restock soon: " + ", ".join(f"{p.name} ({p.stock})" for p in low),
            color="warning",
        ))

    if not products:
        return html.Div(header + [empty_note("No products match.")])

    rows = []
    for p in products:
        stock_color = RED if p.is_low_stock else GREEN
        rows.append(html.Tr([
            html.Td([
                html.Div(p.name, style={"color": WHITE, "fontSize": "13px", "fontWeight": "600"}),
                html.Div(p.category, style={"color": GRAY, "fontSize": "11px"}),
            ]),
            html.Td(money(p.hpp), style={"fontFamily": "monospace", "textAlign": "right", "fontSize": "12px"}),
            html.Td(money(p.price), style={"fontFamily": "monospace", "textAlign": "right", "fontSize": "12px"}),
            html.Td([
                html.Span(str(p.stock), style={"color": stock_color, "fontWeight": "bold",
                                               "fontFamily": "monospace", "fontSize": "16px",
                                               "marginRight": "8px"}),
                stock_level_bar(p.stock, p.min_stock),
                html.Div(f"min {p.min_stock}", style={"color": DARKGRAY, "fontSize": "10px"}),
            ], style={"textAlign": "center", "width": "130px"}),
            html.Td(dbc.InputGroup([
                dbc.Input(id={"type": "stock-input", "index": p.id}, type="number", min=0,
                          value=p.stock, size="sm"),
                dbc.Button("Save", id={"type": "stock-save", "index": p.id}, color="info", size="sm"),
            ], size="sm"), style={"width": "160px"}),
            html.Td(dbc.Button("✕", id={"type": "stock-delete", "index": p.id}, color="link", size="sm",
                               style={"color": RED, "padding": "0 6px"})),
        ]))

    table = dbc.Table([
        html.Thead(html.Tr([
            html.Th("Product"),
            html.Th("HPP", style={"textAlign": "right"}),
            html.Th("Price", style={"textAlign": "right"}),
            html.Th("Stock", style={"textAlign": "center"}),
            html.Th("Set Stock"),
            html.Th(""),
        ])),
        html.Tbody(rows),
    ], striped=True, hover=True, size="sm", className="mb-0")
    return html.Div(header + [table])


def layout():
    return html.Div([
        dcc.Store(id="stock-refresh", data=0),
        dcc.Download(id="stock-download"),
        html.Div([
            dbc.Input(id="stock-search", placeholder="Search product or category...", type="text",
                      debounce=True, style={"maxWidth": "360px"}),
            dbc.Button("Export CSV", id="stock-export-btn", color="info", size="sm", outline=True),
        ], style={"display": "flex", "justifyContent": "space-between", "marginBottom": "16px"}),
        section("Stock", html.Div(id="stock-content"), CYAN),
    ])
