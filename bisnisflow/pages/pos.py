"""Cashier page — product grid, cart, retail or online checkout form."""
from dash import html, dcc
import dash_bootstrap_components as dbc

from bisnisflow.theme import *
from bisnisflow.components.cards import section, empty_note
from bisnisflow.data_state import STATE, money
from bisnisflow.models import OrderStatus
from bisnisflow.pos import CARRIERS, PAYMENT_METHODS, PRESET_SOURCES, QUICK_CASH, categories
from bisnisflow.settings import SETTINGS

_LABEL = {"color": GRAY, "fontSize": "12px", "marginBottom": "2px"}


def build_product_grid(products):
    if not products:
        return empty_note("No products match.")
    cards = []
    for p in products:
        stock_color = RED if p.is_low_stock else GRAY
        cards.append(dbc.Col(dbc.Card(dbc.CardBody([
            html.Div(p.name, style={"color": WHITE, "fontWeight": "600", "fontSize": "13px"}),
            html.Div(p.category, style={"color": DARKGRAY, "fontSize": "11px"}),
            html.Div(money(p.price), style={"color": GREEN, "fontFamily": "monospace",
                                            "fontSize": "15px", "marginTop": "6px"}),
            html.Div(f"Stock {p.stock}", style={"color": stock_color, "fontSize": "11px"}),
            dbc.Button("Add", id={"type": "pos-add", "index": p.id}, color="success",
                       size="sm", className="mt-2 w-100"),
        ], style={"padding": "12px"})), md=4, className="mb-3"))
    return dbc.Row(cards, className="g-2")


def build_cart(items):
    if not items:
        return empty_note("Cart is empty.")
    rows = []
    for item in items:
        pid = item["product_id"]
        rows.append(html.Div([
            html.Div([
                html.Div(item["product_name"], style={"fontSize": "13px", "color": WHITE}),
                html.Div(f"{money(item['price_at_sale'])} each",
                         style={"fontSize": "11px", "color": DARKGRAY}),
            ], style={"flex": "1"}),
            dbc.ButtonGroup([
                dbc.Button("−", id={"type": "pos-dec", "index": pid}, size="sm", color="secondary"),
                dbc.Button(str(item["quantity"]), size="sm", color="dark", disabled=True),
                dbc.Button("+", id={"type": "pos-inc", "index": pid}, size="sm", color="secondary"),
            ]),
            html.Span(money(item["quantity"] * item["price_at_sale"]),
                      style={"fontFamily": "monospace", "width": "110px", "textAlign": "right",
                             "fontSize": "12px"}),
            dbc.Button("✕", id={"type": "pos-remove", "index": pid}, color="link", size="sm",
                       style={"color": RED, "padding": "0 6px"}),
        ], style={"display": "flex", "alignItems": "center", "gap": "8px",
                  "padding": "6px 0", "borderBottom": "1px solid #ffffff10"}))
    return html.Div(rows)


def _field(label, component):
    return html.Div([html.Label(label, style=_LABEL), component], className="mb-2")


def _retail_form():
    return html.Div([
        _field("Payment Method", dbc.RadioItems(
            id="pos-payment",
            options=[{"label": m, "value": m} for m in PAYMENT_METHODS],
            value="Cash", inline=True,
        )),
        _field("Amount Paid", dbc.Input(id="pos-paid", type="number", min=0, value=0)),
        html.Div([
            dbc.Button(money(v), id={"type": "pos-quick-cash", "index": v}, size="sm",
                       color="secondary", outline=True, className="me-1 mb-1")
            for v in QUICK_CASH
        ]),
        html.Div(id="pos-change", style={"color": GRAY, "fontSize": "13px", "marginTop": "6px"}),
    ], id="pos-retail-form")


def _online_form():
    statuses = [OrderStatus.PENDING, OrderStatus.PACKING, OrderStatus.SENT]
    return html.Div([
        dbc.Row([
            dbc.Col(_field("Source", dbc.Select(
                id="pos-source",
                options=[{"label": s["name"], "value": s["name"]} for s in PRESET_SOURCES],
                value=PRESET_SOURCES[0]["name"],
            )), md=6),
            dbc.Col(_field("Admin Fee %", dbc.Input(id="pos-fee", type="number", min=0, value=0)), md=6),
        ]),
        dbc.Row([
            dbc.Col(_field("Shipping", dbc.Input(id="pos-shipping", type="number", min=0, value=0)), md=6),
            dbc.Col(_field("Packing", dbc.Input(id="pos-packing", type="number", min=0,
                                                value=SETTINGS.default_packing_cost)), md=6),
        ]),
        dbc.Row([
            dbc.Col(dbc.Switch(id="pos-cod", label="Cash on Delivery", value=False), md=6),
            dbc.Col(_field("COD Fee %", dbc.Input(id="pos-cod-fee", type="number", min=0, value=0)), md=6),
        ]),
        dbc.Row([
            dbc.Col(_field("Carrier", dbc.Select(
                id="pos-carrier", options=[{"label": c, "value": c} for c in CARRIERS], value=CARRIERS[0],
            )), md=6),
            dbc.Col(_field("Tracking No.", dbc.Input(id="pos-tracking", type="text")), md=6),
        ]),
        _field("Order Status", dbc.RadioItems(
            id="pos-status",
            options=[{"label": s.value, "value": s.value} for s in statuses],
            value=OrderStatus.PENDING.value, inline=True,
        )),
    ], id="pos-online-form")


def layout():
    return html.Div([
        dcc.Store(id="pos-cart-store", data=[]),
        dcc.Store(id="pos-refresh", data=0),
        dbc.Row([
            dbc.Col([
                dbc.Row([
                    dbc.Col(dbc.Input(id="pos-search", placeholder="Search product or category...",
                                      type="text", debounce=True), md=8),
                    dbc.Col(dbc.Select(
                        id="pos-category",
                        options=[{"label": c, "value": c} for c in categories(STATE.products)],
                        value="All",
                    ), md=4),
                ], className="mb-3"),
                html.Div(id="pos-products"),
            ], md=7),
            dbc.Col([
                section("Cart", [
                    html.Div(id="pos-cart"),
                    html.Div(id="pos-total", style={"fontSize": "18px", "fontWeight": "bold",
                                                    "textAlign": "right", "marginTop": "10px"}),
                    dbc.Button("Clear", id="pos-clear-btn", color="link", size="sm",
                               style={"color": GRAY}),
                ], GREEN),
                section("Checkout", [
                    _field("Customer Name (optional)", dbc.Input(id="pos-customer", type="text")),
                    _retail_form(),
                    _online_form(),
                    html.Div(id="pos-checkout-status", className="mt-2"),
                    dbc.Button("Pay", id="pos-checkout-btn", color="success", className="w-100 mt-2"),
                ], BLUE),
            ], md=5),
        ]),
    ])
