"""Cashier callbacks — product grid, cart edits, checkout."""
from dataclasses import asdict

from dash import Input, Output, State, ALL, callback_context, no_update
import dash_bootstrap_components as dbc

from bisnisflow.components.cards import toast
from bisnisflow.data_state import STATE, money
from bisnisflow.errors import CheckoutError
from bisnisflow.marketplace import to_number
from bisnisflow.models import BusinessMode, TransactionItem
from bisnisflow.pages.pos import build_cart, build_product_grid
from bisnisflow.pos import PRESET_SOURCES, Cart, CheckoutRequest, build_transaction, search_products


def _cart_from_store(data):
    return Cart(TransactionItem(**d) for d in (data or []))


def _cart_to_store(cart):
    return [asdict(i) for i in cart.items]


def register_callbacks(app):
    # ── Mode switch ───────────────────────────────────────────────────────
    @app.callback(
        Output("pos-retail-form", "style"),
        Output("pos-online-form", "style"),
        Input("business-mode", "value"),
    )
    def toggle_forms(mode):
        hidden = {"display": "none"}
        if mode == BusinessMode.ONLINE.value:
            return hidden, {}
        return {}, hidden

    # ── Product grid ──────────────────────────────────────────────────────
    @app.callback(
        Output("pos-products", "children"),
        Input("pos-search", "value"),
        Input("pos-category", "value"),
        Input("pos-refresh", "data"),
    )
    def render_products(query, category, _refresh):
        return build_product_grid(search_products(STATE.products, query, category))

    # ── Cart edits ────────────────────────────────────────────────────────
    @app.callback(
        Output("pos-cart-store", "data"),
        Input({"type": "pos-add", "index": ALL}, "n_clicks"),
        Input({"type": "pos-inc", "index": ALL}, "n_clicks"),
        Input({"type": "pos-dec", "index": ALL}, "n_clicks"),
        Input({"type": "pos-remove", "index": ALL}, "n_clicks"),
        Input("pos-clear-btn", "n_clicks"),
        State("pos-cart-store", "data"),
        prevent_initial_call=True,
    )
    def edit_cart(_add, _inc, _dec, _remove, _clear, data):
        trigger = callback_context.triggered_id
        # Re-rendered buttons fire with n_clicks=None
        if trigger is None or not callback_context.triggered[0]["value"]:
            return no_update
        cart = _cart_from_store(data)
        if trigger == "pos-clear-btn":
            cart.clear()
            return _cart_to_store(cart)

        kind, product_id = trigger["type"], trigger["index"]
        if kind == "pos-add":
            product = STATE.get_product(product_id)
            if product is None:
                return no_update
            cart.add(product)
        elif kind == "pos-inc":
            cart.update_quantity(product_id, 1)
        elif kind == "pos-dec":
            cart.update_quantity(product_id, -1)
        elif kind == "pos-remove":
            cart.remove(product_id)
        return _cart_to_store(cart)

    @app.callback(
        Output("pos-cart", "children"),
        Output("pos-total", "children"),
        Input("pos-cart-store", "data"),
    )
    def render_cart(data):
        cart = _cart_from_store(data)
        return build_cart(data or []), f"Total {money(cart.total_revenue)}"

    # ── Payment helpers ───────────────────────────────────────────────────
    @app.callback(
        Output("pos-fee", "value"),
        Input("pos-source", "value"),
    )
    def source_fee(source):
        for s in PRESET_SOURCES:
            if s["name"] == source:
                return s["fee"]
        return no_update

    @app.callback(
        Output("pos-paid", "value"),
        Input({"type": "pos-quick-cash", "index": ALL}, "n_clicks"),
        prevent_initial_call=True,
    )
    def quick_cash(clicks):
        if not any(clicks):
            return no_update
        return callback_context.triggered_id["index"]

    @app.callback(
        Output("pos-change", "children"),
        Input("pos-paid", "value"),
        Input("pos-payment", "value"),
        Input("pos-cart-store", "data"),
    )
    def show_change(paid, method, data):
        if method != "Cash":
            return ""
        total = _cart_from_store(data).total_revenue
        change = to_number(paid, strip=False) - total
        if change < 0:
            return f"Short by {money(-change)}"
        return f"Change {money(change)}"

    # ── Checkout ──────────────────────────────────────────────────────────
    @app.callback(
        Output("pos-cart-store", "data", allow_duplicate=True),
        Output("pos-refresh", "data"),
        Output("pos-checkout-status", "children"),
        Output("toast-container", "children", allow_duplicate=True),
        Input("pos-checkout-btn", "n_clicks"),
        State("business-mode", "value"),
        State("pos-cart-store", "data"),
        State("pos-customer", "value"),
        State("pos-payment", "value"),
        State("pos-paid", "value"),
        State("pos-source", "value"),
        State("pos-fee", "value"),
        State("pos-cod", "value"),
        State("pos-cod-fee", "value"),
        State("pos-shipping", "value"),
        State("pos-packing", "value"),
        State("pos-carrier", "value"),
        State("pos-tracking", "value"),
        State("pos-status", "value"),
        State("pos-refresh", "data"),
        prevent_initial_call=True,
    )
    def checkout(n_clicks, mode, data, customer, payment, paid, source, fee, is_cod,
                 cod_fee, shipping, packing, carrier, tracking, status, refresh):
        if not n_clicks:
            return no_update, no_update, no_update, no_update
        request = CheckoutRequest(
            mode=BusinessMode(mode or "Retail"),
            payment_method=payment or "Cash",
            customer_name=(customer or "").strip(),
            online_source=source or "WhatsApp",
            platform_fee_percent=to_number(fee, strip=False),
            is_cod=bool(is_cod),
            cod_fee_percent=to_number(cod_fee, strip=False),
            shipping_cost=to_number(shipping, strip=False),
            packing_cost=to_number(packing, strip=False),
            carrier=carrier or "",
            tracking_number=(tracking or "").strip(),
            status=status or "Pending",
            amount_paid=to_number(paid, strip=False),
        )
        try:
            txn = build_transaction(_cart_from_store(data), request)
        except CheckoutError as e:
            return no_update, no_update, dbc.Alert(str(e), color="danger"), no_update

        STATE.checkout(txn)
        if txn.mode == BusinessMode.RETAIL:
            message = f"Paid {money(txn.total_revenue)}, change {money(txn.change)}"
        else:
            message = f"{txn.source} order saved, net profit {money(txn.net_profit)}"
        return [], (refresh or 0) + 1, None, toast(message, "Sale Recorded")
