"""Stock page callbacks — stock edits, delete, search, CSV export."""
from dash import Input, Output, State, ALL, callback_context, dcc, no_update

from bisnisflow.components.cards import toast
from bisnisflow.data_state import STATE
from bisnisflow.exports import stock_frame
from bisnisflow.pages.stock import build_stock_view
from bisnisflow.pos import search_products


def register_callbacks(app):
    @app.callback(
        Output("stock-content", "children"),
        Input("stock-search", "value"),
        Input("stock-refresh", "data"),
    )
    def render_stock(query, _refresh):
        products = STATE.products
        return build_stock_view(search_products(products, query), products)

    # ── Manual stock edit ─────────────────────────────────────────────────
    @app.callback(
        Output("stock-refresh", "data", allow_duplicate=True),
        Output("toast-container", "children", allow_duplicate=True),
        Input({"type": "stock-save", "index": ALL}, "n_clicks"),
        State({"type": "stock-input", "index": ALL}, "value"),
        State({"type": "stock-input", "index": ALL}, "id"),
        State("stock-refresh", "data"),
        prevent_initial_call=True,
    )
    def save_stock(clicks, values, ids, refresh):
        if not any(clicks):
            return no_update, no_update
        product_id = callback_context.triggered_id["index"]
        new_stock = next((v for v, i in zip(values, ids) if i["index"] == product_id), 0)
        STATE.update_stock(product_id, new_stock)
        product = STATE.get_product(product_id)
        if product is None:
            return (refresh or 0) + 1, no_update
        return (refresh or 0) + 1, toast(f"{product.name}: stock {product.stock}", "Stock Updated")

    # ── Delete product ────────────────────────────────────────────────────
    @app.callback(
        Output("stock-refresh", "data", allow_duplicate=True),
        Input({"type": "stock-delete", "index": ALL}, "n_clicks"),
        State("stock-refresh", "data"),
        prevent_initial_call=True,
    )
    def delete_product(clicks, refresh):
        if not any(clicks):
            return no_update
        STATE.delete_product(callback_context.triggered_id["index"])
        return (refresh or 0) + 1

    @app.callback(
        Output("stock-download", "data"),
        Input("stock-export-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def export_stock(n_clicks):
        if not n_clicks:
            return no_update
        return dcc.send_data_frame(stock_frame(STATE.products).to_csv, "stock.csv", index=False)
