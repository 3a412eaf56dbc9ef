"""Profit Recap callbacks — tab render and CSV export."""
from dash import Input, Output, State, dcc, no_update

from bisnisflow.components.date_filter import range_from, register_preset_callback
from bisnisflow.data_state import STATE
from bisnisflow.exports import performance_frame, recap_frame
from bisnisflow.ledger import product_performance, recap_summary
from bisnisflow.pages.recap import build_general, build_products


def register_callbacks(app):
    register_preset_callback(app, "recap")

    @app.callback(
        Output("recap-content", "children"),
        Input("recap-tab", "active_tab"),
        Input("recap-range", "start_date"),
        Input("recap-range", "end_date"),
    )
    def render_recap(tab, start_date, end_date):
        rng = range_from(start_date, end_date)
        if tab == "products":
            return build_products(product_performance(STATE.transactions, rng))
        return build_general(recap_summary(STATE.transactions, STATE.expenses, rng))

    @app.callback(
        Output("recap-download", "data"),
        Input("recap-export-btn", "n_clicks"),
        State("recap-tab", "active_tab"),
        State("recap-range", "start_date"),
        State("recap-range", "end_date"),
        prevent_initial_call=True,
    )
    def export_recap(n_clicks, tab, start_date, end_date):
        if not n_clicks:
            return no_update
        rng = range_from(start_date, end_date)
        period = f"{rng.start:%Y%m%d}_{rng.end:%Y%m%d}"
        if tab == "products":
            df = performance_frame(product_performance(STATE.transactions, rng))
            return dcc.send_data_frame(df.to_csv, f"product_performance_{period}.csv", index=False)
        df = recap_frame(recap_summary(STATE.transactions, STATE.expenses, rng), rng)
        return dcc.send_data_frame(df.to_csv, f"profit_recap_{period}.csv", index=False)
