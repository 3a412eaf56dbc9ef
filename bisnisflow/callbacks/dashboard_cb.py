"""Dashboard callbacks — period filter, KPI render, delete, CSV export."""
from dash import Input, Output, State, ALL, callback_context, dcc, no_update

from bisnisflow.components.date_filter import range_from, register_preset_callback
from bisnisflow.data_state import STATE
from bisnisflow.exports import transactions_frame
from bisnisflow.ledger import dashboard_summary, in_range
from bisnisflow.models import BusinessMode
from bisnisflow.pages.dashboard import build_kpis, build_revenue_chart, build_transaction_list


def register_callbacks(app):
    register_preset_callback(app, "dash")

    # ── Render ────────────────────────────────────────────────────────────
    @app.callback(
        Output("dash-kpis", "children"),
        Output("dash-chart", "children"),
        Output("dash-table", "children"),
        Input("business-mode", "value"),
        Input("dash-range", "start_date"),
        Input("dash-range", "end_date"),
        Input("dash-refresh", "data"),
    )
    def render_dashboard(mode, start_date, end_date, _refresh):
        mode = BusinessMode(mode or "Retail")
        rng = range_from(start_date, end_date)
        summary = dashboard_summary(STATE.transactions, rng, mode)
        txns = [t for t in in_range(STATE.transactions, rng) if t.mode == mode]
        return build_kpis(summary, mode), build_revenue_chart(txns), build_transaction_list(txns)

    # ── Delete transaction ────────────────────────────────────────────────
    @app.callback(
        Output("dash-refresh", "data"),
        Input({"type": "dash-txn-delete", "index": ALL}, "n_clicks"),
        State("dash-refresh", "data"),
        prevent_initial_call=True,
    )
    def delete_transaction(clicks, refresh):
        # Re-rendered buttons fire with n_clicks=None
        if not any(clicks):
            return no_update
        STATE.delete_transaction(callback_context.triggered_id["index"])
        return (refresh or 0) + 1

    # ── CSV export ────────────────────────────────────────────────────────
    @app.callback(
        Output("dash-download", "data"),
        Input("dash-export-btn", "n_clicks"),
        State("business-mode", "value"),
        State("dash-range", "start_date"),
        State("dash-range", "end_date"),
        prevent_initial_call=True,
    )
    def export_transactions(n_clicks, mode, start_date, end_date):
        if not n_clicks:
            return no_update
        rng = range_from(start_date, end_date)
        df = transactions_frame(STATE.transactions, rng, mode)
        filename = f"transactions_{mode.lower()}_{rng.start:%Y%m%d}_{rng.end:%Y%m%d}.csv"
        return dcc.send_data_frame(df.to_csv, filename, index=False)
