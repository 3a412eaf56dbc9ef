"""Cashflow callbacks — add/delete expenses, timeline, CSV export."""
from dash import Input, Output, State, ALL, callback_context, dcc, no_update
import dash_bootstrap_components as dbc

from bisnisflow.components.cards import toast
from bisnisflow.components.date_filter import range_from, register_preset_callback
from bisnisflow.data_state import STATE, money
from bisnisflow.exports import cashflow_frame
from bisnisflow.ledger import cashflow_timeline, cashflow_totals
from bisnisflow.pages.cashflow import build_timeline


def register_callbacks(app):
    register_preset_callback(app, "cash")

    @app.callback(
        Output("cash-timeline", "children"),
        Input("cash-range", "start_date"),
        Input("cash-range", "end_date"),
        Input("cash-refresh", "data"),
    )
    def render_timeline(start_date, end_date, _refresh):
        entries = cashflow_timeline(STATE.transactions, STATE.expenses, range_from(start_date, end_date))
        return build_timeline(entries, cashflow_totals(entries))

    @app.callback(
        Output("cash-refresh", "data", allow_duplicate=True),
        Output("cash-add-status", "children"),
        Output("cash-amount", "value"),
        Output("cash-description", "value"),
        Output("toast-container", "children", allow_duplicate=True),
        Input("cash-add-btn", "n_clicks"),
        State("cash-category", "value"),
        State("cash-amount", "value"),
        State("cash-description", "value"),
        State("cash-refresh", "data"),
        prevent_initial_call=True,
    )
    def add_expense(n_clicks, category, amount, description, refresh):
        if not n_clicks:
            return no_update, no_update, no_update, no_update, no_update
        expense = STATE.add_expense(category, amount, description)
        if expense is None:
            alert = dbc.Alert("Enter an amount above 0 and a description.", color="warning")
            return no_update, alert, no_update, no_update, no_update
        note = toast(f"{expense.description}: {money(expense.amount)}", "Expense Saved")
        return (refresh or 0) + 1, None, None, "", note

    @app.callback(
        Output("cash-refresh", "data", allow_duplicate=True),
        Input({"type": "cash-expense-delete", "index": ALL}, "n_clicks"),
        State("cash-refresh", "data"),
        prevent_initial_call=True,
    )
    def delete_expense(clicks, refresh):
        if not any(clicks):
            return no_update
        STATE.delete_expense(callback_context.triggered_id["index"])
        return (refresh or 0) + 1

    @app.callback(
        Output("cash-download", "data"),
        Input("cash-export-btn", "n_clicks"),
        State("cash-range", "start_date"),
        State("cash-range", "end_date"),
        prevent_initial_call=True,
    )
    def export_cashflow(n_clicks, start_date, end_date):
        if not n_clicks:
            return no_update
        rng = range_from(start_date, end_date)
        df = cashflow_frame(cashflow_timeline(STATE.transactions, STATE.expenses, rng))
        return dcc.send_data_frame(df.to_csv, f"cashflow_{rng.start:%Y%m%d}_{rng.end:%Y%m%d}.csv",
                                   index=False)
