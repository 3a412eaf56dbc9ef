"""Marketplace Import callbacks — parse upload into a preview, then confirm."""
import base64
import logging

from dash import html, Input, Output, State, callback_context, no_update
import dash_bootstrap_components as dbc

from bisnisflow.components.cards import toast
from bisnisflow.data_state import STATE
from bisnisflow.errors import BisnisFlowError
from bisnisflow.marketplace import parse_marketplace_file, preview_stats
from bisnisflow.pages.marketplace_import import build_preview

logger = logging.getLogger(__name__)

# Parsed orders waiting for the user to confirm. Single session, so one slot.
_PENDING = {"orders": [], "filename": None}


def register_callbacks(app):
    # ── Upload → preview ──────────────────────────────────────────────────
    @app.callback(
        Output("import-status", "children"),
        Output("import-preview", "children"),
        Output("import-upload", "contents"),
        Input("import-upload", "contents"),
        State("import-upload", "filename"),
        State("import-marketplace", "value"),
        prevent_initial_call=True,
    )
    def upload_export(contents, filename, marketplace):
        if contents is None:
            return no_update, no_update, no_update
        content_type, content_string = contents.split(",")
        decoded = base64.b64decode(content_string)

        try:
            orders = parse_marketplace_file(decoded, filename, marketplace)
        except BisnisFlowError as e:
            logger.info("Import of %s rejected: %s", filename, e)
            _PENDING.update(orders=[], filename=None)
            return dbc.Alert(str(e), color="danger"), None, None

        _PENDING.update(orders=orders, filename=filename)
        if not orders:
            return dbc.Alert("No orders found in the file.", color="warning"), None, None
        status = dbc.Alert(
            f"Read {filename} — {len(orders)} order(s). Review them and click Import Orders.",
            color="info",
        )
        # Clearing contents lets the same file be uploaded again
        return status, build_preview(orders, preview_stats(orders), marketplace, filename), None

    # ── Confirm / cancel ──────────────────────────────────────────────────
    @app.callback(
        Output("import-status", "children", allow_duplicate=True),
        Output("import-preview", "children", allow_duplicate=True),
        Output("toast-container", "children", allow_duplicate=True),
        Input("import-confirm-btn", "n_clicks"),
        Input("import-cancel-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def finish_import(confirm_clicks, cancel_clicks):
        trigger = callback_context.triggered_id
        if trigger == "import-cancel-btn" and cancel_clicks:
            _PENDING.update(orders=[], filename=None)
            return dbc.Alert("Import cancelled.", color="secondary"), None, no_update
        if trigger != "import-confirm-btn" or not confirm_clicks:
            return no_update, no_update, no_update

        outcome = STATE.import_batch(_PENDING["orders"])
        _PENDING.update(orders=[], filename=None)
        color = "success" if outcome.added else "warning"
        note = toast(outcome.message(), "Import Complete" if outcome.added else "Nothing Imported", color)
        return dbc.Alert(outcome.message(), color=color), html.Div(), note
