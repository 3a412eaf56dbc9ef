"""
BisnisFlow — Small-business POS & bookkeeping dashboard
Run:  python -m bisnisflow.app
Open: http://127.0.0.1:8070
"""

import logging
import os

import dash
from dash import html, dcc
import dash_bootstrap_components as dbc

from bisnisflow.settings import SETTINGS

# ── Create the Dash app ──────────────────────────────────────────────────────
app = dash.Dash(
    __name__,
    suppress_callback_exceptions=True,
    external_stylesheets=[
        dbc.themes.DARKLY,
        "https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap",
    ],
    assets_folder=os.path.join(os.path.dirname(__file__), "assets"),
    title="BisnisFlow",
)
server = app.server  # For deployment (Gunicorn)

# ── Sidebar navigation ──────────────────────────────────────────────────────
NAV_ITEMS = [
    {"label": "Dashboard",      "icon": "\U0001f4ca", "value": "/"},
    {"label": "Marketplace Import", "icon": "⬆️", "value": "/import"},
    {"label": "Profit Recap",   "icon": "\U0001f4c8", "value": "/recap"},
    "---",
    {"label": "Cashier",        "icon": "\U0001f6d2", "value": "/pos"},
    {"label": "HPP Calculator", "icon": "\U0001f9ee", "value": "/hpp"},
    {"label": "Stock",          "icon": "\U0001f4e6", "value": "/stock"},
    {"label": "Cashflow",       "icon": "\U0001f4b0", "value": "/cashflow"},
    "---",
    {"label": "AI Advisor",     "icon": "\U0001f916", "value": "/advisor"},
]


def _build_sidebar():
    nav_links = []
    for item in NAV_ITEMS:
        if item == "---":
            nav_links.append(html.Hr(className="sidebar-divider"))
        else:
            nav_links.append(
                dbc.NavLink(
                    [html.Span(item["icon"], className="nav-icon"), item["label"]],
                    href=item["value"],
                    active="exact",
                )
            )

    return html.Div([
        # Brand
        html.Div([
            html.H4("BisnisFlow"),
            html.Small("POS & Bookkeeping"),
        ], className="sidebar-brand"),

        # Business mode
        html.Div([
            html.Small("BUSINESS MODE", style={"color": "#aaaaaa", "letterSpacing": "1px"}),
            dbc.RadioItems(
                id="business-mode",
                options=[
                    {"label": "Store (Retail)", "value": "Retail"},
                    {"label": "Online", "value": "Online"},
                ],
                value="Retail",
                className="mt-1",
            ),
        ], className="sidebar-mode mb-3"),

        # Nav
        dbc.Nav(nav_links, vertical=True, pills=True),
    ], className="sidebar")


# ── App layout ───────────────────────────────────────────────────────────────
def serve_layout():
    return html.Div([
        dcc.Location(id="url", refresh=False),

        # Sidebar
        _build_sidebar(),

        # Main content area
        html.Div([
            html.Div([
                html.H3("BISNISFLOW"),
                html.Div("Session data resets when the server restarts", className="header-subtitle"),
            ], className="app-header"),

            # Page content (rendered by routing callback)
            html.Div(id="page-content"),

            # Toast notification container
            html.Div(id="toast-container"),

        ], className="main-content"),
    ])


app.layout = serve_layout


# ── Register callbacks ───────────────────────────────────────────────────────
# Import callback modules AFTER app is created so they can reference `app`
from bisnisflow.callbacks import (
    navigation_cb, dashboard_cb, import_cb, recap_cb, pos_cb, hpp_cb,
    stock_cb, cashflow_cb, advisor_cb,
)
for _module in (navigation_cb, dashboard_cb, import_cb, recap_cb, pos_cb, hpp_cb,
                stock_cb, cashflow_cb, advisor_cb):
    _module.register_callbacks(app)

# ── Run ──────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    port = SETTINGS.port
    print(f"\n  BisnisFlow Dashboard")
    print(f"  http://127.0.0.1:{port}")
    print(f"  AI advisor: {'configured' if SETTINGS.advisor_configured else 'not configured'}\n")
    app.run(debug=False, host="0.0.0.0", port=port)
