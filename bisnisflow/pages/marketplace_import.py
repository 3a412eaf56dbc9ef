"""Marketplace Import page — upload a Seller Center export, preview, confirm."""
from dash import html, dcc
import dash_bootstrap_components as dbc

from bisnisflow.theme import *
from bisnisflow.components.cards import section, status_badge
from bisnisflow.components.kpi import kpi_pill, kpi_strip
from bisnisflow.data_state import money

PREVIEW_ROWS = 50


def _upload_zone(upload_id, title, icon, description, accept, color=CYAN):
    """Build a single upload dropzone."""
    return dbc.Card(dbc.CardBody([
        html.Div([
            html.Span(icon, style={"fontSize": "32px", "marginBottom": "8px", "display": "block"}),
            html.H5(title, style={"color": color, "fontWeight": "bold", "marginBottom": "4px"}),
            html.P(description, style={"color": GRAY, "fontSize": "12px", "marginBottom": "12px"}),
        ], style={"textAlign": "center"}),
        dcc.Upload(
            id=upload_id,
            children=html.Div([
                html.Span("Drag & Drop or "),
                html.A("Click to Browse", style={"color": CYAN, "textDecoration": "underline"}),
            ], style={"color": GRAY, "fontSize": "13px"}),
            style={
                "width": "100%", "borderWidth": "2px", "borderStyle": "dashed",
                "borderColor": f"{color}44", "borderRadius": "10px",
                "textAlign": "center", "padding": "20px",
                "cursor": "pointer",
            },
            accept=accept,
            className="upload-zone",
        ),
    ]), style={"borderTop": f"3px solid {color}"}, className="mb-3")


def build_preview(orders, stats, marketplace, filename):
    """Preview card for a parsed file, with confirm/cancel buttons."""
    rows = []
    for t in orders[:PREVIEW_ROWS]:
        rows.append(html.Tr([
            html.Td(t.id, style={"fontFamily": "monospace", "fontSize": "12px"}),
            html.Td(", ".join(f"{i.product_name} x{i.quantity}" for i in t.items),
                    style={"fontSize": "12px", "color": GRAY}),
            html.Td(status_badge(t.status), style={"textAlign": "center"}),
            html.Td(money(t.total_revenue), style={"fontFamily": "monospace", "textAlign": "right",
                                                    "fontSize": "12px"}),
            html.Td(t.tracking_number or "-", style={"fontSize": "11px", "color": DARKGRAY}),
        ]))
    more = len(orders) - PREVIEW_ROWS
    return section(f"Preview — {filename} ({marketplace})", [
        kpi_strip([
            kpi_pill("#", "Orders", str(stats["orders"]), BLUE),
            kpi_pill("✓", "Completed", str(stats["completed"]), GREEN),
            kpi_pill("→", "In Process", str(stats["in_process"]), ORANGE),
            kpi_pill("✕", "Cancelled", str(stats["cancelled"]), RED),
            kpi_pill("Rp", "Estimated Revenue", money(stats["estimated_revenue"]), TEAL,
                     "Cancelled orders excluded"),
        ]),
        dbc.Table([
            html.Thead(html.Tr([
                html.Th("Order ID"), html.Th("Items"),
                html.Th("Status", style={"textAlign": "center"}),
                html.Th("Revenue", style={"textAlign": "right"}),
                html.Th("Tracking"),
            ])),
            html.Tbody(rows),
        ], striped=True, hover=True, size="sm"),
        html.P(f"... and {more} more order(s)", style={"color": DARKGRAY, "fontSize": "11px"})
        if more > 0 else None,
        html.Div([
            dbc.Button("Import Orders", id="import-confirm-btn", color="success", className="me-2"),
            dbc.Button("Cancel", id="import-cancel-btn", color="secondary", outline=True),
        ], style={"textAlign": "right"}),
    ], CYAN)


def layout():
    return html.Div([
        html.P("Upload the original order export from your marketplace Seller Center. "
               "Orders already in the system are skipped automatically.",
               style={"color": GRAY, "fontSize": "13px", "marginBottom": "16px"}),
        dbc.Row([
            dbc.Col([
                html.Label("Marketplace", style={"color": GRAY, "fontSize": "12px"}),
                dbc.RadioItems(
                    id="import-marketplace",
                    options=[{"label": m, "value": m} for m in MARKETPLACE_OPTIONS],
                    value=MARKETPLACE_OPTIONS[0],
                    inline=True,
                    className="mb-3",
                ),
                _upload_zone(
                    "import-upload",
                    "Order Export",
                    "\U0001f4e5",
                    "Excel (.xlsx / .xls) or CSV straight from Seller Center",
                    ".csv,.xlsx,.xls",
                    CYAN,
                ),
            ], md=4),
            dbc.Col([
                html.Div(id="import-status"),
                html.Div(id="import-preview"),
            ], md=8),
        ], className="g-3"),
    ])
