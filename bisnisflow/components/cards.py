"""Reusable card/section builders."""
from dash import html
import dash_bootstrap_components as dbc
from bisnisflow.theme import *
from bisnisflow.data_state import money


def section(title, children, color=ORANGE):
    """Titled section card with colored top border."""
    return dbc.Card([
        dbc.CardHeader(title, style={"color": color, "fontWeight": "bold", "fontSize": "16px",
                                      "borderBottom": f"2px solid {color}",
                                      "backgroundColor": "transparent", "padding": "12px 16px"}),
        dbc.CardBody(children, style={"padding": "16px"}),
    ], className="mb-3")


def row_item(label, amount, bold=False, color=WHITE):
    """Single P&L row; negative amounts turn red."""
    display_color = RED if amount < 0 else color
    style = {
        "display": "flex", "justifyContent": "space-between",
        "padding": "4px 0", "borderBottom": "1px solid #ffffff10",
    }
    if bold:
        style.update(fontWeight="bold", borderBottom="2px solid #ffffff30", padding="8px 0")
    return html.Div([
        html.Span(label, style={"color": display_color if bold else color, "fontSize": "13px"}),
        html.Span(money(amount), style={"color": display_color, "fontFamily": "monospace", "fontSize": "13px"}),
    ], style=style)


def status_badge(status):
    if not status:
        return html.Span("-", style={"color": DARKGRAY})
    label = getattr(status, "value", status)
    return dbc.Badge(label, color="light", text_color="dark",
                     style={"backgroundColor": STATUS_COLORS.get(label, GRAY)})


def make_chart(fig, height=360, legend_h=True):
    """Apply consistent styling to a Plotly figure."""
    layout = {**CHART_LAYOUT, "height": height}
    if legend_h:
        layout["legend"] = dict(orientation="h", y=1.12, x=0.5, xanchor="center")
    fig.update_layout(**layout)
    return fig


def empty_note(text):
    return html.P(text, style={"color": GRAY, "textAlign": "center", "padding": "30px"})


def toast(message, header, icon="success"):
    return dbc.Toast(message, header=header, icon=icon, duration=3000, style=TOAST_STYLE)
