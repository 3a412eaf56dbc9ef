"""KPI pill builders using dash-bootstrap-components."""
from dash import html
import dash_bootstrap_components as dbc
from bisnisflow.theme import *


def icon_badge(text, color):
    """Colored 36px icon circle for KPI pills."""
    return html.Div(text, style={
        "width": "36px", "height": "36px", "borderRadius": "50%",
        "background": f"linear-gradient(135deg, {color}, {color}88)",
        "color": "#ffffff",
        "display": "inline-flex", "alignItems": "center", "justifyContent": "center",
        "fontSize": "15px", "fontWeight": "bold", "flexShrink": "0",
    })


def kpi_pill(icon, label, value, color, subtitle=""):
    """KPI pill: icon, uppercase label, big monospace value, optional subtitle."""
    text_children = [
        html.Div(label, style={"color": GRAY, "fontSize": "11px", "fontWeight": "600",
                                "letterSpacing": "1.2px", "textTransform": "uppercase"}),
        html.Div(value, style={"color": WHITE, "fontSize": "24px", "fontWeight": "bold",
                                "fontFamily": "monospace", "marginTop": "3px"}),
    ]
    if subtitle:
        text_children.append(html.Div(subtitle, style={"color": DARKGRAY, "fontSize": "11px",
                                                         "marginTop": "2px"}))
    return dbc.Card(
        dbc.CardBody([
            icon_badge(icon, color),
            html.Div(text_children, style={"marginLeft": "12px", "minWidth": "0"}),
        ], style={"display": "flex", "alignItems": "center", "padding": "14px 18px"}),
        style={"borderLeft": f"4px solid {color}", "flex": "1", "minWidth": "160px"},
        className="kpi-pill",
    )


def kpi_strip(pills):
    return html.Div(pills, style={"display": "flex", "flexWrap": "wrap", "gap": "12px",
                                  "marginBottom": "16px"})
