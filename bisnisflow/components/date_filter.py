"""Date range control shared by Dashboard, Recap and Cashflow."""
from datetime import date

from dash import html, dcc, Input, Output
import dash_bootstrap_components as dbc

from bisnisflow.ledger import DateRange, preset_range
from bisnisflow.theme import *


def date_filter(prefix):
    """Preset buttons + date picker. Component ids are prefixed per page."""
    default = preset_range("this_month")
    return html.Div([
        dbc.RadioItems(
            id=f"{prefix}-preset",
            options=[{"label": label, "value": key} for key, label in DATE_PRESETS],
            value="this_month",
            inline=True,
            className="btn-group",
            inputClassName="btn-check",
            labelClassName="btn btn-outline-info btn-sm",
            labelCheckedClassName="active",
        ),
        dcc.DatePickerRange(
            id=f"{prefix}-range",
            start_date=default.start.date(),
            end_date=default.end.date(),
            display_format="DD/MM/YYYY",
            style={"marginLeft": "12px"},
        ),
    ], style={"display": "flex", "alignItems": "center", "flexWrap": "wrap", "gap": "8px",
              "marginBottom": "16px"})


def range_from(start_date, end_date):
    """DateRange from picker values, falling back to this month."""
    if not start_date or not end_date:
        return preset_range("this_month")
    return DateRange.of(start_date, end_date)


def preset_dates(preset, today=None):
    rng = preset_range(preset or "this_month", today or date.today())
    return rng.start.date(), rng.end.date()


def register_preset_callback(app, prefix):
    """Clicking a preset moves the date picker to that range."""
    @app.callback(
        Output(f"{prefix}-range", "start_date"),
        Output(f"{prefix}-range", "end_date"),
        Input(f"{prefix}-preset", "value"),
        prevent_initial_call=True,
    )
    def apply_preset(preset):
        return preset_dates(preset)
