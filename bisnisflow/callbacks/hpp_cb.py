"""HPP Calculator callbacks — live results, add component rows, save product."""
from dash import Input, Output, State, ALL, MATCH, no_update
import dash_bootstrap_components as dbc

from bisnisflow.components.cards import toast
from bisnisflow.data_state import STATE
from bisnisflow.hpp import CostComponent, CostSection, HPPCalculation, default_sections
from bisnisflow.marketplace import to_number
from bisnisflow.pages.hpp import build_results
from bisnisflow.settings import SETTINGS


def _calculation(tables, batch, margin, fee, target_revenue, target_roas):
    """HPPCalculation from the page's table data and inputs."""
    sections = []
    for template, rows in zip(default_sections(), tables):
        sections.append(CostSection(template.title, [
            CostComponent(r.get("name") or "", to_number(r.get("cost"), strip=False))
            for r in rows or []
        ]))
    return HPPCalculation(
        sections=sections,
        batch_size=int(to_number(batch, strip=False)),
        desired_margin=to_number(margin, strip=False),
        marketplace_fee_percent=to_number(fee, strip=False),
        target_revenue=to_number(target_revenue, strip=False),
        target_roas=to_number(target_roas, strip=False),
    )


_CALC_STATE = [
    ({"type": "hpp-section", "index": ALL}, "data"),
    ("hpp-batch", "value"),
    ("hpp-margin", "value"),
    ("hpp-fee", "value"),
    ("hpp-target-revenue", "value"),
    ("hpp-target-roas", "value"),
]


def register_callbacks(app):
    @app.callback(
        Output("hpp-results", "children"),
        *[Input(cid, prop) for cid, prop in _CALC_STATE],
    )
    def recalculate(tables, batch, margin, fee, target_revenue, target_roas):
        return build_results(_calculation(tables, batch, margin, fee, target_revenue, target_roas))

    @app.callback(
        Output({"type": "hpp-section", "index": MATCH}, "data"),
        Input({"type": "hpp-add-row", "index": MATCH}, "n_clicks"),
        State({"type": "hpp-section", "index": MATCH}, "data"),
        prevent_initial_call=True,
    )
    def add_component_row(n_clicks, rows):
        if not n_clicks:
            return no_update
        return [*(rows or []), {"name": "", "cost": 0}]

    @app.callback(
        Output("hpp-save-status", "children"),
        Output("toast-container", "children", allow_duplicate=True),
        Input("hpp-save-btn", "n_clicks"),
        State("hpp-product-name", "value"),
        State("hpp-product-category", "value"),
        *[State(cid, prop) for cid, prop in _CALC_STATE],
        prevent_initial_call=True,
    )
    def save_product(n_clicks, name, category, tables, batch, margin, fee, target_revenue, target_roas):
        if not n_clicks:
            return no_update, no_update
        calc = _calculation(tables, batch, margin, fee, target_revenue, target_roas)
        try:
            product = calc.to_product(name, category, min_stock=SETTINGS.default_min_stock)
        except ValueError as e:
            return dbc.Alert(str(e), color="danger"), no_update
        STATE.add_product(product)
        return None, toast(f"{product.name} added to the catalog with stock 0", "Product Saved")
