"""HPP Calculator page — cost sections, pricing, ad budget, save as product."""
from dash import html, dash_table
import dash_bootstrap_components as dbc

from bisnisflow.theme import *
from bisnisflow.components.cards import section, row_item
from bisnisflow.components.kpi import kpi_pill, kpi_strip
from bisnisflow.data_state import money
from bisnisflow.hpp import HPPCalculation, default_sections

_LABEL = {"color": GRAY, "fontSize": "12px", "marginBottom": "2px"}


def _cost_table(index, cost_section):
    return html.Div([
        html.Div(cost_section.title, style={"color": ORANGE, "fontWeight": "600",
                                            "fontSize": "13px", "marginBottom": "6px"}),
        dash_table.DataTable(
            id={"type": "hpp-section", "index": index},
            data=[{"name": c.name, "cost": c.cost} for c in cost_section.items],
            columns=[
                {"name": "Component", "id": "name", "editable": True},
                {"name": "Cost (Rp)", "id": "cost", "editable": True, "type": "numeric"},
            ],
            style_table={"overflowX": "auto"},
            style_cell={
                "backgroundColor": CARD,
                "color": WHITE,
                "border": f"1px solid #ffffff10",
                "fontSize": "12px",
                "padding": "8px",
            },
            style_header={
                "backgroundColor": BG,
                "color": GRAY,
                "fontWeight": "600",
                "textTransform": "uppercase",
                "fontSize": "11px",
            },
            style_data_conditional=[
                {"if": {"state": "active"}, "backgroundColor": f"{CYAN}15", "border": f"1px solid {CYAN}"},
            ],
            editable=True,
            row_deletable=True,
        ),
        dbc.Button("+ Add component", id={"type": "hpp-add-row", "index": index},
                   color="link", size="sm", style={"color": CYAN}),
    ], className="mb-3")


def _number(id_, label, value, step=1):
    return html.Div([
        html.Label(label, style=_LABEL),
        dbc.Input(id=id_, type="number", min=0, step=step, value=value),
    ], className="mb-2")


def build_results(calc):
    margin_color = GREEN if calc.real_gross_margin > 0 else RED
    return html.Div([
        kpi_strip([
            kpi_pill("Rp", "HPP / Unit", money(calc.hpp_per_unit), ORANGE,
                     f"Batch cost {money(calc.total_production_cost)}"),
            kpi_pill("$", "Suggested Price", money(calc.suggested_price), GREEN),
            kpi_pill("x", "Break-even ROAS", f"{calc.break_even_roas:.2f}x", PURPLE,
                     f"Real margin {calc.real_gross_margin * 100:.1f}%"),
        ]),
        section("Per Unit", [
            row_item("Selling Price", calc.suggested_price),
            row_item("HPP", -calc.hpp_per_unit),
            row_item("Marketplace Admin Fee", -calc.admin_fee),
            row_item("Net Profit / Unit", calc.net_profit_per_unit, bold=True, color=margin_color),
        ], GREEN),
        section("Monthly Target", [
            html.Div(f"Sell {calc.target_sales_qty} unit(s) to reach {money(calc.target_revenue)}",
                     style={"color": GRAY, "fontSize": "13px", "marginBottom": "6px"}),
            row_item("Max Ad Spend", -calc.max_ad_spend),
            row_item("Projected Net Profit", calc.projected_monthly_net_profit, bold=True, color=GREEN),
        ], BLUE),
    ])


def layout():
    calc = HPPCalculation()
    return html.Div([
        dbc.Row([
            dbc.Col([
                section("Production Costs", [
                    _cost_table(i, s) for i, s in enumerate(default_sections())
                ] + [
                    _number("hpp-batch", "Batch Size (units produced)", calc.batch_size),
                ], ORANGE),
                section("Pricing & Targets", [
                    dbc.Row([
                        dbc.Col(_number("hpp-margin", "Desired Margin %", calc.desired_margin, 0.5), md=6),
                        dbc.Col(_number("hpp-fee", "Marketplace Fee %", calc.marketplace_fee_percent, 0.5),
                                md=6),
                    ]),
                    dbc.Row([
                        dbc.Col(_number("hpp-target-revenue", "Monthly Revenue Target",
                                        calc.target_revenue, 1000), md=6),
                        dbc.Col(_number("hpp-target-roas", "Target ROAS", calc.target_roas, 0.1), md=6),
                    ]),
                ], PURPLE),
            ], md=6),
            dbc.Col([
                html.Div(id="hpp-results"),
                section("Save as Product", [
                    dbc.Row([
                        dbc.Col(dbc.Input(id="hpp-product-name", placeholder="Product name"), md=6),
                        dbc.Col(dbc.Input(id="hpp-product-category", placeholder="Category"), md=6),
                    ], className="mb-2"),
                    dbc.Button("Save to Catalog", id="hpp-save-btn", color="success", className="w-100"),
                    html.Div(id="hpp-save-status", className="mt-2"),
                ], GREEN),
            ], md=6),
        ]),
    ])
