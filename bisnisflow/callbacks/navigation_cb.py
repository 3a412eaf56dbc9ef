"""Page routing callback — renders the correct page based on URL."""
from dash import html, Input, Output


def register_callbacks(app):
    @app.callback(
        Output("page-content", "children"),
        Input("url", "pathname"),
    )
    def route_page(pathname):
        if pathname == "/" or pathname is None:
            from bisnisflow.pages.dashboard import layout
            return layout()
        elif pathname == "/import":
            from bisnisflow.pages.marketplace_import import layout
            return layout()
        elif pathname == "/recap":
            from bisnisflow.pages.recap import layout
            return layout()
        elif pathname == "/pos":
            from bisnisflow.pages.pos import layout
            return layout()
        elif pathname == "/hpp":
            from bisnisflow.pages.hpp import layout
            return layout()
        elif pathname == "/stock":
            from bisnisflow.pages.stock import layout
            return layout()
        elif pathname == "/cashflow":
            from bisnisflow.pages.cashflow import layout
            return layout()
        elif pathname == "/advisor":
            from bisnisflow.pages.advisor import layout
            return layout()
        else:
            return html.Div([
                html.H3("404 — Page Not Found", style={"color": "#e74c3c"}),
                html.P(f"No page at '{pathname}'"),
            ], style={"padding": "40px"})
