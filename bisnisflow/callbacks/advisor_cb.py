"""AI Advisor callbacks — send a question, append the answer to the chat."""
from dash import Input, Output, State, ALL, callback_context, no_update

from bisnisflow.advisor import build_business_context, generate_business_advice
from bisnisflow.data_state import STATE
from bisnisflow.models import BusinessMode
from bisnisflow.pages.advisor import SUGGESTIONS, build_chat


def register_callbacks(app):
    @app.callback(
        Output("advisor-chat", "children"),
        Input("advisor-history", "data"),
    )
    def render_chat(history):
        return build_chat(history)

    @app.callback(
        Output("advisor-history", "data"),
        Output("advisor-input", "value"),
        Input("advisor-send-btn", "n_clicks"),
        Input("advisor-input", "n_submit"),
        Input({"type": "advisor-suggestion", "index": ALL}, "n_clicks"),
        State("advisor-input", "value"),
        State("advisor-history", "data"),
        State("business-mode", "value"),
        prevent_initial_call=True,
    )
    def ask_advisor(_send, _submit, _suggestions, text, history, mode):
        trigger = callback_context.triggered_id
        if not callback_context.triggered[0]["value"]:
            return no_update, no_update
        if isinstance(trigger, dict):
            query = SUGGESTIONS[trigger["index"]]
        else:
            query = (text or "").strip()
        if not query:
            return no_update, no_update

        context = build_business_context(STATE, BusinessMode(mode or "Retail"))
        answer = generate_business_advice(query, context)
        history = list(history or []) + [
            {"role": "user", "text": query},
            {"role": "assistant", "text": answer},
        ]
        return history, ""
