"""AI Advisor page — chat with the business consultant."""
from dash import html, dcc
import dash_bootstrap_components as dbc

from bisnisflow.theme import *
from bisnisflow.components.cards import section
from bisnisflow.advisor import WELCOME_MESSAGE
from bisnisflow.settings import SETTINGS

SUGGESTIONS = [
    "How is my business doing this month?",
    "Which products should I restock first?",
    "How can I raise my profit margin?",
]


def initial_history():
    return [{"role": "assistant", "text": WELCOME_MESSAGE}]


def build_chat(history):
    bubbles = []
    for msg in history or []:
        mine = msg["role"] == "user"
        bubbles.append(html.Div(
            dcc.Markdown(msg["text"], className="mb-0") if not mine else msg["text"],
            className="chat-bubble",
            style={
                "backgroundColor": f"{BLUE}33" if mine else CARD2,
                "color": WHITE,
                "maxWidth": "80%",
                "marginLeft": "auto" if mine else "0",
                "marginBottom": "10px",
            },
        ))
    return bubbles


def layout():
    status = ("Connected" if SETTINGS.advisor_configured
              else "Not configured: set ANTHROPIC_API_KEY to enable answers")
    return html.Div([
        dcc.Store(id="advisor-history", data=initial_history(), storage_type="session"),
        section("AI Business Advisor", [
            html.Div(status, style={"color": GREEN if SETTINGS.advisor_configured else ORANGE,
                                    "fontSize": "11px", "marginBottom": "10px"}),
            dcc.Loading(html.Div(id="advisor-chat", style={"minHeight": "300px", "maxHeight": "60vh",
                                                           "overflowY": "auto"}),
                        type="dot", color=PURPLE),
            html.Div([
                dbc.Button(s, id={"type": "advisor-suggestion", "index": i}, size="sm",
                           color="secondary", outline=True, className="me-1 mb-1")
                for i, s in enumerate(SUGGESTIONS)
            ], className="mt-2"),
            dbc.InputGroup([
                dbc.Input(id="advisor-input", placeholder="Ask about sales, pricing or stock...",
                          type="text", debounce=True),
                dbc.Button("Send", id="advisor-send-btn", color="primary"),
            ], className="mt-2"),
        ], PURPLE),
    ])
