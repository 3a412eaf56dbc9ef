"""
advisor.py — Chat with the AI business consultant.

The core builds one prompt (the owner's question plus a summary of the
business) and gets plain text back. A missing API key or a failing call
returns a fixed message instead of raising, so the chat never breaks the page.
"""

import logging

from bisnisflow.data_state import money
from bisnisflow.models import BusinessMode
from bisnisflow.settings import SETTINGS

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = (
    "The AI advisor is not configured yet. "
    "Set ANTHROPIC_API_KEY in the environment (or .env) to enable it."
)
ERROR_MESSAGE = "Sorry, something went wrong while contacting the AI advisor. Please try again later."
EMPTY_MESSAGE = "Sorry, I can't come up with an answer right now."

WELCOME_MESSAGE = (
    "Hi! I'm your business assistant. Ask me about sales performance, pricing "
    "strategy or stock management."
)

SYSTEM_PROMPT = """You are an AI business consultant for small businesses (UMKM) in Indonesia.
Help the owner analyse sales, stock, cost price (HPP) and cashflow.
Answer in a friendly, practical way and get straight to the point.
Use Markdown for structure.

Current business data:
{context}
"""


def build_business_context(state, mode=BusinessMode.RETAIL):
    """All-time summary of the session handed to the advisor."""
    txns = state.transactions
    total_revenue = sum(t.total_revenue for t in txns)
    total_net = sum(t.net_profit for t in txns)
    total_expenses = sum(e.amount for e in state.expenses)
    online = sum(1 for t in txns if t.mode == BusinessMode.ONLINE)
    retail = sum(1 for t in txns if t.mode == BusinessMode.RETAIL)
    return (
        f"Business data (mode: {BusinessMode(mode).value}):\n"
        f"- Gross revenue: {money(total_revenue)}\n"
        f"- Net profit after HPP and marketplace fees: {money(total_net)}\n"
        f"- Operating expenses: {money(total_expenses)}\n"
        f"- Bottom-line profit: {money(total_net - total_expenses)}\n"
        f"\n"
        f"Sales split:\n"
        f"- Online: {online} transaction(s)\n"
        f"- Retail (store): {retail} transaction(s)\n"
        f"\n"
        f"Stock: {len(state.products)} active SKU(s)."
    )


def _make_client(api_key):
    import anthropic
    return anthropic.Anthropic(api_key=api_key)


def generate_business_advice(query, context, settings=None, client=None):
    """Ask the advisor. Always returns text."""
    settings = settings or SETTINGS
    if not settings.advisor_configured:
        return NOT_CONFIGURED_MESSAGE

    try:
        client = client or _make_client(settings.anthropic_api_key)
        response = client.messages.create(
            model=settings.advisor_model,
            max_tokens=settings.advisor_max_tokens,
            system=SYSTEM_PROMPT.format(context=context),
            messages=[{"role": "user", "content": query}],
        )
        text = "".join(
            getattr(block, "text", "") for block in (response.content or [])
        ).strip()
    except Exception as e:
        logger.error("Advisor request failed: %s", e)
        return ERROR_MESSAGE
    return text or EMPTY_MESSAGE
