"""Gunicorn config. Session data lives in process memory, so one worker only."""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8070')}"
workers = 1


def post_worker_init(worker):
    """Log the demo session the worker starts with."""
    from bisnisflow.data_state import STATE
    worker.log.info(
        f"Session ready: {len(STATE.products)} product(s), "
        f"{len(STATE.transactions)} transaction(s), {len(STATE.expenses)} expense(s)"
    )
