"""
WSGI entry point for deployment (Gunicorn).
    gunicorn wsgi:server -c gunicorn.conf.py
"""
from bisnisflow.app import server  # noqa: F401
