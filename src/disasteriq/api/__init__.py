"""API layer: canonical query/transform surface for the HTTP app and CLI.

Key rules:

1. No HTTP or FastAPI imports outside app.py - query functions take a client
2. Query functions return Pydantic models only
3. Errors propagate as EonetFetchError; app.py turns them into envelopes
"""
