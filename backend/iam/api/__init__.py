"""API Layer — FastAPI routes, the group handler, envelopes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every endpoint answers with the success or error envelope

Design Decisions:
    - Thin routes delegate to GroupHandler, which delegates to the service
"""
