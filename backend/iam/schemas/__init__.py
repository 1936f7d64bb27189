"""Pydantic Schemas — request/response contracts for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies, response envelopes)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
