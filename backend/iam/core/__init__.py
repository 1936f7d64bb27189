"""Core Layer — domain types, error hierarchy and service contracts. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Pydantic schemas (schemas/) are the only non-core imports: contracts and
      envelopes are spoken in them

Design Decisions:
    - Contracts live next to the types they speak in; implementations live in the shell
"""
