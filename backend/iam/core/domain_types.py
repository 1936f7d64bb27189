"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - GroupId and UserId wrap str — identifiers are opaque to the API layer
    - Error codes encoded as an Enum — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

GroupId = NewType("GroupId", str)
UserId = NewType("UserId", str)


# ─── Enums ───────────────────────────────────────────────────────

class ErrorCode(str, Enum):
    """Machine-readable `code` field of error envelopes."""
    API_ERROR = "API_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    MEMBERSHIP_CONFLICT = "MEMBERSHIP_CONFLICT"
    DATABASE_ERROR = "DATABASE_ERROR"
