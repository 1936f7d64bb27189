"""Response Envelopes — the two shapes every API response body takes.

Invariants:
    - SuccessEnvelope: status == "success", message, data (null when no payload)
    - ErrorEnvelope: status == "error", code, message, details (null by default)
"""

from typing import Any, Literal

from pydantic import BaseModel


class SuccessEnvelope(BaseModel):
    status: Literal["success"] = "success"
    message: str
    data: Any = None


class ErrorEnvelope(BaseModel):
    status: Literal["error"] = "error"
    code: str
    message: str
    details: Any = None
