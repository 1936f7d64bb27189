"""Response Envelopes — uniform success/error JSON responses.

Invariants:
    - Success body: {status: "success", message, data}
    - Error body: {status: "error", code, message, details}
    - data is the JSON encoding of the payload, field for field; no payload -> null
"""

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from iam.schemas.envelope import SuccessEnvelope, ErrorEnvelope


def respond_success(status_code: int, message: str, data: Any = None) -> JSONResponse:
    """Wrap a payload in the success envelope."""
    body = SuccessEnvelope(message=message, data=jsonable_encoder(data))
    return JSONResponse(status_code=status_code, content=body.model_dump())


def respond_error(
    status_code: int, code: str, message: str, details: Any = None,
) -> JSONResponse:
    """Wrap an error in the error envelope."""
    body = ErrorEnvelope(
        code=code, message=message, details=jsonable_encoder(details),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())
