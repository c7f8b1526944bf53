"""Unified API error envelope.

Successful pool data responses are the cache document itself. Errors use
this envelope:
{
    "code": 2001,        // non-0 error code
    "message": "...",
    "data": null,
    "timestamp": "...",
    "request_id": "..."
}
"""

import uuid
from typing import Any

from pydantic import BaseModel, Field

from src.pc_common.datetime_utils import utc_now_iso


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Any = None
    timestamp: str = Field(default_factory=utc_now_iso)
    request_id: str = Field(default_factory=lambda: f"req_{uuid.uuid4().hex[:12]}")


def error_response(code: int, message: str) -> ApiResponse:
    return ApiResponse(code=code, message=message, data=None)
