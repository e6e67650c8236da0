"""The JSON envelope every endpoint answers with.

    {"code": 0, "message": "success", "data": {...},
     "timestamp": "2026-10-19T12:00:00+00:00", "request_id": "req_..."}

``code`` is 0 on success and the AppError code otherwise; ``data`` is null on
errors. ``request_id`` matches the X-Request-ID response header.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field
from starlette.requests import Request


def new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


def request_id_of(request: Request | None) -> str:
    """The id RequestLogMiddleware stamped on the request, or a fresh one."""
    if request is None:
        return new_request_id()
    return getattr(request.state, "request_id", None) or new_request_id()


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Any = None
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    request_id: str = Field(default_factory=new_request_id)


def success_response(
    data: Any = None, request: Request | None = None, message: str = "success"
) -> ApiResponse:
    return ApiResponse(code=0, message=message, data=data, request_id=request_id_of(request))


def error_response(code: int, message: str, request: Request | None = None) -> ApiResponse:
    return ApiResponse(code=code, message=message, data=None, request_id=request_id_of(request))
