from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

TRACE_HEADERS = ("X-Request-Id", "X-Trace-Id", "sb-request-id")

_STATUS_CODE_NAMES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    409: "CONFLICT",
}


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: dict[str, Any] | list[Any] | str | None = None
    trace_id: str | None = None
    status_code: int | None = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    @classmethod
    def from_http_response(cls, response: httpx.Response) -> "ApiError":
        """Builds the error from a PostgREST/GoTrue body ({code, message|msg, details, hint}) or plain text."""
        status = response.status_code
        fallback_code = _STATUS_CODE_NAMES.get(status, "HTTP_ERROR")
        fallback_message = response.text or "HTTP request failed"
        header_trace = next((response.headers[name] for name in TRACE_HEADERS if name in response.headers), None)

        try:
            body: Any = response.json()
        except ValueError:
            return cls(code="HTTP_ERROR", message=fallback_message, trace_id=header_trace, status_code=status)

        if not isinstance(body, dict):
            return cls(code=fallback_code, message=fallback_message, details=body, trace_id=header_trace, status_code=status)

        return cls(
            code=str(body.get("code") or fallback_code),
            message=str(body.get("message") or body.get("msg") or fallback_message),
            details=body.get("details") or body.get("hint"),
            trace_id=body.get("trace_id") or header_trace,
            status_code=status,
        )
