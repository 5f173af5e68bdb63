from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from clients.asset_backend_sdk.errors import ApiError

from asset_console.app.domain.models.category import DynamicDataError


def build_error_payload(error: Exception) -> dict[str, Any]:
    if isinstance(error, ApiError):
        category = _classify_api_error(error)
        return {
            "category": category,
            "code": error.code,
            "message": error.message,
            "trace_id": error.trace_id,
            "status_code": error.status_code,
            "action": _suggest_action(category),
        }
    if isinstance(error, (ValidationError, DynamicDataError)):
        return {
            "category": "validation",
            "code": "VALIDATION_ERROR",
            "message": _validation_message(error),
            "trace_id": None,
            "status_code": None,
            "action": "Fix the highlighted fields",
        }
    return {
        "category": "internal",
        "code": "INTERNAL_ERROR",
        "message": str(error),
        "trace_id": None,
        "status_code": None,
        "action": "Contact support",
    }


def print_error_banner(payload: dict[str, Any]) -> None:
    trace_id = payload.get("trace_id") or "n/a"
    print(
        "[ERROR] "
        f"code={payload.get('code')} "
        f"message={payload.get('message')} "
        f"trace_id={trace_id} "
        f"category={payload.get('category')} "
        f"action={payload.get('action')}"
    )


def _validation_message(error: ValidationError | DynamicDataError) -> str:
    if isinstance(error, DynamicDataError):
        return str(error)
    return "; ".join(
        f"{'.'.join(str(part) for part in item['loc'])}: {item['msg']}" for item in error.errors()
    )


def _classify_api_error(error: ApiError) -> str:
    if error.code == "NETWORK_ERROR":
        return "network/timeout"
    if error.status_code in {401, 403, 404, 409, 422}:
        return str(error.status_code)
    if error.status_code and error.status_code >= 500:
        return "500"
    return "api"


def _suggest_action(category: str) -> str:
    if category in {"network/timeout", "500", "409"}:
        return "Retry"
    if category == "401":
        return "Sign in again"
    if category == "403":
        return "Back to menu"
    if category == "404":
        return "Refresh the list"
    return "Contact support"
