from pydantic import ValidationError

from clients.asset_backend_sdk.errors import ApiError

from asset_console.app.domain.models.category import Category, DynamicDataError
from asset_console.app.error_presenter import build_error_payload, print_error_banner


def test_network_error_suggests_retry() -> None:
    payload = build_error_payload(ApiError(code="NETWORK_ERROR", message="down"))

    assert payload["category"] == "network/timeout"
    assert payload["action"] == "Retry"


def test_auth_errors_are_classified_by_status() -> None:
    expired = build_error_payload(ApiError(code="PGRST301", message="JWT expired", status_code=401))
    denied = build_error_payload(ApiError(code="42501", message="denied", status_code=403, trace_id="t-1"))

    assert expired["action"] == "Sign in again"
    assert denied["category"] == "403"
    assert denied["trace_id"] == "t-1"


def test_validation_errors_list_fields() -> None:
    try:
        Category.model_validate({"title": "x", "slug": "ok"})
    except ValidationError as error:
        payload = build_error_payload(error)

    assert payload["code"] == "VALIDATION_ERROR"
    assert payload["message"].startswith("title:")

    dynamic = build_error_payload(DynamicDataError({"bedrooms": "Bedrooms is required"}))
    assert dynamic["message"] == "bedrooms: Bedrooms is required"


def test_unknown_errors_are_internal(capsys) -> None:
    payload = build_error_payload(RuntimeError("boom"))
    print_error_banner(payload)

    output = capsys.readouterr().out.strip()
    assert payload["category"] == "internal"
    assert output == "[ERROR] code=INTERNAL_ERROR message=boom trace_id=n/a category=internal action=Contact support"
