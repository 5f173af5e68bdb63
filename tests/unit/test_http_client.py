import httpx
import pytest

from clients.asset_backend_sdk.config import SDKConfig
from clients.asset_backend_sdk.errors import ApiError
from clients.asset_backend_sdk.http_client import HttpClient


def _config(**overrides) -> SDKConfig:
    values = {
        "base_url": "https://example.test/",
        "api_key": "anon-key",
        "timeout_seconds": 5,
        "verify_ssl": True,
        "retry_max_attempts": 3,
        "retry_backoff_ms": 0,
    }
    values.update(overrides)
    return SDKConfig(**values)


def _client(handler, token_provider=None, **overrides) -> HttpClient:
    return HttpClient(
        config=_config(**overrides),
        client=httpx.Client(base_url="https://example.test/", transport=httpx.MockTransport(handler)),
        token_provider=token_provider,
    )


def test_token_is_read_from_provider_on_every_request() -> None:
    seen: list[tuple[str | None, str | None]] = []
    tokens = iter(["first", None])

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.headers.get("Authorization"), request.headers.get("apikey")))
        return httpx.Response(200, json={"ok": True})

    http = _client(handler, token_provider=lambda: next(tokens))
    http.request("GET", "/rest/v1/assets")
    http.request("GET", "/rest/v1/assets")

    assert seen == [("Bearer first", "anon-key"), (None, "anon-key")]


def test_http_client_retries_get_not_post() -> None:
    call_log: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        call_log.append(f"{request.method}:{request.url.path}")
        if request.url.path == "/rest/v1/assets" and len(call_log) == 1:
            raise httpx.ReadTimeout("slow")
        if request.method == "GET":
            return httpx.Response(200, json=[{"id": "a1"}])
        raise httpx.ReadTimeout("write timeout")

    http = _client(handler)

    assert http.request("GET", "/rest/v1/assets") == {"data": [{"id": "a1"}]}
    with pytest.raises(ApiError) as excinfo:
        http.request("POST", "/rest/v1/assets", json_body={"title": "Villa"})

    assert excinfo.value.code == "NETWORK_ERROR"
    assert call_log == ["GET:/rest/v1/assets", "GET:/rest/v1/assets", "POST:/rest/v1/assets"]


def test_retry_on_5xx_then_gives_up() -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(503, json={"message": "down"}, headers={"X-Request-Id": "req-9"})

    http = _client(handler, retry_max_attempts=2)

    with pytest.raises(ApiError) as excinfo:
        http.request("GET", "/rest/v1/blogs")

    assert calls["count"] == 2
    assert excinfo.value.status_code == 503
    assert excinfo.value.trace_id == "req-9"


def test_auth_error_handler_runs_once_without_retry() -> None:
    calls = {"count": 0}
    handled: list[int | None] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(401, json={"code": "PGRST301", "message": "JWT expired"})

    http = _client(handler)
    http.register_auth_error_handler(lambda error: handled.append(error.status_code))

    with pytest.raises(ApiError) as excinfo:
        http.request("GET", "/rest/v1/assets")

    assert excinfo.value.code == "PGRST301"
    assert excinfo.value.message == "JWT expired"
    assert handled == [401]
    assert calls["count"] == 1


def test_empty_body_returns_empty_payload() -> None:
    http = _client(lambda request: httpx.Response(204))

    assert http.request("DELETE", "/rest/v1/assets", params={"id": "eq.a1"}) == {}


def test_unauthenticated_request_skips_the_token() -> None:
    seen: list[str | None] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers.get("Authorization"))
        return httpx.Response(200, json={})

    http = _client(handler, token_provider=lambda: "secret")
    http.request("GET", "health", auth=False)

    assert seen == [None]
