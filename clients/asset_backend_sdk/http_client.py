from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

import httpx

from clients.asset_backend_sdk.config import SDKConfig
from clients.asset_backend_sdk.errors import ApiError

TokenProvider = Callable[[], str | None]
AuthErrorHandler = Callable[[ApiError], None]

AUTH_ERROR_STATUSES = frozenset({401, 403})


class HttpClient:
    """JSON over httpx; GET requests are retried on network failures and 5xx replies."""

    def __init__(
        self,
        config: SDKConfig | None = None,
        client: httpx.Client | None = None,
        token_provider: TokenProvider | None = None,
    ) -> None:
        self.config = config or SDKConfig.from_env()
        self._client = client or httpx.Client(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            verify=self.config.verify_ssl,
        )
        self._token_provider = token_provider
        self._auth_error_handler: AuthErrorHandler | None = None

    def register_auth_error_handler(self, handler: AuthErrorHandler | None) -> None:
        self._auth_error_handler = handler

    def request(
        self,
        method: str,
        path: str,
        json_body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        auth: bool = True,
    ) -> dict[str, Any]:
        url = "/" + path.lstrip("/")
        request_headers = self._headers(headers, auth)
        attempts = max(1, self.config.retry_max_attempts) if method.upper() == "GET" else 1

        attempt = 1
        while True:
            try:
                response = self._client.request(method, url, json=json_body, headers=request_headers, params=params)
            except httpx.TransportError as exc:
                if attempt >= attempts:
                    raise ApiError(
                        code="NETWORK_ERROR",
                        message="Network error while calling the asset backend",
                        details=str(exc),
                    ) from exc
            else:
                if response.status_code < 400:
                    return _decode(response)
                error = ApiError.from_http_response(response)
                if attempt >= attempts or not _is_server_error(error.status_code):
                    if error.status_code in AUTH_ERROR_STATUSES and self._auth_error_handler:
                        self._auth_error_handler(error)
                    raise error
            time.sleep(max(0, self.config.retry_backoff_ms) * attempt / 1000)
            attempt += 1

    def close(self) -> None:
        self._client.close()

    def _headers(self, extra: dict[str, str] | None, auth: bool) -> dict[str, str]:
        headers = {"Content-Type": "application/json", **(extra or {})}
        if self.config.api_key:
            headers["apikey"] = self.config.api_key
        token = self._token_provider() if auth and self._token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers


def _decode(response: httpx.Response) -> dict[str, Any]:
    if not response.content:
        return {}
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {"data": payload}


def _is_server_error(status_code: int | None) -> bool:
    return status_code is not None and 500 <= status_code <= 599
