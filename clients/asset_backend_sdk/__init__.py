from clients.asset_backend_sdk.auth_store import AuthStore
from clients.asset_backend_sdk.config import SDKConfig
from clients.asset_backend_sdk.errors import ApiError
from clients.asset_backend_sdk.http_client import HttpClient
from clients.asset_backend_sdk.table_client import TableClient

__all__ = [
    "SDKConfig",
    "ApiError",
    "AuthStore",
    "HttpClient",
    "TableClient",
]
