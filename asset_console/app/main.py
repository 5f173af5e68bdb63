from __future__ import annotations

from clients.asset_backend_sdk.auth_store import AuthStore
from clients.asset_backend_sdk.errors import ApiError
from clients.asset_backend_sdk.http_client import HttpClient
from clients.asset_backend_sdk.table_client import TableClient

from asset_console.app.application.row_store import RowSource, RowStore
from asset_console.app.config import AppConfig
from asset_console.app.domain.models.asset import Asset
from asset_console.app.domain.models.blog import Blog
from asset_console.app.domain.models.category import Category
from asset_console.app.domain.models.contact import Contact
from asset_console.app.infrastructure.logging.logger import configure_logging, get_logger, log_action
from asset_console.app.listing_console import Listing, ListingConsole
from asset_console.app.ui.data_table import PaginationOptions
from asset_console.app.views.assets import (
    build_assets_view,
    category_label,
    describe_dynamic_data,
    dynamic_data_normalizer,
    find_category,
)
from asset_console.app.views.blogs import build_blogs_view
from asset_console.app.views.categories import build_categories_view
from asset_console.app.views.contacts import build_contacts_view

logger = get_logger(__name__)


def build_listings(source: RowSource, config: AppConfig | None = None) -> list[Listing]:
    pagination = None
    if config is not None:
        pagination = PaginationOptions(page_size=config.default_page_size, page_size_options=config.page_size_options)

    categories_view = build_categories_view(pagination)
    categories = RowStore(source, categories_view.resource, schema=Category, order=categories_view.order)

    assets_view = build_assets_view(lambda: categories.rows)
    assets = RowStore(
        source,
        assets_view.resource,
        schema=Asset,
        order=assets_view.order,
        normalize=dynamic_data_normalizer(lambda: categories.rows),
    )
    blogs_view = build_blogs_view()
    contacts_view = build_contacts_view(pagination)

    def _load_categories() -> None:
        if not categories.rows:
            categories.fetch_rows()

    return [
        Listing(
            view=assets_view,
            store=assets,
            prepare=_load_categories,
            extra_details=lambda row: describe_dynamic_data(
                find_category(categories.rows, row.get("category_id")),
                row.get("dynamic_data"),
            ),
            filter_choices=lambda: [(str(item.get("id")), category_label(item)) for item in categories.rows],
        ),
        Listing(view=categories_view, store=categories),
        Listing(view=blogs_view, store=RowStore(source, blogs_view.resource, schema=Blog, order=blogs_view.order)),
        Listing(
            view=contacts_view,
            store=RowStore(source, contacts_view.resource, schema=Contact, order=contacts_view.order),
        ),
    ]


def _print_runtime_config(config: AppConfig) -> None:
    print("Asset Admin Console")
    print(f"API URL: {config.api_url}")
    print(f"Timeout: {config.timeout_seconds}s")
    print(f"GET Retry: {config.retry_max_attempts} attempts, base backoff {config.retry_backoff_ms}ms")
    print(f"Verify SSL: {config.verify_ssl}")


def run_cli(config: AppConfig | None = None) -> None:
    config = config or AppConfig()
    configure_logging(config.log_level)
    auth = AuthStore(token=config.access_token)
    http_client = HttpClient(config=config.sdk_config(), token_provider=auth.get_token)

    def _handle_http_auth_error(error: ApiError) -> None:
        if error.status_code == 401:
            auth.clear()
            print("[session] Session expired. Set ASSET_CONSOLE_ACCESS_TOKEN and restart.")
        log_action(logger, module="main", action="auth_error", outcome=str(error.status_code), trace_id=error.trace_id)

    http_client.register_auth_error_handler(_handle_http_auth_error)
    _print_runtime_config(config)
    try:
        ListingConsole(build_listings(TableClient(http_client), config)).run()
    finally:
        http_client.close()


def main() -> None:
    run_cli()


if __name__ == "__main__":
    main()
