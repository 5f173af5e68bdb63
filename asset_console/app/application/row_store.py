from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, Protocol

from pydantic import BaseModel

from clients.asset_backend_sdk.errors import ApiError

from asset_console.app.infrastructure.logging.logger import get_logger, log_action
from asset_console.app.ui.filters import clean_filters

logger = get_logger(__name__)

Row = dict[str, Any]


class RowSource(Protocol):
    def fetch_rows(
        self,
        resource: str,
        *,
        filters: dict[str, Any] | None = None,
        order: tuple[str, str] | None = None,
    ) -> list[Row]: ...

    def fetch_row(self, resource: str, key: str, value: Any) -> Row | None: ...

    def insert_row(self, resource: str, values: Row) -> Row: ...

    def update_row(self, resource: str, row_id: str, values: Row) -> Row: ...

    def delete_row(self, resource: str, row_id: str) -> None: ...


class RowStore:
    """Rows of one backend resource plus the loading/error flags a list view renders."""

    def __init__(
        self,
        source: RowSource,
        resource: str,
        *,
        schema: type[BaseModel] | None = None,
        order: tuple[str, str] | None = None,
        normalize: Callable[[Row], Row] | None = None,
    ) -> None:
        self.source = source
        self.resource = resource
        self.schema = schema
        self.order = order
        self.normalize = normalize
        self.rows: list[Row] = []
        self.current: Row | None = None
        self.loading = False
        self.error: Exception | None = None

    def fetch_rows(self, filters: dict[str, Any] | None = None) -> list[Row]:
        self.loading = True
        self.error = None
        try:
            self.rows = self.source.fetch_rows(self.resource, filters=clean_filters(filters or {}), order=self.order)
        except ApiError as error:
            self.error = error
            self._log("fetch_rows", "error", level=logging.WARNING, code=error.code, trace_id=error.trace_id)
        else:
            self._log("fetch_rows", "success", count=len(self.rows), filters=filters or {})
        finally:
            self.loading = False
        return self.rows

    def fetch_row(self, value: Any, key: str = "id") -> Row | None:
        with self._mutation("fetch_row", key=key, value=value):
            self.current = self.source.fetch_row(self.resource, key, value)
        return self.current

    def create_row(self, values: Row) -> Row:
        with self._mutation("create_row"):
            row = self.source.insert_row(self.resource, self._validate(values, exclude_none=True))
            self.rows.insert(0, row)
        return row

    def update_row(self, row_id: str, values: Row) -> Row:
        with self._mutation("update_row", row_id=row_id):
            sent = self._backend_keys(values)
            validated = self._validate({**(self._find(row_id) or {}), **sent}, exclude_none=False)
            changes = {key: validated[key] for key in sent if key in validated}
            row = self.source.update_row(self.resource, row_id, changes)
            self.rows = [row if str(item.get("id")) == str(row_id) else item for item in self.rows]
            if self.current is not None and str(self.current.get("id")) == str(row_id):
                self.current = row
        return row

    def delete_row(self, row_id: str) -> None:
        with self._mutation("delete_row", row_id=row_id):
            self.source.delete_row(self.resource, row_id)
            self.rows = [item for item in self.rows if str(item.get("id")) != str(row_id)]
            if self.current is not None and str(self.current.get("id")) == str(row_id):
                self.current = None

    def clear_error(self) -> None:
        self.error = None

    def _backend_keys(self, values: Row) -> Row:
        if self.schema is None:
            return dict(values)
        aliases = {name: info.alias for name, info in self.schema.model_fields.items() if info.alias}
        return {aliases.get(key, key): value for key, value in values.items()}

    def _validate(self, values: Row, *, exclude_none: bool) -> Row:
        payload = dict(values)
        if self.schema is not None:
            model = self.schema.model_validate(payload)
            payload = model.model_dump(mode="json", by_alias=True, exclude_none=exclude_none)
        if self.normalize is not None:
            payload = self.normalize(payload)
        return payload

    def _find(self, row_id: str) -> Row | None:
        for item in self.rows:
            if str(item.get("id")) == str(row_id):
                return item
        if self.current is not None and str(self.current.get("id")) == str(row_id):
            return self.current
        return None

    @contextmanager
    def _mutation(self, action: str, **fields: Any) -> Iterator[None]:
        self.loading = True
        self.error = None
        try:
            yield
        except Exception as error:
            self.error = error
            self._log(action, "error", level=logging.WARNING, error=str(error), **fields)
            raise
        else:
            self._log(action, "success", **fields)
        finally:
            self.loading = False

    def _log(self, action: str, outcome: str, level: int = logging.INFO, **fields: Any) -> None:
        log_action(logger, module="row_store", action=action, outcome=outcome, level=level, resource=self.resource, **fields)

