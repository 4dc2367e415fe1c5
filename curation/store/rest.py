"""Async HTTP adapter for a PostgREST-style item store."""

import time
from typing import Any, Self

import httpx
import structlog
from pydantic import ValidationError

from curation.config.constants import COMPONENT_STORE
from curation.config.schemas.homepage import StoreLayoutConfig
from curation.items.models import Item
from curation.ranker.models import (
    ALL_LANGUAGES,
    FilterCriteria,
    StatusFilter,
    VisibilityFilter,
)
from curation.store.errors import ItemStoreReadError
from curation.store.models import WriteResult


logger = structlog.get_logger()

LISTING_ORDER = "homepage_rank.asc.nullslast,created_at.desc"


def criteria_to_params(criteria: FilterCriteria | None) -> dict[str, str]:
    """Translate filter criteria into PostgREST query parameters.

    Args:
        criteria: Filter predicates, or None for no filtering.

    Returns:
        Query parameters (column -> operator expression).
    """
    params: dict[str, str] = {}
    if criteria is None:
        return params

    if criteria.status is StatusFilter.PUBLISHED:
        params["is_published"] = "eq.true"
    elif criteria.status is StatusFilter.DRAFT:
        params["is_published"] = "eq.false"

    if criteria.visibility is VisibilityFilter.BANNER:
        params["is_banner"] = "eq.true"
    elif criteria.visibility is VisibilityFilter.NEW_LAUNCH:
        params["is_new_launch"] = "eq.true"
    elif criteria.visibility is VisibilityFilter.RANKED:
        params["homepage_rank"] = "not.is.null"
    elif criteria.visibility is VisibilityFilter.UNRANKED:
        params["homepage_rank"] = "is.null"

    if criteria.language != ALL_LANGUAGES:
        params["language"] = f"eq.{criteria.language}"

    return params


def parse_content_range(header: str | None) -> int | None:
    """Extract the total from a ``Content-Range`` header such as ``0-9/42``."""
    if not header or "/" not in header:
        return None
    total = header.rsplit("/", 1)[1]
    return int(total) if total.isdigit() else None


def error_reason(response: httpx.Response) -> str:
    """Best human-readable reason from an error response."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        for key in ("message", "error_description", "error", "hint"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    text = response.text.strip()
    return text or f"HTTP {response.status_code} {response.reason_phrase}"


class RestItemStore:
    """Item store speaking the PostgREST dialect over httpx.

    Reads raise ``ItemStoreReadError``; writes never raise and report failures
    through ``WriteResult``. Updates and deletes request the affected rows back
    so a write that matched nothing is reported as "not found".
    """

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        layout: StoreLayoutConfig | None = None,
        timeout_seconds: float = 15.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            base_url: REST root (e.g., ``https://host/rest/v1``).
            api_key: Service key sent as ``apikey`` and bearer token.
            layout: Table names.
            timeout_seconds: Per-request timeout.
            client: Pre-built client (tests inject a MockTransport client).
        """
        headers = {"Accept": "application/json"}
        if api_key:
            headers["apikey"] = api_key
            headers["Authorization"] = f"Bearer {api_key}"

        self._layout = layout or StoreLayoutConfig()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout_seconds,
        )
        if client is not None:
            self._client.headers.update(headers)
        self._log = logger.bind(component=COMPONENT_STORE, backend="rest")

    async def __aenter__(self) -> Self:
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: type | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Async context manager exit."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying client if this store created it."""
        if self._owns_client:
            await self._client.aclose()

    @property
    def _items_path(self) -> str:
        return f"/{self._layout.items_table}"

    async def list_items(self, criteria: FilterCriteria | None = None) -> list[Item]:
        """Fetch items in listing order.

        Raises:
            ItemStoreReadError: On transport errors, non-2xx responses, or a
                body that is not a JSON list.
        """
        params = {"select": "*", "order": LISTING_ORDER, **criteria_to_params(criteria)}
        start = time.perf_counter()
        try:
            response = await self._client.get(self._items_path, params=params)
        except httpx.HTTPError as e:
            raise ItemStoreReadError("list_items", str(e) or type(e).__name__) from e

        if response.is_error:
            raise ItemStoreReadError("list_items", error_reason(response))

        try:
            rows = response.json()
        except ValueError as e:
            raise ItemStoreReadError("list_items", "invalid JSON body") from e
        if not isinstance(rows, list):
            raise ItemStoreReadError(
                "list_items", f"expected a list, got {type(rows).__name__}"
            )

        items: list[Item] = []
        for row in rows:
            try:
                items.append(Item.model_validate(row))
            except ValidationError as e:
                self._log.warning(
                    "item_row_invalid",
                    item_id=row.get("id") if isinstance(row, dict) else None,
                    error_count=e.error_count(),
                )

        self._log.info(
            "items_listed",
            count=len(items),
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return items

    async def count_children(self, item_id: str) -> int:
        """Count episode rows for an item using ``Prefer: count=exact``.

        Raises:
            ItemStoreReadError: On transport errors, non-2xx responses, or a
                missing ``Content-Range`` total.
        """
        params = {
            "select": "id",
            self._layout.child_foreign_key: f"eq.{item_id}",
        }
        try:
            response = await self._client.head(
                f"/{self._layout.children_table}",
                params=params,
                headers={"Prefer": "count=exact"},
            )
        except httpx.HTTPError as e:
            raise ItemStoreReadError("count_children", str(e) or type(e).__name__) from e

        if response.is_error:
            raise ItemStoreReadError("count_children", error_reason(response))

        total = parse_content_range(response.headers.get("content-range"))
        if total is None:
            raise ItemStoreReadError("count_children", "response has no count")
        return total

    async def update_item(self, item_id: str, fields: dict[str, Any]) -> WriteResult:
        """PATCH one item."""
        return await self._write("PATCH", item_id, fields)

    async def delete_item(self, item_id: str) -> WriteResult:
        """DELETE one item."""
        return await self._write("DELETE", item_id, None)

    async def _write(
        self, method: str, item_id: str, fields: dict[str, Any] | None
    ) -> WriteResult:
        log = self._log.bind(item_id=item_id, method=method)
        try:
            response = await self._client.request(
                method,
                self._items_path,
                params={"id": f"eq.{item_id}"},
                json=fields,
                headers={"Prefer": "return=representation"},
            )
        except httpx.HTTPError as e:
            reason = str(e) or type(e).__name__
            log.warning("item_write_transport_error", error=reason)
            return WriteResult.failure(reason)

        if response.is_error:
            reason = error_reason(response)
            log.warning(
                "item_write_rejected", status_code=response.status_code, error=reason
            )
            return WriteResult.failure(reason, status_code=response.status_code)

        try:
            rows = response.json() if response.content else []
        except ValueError:
            log.warning("item_write_invalid_body", status_code=response.status_code)
            return WriteResult.failure(
                "Item store returned an invalid response",
                status_code=response.status_code,
            )
        if not rows:
            return WriteResult.failure(
                f"Item not found: {item_id}", status_code=response.status_code
            )

        log.info("item_written", status_code=response.status_code)
        return WriteResult.success(status_code=response.status_code)
