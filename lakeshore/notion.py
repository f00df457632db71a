"""Minimal async client for the Notion databases and pages API."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence, Union

import httpx

from .config import ContentSettings

LOGGER = logging.getLogger(__name__)

FILTER_KINDS = {"checkbox", "select", "rich_text"}


class ContentStoreError(RuntimeError):
    """Raised when the content store cannot answer a request."""


@dataclass(frozen=True)
class PropertyFilter:
    """Equality predicate on a single property."""

    property: str
    kind: str
    value: Union[str, bool]

    def __post_init__(self) -> None:
        if self.kind not in FILTER_KINDS:
            raise ValueError(f"Unsupported filter kind: {self.kind!r}")

    def to_payload(self) -> dict:
        return {"property": self.property, self.kind: {"equals": self.value}}


@dataclass(frozen=True)
class AndFilter:
    filters: tuple["Filter", ...]

    def to_payload(self) -> dict:
        return {"and": [item.to_payload() for item in self.filters]}


Filter = Union[PropertyFilter, AndFilter]


def checkbox_equals(name: str, value: bool) -> PropertyFilter:
    return PropertyFilter(name, "checkbox", value)


def select_equals(name: str, value: str) -> PropertyFilter:
    return PropertyFilter(name, "select", value)


def rich_text_equals(name: str, value: str) -> PropertyFilter:
    return PropertyFilter(name, "rich_text", value)


def all_of(*filters: Optional[Filter]) -> Filter:
    """Combine filters with AND, dropping ``None`` and unwrapping a single filter."""

    present = tuple(item for item in filters if item is not None)
    if not present:
        raise ValueError("all_of() needs at least one filter")
    if len(present) == 1:
        return present[0]
    return AndFilter(present)


def is_page_record(value: Any) -> bool:
    return isinstance(value, dict) and "id" in value and "properties" in value


class ContentStore(Protocol):
    async def query_database(self, database_id: str, filter: Optional[Filter] = None) -> List[dict]:
        ...

    async def retrieve_page(self, page_id: str) -> dict:
        ...


class NotionClient:
    """Thin wrapper around ``httpx.AsyncClient`` for the two calls the site needs."""

    def __init__(
        self,
        settings: ContentSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        headers = {
            "Notion-Version": settings.notion_version,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if settings.api_key:
            headers["Authorization"] = f"Bearer {settings.api_key}"
        self._client = httpx.AsyncClient(
            base_url=settings.api_base_url,
            headers=headers,
            timeout=settings.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "NotionClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, json: Optional[dict] = None) -> Dict[str, Any]:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            raise ContentStoreError(f"{method} {path} failed: {exc}") from exc
        if response.is_error:
            detail = _error_detail(response)
            raise ContentStoreError(f"{method} {path} returned {response.status_code}: {detail}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise ContentStoreError(
                f"Unable to decode response from {path}: {response.text[:200]}"
            ) from exc
        if not isinstance(payload, dict):
            raise ContentStoreError(f"Unexpected payload from {path}: {type(payload).__name__}")
        return payload

    async def query_database(self, database_id: str, filter: Optional[Filter] = None) -> List[dict]:
        """Return the first page of records matching ``filter``."""

        body: Dict[str, Any] = {}
        if filter is not None:
            body["filter"] = filter.to_payload()
        payload = await self._request("POST", f"/databases/{database_id}/query", json=body)
        results = payload.get("results")
        if not isinstance(results, list):
            raise ContentStoreError(f"Query of {database_id} returned no results list")
        return results

    async def retrieve_page(self, page_id: str) -> dict:
        return await self._request("GET", f"/pages/{page_id}")


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    return response.text[:200]


def filter_pages(results: Sequence[Any]) -> List[dict]:
    """Keep only full page records, skipping partial or non-page objects."""

    pages = [item for item in results if is_page_record(item)]
    skipped = len(results) - len(pages)
    if skipped:
        LOGGER.debug("Skipped %s non-page results", skipped)
    return pages
