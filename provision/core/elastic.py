"""Elasticsearch-backed UserStore over the document REST API."""

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

from provision.core.config import get_settings
from provision.core.exceptions import StoreUnavailableError
from provision.core.store import IDX_USER, InMemoryUserStore, StoreResponse, UserStore

if TYPE_CHECKING:
    from provision.core.config import Settings

logger = logging.getLogger(__name__)


class ElasticUserStore:
    """UserStore that keeps one document per user in `{IDX_PREFIX}user`."""

    def __init__(self, settings: "Settings") -> None:
        self.base_url = settings.ELASTIC_URL.rstrip("/")
        self.index = settings.IDX_PREFIX + IDX_USER
        self.timeout = httpx.Timeout(settings.ELASTIC_REQUEST_TIMEOUT_SEC)
        self.auth: tuple[str, str] | None = None
        if settings.ELASTIC_USERNAME and settings.ELASTIC_PASSWORD is not None:
            self.auth = (
                settings.ELASTIC_USERNAME,
                settings.ELASTIC_PASSWORD.get_secret_value(),
            )

    def _doc_url(self, user_id: str) -> str:
        return f"{self.base_url}/{self.index}/_doc/{quote(user_id, safe='')}"

    async def _request(
        self, method: str, url: str, json: dict[str, Any] | None = None
    ) -> StoreResponse:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, auth=self.auth) as client:
                resp = await client.request(method, url, json=json)
        except httpx.HTTPError as e:
            logger.error(
                "Elasticsearch request failed",
                extra={"method": method, "index": self.index, "error": str(e)[:500]},
            )
            raise StoreUnavailableError(f"Elasticsearch unreachable: {e}") from e

        if not resp.content:
            return StoreResponse(status_code=resp.status_code)
        try:
            body = resp.json()
        except ValueError as e:
            raise StoreUnavailableError(
                f"Elasticsearch returned a non-JSON body (status {resp.status_code})",
                status_code=resp.status_code,
            ) from e
        if not isinstance(body, dict):
            body = {"response": body}
        return StoreResponse(status_code=resp.status_code, body=body)

    async def get(self, user_id: str) -> StoreResponse:
        return await self._request("GET", self._doc_url(user_id))

    async def put(self, user_id: str, document: dict[str, Any]) -> StoreResponse:
        return await self._request("PUT", self._doc_url(user_id), json=document)

    async def ping(self) -> bool:
        """Return True if the cluster root answers with a 2xx status."""
        try:
            resp = await self._request("GET", f"{self.base_url}/")
        except StoreUnavailableError:
            return False
        return 200 <= resp.status_code < 300


@lru_cache
def get_user_store() -> UserStore:
    """Dependency returning the configured UserStore (one instance per process)."""
    settings = get_settings()
    if settings.STORE_BACKEND == "memory":
        return InMemoryUserStore(index=settings.IDX_PREFIX + IDX_USER)
    return ElasticUserStore(settings)
