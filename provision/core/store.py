"""User store port: the document-store operations the services depend on."""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

# Index name (without prefix) holding user documents.
IDX_USER = "user"


class StoreStatus(str, Enum):
    """Coarse class of a store response status code."""

    SUCCESS = "success"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"


@dataclass
class StoreResponse:
    """Status code and decoded JSON body returned by a store call."""

    status_code: int
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def status(self) -> StoreStatus:
        if 200 <= self.status_code < 300:
            return StoreStatus.SUCCESS
        if 400 <= self.status_code < 500:
            return StoreStatus.CLIENT_ERROR
        return StoreStatus.SERVER_ERROR

    @property
    def document(self) -> dict[str, Any] | None:
        """The stored document (`_source`) on success, else None."""
        if self.status is not StoreStatus.SUCCESS:
            return None
        source = self.body.get("_source")
        return source if isinstance(source, dict) else None


class UserStore(Protocol):
    """
    Get/put of user documents keyed by id.

    put is a full-document replace (upsert); there is no field-level merge.
    Transport failures raise StoreUnavailableError.
    """

    async def get(self, user_id: str) -> StoreResponse: ...

    async def put(self, user_id: str, document: dict[str, Any]) -> StoreResponse: ...

    async def ping(self) -> bool: ...


class InMemoryUserStore:
    """In-process UserStore returning Elasticsearch-shaped bodies. Last write wins."""

    def __init__(self, index: str = IDX_USER) -> None:
        self.index = index
        self._docs: dict[str, dict[str, Any]] = {}
        self._versions: dict[str, int] = {}

    async def get(self, user_id: str) -> StoreResponse:
        doc = self._docs.get(user_id)
        if doc is None:
            return StoreResponse(
                status_code=404,
                body={"_index": self.index, "_id": user_id, "found": False},
            )
        return StoreResponse(
            status_code=200,
            body={
                "_index": self.index,
                "_id": user_id,
                "_version": self._versions[user_id],
                "found": True,
                "_source": copy.deepcopy(doc),
            },
        )

    async def put(self, user_id: str, document: dict[str, Any]) -> StoreResponse:
        # No await between read and write: each put is a single atomic replace.
        created = user_id not in self._docs
        self._docs[user_id] = copy.deepcopy(document)
        self._versions[user_id] = self._versions.get(user_id, 0) + 1
        version = self._versions[user_id]
        return StoreResponse(
            status_code=201 if created else 200,
            body={
                "_index": self.index,
                "_id": user_id,
                "_version": version,
                "result": "created" if created else "updated",
            },
        )

    async def ping(self) -> bool:
        return True
