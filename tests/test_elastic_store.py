"""Unit tests for provision.core.elastic.ElasticUserStore with mocked httpx."""

import asyncio
import unittest
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
from pydantic import SecretStr

from provision.core.elastic import ElasticUserStore
from provision.core.exceptions import StoreUnavailableError
from provision.core.store import StoreStatus


def _settings(**overrides: object) -> MagicMock:
    settings = MagicMock()
    settings.ELASTIC_URL = "http://es.test:9200"
    settings.IDX_PREFIX = "dcp_"
    settings.ELASTIC_REQUEST_TIMEOUT_SEC = 5.0
    settings.ELASTIC_USERNAME = None
    settings.ELASTIC_PASSWORD = None
    for key, value in overrides.items():
        setattr(settings, key, value)
    return settings


def _response(status_code: int, body: object = None, content: bytes = b"{}") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.content = content
    resp.json.return_value = body if body is not None else {}
    return resp


def _mock_client(mock_client_class: MagicMock, request: AsyncMock) -> MagicMock:
    mock_instance = MagicMock()
    mock_instance.request = request
    mock_client_class.return_value.__aenter__ = AsyncMock(return_value=mock_instance)
    mock_client_class.return_value.__aexit__ = AsyncMock(return_value=None)
    return mock_instance


class TestElasticUserStoreGet(unittest.TestCase):
    """get issues GET on the prefixed user index and classifies the status."""

    @patch("provision.core.elastic.httpx.AsyncClient")
    def test_found(self, mock_client_class: MagicMock) -> None:
        body = {"_index": "dcp_user", "_id": "alice", "found": True, "_source": {"id": "alice"}}
        request = AsyncMock(return_value=_response(200, body))
        _mock_client(mock_client_class, request)

        resp = asyncio.run(ElasticUserStore(_settings()).get("alice"))

        request.assert_awaited_once_with(
            "GET", "http://es.test:9200/dcp_user/_doc/alice", json=None
        )
        self.assertIs(resp.status, StoreStatus.SUCCESS)
        self.assertEqual(resp.document, {"id": "alice"})

    @patch("provision.core.elastic.httpx.AsyncClient")
    def test_not_found(self, mock_client_class: MagicMock) -> None:
        request = AsyncMock(return_value=_response(404, {"found": False}))
        _mock_client(mock_client_class, request)
        resp = asyncio.run(ElasticUserStore(_settings()).get("ghost"))
        self.assertIs(resp.status, StoreStatus.CLIENT_ERROR)
        self.assertIsNone(resp.document)

    @patch("provision.core.elastic.httpx.AsyncClient")
    def test_id_is_url_escaped(self, mock_client_class: MagicMock) -> None:
        request = AsyncMock(return_value=_response(404, {"found": False}))
        _mock_client(mock_client_class, request)
        asyncio.run(ElasticUserStore(_settings()).get("a/b c"))
        url = request.await_args.args[1]
        self.assertTrue(url.endswith("/dcp_user/_doc/a%2Fb%20c"))

    @patch("provision.core.elastic.httpx.AsyncClient")
    def test_transport_error(self, mock_client_class: MagicMock) -> None:
        request = AsyncMock(side_effect=httpx.ConnectError("connection refused"))
        _mock_client(mock_client_class, request)
        with self.assertRaises(StoreUnavailableError):
            asyncio.run(ElasticUserStore(_settings()).get("alice"))

    @patch("provision.core.elastic.httpx.AsyncClient")
    def test_non_json_body(self, mock_client_class: MagicMock) -> None:
        resp = _response(502, content=b"<html>bad gateway</html>")
        resp.json.side_effect = ValueError("not json")
        _mock_client(mock_client_class, AsyncMock(return_value=resp))
        with self.assertRaises(StoreUnavailableError) as ctx:
            asyncio.run(ElasticUserStore(_settings()).get("alice"))
        self.assertEqual(ctx.exception.status_code, 502)


class TestElasticUserStorePut(unittest.TestCase):
    """put replaces the whole document with PUT."""

    @patch("provision.core.elastic.httpx.AsyncClient")
    def test_put_document(self, mock_client_class: MagicMock) -> None:
        body = {"_index": "dcp_user", "_id": "alice", "_version": 1, "result": "created"}
        request = AsyncMock(return_value=_response(201, body))
        _mock_client(mock_client_class, request)

        doc = {"id": "alice", "password": "$2b$04$hash"}
        resp = asyncio.run(ElasticUserStore(_settings()).put("alice", doc))

        request.assert_awaited_once_with(
            "PUT", "http://es.test:9200/dcp_user/_doc/alice", json=doc
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.body["result"], "created")

    @patch("provision.core.elastic.httpx.AsyncClient")
    def test_basic_auth(self, mock_client_class: MagicMock) -> None:
        _mock_client(mock_client_class, AsyncMock(return_value=_response(200, {})))
        settings = _settings(ELASTIC_USERNAME="elastic", ELASTIC_PASSWORD=SecretStr("pw"))
        asyncio.run(ElasticUserStore(settings).put("alice", {"id": "alice"}))
        self.assertEqual(mock_client_class.call_args.kwargs["auth"], ("elastic", "pw"))


class TestElasticUserStorePing(unittest.TestCase):
    """ping reports reachability without raising."""

    @patch("provision.core.elastic.httpx.AsyncClient")
    def test_ping_ok(self, mock_client_class: MagicMock) -> None:
        _mock_client(mock_client_class, AsyncMock(return_value=_response(200, {"name": "es"})))
        self.assertTrue(asyncio.run(ElasticUserStore(_settings()).ping()))

    @patch("provision.core.elastic.httpx.AsyncClient")
    def test_ping_unreachable(self, mock_client_class: MagicMock) -> None:
        _mock_client(
            mock_client_class,
            AsyncMock(side_effect=httpx.ConnectError("connection refused")),
        )
        self.assertFalse(asyncio.run(ElasticUserStore(_settings()).ping()))


if __name__ == "__main__":
    unittest.main()
