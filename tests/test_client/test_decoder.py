"""Tests for specfetch.client.decoder."""

from __future__ import annotations

import json

import httpx
import pytest

from specfetch.client.builder import Client
from specfetch.client.decoder import decode_response, fetch_response
from specfetch.exceptions import OperationError
from specfetch.models import RequestOptions
from specfetch.request.headers import is_json_content_type


def _response(status: int = 200, content: bytes = b"", content_type: str | None = None) -> httpx.Response:
    headers = {"content-type": content_type} if content_type else {}
    return httpx.Response(
        status,
        content=content,
        headers=headers,
        request=httpx.Request("GET", "https://api.example.com/items"),
    )


# ---------------------------------------------------------------------------
# Content type detection
# ---------------------------------------------------------------------------


class TestIsJsonContentType:
    @pytest.mark.parametrize(
        "content_type",
        [
            "application/json",
            "application/json; charset=utf-8",
            "application/vnd.api+json",
            "application/problem+json",
        ],
    )
    def test_json_types(self, content_type: str) -> None:
        assert is_json_content_type(content_type)

    @pytest.mark.parametrize("content_type", ["text/plain", "text/html", "application/xml", ""])
    def test_non_json_types(self, content_type: str) -> None:
        assert not is_json_content_type(content_type)

    def test_none(self) -> None:
        assert not is_json_content_type(None)


# ---------------------------------------------------------------------------
# decode_response
# ---------------------------------------------------------------------------


class TestDecodeResponse:
    """Test that exactly one body representation is produced."""

    async def test_json_body(self) -> None:
        response = _response(content=b'{"id": 1}', content_type="application/json")
        assert await decode_response(response, raw=False) == {"id": 1}

    async def test_vendor_json_body(self) -> None:
        response = _response(content=b'[1, 2]', content_type="application/vnd.api+json")
        assert await decode_response(response, raw=False) == [1, 2]

    async def test_text_body(self) -> None:
        response = _response(content=b"pong", content_type="text/plain")
        assert await decode_response(response, raw=False) == "pong"

    async def test_missing_content_type_gives_text(self) -> None:
        response = _response(content=b'{"id": 1}')
        assert await decode_response(response, raw=False) == '{"id": 1}'

    async def test_raw_returns_stream(self) -> None:
        response = _response(content=b"bytes", content_type="application/json")
        data = await decode_response(response, raw=True)
        assert data is response.stream
        assert b"".join([chunk async for chunk in data]) == b"bytes"

    async def test_malformed_json_raises(self) -> None:
        response = _response(content=b"{not json", content_type="application/json")
        with pytest.raises(json.JSONDecodeError):
            await decode_response(response, raw=False)


# ---------------------------------------------------------------------------
# fetch_response
# ---------------------------------------------------------------------------


class TestFetchResponse:
    """Test outcome classification of a transport response."""

    async def test_success_result(self, stub_transport) -> None:
        transport = stub_transport(lambda url, options: (201, {"id": 7}, {"X-Id": "7"}))
        result = await fetch_response(
            transport, "https://api.example.com/items", RequestOptions(method="POST"), raw=False
        )

        assert result.ok is True
        assert result.status == 201
        assert result.status_text == "Created"
        assert result.url == "https://api.example.com/items"
        assert result.headers["x-id"] == "7"
        assert result.data == {"id": 7}

    async def test_non_2xx_raises_untagged_error(self, stub_transport) -> None:
        transport = stub_transport(lambda url, options: (404, {"message": "no such item"}, {}))
        with pytest.raises(OperationError) as exc_info:
            await fetch_response(
                transport, "https://api.example.com/items/9", RequestOptions(), raw=False
            )

        exc = exc_info.value
        assert exc.status == 404
        assert exc.status_text == "Not Found"
        assert exc.data == {"message": "no such item"}
        assert exc.url == "https://api.example.com/items/9"
        assert exc.operation_id is None

    async def test_stream_flag_forwarded(self, stub_transport) -> None:
        transport = stub_transport(lambda url, options: (200, b"chunk", {}))
        result = await fetch_response(
            transport, "https://api.example.com/download", RequestOptions(), raw=True
        )

        assert transport.last[2] is True
        assert b"".join([chunk async for chunk in result.data]) == b"chunk"


# ---------------------------------------------------------------------------
# Responses without an attached request
# ---------------------------------------------------------------------------


class TestBareResponses:
    """Test transports that build an ``httpx.Response`` with no request."""

    @staticmethod
    def _bare(status: int, payload: object):
        async def transport(
            url: str, options: RequestOptions, *, stream: bool = False
        ) -> httpx.Response:
            return httpx.Response(status, json=payload)

        return transport

    async def test_result_url_falls_back_to_requested(self) -> None:
        result = await fetch_response(
            self._bare(200, {"ok": True}),
            "https://api.example.com/items",
            RequestOptions(),
            raw=False,
        )

        assert result.url == "https://api.example.com/items"
        assert result.data == {"ok": True}

    async def test_operation_success(self) -> None:
        op = (
            Client("https://api.example.com", transport=self._bare(200, {"ok": True}))
            .endpoint("/items/{id}")
            .method("get")
        )

        result = await op({"path": {"id": "42"}})

        assert result.ok is True
        assert result.url == "https://api.example.com/items/42"

    async def test_operation_error_keeps_url(self) -> None:
        op = (
            Client("https://api.example.com", transport=self._bare(404, {"message": "gone"}))
            .endpoint("/items/{id}")
            .method("get")
        )

        with pytest.raises(OperationError) as exc_info:
            await op({"path": {"id": "42"}})

        assert exc_info.value.status == 404
        assert exc_info.value.url == "https://api.example.com/items/42"
        assert str(exc_info.value) == "HTTP 404 Not Found: gone"
