"""Tests for request execution and error mapping in the base Content API client."""

import json
from unittest.mock import MagicMock

import aiohttp
import pytest

from content_samples.db.content_clients.base_client import BaseContentClient, parse_error_response
from content_samples.utils.error_handler import ContentAPIException, ErrorCode


class FakeResponse:
    """Minimal stand-in for an aiohttp response used as an async context manager."""

    def __init__(self, status: int, text: str = ""):
        self.status = status
        self._text = text

    async def text(self):
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


def make_client(*responses):
    session = MagicMock()
    session.request = MagicMock(side_effect=list(responses))
    client = BaseContentClient("https://api.test/content/v2sandbox", "token", session=session)
    return client, session


class TestRequest:
    """Tests for _request."""

    @pytest.mark.asyncio
    async def test_returns_decoded_json(self):
        client, session = make_client(FakeResponse(200, json.dumps({"orderId": "ORD1"})))

        result = await client._request("POST", "123/testorders", body={"templateName": "template1"})

        assert result == {"orderId": "ORD1"}
        session.request.assert_called_once_with(
            "POST",
            "https://api.test/content/v2sandbox/123/testorders",
            params=None,
            json={"templateName": "template1"},
        )

    @pytest.mark.asyncio
    async def test_drops_none_params_and_lowercases_booleans(self):
        client, session = make_client(FakeResponse(200, "{}"))

        await client._request("GET", "123/orders", params={"acknowledged": False, "pageToken": None, "maxResults": 25})

        _, kwargs = session.request.call_args
        assert kwargs["params"] == {"acknowledged": "false", "maxResults": "25"}

    @pytest.mark.asyncio
    async def test_empty_body_returns_empty_dict(self):
        client, _ = make_client(FakeResponse(204, ""))

        assert await client._request("POST", "123/testorders/ORD1/advance") == {}

    @pytest.mark.asyncio
    async def test_http_error_is_mapped(self):
        body = json.dumps(
            {"error": {"code": 404, "message": "Order not found", "errors": [{"reason": "notFound", "message": "x"}]}}
        )
        client, _ = make_client(FakeResponse(404, body))

        with pytest.raises(ContentAPIException) as exc_info:
            await client._request("GET", "123/orders/NOPE")

        error = exc_info.value
        assert error.api_response_code == 404
        assert error.reasons == ["notFound"]
        assert error.endpoint == "123/orders/NOPE"
        assert "Order not found" in error.message

    @pytest.mark.asyncio
    async def test_rate_limit_is_flagged(self):
        client, _ = make_client(FakeResponse(429, "Too many requests"))

        with pytest.raises(ContentAPIException) as exc_info:
            await client._request("GET", "123/orders")

        assert exc_info.value.rate_limited is True
        assert exc_info.value.error_code == ErrorCode.RATE_LIMIT_EXCEEDED
        assert exc_info.value.to_dict()["details"]["rate_limited"] is True

    @pytest.mark.asyncio
    async def test_errors_are_not_retried(self):
        client, session = make_client(FakeResponse(503, "unavailable"), FakeResponse(200, "{}"))

        with pytest.raises(ContentAPIException):
            await client._request("POST", "123/orders/ORD1/acknowledge", body={"operationId": "0"})

        assert session.request.call_count == 1

    @pytest.mark.asyncio
    async def test_network_error_is_wrapped(self):
        client, _ = make_client(aiohttp.ClientConnectionError("connection refused"))

        with pytest.raises(ContentAPIException) as exc_info:
            await client._request("GET", "123/orders")

        assert exc_info.value.api_response_code is None
        assert exc_info.value.error_code == ErrorCode.CONTENT_CONNECTION_FAILED
        assert isinstance(exc_info.value.__cause__, aiohttp.ClientConnectionError)

    @pytest.mark.asyncio
    async def test_invalid_json_body(self):
        client, _ = make_client(FakeResponse(200, "<html>"))

        with pytest.raises(ContentAPIException) as exc_info:
            await client._request("GET", "123/orders")

        assert "Invalid JSON response" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_requires_session(self):
        client = BaseContentClient("https://api.test/", "token")

        with pytest.raises(ContentAPIException):
            await client._request("GET", "accounts/authinfo")


class TestParseErrorResponse:
    def test_plain_text_body(self):
        assert parse_error_response(500, "boom") == ("boom", [])

    def test_empty_body(self):
        assert parse_error_response(502, "") == ("HTTP 502", [])

    def test_error_without_reasons(self):
        body = json.dumps({"error": {"code": 401, "message": "Invalid Credentials"}})

        assert parse_error_response(401, body) == ("Invalid Credentials", [])


class TestSessionLifecycle:
    @pytest.mark.asyncio
    async def test_shared_session_is_not_closed(self):
        session = MagicMock()
        client = BaseContentClient("https://api.test/", "token", session=session)

        await client.initialize()
        await client.close()

        session.close.assert_not_called()
        assert client.session is None
