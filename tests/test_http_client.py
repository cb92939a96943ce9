"""Tests for the httpx transport adapter."""

import httpx
import pytest

from adapters.http_client import HttpxTransport, build_async_client
from core.domain.errors import DecodeFailure, TransportFailure
from core.domain.models import WizardRequest
from core.domain.steps import WizardStep


def _request(body: str | None = "_method=patch&button") -> WizardRequest:
    return WizardRequest(
        step=WizardStep.RACE_DATE,
        method="POST",
        url="https://pps.athle.fr/courses/wizards/race_date",
        headers={"X-CSRF-Token": "csrf-1", "Content-Type": "application/x-www-form-urlencoded"},
        body=body,
    )


def _client(settings, handler) -> httpx.AsyncClient:
    return build_async_client(settings, transport=httpx.MockTransport(handler))


class TestHttpxTransport:

    @pytest.mark.asyncio
    async def test_sends_request_and_returns_text(self, settings):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["method"] = request.method
            captured["body"] = request.content
            captured["headers"] = request.headers
            return httpx.Response(200, text="<html>ok</html>")

        async with _client(settings, handler) as client:
            html = await HttpxTransport(client).send(_request())

        assert html == "<html>ok</html>"
        assert captured["method"] == "POST"
        assert captured["body"] == b"_method=patch&button"
        assert captured["headers"]["X-CSRF-Token"] == "csrf-1"
        assert captured["headers"]["User-Agent"] == "Mozilla/5.0 (test)"

    @pytest.mark.asyncio
    async def test_error_status_still_returns_body(self, settings):
        def handler(request):
            return httpx.Response(422, text="<html>expired</html>")

        async with _client(settings, handler) as client:
            assert await HttpxTransport(client).send(_request()) == "<html>expired</html>"

    @pytest.mark.asyncio
    async def test_network_error(self, settings):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(settings, handler) as client:
            with pytest.raises(TransportFailure) as info:
                await HttpxTransport(client).send(_request())

        assert "connection refused" in info.value.detail
        assert info.value.step is None

    @pytest.mark.asyncio
    async def test_undecodable_body(self, settings):
        def handler(request):
            return httpx.Response(200, content=b"\xff\xfe<html>")

        async with _client(settings, handler) as client:
            with pytest.raises(DecodeFailure) as info:
                await HttpxTransport(client).send(_request())

        assert info.value.url == "https://pps.athle.fr/courses/wizards/race_date"

    @pytest.mark.asyncio
    async def test_get_without_body(self, settings):
        def handler(request):
            assert request.content == b""
            return httpx.Response(200, text="entry")

        async with _client(settings, handler) as client:
            assert await HttpxTransport(client).send(_request(body=None)) == "entry"

    @pytest.mark.asyncio
    async def test_cookies_persist_between_steps(self, settings):
        cookies = []

        def handler(request):
            cookies.append(request.headers.get("cookie"))
            return httpx.Response(200, text="page", headers={"Set-Cookie": "_pps_session=abc; Path=/"})

        async with _client(settings, handler) as client:
            transport = HttpxTransport(client)
            await transport.send(_request())
            await transport.send(_request())

        assert cookies == [None, "_pps_session=abc"]


class TestBuildAsyncClient:

    def test_defaults_from_settings(self, settings):
        client = build_async_client(settings)
        assert client.headers["User-Agent"] == "Mozilla/5.0 (test)"
        assert client.timeout.read == 5.0
        assert client.follow_redirects is True
