"""Tests for the deps.dev client: httpx MockTransport, no network."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from depscan.core.config import ScanConfig
from depscan.engines.enrichment.client import DepsDevClient, EnrichmentClient, _parse_advisory
from depscan.engines.enrichment.models import Advisory
from depscan.exceptions import EnrichmentUnavailable


def _client(handler, **config) -> tuple[DepsDevClient, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def _record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    client = DepsDevClient(ScanConfig(**config), transport=httpx.MockTransport(_record))
    return client, seen


def _sequence(*responses):
    """Handler that replays *responses*; exceptions are raised."""
    it = iter(responses)

    def handler(request):
        item = next(it)
        if isinstance(item, Exception):
            raise item
        return item

    return handler


class TestFetchVersionMetadata:
    @pytest.mark.anyio
    async def test_parses_published_at(self):
        client, seen = _client(
            lambda r: httpx.Response(
                200, json={"publishedAt": "2025-09-14T12:59:27Z", "isDefault": True}
            )
        )
        async with client:
            meta = await client.fetch_version_metadata("axios", "1.12.2")

        assert meta.published_at == datetime(2025, 9, 14, 12, 59, 27, tzinfo=timezone.utc)
        assert meta.is_default is True
        assert seen[0].url.path == "/v3/systems/npm/packages/axios/versions/1.12.2"

    @pytest.mark.anyio
    async def test_scoped_name_is_encoded(self):
        client, seen = _client(lambda r: httpx.Response(200, json={}))
        async with client:
            await client.fetch_version_metadata("@babel/core", "7.24.0")
        assert b"%40babel%2Fcore" in seen[0].url.raw_path

    @pytest.mark.anyio
    async def test_missing_fields(self):
        client, _ = _client(lambda r: httpx.Response(200, json={"versionKey": {}}))
        async with client:
            meta = await client.fetch_version_metadata("x", "1.0.0")
        assert meta.published_at is None
        assert meta.is_default is False

    @pytest.mark.anyio
    async def test_not_found_is_none(self):
        client, _ = _client(lambda r: httpx.Response(404))
        async with client:
            assert await client.fetch_version_metadata("ghost", "0.0.1") is None

    @pytest.mark.anyio
    async def test_forbidden_raises_without_retry(self):
        client, seen = _client(lambda r: httpx.Response(403))
        async with client:
            with pytest.raises(EnrichmentUnavailable, match="HTTP 403"):
                await client.fetch_version_metadata("x", "1.0.0")
        assert len(seen) == 1

    @pytest.mark.anyio
    async def test_invalid_json_raises(self):
        client, _ = _client(lambda r: httpx.Response(200, text="<html>"))
        async with client:
            with pytest.raises(EnrichmentUnavailable, match="invalid JSON"):
                await client.fetch_version_metadata("x", "1.0.0")

    @pytest.mark.anyio
    async def test_uses_configured_base_url(self):
        client, seen = _client(lambda r: httpx.Response(200, json={}), base_url="http://mirror.local")
        async with client:
            await client.fetch_version_metadata("x", "1.0.0")
        assert seen[0].url.host == "mirror.local"


class TestFetchAdvisories:
    @pytest.mark.anyio
    async def test_parses_advisories(self):
        body = {
            "advisories": [
                {
                    "id": "GHSA-aaaa",
                    "title": "Prototype pollution",
                    "severity": "HIGH",
                    "cvss": 7.5,
                    "summary": "Bad things",
                },
                {"id": "GHSA-bbbb", "title": "ReDoS"},
            ]
        }
        client, seen = _client(lambda r: httpx.Response(200, json=body))
        async with client:
            advisories = await client.fetch_advisories("lodash", "4.17.10")

        assert advisories == [
            Advisory("GHSA-aaaa", "Prototype pollution", "HIGH", 7.5, "Bad things"),
            Advisory("GHSA-bbbb", "ReDoS"),
        ]
        assert seen[0].url.path.endswith("/versions/4.17.10/advisories")

    @pytest.mark.anyio
    async def test_not_found_is_empty(self):
        client, _ = _client(lambda r: httpx.Response(404))
        async with client:
            assert await client.fetch_advisories("axios", "1.12.2") == []

    @pytest.mark.anyio
    async def test_missing_list_is_empty(self):
        client, _ = _client(lambda r: httpx.Response(200, json={}))
        async with client:
            assert await client.fetch_advisories("axios", "1.12.2") == []


class TestRetry:
    @pytest.mark.anyio
    async def test_retry_on_server_error(self):
        client, seen = _client(
            _sequence(httpx.Response(502), httpx.Response(200, json={"advisories": []}))
        )
        with patch("asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            async with client:
                assert await client.fetch_advisories("x", "1.0.0") == []
        assert len(seen) == 2
        mock_sleep.assert_called_once_with(1.0)

    @pytest.mark.anyio
    async def test_retry_on_rate_limit(self):
        client, seen = _client(
            _sequence(httpx.Response(429), httpx.Response(200, json={"isDefault": False}))
        )
        with patch("asyncio.sleep", new_callable=AsyncMock):
            async with client:
                meta = await client.fetch_version_metadata("x", "1.0.0")
        assert meta is not None
        assert len(seen) == 2

    @pytest.mark.anyio
    async def test_retry_exhausted(self):
        client, seen = _client(lambda r: httpx.Response(503), max_retries=3)
        with patch("asyncio.sleep", new_callable=AsyncMock):
            async with client:
                with pytest.raises(EnrichmentUnavailable, match="after 3 attempts"):
                    await client.fetch_advisories("x", "1.0.0")
        assert len(seen) == 3

    @pytest.mark.anyio
    async def test_retry_on_timeout(self):
        request = httpx.Request("GET", "https://api.deps.dev/")
        client, seen = _client(
            _sequence(
                httpx.ReadTimeout("timeout", request=request),
                httpx.Response(200, json={"advisories": []}),
            )
        )
        with patch("asyncio.sleep", new_callable=AsyncMock):
            async with client:
                assert await client.fetch_advisories("x", "1.0.0") == []
        assert len(seen) == 2

    @pytest.mark.anyio
    async def test_connect_error_not_retried(self):
        request = httpx.Request("GET", "https://api.deps.dev/")
        client, seen = _client(
            _sequence(httpx.ConnectError("refused", request=request), httpx.Response(200))
        )
        async with client:
            with pytest.raises(EnrichmentUnavailable, match="transport error"):
                await client.fetch_version_metadata("x", "1.0.0")
        assert len(seen) == 1


class TestClientMisc:
    def test_satisfies_protocol(self):
        client = DepsDevClient(ScanConfig())
        assert isinstance(client, EnrichmentClient)

    @pytest.mark.anyio
    async def test_context_manager_closes(self):
        client, _ = _client(lambda r: httpx.Response(404))
        async with client:
            pass
        assert client._client.is_closed

    def test_parse_advisory_key_form(self):
        item = {"advisoryKey": {"id": "GHSA-cccc"}, "title": "XSS", "cvss3Score": "6.1"}
        assert _parse_advisory(item) == Advisory("GHSA-cccc", "XSS", None, 6.1, None)

    def test_parse_advisory_bad_score(self):
        item = {"id": "GHSA-dddd", "title": "t", "cvss": "n/a"}
        assert _parse_advisory(item).cvss is None
