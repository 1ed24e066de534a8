"""Async deps.dev API client for version metadata and advisories."""

from __future__ import annotations

import asyncio
from typing import Any, Protocol, runtime_checkable
from urllib.parse import quote

import httpx
import structlog

from depscan.core.config import ScanConfig
from depscan.engines.enrichment.models import Advisory, VersionMetadata, parse_timestamp
from depscan.exceptions import EnrichmentUnavailable

log = structlog.get_logger("depscan.enrichment")

_RETRY_BASE_DELAY = 1.0  # seconds
_RETRYABLE_STATUS = {429, 500, 502, 503, 504}


@runtime_checkable
class EnrichmentClient(Protocol):
    """Interface the orchestrator needs from a registry."""

    async def fetch_version_metadata(self, name: str, version: str) -> VersionMetadata | None: ...

    async def fetch_advisories(self, name: str, version: str) -> list[Advisory]: ...


class DepsDevClient:
    """Thin async wrapper around the deps.dev v3 REST API."""

    def __init__(self, config: ScanConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers={"Accept": "application/json"},
            timeout=config.timeout,
            transport=transport,
        )

    # ── lifecycle ──────────────────────────────────────────────────────────

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> DepsDevClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ── public ─────────────────────────────────────────────────────────────

    async def fetch_version_metadata(self, name: str, version: str) -> VersionMetadata | None:
        """Publication date and default-version flag, or None when not found."""
        data = await self._get_json(self._version_path(name, version), name, version)
        if data is None:
            return None
        return VersionMetadata(
            published_at=parse_timestamp(data.get("publishedAt")),
            is_default=bool(data.get("isDefault", False)),
        )

    async def fetch_advisories(self, name: str, version: str) -> list[Advisory]:
        """Advisories affecting *name*@*version*; empty when none are known."""
        path = self._version_path(name, version) + "/advisories"
        data = await self._get_json(path, name, version)
        if data is None:
            return []
        return [_parse_advisory(item) for item in data.get("advisories") or [] if isinstance(item, dict)]

    # ── internal ───────────────────────────────────────────────────────────

    def _version_path(self, name: str, version: str) -> str:
        return (
            f"/v3/systems/{quote(self._config.ecosystem, safe='')}"
            f"/packages/{quote(name, safe='')}"
            f"/versions/{quote(version, safe='')}"
        )

    async def _get_json(self, path: str, name: str, version: str) -> dict[str, Any] | None:
        """GET *path*; None on 404, parsed object on 2xx."""
        response = await self._request_with_retry(path, name, version)
        if response is None:
            return None
        try:
            data = response.json()
        except ValueError as exc:
            raise EnrichmentUnavailable(name, version, f"invalid JSON body: {exc}") from exc
        if not isinstance(data, dict):
            raise EnrichmentUnavailable(name, version, "response body is not an object")
        return data

    async def _request_with_retry(
        self, path: str, name: str, version: str
    ) -> httpx.Response | None:
        """GET with exponential backoff on 429, 5xx and timeout errors."""
        max_retries = self._config.max_retries
        last_reason = "no attempt made"
        for attempt in range(max_retries):
            try:
                resp = await self._client.get(path)
            except httpx.TimeoutException:
                log.warning(
                    "enrichment.timeout",
                    path=path,
                    attempt=attempt + 1,
                    max_retries=max_retries,
                )
                last_reason = "request timed out"
            except httpx.HTTPError as exc:
                raise EnrichmentUnavailable(name, version, f"transport error: {exc}") from exc
            else:
                if resp.status_code == 404:
                    return None
                if resp.is_success:
                    return resp
                if resp.status_code not in _RETRYABLE_STATUS:
                    raise EnrichmentUnavailable(
                        name, version, f"HTTP {resp.status_code}: {resp.reason_phrase}"
                    )
                log.warning(
                    "enrichment.server_error",
                    path=path,
                    status=resp.status_code,
                    attempt=attempt + 1,
                    max_retries=max_retries,
                )
                last_reason = f"HTTP {resp.status_code}: {resp.reason_phrase}"

            if attempt < max_retries - 1:
                await asyncio.sleep(_RETRY_BASE_DELAY * (2**attempt))

        raise EnrichmentUnavailable(name, version, f"{last_reason} after {max_retries} attempts")


def _parse_advisory(item: dict[str, Any]) -> Advisory:
    key = item.get("advisoryKey")
    advisory_id = item.get("id") or (key.get("id") if isinstance(key, dict) else None) or ""
    return Advisory(
        id=str(advisory_id),
        title=str(item.get("title") or ""),
        severity=item.get("severity") or None,
        cvss=_parse_score(item.get("cvss", item.get("cvss3Score"))),
        summary=item.get("summary") or None,
    )


def _parse_score(value: object) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, dict):
        return _parse_score(value.get("score"))
    try:
        return float(str(value))
    except ValueError:
        return None
