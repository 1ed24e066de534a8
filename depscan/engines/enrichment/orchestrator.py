"""ScanOrchestrator: paced, failure-tolerant enrichment of a package set."""

from __future__ import annotations

import asyncio
import re
from collections.abc import Sequence

import structlog

from depscan.engines.enrichment.client import EnrichmentClient
from depscan.engines.enrichment.models import (
    Advisory,
    EnrichmentResult,
    ScanRecord,
    VersionMetadata,
)
from depscan.engines.enrichment.pacing import Pacer
from depscan.engines.inventory.models import ClassifiedPackage
from depscan.exceptions import EnrichmentUnavailable

log = structlog.get_logger("depscan.enrichment")

_RANGE_MARKERS_RE = re.compile(r"^[\^~]+")


def clean_version(version: str) -> str:
    """Strip leading caret/tilde range markers; the registry indexes exact versions."""
    return _RANGE_MARKERS_RE.sub("", version.strip())


class ScanOrchestrator:
    """Enrich every classified package, one ScanRecord per package, in input order."""

    def __init__(
        self,
        client: EnrichmentClient,
        *,
        pacer: Pacer | None = None,
        concurrency: int = 1,
    ) -> None:
        if concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {concurrency}")
        self._client = client
        self._pacer = pacer or Pacer(0.0)
        self._concurrency = concurrency

    async def run(self, packages: Sequence[ClassifiedPackage]) -> list[ScanRecord]:
        """Enrich *packages*; individual lookup failures never abort the scan."""
        log.info(
            "scan.started",
            packages=len(packages),
            concurrency=self._concurrency,
            min_interval=self._pacer.min_interval,
        )
        sem = asyncio.Semaphore(self._concurrency)

        async def _run_one(package: ClassifiedPackage) -> ScanRecord:
            async with sem:
                await self._pacer.wait()
                try:
                    return await self.scan_package(package)
                finally:
                    # Sequential scans pace from completion to the next start.
                    if self._concurrency == 1:
                        self._pacer.mark_finished()

        records = list(await asyncio.gather(*(_run_one(p) for p in packages)))
        log.info(
            "scan.completed",
            packages=len(records),
            vulnerable=sum(1 for r in records if r.is_vulnerable),
        )
        return records

    async def scan_package(self, package: ClassifiedPackage) -> ScanRecord:
        """Run both lookups for one package and join them into a record."""
        log.info(
            "scan.package",
            package=package.name,
            version=package.version,
            dependency_type=package.dependency_type,
        )
        result = await self.enrich(package.name, clean_version(package.version))
        return ScanRecord(
            package=package.name,
            current_version=package.version,
            dependency_type=package.dependency_type,
            published_at=result.published_at,
            is_default=result.is_default,
            vulnerabilities=result.advisories,
        )

    async def enrich(self, name: str, version: str) -> EnrichmentResult:
        metadata = await self._fetch_metadata(name, version)
        advisories = await self._fetch_advisories(name, version)
        return EnrichmentResult(
            published_at=metadata.published_at if metadata else None,
            is_default=metadata.is_default if metadata else False,
            advisories=tuple(advisories),
        )

    async def _fetch_metadata(self, name: str, version: str) -> VersionMetadata | None:
        try:
            return await self._client.fetch_version_metadata(name, version)
        except EnrichmentUnavailable as exc:
            log.warning("enrichment.metadata_failed", package=name, version=version, reason=exc.reason)
        except Exception as exc:
            log.error("enrichment.metadata_error", package=name, version=version, error=str(exc))
        return None

    async def _fetch_advisories(self, name: str, version: str) -> list[Advisory]:
        try:
            return await self._client.fetch_advisories(name, version)
        except EnrichmentUnavailable as exc:
            log.warning(
                "enrichment.advisories_failed", package=name, version=version, reason=exc.reason
            )
        except Exception as exc:
            log.error("enrichment.advisories_error", package=name, version=version, error=str(exc))
        return []
