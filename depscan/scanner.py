"""End-to-end scan: inventory -> enrichment -> report."""

from __future__ import annotations

from pathlib import Path

import structlog

from depscan.core.config import ScanConfig
from depscan.engines.enrichment.client import DepsDevClient, EnrichmentClient
from depscan.engines.enrichment.orchestrator import ScanOrchestrator
from depscan.engines.enrichment.pacing import Pacer
from depscan.engines.inventory.models import ScanMode
from depscan.engines.inventory.resolver import resolve_packages
from depscan.engines.report.aggregator import build_report
from depscan.engines.report.models import ScanReport

log = structlog.get_logger("depscan.engine")


async def run_scan(
    manifest_path: Path,
    *,
    lockfile_path: Path | None = None,
    mode: ScanMode = ScanMode.TRANSITIVE,
    config: ScanConfig | None = None,
    client: EnrichmentClient | None = None,
) -> ScanReport:
    """Scan the project described by *manifest_path* and return its report.

    Raises :class:`ManifestUnreadable` before any lookup is made when the
    manifest cannot be read. When *client* is None a :class:`DepsDevClient`
    is built from *config* and closed afterwards.
    """
    config = config or ScanConfig.from_env()
    packages = resolve_packages(manifest_path, lockfile_path, mode)
    log.info("scan.inventory", manifest=str(manifest_path), mode=mode.value, packages=len(packages))

    pacer = Pacer(config.request_delay)
    if client is not None:
        orchestrator = ScanOrchestrator(client, pacer=pacer, concurrency=config.concurrency)
        records = await orchestrator.run(packages)
    else:
        async with DepsDevClient(config) as deps_dev:
            orchestrator = ScanOrchestrator(deps_dev, pacer=pacer, concurrency=config.concurrency)
            records = await orchestrator.run(packages)

    return build_report(records)
