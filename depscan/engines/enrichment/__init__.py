"""Enrichment engine — registry lookups for publication dates and advisories."""

from depscan.engines.enrichment.client import DepsDevClient, EnrichmentClient
from depscan.engines.enrichment.models import (
    Advisory,
    EnrichmentResult,
    ScanRecord,
    VersionMetadata,
)
from depscan.engines.enrichment.orchestrator import ScanOrchestrator, clean_version
from depscan.engines.enrichment.pacing import Pacer

__all__ = [
    "Advisory",
    "DepsDevClient",
    "EnrichmentClient",
    "EnrichmentResult",
    "Pacer",
    "ScanOrchestrator",
    "ScanRecord",
    "VersionMetadata",
    "clean_version",
]
