"""Data models for scan reports."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from depscan.engines.enrichment.models import ScanRecord


@dataclass(frozen=True)
class ScanSummary:
    total_packages: int
    direct_dependencies: int
    transitive_dependencies: int
    vulnerable_packages: int
    vulnerable_direct: int
    vulnerable_transitive: int


@dataclass(frozen=True)
class ScanReport:
    """Result of one scan invocation. Never mutated after creation."""

    scan_date: datetime
    summary: ScanSummary
    results: tuple[ScanRecord, ...]
