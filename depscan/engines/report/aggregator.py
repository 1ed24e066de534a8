"""Summarize scan records into a ScanReport."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone

from depscan.engines.enrichment.models import ScanRecord
from depscan.engines.report.models import ScanReport, ScanSummary

OLDEST_LIMIT = 5


def summarize(records: Sequence[ScanRecord]) -> ScanSummary:
    """Counts by dependency type and by (dependency type x vulnerable)."""
    direct = [r for r in records if r.dependency_type == "direct"]
    transitive = [r for r in records if r.dependency_type == "transitive"]
    return ScanSummary(
        total_packages=len(records),
        direct_dependencies=len(direct),
        transitive_dependencies=len(transitive),
        vulnerable_packages=sum(1 for r in records if r.is_vulnerable),
        vulnerable_direct=sum(1 for r in direct if r.is_vulnerable),
        vulnerable_transitive=sum(1 for r in transitive if r.is_vulnerable),
    )


def build_report(
    records: Sequence[ScanRecord],
    scan_date: datetime | None = None,
) -> ScanReport:
    return ScanReport(
        scan_date=scan_date or datetime.now(timezone.utc),
        summary=summarize(records),
        results=tuple(records),
    )


def vulnerable_packages(records: Sequence[ScanRecord]) -> list[ScanRecord]:
    """Records with at least one advisory, in scan order."""
    return [r for r in records if r.is_vulnerable]


def oldest_dependencies(
    records: Sequence[ScanRecord],
    limit: int = OLDEST_LIMIT,
) -> list[ScanRecord]:
    """The *limit* records with the earliest known publication date.

    Records with an unknown date are left out; ties keep scan order.
    """
    dated = [r for r in records if r.published_at is not None]
    dated.sort(key=lambda r: r.published_at)  # type: ignore[arg-type, return-value]
    return dated[:limit]
