"""Plain-text console rendering of a ScanReport."""

from __future__ import annotations

from depscan.engines.enrichment.models import ScanRecord, format_timestamp
from depscan.engines.report.aggregator import oldest_dependencies, vulnerable_packages
from depscan.engines.report.models import ScanReport

_SUMMARY_WIDTH = 100
_TYPE_LABELS = {"direct": "DIRECT", "transitive": "TRANSITIVE"}


def render_report(report: ScanReport) -> str:
    """Return the human-readable report; *report* is only read."""
    s = report.summary
    lines = [
        "=== DEPENDENCY SCAN REPORT ===",
        "",
        f"Scan date: {format_timestamp(report.scan_date)}",
        f"Total packages scanned: {s.total_packages}",
        f"  - Direct dependencies: {s.direct_dependencies}",
        f"  - Transitive dependencies: {s.transitive_dependencies}",
        f"Packages with vulnerabilities: {s.vulnerable_packages}",
    ]

    vulnerable = vulnerable_packages(report.results)
    if vulnerable:
        lines += ["", "VULNERABLE PACKAGES:"]
        for record in vulnerable:
            lines += _render_vulnerable(record)
    else:
        lines += ["", "No vulnerabilities found!"]

    if s.transitive_dependencies > 0:
        lines += [
            "",
            "VULNERABILITY BREAKDOWN:",
            f"   Direct dependencies with vulnerabilities: "
            f"{s.vulnerable_direct}/{s.direct_dependencies}",
            f"   Transitive dependencies with vulnerabilities: "
            f"{s.vulnerable_transitive}/{s.transitive_dependencies}",
        ]

    oldest = oldest_dependencies(report.results)
    if oldest:
        lines += ["", "OLDEST DEPENDENCIES:"]
        for record in oldest:
            lines.append(
                f"   [{record.dependency_type}] {record.package}@{record.current_version}"
                f" - {format_timestamp(record.published_at)}"
            )

    return "\n".join(lines) + "\n"


def _render_vulnerable(record: ScanRecord) -> list[str]:
    label = _TYPE_LABELS.get(record.dependency_type, record.dependency_type)
    lines = [
        "",
        f"* {record.package}@{record.current_version} ({label})",
        f"   Published: {format_timestamp(record.published_at)}",
        f"   Vulnerabilities: {record.vulnerability_count}",
    ]
    for advisory in record.vulnerabilities:
        lines.append(f"   - {advisory.title} ({advisory.severity or 'Unknown severity'})")
        if advisory.summary:
            lines.append(f"     {_truncate(advisory.summary)}")
    return lines


def _truncate(text: str, width: int = _SUMMARY_WIDTH) -> str:
    if len(text) <= width:
        return text
    return text[:width] + "..."
