"""Persist a ScanReport as JSON and read it back."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import structlog

from depscan.engines.enrichment.models import (
    Advisory,
    ScanRecord,
    format_timestamp,
    parse_timestamp,
)
from depscan.engines.report.models import ScanReport, ScanSummary

log = structlog.get_logger("depscan.report")

DEFAULT_REPORT_FILE = "dependency-scan.json"


def report_to_dict(report: ScanReport) -> dict[str, Any]:
    s = report.summary
    return {
        "scanDate": format_timestamp(report.scan_date),
        "summary": {
            "totalPackages": s.total_packages,
            "directDependencies": s.direct_dependencies,
            "transitiveDependencies": s.transitive_dependencies,
            "vulnerablePackages": s.vulnerable_packages,
            "vulnerableDirect": s.vulnerable_direct,
            "vulnerableTransitive": s.vulnerable_transitive,
        },
        "results": [_record_to_dict(r) for r in report.results],
    }


def _record_to_dict(record: ScanRecord) -> dict[str, Any]:
    return {
        "package": record.package,
        "currentVersion": record.current_version,
        "dependencyType": record.dependency_type,
        "publishedAt": format_timestamp(record.published_at),
        "isDefault": record.is_default,
        "vulnerabilities": [
            {
                "id": a.id,
                "title": a.title,
                "severity": a.severity,
                "cvss": a.cvss,
                "summary": a.summary,
            }
            for a in record.vulnerabilities
        ],
        "vulnerabilityCount": record.vulnerability_count,
    }


def report_from_dict(data: dict[str, Any]) -> ScanReport:
    """Inverse of :func:`report_to_dict`.

    ``vulnerabilityCount`` is derived from the advisories, not read back.
    Raises ValueError when ``scanDate`` is missing or not a timestamp.
    """
    scan_date = parse_timestamp(data.get("scanDate"))
    if scan_date is None:
        raise ValueError(f"invalid scanDate: {data.get('scanDate')!r}")

    s = data["summary"]
    summary = ScanSummary(
        total_packages=s["totalPackages"],
        direct_dependencies=s["directDependencies"],
        transitive_dependencies=s["transitiveDependencies"],
        vulnerable_packages=s["vulnerablePackages"],
        vulnerable_direct=s["vulnerableDirect"],
        vulnerable_transitive=s["vulnerableTransitive"],
    )
    results = tuple(
        ScanRecord(
            package=r["package"],
            current_version=r["currentVersion"],
            dependency_type=r["dependencyType"],
            published_at=parse_timestamp(r.get("publishedAt")),
            is_default=bool(r.get("isDefault", False)),
            vulnerabilities=tuple(
                Advisory(
                    id=v["id"],
                    title=v["title"],
                    severity=v.get("severity"),
                    cvss=v.get("cvss"),
                    summary=v.get("summary"),
                )
                for v in r.get("vulnerabilities", [])
            ),
        )
        for r in data.get("results", [])
    )
    return ScanReport(scan_date=scan_date, summary=summary, results=results)


def write_report(report: ScanReport, path: Path) -> Path:
    path.write_text(json.dumps(report_to_dict(report), indent=2) + "\n", encoding="utf-8")
    log.info("report.saved", path=str(path), packages=report.summary.total_packages)
    return path


def read_report(path: Path) -> ScanReport:
    return report_from_dict(json.loads(path.read_text(encoding="utf-8")))
