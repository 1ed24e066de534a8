"""Report engine — aggregation, console rendering and JSON persistence."""

from depscan.engines.report.aggregator import (
    build_report,
    oldest_dependencies,
    summarize,
    vulnerable_packages,
)
from depscan.engines.report.models import ScanReport, ScanSummary
from depscan.engines.report.render import render_report
from depscan.engines.report.sink import (
    DEFAULT_REPORT_FILE,
    read_report,
    report_from_dict,
    report_to_dict,
    write_report,
)

__all__ = [
    "DEFAULT_REPORT_FILE",
    "ScanReport",
    "ScanSummary",
    "build_report",
    "oldest_dependencies",
    "read_report",
    "render_report",
    "report_from_dict",
    "report_to_dict",
    "summarize",
    "vulnerable_packages",
    "write_report",
]
