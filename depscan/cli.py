"""CLI entry point: depscan.

Usage:
    depscan                                   # ./package.json + ./package-lock.json
    depscan path/to/package.json --direct-only
    depscan package.json -o report.json --delay 0.5
    depscan package.json --json               # print the JSON report
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

import click

from depscan.core.config import ScanConfig
from depscan.core.logging import setup_logging
from depscan.engines.inventory.models import ScanMode
from depscan.engines.report.render import render_report
from depscan.engines.report.sink import DEFAULT_REPORT_FILE, report_to_dict, write_report
from depscan.exceptions import ManifestUnreadable
from depscan.scanner import run_scan


@click.command()
@click.argument("manifest", default="package.json", type=click.Path(dir_okay=False))
@click.option(
    "--lockfile",
    default=None,
    type=click.Path(dir_okay=False),
    help="Lock file path (default: package-lock.json beside the manifest)",
)
@click.option(
    "--direct-only/--transitive",
    "direct_only",
    default=False,
    help="Scan only manifest dependencies, or everything in the lock file (default)",
)
@click.option("-o", "--output", default=DEFAULT_REPORT_FILE, help="JSON report output path")
@click.option("--delay", type=float, default=None, help="Seconds between package lookups")
@click.option("--concurrency", type=int, default=None, help="Concurrent package lookups")
@click.option("--base-url", default=None, help="Registry API base URL")
@click.option("--json", "as_json", is_flag=True, help="Print the JSON report instead of text")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(
    manifest: str,
    lockfile: str | None,
    direct_only: bool,
    output: str,
    delay: float | None,
    concurrency: int | None,
    base_url: str | None,
    as_json: bool,
    verbose: bool,
) -> None:
    """Scan npm dependencies for age and known vulnerabilities."""
    setup_logging("DEBUG" if verbose else None)

    try:
        config = ScanConfig.from_env().with_overrides(
            request_delay=delay,
            concurrency=concurrency,
            base_url=base_url.rstrip("/") if base_url else None,
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)

    mode = ScanMode.DIRECT if direct_only else ScanMode.TRANSITIVE
    try:
        report = asyncio.run(
            run_scan(
                Path(manifest),
                lockfile_path=Path(lockfile) if lockfile else None,
                mode=mode,
                config=config,
            )
        )
    except ManifestUnreadable as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(report_to_dict(report), indent=2))
    else:
        click.echo(render_report(report))

    try:
        path = write_report(report, Path(output))
    except OSError as e:
        click.echo(f"Error: cannot write report to {output}: {e}", err=True)
        sys.exit(1)
    click.echo(f"Results saved to {path}", err=as_json)


if __name__ == "__main__":
    main()
