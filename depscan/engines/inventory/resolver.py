"""Resolve the package set for a scan from manifest + lock file."""

from __future__ import annotations

from pathlib import Path

import structlog

from depscan.engines.inventory.classifier import classify, classify_direct
from depscan.engines.inventory.lockfile import load_lockfile
from depscan.engines.inventory.manifest import load_manifest
from depscan.engines.inventory.models import ClassifiedPackage, ScanMode
from depscan.exceptions import LockfileUnreadable

log = structlog.get_logger("depscan.inventory")

LOCKFILE_NAME = "package-lock.json"


def resolve_packages(
    manifest_path: Path,
    lockfile_path: Path | None = None,
    mode: ScanMode = ScanMode.TRANSITIVE,
) -> list[ClassifiedPackage]:
    """Load inputs for *mode* and return the classified package list.

    Raises :class:`ManifestUnreadable` when the manifest cannot be read.
    In TRANSITIVE mode an unreadable lock file degrades the scan to the
    manifest's direct dependencies.
    """
    declared = load_manifest(manifest_path)

    if mode is ScanMode.DIRECT:
        return classify_direct(declared)

    lockfile_path = lockfile_path or manifest_path.parent / LOCKFILE_NAME
    try:
        installed = load_lockfile(lockfile_path)
    except LockfileUnreadable as exc:
        log.warning(
            "inventory.lockfile_unreadable",
            path=exc.path,
            reason=exc.reason,
            fallback="direct dependencies only",
        )
        return classify_direct(declared)

    return classify(installed, declared)
