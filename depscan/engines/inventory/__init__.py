"""Inventory engine — derive the classified package set from manifest + lock file."""

from depscan.engines.inventory.classifier import classify, classify_direct
from depscan.engines.inventory.identity import normalize_package_name
from depscan.engines.inventory.lockfile import index_lockfile, load_lockfile
from depscan.engines.inventory.manifest import load_manifest, read_declared_dependencies
from depscan.engines.inventory.models import (
    ClassifiedPackage,
    DependencyType,
    InstalledPackage,
    ScanMode,
)
from depscan.engines.inventory.resolver import resolve_packages

__all__ = [
    "ClassifiedPackage",
    "DependencyType",
    "InstalledPackage",
    "ScanMode",
    "classify",
    "classify_direct",
    "index_lockfile",
    "load_lockfile",
    "load_manifest",
    "normalize_package_name",
    "read_declared_dependencies",
    "resolve_packages",
]
