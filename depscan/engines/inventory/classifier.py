"""Label installed packages as direct or transitive."""

from __future__ import annotations

from collections.abc import Mapping

from depscan.engines.inventory.models import ClassifiedPackage, InstalledPackage


def classify(
    installed: Mapping[str, str],
    declared: Mapping[str, str],
) -> list[ClassifiedPackage]:
    """One entry per installed package, in *installed* iteration order.

    A package is "direct" iff its name is declared in the manifest.
    """
    return [
        ClassifiedPackage(
            package=InstalledPackage(name=name, version=version),
            dependency_type="direct" if name in declared else "transitive",
        )
        for name, version in installed.items()
    ]


def classify_direct(declared: Mapping[str, str]) -> list[ClassifiedPackage]:
    """Every declared dependency as "direct", keeping its declared range as version."""
    return classify(declared, declared)
