"""Canonical package names from lock-file installation paths."""

from __future__ import annotations

NESTED_PREFIX = "node_modules/"


def normalize_package_name(install_path: str) -> str:
    """Return the package name installed at *install_path*.

    ``node_modules/a/node_modules/b`` -> ``b``
    ``node_modules/@scope/pkg`` -> ``@scope/pkg``
    ``packages/tool`` (workspace path) -> ``tool``
    """
    _, _, trailing = install_path.rpartition(NESTED_PREFIX)
    if "/" in trailing and not trailing.startswith("@"):
        return trailing.rsplit("/", 1)[-1]
    return trailing
