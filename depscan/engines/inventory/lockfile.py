"""Index a package-lock.json ``packages`` table by canonical package name."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog

from depscan.engines.inventory.identity import normalize_package_name
from depscan.exceptions import LockfileUnreadable

log = structlog.get_logger("depscan.inventory")


def index_lockfile(lock: Any, source: str = "package-lock.json") -> dict[str, str]:
    """Map canonical name -> installed version for every lock-file package.

    The root entry (empty path) and entries without a ``version`` (workspace
    links) are skipped. When two installation paths share a canonical name
    the later one wins.
    """
    if not isinstance(lock, Mapping):
        raise LockfileUnreadable(source, "top-level value is not an object")

    packages = lock.get("packages")
    if packages is None:
        raise LockfileUnreadable(source, "no 'packages' table")
    if not isinstance(packages, Mapping):
        raise LockfileUnreadable(source, "'packages' is not an object")

    installed: dict[str, str] = {}
    for install_path, info in packages.items():
        if install_path == "":
            continue
        if not isinstance(info, Mapping):
            continue
        version = info.get("version")
        if not version:
            continue
        version = str(version)

        name = normalize_package_name(install_path)
        prev = installed.get(name)
        if prev is not None and prev != version:
            log.debug(
                "inventory.package_overwritten",
                package=name,
                old_version=prev,
                new_version=version,
                install_path=install_path,
            )
        installed[name] = version
    return installed


def load_lockfile(path: Path) -> dict[str, str]:
    """Read and index the lock file at *path*."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise LockfileUnreadable(str(path), exc.strerror or str(exc)) from exc
    except json.JSONDecodeError as exc:
        raise LockfileUnreadable(str(path), f"invalid JSON: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise LockfileUnreadable(str(path), f"not valid UTF-8: {exc}") from exc
    return index_lockfile(data, source=str(path))
