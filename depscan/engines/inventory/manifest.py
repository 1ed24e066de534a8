"""Read declared dependencies from package.json."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from depscan.exceptions import ManifestUnreadable

# Merge order: later groups overwrite earlier ones on name collision.
DEPENDENCY_GROUPS = ("dependencies", "devDependencies")


def read_declared_dependencies(manifest: Any, source: str = "package.json") -> dict[str, str]:
    """Merge the manifest's dependency groups into one name -> range mapping."""
    if not isinstance(manifest, Mapping):
        raise ManifestUnreadable(source, "top-level value is not an object")

    declared: dict[str, str] = {}
    for group in DEPENDENCY_GROUPS:
        entries = manifest.get(group)
        if entries is None:
            continue
        if not isinstance(entries, Mapping):
            raise ManifestUnreadable(source, f"'{group}' is not an object")
        for name, version_range in entries.items():
            declared[name] = str(version_range)
    return declared


def load_manifest(path: Path) -> dict[str, str]:
    """Read the manifest at *path* and return its declared dependencies."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ManifestUnreadable(str(path), exc.strerror or str(exc)) from exc
    except json.JSONDecodeError as exc:
        raise ManifestUnreadable(str(path), f"invalid JSON: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ManifestUnreadable(str(path), f"not valid UTF-8: {exc}") from exc
    return read_declared_dependencies(data, source=str(path))
