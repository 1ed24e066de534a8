"""Data models for the inventory engine."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Literal

DependencyType = Literal["direct", "transitive"]


class ScanMode(enum.Enum):
    """Which packages a scan covers."""

    DIRECT = "direct"  # manifest dependencies only
    TRANSITIVE = "transitive"  # everything installed per the lock file


@dataclass(frozen=True)
class InstalledPackage:
    """A package name and the exact version the lock file installed."""

    name: str
    version: str


@dataclass(frozen=True)
class ClassifiedPackage:
    package: InstalledPackage
    dependency_type: DependencyType

    @property
    def name(self) -> str:
        return self.package.name

    @property
    def version(self) -> str:
        return self.package.version
