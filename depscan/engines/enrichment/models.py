"""Data models for the enrichment engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from depscan.engines.inventory.models import DependencyType

UNKNOWN = "unknown"


@dataclass(frozen=True)
class Advisory:
    """A published vulnerability advisory for one package version."""

    id: str
    title: str
    severity: str | None = None
    cvss: float | None = None
    summary: str | None = None


@dataclass(frozen=True)
class VersionMetadata:
    published_at: datetime | None
    is_default: bool = False  # registry's default (latest) version


@dataclass(frozen=True)
class EnrichmentResult:
    """What the registry knows about one package version.

    Not-found and failed lookups both produce the empty result.
    """

    published_at: datetime | None = None
    is_default: bool = False
    advisories: tuple[Advisory, ...] = ()


@dataclass(frozen=True)
class ScanRecord:
    """One scanned package: classification joined with enrichment."""

    package: str
    current_version: str
    dependency_type: DependencyType
    published_at: datetime | None = None
    is_default: bool = False
    vulnerabilities: tuple[Advisory, ...] = ()

    @property
    def vulnerability_count(self) -> int:
        return len(self.vulnerabilities)

    @property
    def is_vulnerable(self) -> bool:
        return self.vulnerability_count > 0


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO 8601 timestamp; anything else (including "unknown") is None."""
    if not isinstance(value, str) or not value or value.lower() == UNKNOWN:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime | None) -> str:
    """ISO 8601 UTC with a ``Z`` suffix, or "unknown"."""
    if value is None:
        return UNKNOWN
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
