"""Scan configuration: explicit values injected into the client and orchestrator."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

DEFAULT_BASE_URL = "https://api.deps.dev"
DEFAULT_ECOSYSTEM = "npm"
DEFAULT_REQUEST_DELAY = 0.1  # seconds between enrichment starts


def _env_float(key: str, default: float) -> float:
    return float(os.environ.get(key, default))


def _env_int(key: str, default: int) -> int:
    return int(os.environ.get(key, default))


@dataclass(frozen=True)
class ScanConfig:
    """Registry endpoint and pacing parameters for one scan."""

    base_url: str = DEFAULT_BASE_URL
    ecosystem: str = DEFAULT_ECOSYSTEM
    request_delay: float = DEFAULT_REQUEST_DELAY
    concurrency: int = 1
    timeout: float = 30.0
    max_retries: int = 3

    def __post_init__(self) -> None:
        if self.request_delay < 0:
            raise ValueError(f"request_delay must be >= 0, got {self.request_delay}")
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {self.concurrency}")
        if self.max_retries < 1:
            raise ValueError(f"max_retries must be >= 1, got {self.max_retries}")

    @classmethod
    def from_env(cls) -> ScanConfig:
        """Build a config from ``DEPSCAN_*`` environment variables."""
        return cls(
            base_url=os.environ.get("DEPSCAN_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            ecosystem=os.environ.get("DEPSCAN_ECOSYSTEM", DEFAULT_ECOSYSTEM),
            request_delay=_env_float("DEPSCAN_REQUEST_DELAY", DEFAULT_REQUEST_DELAY),
            concurrency=_env_int("DEPSCAN_CONCURRENCY", 1),
            timeout=_env_float("DEPSCAN_TIMEOUT", 30.0),
            max_retries=_env_int("DEPSCAN_MAX_RETRIES", 3),
        )

    def with_overrides(self, **overrides: object) -> ScanConfig:
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self
