"""Custom exceptions for depscan."""


class DepScanError(Exception):
    """Base exception for all scanner errors."""


class ManifestUnreadable(DepScanError):
    """Raised when the manifest is missing or invalid. Fatal to the scan."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read manifest {path}: {reason}")


class LockfileUnreadable(DepScanError):
    """Raised when the lock file is missing or malformed.

    Recoverable: the scan degrades to the manifest's direct dependencies.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read lock file {path}: {reason}")


class EnrichmentUnavailable(DepScanError):
    """Raised when the registry answers with a non-success status other than 404."""

    def __init__(self, package: str, version: str, reason: str):
        self.package = package
        self.version = version
        self.reason = reason
        super().__init__(f"{package}@{version}: {reason}")
