"""pinwatch: check SOURCES manifest pins against the latest GitHub releases."""

__version__ = "0.1.0"

from pinwatch.engines.manifest import SourceEntry, SourcesConfig
from pinwatch.engines.version_check import (
    GitHubClient,
    ManifestReport,
    ReconciliationResult,
    check_all,
    compare_versions,
    parse_repo,
    parse_version,
    reconcile,
)
from pinwatch.exceptions import (
    ManifestError,
    PinwatchError,
    ReleaseLookupError,
    RepoRefError,
    VersionCompareError,
    VersionParseError,
)

__all__ = [
    "GitHubClient",
    "ManifestError",
    "ManifestReport",
    "PinwatchError",
    "ReconciliationResult",
    "ReleaseLookupError",
    "RepoRefError",
    "SourceEntry",
    "SourcesConfig",
    "VersionCompareError",
    "VersionParseError",
    "check_all",
    "compare_versions",
    "parse_repo",
    "parse_version",
    "reconcile",
]
