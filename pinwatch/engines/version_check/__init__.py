"""Version check engine: compare pinned tags with the latest GitHub releases."""

from pinwatch.engines.version_check.github_client import GitHubClient, RateLimitError
from pinwatch.engines.version_check.models import ManifestReport, PinStatus, ReconciliationResult
from pinwatch.engines.version_check.reconciler import check_entry, reconcile
from pinwatch.engines.version_check.repo_ref import parse_repo
from pinwatch.engines.version_check.runner import check_all, check_manifest, check_paths
from pinwatch.engines.version_check.semver import compare_versions, parse_version

__all__ = [
    "GitHubClient",
    "ManifestReport",
    "PinStatus",
    "RateLimitError",
    "ReconciliationResult",
    "check_all",
    "check_entry",
    "check_manifest",
    "check_paths",
    "compare_versions",
    "parse_repo",
    "parse_version",
    "reconcile",
]
