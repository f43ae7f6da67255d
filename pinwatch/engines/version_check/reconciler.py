"""Classify each pinned entry against its latest GitHub release."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from pinwatch.engines.manifest.models import SourceEntry
from pinwatch.engines.version_check.github_client import GitHubClient
from pinwatch.engines.version_check.models import ReconciliationResult
from pinwatch.engines.version_check.repo_ref import parse_repo
from pinwatch.engines.version_check.semver import compare_versions
from pinwatch.exceptions import ReleaseLookupError, RepoRefError, VersionParseError

log = structlog.get_logger("pinwatch.engine")


async def check_entry(entry: SourceEntry, client: GitHubClient) -> ReconciliationResult:
    """Check a single entry.

    Never raises for entry-level problems: a bad repo reference, a failed
    lookup or an unparseable tag all come back as an ``error`` result.
    """
    if entry.url:
        log.debug("reconciler.raw_url", url=entry.url)
        return ReconciliationResult(status="raw_url", url=entry.url)

    repo = entry.repo or ""
    try:
        owner, project = parse_repo(repo)
        latest = await client.get_latest_release(owner, project)
    except (RepoRefError, ReleaseLookupError) as exc:
        return _error(entry, exc)

    if latest is None:
        log.info("reconciler.unverifiable", repo=repo)
        return ReconciliationResult(status="unverifiable", repo=repo, tag=entry.tag)

    try:
        rel = compare_versions(entry.tag or "", latest)
    except VersionParseError as exc:
        return _error(entry, exc, latest=latest)

    if rel < 0:
        log.info("reconciler.outdated", repo=repo, have=entry.tag, latest=latest)
        return ReconciliationResult(
            status="outdated", repo=repo, tag=entry.tag, latest=latest
        )
    log.debug("reconciler.up_to_date", repo=repo, tag=entry.tag, latest=latest)
    return ReconciliationResult(status="up_to_date", repo=repo, tag=entry.tag, latest=latest)


async def reconcile(
    entries: Iterable[SourceEntry],
    client: GitHubClient,
    *,
    fail_fast: bool = False,
) -> list[ReconciliationResult]:
    """Check *entries* in order, one lookup at a time.

    Errors are collected and the remaining entries are still checked.  With
    *fail_fast* the first ``error`` result is the last one returned.
    """
    results: list[ReconciliationResult] = []
    for entry in entries:
        result = await check_entry(entry, client)
        results.append(result)
        if fail_fast and result.status == "error":
            log.warning("reconciler.stopped", repo=result.repo, error=result.error)
            break
    return results


def _error(
    entry: SourceEntry, exc: Exception, *, latest: str | None = None
) -> ReconciliationResult:
    log.error("reconciler.entry_failed", repo=entry.repo, error=str(exc))
    return ReconciliationResult(
        status="error", repo=entry.repo, tag=entry.tag, latest=latest, error=str(exc)
    )
