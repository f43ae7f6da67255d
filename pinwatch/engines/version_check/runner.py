"""Manifest orchestration: one concurrent task per SOURCES file."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from pathlib import Path

import structlog

from pinwatch.engines.manifest.loader import discover_manifests, load_manifest
from pinwatch.engines.version_check.github_client import GitHubClient
from pinwatch.engines.version_check.models import ManifestReport
from pinwatch.engines.version_check.reconciler import reconcile
from pinwatch.exceptions import ManifestError

log = structlog.get_logger("pinwatch.engine")

ReportCallback = Callable[[ManifestReport], None]


async def check_manifest(
    path: str | Path,
    client: GitHubClient,
    *,
    fail_fast: bool = False,
) -> ManifestReport:
    """Load one manifest and reconcile its entries.

    A manifest that cannot be read or validated yields a report with
    ``error`` set and no results.
    """
    report = ManifestReport(path=str(path))
    try:
        config = load_manifest(path)
    except ManifestError as exc:
        log.error("runner.manifest_invalid", manifest=str(path), error=exc.reason)
        report.error = str(exc)
        return report

    report.results = await reconcile(config.sources, client, fail_fast=fail_fast)
    log.info("runner.manifest_checked", manifest=str(path), **report.count_by_status())
    return report


async def check_paths(
    manifests: Sequence[str | Path],
    client: GitHubClient,
    *,
    fail_fast: bool = False,
    max_concurrency: int | None = None,
    on_report: ReportCallback | None = None,
) -> list[ManifestReport]:
    """Check every manifest concurrently and return reports in input order.

    *on_report* is called as each manifest finishes, so output can be
    streamed.  *max_concurrency* bounds how many manifests are in flight.
    """
    if not manifests:
        return []

    sem = asyncio.Semaphore(max_concurrency or len(manifests))

    async def _run_one(path: str | Path) -> ManifestReport:
        async with sem:
            try:
                report = await check_manifest(path, client, fail_fast=fail_fast)
            except Exception as exc:
                log.error("runner.manifest_failed", manifest=str(path), error=str(exc))
                report = ManifestReport(path=str(path), error=f"{type(exc).__name__}: {exc}")
        if on_report is not None:
            on_report(report)
        return report

    tasks = [_run_one(p) for p in manifests]
    return list(await asyncio.gather(*tasks))


async def check_all(
    root: str | Path,
    client: GitHubClient,
    *,
    fail_fast: bool = False,
    max_concurrency: int | None = None,
    on_report: ReportCallback | None = None,
) -> list[ManifestReport]:
    """Discover manifests under *root* and check them all."""
    manifests = discover_manifests(root)
    return await check_paths(
        manifests,
        client,
        fail_fast=fail_fast,
        max_concurrency=max_concurrency,
        on_report=on_report,
    )
