"""CLI entry point: pinwatch.

Usage:
    pinwatch                      # scan the current directory
    pinwatch path/to/tree         # scan a tree for SOURCES manifests
    pinwatch path/to/SOURCES      # check a single manifest
    pinwatch --json .             # machine-readable report
"""

from __future__ import annotations

import asyncio
import json
import sys
from dataclasses import asdict
from pathlib import Path

import click

from pinwatch.core.logging import setup_logging
from pinwatch.engines.manifest.loader import discover_manifests
from pinwatch.engines.version_check.github_client import DEFAULT_API_URL, GitHubClient
from pinwatch.engines.version_check.models import ManifestReport
from pinwatch.engines.version_check.runner import check_paths
from pinwatch.exceptions import ManifestError

_STATUS_STYLES: dict[str, dict] = {
    "up_to_date": {"fg": "green"},
    "outdated": {"fg": "red"},
    "unverifiable": {"fg": "yellow"},
    "raw_url": {},
    "error": {"fg": "red", "bold": True},
}


def _print_report(report: ManifestReport) -> None:
    """Print one manifest's block; called as each manifest completes."""
    click.secho(f"{report.path}:", bold=True)
    if report.error is not None:
        click.secho(f"  Error: {report.error}", fg="red", bold=True)
        return
    if not report.results:
        click.echo("  (no sources declared)")
        return
    for result in report.results:
        text = "\n".join(f"  {line}" for line in result.message.splitlines())
        click.secho(text, **_STATUS_STYLES.get(result.status, {}))


async def _run(
    manifests: list[Path],
    api_url: str,
    fail_fast: bool,
    concurrency: int | None,
    as_json: bool,
) -> list[ManifestReport]:
    async with GitHubClient(base_url=api_url) as client:
        return await check_paths(
            manifests,
            client,
            fail_fast=fail_fast,
            max_concurrency=concurrency,
            on_report=None if as_json else _print_report,
        )


@click.command()
@click.argument("root", default=".", type=click.Path(path_type=Path))
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--fail-fast", is_flag=True, help="Stop a manifest at its first failing entry")
@click.option(
    "--api-url",
    envvar="PINWATCH_GITHUB_API_URL",
    default=DEFAULT_API_URL,
    show_default=True,
    help="GitHub API base URL",
)
@click.option(
    "--concurrency",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum number of manifests checked at once (default: all)",
)
def main(
    root: Path,
    verbose: bool,
    as_json: bool,
    fail_fast: bool,
    api_url: str,
    concurrency: int | None,
) -> None:
    """Check SOURCES pins under ROOT against their latest GitHub releases."""
    setup_logging("DEBUG" if verbose else None)

    try:
        manifests = discover_manifests(root)
    except ManifestError as exc:
        click.secho(f"Error: {exc}", fg="red", err=True)
        sys.exit(1)

    if not as_json:
        click.echo("Found manifests:")
        for m in manifests:
            click.echo(str(m))
        click.echo()

    reports = asyncio.run(_run(manifests, api_url, fail_fast, concurrency, as_json))

    if as_json:
        click.echo(json.dumps([asdict(r) for r in reports], indent=2))

    if any(r.has_errors for r in reports):
        sys.exit(1)


if __name__ == "__main__":
    main()
