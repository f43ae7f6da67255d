"""Data models for the version check engine."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Literal

PinStatus = Literal["up_to_date", "outdated", "unverifiable", "raw_url", "error"]


@dataclass
class ReconciliationResult:
    """Outcome of checking one SOURCES entry against its latest release."""

    status: PinStatus
    repo: str | None = None
    tag: str | None = None
    url: str | None = None
    latest: str | None = None  # latest release name, when one was observed
    error: str | None = None

    @property
    def message(self) -> str:
        if self.status == "raw_url":
            return f"Raw url specified, cannot check for currency: {self.url}"
        if self.status == "unverifiable":
            return f"Unable to check currency, latest release undefined for {self.repo}"
        if self.status == "outdated":
            return (
                f"There is a newer version of: {self.repo}\n"
                f"    have: {self.tag}\n"
                f"    latest: {self.latest}"
            )
        if self.status == "up_to_date":
            return f"Up to date: {self.repo}"
        return f"Error checking {self.repo or self.url}: {self.error}"


@dataclass
class ManifestReport:
    """All results for one manifest, or the reason it could not be checked."""

    path: str
    results: list[ReconciliationResult] = field(default_factory=list)
    error: str | None = None

    @property
    def has_errors(self) -> bool:
        return self.error is not None or any(r.status == "error" for r in self.results)

    def count_by_status(self) -> dict[str, int]:
        return dict(Counter(r.status for r in self.results))
