"""Parse canonical ``github.com/owner/project`` repository references."""

from __future__ import annotations

import re

from pinwatch.exceptions import RepoRefError

GITHUB_HOST = "github.com"

# Trailing path segments ("github.com/o/p/tree/main") are ignored.
REPO_PATTERN = re.compile(rf"^{re.escape(GITHUB_HOST)}/([^/]+)/([^/]+)")


def parse_repo(ref: str) -> tuple[str, str]:
    """Extract ``(owner, project)`` from a repository reference.

    Raises :class:`RepoRefError` if *ref* does not start with
    ``github.com/<owner>/<project>``.
    """
    match = REPO_PATTERN.match(ref)
    if match is None:
        raise RepoRefError(ref)
    return match.group(1), match.group(2)
