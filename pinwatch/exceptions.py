"""Custom exceptions for pinwatch."""

from __future__ import annotations


class PinwatchError(Exception):
    """Base exception for all pinwatch errors."""


class ManifestError(PinwatchError):
    """Raised when a SOURCES manifest cannot be read, decoded or validated."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


class RepoRefError(PinwatchError, ValueError):
    """Raised when a repository reference is not of the form github.com/owner/project."""

    def __init__(self, ref: str):
        self.ref = ref
        super().__init__(f"could not parse repository reference: {ref!r}")


class VersionParseError(PinwatchError, ValueError):
    """Raised when a tag has no usable numeric version in it."""

    def __init__(self, value: str, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"could not parse {value!r} as a version: {reason}")


class ReleaseLookupError(PinwatchError):
    """Raised when the latest release of a repository cannot be retrieved."""

    def __init__(self, repo: str, reason: str):
        self.repo = repo
        self.reason = reason
        super().__init__(f"error retrieving the latest release for {repo}: {reason}")


class VersionCompareError(VersionParseError):
    """Raised when either side of a version comparison cannot be parsed."""

    def __init__(self, left: str, right: str, errors: list[VersionParseError]):
        self.left = left
        self.right = right
        self.errors = errors
        self.value = f"{left} / {right}"
        self.reason = "; ".join(str(e) for e in errors)
        Exception.__init__(
            self, f"error comparing versions {left!r} and {right!r}: {self.reason}"
        )
