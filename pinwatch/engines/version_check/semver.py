"""Tolerant version parsing and comparison for release tags.

Tags in the wild are noisy (``v1.2``, ``release-2.0.1``, ``1.4.0-rc1``), so
parsing skips any leading non-digits and keeps up to five dot-separated
numeric components.  Anything after the last matching component is ignored.
"""

from __future__ import annotations

import re
from itertools import zip_longest

from pinwatch.exceptions import VersionCompareError, VersionParseError

_MAX_COMPONENTS = 5
_MAX_COMPONENT_VALUE = 2**31 - 1

# Components after the first may carry a sign so "1.-2" is rejected instead
# of silently truncated to (1,).
VERSION_PATTERN = re.compile(
    r"^\D*(\d+)" + r"(?:\.(-?\d+))?" * (_MAX_COMPONENTS - 1), re.ASCII
)


def parse_version(tag: str) -> tuple[int, ...]:
    """Extract the numeric version vector from *tag*.

    ``parse_version("v2.3")`` returns ``(2, 3)``; the result is never padded.
    Raises :class:`VersionParseError` if *tag* contains no digit or a
    captured component is negative or out of range.
    """
    match = VERSION_PATTERN.match(tag)
    if match is None:
        raise VersionParseError(tag, "no numeric component found")

    parts: list[int] = []
    for group in match.groups():
        if group is None:
            continue
        try:
            value = int(group)
        except ValueError:
            raise VersionParseError(tag, f"component {group!r} is not an integer") from None
        if value < 0:
            raise VersionParseError(tag, f"component {group!r} is negative")
        if value > _MAX_COMPONENT_VALUE:
            raise VersionParseError(tag, f"component {group!r} is out of range")
        parts.append(value)
    return tuple(parts)


def compare_versions(a: str, b: str) -> int:
    """Compare two version strings, returning -1, 0 or 1 for *a* against *b*.

    The shorter vector is zero-padded on the right, so ``"1.2"`` equals
    ``"1.2.0"``.  Raises :class:`VersionCompareError` naming both inputs if
    either side fails to parse.
    """
    errors: list[VersionParseError] = []
    left: tuple[int, ...] = ()
    right: tuple[int, ...] = ()
    try:
        left = parse_version(a)
    except VersionParseError as exc:
        errors.append(exc)
    try:
        right = parse_version(b)
    except VersionParseError as exc:
        errors.append(exc)
    if errors:
        raise VersionCompareError(a, b, errors)

    for x, y in zip_longest(left, right, fillvalue=0):
        if x > y:
            return 1
        if x < y:
            return -1
    return 0
