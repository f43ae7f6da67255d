"""Manifest engine — find and decode SOURCES files."""

from pinwatch.engines.manifest.loader import (
    MANIFEST_NAME,
    discover_manifests,
    load_manifest,
    parse_manifest,
)
from pinwatch.engines.manifest.models import SourceEntry, SourcesConfig

__all__ = [
    "MANIFEST_NAME",
    "SourceEntry",
    "SourcesConfig",
    "discover_manifests",
    "load_manifest",
    "parse_manifest",
]
