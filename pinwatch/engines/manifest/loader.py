"""Discover SOURCES manifests on disk and decode them into SourcesConfig."""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from pinwatch.engines.manifest.models import SourcesConfig
from pinwatch.exceptions import ManifestError

log = structlog.get_logger("pinwatch.engine")

MANIFEST_NAME = "SOURCES"


def discover_manifests(root: str | Path) -> list[Path]:
    """Walk *root* and return every file named ``SOURCES``, sorted.

    A *root* that is itself a manifest file is returned as-is.
    """
    root_path = Path(root)
    if not root_path.exists():
        raise ManifestError(str(root), "no such file or directory")
    if root_path.is_file():
        return [root_path] if root_path.name == MANIFEST_NAME else []

    manifests = sorted(p for p in root_path.rglob(MANIFEST_NAME) if p.is_file())
    log.debug("loader.discovered", root=str(root_path), count=len(manifests))
    return manifests


def parse_manifest(content: str, source: str = "<string>") -> SourcesConfig:
    """Decode and validate the YAML text of a manifest.

    An empty document yields a config with no sources.  Raises
    :class:`ManifestError` for invalid YAML or a document of the wrong shape.
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ManifestError(source, f"invalid yaml: {exc}") from exc

    if data is None:
        return SourcesConfig()
    if not isinstance(data, dict):
        raise ManifestError(
            source, f"invalid config: expected a mapping, got {type(data).__name__}"
        )

    try:
        return SourcesConfig.model_validate(data)
    except ValidationError as exc:
        raise ManifestError(source, f"invalid config: {_format_errors(exc)}") from exc


def load_manifest(path: str | Path) -> SourcesConfig:
    """Read a manifest file from disk and decode it."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(str(path), f"unable to read manifest: {exc}") from exc
    return parse_manifest(content, str(path))


def _format_errors(exc: ValidationError) -> str:
    """Flatten pydantic errors into ``Sources.0: message`` fragments."""
    parts: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        msg = err["msg"].removeprefix("Value error, ")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)
