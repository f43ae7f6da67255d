"""Shared fixtures for pinwatch tests (no network required)."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
def client():
    """Stand-in for GitHubClient; set ``get_latest_release`` per test."""
    fake = AsyncMock()
    fake.get_latest_release = AsyncMock(return_value=None)
    return fake


@pytest.fixture
def write_manifest(tmp_path):
    """Write a SOURCES file under *tmp_path* (optionally in a subdirectory)."""

    def _write(content: str, subdir: str = "") -> str:
        target = tmp_path / subdir if subdir else tmp_path
        target.mkdir(parents=True, exist_ok=True)
        path = target / "SOURCES"
        path.write_text(content)
        return str(path)

    return _write
