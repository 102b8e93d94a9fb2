"""Shared pytest fixtures for climbcalc tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from climbcalc.core.settings import MAX_DEPTH_ENV_VAR, get_settings


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run every test with default settings, away from any local climbcalc.toml."""
    monkeypatch.delenv(MAX_DEPTH_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
