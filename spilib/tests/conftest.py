"""Shared fixtures for spilib tests."""

import os
from pathlib import Path
from typing import Callable

import pytest

from spilib.core.settings.settings import DEFAULT_RESOURCE_PREFIX, set_settings
from spilib.discovery.resources import InMemoryResource


@pytest.fixture(autouse=True)
def reset_settings():
    """Keep the process-wide settings from leaking between tests."""
    set_settings(None)
    yield
    set_settings(None)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove SPILIB_* variables inherited from the calling shell."""
    for key in list(os.environ):
        if key.upper().startswith("SPILIB_"):
            monkeypatch.delenv(key)


@pytest.fixture
def write_resource() -> Callable[[Path, str, str], Path]:
    """Write a provider-configuration file under a search root."""

    def _write(root: Path, capability_name: str, content: str) -> Path:
        path = root / DEFAULT_RESOURCE_PREFIX / capability_name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def memory_resource() -> Callable[[str], InMemoryResource]:
    """Build an in-memory resource from text."""

    def _build(content: str, identity: str = "memory:test/resource") -> InMemoryResource:
        return InMemoryResource(identity, content)

    return _build
