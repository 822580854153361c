"""Top-level pytest configuration for kestrel."""

import os

import pytest

from kestrel.di import DISettings, ServiceRegistry, ServiceScope


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep settings tests independent of the developer's environment."""
    for key in list(os.environ):
        if key.startswith("KESTREL_"):
            monkeypatch.delenv(key)


@pytest.fixture
def registry() -> ServiceRegistry:
    return ServiceRegistry(DISettings())


@pytest.fixture
def scope(registry: ServiceRegistry) -> ServiceScope:
    return ServiceScope(registry)
