"""Shared test fixtures and configuration."""

import os

import pytest

from lazyinit.core.patterns.singleton import Singleton
from lazyinit.core.registry import default_registry
from tests.helpers import CountingFactory


# =============================================================================
# Environment Variable Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Remove LAZYINIT_* variables and run away from any local .env file."""
    for key in list(os.environ):
        if key.upper().startswith("LAZYINIT_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


# =============================================================================
# Singleton Reset
# =============================================================================

@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset Settings/metaclass singletons and the default registry around each test."""
    Singleton.clear_instances()
    default_registry.clear()

    yield

    Singleton.clear_instances()
    default_registry.clear()


# =============================================================================
# Factory Fixtures
# =============================================================================

@pytest.fixture
def counting_factory():
    return CountingFactory()
