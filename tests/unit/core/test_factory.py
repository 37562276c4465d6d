"""Unit tests for create_accessor and lazy_singleton."""

import pytest
from pydantic import ValidationError

from lazyinit.core.accessor import (
    DoubleCheckedAccessor,
    EagerAccessor,
    FailurePolicy,
    LockedAccessor,
    SingletonAccessor,
)
from lazyinit.core.exceptions import ConstructionFailed
from lazyinit.core.factory import create_accessor, lazy_singleton, resolve_config
from tests.helpers import CountingFactory


class TestResolveConfig:
    """Tests for merging options with Settings."""

    def test_defaults_from_settings(self):
        config = resolve_config()

        assert config.strategy == "double_checked"
        assert config.policy == "retry"
        assert config.retries == 0
        assert config.error_dump_dir is None

    def test_explicit_values_win(self, monkeypatch):
        monkeypatch.setenv("LAZYINIT_DEFAULT_STRATEGY", "eager")
        config = resolve_config(strategy="locked", policy=FailurePolicy.PERMANENT, retries=2)

        assert config.strategy == "locked"
        assert config.policy == "permanent"
        assert config.retries == 2

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            resolve_config(strategy="optimistic")

    def test_negative_retries(self):
        with pytest.raises(ValidationError):
            resolve_config(retries=-1)


class TestCreateAccessor:
    """Tests for create_accessor."""

    def test_default_is_double_checked(self, counting_factory):
        assert isinstance(create_accessor(counting_factory), DoubleCheckedAccessor)

    def test_strategy_from_settings(self, monkeypatch, counting_factory):
        monkeypatch.setenv("LAZYINIT_DEFAULT_STRATEGY", "locked")
        assert isinstance(create_accessor(counting_factory), LockedAccessor)

    def test_eager_constructs_immediately(self, counting_factory):
        accessor = create_accessor(counting_factory, strategy="eager")

        assert isinstance(accessor, EagerAccessor)
        assert counting_factory.calls == 1

    def test_policy_from_settings(self, monkeypatch):
        monkeypatch.setenv("LAZYINIT_FAILURE_POLICY", "permanent")
        factory = CountingFactory(failures=1)
        accessor = create_accessor(factory)

        for _ in range(2):
            with pytest.raises(ConstructionFailed):
                accessor.get_instance()
        assert factory.calls == 1

    def test_retries_from_settings(self, monkeypatch):
        monkeypatch.setenv("LAZYINIT_CONSTRUCTION_RETRIES", "2")
        monkeypatch.setenv("LAZYINIT_RETRY_DELAY", "0")
        factory = CountingFactory(failures=2)

        assert create_accessor(factory).get_instance() is not None
        assert factory.calls == 3

    def test_error_dump_dir_from_settings(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LAZYINIT_ERROR_STATES_PATH", str(tmp_path / "dumps"))
        accessor = create_accessor(CountingFactory(failures=1), name="svc")

        with pytest.raises(ConstructionFailed):
            accessor.get_instance()

        assert len(list((tmp_path / "dumps").glob("error_svc_*.json"))) == 1


class TestLazySingletonDecorator:
    """Tests for the decorator form."""

    def test_bare_decorator(self):
        calls = []

        @lazy_singleton
        def get_pool():
            calls.append(1)
            return object()

        assert isinstance(get_pool, SingletonAccessor)
        assert get_pool() is get_pool()
        assert len(calls) == 1
        assert get_pool.name.endswith("get_pool")

    def test_decorator_with_options(self):
        @lazy_singleton(strategy="locked", name="client")
        def get_client():
            return object()

        assert isinstance(get_client, LockedAccessor)
        assert get_client.name == "client"
        assert get_client() is get_client()
