"""
Singleton Registry

Maps keys to independently guarded accessors. Keys are derived from a
name and an environment, so the same name can hold a different instance
per environment ("dev:db", "prod:db").
"""
import threading
from typing import Any, Callable, Dict, List, Optional, Set, TypeVar

from lazyinit.core.accessor import SingletonAccessor
from lazyinit.core.exceptions import AlreadyRegistered, CircularInitialization, UnknownSingleton
from lazyinit.core.factory import create_accessor
from lazyinit.core.models.accessor_model import AccessorStats
from lazyinit.core.settings import get_settings
from lazyinit.utils.logger import default_logger as logger

T = TypeVar('T')


def environment_key(name: str, environment: Optional[str] = None) -> str:
    """
    Build a registry key

    Args:
        name: singleton name
        environment: environment name (None → Settings.environment)

    Returns:
        "<environment>:<name>", or just name when environment is empty
    """
    if not name:
        raise ValueError("Singleton name must not be empty")
    if environment is None:
        environment = get_settings().environment
    return f"{environment}:{name}" if environment else name


class SingletonRegistry:
    """
    Registry of lazily constructed singletons

    Each key has its own re-entrant registration lock, so an eager factory
    may register or look up other keys of the same registry. The registry
    lock only guards the maps and is never held while a factory runs.
    """

    def __init__(self, environment: Optional[str] = None):
        self._environment = environment
        self._accessors: Dict[str, SingletonAccessor] = {}
        self._key_locks: Dict[str, threading.RLock] = {}
        self._pending: Set[str] = set()
        self._lock = threading.Lock()

    @property
    def environment(self) -> str:
        if self._environment is not None:
            return self._environment
        return get_settings().environment

    def key_for(self, name: str) -> str:
        return environment_key(name, self.environment)

    def _key_lock(self, key: str) -> threading.RLock:
        with self._lock:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = self._key_locks[key] = threading.RLock()
            return lock

    def _build(self, key: str, factory: Callable[[], T], options: dict) -> SingletonAccessor[T]:
        """Create and store the accessor; caller must hold the key lock"""
        with self._lock:
            if key in self._pending:
                # an eager factory asked for its own key
                raise CircularInitialization(key)
            self._pending.add(key)
        try:
            # eager accessors construct here, so failures leave the key free
            accessor = create_accessor(factory, **options)
        finally:
            with self._lock:
                self._pending.discard(key)

        with self._lock:
            self._accessors[key] = accessor

        logger.debug(f"Registered singleton '{key}' ({accessor.strategy.value})")
        return accessor

    def register(
        self,
        name: str,
        factory: Callable[[], T],
        replace: bool = False,
        **options
    ) -> SingletonAccessor[T]:
        """
        Register a factory under ``name``

        Args:
            name: singleton name, prefixed with the environment
            factory: zero-argument callable
            replace: overwrite an existing accessor instead of raising
            **options: passed to create_accessor (strategy, policy, retries, ...)

        Returns:
            The new accessor

        Raises:
            AlreadyRegistered: key taken and replace is False
        """
        key = self.key_for(name)
        options.setdefault("name", key)

        with self._key_lock(key):
            if key in self._accessors and not replace:
                raise AlreadyRegistered(key)
            return self._build(key, factory, options)

    def get_or_register(
        self,
        name: str,
        factory: Callable[[], T],
        **options
    ) -> SingletonAccessor[T]:
        """Return the accessor under ``name``, registering ``factory`` if there is none"""
        key = self.key_for(name)

        accessor = self._accessors.get(key)
        if accessor is not None:
            return accessor

        with self._key_lock(key):
            accessor = self._accessors.get(key)
            if accessor is None:
                options.setdefault("name", key)
                accessor = self._build(key, factory, options)

        return accessor

    def get_accessor(self, name: str) -> SingletonAccessor:
        key = self.key_for(name)
        try:
            return self._accessors[key]
        except KeyError:
            raise UnknownSingleton(key) from None

    def get_instance(self, name: str) -> Any:
        """Shared Instance registered under ``name``"""
        return self.get_accessor(name).get_instance()

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._accessors)

    def stats(self) -> List[AccessorStats]:
        with self._lock:
            accessors = list(self._accessors.values())
        return [accessor.stats() for accessor in accessors]

    def clear(self) -> None:
        """Forget every accessor (useful for testing)"""
        with self._lock:
            self._accessors.clear()

    def __contains__(self, name: str) -> bool:
        return self.key_for(name) in self._accessors

    def __len__(self) -> int:
        return len(self._accessors)

    def __repr__(self) -> str:
        return f"SingletonRegistry(environment={self.environment!r}, size={len(self)})"


# 전역 레지스트리 (기본)
default_registry = SingletonRegistry()


def register(name: str, factory: Callable[[], T], **options) -> SingletonAccessor[T]:
    """Register on the default registry"""
    return default_registry.register(name, factory, **options)


def get_instance(name: str) -> Any:
    """Shared Instance from the default registry"""
    return default_registry.get_instance(name)
