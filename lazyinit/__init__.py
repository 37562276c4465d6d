"""
lazyinit - thread-safe lazy singletons

    from lazyinit import lazy_singleton

    @lazy_singleton
    def get_pool():
        return ConnectionPool(...)

    pool = get_pool()
"""

# patterns first, accessor models are built on patterns.base_model
from lazyinit.core.patterns.singleton import Singleton
from lazyinit.core.exceptions import (
    LazyInitError,
    ConstructionFailed,
    CircularInitialization,
    UnknownSingleton,
    AlreadyRegistered,
)
from lazyinit.core.accessor import (
    InitState,
    Strategy,
    FailurePolicy,
    SingletonAccessor,
    LockedAccessor,
    DoubleCheckedAccessor,
    EagerAccessor,
)
from lazyinit.core.settings import Settings, get_settings
from lazyinit.core.factory import create_accessor, lazy_singleton
from lazyinit.core.registry import (
    SingletonRegistry,
    default_registry,
    environment_key,
    get_instance,
    register,
)

__version__ = "0.1.0"

__all__ = [
    "LazyInitError",
    "ConstructionFailed",
    "CircularInitialization",
    "UnknownSingleton",
    "AlreadyRegistered",
    "InitState",
    "Strategy",
    "FailurePolicy",
    "SingletonAccessor",
    "LockedAccessor",
    "DoubleCheckedAccessor",
    "EagerAccessor",
    "Singleton",
    "Settings",
    "get_settings",
    "create_accessor",
    "lazy_singleton",
    "SingletonRegistry",
    "default_registry",
    "environment_key",
    "get_instance",
    "register",
]
