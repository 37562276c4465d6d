"""
Singleton Pattern Implementation
Thread-safe singleton metaclass backed by per-class accessors
"""
import threading
from functools import partial
from typing import Dict

from lazyinit.core.accessor import DoubleCheckedAccessor


class Singleton(type):
    """
    Thread-safe Singleton metaclass

    Usage:
        class MyClass(metaclass=Singleton):
            def __init__(self):
                pass

    Each class gets its own DoubleCheckedAccessor, so classes never wait on
    each other's construction. Arguments of the first call build the
    instance; arguments of later calls are ignored.

    The accessor keeps the first call's arguments. If that construction
    fails, the next call retries with those same arguments, not its own.
    """

    _accessors: Dict[type, DoubleCheckedAccessor] = {}
    _lock: threading.Lock = threading.Lock()

    def __call__(cls, *args, **kwargs):
        """
        Thread-safe singleton instance creation
        """
        accessor = Singleton._accessors.get(cls)
        if accessor is None:
            with Singleton._lock:
                # Double-checked locking on the accessor map
                accessor = Singleton._accessors.get(cls)
                if accessor is None:
                    accessor = DoubleCheckedAccessor(
                        partial(super().__call__, *args, **kwargs),
                        name=cls.__qualname__,
                    )
                    Singleton._accessors[cls] = accessor

        return accessor.get_instance()

    @classmethod
    def clear_instances(mcs):
        """Clear all singleton instances (useful for testing)"""
        with Singleton._lock:
            Singleton._accessors.clear()
