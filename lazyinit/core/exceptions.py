"""
Error types raised by accessors and the registry
"""
from typing import Optional


class LazyInitError(Exception):
    """Base class for all lazyinit errors"""
    pass


class ConstructionFailed(LazyInitError):
    """
    Building the Shared Instance raised

    The original exception is chained as ``__cause__`` and kept in ``cause``.
    """

    def __init__(self, name: str, cause: Optional[BaseException] = None):
        self.name = name
        self.cause = cause
        super().__init__(f"Construction of '{name}' failed: {cause!r}")


class CircularInitialization(LazyInitError):
    """The factory asked for the instance it is currently building"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"'{name}' requested itself during construction")


class UnknownSingleton(LazyInitError, KeyError):
    """No accessor registered under the key"""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"No singleton registered under '{key}'")

    def __str__(self) -> str:
        return self.args[0]


class AlreadyRegistered(LazyInitError, ValueError):
    """An accessor already exists under the key"""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"A singleton is already registered under '{key}'")
