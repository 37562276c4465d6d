"""
Lazy Singleton Accessor

Produces exactly one shared instance of a resource on first demand and
hands the same instance to every later caller, from any thread.

Strategies:
    LockedAccessor         every call takes the lock
    DoubleCheckedAccessor  unlocked read, lock + re-check only on a miss
    EagerAccessor          constructed when the accessor is created

State machine:
    UNINITIALIZED -> INITIALIZING   (only while holding the lock)
    INITIALIZING  -> READY          (instance published)
    INITIALIZING  -> UNINITIALIZED  (failure, RETRY policy)
    INITIALIZING  -> FAILED         (failure, PERMANENT policy)
"""
import threading
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Generic, Optional, TypeVar, Union

from lazyinit.core.exceptions import CircularInitialization, ConstructionFailed
from lazyinit.core.models.accessor_model import AccessorStats
from lazyinit.utils.error_handler import ErrorContext, retry_on_failure
from lazyinit.utils.logger import default_logger as logger, log_with_context

T = TypeVar('T')

# Marks an empty slot, so a factory may legitimately return None
_UNSET: Any = object()


class InitState(str, Enum):
    """Initialization state of an accessor"""
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


class Strategy(str, Enum):
    """How an accessor guards construction"""
    LOCKED = "locked"
    DOUBLE_CHECKED = "double_checked"
    EAGER = "eager"


class FailurePolicy(str, Enum):
    """What happens after the factory raises"""
    # failure goes to the caller, the next caller constructs again
    RETRY = "retry"
    # failure is remembered and re-raised to every later caller
    PERMANENT = "permanent"


class SingletonAccessor(ABC, Generic[T]):
    """
    Base class of all accessors

    Subclasses only decide *when* the lock is taken. Construction, state
    transitions and publication of the instance live here and always run
    with ``self._lock`` held.

    Publication rule: ``self._instance`` is assigned exactly once, after the
    factory has returned, while holding the lock. Readers either take the
    same lock or read that single reference, so whoever sees the instance
    also sees everything the factory wrote before returning it.
    """

    strategy: Strategy

    def __init__(
        self,
        factory: Callable[[], T],
        name: Optional[str] = None,
        policy: Union[FailurePolicy, str] = FailurePolicy.RETRY,
        retries: int = 0,
        retry_delay: float = 0.1,
        retry_backoff: float = 2.0,
        error_dump_dir: Optional[Union[str, Path]] = None,
    ):
        """
        Args:
            factory: zero-argument callable building the Shared Instance
            name: accessor name used in logs, errors and registry stats
            policy: FailurePolicy applied when the factory raises
            retries: extra factory calls inside one construction attempt
            retry_delay: initial delay between those calls (seconds)
            retry_backoff: delay multiplier per retry
            error_dump_dir: if set, failed constructions dump a JSON report here
        """
        if not callable(factory):
            raise TypeError(f"factory must be callable, got {factory!r}")

        self.factory = factory
        self.name = name or getattr(factory, "__qualname__", None) or repr(factory)
        self.policy = FailurePolicy(policy)
        self.error_dump_dir = Path(error_dump_dir) if error_dump_dir is not None else None

        if retries > 0:
            self._build = retry_on_failure(
                max_retries=retries, delay=retry_delay, backoff=retry_backoff
            )(factory)
        else:
            self._build = factory

        # Re-entrant so that a factory calling back into its own accessor
        # is reported instead of deadlocking
        self._lock = threading.RLock()
        self._instance: Any = _UNSET
        self._state = InitState.UNINITIALIZED
        self._error: Optional[BaseException] = None

        self._attempts = 0
        self._constructions = 0
        self._failures = 0

    @abstractmethod
    def get_instance(self) -> T:
        """Return the Shared Instance, constructing it on first use"""
        pass

    def __call__(self) -> T:
        return self.get_instance()

    @property
    def state(self) -> InitState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._instance is not _UNSET

    def stats(self) -> AccessorStats:
        """Snapshot of state and counters"""
        with self._lock:
            return AccessorStats(
                name=self.name,
                strategy=self.strategy.value,
                policy=self.policy.value,
                state=self._state.value,
                attempts=self._attempts,
                constructions=self._constructions,
                failures=self._failures,
                last_error=repr(self._error) if self._error is not None else None,
            )

    def _get_locked(self) -> T:
        """Check and construct; caller must hold ``self._lock``"""
        instance = self._instance
        if instance is not _UNSET:
            return instance

        if self._state is InitState.FAILED:
            raise ConstructionFailed(self.name, self._error) from self._error

        # Other threads block on the lock, so only the constructing
        # thread itself can get here while INITIALIZING
        if self._state is InitState.INITIALIZING:
            raise CircularInitialization(self.name)

        return self._construct()

    def _construct(self) -> T:
        """Run the factory and publish the result; caller must hold ``self._lock``"""
        self._state = InitState.INITIALIZING
        self._attempts += 1

        log_with_context(
            logger, 'debug', f"Constructing '{self.name}'",
            strategy=self.strategy.value,
            attempt=self._attempts,
            thread=threading.current_thread().name,
        )

        try:
            with ErrorContext(
                self._snapshot(),
                stage=self.name,
                dump_on_error=self.error_dump_dir is not None,
                output_dir=self.error_dump_dir or ".",
            ):
                instance = self._build()
        except Exception as e:
            self._failures += 1
            self._error = e
            if self.policy is FailurePolicy.PERMANENT:
                self._state = InitState.FAILED
            else:
                self._state = InitState.UNINITIALIZED

            log_with_context(
                logger, 'warning', f"Construction of '{self.name}' failed",
                error=repr(e),
                policy=self.policy.value,
                state=self._state.value,
            )
            raise ConstructionFailed(self.name, e) from e
        except BaseException:
            # KeyboardInterrupt, SystemExit: not a construction failure,
            # leave the slot free for the next caller and re-raise as is
            self._state = InitState.UNINITIALIZED
            raise

        self._constructions += 1
        self._error = None
        # publish
        self._instance = instance
        self._state = InitState.READY

        log_with_context(
            logger, 'info', f"Constructed '{self.name}'",
            strategy=self.strategy.value,
            type=type(instance).__name__,
        )
        return instance

    def _snapshot(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "strategy": self.strategy.value,
            "policy": self.policy.value,
            "state": self._state.value,
            "attempts": self._attempts,
            "failures": self._failures,
            "factory": repr(self.factory),
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(name={self.name}, "
            f"state={self._state.value}, policy={self.policy.value})"
        )


class LockedAccessor(SingletonAccessor[T]):
    """
    Full mutual exclusion

    Correct and simple, but every call is serialized on the lock even after
    the instance exists.
    """

    strategy = Strategy.LOCKED

    def get_instance(self) -> T:
        with self._lock:
            return self._get_locked()


class DoubleCheckedAccessor(SingletonAccessor[T]):
    """
    Guarded double-check

    Fast path is a single unlocked read of the published reference. On a
    miss the lock is taken and the slot is checked again, because another
    thread may have finished construction while this one was waiting.
    """

    strategy = Strategy.DOUBLE_CHECKED

    def get_instance(self) -> T:
        instance = self._instance
        if instance is not _UNSET:
            return instance

        with self._lock:
            return self._get_locked()


class EagerAccessor(SingletonAccessor[T]):
    """
    Eager initialization

    The factory runs inside the accessor's constructor, before the accessor
    can be shared with other threads. A failing factory makes the
    constructor raise ConstructionFailed.
    """

    strategy = Strategy.EAGER

    def __init__(self, factory: Callable[[], T], **kwargs):
        super().__init__(factory, **kwargs)
        with self._lock:
            self._construct()

    def get_instance(self) -> T:
        return self._instance


ACCESSOR_TYPES = {
    Strategy.LOCKED: LockedAccessor,
    Strategy.DOUBLE_CHECKED: DoubleCheckedAccessor,
    Strategy.EAGER: EagerAccessor,
}
