"""
Accessor Factory

Builds accessors from explicit arguments, falling back to Settings for
anything left unset.
"""
from typing import Callable, Optional, TypeVar, Union

from lazyinit.core.accessor import ACCESSOR_TYPES, FailurePolicy, SingletonAccessor, Strategy
from lazyinit.core.models.accessor_model import AccessorConfig
from lazyinit.core.settings import get_settings

T = TypeVar('T')


def resolve_config(
    name: Optional[str] = None,
    strategy: Optional[Union[Strategy, str]] = None,
    policy: Optional[Union[FailurePolicy, str]] = None,
    retries: Optional[int] = None,
    retry_delay: Optional[float] = None,
    retry_backoff: Optional[float] = None,
) -> AccessorConfig:
    """
    Merge explicit options with Settings defaults

    Raises:
        ValueError: unknown strategy/policy or out-of-range retry options
    """
    settings = get_settings()

    return AccessorConfig(
        name=name,
        strategy=Strategy(strategy if strategy is not None else settings.default_strategy).value,
        policy=FailurePolicy(policy if policy is not None else settings.failure_policy).value,
        retries=retries if retries is not None else settings.construction_retries,
        retry_delay=retry_delay if retry_delay is not None else settings.retry_delay,
        retry_backoff=retry_backoff if retry_backoff is not None else settings.retry_backoff,
        error_dump_dir=settings.error_states_path,
    )


def create_accessor(
    factory: Callable[[], T],
    strategy: Optional[Union[Strategy, str]] = None,
    name: Optional[str] = None,
    policy: Optional[Union[FailurePolicy, str]] = None,
    retries: Optional[int] = None,
    retry_delay: Optional[float] = None,
    retry_backoff: Optional[float] = None,
) -> SingletonAccessor[T]:
    """
    Create an accessor for ``factory``

    Args:
        factory: zero-argument callable building the Shared Instance
        strategy: locked / double_checked / eager (default: Settings.default_strategy)
        name: accessor name (default: factory's qualified name)
        policy: retry / permanent (default: Settings.failure_policy)
        retries: factory retries per attempt (default: Settings.construction_retries)
        retry_delay: initial retry delay in seconds
        retry_backoff: retry delay multiplier

    Returns:
        SingletonAccessor; for the eager strategy the instance already exists

    Raises:
        ConstructionFailed: eager strategy and the factory raised
    """
    config = resolve_config(
        name=name,
        strategy=strategy,
        policy=policy,
        retries=retries,
        retry_delay=retry_delay,
        retry_backoff=retry_backoff,
    )
    accessor_cls = ACCESSOR_TYPES[Strategy(config.strategy)]
    return accessor_cls(factory, **config.accessor_options())


def lazy_singleton(
    factory: Optional[Callable[[], T]] = None,
    **options
):
    """
    Decorator turning a zero-argument function into an accessor

    Example:
        @lazy_singleton
        def get_pool():
            return ConnectionPool(...)

        @lazy_singleton(strategy="locked", policy="permanent")
        def get_client():
            return Client(...)

        pool = get_pool()  # same object on every call
    """
    def decorator(func: Callable[[], T]) -> SingletonAccessor[T]:
        return create_accessor(func, **options)

    if factory is not None:
        return decorator(factory)
    return decorator
