"""
Pydantic Models for lazyinit

    from lazyinit.core.models import AccessorConfig, AccessorStats
"""

from .accessor_model import (
    AccessorConfig,
    AccessorStats
)

__all__ = [
    "AccessorConfig",
    "AccessorStats",
]
