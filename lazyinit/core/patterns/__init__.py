"""
Design Patterns Module
Provides Singleton and Base patterns
"""

from lazyinit.core.patterns.base_model import BaseModel, ImmutableModel, Field
from lazyinit.core.patterns.singleton import Singleton

__all__ = [
    "Singleton",
    "BaseModel",
    "ImmutableModel",
    "Field",
]
