"""
Enhanced BaseModel with validation and serialization
Extends Pydantic BaseModel with additional functionality
"""
from pydantic import (
    BaseModel as PydanticBaseModel,
    ConfigDict,
    Field
)
from typing import Dict, Any, Optional
import json


class BaseModel(PydanticBaseModel):
    """
    Enhanced BaseModel with common functionality

    Features:
    - JSON serialization
    - Dictionary conversion
    - Validation
    """

    model_config = ConfigDict(
        # Allow arbitrary types (factories, paths, ...)
        arbitrary_types_allowed=True,
        # Validate on assignment
        validate_assignment=True,
        # Use enum values
        use_enum_values=True,
        # Populate by name
        populate_by_name=True,
        extra="forbid",
    )

    def to_dict(self, exclude_none: bool = True) -> Dict[str, Any]:
        """
        Convert model to dictionary

        Args:
            exclude_none: Exclude None values

        Returns:
            Dictionary representation
        """
        return self.model_dump(
            exclude_none=exclude_none,
            mode="python",
        )

    def to_json(self, exclude_none: bool = True, indent: Optional[int] = None) -> str:
        """
        Convert model to JSON string

        Args:
            exclude_none: Exclude None values
            indent: JSON indentation level

        Returns:
            JSON string
        """
        data = self.to_dict(exclude_none=exclude_none)
        return json.dumps(data, indent=indent, default=str)

    def __repr__(self) -> str:
        """String representation"""
        fields = ", ".join(
            f"{k}={repr(v)}"
            for k, v in self.to_dict(exclude_none=True).items()
            if not k.startswith("_")
        )
        return f"{self.__class__.__name__}({fields})"

    def __str__(self) -> str:
        """User-friendly string representation"""
        return self.to_json(indent=2)


class ImmutableModel(BaseModel):
    """
    Immutable BaseModel

    Cannot be modified after creation
    """

    model_config = ConfigDict(
        frozen=True,  # Make immutable
        arbitrary_types_allowed=True,
        validate_assignment=True,
        use_enum_values=True,
        populate_by_name=True,
        extra="forbid",
    )
