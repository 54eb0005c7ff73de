"""
Base domain model with IDE bridge JSON compatibility.

Reads camelCase wire payloads into snake_case dataclass fields.
All wire-facing domain models should inherit from BaseDomainModel.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, fields
from typing import Any, Dict, Type, TypeVar

T = TypeVar("T", bound="BaseDomainModel")


def to_camel_case(snake_str: str) -> str:
    """
    Convert snake_case to camelCase.

    Examples:
        >>> to_camel_case("file_path")
        'filePath'
        >>> to_camel_case("start_line_offset")
        'startLineOffset'
    """
    components = snake_str.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


@dataclass(frozen=True)
class BaseDomainModel:
    """
    Base class for wire-facing domain models.

    from_json() reads camelCase keys; nested models and enums are converted
    by the subclass through _convert_field().
    """

    @classmethod
    def from_json(cls: Type[T], data: Dict[str, Any]) -> T:
        """
        Deserialize from camelCase JSON to the snake_case model.

        Raises:
            ValueError: If data is not an object or a required field is missing
        """
        if not isinstance(data, dict):
            raise ValueError(f"{cls.__name__} must be a JSON object, got {type(data).__name__}")

        kwargs: Dict[str, Any] = {}

        for field in fields(cls):
            json_key = to_camel_case(field.name)

            if json_key not in data or data[json_key] is None:
                if field.default is not dataclasses.MISSING or field.default_factory is not dataclasses.MISSING:  # type: ignore[misc]
                    continue
                raise ValueError(f"Missing required field: {json_key}")

            kwargs[field.name] = cls._convert_field(field.name, data[json_key])

        return cls(**kwargs)

    @classmethod
    def _convert_field(cls, name: str, value: Any) -> Any:
        """Hook for subclasses to convert nested values. Identity by default."""
        return value
