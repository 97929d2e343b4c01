"""Shared base types for registry result models."""

import enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RegistryKind(str, enum.Enum):
    """Supported package registries."""

    NPM = "npm"
    JSR = "jsr"
    DENO = "deno"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Union[str, "RegistryKind", None]) -> Optional["RegistryKind"]:
        """Return the matching kind, or None for empty or unrecognised input."""
        if value is None or value == "":
            return None
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class ResultModel(BaseModel):
    """Base for every value returned across the tool boundary.

    Field names are snake_case in Python and camelCase on the wire.
    Instances are immutable once built.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        use_enum_values=False,
    )

    def to_payload(self) -> Dict[str, Any]:
        """Serialize for the structured channel."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
