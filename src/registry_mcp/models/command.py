"""Package manager command models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .base import ResultModel


class CommandOptions(BaseModel):
    """Common input for command generation; accepts camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    # Kept as a raw string so an unsupported value can be reported, not rejected.
    registry: Optional[str] = None
    workspace: Optional[str] = None


class InstallOptions(CommandOptions):
    package_name: str
    version: Optional[str] = None
    dev: bool = False


class RemoveOptions(CommandOptions):
    package_name: str


class UpdateOptions(CommandOptions):
    package_name: Optional[str] = None
    latest: bool = False


class CommandResult(ResultModel):
    """A synthesized shell command. Nothing is ever executed."""

    success: bool
    message: str
    registry: str
    command: Optional[str] = Field(None, description="Literal shell command")
    error: Optional[str] = None
