"""Documentation config: how one API's documentation is published."""

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from swagger_doc.engine.base_path import BasePath, DynamicBasePath, LiteralBasePath
from swagger_doc.errors import ConfigurationError

DEFAULT_MOUNT_PATH = "/swagger_doc"
DEFAULT_API_VERSION = "0.1"


class DocConfig(BaseModel):
    """Immutable presentation policy for one API.

    base_path may be given as a string, a function of the RequestContext or
    None (derive from the request); it is stored as a BasePath variant.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="forbid")

    api_version: str = DEFAULT_API_VERSION
    mount_path: str = DEFAULT_MOUNT_PATH
    hide_documentation_path: bool = False
    hide_format: bool = False
    base_path: BasePath | None = None
    markdown: bool = False

    @field_validator("mount_path")
    @classmethod
    def _check_mount_path(cls, value: str) -> str:
        value = value.rstrip("/")
        if not value.startswith("/"):
            raise ValueError("mount_path must start with '/'")
        if any(c in value for c in ":{}()"):
            raise ValueError("mount_path may not contain placeholders")
        if "//" in value:
            raise ValueError("mount_path may not contain empty segments")
        return value

    @field_validator("base_path", mode="before")
    @classmethod
    def _wrap_base_path(cls, value: Any) -> Any:
        if value is None or isinstance(value, (LiteralBasePath, DynamicBasePath)):
            return value
        if isinstance(value, str):
            return LiteralBasePath(value=value)
        if callable(value):
            return DynamicBasePath(func=value)
        raise ValueError(f"base_path must be a string or a callable, got {type(value).__name__}")

    @property
    def mount_segments(self) -> list[str]:
        return [s for s in self.mount_path.split("/") if s]

    @classmethod
    def create(cls, **options: Any) -> "DocConfig":
        """Build a config, reporting invalid options as a ConfigurationError."""
        try:
            return cls(**options)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid documentation config: {e}") from e
