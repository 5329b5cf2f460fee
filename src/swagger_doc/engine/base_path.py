"""Base path resolution.

The base path is recomputed for every documentation request, from either a
fixed string, a function of the request, or the request itself.
"""

from collections.abc import Callable
from typing import Any
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict

from swagger_doc.errors import BasePathError

DEFAULT_PORTS = {"http": 80, "https": 443}


class RequestContext(BaseModel):
    """What a documentation request knows about where it was received."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    scheme: str = "http"
    host: str = "localhost"
    port: int | None = None
    request: Any = None

    @property
    def base_url(self) -> str:
        """scheme://host, plus :port unless it is the scheme's default port."""
        url = f"{self.scheme}://{self.host}"
        if self.port is not None and self.port != DEFAULT_PORTS.get(self.scheme):
            url += f":{self.port}"
        return url

    @classmethod
    def from_url(cls, url: str, request: Any = None) -> "RequestContext":
        parts = urlsplit(url)
        return cls(
            scheme=parts.scheme or "http",
            host=parts.hostname or "localhost",
            port=parts.port,
            request=request,
        )


class LiteralBasePath(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: str


class DynamicBasePath(BaseModel):
    """A base path computed from the RequestContext of each request."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    func: Callable[[RequestContext], str]


BasePath = LiteralBasePath | DynamicBasePath


def resolve_base_path(base_path: BasePath | None, context: RequestContext) -> str:
    """Resolve the basePath reported for one request."""
    match base_path:
        case LiteralBasePath(value=value):
            return value
        case DynamicBasePath(func=func):
            result = func(context)
            if not isinstance(result, str):
                raise BasePathError(f"Dynamic base path returned {type(result).__name__}, expected str")
            return result
        case None:
            return context.base_url
    raise BasePathError(f"Unsupported base path: {base_path!r}")
