"""Route tree data model.

Everything here is frozen: a RouteTree is built once by ApiBuilder and is
only read afterwards, so it can be shared by concurrent requests.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS")


class Versioning(str, Enum):
    """How an API version is expressed. Only PATH changes documented paths."""

    PATH = "path"
    HEADER = "header"
    PARAM = "param"
    ACCEPT_VERSION_HEADER = "accept_version_header"


class ParamKind(str, Enum):
    PATH = "path"
    QUERY = "query"
    BODY = "body"


class Param(BaseModel):
    """A single declared parameter."""

    model_config = ConfigDict(frozen=True)

    name: str
    param_type: str = "String"
    required: bool = False
    description: str = ""
    kind: ParamKind = ParamKind.QUERY

    def as_swagger(self) -> dict:
        return {
            "paramType": self.kind.value,
            "name": self.name,
            "description": self.description,
            "dataType": self.param_type,
            "required": self.required,
        }


class Segment(BaseModel):
    """One path segment: a literal or a named placeholder."""

    model_config = ConfigDict(frozen=True)

    name: str
    param: bool = False


class Mount(BaseModel):
    """A sub-API attached to its parent.

    prefix is where the sub-API is attached; route_prefix is the sub-API's
    own declared prefix and is emitted right after it.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    prefix: tuple[str, ...] = ()
    route_prefix: tuple[str, ...] = ()
    version: tuple[str, ...] = ()
    versioning: Versioning = Versioning.PATH

    @property
    def path_version(self) -> tuple[str, ...]:
        return self.version if self.versioning is Versioning.PATH else ()


class Endpoint(BaseModel):
    """One declared route together with the mounts leading to it.

    chain runs from the root mount to the mount that declares the endpoint.
    """

    model_config = ConfigDict(frozen=True)

    method: str
    segments: tuple[Segment, ...] = ()
    version: tuple[str, ...] = ()
    versioning: Versioning = Versioning.PATH
    description: str = ""
    notes: str | None = None
    parameters: tuple[Param, ...] = ()
    documentation: bool = False
    chain: tuple[Mount, ...] = ()

    @property
    def path_version(self) -> tuple[str, ...]:
        return self.version if self.versioning is Versioning.PATH else ()

    @property
    def template(self) -> str:
        """The local template, e.g. /users/:id."""
        return "/" + "/".join(f":{s.name}" if s.param else s.name for s in self.segments)


class RouteTree(BaseModel):
    """The root mount and every endpoint reachable from it, in declaration order."""

    model_config = ConfigDict(frozen=True)

    root: Mount
    endpoints: tuple[Endpoint, ...] = ()
