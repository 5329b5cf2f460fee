"""Route tree builder.

An ApiBuilder collects endpoints and mounted sub-APIs while an API is being
defined; build() validates the whole graph and returns a frozen RouteTree.
"""

import logging
import re

from swagger_doc.errors import ConfigurationError
from swagger_doc.tree.base import (
    HTTP_METHODS,
    Endpoint,
    Mount,
    Param,
    ParamKind,
    RouteTree,
    Segment,
    Versioning,
)

logger = logging.getLogger(__name__)

VERSION_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")
PARAM_PATTERN = re.compile(r"^(?::(\w+)|\{(\w+)\})$")
LITERAL_PATTERN = re.compile(r"^[A-Za-z0-9._~!$&'()*+,;=@-]+$")


def parse_template(path: str) -> tuple[Segment, ...]:
    """Split a path template into segments. Both :id and {id} mark a placeholder."""
    segments = []
    for part in path.split("/"):
        if not part:
            continue
        match = PARAM_PATTERN.match(part)
        if match:
            segments.append(Segment(name=match.group(1) or match.group(2), param=True))
        elif LITERAL_PATTERN.match(part):
            segments.append(Segment(name=part))
        else:
            raise ConfigurationError(f"Malformed path segment {part!r} in {path!r}")
    return tuple(segments)


def _literal_segments(path: str) -> tuple[str, ...]:
    segments = parse_template(path)
    if any(s.param for s in segments):
        raise ConfigurationError(f"Prefix {path!r} may not contain placeholders")
    return tuple(s.name for s in segments)


def _normalize_version(version: str | list[str] | tuple[str, ...] | None) -> tuple[str, ...]:
    if version is None:
        return ()
    versions = (version,) if isinstance(version, str) else tuple(version)
    for v in versions:
        if not isinstance(v, str) or not VERSION_PATTERN.match(v):
            raise ConfigurationError(f"Malformed version declaration: {v!r}")
    return versions


def _normalize_versioning(versioning: str | Versioning) -> Versioning:
    try:
        return Versioning(versioning)
    except ValueError:
        raise ConfigurationError(f"Unknown versioning strategy: {versioning!r}") from None


class ApiBuilder:
    """Declares the routes of one API and the sub-APIs mounted under it."""

    def __init__(
        self,
        name: str = "root",
        route_prefix: str = "",
        version: str | list[str] | None = None,
        versioning: str | Versioning = Versioning.PATH,
    ):
        self.name = name
        self.route_prefix = _literal_segments(route_prefix)
        self.version = _normalize_version(version)
        self.versioning = _normalize_versioning(versioning)
        self._endpoints: list[dict] = []
        self._mounts: list[tuple[ApiBuilder, tuple[str, ...]]] = []

    def add_endpoint(
        self,
        method: str,
        path: str,
        description: str = "",
        notes: str | None = None,
        parameters: list[Param] | None = None,
        version: str | list[str] | None = None,
        versioning: str | Versioning | None = None,
    ) -> "ApiBuilder":
        method = method.upper()
        if method not in HTTP_METHODS:
            raise ConfigurationError(f"Unsupported HTTP method: {method!r}")

        endpoint_version = _normalize_version(version)
        segments = parse_template(path)
        for segment in segments:
            if segment.param and segment.name == "version":
                raise ConfigurationError(f"{path!r} declares a version placeholder; use version= instead")
            if not segment.param and segment.name in endpoint_version + self.version:
                raise ConfigurationError(f"{path!r} hard-codes version {segment.name!r}")

        self._endpoints.append({
            "method": method,
            "segments": segments,
            "version": endpoint_version,
            "versioning": _normalize_versioning(versioning or self.versioning),
            "description": description,
            "notes": notes or None,
            "parameters": _with_path_params(segments, parameters or []),
        })
        return self

    def get(self, path: str, description: str = "", **kwargs) -> "ApiBuilder":
        return self.add_endpoint("GET", path, description, **kwargs)

    def post(self, path: str, description: str = "", **kwargs) -> "ApiBuilder":
        return self.add_endpoint("POST", path, description, **kwargs)

    def put(self, path: str, description: str = "", **kwargs) -> "ApiBuilder":
        return self.add_endpoint("PUT", path, description, **kwargs)

    def patch(self, path: str, description: str = "", **kwargs) -> "ApiBuilder":
        return self.add_endpoint("PATCH", path, description, **kwargs)

    def delete(self, path: str, description: str = "", **kwargs) -> "ApiBuilder":
        return self.add_endpoint("DELETE", path, description, **kwargs)

    def mount(self, child: "ApiBuilder", prefix: str = "") -> "ApiBuilder":
        """Attach child under this API at prefix."""
        if not isinstance(child, ApiBuilder):
            raise ConfigurationError(f"Can only mount an ApiBuilder, got {type(child).__name__}")
        self._mounts.append((child, _literal_segments(prefix)))
        return self

    def build(self) -> RouteTree:
        """Validate the mount graph and freeze it into a RouteTree."""
        root = self._as_mount(())
        endpoints: list[Endpoint] = []
        self._collect((root,), [self], set(), endpoints)
        logger.debug("Built route tree %r with %d endpoints", self.name, len(endpoints))
        return RouteTree(root=root, endpoints=tuple(endpoints))

    def _as_mount(self, prefix: tuple[str, ...]) -> Mount:
        return Mount(
            name=self.name,
            prefix=prefix,
            route_prefix=self.route_prefix,
            version=self.version,
            versioning=self.versioning,
        )

    def _collect(
        self,
        chain: tuple[Mount, ...],
        stack: list["ApiBuilder"],
        seen: set[int],
        out: list[Endpoint],
    ) -> None:
        seen.add(id(self))
        for fields in self._endpoints:
            endpoint = Endpoint(chain=chain, **fields)
            _check_version_literals(endpoint)
            out.append(endpoint)

        for child, prefix in self._mounts:
            if any(child is s for s in stack):
                raise ConfigurationError(f"Mount cycle: {child.name!r} is mounted inside itself")
            if id(child) in seen:
                raise ConfigurationError(f"{child.name!r} is mounted more than once")
            child._collect(chain + (child._as_mount(prefix),), stack + [child], seen, out)


def _with_path_params(segments: tuple[Segment, ...], parameters: list[Param]) -> tuple[Param, ...]:
    """Document placeholders that were not declared explicitly as required path params."""
    declared = {p.name for p in parameters}
    implicit = [
        Param(name=s.name, required=True, kind=ParamKind.PATH)
        for s in segments
        if s.param and s.name not in declared
    ]
    return tuple(implicit + list(parameters))


def _check_version_literals(endpoint: Endpoint) -> None:
    """Reject templates that hard-code a version declared anywhere on their mount chain."""
    declared = set(endpoint.version)
    for mount in endpoint.chain:
        declared.update(mount.version)
    for segment in endpoint.segments:
        if not segment.param and segment.name in declared:
            raise ConfigurationError(f"{endpoint.template!r} hard-codes version {segment.name!r}")
