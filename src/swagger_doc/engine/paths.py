"""Documented path resolution, resource keys and operation nicknames.

All functions here are pure: the same endpoint always resolves to the same
paths, whatever order endpoints or requests are processed in.
"""

import re

from swagger_doc.tree.base import Endpoint

FORMAT_SUFFIX = ".{format}"
# Nicknames spell the format suffix the way routers declare it
NICKNAME_FORMAT = "(.:format)"
NICKNAME_UNSAFE = re.compile(r"[^A-Za-z0-9_-]")

# Segment kinds produced by _walk
PREFIX = "prefix"
ROUTE_PREFIX = "route_prefix"
VERSION = "version"
LOCAL = "local"


def effective_version(endpoint: Endpoint) -> list[tuple[str, int | None]]:
    """Return each path-embedded version of an endpoint with the mount slot it goes in.

    The innermost declaration wins. Each version is written after the
    outermost mount that declares it, so repeating a version further down
    the chain never duplicates it.
    """
    versions = endpoint.path_version
    if not versions:
        for mount in reversed(endpoint.chain):
            if mount.path_version:
                versions = mount.path_version
                break

    declaring = len(endpoint.chain) - 1 if endpoint.chain else None
    result = []
    for version in versions:
        slot = next(
            (index for index, mount in enumerate(endpoint.chain) if version in mount.path_version),
            declaring,
        )
        result.append((version, slot))
    return result


def _walk(endpoint: Endpoint, version: str | None, slot: int | None) -> list[tuple[str, str]]:
    parts = []
    for index, mount in enumerate(endpoint.chain):
        parts.extend((name, PREFIX) for name in mount.prefix)
        parts.extend((name, ROUTE_PREFIX) for name in mount.route_prefix)
        if version is not None and index == slot:
            parts.append((version, VERSION))
    if version is not None and slot is None:
        parts.append((version, VERSION))
    for segment in endpoint.segments:
        text = "{" + segment.name + "}" if segment.param else segment.name
        parts.append((text, LOCAL))
    return parts


def join_path(parts: list[str], hide_format: bool = False) -> str:
    path = "/" + "/".join(parts)
    if not hide_format:
        path += FORMAT_SUFFIX
    return path


def resolve_paths(endpoint: Endpoint, hide_format: bool = False) -> list[str]:
    """Resolve every absolute documentation path of an endpoint.

    One path per path-embedded version, in declaration order; a single path
    when the endpoint is unversioned.
    """
    versions = effective_version(endpoint) or [(None, None)]
    return [
        join_path([text for text, _ in _walk(endpoint, version, slot)], hide_format)
        for version, slot in versions
    ]


def resource_key(endpoint: Endpoint) -> str | None:
    """The resource an endpoint is documented under.

    This is the first segment that is neither a declared route prefix nor a
    version. None when the endpoint has no such segment.
    """
    version, slot = (effective_version(endpoint) or [(None, None)])[0]
    for text, kind in _walk(endpoint, version, slot):
        if kind in (PREFIX, LOCAL):
            return text.strip("{}")
    return None


def nickname(method: str, path: str) -> str:
    """Build a stable operation id, e.g. GET-something---format- for GET /something.{format}."""
    if path.endswith(FORMAT_SUFFIX):
        path = path[: -len(FORMAT_SUFFIX)] + NICKNAME_FORMAT
    return method.upper() + NICKNAME_UNSAFE.sub("-", path)
