"""YAML route tree definitions.

A definition file holds an `api` mapping (endpoints plus nested mounts) and
an optional `documentation` mapping with DocConfig options.
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from swagger_doc.config import DocConfig
from swagger_doc.errors import ConfigurationError
from swagger_doc.tree.base import Param, RouteTree
from swagger_doc.tree.builder import ApiBuilder


def load_definition(file_path: Path) -> tuple[RouteTree, DocConfig]:
    """Load a definition file into a RouteTree and its DocConfig."""
    text = file_path.read_text(encoding="utf-8")
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"{file_path}: invalid YAML: {e}") from e

    if not isinstance(doc, dict) or not isinstance(doc.get("api"), dict):
        raise ConfigurationError(f"{file_path}: expected a mapping with an 'api' section")

    options = dict(doc.get("documentation") or {})
    if "api_version" in options:
        options["api_version"] = _scalar(options["api_version"])
    config = DocConfig.create(**options)
    tree = parse_api(doc["api"]).build()
    return tree, config


def parse_api(data: dict, default_name: str = "root") -> ApiBuilder:
    """Turn one `api` mapping, and its mounts, into an ApiBuilder."""
    api = ApiBuilder(
        name=data.get("name", default_name),
        route_prefix=data.get("prefix", ""),
        version=_versions(data.get("version")),
        versioning=data.get("versioning", "path"),
    )

    for ep in data.get("endpoints", []):
        if "method" not in ep or "path" not in ep:
            raise ConfigurationError(f"Endpoint in {api.name!r} needs a method and a path: {ep!r}")
        api.add_endpoint(
            ep["method"],
            ep["path"],
            description=ep.get("description", ""),
            notes=ep.get("notes"),
            parameters=_parse_parameters(ep.get("parameters", [])),
            version=_versions(ep.get("version")),
            versioning=ep.get("versioning"),
        )

    for index, mount in enumerate(data.get("mounts", [])):
        if not isinstance(mount.get("api"), dict):
            raise ConfigurationError(f"Mount #{index} of {api.name!r} has no 'api' section")
        child = parse_api(mount["api"], default_name=f"{api.name}.{index}")
        api.mount(child, mount.get("prefix", ""))

    return api


def _parse_parameters(params: list[dict]) -> list[Param]:
    result = []
    for p in params:
        try:
            result.append(
                Param(
                    name=p["name"],
                    param_type=p.get("type", "String"),
                    required=p.get("required", False),
                    description=p.get("description", ""),
                    kind=p.get("kind", "query"),
                )
            )
        except (KeyError, ValidationError) as e:
            raise ConfigurationError(f"Malformed parameter {p!r}: {e}") from e
    return result


def _scalar(value):
    """YAML reads unquoted 0.1 or 2 as numbers; versions are always strings."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _versions(value):
    if isinstance(value, list):
        return [_scalar(v) for v in value]
    return _scalar(value)
