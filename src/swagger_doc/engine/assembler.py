"""Document assembly.

DocumentAssembler turns a RouteTree and a DocConfig into the index document
and the per-resource documents of the Swagger 1.1 resource listing format.
Each call builds a fresh document from the request it is given.
"""

import logging
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from swagger_doc.config import DocConfig
from swagger_doc.engine.base_path import RequestContext, resolve_base_path
from swagger_doc.engine.notes import NotesRenderer, renderer_for
from swagger_doc.engine.paths import effective_version, join_path, nickname, resolve_paths, resource_key
from swagger_doc.errors import ConfigurationError, ResourceNotFoundError
from swagger_doc.tree.base import Endpoint, Param, ParamKind, RouteTree, Segment

logger = logging.getLogger(__name__)

SWAGGER_VERSION = "1.1"
INDEX_SUMMARY = "Swagger compatible API description"
RESOURCE_SUMMARY = "Swagger compatible API description for specific API"


class _Document(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def as_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class Operation(_Document):
    http_method: str
    nickname: str
    summary: str
    notes: str | None
    parameters: list[dict] = Field(default_factory=list)


class ApiReference(_Document):
    path: str


class ApiDescription(_Document):
    path: str
    operations: list[Operation] = Field(default_factory=list)


class IndexDocument(_Document):
    api_version: str
    swagger_version: str = SWAGGER_VERSION
    base_path: str
    models: dict = Field(default_factory=dict)
    operations: list = Field(default_factory=list)
    apis: list[ApiReference] = Field(default_factory=list)


class ResourceDocument(_Document):
    api_version: str
    swagger_version: str = SWAGGER_VERSION
    base_path: str
    resource_path: str = ""
    apis: list[ApiDescription] = Field(default_factory=list)


RenderErrorHook = Callable[[Endpoint, Exception], None]


class DocumentAssembler:
    """Builds documentation documents for one API."""

    def __init__(
        self,
        tree: RouteTree,
        config: DocConfig | None = None,
        renderer: NotesRenderer | None = None,
        on_render_error: RenderErrorHook | None = None,
    ):
        self.tree = tree
        self.config = config or DocConfig()
        self.renderer = renderer or renderer_for(self.config.markdown)
        self.on_render_error = on_render_error

        self.index_endpoint, self.resource_endpoint = self._documentation_endpoints()
        self.documentation_resource = self.config.mount_segments[0]
        self._resources = self._group_resources()

    def _documentation_endpoints(self) -> tuple[Endpoint, Endpoint]:
        root = self.tree.root
        segments = tuple(Segment(name=s) for s in self.config.mount_segments)
        index = Endpoint(
            method="GET",
            segments=segments,
            versioning=root.versioning,
            description=INDEX_SUMMARY,
            documentation=True,
            chain=(root,),
        )
        resource = Endpoint(
            method="GET",
            segments=segments + (Segment(name="name", param=True),),
            versioning=root.versioning,
            description=RESOURCE_SUMMARY,
            parameters=(Param(name="name", required=True, kind=ParamKind.PATH, description="Resource name"),),
            documentation=True,
            chain=(root,),
        )
        return index, resource

    def _group_resources(self) -> dict[str, list[Endpoint]]:
        groups: dict[str, list[Endpoint]] = {}
        routes: set[tuple[str, str]] = set()
        for endpoint in self.tree.endpoints:
            for path in resolve_paths(endpoint):
                if (endpoint.method, path) in routes:
                    raise ConfigurationError(f"{endpoint.method} {path} is declared more than once")
                routes.add((endpoint.method, path))
            key = resource_key(endpoint)
            if key is None:
                logger.warning(
                    "%s %s has no resource segment and is left out of the documentation",
                    endpoint.method,
                    endpoint.template,
                )
                continue
            if key == self.documentation_resource:
                raise ConfigurationError(
                    f"Resource {key!r} clashes with the documentation mount path {self.config.mount_path!r}"
                )
            groups.setdefault(key, []).append(endpoint)
        logger.debug("Grouped %d endpoints into resources %s", len(self.tree.endpoints), list(groups))
        return groups

    @property
    def resources(self) -> list[str]:
        """Advertised resources, in the order they appear in the index."""
        names = list(self._resources)
        if not self.config.hide_documentation_path:
            names.append(self.documentation_resource)
        return names

    def documentation_routes(self) -> list[tuple[str | None, str, str]]:
        """Routes serving the documentation, without a format suffix.

        One (version, index route, resource route) triple per root path
        version; a single triple with version None for an unversioned root.
        """
        versions = [version for version, _ in effective_version(self.index_endpoint)] or [None]
        index_paths = resolve_paths(self.index_endpoint, hide_format=True)
        resource_paths = resolve_paths(self.resource_endpoint, hide_format=True)
        return list(zip(versions, index_paths, resource_paths))

    def _listing_path(self, resource: str, version: str | None) -> str:
        root = self.tree.root
        parts = [*root.prefix, *root.route_prefix]
        if version:
            parts.append(version)
        parts += [*self.config.mount_segments, resource]
        return join_path(parts, self.config.hide_format)

    def index(self, context: RequestContext, version: str | None = None) -> IndexDocument:
        """Build the index document listing every resource.

        version is the root path version the index is served under; it
        defaults to the first one the root declares.
        """
        root_versions = self.tree.root.path_version
        if version is None:
            version = root_versions[0] if root_versions else None
        elif version not in root_versions:
            raise ValueError(f"{version!r} is not a path version of {self.tree.root.name!r}")
        return IndexDocument(
            api_version=self.config.api_version,
            base_path=resolve_base_path(self.config.base_path, context),
            apis=[ApiReference(path=self._listing_path(name, version)) for name in self.resources],
        )

    def resource(self, name: str, context: RequestContext) -> ResourceDocument:
        """Build the document of one resource.

        Raises ResourceNotFoundError when no advertised endpoint belongs to it.
        """
        if name == self.documentation_resource and not self.config.hide_documentation_path:
            endpoints = [self.resource_endpoint]
        elif name in self._resources:
            endpoints = self._resources[name]
        else:
            raise ResourceNotFoundError(name)

        apis: dict[str, ApiDescription] = {}
        for endpoint in endpoints:
            for path in resolve_paths(endpoint, self.config.hide_format):
                api = apis.setdefault(path, ApiDescription(path=path))
                api.operations.append(self._operation(endpoint, path))

        return ResourceDocument(
            api_version=self.config.api_version,
            base_path=resolve_base_path(self.config.base_path, context),
            apis=list(apis.values()),
        )

    def _operation(self, endpoint: Endpoint, path: str) -> Operation:
        return Operation(
            http_method=endpoint.method,
            nickname=nickname(endpoint.method, path),
            summary=endpoint.description,
            notes=self._render_notes(endpoint),
            parameters=[p.as_swagger() for p in endpoint.parameters],
        )

    def _render_notes(self, endpoint: Endpoint) -> str | None:
        if not endpoint.notes:
            return None
        try:
            return self.renderer.render(endpoint.notes)
        except Exception as e:
            logger.warning("Rendering notes of %s %s failed: %s", endpoint.method, endpoint.template, e)
            if self.on_render_error is not None:
                self.on_render_error(endpoint, e)
            return endpoint.notes
