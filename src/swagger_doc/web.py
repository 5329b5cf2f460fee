"""Serve an API's documentation from a FastAPI app.

Routes registered for the default config:
    - `/swagger_doc` and `/swagger_doc.{format}`: the index document.
    - `/swagger_doc/{name}` and `/swagger_doc/{name}.{format}`: one resource document.

Only the json format is served. With a custom mount_path nothing is
registered under the default path.
"""

import logging

from fastapi import APIRouter, FastAPI, HTTPException, Request

from swagger_doc.config import DocConfig
from swagger_doc.engine.assembler import DocumentAssembler
from swagger_doc.engine.base_path import RequestContext
from swagger_doc.errors import ResourceNotFoundError
from swagger_doc.tree.base import RouteTree

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("json",)


def request_context(request: Request) -> RequestContext:
    """Describe the inbound request; rebuilt for every request."""
    return RequestContext(
        scheme=request.url.scheme,
        host=request.url.hostname or "localhost",
        port=request.url.port,
        request=request,
    )


def _check_format(fmt: str) -> None:
    if fmt not in SUPPORTED_FORMATS:
        raise HTTPException(status_code=404, detail=f"Unsupported format: {fmt}")


def documentation_router(assembler: DocumentAssembler) -> APIRouter:
    router = APIRouter()

    def index_for(version: str | None):
        def index(request: Request) -> dict:
            return assembler.index(request_context(request), version).as_dict()

        def index_with_format(request: Request, fmt: str) -> dict:
            _check_format(fmt)
            return index(request)

        return index, index_with_format

    def resource(request: Request, name: str) -> dict:
        try:
            return assembler.resource(name, request_context(request)).as_dict()
        except ResourceNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e)) from e

    def resource_with_format(request: Request, name: str, fmt: str) -> dict:
        _check_format(fmt)
        return resource(request, name)

    for version, index_path, resource_path in assembler.documentation_routes():
        index, index_with_format = index_for(version)
        # Suffixed routes first so {name} does not swallow the format
        router.add_api_route(index_path + ".{fmt}", index_with_format, methods=["GET"], include_in_schema=False)
        router.add_api_route(index_path, index, methods=["GET"], include_in_schema=False)
        router.add_api_route(resource_path + ".{fmt}", resource_with_format, methods=["GET"], include_in_schema=False)
        router.add_api_route(resource_path, resource, methods=["GET"], include_in_schema=False)
        logger.debug("Serving documentation at %s", index_path)
    return router


def add_swagger_documentation(
    app: FastAPI,
    tree: RouteTree,
    config: DocConfig | None = None,
    **assembler_options,
) -> DocumentAssembler:
    """Attach documentation routes for tree to app and return the assembler behind them."""
    assembler = DocumentAssembler(tree, config, **assembler_options)
    app.include_router(documentation_router(assembler))
    return assembler
