"""CLI entry point for swagger-doc."""

import json
import logging
from pathlib import Path

import click

from swagger_doc.engine.assembler import DocumentAssembler
from swagger_doc.engine.base_path import RequestContext
from swagger_doc.engine.paths import nickname, resolve_paths
from swagger_doc.errors import SwaggerDocError
from swagger_doc.tree.loader import load_definition


def _assembler(definition: Path) -> DocumentAssembler:
    try:
        tree, config = load_definition(definition)
        return DocumentAssembler(tree, config)
    except SwaggerDocError as e:
        raise click.ClickException(str(e)) from e


def _echo_json(data: dict):
    click.echo(json.dumps(data, indent=2))


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
def main(verbose: bool):
    """swagger-doc: render Swagger 1.1 documentation from route tree definitions."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("definition", type=click.Path(exists=True, path_type=Path))
@click.option("--base-url", default="http://localhost", help="URL the documentation is requested from.")
def index(definition: Path, base_url: str):
    """Print the index document."""
    assembler = _assembler(definition)
    try:
        document = assembler.index(RequestContext.from_url(base_url))
    except SwaggerDocError as e:
        raise click.ClickException(str(e)) from e
    _echo_json(document.as_dict())


@main.command()
@click.argument("definition", type=click.Path(exists=True, path_type=Path))
@click.argument("name")
@click.option("--base-url", default="http://localhost", help="URL the documentation is requested from.")
def resource(definition: Path, name: str, base_url: str):
    """Print the document of resource NAME."""
    assembler = _assembler(definition)
    try:
        document = assembler.resource(name, RequestContext.from_url(base_url))
    except SwaggerDocError as e:
        raise click.ClickException(str(e)) from e
    _echo_json(document.as_dict())


@main.command()
@click.argument("definition", type=click.Path(exists=True, path_type=Path))
def paths(definition: Path):
    """List every documented operation with its resolved path and nickname."""
    assembler = _assembler(definition)
    for endpoint in assembler.tree.endpoints:
        for path in resolve_paths(endpoint, assembler.config.hide_format):
            click.echo(f"{endpoint.method:<7} {path}  {nickname(endpoint.method, path)}")
