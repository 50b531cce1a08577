"""CLI entry point for route-docs."""

import json
from pathlib import Path

import click

from route_docs.builder.resource import DocRequest
from route_docs.config import load_config
from route_docs.errors import RouteDocsError
from route_docs.service import DocumentationService
from route_docs.source.loader import load_source
from route_docs.text.i18n import Translator, load_translations


def _build_service(source_path: Path, config_path: Path | None, locale_path: Path | None) -> DocumentationService:
    """Load the source, settings and translations and aggregate the routes."""
    try:
        source = load_source(source_path)
        config = load_config(config_path)
        translator = load_translations(locale_path) if locale_path else Translator()
    except RouteDocsError as e:
        raise click.ClickException(str(e)) from e
    return DocumentationService(source, config, translator)


def _write(document: dict, output: Path | None) -> None:
    text = json.dumps(document, indent=2, ensure_ascii=False)
    if output is None:
        click.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    click.echo(f"Saved {output}")


_source_arg = click.argument("source_path", type=click.Path(exists=True, path_type=Path))
_config_opt = click.option("-c", "--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="YAML documentation settings.")
_locale_opt = click.option("--locale", "locale_path", default=None, type=click.Path(exists=True, path_type=Path), help="YAML translation catalog.")
_base_url_opt = click.option("--base-url", default="", help="Base URL of the documented API.")


@click.group()
def main():
    """route-docs: generate Swagger 1.2 documentation from route definitions."""
    pass


@main.command()
@_source_arg
@_config_opt
@_locale_opt
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output JSON file (default: stdout).")
def listing(source_path: Path, config_path: Path | None, locale_path: Path | None, output: Path | None):
    """Print the resource listing."""
    service = _build_service(source_path, config_path, locale_path)
    try:
        document = service.listing()
    except RouteDocsError as e:
        raise click.ClickException(str(e)) from e
    _write(document, output)


@main.command()
@_source_arg
@click.argument("name")
@_config_opt
@_locale_opt
@_base_url_opt
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output JSON file (default: stdout).")
def resource(source_path: Path, name: str, config_path: Path | None, locale_path: Path | None, base_url: str, output: Path | None):
    """Print the document of a single resource."""
    service = _build_service(source_path, config_path, locale_path)
    try:
        document = service.resource(name, DocRequest(base_url=base_url))
    except RouteDocsError as e:
        raise click.ClickException(str(e)) from e
    _write(document, output)


@main.command()
@_source_arg
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output directory.")
@_config_opt
@_locale_opt
@_base_url_opt
def build(source_path: Path, output: Path, config_path: Path | None, locale_path: Path | None, base_url: str):
    """Write the listing and every resource document to a directory."""
    click.echo(f"Loading {source_path}...")
    service = _build_service(source_path, config_path, locale_path)
    names = service.resource_names()
    click.echo(f"Found {len(names)} resources.")

    request = DocRequest(base_url=base_url)
    try:
        _write(service.listing(), output / "api-docs.json")
        for name in names:
            _write(service.resource(name, request), output / f"{name}.json")
    except RouteDocsError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Done! Generated {len(names) + 1} files in {output}")
