"""CLI entry point for wadl-segment."""

from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname

import click

from wadl_segment.config import LOG_LEVELS, Settings
from wadl_segment.errors import WadlSegmentError, InvalidDescriptorError
from wadl_segment.logger import configure_logging
from wadl_segment.parser.base import Param, WadlDocument
from wadl_segment.parser.values import load_values, parse_pairs
from wadl_segment.parser.wadl import parse_wadl
from wadl_segment.segment.path_segment import PathSegment
from wadl_segment.segment.resolver import ElementResolver


def _load_document(uri: str) -> WadlDocument | None:
    """Load a document referenced from another one. Only local files are read."""
    parsed = urlparse(uri)
    if parsed.scheme not in ("", "file"):
        return None
    path = Path(url2pathname(parsed.path))
    if not path.exists():
        raise InvalidDescriptorError(f"Referenced WADL document not found: {path}", file=uri)
    return parse_wadl(path)


def _load(doc_path: Path) -> tuple[WadlDocument, ElementResolver]:
    doc = parse_wadl(doc_path)
    resolver = ElementResolver(loader=_load_document)
    resolver.add_document(doc)
    return doc, resolver


def _describe(params: tuple[Param, ...]) -> str:
    if not params:
        return "-"
    labels = []
    for p in params:
        label = p.name
        if p.required is True:
            label += "*"
        if p.synthetic:
            label += "~"
        labels.append(label)
    return ", ".join(labels)


def _echo_segment(title: str, segment: PathSegment) -> None:
    click.echo(title)
    if segment.template is not None:
        click.echo(f"  template: {segment.template}")
        click.echo(f"  template params: {_describe(segment.template_parameters)}")
    click.echo(f"  matrix params: {_describe(segment.matrix_parameters)}")
    click.echo(f"  query params: {_describe(segment.query_parameters)}")
    click.echo(f"  header params: {_describe(segment.header_parameters)}")


@click.group()
@click.option("--log-level", default=None, type=click.Choice(list(LOG_LEVELS), case_sensitive=False), help="Override WADL_SEGMENT_LOG_LEVEL.")
def main(log_level: str | None):
    """wadl-segment — inspect and render WADL resource path segments."""
    try:
        settings = Settings.from_env()
        if log_level:
            settings = Settings(log_level=log_level, log_file=settings.log_file)
    except ValueError as e:
        raise click.ClickException(f"Invalid settings: {e}") from e
    configure_logging(settings.log_level, settings.log_file)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def segments(doc_path: Path):
    """List the path segment of every resource and resource type."""
    try:
        doc, resolver = _load(doc_path)
        for full_path, resource in doc.iter_resources():
            segment = PathSegment.from_resource(resource, doc.uri, resolver)
            _echo_segment(full_path or "/", segment)
        for resource_type in doc.resource_types:
            segment = PathSegment.from_resource_type(resource_type, doc.uri, resolver)
            _echo_segment(f"resource_type {resource_type.id}", segment)
    except WadlSegmentError as e:
        raise click.ClickException(str(e)) from e


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("target")
@click.option("-p", "--param", "pairs", multiple=True, help="Parameter value as name=value. Repeatable.")
@click.option("--values", "values_path", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="YAML file mapping parameter names to values.")
def render(doc_path: Path, target: str, pairs: tuple[str, ...], values_path: Path | None):
    """Render the path segment of TARGET (a resource id or path) with values."""
    try:
        values = load_values(values_path) if values_path else {}
        values.update(parse_pairs(pairs))

        doc, resolver = _load(doc_path)
        resource = doc.find_resource(target)
        if resource is None:
            raise click.ClickException(f"No resource matching {target!r} in {doc_path}")

        segment = PathSegment.from_resource(resource, doc.uri, resolver)
        click.echo(segment.evaluate(values))
    except (WadlSegmentError, ValueError) as e:
        raise click.ClickException(str(e)) from e
