"""Entry point: python -m snippetgen

Reads an OpenAPI document (JSON or YAML) and prints request descriptors or
code snippets as JSON.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import click
import yaml

from .config import Settings
from .errors import SnippetGenError
from .har import HarBuilder
from .loader import load_spec
from .snippets import get_endpoint_snippets, get_snippets
from .targets import available_targets


def _load(doc_path: Path) -> dict[str, Any]:
    try:
        spec = load_spec(doc_path)
    except (ValueError, yaml.YAMLError) as exc:
        raise click.ClickException(f"Cannot parse {doc_path}: {exc}") from exc
    if not isinstance(spec, dict):
        raise click.ClickException(f"{doc_path} does not contain an OpenAPI document")
    return spec


def _echo_json(ctx: click.Context, value: Any) -> None:
    settings: Settings = ctx.obj
    click.echo(json.dumps(value, indent=settings.indent, ensure_ascii=False))


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log resolution steps to stderr.")
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """snippetgen: code snippets for every operation of an OpenAPI document."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = Settings.from_env()


@main.command()
def targets():
    """List snippet languages and their libraries (* marks the default)."""
    for target in available_targets():
        clients = ", ".join(
            f"{c['key']}*" if c["key"] == target["default"] else c["key"]
            for c in target["clients"]
        )
        click.echo(f"{target['key']} ({target['title']}): {clients}")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--path", "pathname", default=None, help="Only this path.")
@click.option("--method", default=None, help="Only this method (requires --path).")
@click.pass_context
def har(ctx: click.Context, doc_path: Path, pathname: str | None, method: str | None):
    """Print HAR request descriptors as JSON."""
    if method and not pathname:
        raise click.UsageError("--method requires --path")

    builder = HarBuilder(_load(doc_path))
    try:
        if pathname and method:
            result = builder.operation(pathname, method)
        elif pathname:
            result = builder.path(pathname)
        else:
            result = builder.all()
    except SnippetGenError as exc:
        raise click.ClickException(str(exc)) from exc
    _echo_json(ctx, result)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("pathname")
@click.argument("method")
@click.option("-l", "--language", "languages", multiple=True, help="Target id, e.g. shell or node_fetch. Repeatable.")
@click.option("--normalize", is_flag=True, help="Keep {param} braces in URLs.")
@click.pass_context
def endpoint(
    ctx: click.Context,
    doc_path: Path,
    pathname: str,
    method: str,
    languages: tuple[str, ...],
    normalize: bool,
):
    """Print the snippets of one operation as JSON."""
    settings: Settings = ctx.obj.merged(languages, normalize or None)
    spec = _load(doc_path)
    try:
        result = get_endpoint_snippets(spec, pathname, method, settings.languages, settings.normalize)
    except SnippetGenError as exc:
        raise click.ClickException(str(exc)) from exc
    _echo_json(ctx, result)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-l", "--language", "languages", multiple=True, help="Target id, e.g. shell or node_fetch. Repeatable.")
@click.option("--normalize", is_flag=True, help="Keep {param} braces in URLs.")
@click.pass_context
def snippets(ctx: click.Context, doc_path: Path, languages: tuple[str, ...], normalize: bool):
    """Print the snippets of every operation as JSON, sorted by resource and method."""
    settings: Settings = ctx.obj.merged(languages, normalize or None)
    spec = _load(doc_path)
    try:
        result = get_snippets(spec, settings.languages, settings.normalize)
    except SnippetGenError as exc:
        raise click.ClickException(str(exc)) from exc
    _echo_json(ctx, result)


if __name__ == "__main__":
    main()
