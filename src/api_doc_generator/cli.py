"""CLI entry point for api-doc-generator."""

import fnmatch
import importlib
import json
import logging
import sys
from pathlib import Path

import click
import yaml

from api_doc_generator.generator.route import RouteDocGenerator
from api_doc_generator.parser.base import DocumentationRecord, Route
from api_doc_generator.settings import load_settings


def _load_routes(target: str) -> list[Route]:
    """Import ``module:attribute`` and return the routes it names."""
    module_name, sep, attr = target.partition(":")
    if not sep or not attr:
        raise click.BadParameter(f"expected 'module:attribute', got {target!r}", param_hint="TARGET")

    try:
        module = importlib.import_module(module_name)
        routes = getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise click.BadParameter(str(e), param_hint="TARGET") from e

    if callable(routes):
        routes = routes()
    return [r if isinstance(r, Route) else Route.model_validate(r) for r in routes]


def _filter_routes(routes: list[Route], patterns: tuple[str, ...]) -> list[Route]:
    """Keep routes whose path matches any fnmatch pattern. No patterns keeps all."""
    if not patterns:
        return routes
    return [r for r in routes if any(fnmatch.fnmatch(r.path.lstrip("/"), p.lstrip("/")) for p in patterns)]


def _group_records(records: list[DocumentationRecord]) -> dict[str, list[dict]]:
    groups: dict[str, list[dict]] = {}
    for record in records:
        groups.setdefault(record.group, []).append(record.model_dump(mode="json"))
    return groups


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
def main(verbose: bool):
    """API Doc Generator: extract API documentation from route handlers."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("target")
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file for the documentation.")
@click.option("--settings", "settings_path", default=None, type=click.Path(exists=True, path_type=Path), help="YAML settings file.")
@click.option("--route-prefix", "prefixes", multiple=True, help="Only document routes matching this pattern (e.g. 'api/*').")
@click.option("--no-response-calls", is_flag=True, help="Never call handlers to capture sample responses.")
@click.option("--format", "fmt", default="json", type=click.Choice(["json", "yaml"]), help="Output format.")
def generate(target: str, output: Path, settings_path: Path | None, prefixes: tuple[str, ...], no_response_calls: bool, fmt: str):
    """Document the routes named by TARGET ('module:attribute')."""
    settings = load_settings(settings_path)
    if no_response_calls:
        settings = settings.model_copy(update={"response_calls": False})

    routes = _filter_routes(_load_routes(target), prefixes)
    click.echo(f"Processing {len(routes)} routes...")

    generator = RouteDocGenerator(settings=settings)
    records, failures = generator.process_routes(routes)

    groups = _group_records(records)
    if fmt == "yaml":
        content = yaml.safe_dump(groups, sort_keys=False, allow_unicode=True)
    else:
        content = json.dumps(groups, indent=2, ensure_ascii=False)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    click.echo(f"Documented {len(records)} routes in {len(groups)} groups, saved to {output}")

    if failures:
        for failure in failures:
            click.echo(f"  Failed: {failure}", err=True)
        sys.exit(1)
