"""CLI entry point for api-load-templates."""

import json
import logging
from pathlib import Path

import click
from pydantic import ValidationError

from api_load_templates.config import Settings
from api_load_templates.errors import SwaggerError
from api_load_templates.generator.base import ProcessOptions
from api_load_templates.generator.processor import EndpointProcessor
from api_load_templates.store import InMemoryStore, JsonFileStore


def _emit(payload, output: Path | None):
    text = json.dumps(payload, indent=2, ensure_ascii=False, default=str)
    if output is None:
        click.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    click.echo(f"Saved to {output}")


def _fail(err: SwaggerError):
    raise click.ClickException(str(err)) from err


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log progress and warnings to stderr.")
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """API Load Templates — derive load-test call templates from Swagger docs."""
    try:
        settings = Settings.from_env()
    except ValidationError as e:
        raise click.UsageError(f"Invalid environment configuration:\n{e}") from e
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = settings


@main.command()
@click.argument("url")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table.")
@click.pass_obj
def endpoints(settings: Settings, url: str, as_json: bool):
    """List endpoint ids for use with --id."""
    processor = EndpointProcessor(timeout=settings.timeout)
    try:
        refs = processor.get_endpoint_paths(url)
    except SwaggerError as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps([r.model_dump() for r in refs], indent=2))
        return
    for ref in refs:
        click.echo(f"{ref.id:>4}  {ref.method:<7} {ref.path}")


@main.command()
@click.argument("url")
@click.option("--id", "selected_ids", multiple=True, type=int, help="Endpoint id to include (repeatable).")
@click.option("--token", default=None, help="Auth token (default: $API_TOKEN).")
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Write JSON to this file.")
@click.pass_obj
def preview(settings: Settings, url: str, selected_ids: tuple[int, ...], token: str | None, output: Path | None):
    """Preview call templates without persisting them."""
    processor = EndpointProcessor(timeout=settings.timeout)
    try:
        templates = processor.extract_request_body_templates(url, list(selected_ids), token or settings.token)
    except SwaggerError as e:
        _fail(e)

    _emit([t.model_dump() for t in templates], output)


@main.command()
@click.argument("url")
@click.option("--user-id", required=True, help="Owner of the saved templates.")
@click.option("--total-requests", required=True, type=click.IntRange(min=1), help="Requests per endpoint.")
@click.option("--threads", required=True, type=click.IntRange(min=1), help="Concurrent workers per endpoint.")
@click.option("--id", "selected_ids", multiple=True, type=int, help="Endpoint id to include (repeatable).")
@click.option("--token", default=None, help="Auth token (default: $API_TOKEN).")
@click.option("--store", "store_path", default=None, type=click.Path(path_type=Path), help="JSON file to save templates to (default: $API_LOAD_STORE).")
@click.pass_obj
def process(
    settings: Settings,
    url: str,
    user_id: str,
    total_requests: int,
    threads: int,
    selected_ids: tuple[int, ...],
    token: str | None,
    store_path: Path | None,
):
    """Build call templates and save them for a load-test run."""
    if not user_id.strip():
        raise click.BadParameter("must not be empty", param_hint="--user-id")

    store_path = store_path or (Path(settings.store_path) if settings.store_path else None)
    store = JsonFileStore(store_path) if store_path else InMemoryStore()

    options = ProcessOptions(
        total_requests=total_requests,
        threads=threads,
        selected_ids=list(selected_ids),
        token=token or settings.token,
    )
    processor = EndpointProcessor(store=store, timeout=settings.timeout)
    try:
        result = processor.process_swagger_data(url, user_id, options)
    except SwaggerError as e:
        _fail(e)

    _emit(result.model_dump(), None)


@main.command()
@click.argument("url")
@click.pass_obj
def raw(settings: Settings, url: str):
    """Dump the normalized document."""
    processor = EndpointProcessor(timeout=settings.timeout)
    try:
        document = processor.get_swagger_data(url)
    except SwaggerError as e:
        _fail(e)

    click.echo(json.dumps(document.model_dump(mode="json", by_alias=True, exclude_none=True), indent=2, default=str))
