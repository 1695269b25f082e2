"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from PlantProxy.cli.commands import ArchiveRequest
from PlantProxy.cli.runner import CommandRunner
from PlantProxy.config import load_config_with_defaults
from PlantProxy.config.app import DEFAULT_CONFIG_PATH
from PlantProxy.core.query import SORT_OPTIONS
from PlantProxy.renderers import FIELD_KINDS


@click.group(help="PlantProxy: render Airtable plant records as HTML fragments.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to YAML config file (merged over config/default.yml).",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config.
    """
    load_dotenv()
    default_path = DEFAULT_CONFIG_PATH if DEFAULT_CONFIG_PATH.exists() else config_path
    ctx.obj = load_config_with_defaults(config_path, default_path=default_path)


@cli.command("archive")
@click.option("--search", default=None, help="Search text matched against plant names.")
@click.option("--uses", multiple=True, help="Uses filter term (repeatable).")
@click.option("--origin", multiple=True, help="Origin filter term (repeatable).")
@click.option("--niche", multiple=True, help="Niche/zone filter term (repeatable).")
@click.option("--sort", default=None, help=f"Sort key, one of: {', '.join(SORT_OPTIONS)}.")
@click.option("--page-size", type=int, default=None, help="Page size (clamped to 1-100).")
@click.option("--trail", default=None, help="Cursor trail from a pagination link.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["html", "json"]),
    default="html",
    show_default=True,
)
@click.pass_context
def archive_cmd(
    ctx: click.Context,
    search: str | None,
    uses: tuple[str, ...],
    origin: tuple[str, ...],
    niche: tuple[str, ...],
    sort: str | None,
    page_size: int | None,
    trail: str | None,
    output_format: str,
) -> None:
    """Render one page of the plant archive grid."""
    cfg = ctx.obj
    request = ArchiveRequest(
        search=search,
        uses=uses,
        origin=origin,
        niche=niche,
        sort=sort or cfg.archive.sort,
        page_size=page_size if page_size is not None else cfg.archive.page_size,
        trail=trail,
    )
    output = CommandRunner(cfg).run_archive(ctx.command.name, request, output_format=output_format)
    click.echo(output)


@cli.command("plant")
@click.argument("plant_id")
@click.option(
    "--attachments",
    "attachment_mode",
    type=click.Choice(["url", "object"]),
    default="url",
    show_default=True,
    help="Render attachment fields as first URL or full objects.",
)
@click.pass_context
def plant_cmd(ctx: click.Context, plant_id: str, attachment_mode: str) -> None:
    """Print one normalized plant record as JSON."""
    output = CommandRunner(ctx.obj).run_plant(ctx.command.name, plant_id, attachment_mode=attachment_mode)
    click.echo(output)


@cli.command("field")
@click.argument("plant_id")
@click.argument("fields", nargs=-1, required=True)
@click.option("--kind", type=click.Choice(FIELD_KINDS), default="auto", show_default=True)
@click.option("--default", "default", default="", help="Text shown when the value is unavailable.")
@click.pass_context
def field_cmd(ctx: click.Context, plant_id: str, fields: tuple[str, ...], kind: str, default: str) -> None:
    """Render one or more field widgets of a plant."""
    widgets = CommandRunner(ctx.obj).run_fields(ctx.command.name, plant_id, fields, kind=kind, default=default)
    for widget in widgets:
        click.echo(widget)
