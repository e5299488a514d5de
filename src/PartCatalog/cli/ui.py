"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from PartCatalog.cli.runner import CommandRunner
from PartCatalog.config import DEFAULT_CONFIG_PATH, load_config_with_defaults
from PartCatalog.core.part_number import part_number_prefix
from PartCatalog.services.session import validate_part_type


@click.group(help="PartCatalog: search the local sign/decal/marker parts catalog.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to YAML config file (merged onto the defaults).",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config.
    """
    load_dotenv()
    ctx.obj = load_config_with_defaults(config_path)


@cli.command("types")
@click.pass_context
def types_cmd(ctx: click.Context) -> None:
    """List configured part types."""
    for key in ctx.obj.part_types:
        click.echo(key)


@cli.command("search")
@click.argument("part_type", required=False, default="")
@click.argument("name", required=False, default="")
@click.option("--pages", type=click.IntRange(min=1), default=1, show_default=True,
              help="Result pages to fetch (first search plus load-more calls).")
@click.option("--interactive", is_flag=True, help="Ask before every load-more.")
@click.option("--auto-prefix", is_flag=True,
              help="Prefix NAME with the part number generated from the dimensions.")
@click.option("--width", type=str, default=None, help="Item width in inches.")
@click.option("--height", type=str, default=None, help="Item height in inches.")
@click.option("--gauge", type=str, default=".024", show_default=True, help="Aluminum gauge.")
@click.option("--hdpe-sheet", type=click.Choice([".023", ".110", ".110_96", ".110_40"]),
              default=".023", show_default=True, help="HDPE sheet stock.")
@click.option("--tube-length", type=str, default="72", show_default=True,
              help="Bullet marker tube length in inches.")
@click.pass_context
def search_cmd(
    ctx: click.Context,
    part_type: str,
    name: str,
    pages: int,
    interactive: bool,
    auto_prefix: bool,
    width: str | None,
    height: str | None,
    gauge: str,
    hdpe_sheet: str,
    tube_length: str,
) -> None:
    """Search parts of PART_TYPE whose name contains NAME.

    Raises:
        click.BadParameter: When the part type is missing or unknown.
        click.Abort: When the search fails.
    """
    cfg = ctx.obj
    message = validate_part_type(part_type, cfg.part_types)
    if message:
        raise click.BadParameter(message, param_hint="PART_TYPE")

    term = name
    if auto_prefix:
        prefix = part_number_prefix(
            part_type,
            width,
            height,
            gauge=gauge,
            hdpe_sheet=hdpe_sheet,
            tube_length=tube_length,
        )
        term = f"{prefix}{name}"

    confirm = (lambda: click.confirm("Load more?", default=True)) if interactive else None
    CommandRunner(cfg).run_search(
        ctx.command.name,
        part_type=part_type,
        term=term,
        pages=pages,
        confirm=confirm,
    )


@cli.command("import")
@click.argument("path", type=click.Path(path_type=Path, dir_okay=False, exists=True))
@click.pass_context
def import_cmd(ctx: click.Context, path: Path) -> None:
    """Import parts from a JSON export (array or single object)."""
    CommandRunner(ctx.obj).run_import(ctx.command.name, path=path)


@cli.command("add")
@click.argument("name")
@click.option("--type", "part_type", default="misc", show_default=True, help="Part type.")
@click.option("--field", "fields", multiple=True, metavar="KEY=VALUE",
              help="Extra catalog field; repeatable.")
@click.pass_context
def add_cmd(ctx: click.Context, name: str, part_type: str, fields: tuple[str, ...]) -> None:
    """Add a single part named NAME."""
    data: dict[str, str] = {}
    for item in fields:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"Expected KEY=VALUE, got {item!r}", param_hint="--field")
        data[key.strip()] = value
    CommandRunner(ctx.obj).run_add(ctx.command.name, name=name, part_type=part_type, fields=data)


@cli.command("index")
@click.argument("part_types", nargs=-1)
@click.pass_context
def index_cmd(ctx: click.Context, part_types: tuple[str, ...]) -> None:
    """Create indexes for PART_TYPES (default: all configured types)."""
    cfg = ctx.obj
    for key in part_types:
        message = validate_part_type(key, cfg.part_types)
        if message:
            raise click.BadParameter(f"{key}: {message}", param_hint="PART_TYPES")
    CommandRunner(cfg).run_index(ctx.command.name, part_types=part_types)
