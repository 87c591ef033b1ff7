"""
Command-line interface for datatable_plus.

Provides table-name, mappings, keys, and schema commands for inspecting
mapped model classes and database tables.
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from datatable_plus.config import load_settings
from datatable_plus.exceptions import DataTablePlusError
from datatable_plus.metadata import MetadataService
from datatable_plus.models import SchemaTable

console = Console()
# Logs go to stderr so json/csv output stays clean on stdout
log_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with Rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=log_console, rich_tracebacks=True)],
    )


def import_class(path: str) -> type:
    """Import a class from ``package.module:ClassName``."""
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise click.BadParameter(f"Expected MODULE:CLASS, got {path!r}")

    try:
        obj = importlib.import_module(module_name)
        for part in attr.split("."):
            obj = getattr(obj, part)
    except (ImportError, AttributeError) as e:
        raise click.BadParameter(f"Cannot import {path}: {e}") from e
    if not isinstance(obj, type):
        raise click.BadParameter(f"{path} is not a class")
    return obj


def _build_service(ctx: click.Context) -> MetadataService:
    settings = ctx.obj["settings"]
    try:
        return MetadataService.from_settings(settings)
    except DataTablePlusError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


def _release(service: MetadataService) -> None:
    if service.connection is not None:
        service.connection.dispose()


def _print_frame(schema_table: SchemaTable, title: str) -> None:
    out = Table(title=title)
    for name in schema_table.column_names:
        out.add_column(name)
    for row in schema_table.frame.itertuples(index=False):
        out.add_row(*("" if value is None else str(value) for value in row))
    console.print(out)


@click.group()
@click.version_option(version="0.1.0", prog_name="datatable-plus")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="YAML settings file",
)
@click.option("--url", type=str, default=None, help="Database URL (overrides settings)")
@click.option(
    "--mappings",
    type=click.Path(path_type=Path),
    default=None,
    help="YAML file with declared mappings for unmapped classes",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    config_path: Optional[Path],
    url: Optional[str],
    mappings: Optional[Path],
) -> None:
    """
    DataTable Plus - ORM mapping and table schema inspection
    """
    setup_logging(verbose)

    try:
        settings = load_settings(config_path)
    except DataTablePlusError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    if url:
        settings.database_url = url
    if mappings:
        settings.mappings_file = mappings

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command("table-name")
@click.argument("entity")
@click.pass_context
def table_name(ctx: click.Context, entity: str) -> None:
    """
    Print the table a model class is mapped to.

    Example:

        datatable-plus --url sqlite:///app.db table-name myapp.models:Order
    """
    entity_type = import_class(entity)
    service = _build_service(ctx)
    with service:
        name = service.get_table_name(entity_type)
    _release(service)

    if name is None:
        console.print(f"[yellow]{entity} is not mapped[/yellow]")
        sys.exit(1)
    click.echo(name)


@cli.command()
@click.argument("entity")
@click.pass_context
def mappings(ctx: click.Context, entity: str) -> None:
    """
    Show the attribute -> column mapping of a model class.

    Example:

        datatable-plus --url sqlite:///app.db mappings myapp.models:Order
    """
    entity_type = import_class(entity)
    service = _build_service(ctx)
    with service:
        result = service.get_mappings(entity_type)
        keys = service.get_key_names(entity_type)
    _release(service)

    if not result:
        console.print(f"[yellow]{entity} has no mapped columns[/yellow]")
        sys.exit(1)

    table = Table(title=f"Mappings for {entity_type.__name__}")
    table.add_column("Attribute", style="cyan")
    table.add_column("Column", style="green")
    table.add_column("Key", style="yellow")

    for attr, column in result.items():
        table.add_row(attr, column, "PK" if column in keys else "")

    console.print(table)


@cli.command()
@click.argument("entity")
@click.pass_context
def keys(ctx: click.Context, entity: str) -> None:
    """
    Print the primary key column names of a model class, one per line.

    Example:

        datatable-plus --url sqlite:///app.db keys myapp.models:Order
    """
    entity_type = import_class(entity)
    service = _build_service(ctx)
    with service:
        key_names = service.get_key_names(entity_type)
    _release(service)

    for name in key_names:
        click.echo(name)


@cli.command()
@click.argument("table")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json", "csv"]),
    default="table",
    help="Output format",
)
@click.pass_context
def schema(ctx: click.Context, table: str, output_format: str) -> None:
    """
    Fetch a table's column metadata from the database catalog.

    Example:

        datatable-plus --url postgresql://user@localhost/app schema orders --format json
    """
    service = _build_service(ctx)
    try:
        with service:
            schema_table = service.get_table_schema(table)
    except DataTablePlusError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
    finally:
        _release(service)

    if output_format == "json":
        click.echo(schema_table.frame.to_json(orient="records"))
        return
    if output_format == "csv":
        click.echo(schema_table.frame.to_csv(index=False), nl=False)
        return

    if schema_table.is_empty:
        console.print(f"[yellow]No columns found for table: {table}[/yellow]")
        return

    if "column_name" not in schema_table.column_names:
        # Custom catalog query without the standard projection
        _print_frame(schema_table, f"Schema for {table}")
        return

    metadata = schema_table.to_table_metadata()
    out = Table(title=f"Schema for {table}")
    out.add_column("#", style="blue", justify="right")
    out.add_column("Column", style="cyan")
    out.add_column("Native Type", style="green")
    out.add_column("Type", style="magenta")
    out.add_column("Nullable", style="yellow")
    out.add_column("PK", style="yellow")

    for col in metadata.columns:
        out.add_row(
            str(col.ordinal_position or ""),
            col.name,
            str(col.native_type or ""),
            col.data_type.value,
            "yes" if col.nullable else "no",
            "PK" if col.is_primary_key else "",
        )

    console.print(out)


if __name__ == "__main__":
    cli()
