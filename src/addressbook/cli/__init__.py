"""Command-line entry point for the address book."""

import logging
from dataclasses import dataclass
from pathlib import Path

import typer
from rich.console import Console

from addressbook.config.settings import Settings, get_settings
from addressbook.core.logging.builder import setup_logging
from addressbook.database.session import create_db_engine
from addressbook.exceptions.base import RepositoryError
from addressbook.exporter.xml_exporter import export_xml
from addressbook.importer.csv_importer import CsvImportError, import_csv
from addressbook.repositories.entry_repository import EntryRepository

from .shell import CommandShell
from .utils import FAILURE, SUCCESS, output_message

logger = logging.getLogger(__name__)

console = Console()

app = typer.Typer(
    help="Address book manager: contact tables, CSV import and device XML export",
    rich_markup_mode="rich",
    add_completion=False,
)


@dataclass
class AppState:
    settings: Settings
    repo: EntryRepository


def bootstrap(settings: Settings) -> EntryRepository:
    """
    Open the database (creating its directory on first run) and make sure the
    default table exists.
    """
    engine = create_db_engine(settings)
    return EntryRepository(engine, default_table=settings.DEFAULT_TABLE)


def _state(ctx: typer.Context) -> AppState:
    return ctx.obj


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    table: str | None = typer.Option(None, "--table", "-t", help="Table to work on (must exist)"),
) -> None:
    """Without a command, start the interactive shell."""
    settings = get_settings()
    setup_logging(settings)

    repo = bootstrap(settings)
    if table:
        try:
            repo.switch_table(table)
        except RepositoryError as exc:
            output_message(console, FAILURE, f"{table}: {exc}")
            raise typer.Exit(code=1) from exc

    ctx.obj = AppState(settings=settings, repo=repo)

    if ctx.invoked_subcommand is None:
        CommandShell(repo, console, export_dir=settings.EXPORT_DIR).run()


@app.command("shell")
def shell(ctx: typer.Context) -> None:
    """Start the interactive shell."""
    state = _state(ctx)
    CommandShell(state.repo, console, export_dir=state.settings.EXPORT_DIR).run()


@app.command("import-csv")
def import_csv_command(
    ctx: typer.Context,
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="CSV file with a name,username,email header"),
) -> None:
    """Import a CSV file into the current table."""
    state = _state(ctx)
    try:
        result = import_csv(state.repo, path)
    except (CsvImportError, RepositoryError) as exc:
        output_message(console, FAILURE, str(exc))
        raise typer.Exit(code=1) from exc

    output_message(console, SUCCESS, f"import completed successfully. {result.added} entries added.")


@app.command("export-xml")
def export_xml_command(
    ctx: typer.Context,
    export_dir: Path | None = typer.Option(None, "--dir", "-d", help="Output directory (defaults to EXPORT_DIR)"),
) -> None:
    """Export the current table as a device address book."""
    state = _state(ctx)
    path = export_xml(state.repo, export_dir or state.settings.EXPORT_DIR)
    output_message(console, SUCCESS, f"address book exported to {path}")


@app.command("tables")
def tables_command(ctx: typer.Context) -> None:
    """List all tables."""
    state = _state(ctx)
    for name in state.repo.list_tables():
        console.print(name, highlight=False, markup=False)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
