"""
Interactive address-book shell.

One command per line against the repository's current table. Every command reports
its outcome as a "[+]/[-]/[!]" line and the loop keeps running after any failure;
only quit/exit, EOF and Ctrl-C end it.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from rich.console import Console
from rich.text import Text

from addressbook.core.logging.filters import set_log_context, reset_log_context
from addressbook.exceptions.base import RepositoryError
from addressbook.exporter.xml_exporter import export_xml
from addressbook.importer.csv_importer import CsvImportError, import_csv
from addressbook.models.entry import Entry
from addressbook.repositories.entry_repository import EntryRepository

from .utils import FAILURE, NOTICE, SUCCESS, entries_table, output_message, parse_args

logger = logging.getLogger(__name__)

PROMPT_SUFFIX = "» "
EXIT_COMMANDS = frozenset({"quit", "exit"})


@dataclass(frozen=True)
class CommandInfo:
    description: str
    usage: str
    needs_argument: bool = False


COMMANDS: dict[str, CommandInfo] = {
    "create_table": CommandInfo("creates new table and sets it to the current table", "create_table 'TABLE_NAME'", True),
    "switch_table": CommandInfo("switch the current table", "switch_table 'TABLE_NAME'", True),
    "clear_table": CommandInfo("clear the current table of all entries", "clear_table"),
    "delete_table": CommandInfo("delete a table (the default table cannot be deleted)", "delete_table 'TABLE_NAME'", True),
    "list_tables": CommandInfo("list all tables", "list_tables"),
    "show_users": CommandInfo("show all the users in the current table", "show_users"),
    "add_user": CommandInfo(
        "add user to the current table. Fields must be separated by commas", "add_user 'NAME,USERNAME,EMAIL'", True
    ),
    "update_user": CommandInfo(
        "replace the fields of a user in the current table", "update_user USERNAME 'NAME,USERNAME,EMAIL'", True
    ),
    "find_user": CommandInfo("show a single user from the current table", "find_user 'USERNAME'", True),
    "delete_user": CommandInfo("delete a single user from the current table", "delete_user 'USERNAME'", True),
    "import_csv": CommandInfo("import users from csv file into current table", "import_csv 'PATH_TO_FILE'", True),
    "export_xml": CommandInfo("export the current table as an XML address book", "export_xml"),
    "help": CommandInfo("show the available commands or the usage of one", "help [COMMAND]"),
    "exit": CommandInfo("exits the program", "exit"),
}


def _split_fields(param: str) -> Entry | None:
    fields = param.split(",")
    if len(fields) != 3:
        return None
    return Entry(name=fields[0], username=fields[1], email=fields[2])


class CommandShell:
    """
    Read-eval-print loop over an EntryRepository.

    `execute(line)` is the unit of work (and the test seam); `run()` only adds the prompt
    loop around it.
    """

    def __init__(self, repo: EntryRepository, console: Console | None = None, export_dir: str | Path = "Address Books"):
        self.repo = repo
        self.console = console or Console()
        self.export_dir = Path(export_dir)
        self._handlers: dict[str, Callable[[str], None]] = {
            "create_table": self.create_table,
            "switch_table": self.switch_table,
            "clear_table": self.clear_table,
            "delete_table": self.delete_table,
            "list_tables": self.list_tables,
            "show_users": self.show_users,
            "add_user": self.add_user,
            "update_user": self.update_user,
            "find_user": self.find_user,
            "delete_user": self.delete_user,
            "import_csv": self.import_csv,
            "export_xml": self.export_xml,
            "help": self.help,
        }

    @property
    def prompt(self) -> str:
        return f"{self.repo.current_table}{PROMPT_SUFFIX}"

    # =================================================================================================================
    # Loop
    # =================================================================================================================

    def run(self) -> None:
        """Prompt until quit/exit, EOF or Ctrl-C."""
        self.console.print("Type 'help' for a list of commands.\n", highlight=False)
        while True:
            try:
                line = self.console.input(Text(self.prompt))
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                break

            if not self.execute(line):
                break

    def execute(self, line: str) -> bool:
        """
        Run one input line.

        Returns:
            bool: False when the shell should stop, True otherwise.
        """
        try:
            command, param = parse_args(line)
        except ValueError as exc:
            output_message(self.console, NOTICE, f"could not parse input: {exc}")
            return True

        if not command:
            return True
        if command in EXIT_COMMANDS:
            return False

        handler = self._handlers.get(command)
        if handler is None:
            output_message(self.console, NOTICE, f"unknown command '{command}'. Type 'help' for a list of commands.")
            return True

        info = COMMANDS[command]
        if info.needs_argument and not param:
            output_message(self.console, NOTICE, f"usage: {info.usage}")
            return True

        token = set_log_context(command=command, table=self.repo.current_table)
        try:
            handler(param)
        except (RepositoryError, CsvImportError) as exc:
            output_message(self.console, FAILURE, str(exc))
        except Exception as exc:
            logger.exception("shell.command_failed", extra={"command": command})
            output_message(self.console, NOTICE, f"unexpected error: {exc}")
        finally:
            reset_log_context(token)

        return True

    # =================================================================================================================
    # Table commands
    # =================================================================================================================

    def create_table(self, name: str) -> None:
        self.repo.new_table(name)
        output_message(self.console, SUCCESS, f"{self.repo.current_table} was created successfully")

    def switch_table(self, name: str) -> None:
        self.repo.switch_table(name)
        output_message(self.console, SUCCESS, f"switched to {self.repo.current_table}")

    def clear_table(self, _: str) -> None:
        removed = self.repo.clear_table()
        output_message(self.console, SUCCESS, f"{self.repo.current_table} was cleared successfully ({removed} removed)")

    def delete_table(self, name: str) -> None:
        self.repo.delete_table(name)
        output_message(self.console, SUCCESS, f"{name} was deleted successfully")

    def list_tables(self, _: str) -> None:
        current = self.repo.current_table
        self.console.print("Tables:", highlight=False)
        for name in self.repo.list_tables():
            marker = "*" if name.casefold() == current.casefold() else " "
            self.console.print(f"   {marker} {name}", highlight=False, markup=False)
        self.console.print()

    # =================================================================================================================
    # Entry commands
    # =================================================================================================================

    def show_users(self, _: str) -> None:
        table = self.repo.current_table
        entries = self.repo.all()
        if not entries:
            output_message(self.console, NOTICE, f"{table} is empty")
            return

        output_message(self.console, SUCCESS, f"contents of {table}")
        self.console.print(entries_table(table, entries))

    def add_user(self, param: str) -> None:
        entry = _split_fields(param)
        if entry is None:
            output_message(self.console, FAILURE, "invalid number of fields")
            return

        created = self.repo.insert(entry)
        output_message(self.console, SUCCESS, f"{created.name} was added successfully")

    def update_user(self, param: str) -> None:
        username, _, fields = param.partition(" ")
        entry = _split_fields(fields)
        if entry is None:
            output_message(self.console, FAILURE, "invalid number of fields")
            return

        updated = self.repo.update(username, entry)
        output_message(self.console, SUCCESS, f"{updated.name} was updated successfully")

    def find_user(self, username: str) -> None:
        entry = self.repo.get_by_username(username)
        self.console.print(entry.display(), highlight=False, markup=False)

    def delete_user(self, username: str) -> None:
        entry = self.repo.get_by_username(username)
        self.repo.delete(username)
        output_message(self.console, SUCCESS, f"{entry.name} was deleted successfully")

    # =================================================================================================================
    # Import / export
    # =================================================================================================================

    def import_csv(self, path: str) -> None:
        try:
            result = import_csv(self.repo, Path(path).expanduser())
        except OSError as exc:
            output_message(self.console, FAILURE, f"cannot open file: {exc.strerror or exc}")
            return

        output_message(self.console, SUCCESS, f"import completed successfully. {result.added} entries added.")

    def export_xml(self, _: str) -> None:
        path = export_xml(self.repo, self.export_dir)
        output_message(self.console, SUCCESS, f"address book exported to {path}")

    # =================================================================================================================
    # Help
    # =================================================================================================================

    def help(self, command: str) -> None:
        info = COMMANDS.get(command)
        if info is not None:
            self.console.print(f"{info.description}\nusage: {info.usage}\n", highlight=False, markup=False)
            return

        self.console.print("Commands:", highlight=False)
        for name in sorted(COMMANDS):
            self.console.print(f"     {name:<15} : {COMMANDS[name].description}", highlight=False, markup=False)
        self.console.print()
