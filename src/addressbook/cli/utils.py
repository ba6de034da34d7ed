"""Small helpers shared by the CLI commands and the interactive shell."""

import shlex

from rich.console import Console
from rich.table import Table
from rich.text import Text

from addressbook.models.entry import Entry

SUCCESS = "+"
FAILURE = "-"
NOTICE = "!"

_SYMBOL_STYLES = {SUCCESS: "green", FAILURE: "red", NOTICE: "yellow"}


def output_message(console: Console, symbol: str, message: str) -> None:
    """
    Print "[<symbol>] <message>" followed by a blank line.

        + success
        - failed operation
        ! notice / usage problem

    The message is printed as plain text so user data containing brackets is never
    interpreted as rich markup.
    """
    line = Text(f"[{symbol}] ", style=_SYMBOL_STYLES.get(symbol, ""))
    line.append(message)
    console.print(line, highlight=False)
    console.print()


def parse_args(line: str) -> tuple[str, str]:
    """
    Split an input line into (command, parameter).

    Quoting follows shell rules; everything after the command is re-joined with single
    spaces, so `add_user Test One,user1,a1@x.com` and `add_user 'Test One,user1,a1@x.com'`
    give the same parameter.

    Raises:
        ValueError: unbalanced quotes.
    """
    tokens = shlex.split(line)
    if not tokens:
        return "", ""
    return tokens[0], " ".join(tokens[1:])


def entries_table(title: str, entries: list[Entry]) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Name", style="green")
    table.add_column("Username", style="magenta")
    table.add_column("Email", style="blue")

    for entry in entries:
        table.add_row(str(entry.id), entry.name, entry.username, entry.email)
    return table
