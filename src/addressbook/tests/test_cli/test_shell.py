import io

import pytest
from rich.console import Console

from addressbook.cli.shell import CommandShell


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=300, force_terminal=False, color_system=None)


@pytest.fixture
def shell(repo, console, tmp_path) -> CommandShell:
    return CommandShell(repo, console, export_dir=tmp_path / "Address Books")


def output(console: Console) -> str:
    return console.file.getvalue()


def run(shell: CommandShell, line: str) -> str:
    """Execute `line` and return only the output it produced."""
    start = len(output(shell.console))
    assert shell.execute(line) is True
    return output(shell.console)[start:]


class TestDispatch:

    @pytest.mark.parametrize("line", ["exit", "quit"])
    def test_exit_commands_stop_the_loop(self, shell, line):
        assert shell.execute(line) is False

    def test_empty_line_is_ignored(self, shell, console):
        assert shell.execute("   ") is True
        assert output(console) == ""

    def test_unknown_command(self, shell):
        assert run(shell, "frobnicate") == "[!] unknown command 'frobnicate'. Type 'help' for a list of commands.\n\n"

    def test_missing_argument_prints_usage(self, shell):
        assert run(shell, "create_table") == "[!] usage: create_table 'TABLE_NAME'\n\n"

    def test_unbalanced_quotes(self, shell):
        assert run(shell, "add_user 'Test One,username1").startswith("[!] could not parse input")

    def test_unexpected_errors_do_not_stop_the_loop(self, shell, monkeypatch):
        def boom():
            raise RuntimeError("boom")

        monkeypatch.setattr(shell.repo, "all", boom)

        assert run(shell, "show_users") == "[!] unexpected error: boom\n\n"

    def test_prompt_shows_current_table(self, shell):
        assert shell.prompt == "default_table» "
        run(shell, "create_table reports")
        assert shell.prompt == "reports» "


class TestTableCommands:

    def test_create_table(self, shell, repo):
        assert run(shell, "create_table 'reports'") == "[+] reports was created successfully\n\n"
        assert repo.current_table == "reports"

    def test_create_existing_table(self, shell):
        run(shell, "create_table reports")

        assert run(shell, "create_table REPORTS") == "[-] table already exists\n\n"

    def test_create_invalid_table(self, shell):
        assert run(shell, "create_table 1bad") == "[-] tablename is not valid\n\n"

    def test_switch_table(self, shell, repo):
        run(shell, "create_table reports")

        assert run(shell, "switch_table default_table") == "[+] switched to default_table\n\n"
        assert repo.current_table == "default_table"

    def test_switch_table_reports_catalog_spelling(self, shell):
        run(shell, "create_table reports")
        run(shell, "switch_table default_table")

        assert run(shell, "switch_table REPORTS") == "[+] switched to reports\n\n"
        assert shell.prompt == "reports» "

    def test_switch_to_missing_table(self, shell, repo):
        assert run(shell, "switch_table nowhere") == "[-] table does not exist\n\n"
        assert repo.current_table == "default_table"

    def test_clear_table(self, shell, populated_repo):
        assert run(shell, "clear_table") == "[+] default_table was cleared successfully (3 removed)\n\n"

    def test_delete_table(self, shell, repo):
        run(shell, "create_table reports")

        assert run(shell, "delete_table reports") == "[+] reports was deleted successfully\n\n"
        assert repo.current_table == "default_table"

    def test_default_table_cannot_be_deleted(self, shell):
        assert run(shell, "delete_table default_table") == "[-] this table cannot be deleted\n\n"

    def test_list_tables_marks_current(self, shell):
        run(shell, "create_table reports")

        text = run(shell, "list_tables")

        assert text.splitlines()[:3] == ["Tables:", "     default_table", "   * reports"]


class TestEntryCommands:

    def test_add_user(self, shell, repo):
        assert run(shell, "add_user 'Test One,username1,test1@test.com'") == "[+] Test One was added successfully\n\n"
        assert repo.get_by_username("username1").email == "test1@test.com"

    def test_add_user_without_quotes(self, shell, repo):
        run(shell, "add_user Test One,username1,test1@test.com")

        assert repo.get_by_username("username1").name == "Test One"

    def test_add_user_wrong_field_count(self, shell):
        assert run(shell, "add_user 'Test One,username1'") == "[-] invalid number of fields\n\n"

    def test_add_invalid_user(self, shell):
        assert run(shell, "add_user 'Test One,username1,nope'") == "[-] email is not valid\n\n"

    def test_add_duplicate_user(self, shell, populated_repo):
        assert run(shell, "add_user 'Someone Else,username1,else@test.com'") == "[-] record already exists\n\n"

    def test_show_users_empty(self, shell):
        assert run(shell, "show_users") == "[!] default_table is empty\n\n"

    def test_show_users(self, shell, populated_repo):
        text = run(shell, "show_users")

        assert text.startswith("[+] contents of default_table\n")
        for name in ("Test One", "Test Two", "Test Three"):
            assert name in text

    def test_find_user(self, shell, populated_repo):
        text = run(shell, "find_user username2")

        assert "ID: 2\nName: Test Two\nUsername: username2\nEmail: test2@test.com\n" in text

    def test_find_missing_user(self, shell):
        assert run(shell, "find_user ghost") == "[-] record does not exist\n\n"

    def test_update_user(self, shell, populated_repo):
        text = run(shell, "update_user username1 'Test Uno,uno,uno@test.com'")

        assert text == "[+] Test Uno was updated successfully\n\n"
        assert populated_repo.get_by_username("uno").id == 1

    def test_update_missing_user(self, shell):
        assert run(shell, "update_user ghost 'Test Uno,uno,uno@test.com'") == "[-] record could not be updated\n\n"

    def test_delete_user(self, shell, populated_repo):
        assert run(shell, "delete_user username2") == "[+] Test Two was deleted successfully\n\n"
        assert [e.username for e in populated_repo.all()] == ["username1", "username3"]

    def test_delete_missing_user(self, shell):
        assert run(shell, "delete_user ghost") == "[-] record does not exist\n\n"


class TestImportExport:

    def test_import_csv(self, shell, repo, tmp_path):
        path = tmp_path / "contacts.csv"
        path.write_text(
            "name,username,email\nTest One,username1,test1@test.com\nTest Two,username2,test2@test.com\n",
            encoding="utf-8",
        )

        assert run(shell, f"import_csv '{path}'") == "[+] import completed successfully. 2 entries added.\n\n"
        assert len(repo.all()) == 2

    def test_import_missing_file(self, shell, tmp_path):
        text = run(shell, f"import_csv '{tmp_path / 'missing.csv'}'")

        assert text.startswith("[-] cannot open file:")

    def test_import_bad_header(self, shell, tmp_path):
        path = tmp_path / "contacts.csv"
        path.write_text("first,last,mail\n", encoding="utf-8")

        assert run(shell, f"import_csv '{path}'") == "[-] invalid header\n\n"

    def test_export_xml(self, shell, populated_repo, tmp_path):
        text = run(shell, "export_xml")

        assert text.startswith("[+] address book exported to ")
        assert len(list((tmp_path / "Address Books").glob("default_table *.xml"))) == 1


class TestHelp:

    def test_lists_commands(self, shell):
        text = run(shell, "help")

        assert text.startswith("Commands:\n")
        for name in ("add_user", "create_table", "export_xml", "import_csv", "exit"):
            assert name in text

    def test_single_command(self, shell):
        text = run(shell, "help add_user")

        assert "usage: add_user 'NAME,USERNAME,EMAIL'" in text
