"""Integration tests for the interactive REPL."""

from __future__ import annotations

import io

import pytest

from row_store.adapters.inbound.repl import MetaCommandResult, Repl
from row_store.application import Database
from row_store.domain.value_objects import EMAIL_SIZE, USERNAME_SIZE
from row_store.infrastructure.config import Config


def run_script(lines: list[str], db: Database | None = None) -> tuple[int, str]:
    """Feed lines to a REPL and return (exit code, output)."""
    stdin = io.StringIO("".join(f"{line}\n" for line in lines))
    stdout = io.StringIO()

    if db is None:
        with Database() as fresh:
            code = Repl(fresh, stdin, stdout).run()
    else:
        code = Repl(db, stdin, stdout).run()

    return code, stdout.getvalue()


@pytest.mark.integration
class TestRepl:
    """Transcript tests for the REPL."""

    def test_insert_and_select(self) -> None:
        code, output = run_script(
            [
                "insert 1 alice alice@example.com",
                "insert 2 bob bob@example.com",
                "select",
                ".exit",
            ]
        )

        assert code == 0
        assert output == (
            "db > Executed.\n"
            "db > Executed.\n"
            "db > (1, alice, alice@example.com)\n"
            "(2, bob, bob@example.com)\n"
            "Executed.\n"
            "db > "
        )

    def test_select_empty_table(self) -> None:
        _, output = run_script(["select", ".exit"])

        assert output == "db > Executed.\ndb > "

    def test_end_of_input_exits(self) -> None:
        code, output = run_script([])

        assert code == 0
        assert output == "db > \n"

    def test_unrecognized_meta_command(self) -> None:
        _, output = run_script([".tables", ".exit"])

        assert "Unrecognized command '.tables'\n" in output

    def test_unrecognized_keyword(self) -> None:
        _, output = run_script(["update 1 a b", ".exit"])

        assert "Unrecognized keyword at start of 'update 1 a b'.\n" in output

    def test_syntax_error(self) -> None:
        _, output = run_script(["insert 1 alice", "insert x a b", ".exit"])

        assert output.count("Syntax error. Could not parse statement.\n") == 2

    def test_strings_too_long(self) -> None:
        _, output = run_script(
            [
                f"insert 1 {'a' * (USERNAME_SIZE + 1)} a@example.com",
                f"insert 2 bob {'e' * (EMAIL_SIZE + 1)}",
                f"insert 3 {'a' * USERNAME_SIZE} {'e' * EMAIL_SIZE}",
                "select",
                ".exit",
            ]
        )

        assert output.count("Error: String is too long.\n") == 2
        assert f"(3, {'a' * USERNAME_SIZE}, {'e' * EMAIL_SIZE})\n" in output

    def test_nul_in_text(self) -> None:
        _, output = run_script(["insert 1 bob\x00 bob@example.com", "select", ".exit"])

        assert output == (
            "db > Error: String contains a NUL character.\n"
            "db > Executed.\n"
            "db > "
        )

    def test_table_full(self, test_config: Config) -> None:
        with Database.from_config(test_config) as db:
            max_rows = db.table.max_rows
            lines = [f"insert {i} user{i} user{i}@example.com" for i in range(max_rows + 1)]
            _, output = run_script(lines + [".exit"], db=db)

        assert output.count("Executed.\n") == max_rows
        assert output.endswith("Error: Table full.\ndb > ")

    def test_custom_prompt(self) -> None:
        stdout = io.StringIO()
        with Database() as db:
            Repl(db, io.StringIO(".exit\n"), stdout, prompt="> ").run()

        assert stdout.getvalue() == "> "

    def test_meta_command_dispatch(self, database: Database) -> None:
        repl = Repl(database, io.StringIO(), io.StringIO())

        assert repl.do_meta_command(".exit") is MetaCommandResult.EXIT
        assert repl.do_meta_command(".help") is MetaCommandResult.UNRECOGNIZED
