"""Interactive read-eval-print loop for the row store.

Session:
    db > insert 1 alice alice@example.com
    Executed.
    db > select
    (1, alice, alice@example.com)
    Executed.
    db > .exit

Lines starting with "." are meta commands; everything else is a statement
handed to the Database. End of input ends the session like ``.exit``.
"""

from __future__ import annotations

import sys
from enum import Enum, auto
from typing import TextIO

from row_store.application.database import Database
from row_store.infrastructure.config import Config, get_config
from row_store.infrastructure.logging import get_logger, setup_logging
from row_store.infrastructure.metrics import get_metrics
from row_store.infrastructure.tracing import setup_tracing, shutdown_tracing
from row_store.ports.inbound.execution_engine import ExecuteStatus, ExecutionResult

logger = get_logger(__name__)


class MetaCommandResult(Enum):
    """Outcome of a meta command."""

    EXIT = auto()
    UNRECOGNIZED = auto()


ERROR_MESSAGES: dict[ExecuteStatus, str] = {
    ExecuteStatus.TABLE_FULL: "Error: Table full.",
    ExecuteStatus.FIELD_TOO_LONG: "Error: String is too long.",
    ExecuteStatus.INVALID_FIELD_VALUE: "Error: String contains a NUL character.",
    ExecuteStatus.INVALID_ROW_INDEX: "Error: Invalid row index.",
}


class Repl:
    """Line-oriented front end over a started Database."""

    META_PREFIX = "."

    def __init__(
        self,
        db: Database,
        stdin: TextIO,
        stdout: TextIO,
        prompt: str = "db > ",
    ) -> None:
        self._db = db
        self._stdin = stdin
        self._stdout = stdout
        self._prompt = prompt

    def run(self) -> int:
        """Run until ``.exit`` or end of input. Returns the exit code."""
        while True:
            self._write(self._prompt)
            self._stdout.flush()

            line = self._stdin.readline()
            if not line:
                self._write("\n")
                return 0

            line = line.rstrip("\r\n")
            if line.startswith(self.META_PREFIX):
                if self.do_meta_command(line) is MetaCommandResult.EXIT:
                    return 0
                logger.debug("meta_command_unrecognized", command=line)
                self._write(f"Unrecognized command '{line}'\n")
                continue

            self.handle_statement(line)

    def do_meta_command(self, line: str) -> MetaCommandResult:
        """Dispatch a meta command."""
        if line.strip() == ".exit":
            return MetaCommandResult.EXIT
        return MetaCommandResult.UNRECOGNIZED

    def handle_statement(self, line: str) -> ExecutionResult:
        """Execute one statement and print its outcome."""
        result = self._db.execute(line)

        if result.status is ExecuteStatus.UNRECOGNIZED_STATEMENT:
            self._write(f"Unrecognized keyword at start of '{line}'.\n")
            return result
        if result.status is ExecuteStatus.SYNTAX_ERROR:
            self._write("Syntax error. Could not parse statement.\n")
            return result

        for row in result.rows:
            self._write(f"{row}\n")

        if result.success:
            self._write("Executed.\n")
        else:
            self._write(ERROR_MESSAGES.get(result.status, f"Error: {result.message}") + "\n")
        return result

    def _write(self, text: str) -> None:
        self._stdout.write(text)


def main(config: Config | None = None) -> int:
    """Console entry point: run the REPL over stdin/stdout."""
    config = config or get_config()
    setup_logging(
        level=config.observability.log_level,
        log_format=config.observability.log_format,
    )
    setup_tracing(
        service_name=config.observability.otel_service_name,
        otlp_endpoint=config.observability.otel_endpoint,
    )

    try:
        with Database.from_config(config, metrics=get_metrics()) as db:
            return Repl(db, sys.stdin, sys.stdout, prompt=config.repl.prompt).run()
    finally:
        shutdown_tracing()


if __name__ == "__main__":
    sys.exit(main())
