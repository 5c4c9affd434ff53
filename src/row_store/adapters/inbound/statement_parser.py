"""Statement parser for the row store command language.

Grammar:
    statement := "select"
               | "insert" <id> <username> <email>

Tokens are separated by whitespace, so usernames and emails cannot contain
spaces. The parser only builds the statement; whether the text columns fit
their fixed widths is checked by the executor.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from row_store.domain.entities import Row


class StatementType(Enum):
    """Type of statement."""

    INSERT = auto()
    SELECT = auto()


@dataclass(frozen=True)
class Statement:
    """Base class for parsed statements."""

    @property
    def statement_type(self) -> StatementType:
        raise NotImplementedError


@dataclass(frozen=True)
class InsertStatement(Statement):
    """Append one row."""

    row: Row

    @property
    def statement_type(self) -> StatementType:
        return StatementType.INSERT


@dataclass(frozen=True)
class SelectStatement(Statement):
    """Scan every row in insertion order."""

    @property
    def statement_type(self) -> StatementType:
        return StatementType.SELECT


class PrepareError(Exception):
    """Base class for statement preparation errors."""

    def __init__(self, message: str, line: str) -> None:
        super().__init__(message)
        self.line = line


class PrepareSyntaxError(PrepareError):
    """The keyword is known but its arguments are malformed."""

    pass


class UnrecognizedStatementError(PrepareError):
    """The line does not start with a known keyword."""

    pass


class StatementParser:
    """Parser that turns one input line into a Statement.

    Example:
        >>> parser = StatementParser()
        >>> parser.parse("insert 1 alice alice@example.com")
        InsertStatement(row=Row(id=1, username='alice', email='alice@example.com'))
        >>> parser.parse("select")
        SelectStatement()
    """

    INSERT_ARGUMENTS = 3

    def parse(self, line: str) -> Statement:
        """Parse a single statement.

        Args:
            line: The input line, with or without a trailing newline.

        Returns:
            The parsed statement.

        Raises:
            PrepareSyntaxError: If an insert has malformed arguments.
            UnrecognizedStatementError: If the keyword is unknown.
        """
        tokens = line.split()
        keyword = tokens[0] if tokens else ""

        if keyword == "select" and len(tokens) == 1:
            return SelectStatement()
        if keyword == "insert":
            return self._parse_insert(line, tokens[1:])

        raise UnrecognizedStatementError(
            f"Unrecognized keyword at start of '{line.strip()}'", line
        )

    def _parse_insert(self, line: str, args: list[str]) -> InsertStatement:
        if len(args) != self.INSERT_ARGUMENTS:
            raise PrepareSyntaxError(
                f"insert expects {self.INSERT_ARGUMENTS} arguments, got {len(args)}", line
            )

        raw_id, username, email = args
        try:
            row = Row(id=int(raw_id), username=username, email=email)
        except ValueError as e:
            raise PrepareSyntaxError(f"Invalid id '{raw_id}': {e}", line) from e

        return InsertStatement(row=row)
