"""Inbound adapters for the row store.

Inbound adapters handle incoming requests and convert them to
internal domain operations.

Exports:
    Statement Parser:
        - StatementParser: Parser that converts text lines to statements
        - Statement, InsertStatement, SelectStatement: Parsed statements
        - PrepareError, PrepareSyntaxError, UnrecognizedStatementError

    The REPL (row_store.adapters.inbound.repl) and the REST API
    (row_store.adapters.inbound.rest_api) are imported by module path.
"""

from row_store.adapters.inbound.statement_parser import (
    InsertStatement,
    PrepareError,
    PrepareSyntaxError,
    SelectStatement,
    Statement,
    StatementParser,
    StatementType,
    UnrecognizedStatementError,
)

__all__ = [
    "StatementParser",
    "Statement",
    "StatementType",
    "InsertStatement",
    "SelectStatement",
    "PrepareError",
    "PrepareSyntaxError",
    "UnrecognizedStatementError",
]
