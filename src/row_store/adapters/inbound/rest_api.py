"""REST API adapter for the row store.

This module provides a FastAPI-based REST API over a started Database.

Endpoints:
    GET /health - Health check
    GET /stats - Table statistics
    POST /rows - Append a row
    GET /rows - All rows in insertion order
    POST /execute - Execute a statement in the command language

Usage:
    from row_store.adapters.inbound.rest_api import create_app
    from row_store.application import Database

    db = Database()
    db.start()

    app = create_app(db)
    # Run with uvicorn: uvicorn app:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from row_store import __version__
from row_store.application import Database
from row_store.domain.entities import Row
from row_store.domain.value_objects import MAX_ROW_ID
from row_store.ports.inbound.execution_engine import ExecuteStatus, ExecutionResult


class RowModel(BaseModel):
    """A row as JSON."""

    id: int = Field(..., ge=0, le=MAX_ROW_ID, description="Unsigned 32-bit row id")
    username: str = Field(..., description="Username, at most 32 UTF-8 bytes")
    email: str = Field(..., description="Email, at most 255 UTF-8 bytes")

    @classmethod
    def from_row(cls, row: Row) -> RowModel:
        return cls(id=row.id, username=row.username, email=row.email)

    def to_row(self) -> Row:
        return Row(id=self.id, username=self.username, email=self.email)


class InsertResponse(BaseModel):
    """Response model for an insert."""

    success: bool = Field(..., description="Whether the row was appended")
    status: str = Field(..., description="Execution status")
    message: str = Field("", description="Status or error message")


class RowsResponse(BaseModel):
    """Response model for a full scan."""

    rows: list[RowModel] = Field(default_factory=list, description="Rows in insertion order")
    count: int = Field(0, description="Number of rows")


class StatementRequest(BaseModel):
    """Request model for statement execution."""

    statement: str = Field(..., description="Statement, e.g. 'insert 1 alice a@b.c' or 'select'")


class StatementResponse(BaseModel):
    """Response model for statement execution."""

    success: bool = Field(..., description="Whether the statement succeeded")
    status: str = Field(..., description="Execution status")
    message: str = Field("", description="Status or error message")
    rows: list[RowModel] = Field(default_factory=list, description="Result rows")
    affected_rows: int = Field(0, description="Number of affected rows")


class StatsResponse(BaseModel):
    """Response model for table statistics."""

    num_rows: int = Field(..., description="Rows stored")
    max_rows: int = Field(..., description="Row capacity")
    allocated_pages: int = Field(..., description="Pages allocated so far")
    max_pages: int = Field(..., description="Page slots")
    page_size: int = Field(..., description="Page size in bytes")
    row_size: int = Field(..., description="Row size in bytes")
    rows_per_page: int = Field(..., description="Rows per page")
    state: str = Field(..., description="empty, partial or full")


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")


# HTTP status for each rejected insert
_INSERT_ERROR_CODES: dict[ExecuteStatus, int] = {
    ExecuteStatus.TABLE_FULL: 409,
    ExecuteStatus.FIELD_TOO_LONG: 422,
    ExecuteStatus.INVALID_FIELD_VALUE: 422,
    ExecuteStatus.INVALID_ROW_INDEX: 500,
}


def _result_to_response(result: ExecutionResult) -> StatementResponse:
    """Convert ExecutionResult to StatementResponse."""
    return StatementResponse(
        success=result.success,
        status=result.status.value,
        message=result.message,
        rows=[RowModel.from_row(row) for row in result.rows],
        affected_rows=result.affected_rows,
    )


def create_app(db: Database) -> FastAPI:
    """Create a FastAPI application for the row store.

    Args:
        db: The database to serve.

    Returns:
        A configured FastAPI application.
    """
    app = FastAPI(
        title="Row Store API",
        description="REST API for appending and scanning rows",
        version=__version__,
    )

    def _require_started() -> None:
        if not db.is_started:
            raise HTTPException(status_code=503, detail="Database not started")

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(
            status="healthy" if db.is_started else "unhealthy",
            version=__version__,
        )

    @app.get("/stats", response_model=StatsResponse, tags=["Stats"])
    async def get_stats() -> StatsResponse:
        """Get table statistics."""
        _require_started()
        stats = db.get_stats()
        return StatsResponse(
            num_rows=stats["num_rows"],
            max_rows=stats["max_rows"],
            allocated_pages=stats["allocated_pages"],
            max_pages=stats["max_pages"],
            page_size=stats["page_size"],
            row_size=stats["row_size"],
            rows_per_page=stats["rows_per_page"],
            state=stats["state"],
        )

    @app.post(
        "/rows",
        response_model=InsertResponse,
        status_code=201,
        tags=["Rows"],
    )
    async def insert_row(request: RowModel) -> InsertResponse:
        """Append a row at the end of the table.

        Args:
            request: The row to append.

        Returns:
            The insert outcome.
        """
        _require_started()
        result = db.insert(request.to_row())
        if not result.success:
            raise HTTPException(
                status_code=_INSERT_ERROR_CODES.get(result.status, 400),
                detail={"status": result.status.value, "message": result.message},
            )
        return InsertResponse(success=True, status=result.status.value, message=result.message)

    @app.get("/rows", response_model=RowsResponse, tags=["Rows"])
    async def list_rows() -> RowsResponse:
        """Scan every row in insertion order."""
        _require_started()
        rows = [RowModel.from_row(row) for row in db.select()]
        return RowsResponse(rows=rows, count=len(rows))

    @app.post("/execute", response_model=StatementResponse, tags=["Statements"])
    async def execute_statement(request: StatementRequest) -> StatementResponse:
        """Execute a statement in the command language.

        Args:
            request: The statement request.

        Returns:
            The execution result.
        """
        _require_started()
        return _result_to_response(db.execute(request.statement))

    return app


def run_server(
    db: Database,
    host: str = "0.0.0.0",
    port: int = 8000,
) -> None:
    """Run the REST API server.

    Args:
        db: The database.
        host: Host to bind to.
        port: Port to bind to.
    """
    import uvicorn

    app = create_app(db)
    uvicorn.run(app, host=host, port=port)


def serve() -> None:
    """Console entry point: serve a fresh database over HTTP."""
    from row_store.infrastructure import (
        get_config,
        setup_logging,
        setup_metrics,
        setup_tracing,
        shutdown_tracing,
    )

    config = get_config()
    setup_logging(
        level=config.observability.log_level,
        log_format=config.observability.log_format,
    )
    setup_tracing(
        service_name=config.observability.otel_service_name,
        otlp_endpoint=config.observability.otel_endpoint,
    )

    metrics = setup_metrics(port=config.server.metrics_port)
    try:
        with Database.from_config(config, metrics=metrics) as db:
            run_server(db, host=config.server.host, port=config.server.port)
    finally:
        shutdown_tracing()


if __name__ == "__main__":
    serve()
