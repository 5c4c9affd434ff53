"""Pytest configuration and fixtures for row_store tests."""

from __future__ import annotations

from typing import Generator

import pytest
from prometheus_client import CollectorRegistry

from row_store.application import Database, Executor, create_table
from row_store.domain.services import Table
from row_store.domain.value_objects import ROW_SIZE, TableLayout
from row_store.infrastructure.config import Config, StorageConfig
from row_store.infrastructure.metrics import MetricsRegistry

# Two rows per page, three pages: six rows in total
SMALL_LAYOUT = TableLayout(page_size=ROW_SIZE * 2 + 10, max_pages=3)


@pytest.fixture
def table() -> Generator[Table, None, None]:
    """Provide an empty table with the default layout."""
    with create_table() as t:
        yield t


@pytest.fixture
def small_table() -> Generator[Table, None, None]:
    """Provide an empty table that fills up after six rows."""
    with create_table(SMALL_LAYOUT) as t:
        yield t


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def executor(metrics_registry: MetricsRegistry) -> Executor:
    """Provide an executor that records into the test registry."""
    return Executor(metrics=metrics_registry)


@pytest.fixture
def database() -> Generator[Database, None, None]:
    """Provide a started database with the default layout."""
    with Database() as db:
        yield db


@pytest.fixture
def test_config() -> Config:
    """Provide a test configuration with a small table."""
    return Config(
        storage=StorageConfig(
            page_size=SMALL_LAYOUT.page_size,
            table_max_pages=SMALL_LAYOUT.max_pages,
        ),
    )


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow tests")
