"""
Test Configuration and Fixtures

This module provides:
- A throwaway SQLite database per test run (sqlite+aiosqlite, file based)
- Table cleanup before every integration test
- The TestClient and user / admin login helpers

Architecture:
- Unit tests (test/**/unit/, marked ``unit``): mocked collaborators, no database
- Integration tests: real database through the repositories or the HTTP API
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read at import time (src.platform.config.core_setting)
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    db_dir = Path(tempfile.mkdtemp(prefix=f'booking_test_{worker_id}_'))
    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{db_dir / "test_booking.db"}'

    # Create test log directory
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ.setdefault('SECRET_KEY', 'test_secret_key')
    os.environ.setdefault('TIMEZONE', 'Europe/Paris')


# Call immediately to set env vars before any imports
_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import AsyncGenerator, Callable, Generator  # noqa: E402
from typing import Any  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import text  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from src.platform.config.core_setting import settings  # noqa: E402
from test.constants import (  # noqa: E402
    ADMIN_EMAIL,
    ADMIN_NAME,
    ANOTHER_USER_EMAIL,
    ANOTHER_USER_NAME,
    DEFAULT_PASSWORD,
    TEST_USER_EMAIL,
    TEST_USER_NAME,
)
from test.shared.utils import login_user, register_user  # noqa: E402


# =============================================================================
# Pytest Hooks: Detect test type and setup accordingly
# =============================================================================
def _is_unit_test_only_run(config: pytest.Config) -> bool:
    markexpr = config.getoption('markexpr', default='')
    if markexpr and 'unit' in str(markexpr) and 'not unit' not in str(markexpr):
        return True

    args = config.args or []
    test_paths = [arg for arg in args if arg and not arg.startswith('-')]
    return bool(test_paths and all('/unit/' in path or '\\unit\\' in path for path in test_paths))


def pytest_sessionstart(session: pytest.Session) -> None:
    if _is_unit_test_only_run(session.config):
        return

    asyncio.run(_setup_test_database())


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            # First, so the wipe runs before fixtures that register users
            item.fixturenames.insert(0, 'clean_database')  # type: ignore[attr-defined]


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
# Children first: booking rows reference users
_TABLES = ('booking', 'session', 'user')


async def _setup_test_database() -> None:
    from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine

    await create_db_and_tables()
    await dispose_engine()


async def _clean_all_tables() -> None:
    engine = create_async_engine(settings.DATABASE_URL_ASYNC, poolclass=NullPool)
    try:
        async with engine.begin() as conn:
            for table in _TABLES:
                await conn.execute(text(f'DELETE FROM "{table}"'))
    finally:
        await engine.dispose()


# =============================================================================
# Integration Test Fixtures
# =============================================================================
@pytest.fixture(scope='function')
async def clean_database() -> AsyncGenerator[None, None]:
    await _clean_all_tables()
    yield


@pytest.fixture
def execute_sql_statement() -> Callable[..., list[dict[str, Any]] | None]:
    def _execute(
        statement: str, params: dict[str, Any] | None = None, fetch: bool = False
    ) -> list[dict[str, Any]] | None:
        async def _run() -> list[dict[str, Any]] | None:
            engine = create_async_engine(settings.DATABASE_URL_ASYNC, poolclass=NullPool)
            try:
                async with engine.begin() as conn:
                    result = await conn.execute(text(statement), params or {})
                    if fetch:
                        return [dict(row._mapping) for row in result]
                return None
            finally:
                await engine.dispose()

        return asyncio.run(_run())

    return _execute


# =============================================================================
# Session-scoped Fixtures
# =============================================================================
@pytest.fixture(scope='session')
def client() -> Generator[TestClient, None, None]:
    from test.test_main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def clear_client_cookies(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    # Skip for unit tests - they don't use the HTTP client
    if 'unit' in [m.name for m in request.node.iter_markers()]:
        yield
        return
    client = request.getfixturevalue('client')
    client.cookies.clear()
    yield
    client.cookies.clear()


# =============================================================================
# User Fixtures (tables are wiped before each integration test)
# =============================================================================
@pytest.fixture
def test_user(client: TestClient, clean_database: None) -> dict[str, Any]:
    return register_user(client, TEST_USER_EMAIL, DEFAULT_PASSWORD, TEST_USER_NAME)


@pytest.fixture
def another_user(client: TestClient, clean_database: None) -> dict[str, Any]:
    return register_user(client, ANOTHER_USER_EMAIL, DEFAULT_PASSWORD, ANOTHER_USER_NAME)


@pytest.fixture
def admin_user(
    client: TestClient, clean_database: None, execute_sql_statement: Callable[..., Any]
) -> dict[str, Any]:
    """Self sign-up only creates plain users; promote one directly in the database"""
    created = register_user(client, ADMIN_EMAIL, DEFAULT_PASSWORD, ADMIN_NAME)
    execute_sql_statement(
        'UPDATE "user" SET role = :role WHERE id = :id', {'role': 'admin', 'id': created['id']}
    )
    return created | {'role': 'admin'}


@pytest.fixture
def logged_in_user(client: TestClient, test_user: dict[str, Any]) -> dict[str, Any]:
    login_user(client, TEST_USER_EMAIL, DEFAULT_PASSWORD)
    return test_user


@pytest.fixture
def logged_in_admin(client: TestClient, admin_user: dict[str, Any]) -> dict[str, Any]:
    login_user(client, ADMIN_EMAIL, DEFAULT_PASSWORD)
    return admin_user
