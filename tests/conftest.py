"""
Pytest configuration and shared fixtures for the word list server tests

Two kinds of fixtures:
- fake_db: an in-memory stand-in for DatabaseConnection that records every
  query and returns canned rows. Used by builder/fetcher/handler tests.
- db_connection: a real DatabaseConnection against a fresh PostgreSQL test
  database with schema.sql applied. Tests using it are skipped when
  PostgreSQL is unreachable.
"""

import asyncio
import os
import sys
from pathlib import Path

import asyncpg
import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config import DatabaseConfig
from database import DatabaseConnection
from tests.test_config import SAMPLE_WORDS, SCHEMA_FILE, TEST_DB_CONFIG
from tests.word_fixtures import FakeDatabase
from utils.init_db import UPSERT_WORD_SQL


def pytest_configure(config):
    """
    Pytest hook called before test collection.
    """
    # Mark that we're in test mode
    os.environ['PYTEST_RUNNING'] = '1'
    os.environ.setdefault('APP_ENV', 'test')


@pytest.fixture
def fake_db():
    """Factory for FakeDatabase instances: fake_db(rows=[...], error=...)."""
    def _make(rows=None, error=None, connected=True):
        return FakeDatabase(rows=rows, error=error, connected=connected)
    return _make


# ============================================================================
# PostgreSQL test database
# ============================================================================

async def _connect_admin():
    return await asyncpg.connect(
        host=TEST_DB_CONFIG['host'],
        port=TEST_DB_CONFIG['port'],
        user=TEST_DB_CONFIG['user'],
        password=TEST_DB_CONFIG['password'],
        database='postgres',
        ssl='prefer',
        timeout=5,
    )


async def _create_test_database():
    """Create test database; skip the test if PostgreSQL is unreachable"""
    try:
        sys_conn = await _connect_admin()
    except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError, asyncio.TimeoutError) as e:
        pytest.skip(f"PostgreSQL not available for integration tests: {e}")

    try:
        await sys_conn.execute(f'DROP DATABASE IF EXISTS {TEST_DB_CONFIG["database"]}')
        await sys_conn.execute(f'CREATE DATABASE {TEST_DB_CONFIG["database"]}')
    finally:
        await sys_conn.close()


async def _drop_test_database():
    """Drop the test database"""
    sys_conn = await _connect_admin()
    try:
        await sys_conn.execute(f"""
            SELECT pg_terminate_backend(pg_stat_activity.pid)
            FROM pg_stat_activity
            WHERE pg_stat_activity.datname = '{TEST_DB_CONFIG["database"]}'
              AND pid <> pg_backend_pid()
        """)
        await sys_conn.execute(f'DROP DATABASE IF EXISTS {TEST_DB_CONFIG["database"]}')
    finally:
        await sys_conn.close()


@pytest.fixture(scope="function")
async def db_connection():
    """
    DatabaseConnection against a fresh test database with schema.sql applied.
    Same connection class the handlers use in production.
    """
    await _create_test_database()

    config = DatabaseConfig(
        host=TEST_DB_CONFIG['host'],
        port=TEST_DB_CONFIG['port'],
        database=TEST_DB_CONFIG['database'],
        user=TEST_DB_CONFIG['user'],
        password=TEST_DB_CONFIG['password'],
        ssl_mode='prefer',
        min_pool_size=1,
        max_pool_size=5,
    )
    config.validate_safety('test')

    db = DatabaseConnection(config)
    await db.connect()

    with open(SCHEMA_FILE, 'r', encoding='utf-8') as f:
        await db.execute(f.read())

    yield db

    # Teardown
    await db.disconnect()
    await _drop_test_database()


@pytest.fixture(scope="function")
async def seeded_db(db_connection):
    """Test database loaded with SAMPLE_WORDS"""
    await db_connection.execute_many(UPSERT_WORD_SQL, SAMPLE_WORDS)
    yield db_connection
