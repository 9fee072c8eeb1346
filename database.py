"""
Database connection management and utilities
Async PostgreSQL operations using asyncpg
"""

import asyncpg
import logging
from typing import Optional, List, Dict, Any
from contextlib import asynccontextmanager

from config import DatabaseConfig

logger = logging.getLogger(__name__)


class DatabaseNotConnectedError(RuntimeError):
    """Raised when a connection is requested before connect() or after disconnect()"""


class DatabaseConnection:
    """
    Manages PostgreSQL connection pool and provides database operations
    """

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self.pool: Optional[asyncpg.Pool] = None

    async def connect(self):
        """Initialize connection pool"""
        if self.pool is not None:
            logger.warning("Connection pool already initialized")
            return

        try:
            # asyncpg expects: True (require SSL), False (disable SSL), or 'prefer'
            if self.config.ssl_mode == 'require':
                ssl_setting = True
            elif self.config.ssl_mode == 'disable':
                ssl_setting = False
            else:
                ssl_setting = 'prefer'

            self.pool = await asyncpg.create_pool(
                host=self.config.host,
                port=self.config.port,
                database=self.config.database,
                user=self.config.user,
                password=self.config.password,
                min_size=self.config.min_pool_size,
                max_size=self.config.max_pool_size,
                command_timeout=self.config.command_timeout,
                ssl=ssl_setting,
            )

            logger.info(f"✅ Connected to PostgreSQL at {self.config.host}:{self.config.port}")

        except Exception as e:
            logger.error(f"❌ Failed to connect to database: {e}")
            raise

    async def disconnect(self):
        """Close connection pool"""
        if self.pool is not None:
            await self.pool.close()
            self.pool = None
            logger.info("Database connection pool closed")

    @property
    def is_connected(self) -> bool:
        return self.pool is not None

    @asynccontextmanager
    async def acquire(self):
        """
        Acquire a connection from the pool for the duration of one operation.

        Usage:
            async with db.acquire() as conn:
                rows = await conn.fetch("SELECT text FROM words WHERE text > $1", "")

        The connection is returned to the pool on every exit path; on error it
        is reset first so the next borrower gets a clean session.
        """
        if self.pool is None:
            raise DatabaseNotConnectedError("Database not connected. Call connect() first.")

        async with self.pool.acquire() as connection:
            try:
                yield connection
            except Exception as e:
                logger.error(f"Error during database operation: {e}", exc_info=True)
                try:
                    await connection.reset()
                except Exception as reset_error:
                    logger.error(f"Failed to reset connection: {reset_error}")
                raise

    async def execute(
        self,
        query: str,
        *args,
        timeout: Optional[float] = None
    ) -> str:
        """
        Execute a query without returning results

        Returns:
            Status string (e.g., "INSERT 0 1")
        """
        async with self.acquire() as conn:
            return await conn.execute(query, *args, timeout=timeout)

    async def execute_many(
        self,
        query: str,
        args_list: List[tuple],
        timeout: Optional[float] = None
    ):
        """Execute a query once per parameter tuple"""
        async with self.acquire() as conn:
            await conn.executemany(query, args_list, timeout=timeout)

    async def fetch(
        self,
        query: str,
        *args,
        timeout: Optional[float] = None
    ) -> List[asyncpg.Record]:
        """
        Fetch multiple rows

        Args:
            query: SQL query
            *args: Query parameters
            timeout: Query timeout in seconds

        Returns:
            List of records
        """
        async with self.acquire() as conn:
            return await conn.fetch(query, *args, timeout=timeout)

    async def fetchval(
        self,
        query: str,
        *args,
        column: int = 0,
        timeout: Optional[float] = None
    ) -> Any:
        """Fetch a single value"""
        async with self.acquire() as conn:
            return await conn.fetchval(query, *args, column=column, timeout=timeout)

    async def check_connection(self) -> bool:
        """
        Check if database connection is healthy

        Returns:
            True if connection is healthy
        """
        try:
            result = await self.fetchval("SELECT 1")
            return result == 1
        except Exception as e:
            logger.error(f"Connection check failed: {e}")
            return False

    async def function_exists(self, name: str) -> bool:
        """Check whether a SQL function is callable in the current search path"""
        return await self.fetchval("SELECT to_regproc($1) IS NOT NULL", name)

    async def get_pool_stats(self) -> Dict[str, Any]:
        """
        Get connection pool statistics for monitoring.

        Returns:
            Dictionary with pool stats (size, free connections, etc.)
        """
        if self.pool is None:
            return {
                'status': 'disconnected',
                'size': 0,
                'freesize': 0
            }

        return {
            'status': 'connected',
            'size': self.pool.get_size(),
            'freesize': self.pool.get_idle_size(),
            'min_size': self.config.min_pool_size,
            'max_size': self.config.max_pool_size
        }

    async def get_all_tables(self) -> List[str]:
        """
        Get list of all tables in the database

        Returns:
            List of table names
        """
        query = """
            SELECT table_name
            FROM information_schema.tables
            WHERE table_schema = 'public'
            AND table_type = 'BASE TABLE'
            ORDER BY table_name
        """
        result = await self.fetch(query)
        return [row['table_name'] for row in result]


class DatabaseMigration:
    """
    Handle database schema setup
    """

    def __init__(self, db: DatabaseConnection):
        self.db = db

    async def apply_schema(self, schema_file: str):
        """
        Apply database schema from SQL file
        Executes the entire schema file in a single transaction

        Args:
            schema_file: Path to schema.sql file
        """
        logger.info(f"Applying schema from {schema_file}...")

        with open(schema_file, 'r', encoding='utf-8') as f:
            schema_sql = f.read()

        try:
            async with self.db.acquire() as conn:
                async with conn.transaction():
                    await conn.execute(schema_sql)
            logger.info("✅ Schema applied successfully")
        except Exception as e:
            logger.error(f"❌ Failed to apply schema: {e}")
            raise

    async def check_schema_exists(self) -> bool:
        """Check if the words table exists"""
        tables = await self.db.get_all_tables()
        return 'words' in tables
