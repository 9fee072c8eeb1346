"""
Configuration for the word list server
Supports local development, testing, and production deployment
Environment-aware configuration based on APP_ENV
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv

from query.builder import DEFAULT_HASH_FUNCTION, is_sql_identifier
from query.model import DEFAULT_LIMIT, MAX_LIMIT

logger = logging.getLogger(__name__)

# Environment modes
EnvironmentMode = Literal["development", "test", "production"]


def load_app_environment(mode: Optional[str] = None) -> str:
    """
    Load environment variables from the appropriate .env file.

    Priority:
    1. Explicit 'mode' argument
    2. APP_ENV environment variable
    3. Default to 'development'

    Loads .env.{mode} if it exists.
    """
    if not mode:
        mode = os.getenv('APP_ENV', 'development')

    base_path = Path(__file__).parent
    env_file = base_path / f'.env.{mode}'

    if env_file.exists():
        logger.info(f"Loading config from {env_file}")
        # override=False lets variables from the host take precedence over .env values
        load_dotenv(env_file, override=False)
    else:
        logger.debug(f"No config file found for mode '{mode}' at {env_file}")

    return mode


@dataclass
class DatabaseConfig:
    """PostgreSQL database configuration"""

    host: str
    port: int
    database: str
    user: str
    password: str

    # Connection pool settings
    min_pool_size: int = 1
    max_pool_size: int = 10
    command_timeout: int = 30  # seconds

    ssl_mode: str = "require"

    @classmethod
    def from_environment(cls, mode: Optional[EnvironmentMode] = None) -> 'DatabaseConfig':
        """
        Load configuration from environment variables

        Environment variables:
        - APP_ENV: Environment mode (development, test, production)
        - DB_HOST: Database host (default: localhost)
        - DB_PORT: Database port (default: 5432)
        - DB_NAME: Database name (default: wordlist)
        - DB_USER: Database user
        - DB_PASSWORD: Database password
        - DB_SSL_MODE: SSL mode (default: prefer in development, require otherwise)
        - DB_MIN_POOL_SIZE / DB_MAX_POOL_SIZE: Connection pool bounds
        - DB_COMMAND_TIMEOUT: Per-statement timeout in seconds

        Args:
            mode: Override environment mode (default: reads from APP_ENV)
        """
        mode = load_app_environment(mode)

        default_ssl = 'prefer' if mode in ('development', 'test') else 'require'
        config = cls(
            host=os.getenv('DB_HOST', 'localhost'),
            port=int(os.getenv('DB_PORT', '5432')),
            database=os.getenv('DB_NAME', 'wordlist_test' if mode == 'test' else 'wordlist'),
            user=os.getenv('DB_USER', 'postgres'),
            password=os.getenv('DB_PASSWORD', ''),
            ssl_mode=os.getenv('DB_SSL_MODE', default_ssl),
            min_pool_size=int(os.getenv('DB_MIN_POOL_SIZE', '1')),
            max_pool_size=int(os.getenv('DB_MAX_POOL_SIZE', '10')),
            command_timeout=int(os.getenv('DB_COMMAND_TIMEOUT', '30')),
        )

        config.validate_safety(mode)

        return config

    def validate_safety(self, mode: str):
        """Ensure configuration is safe for the requested mode"""
        if mode == 'test':
            if 'test' not in self.database:
                raise ValueError(f"SAFETY ERROR: Test mode requested but database is '{self.database}'. Test database must contain 'test'.")
            if 'prod' in self.database:
                raise ValueError(f"SAFETY ERROR: Test mode requested but database '{self.database}' appears to be production.")

    @classmethod
    def for_local_development(cls) -> 'DatabaseConfig':
        """Configuration for local PostgreSQL instance"""
        return cls(
            host='localhost',
            port=5432,
            database='wordlist',
            user='postgres',
            password='postgres',
            ssl_mode='prefer',  # Less strict for local
            min_pool_size=1,
            max_pool_size=5,
        )

    @classmethod
    def for_testing(cls) -> 'DatabaseConfig':
        """Configuration for test PostgreSQL database"""
        return cls(
            host='localhost',
            port=5432,
            database='wordlist_test',
            user='postgres',
            password='postgres',
            ssl_mode='prefer',
            min_pool_size=1,
            max_pool_size=5,
        )


@dataclass
class WordsConfig:
    """
    Query engine settings.

    Environment Variables:
    - WORDS_HASH_FUNCTION: Store-side 64-bit hash used for sampling (default: fnv64).
      Empty disables random sampling.
    - WORDS_DEFAULT_LIMIT: Page size when the caller gives none (default: 100)
    - WORDS_MAX_LIMIT: Largest page size a caller may request (default: 1000)
    - WORDS_QUERY_TIMEOUT: Seconds allowed for the page query (default: unset, pool timeout applies)
    """
    hash_function: Optional[str] = DEFAULT_HASH_FUNCTION
    default_limit: int = DEFAULT_LIMIT
    max_limit: int = MAX_LIMIT
    query_timeout: Optional[float] = None

    def __post_init__(self):
        if self.hash_function and not is_sql_identifier(self.hash_function):
            raise ValueError(f"WORDS_HASH_FUNCTION must be a plain SQL identifier, got '{self.hash_function}'")
        if self.default_limit < 1 or self.max_limit < 1:
            raise ValueError("Page size limits must be positive")
        if self.default_limit > self.max_limit:
            raise ValueError(f"WORDS_DEFAULT_LIMIT ({self.default_limit}) exceeds WORDS_MAX_LIMIT ({self.max_limit})")

    @property
    def sampling_enabled(self) -> bool:
        return bool(self.hash_function)

    @classmethod
    def from_environment(cls) -> "WordsConfig":
        timeout = os.getenv("WORDS_QUERY_TIMEOUT", "").strip()
        return cls(
            hash_function=os.getenv("WORDS_HASH_FUNCTION", DEFAULT_HASH_FUNCTION).strip() or None,
            default_limit=int(os.getenv("WORDS_DEFAULT_LIMIT", str(DEFAULT_LIMIT))),
            max_limit=int(os.getenv("WORDS_MAX_LIMIT", str(MAX_LIMIT))),
            query_timeout=float(timeout) if timeout else None,
        )


# Utility functions
def get_environment_mode() -> EnvironmentMode:
    """Get current environment mode from APP_ENV variable"""
    mode = os.getenv('APP_ENV', 'development').lower()
    if mode not in ('development', 'test', 'production'):
        mode = 'development'
    return mode  # type: ignore
