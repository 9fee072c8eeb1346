"""
Database initialization script
Run this to set up the words schema and load word data

Usage:
    python utils/init_db.py init [--force]
    python utils/init_db.py seed <words.json|words.csv>
"""

import asyncio
import csv
import json
import logging
import sys
from pathlib import Path
from typing import Iterable

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from database import DatabaseConnection, DatabaseMigration
from config import DatabaseConfig
from models import WordRecord
from query.attributes import ATTRIBUTES, PROJECTION, TEXT_COLUMN

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

SCHEMA_FILE = Path(__file__).parent.parent / "schema.sql"

UPSERT_WORD_SQL = (
    f"INSERT INTO words ({', '.join(PROJECTION)}) "
    f"VALUES ({', '.join(f'${i}' for i in range(1, len(PROJECTION) + 1))}) "
    f"ON CONFLICT ({TEXT_COLUMN}) DO UPDATE SET "
    + ", ".join(f"{attr.column} = EXCLUDED.{attr.column}" for attr in ATTRIBUTES.values())
)


def load_word_file(path: Path) -> list[WordRecord]:
    """
    Read words from a JSON array or a CSV file with a header row.
    Keys may be public names (culturalSensitivity) or column names (culturalsensitivity).
    """
    if path.suffix.lower() == ".json":
        with open(path, 'r', encoding='utf-8') as f:
            items = json.load(f)
    else:
        with open(path, 'r', encoding='utf-8', newline='') as f:
            items = list(csv.DictReader(f))

    words = []
    for item in items:
        values = {"text": item["text"]}
        for name, attr in ATTRIBUTES.items():
            raw = item.get(name, item.get(attr.column, 0))
            values[attr.field_name] = int(raw or 0)
        words.append(WordRecord(**values))
    return words


def word_rows(words: Iterable[WordRecord]) -> list[tuple]:
    """Rows in PROJECTION column order."""
    return [
        (word.text, *(getattr(word, attr.field_name) for attr in ATTRIBUTES.values()))
        for word in words
    ]


async def insert_words(db: DatabaseConnection, words: Iterable[WordRecord]) -> int:
    """Upsert words; returns the number written"""
    rows = word_rows(words)
    if rows:
        await db.execute_many(UPSERT_WORD_SQL, rows)
    return len(rows)


async def initialize_database(config: DatabaseConfig, force: bool = False):
    """Initialize database with schema"""
    logger.info("Starting database initialization...")

    db = DatabaseConnection(config)
    await db.connect()

    try:
        migration = DatabaseMigration(db)

        if await migration.check_schema_exists():
            logger.warning("⚠️  Words schema already exists!")

            if not force:
                response = input("Do you want to recreate the words table? This will DELETE ALL WORDS! (yes/no): ")
                if response.lower() != 'yes':
                    logger.info("Aborted.")
                    return

            logger.warning("Dropping existing words table...")
            await db.execute("DROP TABLE IF EXISTS words")

        await migration.apply_schema(str(SCHEMA_FILE))

        logger.info("✅ Database initialized successfully!")

    except Exception as e:
        logger.error(f"❌ Initialization failed: {e}")
        raise
    finally:
        await db.disconnect()


async def seed_words(config: DatabaseConfig, source: Path):
    """Load words from a JSON or CSV file"""
    logger.info(f"Seeding words from {source}...")

    words = load_word_file(source)

    db = DatabaseConnection(config)
    await db.connect()

    try:
        count = await insert_words(db, words)
        logger.info(f"✅ Loaded {count} words")
    except Exception as e:
        logger.error(f"❌ Seeding failed: {e}")
        raise
    finally:
        await db.disconnect()


async def main():
    """Main entry point"""
    try:
        config = DatabaseConfig.from_environment()
        logger.info(f"Connecting to: {config.host}:{config.port}/{config.database}")
    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        logger.info("Make sure you have a .env file or environment variables set.")
        sys.exit(1)

    if len(sys.argv) > 1:
        command = sys.argv[1]
        force = "--force" in sys.argv or "-f" in sys.argv

        if command == "init":
            await initialize_database(config, force=force)
        elif command == "seed" and len(sys.argv) > 2:
            await seed_words(config, Path(sys.argv[2]))
        else:
            logger.error(f"Unknown command: {' '.join(sys.argv[1:])}")
            print("Usage: python init_db.py [init [--force] | seed <file>]")
            sys.exit(1)
    else:
        print("Usage: python init_db.py [command] [--force]")
        print("\nCommands:")
        print("  init         - Create the words table and hash function")
        print("  seed <file>  - Upsert words from a JSON array or CSV file")
        print("\nOptions:")
        print("  --force, -f  - Skip confirmation prompt and recreate the table")


if __name__ == "__main__":
    asyncio.run(main())
