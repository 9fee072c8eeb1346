"""
MCP Server Entry Point for the Word List catalog
Run with: python server.py
"""

import asyncio
import logging
import sys
from typing import Any, Optional

from mcp.server.models import InitializationOptions
from mcp.server import NotificationOptions, Server
from mcp.server.stdio import stdio_server
from mcp import types

from database import DatabaseConnection
from config import DatabaseConfig, get_environment_mode

__version__ = "1.0.0"

# Initialize logging (stderr; stdout carries the MCP stream)
logging.basicConfig(level=logging.INFO, stream=sys.stderr)
logger = logging.getLogger(__name__)

# Initialize server
app = Server("wordlist-mcp-server")
db: Optional[DatabaseConnection] = None


@app.list_tools()
async def handle_list_tools() -> list[types.Tool]:
    """
    List available MCP tools.

    - get_words: filtered, cursor-paginated, optionally sampled word lookup
    - list_word_attributes: attribute domains and sortable fields
    """
    from tools import get_core_tool_catalog
    return get_core_tool_catalog()


@app.call_tool()
async def handle_call_tool(
    name: str, arguments: dict[str, Any]
) -> list[types.TextContent]:
    """
    Handle tool execution.

    Word lookups are read-only and stateless, so calls run fully concurrently.
    All tool handlers are organized in the handlers/ directory.
    """
    try:
        from handlers import get_handler

        handler_info = get_handler(name)

        if not handler_info:
            return [types.TextContent(
                type="text",
                text=f"Unknown tool: {name}"
            )]

        handler, needs_db = handler_info
        if needs_db:
            return await handler(db, arguments or {})
        return await handler(arguments or {})

    except Exception as e:
        logger.error(f"Error executing tool {name}: {e}", exc_info=True)
        from utils.error_messages import enhance_error_message
        enhanced_msg = enhance_error_message(e)
        return [types.TextContent(
            type="text",
            text=f"Error executing {name}: {enhanced_msg}"
        )]


async def main():
    """Main entry point for MCP server"""
    global db

    try:
        # config.py handles loading .env.{mode} based on APP_ENV
        config = DatabaseConfig.from_environment()
        env_mode = get_environment_mode()

        db = DatabaseConnection(config)
        await db.connect()

        logger.info("Word List MCP Server starting...")
        logger.info(f"Environment: {env_mode}")
        logger.info(f"Connected to database: {config.database} at {config.host}")

        async with stdio_server() as (read_stream, write_stream):
            await app.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name="wordlist-mcp-server",
                    server_version=__version__,
                    capabilities=app.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={}
                    )
                )
            )
    except Exception as e:
        logger.error(f"Failed to start MCP server: {e}", exc_info=True)
        raise
    finally:
        if db:
            await db.disconnect()
            logger.info("Database connection closed")


def cli_entry():
    """Entry point for console script - wraps async main()"""
    import argparse

    parser = argparse.ArgumentParser(description="Word List Server")
    parser.add_argument('--version', '-v', action='store_true', help='Show version')
    parser.add_argument('--http', action='store_true', help='Run the HTTP API (GET /api/words) instead of MCP stdio')
    parser.add_argument('--port', type=int, default=3333, help='Port for HTTP mode (default: 3333)')
    parser.add_argument('--host', type=str, default='127.0.0.1', help='Host for HTTP mode (default: 127.0.0.1)')

    args = parser.parse_args()

    if args.version:
        print(f"wordlist-server version {__version__}")
        sys.exit(0)

    if args.http:
        logger.info(f"Starting in HTTP mode on {args.host}:{args.port}")
        from transport.http import run_http_server
        run_http_server(host=args.host, port=args.port)
    else:
        logger.info("Starting in stdio mode...")
        asyncio.run(main())


if __name__ == "__main__":
    cli_entry()
