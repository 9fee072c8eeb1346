"""
HTTP transport for the word catalog.

Endpoints:
- GET /api/words: one page of words; query-string parameters as for the get_words tool
- GET /api/attributes: filterable attributes and sortable fields
- /healthz: health check

Handlers are shared with the MCP server through handlers/word_handlers.py.
Other HTTP methods on these paths get 405 from the framework.
"""

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.status import HTTP_200_OK, HTTP_503_SERVICE_UNAVAILABLE

from config import DatabaseConfig
from database import DatabaseConnection
from handlers.word_handlers import get_words_config, list_word_attributes, run_words_query

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# Global state (initialized at startup)
db: Optional[DatabaseConnection] = None
app = FastAPI(title="Word List API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)


@app.get("/api/words")
async def get_words_endpoint(request: Request):
    """
    GET /api/words - one page of the word catalog.

    Returns:
    - 200 with {"query", "count", "words", "hasMore", "nextStartFrom"};
      nextStartFrom is null unless the page is ordered by text ascending
    - 400 for unknown sort/filter fields or an invalid sort direction
    - 501 when sampling is requested but the store cannot hash
    - 503 when the word store is unavailable (retryable)
    - 500 when the store returns rows that do not decode
    """
    params = dict(request.query_params)
    payload, status_code = await run_words_query(db, params)
    return JSONResponse(status_code=status_code, content=payload)


@app.get("/api/attributes")
async def get_attributes_endpoint():
    """GET /api/attributes - attribute domains and sortable fields."""
    return JSONResponse(content=list_word_attributes())


@app.get("/healthz")
async def health_check():
    """Health check endpoint"""
    try:
        if db and db.is_connected:
            if not await db.check_connection():
                return JSONResponse(
                    status_code=HTTP_503_SERVICE_UNAVAILABLE,
                    content={"status": "unhealthy", "database": "unreachable"}
                )

            hash_function = get_words_config().hash_function
            sampling = bool(hash_function) and await db.function_exists(hash_function)

            return JSONResponse(status_code=HTTP_200_OK, content={
                "status": "healthy",
                "database": "connected",
                "sampling": "available" if sampling else "unavailable",
                "pool": await db.get_pool_stats(),
            })
        else:
            return JSONResponse(
                status_code=HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unhealthy", "error": "Database not initialized"}
            )
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "error": str(e)}
        )


async def initialize_server():
    """Initialize database connection"""
    global db

    config = DatabaseConfig.from_environment()
    db = DatabaseConnection(config)
    await db.connect()

    logger.info(f"Connected to database: {config.database} at {config.host}")


async def shutdown_server():
    """Cleanup on shutdown"""
    global db
    if db:
        await db.disconnect()
        db = None
        logger.info("Database connection closed")


def run_http_server(host: str = "127.0.0.1", port: int = 3333):
    """
    Run the word list HTTP API.

    Args:
        host: Host to bind to
        port: Port to listen on
    """

    @app.on_event("startup")
    async def startup_event():
        await initialize_server()
        logger.info(f"Word List API starting on http://{host}:{port}/api/words")

    @app.on_event("shutdown")
    async def shutdown_event():
        await shutdown_server()

    uvicorn.run(app, host=host, port=port, log_level="info")
