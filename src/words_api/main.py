"""FastAPI application entry point."""

import logging

from fastapi import FastAPI

from common.cli_helpers import setup_logging
from common.config import get_config
from words_api.routers import health, stats

logger = logging.getLogger(__name__)

app = FastAPI(
    title="New Words API",
    description="Word frequency statistics for the publisher's RSS feed",
    version="1.0.0",
)

app.include_router(health.router)
app.include_router(stats.router)


@app.get("/")
async def root():
    """API root - returns basic info."""
    return {
        "name": "New Words API",
        "version": "1.0.0",
        "docs": "/docs",
    }


def main():
    """Run the API server."""
    import uvicorn

    setup_logging()
    config = get_config()
    uvicorn.run(
        "words_api.main:app",
        host=config.server.host,
        port=config.server.port,
    )


if __name__ == "__main__":
    main()
