#!/usr/bin/env python3
"""
Main entry point for the TinyLink service.

The link store is chosen once at startup: DATABASE_URL selects PostgreSQL,
otherwise the SQLite file DB_FILE is used.

Usage:
    python app.py

Environment variables:
    DATABASE_URL - PostgreSQL connection URL (optional)
    DB_FILE - SQLite database file (default tinylink.db)
    REDIS_URL - Redis connection URL (optional)
    BASE_URL - Base URL for short links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from tinylink.database import RedisCache, get_link_store
from tinylink.service import TinyLinkService
from tinylink.shortcode import ShortCodeGenerator
from tinylink.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting TinyLink service...")

    db_instance = get_link_store(
        config.storage_target,
        logger=logger,
        pool_max_size=config.pool_max_size,
        connection_timeout_seconds=config.connection_timeout_seconds,
    )
    logger.info(f"Using {db_instance.backend_name} link store")
    await db_instance.initialize()

    if config.redis_url:
        logger.info(f"Connecting to Redis at {config.redis_url}")
        cache_instance = RedisCache(
            redis_url=config.redis_url,
            ttl_seconds=config.cache_ttl_seconds,
            logger=logger,
        )
        await cache_instance.connect()
    else:
        logger.info("Redis caching disabled")
        cache_instance = None

    generator = ShortCodeGenerator(default_length=config.short_code_length)
    service_instance = TinyLinkService(
        db=db_instance,
        cache=cache_instance,
        short_code_generator=generator,
        logger=logger,
        short_code_length=config.short_code_length,
        escalate_after=config.escalate_after,
        max_generation_attempts=config.max_generation_attempts,
    )

    app.state.db = db_instance
    app.state.cache = cache_instance
    app.state.service = service_instance

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down TinyLink service...")
    await service_instance.close()
    logger.info("Service stopped")


def build_app(config=None) -> FastAPI:
    """Create the FastAPI app wired to the startup/shutdown lifespan."""
    config = config or load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    app = create_app(
        db_instance=None,  # Set in lifespan
        cache_instance=None,
        service_instance=None,
        config=config,
    )
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    return app


def main():
    """Main entry point."""
    config = load_config()
    app = build_app(config)
    logger = app.state.logger

    logger.info("TinyLink Service")
    logger.info(f"Configuration: {config.model_dump(exclude={'database_url', 'redis_url'})}")

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"TinyLink server running at http://{config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
