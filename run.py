"""Entry point for the Capsulify API server.

Serves the FastAPI application with Uvicorn.  Configuration such as
MONGO_URI, SECRET_KEY, HOST and PORT may be placed in a `.env` file in
the working directory or exported as environment variables.

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from capsulify_api.app.core.config import settings
from capsulify_api.app.main import app


async def run_api() -> None:
    """Start the API using Uvicorn on ``settings.host``:``settings.port``."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass
