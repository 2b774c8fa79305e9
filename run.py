"""Entry point for the Enrollment API.

Serves ``enrollment_api.app.main:app`` with uvicorn.  Host and port
are read from the ``HOST`` and ``PORT`` environment variables;
everything else (database path, ViaCEP URL, secret key) comes from
``enrollment_api.app.core.config``.  Settings can be placed in a
``.env`` file exported by your process manager.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from enrollment_api.app.main import app


async def main() -> None:
    """Start the API using Uvicorn.

    Defaults are ``0.0.0.0`` and ``8000``.
    """
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level="info")
    server = Server(config)
    try:
        await server.serve()
    except Exception:
        logging.exception("API server stopped with an error")
        raise


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
