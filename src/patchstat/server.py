import argparse
import logging
import socket
from typing import Optional

import uvicorn
from fastapi import FastAPI

from patchstat import __version__
from patchstat.api.router import create_api_router
from patchstat.config import Settings, configure_logging, settings

logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create the FastAPI application serving the diff API."""
    app = FastAPI(title="patchstat", version=__version__)
    app.include_router(create_api_router(app_settings))
    return app


def get_free_port() -> int:
    """Get a free port number."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("", 0))
        s.listen(1)
        port = s.getsockname()[1]
    return port


app = create_app()


def main() -> None:
    """Entry point for the patchstat-server command."""
    parser = argparse.ArgumentParser(description="Unified diff summary server")
    parser.add_argument("--host", default=settings.host, help="Host to bind (default: %(default)s)")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to run the server on (default: random)")
    args = parser.parse_args()

    configure_logging(settings.debug)
    port = args.port or get_free_port()
    logger.info("Diff server available at: http://%s:%d", args.host, port)
    uvicorn.run(app, host=args.host, port=port)


if __name__ == "__main__":
    main()
