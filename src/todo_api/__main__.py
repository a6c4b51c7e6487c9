"""
Run the Todo API with uvicorn.

Usage:
    python -m todo_api
    todo-api
"""
from __future__ import annotations

import structlog
import uvicorn

from .logging_config import configure_logging
from .settings import get_settings


# PUBLIC_INTERFACE
def main() -> None:
    """Configure logging from settings and serve the app until interrupted."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    logger = structlog.get_logger(__name__)

    from .main import create_app

    app = create_app(settings=settings)
    logger.info("server_starting", host=settings.host, port=settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level)


if __name__ == "__main__":
    main()
