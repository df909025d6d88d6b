from __future__ import annotations

import logging

import uvicorn

from app.core.config import get_settings
from app.main import create_app

logger = logging.getLogger(__name__)


def run() -> None:
    settings = get_settings()
    app = create_app()
    logger.info("Server listening on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
