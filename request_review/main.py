#!/usr/bin/env python3
"""
Registration Review Service: FastAPI приложение для проверки заявок на регистрацию.
"""

import logging
import uvicorn

from .app import create_app
from .config import Settings

logger = logging.getLogger(__name__)


def main() -> None:
    settings = Settings()
    settings.configure_logging()
    logger.info(f"🚀 Starting Registration Review on {settings.host}:{settings.port} (backend: {settings.api_base_url})")

    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level="debug" if settings.debug else "info")


if __name__ == "__main__":
    main()
