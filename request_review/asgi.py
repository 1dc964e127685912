"""
ASGI entry point for uvicorn with hot reload support.
Creates the FastAPI app at import time so uvicorn can use --reload:

    uvicorn request_review.asgi:app --reload
"""
import logging

from .app import create_app
from .config import Settings

settings = Settings()
settings.configure_logging()

logger = logging.getLogger(__name__)

app = create_app(settings)
logger.info("✅ ASGI: application created")
