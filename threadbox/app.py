"""
Threadbox - threaded comments service
Main FastAPI application
"""
import os
from fastapi import FastAPI

from threadbox.api.router import router as api_router
from threadbox.core.logger import configure_app_logging, get_logger
from threadbox.core.middleware import (
    SecurityHeadersMiddleware,
    RequestLoggingMiddleware,
)

# Configure application logging
configure_app_logging()

logger = get_logger(__name__)

DEBUG = os.getenv("THREADBOX_DEBUG", "false").lower() == "true"
app = FastAPI(title="Threadbox", debug=DEBUG)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)

app.include_router(api_router)

logger.info("Threadbox application initialized")
