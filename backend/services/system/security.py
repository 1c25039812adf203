"""
Security service for handling Rate Limiting and other security extensions.
"""
import os
from flask import Flask
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from backend.services.system.logger_service import get_logger

logger = get_logger(__name__)

LIMITER_KEY = "rate_limiter"


def get_limiter_storage_uri():
    return os.getenv("RATELIMIT_STORAGE_URI") or "memory://"


def configure_limiter(app: Flask, enabled: bool = True) -> Limiter:
    """
    Create a limiter and bind it to the app instance.
    Storage defaults to in-process memory unless RATELIMIT_STORAGE_URI is set.

    Route decorators only hold a weak reference to the limiter, so the app
    keeps the strong one for its whole lifetime.
    """
    logger.info("Initializing Flask-Limiter for request rate limiting", extra={"enabled": enabled})
    limiter = Limiter(
        key_func=get_remote_address,
        storage_uri=get_limiter_storage_uri(),
        strategy="fixed-window",
        enabled=enabled,
    )
    limiter.init_app(app)
    app.extensions[LIMITER_KEY] = limiter
    return limiter
