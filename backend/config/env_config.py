"""
Environment configuration loader for the Employee API
Loads settings from the .env file and the process environment
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

from backend.services.system.logger_service import get_logger

logger = get_logger(__name__)

DEFAULT_JWT_SECRET = 'change-me'


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass(frozen=True)
class AppConfig:
    api_prefix: str = '/api'
    base_path: str = 'http://localhost:3000'
    upload_dir: str = 'public/uploads'
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_expires_minutes: int = 60
    admin_username: Optional[str] = None
    admin_password: Optional[str] = None
    frontend_origin: Optional[str] = None
    environment: str = 'development'
    ratelimit_enabled: bool = True
    login_rate_limit: str = '10 per minute'
    testing: bool = False

    @property
    def is_production(self) -> bool:
        return self.environment == 'production'

    def override(self, **changes) -> 'AppConfig':
        return replace(self, **changes)


def get_app_config(env_path: Optional[str] = None) -> AppConfig:
    """
    Build the application configuration from the environment.

    Args:
        env_path: Path to a .env file (default: search upwards from the CWD)

    Returns:
        AppConfig populated from environment variables
    """
    load_dotenv(env_path, override=False)

    config = AppConfig(
        api_prefix=os.getenv('API_PREFIX', '/api').rstrip('/'),
        base_path=os.getenv('BASE_PATH', 'http://localhost:3000').rstrip('/'),
        upload_dir=os.getenv('UPLOAD_DIR', 'public/uploads'),
        jwt_secret=os.getenv('JWT_SECRET', DEFAULT_JWT_SECRET),
        jwt_expires_minutes=int(os.getenv('JWT_EXPIRES_MINUTES', '60')),
        admin_username=os.getenv('ADMIN_USERNAME') or None,
        admin_password=os.getenv('ADMIN_PASSWORD') or None,
        frontend_origin=os.getenv('FRONTEND_ORIGIN') or None,
        environment=os.getenv('ENVIRONMENT', 'development').lower(),
        ratelimit_enabled=_env_bool('RATELIMIT_ENABLED', True),
        login_rate_limit=os.getenv('LOGIN_RATE_LIMIT', '10 per minute'),
    )

    if config.jwt_secret == DEFAULT_JWT_SECRET:
        if config.is_production:
            raise RuntimeError("JWT_SECRET must be set in production")
        logger.warning("JWT_SECRET not set - using the development default")

    logger.info(
        "Environment configuration loaded",
        extra={
            "environment": config.environment,
            "api_prefix": config.api_prefix,
            "upload_dir": config.upload_dir,
            "bootstrap_admin": bool(config.admin_username),
        }
    )
    return config
