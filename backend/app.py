"""
Main Flask application for the Employee API backend.
Resource controllers are registered through the shared router.
"""
import asyncio
import os
import time
import uuid
from pathlib import Path
from typing import Optional, Union
from flask import Flask, request, g
from flask_cors import CORS
from flask_compress import Compress
from flask_talisman import Talisman

# Initialize logging service FIRST (before other imports)
from backend.services.system.logger_service import get_logger, log_request
logger = get_logger(__name__)

from backend.common.rest.routing import register_controller
from backend.config.env_config import AppConfig, get_app_config
from backend.features.employees.index import build_employee_controller
from backend.features.employees.repository.employee_repository import InMemoryEmployeeRepository
from backend.features.system.index import build_health_controller
from backend.services.storage.upload_storage import DiskUploadStorage
from backend.services.system.auth_middleware import TOKEN_SERVICE_KEY, authenticate_request
from backend.services.system.error_handlers import register_error_handlers
from backend.services.system.security import configure_limiter
from backend.services.system.token_service import TokenService

MUTATING_METHODS = ('POST', 'PUT', 'PATCH', 'DELETE')


def _resolve_allowed_origins(raw_origins: Optional[str]):
    if not raw_origins or raw_origins.strip() == '*':
        return '*'

    origins = [origin.strip() for origin in raw_origins.split(',') if origin.strip()]
    return origins or '*'


def _log_request_start():
    g.request_start = time.monotonic()
    g.request_id = uuid.uuid4().hex


def _log_request_end(response):
    duration_ms = None
    if hasattr(g, 'request_start'):
        duration_ms = round((time.monotonic() - g.request_start) * 1000, 2)

    caller = getattr(g, 'caller', None)
    user_id = caller.subject if caller else None

    log_request(
        logger,
        request.method,
        request.path,
        user_id=user_id,
        request_id=getattr(g, 'request_id', None),
        request_status=response.status_code,
        request_duration_ms=duration_ms,
        remote_addr=request.headers.get('X-Forwarded-For', request.remote_addr),
    )

    if request.method in MUTATING_METHODS:
        logger.info(
            "AUDIT_EVENT",
            extra={
                'audit_action': 'API_CALL',
                'audit_resource': request.path,
                'audit_user_id': user_id or 'unknown',
                'audit_success': response.status_code < 400,
                'audit_timestamp': time.strftime('%Y-%m-%dT%H:%M:%SZ', time.gmtime()),
                'audit_notes': {
                    'method': request.method,
                    'status': response.status_code,
                    'request_id': getattr(g, 'request_id', None),
                }
            }
        )

    return response


def create_app(
    config: Optional[AppConfig] = None,
    employee_repository: Optional[InMemoryEmployeeRepository] = None,
    upload_root: Optional[Union[str, Path]] = None,
) -> Flask:
    """
    Build the Flask app.

    Args:
        config: Settings override (default: read from the environment)
        employee_repository: Repository override, e.g. a pre-seeded store in tests
        upload_root: Directory that UPLOAD_DIR is resolved against (default: CWD)
    """
    config = config or get_app_config()

    app = Flask(__name__)
    app.config['TESTING'] = config.testing

    # Before-request hooks run in registration order: timing first, then identity.
    app.before_request(_log_request_start)
    app.before_request(authenticate_request)
    app.after_request(_log_request_end)

    # Content Security Policy for a JSON API: block frames and objects.
    csp = {
        'default-src': ["'self'"],
        'frame-ancestors': ["'none'"],
        'form-action': ["'self'"],
    }
    Talisman(
        app,
        force_https=config.is_production,
        content_security_policy=csp,
        strict_transport_security=config.is_production,
        session_cookie_secure=config.is_production,
        session_cookie_http_only=True
    )

    limiter = configure_limiter(app, enabled=config.ratelimit_enabled)

    Compress(app)

    CORS(
        app,
        resources={r"/*": {"origins": _resolve_allowed_origins(config.frontend_origin)}},
        expose_headers='*',
        allow_headers='*',
        methods=['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS']
    )

    register_error_handlers(app)

    token_service = TokenService(config.jwt_secret, config.jwt_expires_minutes)
    app.extensions[TOKEN_SERVICE_KEY] = token_service

    employee_controller = build_employee_controller(
        config,
        token_service,
        employee_repository=employee_repository,
        upload_storage=DiskUploadStorage(config.upload_dir, root=upload_root),
    )
    employee_service = employee_controller.employee_service
    health_controller = build_health_controller(config.api_prefix, employee_counter=employee_service.count)

    # Route tables are frozen before the app serves its first request.
    register_controller(app, health_controller)
    register_controller(app, employee_controller, limiter=limiter)

    if config.admin_username and config.admin_password:
        asyncio.run(employee_service.ensure_bootstrap_admin(config.admin_username, config.admin_password))

    app.extensions['employee_controller'] = employee_controller

    logger.info(
        "Flask application created",
        extra={"environment": config.environment, "employee_prefix": employee_controller.path}
    )
    return app


if __name__ == '__main__':
    application = create_app()
    port = int(os.getenv('PORT', '5000'))
    application.run(host='0.0.0.0', port=port, debug=False)
