"""
Centralized error handling.

Every failure forwarded by the router or raised by Flask ends up here and is
rendered as {success: false, error, code, ...} with the matching status.
"""
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from backend.common.errors import ApiError
from backend.services.system.logger_service import get_logger, log_error

logger = get_logger(__name__)


def handle_api_error(error: ApiError):
    log = logger.warning if error.status_code >= 500 or error.status_code in (401, 403) else logger.info
    log(
        f"Request failed ({error.status_code}): {error.message}",
        extra={
            'error_code': error.code,
            'request_method': request.method,
            'request_path': request.path,
        }
    )
    return jsonify(error.to_dict()), error.status_code


def handle_http_exception(error: HTTPException):
    code = (error.name or 'HTTP_ERROR').upper().replace(' ', '_')
    return jsonify({
        'success': False,
        'error': error.description or error.name,
        'code': code,
    }), error.code or 500


def handle_unexpected_error(error: Exception):
    if isinstance(error, HTTPException):
        return handle_http_exception(error)
    log_error(logger, error, {'request_method': request.method, 'request_path': request.path})
    return jsonify({
        'success': False,
        'error': 'An unexpected error occurred',
        'code': 'INTERNAL_ERROR',
    }), 500


def register_error_handlers(app: Flask) -> None:
    app.register_error_handler(ApiError, handle_api_error)
    app.register_error_handler(HTTPException, handle_http_exception)
    app.register_error_handler(Exception, handle_unexpected_error)
