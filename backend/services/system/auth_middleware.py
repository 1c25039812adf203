"""
Authentication and Authorization Middleware

authenticate_request runs before every request and attaches the caller
identity from a Bearer session token when one is present and valid. It never
rejects a request; routes opt into protection with authorize().
"""
from typing import Iterable

from flask import current_app, g, request

from backend.common.errors import Forbidden, Unauthenticated
from backend.common.rest.request_context import RequestContext
from backend.common.rest.routing import Middleware
from backend.services.system.logger_service import get_logger

logger = get_logger(__name__)

TOKEN_SERVICE_KEY = 'token_service'


def authenticate_request():
    """
    Global before_request handler.
    Resolves `Authorization: Bearer <token>` into g.caller.
    """
    g.caller = None

    auth_header = request.headers.get('Authorization')
    if not auth_header or not auth_header.startswith('Bearer '):
        return None

    token_service = current_app.extensions.get(TOKEN_SERVICE_KEY)
    if token_service is None:
        logger.debug("No token service configured, skipping authentication")
        return None

    token = auth_header.split('Bearer ', 1)[1].strip()
    try:
        g.caller = token_service.verify(token)
        logger.debug(
            "Bearer token auth passed",
            extra={'user_id': g.caller.subject, 'path': request.path}
        )
    except Unauthenticated as e:
        logger.warning(
            "Bearer token verification failed",
            extra={
                'path': request.path,
                'method': request.method,
                'error': e.message,
                'ip': request.remote_addr,
            }
        )
    return None


def authorize(allowed_roles: Iterable[str]) -> Middleware:
    """
    Build a middleware that admits callers holding at least one allowed role.

    Raises (at request time):
        Unauthenticated: No caller identity on the request
        Forbidden: Caller holds none of the allowed roles
    """
    allowed = frozenset(allowed_roles)

    async def authorization_middleware(ctx: RequestContext) -> None:
        if ctx.caller is None:
            logger.warning("Unauthenticated access attempt", extra={'allowed_roles': sorted(allowed)})
            raise Unauthenticated('Authentication required')

        if not ctx.caller.has_any_role(allowed):
            logger.warning(
                "Role access denied",
                extra={
                    'user_id': ctx.caller.subject,
                    'caller_roles': sorted(ctx.caller.roles),
                    'allowed_roles': sorted(allowed),
                }
            )
            raise Forbidden(f"Requires one of roles: {', '.join(sorted(allowed))}")

    return authorization_middleware
