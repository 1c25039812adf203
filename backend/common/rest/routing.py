"""
Route bindings and their registration on a Flask app.

A controller exposes an immutable tuple of RouteBinding objects. register_controller
turns each binding into a Flask URL rule whose view:
    1. builds a RequestContext from the Flask request
    2. runs the binding's middleware in order (any raise short-circuits)
    3. awaits the handler, which returns Ok or Err
    4. writes the Ok envelope, or raises the Err into the app's error handlers
"""
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Optional, Protocol, Tuple, runtime_checkable

from flask import Blueprint, Flask, current_app, g, jsonify, request

from backend.common.rest.request_context import RequestContext
from backend.common.rest.result import Err, Ok, Result
from backend.services.system.logger_service import get_logger

logger = get_logger(__name__)

Middleware = Callable[[RequestContext], Awaitable[None]]
Handler = Callable[[RequestContext], Awaitable[Result]]


@dataclass(frozen=True)
class RouteBinding:
    method: str
    path: str
    middleware: Tuple[Middleware, ...]
    handler: Handler
    endpoint: str
    rate_limit: Optional[str] = None


@runtime_checkable
class ResourceController(Protocol):
    """What the router needs from a controller: a path prefix and its routes."""

    path: str
    routes: Tuple[RouteBinding, ...]


def build_route_table(bindings: Iterable[RouteBinding]) -> Tuple[RouteBinding, ...]:
    """Freeze bindings into a tuple, rejecting duplicate (method, path) pairs."""
    seen = set()
    table = []
    for binding in bindings:
        key = (binding.method.upper(), binding.path)
        if key in seen:
            raise ValueError(f"Duplicate route binding: {key[0]} {key[1]}")
        seen.add(key)
        table.append(binding)
    return tuple(table)


def build_request_context(params: dict) -> RequestContext:
    return RequestContext(
        params=dict(params),
        body=request.get_json(silent=True),
        caller=getattr(g, 'caller', None),
        start_time=getattr(g, 'request_start', None) or time.monotonic(),
    )


def _make_view(binding: RouteBinding) -> Callable[..., Any]:
    chain = binding.middleware
    handler = binding.handler

    async def run_pipeline(ctx: RequestContext) -> Result:
        for middleware in chain:
            await middleware(ctx)
        outcome = await handler(ctx)
        if not isinstance(outcome, (Ok, Err)):
            raise TypeError(
                f"Handler for {binding.method} {binding.path} returned "
                f"{type(outcome).__name__}, expected Ok or Err"
            )
        return outcome

    def view(**params):
        ctx = build_request_context(params)
        result = current_app.ensure_sync(run_pipeline)(ctx)
        if isinstance(result, Err):
            raise result.error
        return jsonify(result.value), result.status_code

    view.__name__ = binding.endpoint
    view.__qualname__ = binding.endpoint
    return view


def register_controller(app: Flask, controller: ResourceController, limiter=None) -> Blueprint:
    """
    Register every route of a controller on the app, in declaration order.

    :param app: Flask app.
    :param controller: Anything satisfying ResourceController.
    :param limiter: Optional flask_limiter.Limiter applied to bindings that
        declare a rate_limit.
    :return: The blueprint that holds the controller's rules.
    """
    name = type(controller).__name__.lower()
    bp = Blueprint(name, __name__)

    for binding in controller.routes:
        view = _make_view(binding)
        if limiter is not None and binding.rate_limit:
            view = limiter.limit(binding.rate_limit)(view)
        bp.add_url_rule(
            f"{controller.path}{binding.path}",
            endpoint=binding.endpoint,
            view_func=view,
            methods=[binding.method.upper()],
        )

    app.register_blueprint(bp)
    logger.info(
        "Controller registered",
        extra={"controller": name, "prefix": controller.path, "routes": len(controller.routes)},
    )
    return bp
