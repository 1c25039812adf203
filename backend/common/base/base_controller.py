"""
Base Controller Class.
Collects route bindings and provides standardized response handling for
resource controllers.
"""
import inspect
from abc import ABC, abstractmethod
from functools import wraps
from typing import Any, List, Tuple

from backend.common.rest.request_context import RequestContext
from backend.common.rest.response import ResponseFormatter, elapsed_since
from backend.common.rest.result import Err, Ok, Result
from backend.common.rest.routing import Handler, Middleware, RouteBinding, build_route_table
from backend.services.system.logger_service import get_logger

logger = get_logger(__name__)


def async_route_handler(handler) -> Handler:
    """
    Adapt a handler so that every failure becomes an Err.

    A raised exception is captured as Err(exc). Ok and Err results are passed
    through untouched, so handlers that already catch and return Err
    themselves compose with this adapter without double forwarding.
    """
    @wraps(handler)
    async def safe_handler(ctx: RequestContext) -> Result:
        try:
            outcome = handler(ctx)
            if inspect.isawaitable(outcome):
                outcome = await outcome
        except Exception as exc:
            logger.debug(
                "Handler raised, forwarding to error handlers",
                extra={"handler": getattr(handler, '__name__', repr(handler)), "error_type": type(exc).__name__},
            )
            return Err(exc)
        if isinstance(outcome, (Ok, Err)):
            return outcome
        return Err(TypeError(f"{getattr(handler, '__name__', 'handler')} returned {type(outcome).__name__}, expected Ok or Err"))

    return safe_handler


class BaseController(ABC):
    """
    Abstract base class for resource controllers.

    Subclasses call add_route() from initialize_routes(); the bindings are
    frozen into `self.routes` once construction finishes.
    """

    def __init__(self, path: str):
        self.path = path.rstrip('/')
        self.fmt = ResponseFormatter()
        self._pending: List[RouteBinding] = []
        self.initialize_routes()
        self.routes: Tuple[RouteBinding, ...] = build_route_table(self._pending)
        del self._pending

    @abstractmethod
    def initialize_routes(self) -> None:
        """Declare the controller's routes, in precedence order."""

    def add_route(self, method: str, path: str, *middleware: Middleware, handler: Handler,
                  rate_limit: str = None) -> None:
        endpoint = getattr(handler, '__name__', None) or f"{method.lower()}_{len(self._pending)}"
        self._pending.append(RouteBinding(
            method=method.upper(),
            path=path,
            middleware=tuple(middleware),
            handler=handler,
            endpoint=endpoint,
            rate_limit=rate_limit,
        ))

    def async_route_handler(self, handler) -> Handler:
        return async_route_handler(handler)

    def ok(self, ctx: RequestContext, data: Any, status_code: int = 200, status: str = "OK") -> Ok:
        """Format a payload into the standard envelope and mark it as the result."""
        return Ok(self.fmt.format_response(data, elapsed_since(ctx.start_time), status), status_code)
