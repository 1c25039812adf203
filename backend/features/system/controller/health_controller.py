from backend.common.base.base_controller import async_route_handler
from backend.common.rest.request_context import RequestContext
from backend.common.rest.response import elapsed_since, format_response
from backend.common.rest.result import Ok, Result
from backend.common.rest.routing import RouteBinding, build_route_table
from backend.features.system.service.health_service import HealthService
from backend.services.system.logger_service import get_logger

logger = get_logger(__name__)


class HealthController:
    """Implements the ResourceController protocol directly, without BaseController."""

    def __init__(self, health_service: HealthService, api_prefix: str = '/api'):
        self.health_service = health_service
        self.path = ''
        handler = async_route_handler(self.health_check)
        self.routes = build_route_table([
            RouteBinding('GET', '/health', (), handler, endpoint='health_check'),
            RouteBinding('GET', f'{api_prefix}/health', (), handler, endpoint='api_health_check'),
        ])

    async def health_check(self, ctx: RequestContext) -> Result:
        data = self.health_service.get_health_data()
        logger.debug("Health check", extra={"employees": data.get('employees')})
        return Ok(format_response(data, elapsed_since(ctx.start_time), "OK"))
