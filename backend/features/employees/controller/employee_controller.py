"""
Employee Controller.
"""
from backend.common.base.base_controller import BaseController
from backend.common.rest.request_context import RequestContext
from backend.common.rest.result import Err, Result
from backend.config.env_config import AppConfig
from backend.features.employees.dto.employee_request import CreateEmployeeRequest, LoginRequest
from backend.features.employees.service.employee_service import EmployeeService
from backend.services.storage.upload_storage import UploadStorage
from backend.services.system.auth_middleware import authorize
from backend.services.system.logger_service import get_logger
from backend.services.system.upload_middleware import upload_single
from backend.services.system.validation_middleware import validate

logger = get_logger(__name__)

# Files under this directory are served from the public base path without it.
PUBLIC_DIR_PREFIX = "public/"
UPLOAD_FIELD = "file"


def _actor(ctx: RequestContext):
    return ctx.caller.subject if ctx.caller else None


class EmployeeController(BaseController):
    def __init__(self, employee_service: EmployeeService, upload_storage: UploadStorage, config: AppConfig):
        self.employee_service = employee_service
        self.upload_storage = upload_storage
        self.base_path = config.base_path
        self.login_rate_limit = config.login_rate_limit
        super().__init__(f"{config.api_prefix}/employees")

    def initialize_routes(self) -> None:
        self.add_route(
            "GET", "",
            authorize(["admin", "Engineer"]),
            handler=self.async_route_handler(self.get_all_employees),
        )
        self.add_route(
            "GET", "/<employee_id>",
            handler=self.async_route_handler(self.get_employee_by_id),
        )
        self.add_route(
            "POST", "",
            authorize(["admin"]),
            validate(CreateEmployeeRequest),
            handler=self.create_employee,
        )
        self.add_route(
            "PUT", "/<employee_id>",
            handler=self.async_route_handler(self.update_employee),
        )
        self.add_route(
            "DELETE", "/<employee_id>",
            handler=self.async_route_handler(self.delete_employee),
        )
        self.add_route(
            "POST", "/upload",
            upload_single(UPLOAD_FIELD, self.upload_storage),
            handler=self.async_route_handler(self.upload_image),
        )
        self.add_route(
            "POST", "/login",
            validate(LoginRequest),
            handler=self.async_route_handler(self.login),
            rate_limit=self.login_rate_limit,
        )

    async def get_all_employees(self, ctx: RequestContext) -> Result:
        data = await self.employee_service.get_all_employees()
        return self.ok(ctx, data)

    async def get_employee_by_id(self, ctx: RequestContext) -> Result:
        data = await self.employee_service.get_employee_by_id(ctx.params["employee_id"])
        return self.ok(ctx, data)

    async def create_employee(self, ctx: RequestContext) -> Result:
        # Registered without the adapter: failures are forwarded here.
        try:
            data = await self.employee_service.create_employee(ctx.body, actor_id=_actor(ctx))
            return self.ok(ctx, data)
        except Exception as err:
            return Err(err)

    async def update_employee(self, ctx: RequestContext) -> Result:
        data = await self.employee_service.update_employee(ctx.params["employee_id"], ctx.body, actor_id=_actor(ctx))
        return self.ok(ctx, data, status_code=201)

    async def delete_employee(self, ctx: RequestContext) -> Result:
        data = await self.employee_service.delete_employee(ctx.params["employee_id"], actor_id=_actor(ctx))
        return self.ok(ctx, data, status_code=201)

    async def upload_image(self, ctx: RequestContext) -> Result:
        stored_path = ctx.file.path
        if stored_path.startswith(PUBLIC_DIR_PREFIX):
            stored_path = stored_path[len(PUBLIC_DIR_PREFIX):]
        file_path = f"{self.base_path}/{stored_path}"
        return self.ok(ctx, {"filePath": file_path})

    async def login(self, ctx: RequestContext) -> Result:
        data = await self.employee_service.employee_login(ctx.body.username, ctx.body.password)
        return self.ok(ctx, data, status_code=200)
