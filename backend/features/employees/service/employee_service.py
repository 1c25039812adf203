"""
Employee Service.
"""
import uuid
from typing import Any, Dict, List, Optional
from werkzeug.security import check_password_hash, generate_password_hash
from backend.common.base.base_service import BaseService
from backend.common.errors import Conflict, NotFound, Unauthenticated
from backend.features.employees.domain.employee_entity import Employee
from backend.features.employees.dto.employee_request import CreateEmployeeRequest, UpdateEmployeeRequest
from backend.features.employees.mapper.employee_mapper import to_address, to_employee_response
from backend.features.employees.repository.employee_repository import InMemoryEmployeeRepository
from backend.services.system.logger_service import get_logger, log_employee_operation
from backend.services.system.token_service import TokenService
from backend.services.system.validation_middleware import parse_model

logger = get_logger(__name__)

class EmployeeService(BaseService):
    def __init__(self, employee_repository: InMemoryEmployeeRepository, token_service: TokenService):
        super().__init__()
        self.employee_repository = employee_repository
        self.token_service = token_service

    def _get_or_raise(self, employee_id: str) -> Employee:
        employee = self.employee_repository.find_by_id(employee_id)
        if employee is None:
            raise NotFound(f"Employee not found with id: {employee_id}")
        return employee

    def _ensure_username_free(self, username: str, exclude_id: Optional[str] = None) -> None:
        existing = self.employee_repository.find_by_username(username)
        if existing is not None and existing.id != exclude_id:
            raise Conflict(f"Username already taken: {username}")

    async def get_all_employees(self) -> List[Dict[str, Any]]:
        return [to_employee_response(e).to_dict() for e in self.employee_repository.find_all()]

    async def get_employee_by_id(self, employee_id: str) -> Dict[str, Any]:
        return to_employee_response(self._get_or_raise(employee_id)).to_dict()

    async def create_employee(self, request: CreateEmployeeRequest, actor_id: Optional[str] = None) -> Dict[str, Any]:
        self._ensure_username_free(request.username)

        now = self.now()
        employee = Employee(
            id=str(uuid.uuid4()),
            name=request.name,
            username=request.username,
            password_hash=generate_password_hash(request.password),
            role=request.role,
            experience=request.experience,
            department_id=request.department_id,
            status=request.status,
            address=to_address(request.address),
            created_at=now,
            updated_at=now,
        )
        saved = self.employee_repository.save(employee)
        log_employee_operation(logger, "CREATE", saved.id, actor_id=actor_id, role=saved.role)
        return to_employee_response(saved).to_dict()

    async def update_employee(self, employee_id: str, data: Any, actor_id: Optional[str] = None) -> Dict[str, Any]:
        # Partial update: only fields present in the body are applied.
        request = parse_model(UpdateEmployeeRequest, data)
        employee = self._get_or_raise(employee_id)
        changes = request.model_dump(exclude_unset=True)

        if request.username is not None and request.username != employee.username:
            self._ensure_username_free(request.username, exclude_id=employee.id)
            employee.username = request.username
        if request.name is not None: employee.name = request.name
        if request.role is not None: employee.role = request.role
        if request.experience is not None: employee.experience = request.experience
        if request.status is not None: employee.status = request.status
        if 'department_id' in changes: employee.department_id = request.department_id
        if 'address' in changes: employee.address = to_address(request.address)
        if request.password is not None:
            employee.password_hash = generate_password_hash(request.password)

        employee.updated_at = self.now()
        saved = self.employee_repository.save(employee)
        log_employee_operation(logger, "UPDATE", saved.id, actor_id=actor_id, fields=sorted(changes))
        return to_employee_response(saved).to_dict()

    async def delete_employee(self, employee_id: str, actor_id: Optional[str] = None) -> Dict[str, Any]:
        deleted = self.employee_repository.delete_by_id(employee_id)
        if deleted is None:
            raise NotFound(f"Employee not found with id: {employee_id}")
        log_employee_operation(logger, "DELETE", employee_id, actor_id=actor_id)
        return to_employee_response(deleted).to_dict()

    async def employee_login(self, username: Optional[str], password: Optional[str]) -> Dict[str, Any]:
        if not username or not password:
            raise Unauthenticated("Username and password are required")

        employee = self.employee_repository.find_by_username(username)
        if employee is None or not check_password_hash(employee.password_hash, password):
            logger.warning("Login failed", extra={"username": username})
            raise Unauthenticated("Invalid username or password")
        if not employee.is_active:
            raise Unauthenticated("Employee account is inactive")

        token = self.token_service.issue(employee.id, [employee.role])
        log_employee_operation(logger, "LOGIN", employee.id, actor_id=employee.id)
        return {
            'token': token,
            'employeeDetails': to_employee_response(employee).to_dict(),
        }

    async def ensure_bootstrap_admin(self, username: str, password: str) -> Optional[Dict[str, Any]]:
        """Create an admin employee at startup unless the username already exists."""
        if self.employee_repository.find_by_username(username) is not None:
            return None
        logger.info("Creating bootstrap admin", extra={"username": username})
        return await self.create_employee(CreateEmployeeRequest(
            name="Administrator",
            username=username,
            password=password,
            role="admin",
        ))

    def count(self) -> int:
        return self.employee_repository.count()
