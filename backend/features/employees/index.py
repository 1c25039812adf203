"""
Employees Feature Module.
"""
from typing import Optional
from backend.config.env_config import AppConfig
from backend.features.employees.controller.employee_controller import EmployeeController
from backend.features.employees.repository.employee_repository import InMemoryEmployeeRepository
from backend.features.employees.service.employee_service import EmployeeService
from backend.services.storage.upload_storage import DiskUploadStorage, UploadStorage
from backend.services.system.token_service import TokenService


def build_employee_controller(
    config: AppConfig,
    token_service: TokenService,
    employee_repository: Optional[InMemoryEmployeeRepository] = None,
    upload_storage: Optional[UploadStorage] = None,
) -> EmployeeController:
    # Dependency Injection
    employee_repository = employee_repository or InMemoryEmployeeRepository()
    employee_service = EmployeeService(employee_repository, token_service)
    upload_storage = upload_storage or DiskUploadStorage(config.upload_dir)
    return EmployeeController(employee_service, upload_storage, config)
