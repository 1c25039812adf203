"""
System Feature Module.
"""
from typing import Callable, Optional
from backend.features.system.controller.health_controller import HealthController
from backend.features.system.service.health_service import HealthService


def build_health_controller(api_prefix: str, employee_counter: Optional[Callable[[], int]] = None) -> HealthController:
    health_service = HealthService(employee_counter=employee_counter)
    return HealthController(health_service, api_prefix=api_prefix)
