"""
Employee Repository.
"""
import copy
import threading
from typing import Dict, List, Optional
from backend.common.base.base_repository import BaseRepository
from backend.features.employees.domain.employee_entity import Employee
from backend.services.system.logger_service import get_logger

logger = get_logger(__name__)

class InMemoryEmployeeRepository(BaseRepository[Employee]):
    """
    Process-local store. Entities are copied in and out so callers never
    share a mutable instance with the store.
    """

    def __init__(self):
        self._employees: Dict[str, Employee] = {}
        self._lock = threading.RLock()

    def find_by_id(self, id: str) -> Optional[Employee]:
        with self._lock:
            employee = self._employees.get(id)
            return copy.deepcopy(employee) if employee else None

    def find_by_username(self, username: str) -> Optional[Employee]:
        with self._lock:
            for employee in self._employees.values():
                if employee.username == username:
                    return copy.deepcopy(employee)
        return None

    def find_all(self) -> List[Employee]:
        with self._lock:
            # insertion order == creation order
            return [copy.deepcopy(e) for e in self._employees.values()]

    def save(self, entity: Employee) -> Employee:
        with self._lock:
            logger.debug(f"Saving employee entity: {entity.id}")
            self._employees[entity.id] = copy.deepcopy(entity)
        return entity

    def delete_by_id(self, id: str) -> Optional[Employee]:
        with self._lock:
            return self._employees.pop(id, None)

    def count(self) -> int:
        with self._lock:
            return len(self._employees)
