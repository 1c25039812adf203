from dataclasses import dataclass
from datetime import datetime
from typing import Optional

@dataclass
class Address:
    line1: str
    city: str
    state: str
    country: str
    pincode: str
    line2: Optional[str] = None

@dataclass
class Employee:
    id: str
    name: str
    username: str
    password_hash: str
    role: str
    experience: int = 0
    department_id: Optional[str] = None
    status: str = "ACTIVE"
    address: Optional[Address] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == "ACTIVE"
