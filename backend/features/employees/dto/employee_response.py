"""
Employee Response DTOs.
"""
from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field

class AddressResponse(BaseModel):
    line1: str
    line2: Optional[str] = None
    city: str
    state: str
    country: str
    pincode: str

class EmployeeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    username: str
    role: str
    experience: int
    department_id: Optional[str] = Field(None, alias="departmentId")
    status: str
    address: Optional[AddressResponse] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
