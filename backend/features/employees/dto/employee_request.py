"""
Employee Request DTOs.
"""
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

EmployeeStatus = Literal["ACTIVE", "INACTIVE"]

class AddressRequest(BaseModel):
    line1: str = Field(..., min_length=1)
    line2: Optional[str] = None
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    pincode: str = Field(..., min_length=1)

class CreateEmployeeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="Display name")
    username: str = Field(..., min_length=3, description="Unique login name")
    password: str = Field(..., min_length=6, description="Plain-text password, hashed before storage")
    role: str = Field(..., min_length=1, description="Role label, e.g. admin or Engineer")
    experience: int = Field(0, ge=0, description="Years of experience")
    department_id: Optional[str] = Field(None, alias="departmentId")
    status: EmployeeStatus = "ACTIVE"
    address: Optional[AddressRequest] = None

class UpdateEmployeeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, min_length=1)
    username: Optional[str] = Field(None, min_length=3)
    password: Optional[str] = Field(None, min_length=6)
    role: Optional[str] = Field(None, min_length=1)
    experience: Optional[int] = Field(None, ge=0)
    department_id: Optional[str] = Field(None, alias="departmentId")
    status: Optional[EmployeeStatus] = None
    address: Optional[AddressRequest] = None

class LoginRequest(BaseModel):
    # Missing credentials are rejected by the login itself with 401.
    username: Optional[str] = None
    password: Optional[str] = None
