"""
Employee Mapper.
"""
from typing import Optional
from backend.features.employees.domain.employee_entity import Address, Employee
from backend.features.employees.dto.employee_request import AddressRequest
from backend.features.employees.dto.employee_response import AddressResponse, EmployeeResponse

def to_address(request: Optional[AddressRequest]) -> Optional[Address]:
    if request is None:
        return None
    return Address(
        line1=request.line1,
        line2=request.line2,
        city=request.city,
        state=request.state,
        country=request.country,
        pincode=request.pincode,
    )

def to_employee_response(employee: Employee) -> EmployeeResponse:
    address = None
    if employee.address is not None:
        address = AddressResponse(
            line1=employee.address.line1,
            line2=employee.address.line2,
            city=employee.address.city,
            state=employee.address.state,
            country=employee.address.country,
            pincode=employee.address.pincode,
        )
    # password_hash never leaves the service layer
    return EmployeeResponse(
        id=employee.id,
        name=employee.name,
        username=employee.username,
        role=employee.role,
        experience=employee.experience,
        department_id=employee.department_id,
        status=employee.status,
        address=address,
        created_at=employee.created_at,
        updated_at=employee.updated_at,
    )
