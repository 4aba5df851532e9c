from decimal import Decimal
from pydantic import BaseModel
from typing import Optional

from employee_tracker.schemas.fields import NameStr


class EmployeeBase(BaseModel):
    first_name: str
    last_name: str
    role_id: int
    manager_id: Optional[int] = None


class EmployeeCreate(BaseModel):
    first_name: NameStr
    last_name: NameStr
    role_id: int
    manager_id: Optional[int] = None


class EmployeeRoleUpdate(BaseModel):
    employee_id: int
    role_id: int


class EmployeeManagerUpdate(BaseModel):
    employee_id: int
    manager_id: Optional[int] = None


class EmployeeResponse(EmployeeBase):
    id: int

    class Config:
        from_attributes = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class EmployeeChoice(BaseModel):
    id: int
    name: str


class EmployeeExpanded(BaseModel):
    id: int
    first_name: str
    last_name: str
    title: str
    department: str
    salary: Decimal
    manager: Optional[str] = None


class ManagerReport(BaseModel):
    """An employee listed under their manager."""
    id: int
    first_name: str
    last_name: str
    title: str
    department: str


class DepartmentMember(BaseModel):
    """An employee listed under their department."""
    id: int
    first_name: str
    last_name: str
    title: str
    manager: Optional[str] = None
