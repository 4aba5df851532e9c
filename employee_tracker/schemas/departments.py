from decimal import Decimal
from pydantic import BaseModel

from employee_tracker.schemas.fields import NameStr


class DepartmentBase(BaseModel):
    name: str


class DepartmentCreate(BaseModel):
    name: NameStr


class DepartmentResponse(DepartmentBase):
    id: int

    class Config:
        from_attributes = True


class DepartmentBudget(BaseModel):
    """Payroll of a department: sum of the role salaries of its employees."""
    id: int
    name: str
    utilized_budget: Decimal
    employee_count: int
