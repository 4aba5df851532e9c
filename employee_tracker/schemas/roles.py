from decimal import Decimal
from pydantic import BaseModel, Field

from employee_tracker.schemas.fields import NameStr


class RoleBase(BaseModel):
    title: str
    salary: Decimal
    department_id: int


class RoleCreate(BaseModel):
    title: NameStr
    salary: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    department_id: int


class RoleResponse(RoleBase):
    id: int

    class Config:
        from_attributes = True


class RoleExpanded(BaseModel):
    id: int
    title: str
    salary: Decimal
    department: str
