"""
Internal data types for the entity store.
decoupled from SQLAlchemy models so both store variants share one rule set.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional


class StoreMode(str, Enum):
    CONNECTED = "CONNECTED"
    OFFLINE = "OFFLINE"


@dataclass
class Department:
    id: int
    name: str


@dataclass
class Role:
    id: int
    title: str
    salary: Decimal
    department_id: int


@dataclass
class Employee:
    id: int
    first_name: str
    last_name: str
    role_id: int
    manager_id: Optional[int] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass
class OrgGraph:
    """Everything in a store at one point in time, each collection ordered by id."""
    departments: list[Department] = field(default_factory=list)
    roles: list[Role] = field(default_factory=list)
    employees: list[Employee] = field(default_factory=list)

    def department(self, department_id: Optional[int]) -> Optional[Department]:
        return next((d for d in self.departments if d.id == department_id), None)

    def role(self, role_id: Optional[int]) -> Optional[Role]:
        return next((r for r in self.roles if r.id == role_id), None)

    def employee(self, employee_id: Optional[int]) -> Optional[Employee]:
        return next((e for e in self.employees if e.id == employee_id), None)


@dataclass(frozen=True)
class DeletionPlan:
    """Ids removed or detached from their manager by a single delete."""
    department_ids: frozenset[int] = frozenset()
    role_ids: frozenset[int] = frozenset()
    employee_ids: frozenset[int] = frozenset()
    unmanaged_employee_ids: frozenset[int] = frozenset()  # survivors whose manager is removed
