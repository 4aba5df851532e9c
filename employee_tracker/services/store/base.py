"""
Entity store abstraction layer.
One interface for the relational backend and the in-memory mirror.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional

from employee_tracker.core.exceptions import NotFoundError
from employee_tracker.schemas.departments import DepartmentResponse
from employee_tracker.schemas.employees import EmployeeChoice, EmployeeResponse
from employee_tracker.schemas.roles import RoleResponse

from .types import OrgGraph


class EntityStore(ABC):
    """
    Abstract base for stores.

    Implementations provide the snapshot and the mutations; the lookups
    below are derived from the snapshot so every variant orders and
    shapes its records the same way.
    """

    @abstractmethod
    def snapshot(self) -> OrgGraph:
        """Current departments, roles and employees, each ordered by id."""
        ...

    @abstractmethod
    def create_department(self, name: str) -> DepartmentResponse:
        ...

    @abstractmethod
    def create_role(self, title: str, salary: Decimal, department_id: int) -> RoleResponse:
        ...

    @abstractmethod
    def create_employee(
        self,
        first_name: str,
        last_name: str,
        role_id: int,
        manager_id: Optional[int] = None,
    ) -> EmployeeResponse:
        ...

    @abstractmethod
    def update_employee_role(self, employee_id: int, role_id: int) -> EmployeeResponse:
        ...

    @abstractmethod
    def update_employee_manager(self, employee_id: int, manager_id: Optional[int]) -> EmployeeResponse:
        ...

    @abstractmethod
    def delete_department(self, department_id: int) -> DepartmentResponse:
        """Remove a department, its roles and their employees."""
        ...

    @abstractmethod
    def delete_role(self, role_id: int) -> RoleResponse:
        """Remove a role and the employees holding it."""
        ...

    @abstractmethod
    def delete_employee(self, employee_id: int) -> EmployeeResponse:
        """Remove an employee; their reports become manager-less."""
        ...

    # ==================== Lookups ====================

    def list_departments(self) -> List[DepartmentResponse]:
        return [DepartmentResponse.model_validate(d) for d in self.snapshot().departments]

    def department_choices(self) -> List[DepartmentResponse]:
        return sorted(self.list_departments(), key=lambda d: d.name)

    def get_department(self, department_id: int) -> DepartmentResponse:
        department = self.snapshot().department(department_id)
        if department is None:
            raise NotFoundError(f"Department {department_id} not found")
        return DepartmentResponse.model_validate(department)

    def list_roles(self) -> List[RoleResponse]:
        return [RoleResponse.model_validate(r) for r in self.snapshot().roles]

    def role_choices(self) -> List[RoleResponse]:
        return sorted(self.list_roles(), key=lambda r: r.title)

    def get_role(self, role_id: int) -> RoleResponse:
        role = self.snapshot().role(role_id)
        if role is None:
            raise NotFoundError(f"Role {role_id} not found")
        return RoleResponse.model_validate(role)

    def list_employees(self) -> List[EmployeeResponse]:
        return [EmployeeResponse.model_validate(e) for e in self.snapshot().employees]

    def employee_choices(self) -> List[EmployeeChoice]:
        choices = [EmployeeChoice(id=e.id, name=e.full_name) for e in self.snapshot().employees]
        return sorted(choices, key=lambda c: (c.name, c.id))

    def get_employee(self, employee_id: int) -> EmployeeResponse:
        employee = self.snapshot().employee(employee_id)
        if employee is None:
            raise NotFoundError(f"Employee {employee_id} not found")
        return EmployeeResponse.model_validate(employee)
