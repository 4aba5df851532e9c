"""
In-memory mirror of the relational store.
Used when the backend is unreachable; upholds the same contract.
"""

import copy
import logging
from decimal import Decimal
from typing import Optional

from employee_tracker.schemas.departments import DepartmentCreate, DepartmentResponse
from employee_tracker.schemas.employees import (
    EmployeeCreate,
    EmployeeManagerUpdate,
    EmployeeResponse,
    EmployeeRoleUpdate,
)
from employee_tracker.schemas.fields import parse_payload
from employee_tracker.schemas.roles import RoleCreate, RoleResponse

from .base import EntityStore
from .integrity import (
    apply_plan,
    check_manager_update,
    check_new_department,
    check_new_employee,
    check_new_role,
    check_role_update,
    plan_department_delete,
    plan_employee_delete,
    plan_role_delete,
)
from .seed import seed_graph
from .types import Department, DeletionPlan, Employee, OrgGraph, Role


logger = logging.getLogger(__name__)


class MemoryEntityStore(EntityStore):

    def __init__(self, graph: Optional[OrgGraph] = None):
        self._graph = copy.deepcopy(graph) if graph is not None else OrgGraph()
        # serial semantics: ids are never handed out twice
        self._next_ids = {
            "department": max((d.id for d in self._graph.departments), default=0) + 1,
            "role": max((r.id for r in self._graph.roles), default=0) + 1,
            "employee": max((e.id for e in self._graph.employees), default=0) + 1,
        }

    @classmethod
    def seeded(cls) -> "MemoryEntityStore":
        store = cls(seed_graph())
        graph = store._graph
        logger.info(
            f"In-memory store seeded with {len(graph.departments)} departments, "
            f"{len(graph.roles)} roles, {len(graph.employees)} employees"
        )
        return store

    def _next_id(self, kind: str) -> int:
        next_id = self._next_ids[kind]
        self._next_ids[kind] += 1
        return next_id

    def snapshot(self) -> OrgGraph:
        return copy.deepcopy(self._graph)

    def create_department(self, name: str) -> DepartmentResponse:
        payload = parse_payload(DepartmentCreate, name=name)
        check_new_department(self._graph, payload)

        department = Department(id=self._next_id("department"), name=payload.name)
        self._graph.departments.append(department)
        return DepartmentResponse.model_validate(department)

    def create_role(self, title: str, salary: Decimal, department_id: int) -> RoleResponse:
        payload = parse_payload(RoleCreate, title=title, salary=salary, department_id=department_id)
        check_new_role(self._graph, payload)

        role = Role(
            id=self._next_id("role"),
            title=payload.title,
            salary=payload.salary,
            department_id=payload.department_id,
        )
        self._graph.roles.append(role)
        return RoleResponse.model_validate(role)

    def create_employee(
        self,
        first_name: str,
        last_name: str,
        role_id: int,
        manager_id: Optional[int] = None,
    ) -> EmployeeResponse:
        payload = parse_payload(
            EmployeeCreate,
            first_name=first_name,
            last_name=last_name,
            role_id=role_id,
            manager_id=manager_id,
        )
        check_new_employee(self._graph, payload)

        employee = Employee(id=self._next_id("employee"), **payload.model_dump())
        self._graph.employees.append(employee)
        return EmployeeResponse.model_validate(employee)

    def update_employee_role(self, employee_id: int, role_id: int) -> EmployeeResponse:
        payload = parse_payload(EmployeeRoleUpdate, employee_id=employee_id, role_id=role_id)
        check_role_update(self._graph, payload)

        employee = self._graph.employee(payload.employee_id)
        employee.role_id = payload.role_id
        return EmployeeResponse.model_validate(employee)

    def update_employee_manager(self, employee_id: int, manager_id: Optional[int]) -> EmployeeResponse:
        payload = parse_payload(EmployeeManagerUpdate, employee_id=employee_id, manager_id=manager_id)
        check_manager_update(self._graph, payload)

        employee = self._graph.employee(payload.employee_id)
        employee.manager_id = payload.manager_id
        return EmployeeResponse.model_validate(employee)

    def delete_department(self, department_id: int) -> DepartmentResponse:
        plan = plan_department_delete(self._graph, department_id)
        deleted = DepartmentResponse.model_validate(self._graph.department(department_id))
        self._apply(plan)
        return deleted

    def delete_role(self, role_id: int) -> RoleResponse:
        plan = plan_role_delete(self._graph, role_id)
        deleted = RoleResponse.model_validate(self._graph.role(role_id))
        self._apply(plan)
        return deleted

    def delete_employee(self, employee_id: int) -> EmployeeResponse:
        plan = plan_employee_delete(self._graph, employee_id)
        deleted = EmployeeResponse.model_validate(self._graph.employee(employee_id))
        self._apply(plan)
        return deleted

    def _apply(self, plan: DeletionPlan) -> None:
        self._graph = apply_plan(self._graph, plan)
        logger.debug(
            f"Removed {len(plan.role_ids)} roles and {len(plan.employee_ids)} employees, "
            f"detached {len(plan.unmanaged_employee_ids)} employees from their manager"
        )
