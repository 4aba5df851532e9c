"""
Referential-integrity rules shared by every store variant.

Reference checks run against an OrgGraph snapshot before a mutation.
Deletes are planned as a pure function of (target, graph); a store either
applies the plan to its collections or executes it as SQL, so cascade and
set-null behave the same regardless of where the data lives.
"""

from dataclasses import replace
from typing import Iterable

from employee_tracker.core.exceptions import NotFoundError, ValidationError
from employee_tracker.schemas.departments import DepartmentCreate
from employee_tracker.schemas.employees import (
    EmployeeCreate,
    EmployeeManagerUpdate,
    EmployeeRoleUpdate,
)
from employee_tracker.schemas.roles import RoleCreate

from .types import DeletionPlan, OrgGraph


# ==================== Reference checks ====================

def check_new_department(graph: OrgGraph, payload: DepartmentCreate) -> None:
    if any(d.name == payload.name for d in graph.departments):
        raise ValidationError(f"Department '{payload.name}' already exists")


def check_new_role(graph: OrgGraph, payload: RoleCreate) -> None:
    if any(r.title == payload.title for r in graph.roles):
        raise ValidationError(f"Role '{payload.title}' already exists")
    if graph.department(payload.department_id) is None:
        raise ValidationError(f"Department {payload.department_id} does not exist")


def check_new_employee(graph: OrgGraph, payload: EmployeeCreate) -> None:
    if graph.role(payload.role_id) is None:
        raise ValidationError(f"Role {payload.role_id} does not exist")
    if payload.manager_id is not None and graph.employee(payload.manager_id) is None:
        raise ValidationError(f"Manager {payload.manager_id} does not exist")


def check_role_update(graph: OrgGraph, payload: EmployeeRoleUpdate) -> None:
    if graph.employee(payload.employee_id) is None:
        raise NotFoundError(f"Employee {payload.employee_id} not found")
    if graph.role(payload.role_id) is None:
        raise ValidationError(f"Role {payload.role_id} does not exist")


def check_manager_update(graph: OrgGraph, payload: EmployeeManagerUpdate) -> None:
    if graph.employee(payload.employee_id) is None:
        raise NotFoundError(f"Employee {payload.employee_id} not found")
    if payload.manager_id is None:
        return
    if payload.manager_id == payload.employee_id:
        raise ValidationError("An employee cannot be their own manager")
    if graph.employee(payload.manager_id) is None:
        raise ValidationError(f"Manager {payload.manager_id} does not exist")


# ==================== Deletion planning ====================

def plan_department_delete(graph: OrgGraph, department_id: int) -> DeletionPlan:
    """Department -> its roles -> employees holding them."""
    if graph.department(department_id) is None:
        raise NotFoundError(f"Department {department_id} not found")
    role_ids = {r.id for r in graph.roles if r.department_id == department_id}
    return _build_plan(graph, department_ids={department_id}, role_ids=role_ids)


def plan_role_delete(graph: OrgGraph, role_id: int) -> DeletionPlan:
    if graph.role(role_id) is None:
        raise NotFoundError(f"Role {role_id} not found")
    return _build_plan(graph, role_ids={role_id})


def plan_employee_delete(graph: OrgGraph, employee_id: int) -> DeletionPlan:
    if graph.employee(employee_id) is None:
        raise NotFoundError(f"Employee {employee_id} not found")
    return _build_plan(graph, employee_ids={employee_id})


def _build_plan(
    graph: OrgGraph,
    department_ids: Iterable[int] = (),
    role_ids: Iterable[int] = (),
    employee_ids: Iterable[int] = (),
) -> DeletionPlan:
    role_ids = frozenset(role_ids)
    removed = frozenset(employee_ids) | {e.id for e in graph.employees if e.role_id in role_ids}
    unmanaged = frozenset(
        e.id for e in graph.employees
        if e.id not in removed and e.manager_id in removed
    )
    return DeletionPlan(
        department_ids=frozenset(department_ids),
        role_ids=role_ids,
        employee_ids=removed,
        unmanaged_employee_ids=unmanaged,
    )


def apply_plan(graph: OrgGraph, plan: DeletionPlan) -> OrgGraph:
    """Return a new graph with the plan applied. The input graph is not modified."""
    employees = []
    for emp in graph.employees:
        if emp.id in plan.employee_ids:
            continue
        if emp.id in plan.unmanaged_employee_ids:
            emp = replace(emp, manager_id=None)
        employees.append(emp)

    return OrgGraph(
        departments=[d for d in graph.departments if d.id not in plan.department_ids],
        roles=[r for r in graph.roles if r.id not in plan.role_ids],
        employees=employees,
    )
