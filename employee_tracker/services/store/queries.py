"""
Derived views over a store.

Every view is computed from the store's snapshot, so the relational
backend and the in-memory mirror produce the same rows in the same order.
"""

from decimal import Decimal
from typing import List, Optional

from employee_tracker.core.exceptions import NotFoundError
from employee_tracker.schemas.departments import DepartmentBudget
from employee_tracker.schemas.employees import DepartmentMember, EmployeeExpanded, ManagerReport
from employee_tracker.schemas.roles import RoleExpanded

from .base import EntityStore
from .types import Employee, OrgGraph


def _manager_name(graph: OrgGraph, emp: Employee) -> Optional[str]:
    if emp.manager_id is None:
        return None
    manager = graph.employee(emp.manager_id)
    return manager.full_name if manager else None


def _by_name(emp: Employee) -> tuple:
    return (emp.last_name, emp.first_name, emp.id)


def list_employees_expanded(store: EntityStore) -> List[EmployeeExpanded]:
    """Every employee with title, salary, department and manager name, by id."""
    graph = store.snapshot()
    rows = []
    for emp in graph.employees:
        role = graph.role(emp.role_id)
        department = graph.department(role.department_id)
        rows.append(EmployeeExpanded(
            id=emp.id,
            first_name=emp.first_name,
            last_name=emp.last_name,
            title=role.title,
            department=department.name,
            salary=role.salary,
            manager=_manager_name(graph, emp),
        ))
    return rows


def list_roles_expanded(store: EntityStore) -> List[RoleExpanded]:
    graph = store.snapshot()
    return [
        RoleExpanded(
            id=role.id,
            title=role.title,
            salary=role.salary,
            department=graph.department(role.department_id).name,
        )
        for role in graph.roles
    ]


def employees_by_manager(store: EntityStore, manager_id: int) -> List[ManagerReport]:
    """Direct reports of a manager, ordered by last then first name."""
    graph = store.snapshot()
    reports = sorted((e for e in graph.employees if e.manager_id == manager_id), key=_by_name)

    rows = []
    for emp in reports:
        role = graph.role(emp.role_id)
        rows.append(ManagerReport(
            id=emp.id,
            first_name=emp.first_name,
            last_name=emp.last_name,
            title=role.title,
            department=graph.department(role.department_id).name,
        ))
    return rows


def employees_by_department(store: EntityStore, department_id: int) -> List[DepartmentMember]:
    """Employees whose role belongs to the department, ordered by last then first name."""
    graph = store.snapshot()
    titles = {r.id: r.title for r in graph.roles if r.department_id == department_id}
    members = sorted((e for e in graph.employees if e.role_id in titles), key=_by_name)

    return [
        DepartmentMember(
            id=emp.id,
            first_name=emp.first_name,
            last_name=emp.last_name,
            title=titles[emp.role_id],
            manager=_manager_name(graph, emp),
        )
        for emp in members
    ]


def department_budget(store: EntityStore, department_id: int) -> DepartmentBudget:
    """
    Utilized budget of a department.

    Sum of the role salary of every employee in the department, plus the
    head count. A department with no employees has a zero budget.
    """
    graph = store.snapshot()
    department = graph.department(department_id)
    if department is None:
        raise NotFoundError(f"Department {department_id} not found")

    salaries = {r.id: r.salary for r in graph.roles if r.department_id == department_id}
    members = [e for e in graph.employees if e.role_id in salaries]

    return DepartmentBudget(
        id=department.id,
        name=department.name,
        utilized_budget=sum((salaries[e.role_id] for e in members), Decimal("0")),
        employee_count=len(members),
    )
