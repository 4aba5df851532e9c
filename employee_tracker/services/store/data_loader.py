"""
Data loader for the SQL store.
Fetches the three tables and converts them to internal types.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from employee_tracker.db.models import Department as DepartmentRow
from employee_tracker.db.models import Employee as EmployeeRow
from employee_tracker.db.models import Role as RoleRow

from .types import Department, Employee, OrgGraph, Role


def load_departments(db: Session) -> list[Department]:
    rows = db.execute(select(DepartmentRow).order_by(DepartmentRow.id)).scalars().all()
    return [Department(id=r.id, name=r.name) for r in rows]


def load_roles(db: Session) -> list[Role]:
    rows = db.execute(select(RoleRow).order_by(RoleRow.id)).scalars().all()
    return [
        Role(
            id=r.id,
            title=r.title,
            salary=r.salary,
            department_id=r.department_id,
        )
        for r in rows
    ]


def load_employees(db: Session) -> list[Employee]:
    rows = db.execute(select(EmployeeRow).order_by(EmployeeRow.id)).scalars().all()
    return [
        Employee(
            id=r.id,
            first_name=r.first_name,
            last_name=r.last_name,
            role_id=r.role_id,
            manager_id=r.manager_id,
        )
        for r in rows
    ]


def load_graph(db: Session) -> OrgGraph:
    """Load every department, role and employee in id order."""
    return OrgGraph(
        departments=load_departments(db),
        roles=load_roles(db),
        employees=load_employees(db),
    )
