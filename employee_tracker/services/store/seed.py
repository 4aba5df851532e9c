"""
Starter dataset: five departments, two roles each, one manager and one
report per department. Used for the in-memory mirror and, once, to seed
an empty database.
"""

import logging
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from employee_tracker.db.database import Base
from employee_tracker.db.models import Department as DepartmentRow
from employee_tracker.db.models import Employee as EmployeeRow
from employee_tracker.db.models import Role as RoleRow

from .types import Department, Employee, OrgGraph, Role


logger = logging.getLogger(__name__)


SEED_DEPARTMENTS = [
    Department(id=1, name="Engineering"),
    Department(id=2, name="Finance"),
    Department(id=3, name="Legal"),
    Department(id=4, name="Sales"),
    Department(id=5, name="Human Resources"),
]

SEED_ROLES = [
    Role(id=1, title="Lead Engineer", salary=Decimal("150000"), department_id=1),
    Role(id=2, title="Software Engineer", salary=Decimal("120000"), department_id=1),
    Role(id=3, title="Finance Lead", salary=Decimal("160000"), department_id=2),
    Role(id=4, title="Accountant", salary=Decimal("125000"), department_id=2),
    Role(id=5, title="Legal Team Lead", salary=Decimal("250000"), department_id=3),
    Role(id=6, title="Lawyer", salary=Decimal("190000"), department_id=3),
    Role(id=7, title="Sales Lead", salary=Decimal("100000"), department_id=4),
    Role(id=8, title="Salesperson", salary=Decimal("80000"), department_id=4),
    Role(id=9, title="HR Director", salary=Decimal("190000"), department_id=5),
    Role(id=10, title="HR Specialist", salary=Decimal("115000"), department_id=5),
]

SEED_EMPLOYEES = [
    Employee(id=1, first_name="John", last_name="Doe", role_id=1, manager_id=None),
    Employee(id=2, first_name="Mike", last_name="Chan", role_id=2, manager_id=1),
    Employee(id=3, first_name="Ashley", last_name="Rodriguez", role_id=3, manager_id=None),
    Employee(id=4, first_name="Kevin", last_name="Tupik", role_id=4, manager_id=3),
    Employee(id=5, first_name="Kunal", last_name="Singh", role_id=5, manager_id=None),
    Employee(id=6, first_name="Malia", last_name="Brown", role_id=6, manager_id=5),
    Employee(id=7, first_name="Sarah", last_name="Lourd", role_id=7, manager_id=None),
    Employee(id=8, first_name="Tom", last_name="Allen", role_id=8, manager_id=7),
    Employee(id=9, first_name="Sam", last_name="Kash", role_id=9, manager_id=None),
    Employee(id=10, first_name="Ana", last_name="Bell", role_id=10, manager_id=9),
]


def seed_graph() -> OrgGraph:
    """Fresh copy of the starter dataset."""
    return OrgGraph(
        departments=[Department(d.id, d.name) for d in SEED_DEPARTMENTS],
        roles=[Role(r.id, r.title, r.salary, r.department_id) for r in SEED_ROLES],
        employees=[
            Employee(e.id, e.first_name, e.last_name, e.role_id, e.manager_id)
            for e in SEED_EMPLOYEES
        ],
    )


def seed_database(db: Session) -> bool:
    """
    Insert the starter dataset if the department table is empty.

    Ids are left to the database sequences; references are remapped from
    the seed ids to whatever ids the database hands out.
    Returns True if rows were inserted.
    """
    count = db.execute(select(func.count()).select_from(DepartmentRow)).scalar_one()
    if count:
        return False

    department_ids = {}
    for dept in SEED_DEPARTMENTS:
        row = DepartmentRow(name=dept.name)
        db.add(row)
        db.flush()
        department_ids[dept.id] = row.id

    role_ids = {}
    for role in SEED_ROLES:
        row = RoleRow(title=role.title, salary=role.salary, department_id=department_ids[role.department_id])
        db.add(row)
        db.flush()
        role_ids[role.id] = row.id

    employee_ids = {}
    for emp in SEED_EMPLOYEES:
        row = EmployeeRow(
            first_name=emp.first_name,
            last_name=emp.last_name,
            role_id=role_ids[emp.role_id],
            manager_id=employee_ids.get(emp.manager_id),
        )
        db.add(row)
        db.flush()
        employee_ids[emp.id] = row.id

    logger.info(
        f"Seeded database with {len(SEED_DEPARTMENTS)} departments, "
        f"{len(SEED_ROLES)} roles, {len(SEED_EMPLOYEES)} employees"
    )
    return True


def init_database(engine: Engine, session_factory: sessionmaker[Session]) -> bool:
    """Create missing tables and seed them once. Returns True if seeded."""
    Base.metadata.create_all(bind=engine)
    with session_factory() as db:
        seeded = seed_database(db)
        db.commit()
    return seeded


def reset_database(engine: Engine, session_factory: sessionmaker[Session]) -> None:
    """Drop and recreate the tables, then load the starter dataset."""
    logger.warning("Dropping department, role and employee tables")
    Base.metadata.drop_all(bind=engine)
    init_database(engine, session_factory)
