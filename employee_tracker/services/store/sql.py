"""
Relational store backed by SQLAlchemy.

Each operation runs in its own session and commits once; any failure rolls
the whole operation back. Driver-level failures surface as
BackendUnavailableError so the fallback selector can take over.
"""

import logging
from contextlib import contextmanager
from decimal import Decimal
from typing import Iterator, Optional

from sqlalchemy import delete, text, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session, sessionmaker

from employee_tracker.core.exceptions import BackendUnavailableError, ValidationError
from employee_tracker.db.database import create_session_factory
from employee_tracker.db.models import Department as DepartmentRow
from employee_tracker.db.models import Employee as EmployeeRow
from employee_tracker.db.models import Role as RoleRow
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
from .data_loader import load_graph
from .integrity import (
    check_manager_update,
    check_new_department,
    check_new_employee,
    check_new_role,
    check_role_update,
    plan_department_delete,
    plan_employee_delete,
    plan_role_delete,
)
from .seed import init_database
from .types import DeletionPlan, OrgGraph


logger = logging.getLogger(__name__)


class SqlEntityStore(EntityStore):

    def __init__(self, engine: Engine, session_factory: Optional[sessionmaker[Session]] = None):
        self.engine = engine
        self._session_factory = session_factory or create_session_factory(engine)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise ValidationError(f"Rejected by the database: {e.orig}") from e
        except (DBAPIError, PoolTimeoutError) as e:
            logger.error(f"Database error: {e}")
            db.rollback()
            raise BackendUnavailableError(str(getattr(e, "orig", None) or e)) from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def ping(self) -> None:
        """Round-trip a trivial statement; raises BackendUnavailableError if the server is unreachable."""
        with self._session() as db:
            db.execute(text("SELECT 1"))

    def initialize(self) -> bool:
        """Create the schema if needed and seed an empty database."""
        try:
            return init_database(self.engine, self._session_factory)
        except (DBAPIError, PoolTimeoutError) as e:
            raise BackendUnavailableError(f"Could not initialize database: {e}") from e

    def dispose(self) -> None:
        self.engine.dispose()

    def snapshot(self) -> OrgGraph:
        with self._session() as db:
            return load_graph(db)

    def create_department(self, name: str) -> DepartmentResponse:
        payload = parse_payload(DepartmentCreate, name=name)
        with self._session() as db:
            check_new_department(load_graph(db), payload)

            row = DepartmentRow(name=payload.name)
            db.add(row)
            db.flush()
            return DepartmentResponse.model_validate(row)

    def create_role(self, title: str, salary: Decimal, department_id: int) -> RoleResponse:
        payload = parse_payload(RoleCreate, title=title, salary=salary, department_id=department_id)
        with self._session() as db:
            check_new_role(load_graph(db), payload)

            row = RoleRow(**payload.model_dump())
            db.add(row)
            db.flush()
            return RoleResponse.model_validate(row)

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
        with self._session() as db:
            check_new_employee(load_graph(db), payload)

            row = EmployeeRow(**payload.model_dump())
            db.add(row)
            db.flush()
            return EmployeeResponse.model_validate(row)

    def update_employee_role(self, employee_id: int, role_id: int) -> EmployeeResponse:
        payload = parse_payload(EmployeeRoleUpdate, employee_id=employee_id, role_id=role_id)
        with self._session() as db:
            check_role_update(load_graph(db), payload)

            row = db.get(EmployeeRow, payload.employee_id)
            row.role_id = payload.role_id
            db.flush()
            return EmployeeResponse.model_validate(row)

    def update_employee_manager(self, employee_id: int, manager_id: Optional[int]) -> EmployeeResponse:
        payload = parse_payload(EmployeeManagerUpdate, employee_id=employee_id, manager_id=manager_id)
        with self._session() as db:
            check_manager_update(load_graph(db), payload)

            row = db.get(EmployeeRow, payload.employee_id)
            row.manager_id = payload.manager_id
            db.flush()
            return EmployeeResponse.model_validate(row)

    def delete_department(self, department_id: int) -> DepartmentResponse:
        with self._session() as db:
            graph = load_graph(db)
            plan = plan_department_delete(graph, department_id)
            deleted = DepartmentResponse.model_validate(graph.department(department_id))
            self._execute_plan(db, plan)
            return deleted

    def delete_role(self, role_id: int) -> RoleResponse:
        with self._session() as db:
            graph = load_graph(db)
            plan = plan_role_delete(graph, role_id)
            deleted = RoleResponse.model_validate(graph.role(role_id))
            self._execute_plan(db, plan)
            return deleted

    def delete_employee(self, employee_id: int) -> EmployeeResponse:
        with self._session() as db:
            graph = load_graph(db)
            plan = plan_employee_delete(graph, employee_id)
            deleted = EmployeeResponse.model_validate(graph.employee(employee_id))
            self._execute_plan(db, plan)
            return deleted

    def _execute_plan(self, db: Session, plan: DeletionPlan) -> None:
        # Detach everyone first so no delete trips over a manager reference
        detach = sorted(plan.unmanaged_employee_ids | plan.employee_ids)
        if detach:
            db.execute(
                update(EmployeeRow)
                .where(EmployeeRow.id.in_(detach))
                .values(manager_id=None)
                .execution_options(synchronize_session=False)
            )
        if plan.employee_ids:
            db.execute(
                delete(EmployeeRow)
                .where(EmployeeRow.id.in_(sorted(plan.employee_ids)))
                .execution_options(synchronize_session=False)
            )
        if plan.role_ids:
            db.execute(
                delete(RoleRow)
                .where(RoleRow.id.in_(sorted(plan.role_ids)))
                .execution_options(synchronize_session=False)
            )
        if plan.department_ids:
            db.execute(
                delete(DepartmentRow)
                .where(DepartmentRow.id.in_(sorted(plan.department_ids)))
                .execution_options(synchronize_session=False)
            )
