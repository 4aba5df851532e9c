"""
Fallback selector.

Routes every store operation to the relational backend while it is
reachable and to the in-memory mirror once it is not. The switch to
OFFLINE is one-way for the life of the process; the backend is only
pinged again at the next start.
"""

import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from employee_tracker.core.exceptions import BackendUnavailableError, StartupError
from employee_tracker.db.database import create_db_engine
from employee_tracker.schemas.departments import DepartmentResponse
from employee_tracker.schemas.employees import EmployeeResponse
from employee_tracker.schemas.roles import RoleResponse

from .base import EntityStore
from .memory import MemoryEntityStore
from .sql import SqlEntityStore
from .types import OrgGraph, StoreMode


logger = logging.getLogger(__name__)


class FallbackEntityStore(EntityStore):

    def __init__(
        self,
        backend: Optional[SqlEntityStore],
        mirror: Optional[MemoryEntityStore] = None,
    ):
        self.backend = backend
        self.mirror = mirror
        self.mode: Optional[StoreMode] = None

    @property
    def is_offline(self) -> bool:
        return self.mode is StoreMode.OFFLINE

    def start(self, force_offline: bool = False) -> StoreMode:
        """
        Pick the initial mode.

        The mirror is seeded up front so a later switch needs no setup.
        Raises StartupError only when the backend is unusable and the
        mirror could not be built either.
        """
        mirror_error = None
        if self.mirror is None:
            try:
                self.mirror = MemoryEntityStore.seeded()
            except Exception as e:
                logger.error(f"Could not seed in-memory store: {e}")
                mirror_error = e

        if self.backend is not None and not force_offline:
            try:
                self.backend.ping()
                self.backend.initialize()
                self.mode = StoreMode.CONNECTED
                logger.info("Connected to database")
                return self.mode
            except BackendUnavailableError as e:
                logger.warning(f"Database connection failed: {e}")
                logger.warning("Falling back to in-memory storage")

        if self.mirror is None:
            raise StartupError(
                "Database is unavailable and in-memory storage could not be initialized"
            ) from mirror_error

        self.mode = StoreMode.OFFLINE
        return self.mode

    def close(self) -> None:
        if self.backend is not None:
            self.backend.dispose()

    def _dispatch(self, operation: str, *args, **kwargs):
        if self.mode is None:
            raise RuntimeError("FallbackEntityStore.start() must be called first")

        if self.mode is StoreMode.CONNECTED:
            try:
                return getattr(self.backend, operation)(*args, **kwargs)
            except BackendUnavailableError as e:
                if self.mirror is None:
                    raise
                logger.warning(f"Database error during {operation}: {e}")
                logger.warning("Falling back to in-memory storage for the rest of the session")
                self.mode = StoreMode.OFFLINE

        return getattr(self.mirror, operation)(*args, **kwargs)

    def snapshot(self) -> OrgGraph:
        return self._dispatch("snapshot")

    def create_department(self, name: str) -> DepartmentResponse:
        return self._dispatch("create_department", name)

    def create_role(self, title: str, salary: Decimal, department_id: int) -> RoleResponse:
        return self._dispatch("create_role", title, salary, department_id)

    def create_employee(
        self,
        first_name: str,
        last_name: str,
        role_id: int,
        manager_id: Optional[int] = None,
    ) -> EmployeeResponse:
        return self._dispatch("create_employee", first_name, last_name, role_id, manager_id)

    def update_employee_role(self, employee_id: int, role_id: int) -> EmployeeResponse:
        return self._dispatch("update_employee_role", employee_id, role_id)

    def update_employee_manager(self, employee_id: int, manager_id: Optional[int]) -> EmployeeResponse:
        return self._dispatch("update_employee_manager", employee_id, manager_id)

    def delete_department(self, department_id: int) -> DepartmentResponse:
        return self._dispatch("delete_department", department_id)

    def delete_role(self, role_id: int) -> RoleResponse:
        return self._dispatch("delete_role", role_id)

    def delete_employee(self, employee_id: int) -> EmployeeResponse:
        return self._dispatch("delete_employee", employee_id)


def get_entity_store(engine: Optional[Engine] = None) -> FallbackEntityStore:
    """
    Factory for the store the CLI uses.
    Engine creation itself can fail (missing driver, malformed URL); that
    is treated like an unreachable backend.
    """
    backend = None
    try:
        backend = SqlEntityStore(engine or create_db_engine())
    except (SQLAlchemyError, ImportError) as e:
        logger.warning(f"Could not create database engine: {e}")
    return FallbackEntityStore(backend)
