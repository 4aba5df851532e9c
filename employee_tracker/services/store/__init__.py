"""
Entity store package.

Usage:
    from employee_tracker.services.store import get_entity_store, list_employees_expanded

    store = get_entity_store()
    store.start()              # CONNECTED, or OFFLINE if the database is unreachable
    rows = list_employees_expanded(store)

    # Or work against the in-memory mirror directly, e.g. in tests
    from employee_tracker.services.store import MemoryEntityStore

    store = MemoryEntityStore.seeded()
"""

from .types import (
    StoreMode,
    Department,
    Role,
    Employee,
    OrgGraph,
    DeletionPlan,
)
from .base import EntityStore
from .memory import MemoryEntityStore
from .sql import SqlEntityStore
from .selector import FallbackEntityStore, get_entity_store
from .queries import (
    list_employees_expanded,
    list_roles_expanded,
    employees_by_manager,
    employees_by_department,
    department_budget,
)

__all__ = [
    # Types
    "StoreMode",
    "Department",
    "Role",
    "Employee",
    "OrgGraph",
    "DeletionPlan",
    # Stores
    "EntityStore",
    "MemoryEntityStore",
    "SqlEntityStore",
    "FallbackEntityStore",
    "get_entity_store",
    # Views
    "list_employees_expanded",
    "list_roles_expanded",
    "employees_by_manager",
    "employees_by_department",
    "department_budget",
]
