import pytest
from sqlalchemy.pool import StaticPool

from employee_tracker.db.database import create_db_engine
from employee_tracker.services.store import MemoryEntityStore, SqlEntityStore


# Seed data IDs
ENGINEERING_DEPT_ID = 1
FINANCE_DEPT_ID = 2
LEGAL_DEPT_ID = 3
SALES_DEPT_ID = 4
HR_DEPT_ID = 5

LEAD_ENGINEER_ROLE_ID = 1
SOFTWARE_ENGINEER_ROLE_ID = 2
ACCOUNTANT_ROLE_ID = 4

JOHN_EMP_ID = 1   # Lead Engineer, manages Mike
MIKE_EMP_ID = 2
ASHLEY_EMP_ID = 3  # Finance Lead, manages Kevin
KEVIN_EMP_ID = 4


@pytest.fixture
def memory_store() -> MemoryEntityStore:
    return MemoryEntityStore.seeded()


@pytest.fixture
def sql_engine():
    # one shared in-process connection so every session sees the same database
    engine = create_db_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sql_store(sql_engine) -> SqlEntityStore:
    store = SqlEntityStore(sql_engine)
    store.initialize()
    return store


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Runs the test once against each store variant."""
    return request.getfixturevalue(f"{request.param}_store")
