"""
Reset script for the employee tracker database.
Drops the department, role and employee tables and reloads the starter dataset.
Run with: python -m scripts.reset_database
"""

import sys

from sqlalchemy.exc import DBAPIError

from employee_tracker.core.exceptions import BackendUnavailableError
from employee_tracker.core.logging_config import configure_logging
from employee_tracker.db.database import create_db_engine, create_session_factory
from employee_tracker.services.store import SqlEntityStore
from employee_tracker.services.store.seed import reset_database


def main() -> int:
    configure_logging("INFO")
    engine = create_db_engine()
    store = SqlEntityStore(engine)

    try:
        store.ping()

        print("Resetting database...")
        try:
            reset_database(engine, create_session_factory(engine))
        except DBAPIError as e:
            raise BackendUnavailableError(str(e.orig or e)) from e

        graph = store.snapshot()
    except BackendUnavailableError as e:
        print(f"Database unavailable: {e}")
        return 1
    finally:
        engine.dispose()

    print(
        f"Done: {len(graph.departments)} departments, "
        f"{len(graph.roles)} roles, {len(graph.employees)} employees."
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
