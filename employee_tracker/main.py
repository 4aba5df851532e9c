import argparse
import logging
import sys
from typing import Optional, Sequence

from employee_tracker.cli.menu import EmployeeTrackerMenu
from employee_tracker.core.config import settings
from employee_tracker.core.exceptions import StartupError
from employee_tracker.core.logging_config import configure_logging
from employee_tracker.services.store import FallbackEntityStore, StoreMode, get_entity_store


logger = logging.getLogger(__name__)

BANNER = """
╔═══════════════════════════════════════════════════════════════╗
║                                                               ║
║                EMPLOYEE MANAGEMENT SYSTEM                     ║
║                                                               ║
╚═══════════════════════════════════════════════════════════════╝
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="employee-tracker",
        description="Manage departments, roles and employees from the terminal.",
    )
    parser.add_argument(
        "--in-memory",
        action="store_true",
        help="skip the database and work on the in-memory starter dataset",
    )
    parser.add_argument("--log-level", help="override LOG_LEVEL (e.g. INFO, DEBUG)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    print(BANNER)

    in_memory = args.in_memory or settings.USE_IN_MEMORY
    store = FallbackEntityStore(None) if in_memory else get_entity_store()

    try:
        mode = store.start(force_offline=in_memory)
    except StartupError as e:
        logger.error(f"Startup failed: {e}")
        print(f"\n{e}\n", file=sys.stderr)
        return 1

    if mode is StoreMode.CONNECTED:
        print("Database connection successful!")
    else:
        print("Database unavailable; changes are kept in memory for this session only.")

    try:
        EmployeeTrackerMenu(store).run()
    except (KeyboardInterrupt, EOFError):
        print("\nGoodbye!")
    finally:
        store.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
