"""
Tests for the interactive menu, driven with scripted answers.
"""
import pytest
from decimal import Decimal
from unittest.mock import MagicMock

from employee_tracker.cli.menu import OFFLINE_NOTICE, EmployeeTrackerMenu
from employee_tracker.cli.prompts import Prompter, positive_number
from employee_tracker.cli.tables import format_money, render_table
from employee_tracker.core.exceptions import BackendUnavailableError
from employee_tracker.services.store import FallbackEntityStore, MemoryEntityStore, SqlEntityStore

from tests.conftest import JOHN_EMP_ID, MIKE_EMP_ID

EXIT_CHOICE = "15"


class ScriptedPrompter(Prompter):
    """Answers prompts from a list and records everything printed."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.output = []
        super().__init__(input_fn=self._answer, output_fn=self.output.append)

    def _answer(self, message):
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)

    @property
    def text_out(self) -> str:
        return "\n".join(self.output)


@pytest.fixture
def store():
    return MemoryEntityStore.seeded()


def _menu(store, *answers):
    prompter = ScriptedPrompter(answers)
    return EmployeeTrackerMenu(store, prompter), prompter


class TestMenuLoop:

    def test_view_then_exit(self, store):
        menu, prompter = _menu(store, "1", EXIT_CHOICE)
        menu.run()

        assert "Human Resources" in prompter.text_out
        assert prompter.output[-1] == "Goodbye!"

    def test_invalid_choice_is_reprompted(self, store):
        menu, prompter = _menu(store, "99", "abc", EXIT_CHOICE)
        menu.run()

        assert prompter.text_out.count("Please enter one of the listed numbers") == 2

    def test_store_error_is_reported_and_loop_continues(self, store):
        # Add a Role: duplicate title, valid salary, first department
        menu, prompter = _menu(store, "5", "Lawyer", "1000", "1", EXIT_CHOICE)
        menu.run()

        assert "already exists" in prompter.text_out
        assert prompter.output[-1] == "Goodbye!"

    def test_end_of_input_propagates(self, store):
        menu, _ = _menu(store)
        with pytest.raises(EOFError):
            menu.run()

    def test_mid_session_failover_is_announced_once(self):
        backend = MagicMock(spec=SqlEntityStore)
        store = FallbackEntityStore(backend)
        store.start()
        backend.snapshot.side_effect = BackendUnavailableError("connection reset")

        menu, prompter = _menu(store, "1", "1", EXIT_CHOICE)
        menu.run()

        assert store.is_offline
        assert "Human Resources" in prompter.text_out
        assert prompter.output.count(OFFLINE_NOTICE) == 1

    def test_no_notice_when_already_offline(self, store):
        fallback = FallbackEntityStore(None, mirror=store)
        fallback.start()

        menu, prompter = _menu(fallback, "1", EXIT_CHOICE)
        menu.run()

        assert OFFLINE_NOTICE not in prompter.output


class TestActions:

    def test_view_employees_shows_manager_none(self, store):
        menu, prompter = _menu(store)
        menu.view_employees()

        lines = prompter.text_out.splitlines()
        john = next(line for line in lines if line.startswith("1 "))
        assert "Lead Engineer" in john
        assert john.rstrip().endswith("None")

    def test_add_department_reprompts_on_empty(self, store):
        menu, prompter = _menu(store, "", "Marketing")
        menu.add_department()

        assert ">> Department name cannot be empty" in prompter.output
        assert "Marketing" in [d.name for d in store.list_departments()]

    def test_add_employee_with_manager(self, store):
        # role choices are sorted by title: 1) Accountant; manager choices: 1) None, 2) Ana Bell
        menu, prompter = _menu(store, "Ada", "Byron", "1", "2")
        menu.add_employee()

        ada = store.get_employee(11)
        assert ada.role_id == 4
        assert ada.manager_id == 10
        assert "Added Ada Byron to the database" in prompter.text_out

    def test_update_manager_excludes_employee_itself(self, store):
        # employee choices sorted by name: 7) Mike Chan; then 1) None
        menu, prompter = _menu(store, "7", "1")
        menu.update_employee_manager()

        assert store.get_employee(MIKE_EMP_ID).manager_id is None
        manager_prompt = prompter.output.index("Who is their new manager?")
        options = prompter.output[manager_prompt + 1:manager_prompt + 11]
        assert not any("Mike Chan" in o for o in options)

    def test_delete_employee_confirmed(self, store):
        # 3) John Doe
        menu, prompter = _menu(store, "3", "y")
        menu.delete_employee()

        assert "Deleted John Doe from the database" in prompter.text_out
        assert JOHN_EMP_ID not in [e.id for e in store.list_employees()]

    def test_delete_department_cancelled(self, store):
        menu, prompter = _menu(store, "1", "n")
        menu.delete_department()

        assert "Deletion cancelled." in prompter.text_out
        assert len(store.list_departments()) == 5

    def test_department_budget(self, store):
        menu, prompter = _menu(store, "1")
        menu.view_department_budget()

        assert "$270,000" in prompter.text_out

    def test_manager_without_reports(self, store):
        # 7) Mike Chan manages nobody
        menu, prompter = _menu(store, "7")
        menu.view_employees_by_manager()

        assert "This manager has no direct reports." in prompter.text_out

    def test_add_role_without_departments(self):
        menu, prompter = _menu(MemoryEntityStore())
        menu.add_role()

        assert "You need to add a department first." in prompter.text_out


class TestHelpers:

    def test_render_table_aligns_columns(self):
        table = render_table([{"ID": 1, "Name": "Engineering"}, {"ID": 10, "Name": "HR"}])
        lines = table.splitlines()

        assert lines[0] == "ID  Name"
        assert lines[1] == "--  -----------"
        assert lines[3] == "10  HR"

    def test_render_empty(self):
        assert render_table([]) == ""

    @pytest.mark.parametrize("answer,ok", [("1000", True), ("0", False), ("-5", False), ("abc", False)])
    def test_positive_number(self, answer, ok):
        assert (positive_number(answer) is None) is ok

    def test_format_money(self):
        assert format_money(Decimal("270000.00")) == "$270,000"
        assert format_money(Decimal("1234.5")) == "$1,234.50"
