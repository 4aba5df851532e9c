"""
Interactive main menu.

Each action gathers its input through the Prompter, calls the store or the
query layer and prints the result. Store errors are reported and the loop
continues; nothing here decides which backend is active.
"""

import logging
from decimal import Decimal
from typing import Callable, Optional

from employee_tracker.core.exceptions import EmployeeTrackerError
from employee_tracker.services.store import (
    EntityStore,
    department_budget,
    employees_by_department,
    employees_by_manager,
    list_employees_expanded,
    list_roles_expanded,
)

from .prompts import Prompter, not_empty, positive_number
from .tables import format_money, render_table


logger = logging.getLogger(__name__)

EXIT = "EXIT"
OFFLINE_NOTICE = "\nLost the database connection; changes are now kept in memory for this session only.\n"


class EmployeeTrackerMenu:

    def __init__(self, store: EntityStore, prompter: Optional[Prompter] = None):
        self.store = store
        self.prompter = prompter or Prompter()
        self.say = self.prompter.output_fn

        self.actions: list[tuple[str, Callable[[], None]]] = [
            ("View All Departments", self.view_departments),
            ("View All Roles", self.view_roles),
            ("View All Employees", self.view_employees),
            ("Add a Department", self.add_department),
            ("Add a Role", self.add_role),
            ("Add an Employee", self.add_employee),
            ("Update an Employee Role", self.update_employee_role),
            ("Update Employee Manager", self.update_employee_manager),
            ("View Employees by Manager", self.view_employees_by_manager),
            ("View Employees by Department", self.view_employees_by_department),
            ("Delete Department", self.delete_department),
            ("Delete Role", self.delete_role),
            ("Delete Employee", self.delete_employee),
            ("View Department Budget", self.view_department_budget),
        ]

    def run(self) -> None:
        while True:
            options = [(label, handler) for label, handler in self.actions] + [("Exit", EXIT)]
            handler = self.prompter.choice("What would you like to do?", options)
            if handler == EXIT:
                self.say("Goodbye!")
                return
            self.perform(handler)

    def perform(self, handler: Callable[[], None]) -> None:
        was_offline = getattr(self.store, "is_offline", False)
        try:
            handler()
        except EmployeeTrackerError as e:
            logger.debug(f"{handler.__name__} failed: {e}")
            self.say(f"\n{e}\n")
        finally:
            if not was_offline and getattr(self.store, "is_offline", False):
                self.say(OFFLINE_NOTICE)

    def _show(self, rows: list[dict]) -> None:
        self.say("")
        self.say(render_table(rows))
        self.say("")

    # ==================== Views ====================

    def view_departments(self) -> None:
        self._show([{"ID": d.id, "Name": d.name} for d in self.store.list_departments()])

    def view_roles(self) -> None:
        self._show([
            {"ID": r.id, "Title": r.title, "Department": r.department, "Salary": r.salary}
            for r in list_roles_expanded(self.store)
        ])

    def view_employees(self) -> None:
        self._show([
            {
                "ID": e.id,
                "First Name": e.first_name,
                "Last Name": e.last_name,
                "Title": e.title,
                "Department": e.department,
                "Salary": e.salary,
                "Manager": e.manager,
            }
            for e in list_employees_expanded(self.store)
        ])

    def view_employees_by_manager(self) -> None:
        employees = self.store.employee_choices()
        if not employees:
            self.say("\nNo employees found.\n")
            return

        manager_id = self.prompter.choice(
            "Which manager would you like to see employees for?",
            [(e.name, e.id) for e in employees],
        )
        reports = employees_by_manager(self.store, manager_id)
        if not reports:
            self.say("\nThis manager has no direct reports.\n")
            return
        self._show([
            {"ID": r.id, "First Name": r.first_name, "Last Name": r.last_name,
             "Title": r.title, "Department": r.department}
            for r in reports
        ])

    def view_employees_by_department(self) -> None:
        department_id = self._pick_department("Which department would you like to see employees for?")
        if department_id is None:
            return

        members = employees_by_department(self.store, department_id)
        if not members:
            self.say("\nNo employees found in this department.\n")
            return
        self._show([
            {"ID": m.id, "First Name": m.first_name, "Last Name": m.last_name,
             "Title": m.title, "Manager": m.manager}
            for m in members
        ])

    def view_department_budget(self) -> None:
        department_id = self._pick_department("Which department budget would you like to view?")
        if department_id is None:
            return

        budget = department_budget(self.store, department_id)
        self._show([{
            "Department": budget.name,
            "Employee Count": budget.employee_count,
            "Total Budget": format_money(budget.utilized_budget),
        }])

    # ==================== Adds and updates ====================

    def add_department(self) -> None:
        name = self.prompter.text("What is the name of the department?", not_empty("Department name"))
        department = self.store.create_department(name)
        self.say(f"\nAdded {department.name} department to the database\n")

    def add_role(self) -> None:
        departments = self.store.department_choices()
        if not departments:
            self.say("\nYou need to add a department first.\n")
            return

        title = self.prompter.text("What is the name of the role?", not_empty("Role name"))
        salary = self.prompter.text("What is the salary for this role?", positive_number)
        department_id = self.prompter.choice(
            "Which department does this role belong to?",
            [(d.name, d.id) for d in departments],
        )
        role = self.store.create_role(title, Decimal(salary), department_id)
        self.say(f"\nAdded {role.title} role to the database\n")

    def add_employee(self) -> None:
        roles = self.store.role_choices()
        if not roles:
            self.say("\nYou need to add a role first.\n")
            return
        employees = self.store.employee_choices()

        first_name = self.prompter.text("What is the employee's first name?", not_empty("First name"))
        last_name = self.prompter.text("What is the employee's last name?", not_empty("Last name"))
        role_id = self.prompter.choice("What is the employee's role?", [(r.title, r.id) for r in roles])
        manager_id = self.prompter.choice(
            "Who is the employee's manager?",
            [("None", None)] + [(e.name, e.id) for e in employees],
        )
        employee = self.store.create_employee(first_name, last_name, role_id, manager_id)
        self.say(f"\nAdded {employee.full_name} to the database\n")

    def update_employee_role(self) -> None:
        employee_id = self._pick_employee("Which employee would you like to update?", "to update")
        if employee_id is None:
            return

        role_id = self.prompter.choice(
            "What is their new role?",
            [(r.title, r.id) for r in self.store.role_choices()],
        )
        employee = self.store.update_employee_role(employee_id, role_id)
        self.say(f"\nUpdated {employee.full_name}'s role in the database\n")

    def update_employee_manager(self) -> None:
        employees = self.store.employee_choices()
        employee_id = self._pick_employee("Which employee would you like to update?", "to update", employees)
        if employee_id is None:
            return

        manager_id = self.prompter.choice(
            "Who is their new manager?",
            [("None", None)] + [(e.name, e.id) for e in employees if e.id != employee_id],
        )
        employee = self.store.update_employee_manager(employee_id, manager_id)
        self.say(f"\nUpdated {employee.full_name}'s manager in the database\n")

    # ==================== Deletes ====================

    def delete_department(self) -> None:
        department_id = self._pick_department("Which department would you like to delete?", "to delete")
        if department_id is None:
            return
        if not self.prompter.confirm("Are you sure? This will also delete all associated roles and employees!"):
            self.say("\nDeletion cancelled.\n")
            return

        department = self.store.delete_department(department_id)
        self.say(f"\nDeleted {department.name} department from the database\n")

    def delete_role(self) -> None:
        roles = self.store.role_choices()
        if not roles:
            self.say("\nNo roles found to delete.\n")
            return

        role_id = self.prompter.choice("Which role would you like to delete?", [(r.title, r.id) for r in roles])
        if not self.prompter.confirm("Are you sure? This will also delete all employees with this role!"):
            self.say("\nDeletion cancelled.\n")
            return

        role = self.store.delete_role(role_id)
        self.say(f"\nDeleted {role.title} role from the database\n")

    def delete_employee(self) -> None:
        employee_id = self._pick_employee("Which employee would you like to delete?", "to delete")
        if employee_id is None:
            return
        if not self.prompter.confirm("Are you sure you want to delete this employee?"):
            self.say("\nDeletion cancelled.\n")
            return

        employee = self.store.delete_employee(employee_id)
        self.say(f"\nDeleted {employee.full_name} from the database\n")

    # ==================== Helpers ====================

    def _pick_department(self, message: str, purpose: str = "") -> Optional[int]:
        departments = self.store.department_choices()
        if not departments:
            self.say(f"\nNo departments found{' ' + purpose if purpose else ''}.\n")
            return None
        return self.prompter.choice(message, [(d.name, d.id) for d in departments])

    def _pick_employee(self, message: str, purpose: str, employees=None) -> Optional[int]:
        employees = employees if employees is not None else self.store.employee_choices()
        if not employees:
            self.say(f"\nNo employees found {purpose}.\n")
            return None
        return self.prompter.choice(message, [(e.name, e.id) for e in employees])
