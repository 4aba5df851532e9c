"""
Unit tests for the shared integrity rules, run on the seed graph.
"""
import pytest
from decimal import Decimal

from employee_tracker.core.exceptions import NotFoundError, ValidationError
from employee_tracker.schemas.departments import DepartmentCreate
from employee_tracker.schemas.employees import EmployeeCreate, EmployeeManagerUpdate, EmployeeRoleUpdate
from employee_tracker.schemas.roles import RoleCreate
from employee_tracker.services.store.integrity import (
    apply_plan,
    check_manager_update,
    check_new_department,
    check_new_employee,
    check_new_role,
    check_role_update,
    plan_department_delete,
    plan_employee_delete,
    plan_role_delete,
)
from employee_tracker.services.store.seed import seed_graph
from employee_tracker.services.store.types import Employee

from tests.conftest import (
    ACCOUNTANT_ROLE_ID,
    ASHLEY_EMP_ID,
    ENGINEERING_DEPT_ID,
    JOHN_EMP_ID,
    KEVIN_EMP_ID,
    MIKE_EMP_ID,
    SOFTWARE_ENGINEER_ROLE_ID,
)


@pytest.fixture
def graph():
    return seed_graph()


class TestReferenceChecks:

    def test_duplicate_department_name(self, graph):
        with pytest.raises(ValidationError, match="already exists"):
            check_new_department(graph, DepartmentCreate(name="Legal"))

    def test_new_department_name_accepted(self, graph):
        check_new_department(graph, DepartmentCreate(name="Marketing"))

    def test_role_with_unknown_department(self, graph):
        payload = RoleCreate(title="Designer", salary=Decimal("90000"), department_id=99)
        with pytest.raises(ValidationError, match="Department 99"):
            check_new_role(graph, payload)

    def test_duplicate_role_title(self, graph):
        payload = RoleCreate(title="Lawyer", salary=Decimal("90000"), department_id=ENGINEERING_DEPT_ID)
        with pytest.raises(ValidationError, match="already exists"):
            check_new_role(graph, payload)

    def test_employee_with_unknown_role(self, graph):
        payload = EmployeeCreate(first_name="Ada", last_name="Byron", role_id=99)
        with pytest.raises(ValidationError, match="Role 99"):
            check_new_employee(graph, payload)

    def test_employee_with_unknown_manager(self, graph):
        payload = EmployeeCreate(first_name="Ada", last_name="Byron", role_id=1, manager_id=99)
        with pytest.raises(ValidationError, match="Manager 99"):
            check_new_employee(graph, payload)

    def test_role_update_unknown_employee_is_not_found(self, graph):
        with pytest.raises(NotFoundError):
            check_role_update(graph, EmployeeRoleUpdate(employee_id=99, role_id=1))

    def test_role_update_unknown_role(self, graph):
        with pytest.raises(ValidationError):
            check_role_update(graph, EmployeeRoleUpdate(employee_id=MIKE_EMP_ID, role_id=99))

    def test_manager_update_rejects_self(self, graph):
        payload = EmployeeManagerUpdate(employee_id=MIKE_EMP_ID, manager_id=MIKE_EMP_ID)
        with pytest.raises(ValidationError, match="own manager"):
            check_manager_update(graph, payload)

    def test_manager_update_to_none_is_allowed(self, graph):
        check_manager_update(graph, EmployeeManagerUpdate(employee_id=MIKE_EMP_ID, manager_id=None))


class TestDeletionPlans:

    def test_department_plan_cascades_to_roles_and_employees(self, graph):
        plan = plan_department_delete(graph, ENGINEERING_DEPT_ID)

        assert plan.department_ids == {ENGINEERING_DEPT_ID}
        assert plan.role_ids == {1, 2}
        assert plan.employee_ids == {JOHN_EMP_ID, MIKE_EMP_ID}
        assert plan.unmanaged_employee_ids == frozenset()

    def test_role_plan_removes_holders(self, graph):
        plan = plan_role_delete(graph, SOFTWARE_ENGINEER_ROLE_ID)

        assert plan.department_ids == frozenset()
        assert plan.role_ids == {SOFTWARE_ENGINEER_ROLE_ID}
        assert plan.employee_ids == {MIKE_EMP_ID}

    def test_employee_plan_detaches_reports(self, graph):
        plan = plan_employee_delete(graph, JOHN_EMP_ID)

        assert plan.employee_ids == {JOHN_EMP_ID}
        assert plan.unmanaged_employee_ids == {MIKE_EMP_ID}

    def test_cascade_detaches_reports_in_other_departments(self, graph):
        # Kevin (Finance) reports to John (Engineering)
        graph.employee(KEVIN_EMP_ID).manager_id = JOHN_EMP_ID

        plan = plan_department_delete(graph, ENGINEERING_DEPT_ID)

        assert KEVIN_EMP_ID not in plan.employee_ids
        assert plan.unmanaged_employee_ids == {KEVIN_EMP_ID}

    @pytest.mark.parametrize("planner", [plan_department_delete, plan_role_delete, plan_employee_delete])
    def test_unknown_target_is_not_found(self, graph, planner):
        with pytest.raises(NotFoundError):
            planner(graph, 99)


class TestApplyPlan:

    def test_apply_leaves_input_untouched(self, graph):
        plan = plan_employee_delete(graph, JOHN_EMP_ID)
        result = apply_plan(graph, plan)

        assert graph.employee(JOHN_EMP_ID) is not None
        assert graph.employee(MIKE_EMP_ID).manager_id == JOHN_EMP_ID
        assert result.employee(JOHN_EMP_ID) is None
        assert result.employee(MIKE_EMP_ID).manager_id is None

    def test_apply_department_plan(self, graph):
        result = apply_plan(graph, plan_department_delete(graph, ENGINEERING_DEPT_ID))

        assert [d.id for d in result.departments] == [2, 3, 4, 5]
        assert [r.id for r in result.roles] == [3, 4, 5, 6, 7, 8, 9, 10]
        assert [e.id for e in result.employees] == [3, 4, 5, 6, 7, 8, 9, 10]

    def test_apply_preserves_unrelated_fields(self, graph):
        graph.employees.append(Employee(id=11, first_name="Ada", last_name="Byron",
                                        role_id=ACCOUNTANT_ROLE_ID, manager_id=ASHLEY_EMP_ID))
        result = apply_plan(graph, plan_employee_delete(graph, ASHLEY_EMP_ID))

        ada = result.employee(11)
        assert ada.manager_id is None
        assert (ada.first_name, ada.last_name, ada.role_id) == ("Ada", "Byron", ACCOUNTANT_ROLE_ID)
