from employee_tracker.db.database import Base

# Import models
from employee_tracker.db.models.departments import Department
from employee_tracker.db.models.roles import Role
from employee_tracker.db.models.employees import Employee

__all__ = [
    "Base",
    # Models
    "Department",
    "Role",
    "Employee",
]
